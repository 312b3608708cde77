"""Tests for bidcalc pricing input models."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from bidcalc.models.enums import ContingencyOrder, LineItemKind, Unit
from bidcalc.models.pricing import (
    EstimateHeader,
    LineItem,
    MarkupTier,
    OrgSettings,
    PricingConfig,
    TaxScope,
    TotalsRequest,
)


class TestLineItem:
    def test_defaults(self) -> None:
        item = LineItem()
        assert item.quantity == Decimal(0)
        assert item.unit_cost == Decimal(0)
        assert item.kind == LineItemKind.OTHER
        assert item.unit == Unit.EA
        assert item.is_material is False
        assert item.is_labor is False
        assert item.is_equipment is False
        assert item.markup_percent is None
        assert item.contingency_percent is None

    def test_accepts_store_record(self) -> None:
        item = LineItem.model_validate({
            "id": "b7d1",
            "estimateId": "e42",
            "kind": "SLAB",
            "description": '6" slab on grade',
            "unit": "SF",
            "quantity": 20000,
            "unitCost": "5.25",
            "markupPct": 20,
            "contingencyPct": 5,
            "durationHours": 160,
            "isMaterial": True,
            "isLabor": True,
            "isEquipment": False,
        })
        assert item.kind == LineItemKind.SLAB
        assert item.unit_cost == Decimal("5.25")
        assert item.markup_percent == Decimal(20)
        assert item.contingency_percent == Decimal(5)
        assert item.duration_hours == Decimal(160)
        assert item.is_material is True

    def test_accepts_snake_case(self) -> None:
        item = LineItem.model_validate({"unit_cost": "2.50", "is_labor": True})
        assert item.unit_cost == Decimal("2.50")
        assert item.is_labor is True

    def test_nulls_take_defaults(self) -> None:
        item = LineItem.model_validate({
            "quantity": None,
            "unitCost": None,
            "isLabor": None,
            "markupPercent": None,
            "durationHours": None,
        })
        assert item.quantity == Decimal(0)
        assert item.unit_cost == Decimal(0)
        assert item.is_labor is False
        assert item.markup_percent is None
        assert item.duration_hours == Decimal(0)

    def test_negative_values_are_not_rejected(self) -> None:
        item = LineItem(quantity=Decimal(-1), unit_cost=Decimal(10))
        assert item.quantity == Decimal(-1)

    def test_is_frozen(self) -> None:
        item = LineItem()
        with pytest.raises(ValidationError):
            item.quantity = Decimal(5)  # type: ignore[misc]

    def test_accepts_seed_demo_record(self) -> None:
        item = LineItem.model_validate({
            "rank": 1,
            "kind": "material",
            "description": "Ready-mix concrete (4000 PSI)",
            "unit": "yd³",
            "quantity": 120,
            "unitCost": 145,
            "isMaterial": True,
            "isLabor": False,
            "isEquipment": False,
        })
        assert item.kind == LineItemKind.OTHER
        assert item.unit == "yd³"
        assert item.quantity == Decimal(120)
        assert item.is_material is True

    def test_kind_is_case_insensitive(self) -> None:
        assert LineItem.model_validate({"kind": "footing"}).kind == LineItemKind.FOOTING

    def test_known_unit_becomes_enum(self) -> None:
        assert LineItem.model_validate({"unit": "CY"}).unit is Unit.CY


class TestMarkupTier:
    def test_bounded_width(self) -> None:
        tier = MarkupTier(min_amount=Decimal(10_000), max_amount=Decimal(50_000))
        assert tier.width == Decimal(40_000)

    def test_unbounded_width(self) -> None:
        assert MarkupTier(min_amount=Decimal(50_000)).width is None

    def test_null_max_is_unbounded(self) -> None:
        tier = MarkupTier.model_validate({"minAmount": 0, "maxAmount": None, "percent": 10})
        assert tier.max_amount is None

    def test_inverted_band_has_zero_width(self) -> None:
        tier = MarkupTier(min_amount=Decimal(5_000), max_amount=Decimal(1_000))
        assert tier.width == Decimal(0)


class TestOrgSettings:
    def test_defaults(self) -> None:
        settings = OrgSettings()
        assert settings.use_markup_tiers is False
        assert settings.contingency_order == ContingencyOrder.AFTER_MARKUP
        assert settings.default_contingency_percent == Decimal(0)
        assert settings.crew_hours_per_day == Decimal(8)

    def test_accepts_store_record(self) -> None:
        settings = OrgSettings.model_validate({
            "orgId": "org-1",
            "useMarkupTiers": True,
            "defaultContingency": 5,
            "contingencyOrder": "BEFORE_MARKUP",
            "mobilizationPrice": 3850,
            "mobilizationAutoPerCrewDay": False,
            "crewHoursPerDay": None,
            "logoUrl": "/logo.svg",
        })
        assert settings.use_markup_tiers is True
        assert settings.default_contingency_percent == Decimal(5)
        assert settings.contingency_order == ContingencyOrder.BEFORE_MARKUP
        assert settings.mobilization_price == Decimal(3_850)
        assert settings.crew_hours_per_day == Decimal(8)

    def test_null_contingency_order_defaults_to_after(self) -> None:
        settings = OrgSettings.model_validate({"contingencyOrder": None})
        assert settings.contingency_order == ContingencyOrder.AFTER_MARKUP

    def test_invalid_contingency_order_rejected(self) -> None:
        with pytest.raises(ValidationError):
            OrgSettings.model_validate({"contingencyOrder": "SIDEWAYS"})


class TestHeaderAndScope:
    def test_header_from_store_record(self) -> None:
        header = EstimateHeader.model_validate({
            "title": "Phase 1",
            "overheadPct": None,
            "mobilizationCount": None,
            "overtimeHoursPerDay": 2,
        })
        assert header.overhead_percent == Decimal(0)
        assert header.mobilization_count == 0
        assert header.overtime_hours_per_day == Decimal(2)
        assert header.contingency_percent is None

    def test_tax_scope_from_store_record(self) -> None:
        scope = TaxScope.model_validate({
            "rate": "6.25",
            "taxMaterials": True,
            "taxLabor": None,
            "taxEquipment": True,
        })
        assert scope.rate == Decimal("6.25")
        assert scope.tax_materials is True
        assert scope.tax_labor is False
        assert scope.tax_equipment is True
        assert scope.tax_markup is False


class TestRequestAndConfig:
    def test_empty_request(self) -> None:
        request = TotalsRequest()
        assert request.items == []
        assert request.tiers == []
        assert request.tax_scope == TaxScope()
        assert request.mobilization.count == 0

    def test_config_carries_rebar_table(self) -> None:
        config = PricingConfig()
        assert config.rebar_pounds_per_foot["#4"] == Decimal("0.668")

    def test_configs_do_not_share_rebar_tables(self) -> None:
        assert PricingConfig().rebar_pounds_per_foot is not PricingConfig().rebar_pounds_per_foot
