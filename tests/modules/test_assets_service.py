"""Tests for AssetValuationService (clock and config wiring, logging)."""

import json
import logging
from decimal import Decimal
from io import StringIO

from prodops_config.schema import DepreciationConfig
from prodops_kernel.logging_config import StructuredFormatter, configure_logging
from prodops_modules.assets import AssetValuationService
from prodops_modules.assets.models import DepreciationMethod


def _capture_logs():
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    configure_logging(handler=handler)
    return stream


def _records(stream):
    return [json.loads(line) for line in stream.getvalue().splitlines() if line]


class TestAssetValuationService:

    def test_value_uses_injected_clock(self, standard_asset, clock_months_after):
        service = AssetValuationService(clock=clock_months_after(12))
        result = service.value(standard_asset())
        assert result.book_value == Decimal("8200.00")
        assert result.months_elapsed == 12

    def test_configured_multiplier_drives_declining_balance(self, standard_asset, clock_months_after):
        service = AssetValuationService(
            clock=clock_months_after(12),
            config=DepreciationConfig(declining_balance_multiplier=Decimal("1.5")),
        )
        result = service.value(standard_asset(DepreciationMethod.DECLINING_BALANCE))
        assert result.book_value == Decimal("7000.00")

    def test_schedule_defaults_to_configured_period(self, standard_asset, clock_months_after):
        annual = AssetValuationService(clock=clock_months_after(1))
        monthly = AssetValuationService(
            clock=clock_months_after(1),
            config=DepreciationConfig(default_schedule_period="monthly"),
        )
        assert len(annual.schedule(standard_asset())) == 5
        assert len(monthly.schedule(standard_asset())) == 60
        assert len(monthly.schedule(standard_asset(), "annual")) == 5

    def test_value_assets_keeps_order(self, standard_asset, clock_months_after):
        service = AssetValuationService(clock=clock_months_after(12))
        results = service.value_assets({
            "projector-7": standard_asset(),
            "truss-2": standard_asset(DepreciationMethod.SUM_OF_YEARS),
        })
        assert list(results) == ["projector-7", "truss-2"]
        assert results["truss-2"].book_value == Decimal("7000.00")

    def test_valuation_logs_carry_asset_id(self, standard_asset, clock_months_after):
        stream = _capture_logs()
        AssetValuationService(clock=clock_months_after(12)).value_assets({"projector-7": standard_asset()})

        valued = [r for r in _records(stream) if r["message"] == "asset_valued"]
        assert len(valued) == 1
        assert valued[0]["asset_id"] == "projector-7"
        assert valued[0]["method"] == "straight_line"
        assert valued[0]["book_value"] == "8200.00"

    def test_unknown_method_is_logged(self, standard_asset, clock_months_after):
        stream = _capture_logs()
        AssetValuationService(clock=clock_months_after(12)).value(standard_asset("mystery"))

        warnings = [r for r in _records(stream) if r["message"] == "unknown_depreciation_method"]
        assert warnings[0]["level"] == "WARNING"
        assert warnings[0]["fallback"] == "straight_line"
