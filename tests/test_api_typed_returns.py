"""Test that the API returns typed dataclasses."""

import json

from kalkulator_ilmiah.api import calculate
from kalkulator_ilmiah.config import Settings
from kalkulator_ilmiah.types import CalculationResult, Snapshot


class TestAPITypedReturns:
    """Test that calculate() always returns CalculationResult."""

    def test_calculate_returns_calculation_result(self):
        result = calculate("3 + 4 × 2 =")
        assert isinstance(result, CalculationResult)
        assert result.ok is True
        assert isinstance(result.snapshot, Snapshot)
        assert result.snapshot.display_text == "14"
        assert result.snapshot.history_entries == ["7 × 2 = 14"]

    def test_calculate_error_returns_calculation_result(self):
        result = calculate("3 # 4")
        assert isinstance(result, CalculationResult)
        assert result.ok is False
        assert result.code == "UNKNOWN_TOKEN"
        assert result.snapshot is None

    def test_settings_are_honoured(self):
        result = calculate("1 ÷ 0 =", settings=Settings(ieee_division=True))
        assert result.snapshot.display_text == "Infinity"
        result = calculate("mode 90 sin", settings=Settings(start_in_radians=True))
        assert result.snapshot.angle_mode_label == "DEG"
        assert result.snapshot.display_text == "1"

    def test_to_dict_is_json_serializable(self):
        data = calculate("pi MS + 2", settings=Settings()).to_dict()
        assert json.loads(json.dumps(data)) == data
        assert data["ok"] is True
        assert data["display"] == "2"
        assert data["pending"] == "3.141592654 +"
        assert data["memory"] is True
        assert data["angle_mode"] == "DEG"

    def test_error_to_dict(self):
        data = calculate("nope").to_dict()
        assert data == {"ok": False, "error": "Unknown token: 'nope'", "code": "UNKNOWN_TOKEN"}
