"""
Unit tests for seasonal land area and productivity derivation.
"""
import pytest

from farm_planner.domain.models import SeasonalData
from farm_planner.services.domain.productivity_calculator import ProductivityCalculator


def season(**overrides) -> SeasonalData:
    fields = {
        "id": "s1",
        "farm_id": "f1",
        "season_name": "Long rains",
        "year": 2024,
        "crop_grown": "Maize",
        "land_area_acres": 2.5,
        "yield_kgs": 3600,
    }
    fields.update(overrides)
    return SeasonalData(**fields)


@pytest.fixture
def calculator() -> ProductivityCalculator:
    return ProductivityCalculator(acre_square_meters=4046.8564224)


# ============================================================
# Area Conversion Tests
# ============================================================

class TestAreaConversion:
    """Tests for acres to square meters."""

    def test_one_acre(self, calculator):
        assert calculator.to_square_meters(1) == pytest.approx(4046.8564224)

    def test_derived_area_is_rounded_to_centimeters(self, calculator):
        record = calculator.apply(season())
        assert record.land_area_square_meters == 10117.14

    def test_uses_configured_constant(self):
        calculator = ProductivityCalculator(acre_square_meters=4047)
        assert calculator.apply(season(land_area_acres=2)).land_area_square_meters == 8094


# ============================================================
# Productivity Tests
# ============================================================

class TestProductivity:
    """Tests for yield per unit area."""

    def test_kgs_per_acre(self, calculator):
        record = calculator.apply(season())
        assert record.productivity_kgs_per_acre == pytest.approx(1440.0)

    def test_kgs_per_square_meter(self, calculator):
        record = calculator.apply(season())
        assert record.productivity_kgs_per_square_meter == pytest.approx(3600 / (2.5 * 4046.8564224))

    def test_units_agree(self, calculator):
        """Per-acre and per-m² productivity differ by exactly one acre constant."""
        record = calculator.apply(season(land_area_acres=3.7, yield_kgs=5123))
        assert record.productivity_kgs_per_square_meter * 4046.8564224 == pytest.approx(
            record.productivity_kgs_per_acre, rel=1e-12
        )

    def test_no_yield(self, calculator):
        record = calculator.apply(season(yield_kgs=None))
        assert record.productivity_kgs_per_acre is None
        assert record.productivity_kgs_per_square_meter is None
        assert record.land_area_square_meters == 10117.14

    def test_zero_area(self, calculator):
        record = calculator.apply(season(land_area_acres=0))
        assert record.land_area_square_meters == 0
        assert record.productivity_kgs_per_acre is None

    def test_stale_productivity_is_cleared(self, calculator):
        derived = calculator.apply(season())
        without_yield = derived.model_copy(update={"yield_kgs": None})
        assert calculator.apply(without_yield).productivity_kgs_per_acre is None

    def test_does_not_mutate_input(self, calculator):
        record = season()
        calculator.apply(record)
        assert record.productivity_kgs_per_acre is None
        assert record.land_area_square_meters == 0
