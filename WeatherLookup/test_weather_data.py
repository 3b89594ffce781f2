"""Tests for weather_data module."""
import pytest
from weather_data import (
    CurrentConditions,
    DisplayUnit,
    EmptyQueryError,
    Query,
    SessionState,
)


def test_current_conditions_creation():
    """Test creating CurrentConditions with required fields."""
    current = CurrentConditions(
        city_name="London",
        temperature_celsius=20.5,
        description="broken clouds",
        condition_main="Clouds",
        icon_code="04d",
        status_code=200
    )

    assert current.city_name == "London"
    assert current.temperature_celsius == 20.5
    assert current.description == "broken clouds"
    assert current.condition_main == "Clouds"
    assert current.icon_code == "04d"
    assert current.is_valid is True


def test_current_conditions_only_valid_on_200():
    """Any status other than 200 is an error, not partial data."""
    for code in (401, 404, 500, 0):
        current = CurrentConditions("X", 1.0, "", "", "", status_code=code)
        assert current.is_valid is False


def test_query_trims_input():
    """Test that the city name is trimmed."""
    assert Query.from_input("  Paris \n").city_name == "Paris"


@pytest.mark.parametrize("text", ["", "   ", "\t\n", None])
def test_query_rejects_blank_input(text):
    """Test that blank input is rejected before any lookup."""
    with pytest.raises(EmptyQueryError) as exc_info:
        Query.from_input(text)

    assert "Please enter a city name" in str(exc_info.value)


def test_display_unit_toggle():
    """Test toggling and glyphs."""
    assert DisplayUnit.CELSIUS.toggled() is DisplayUnit.FAHRENHEIT
    assert DisplayUnit.FAHRENHEIT.toggled() is DisplayUnit.CELSIUS
    assert DisplayUnit.CELSIUS.glyph == "°C"
    assert DisplayUnit.FAHRENHEIT.glyph == "°F"


def test_session_state_defaults():
    """Fresh sessions start in Celsius with nothing retained."""
    state = SessionState()

    assert state.unit is DisplayUnit.CELSIUS
    assert state.current is None
    assert state.forecast == []

    # Each session gets its own forecast list
    assert SessionState().forecast is not state.forecast
