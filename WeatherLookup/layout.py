"""Layout logic for the weather page - pure functions for testability."""
import math
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Iterable, List, Optional

from weather_data import FORECAST_LIMIT, CurrentConditions, DisplayUnit, ForecastEntry

ICON_BASE_URL = "https://openweathermap.org/img/wn"


@dataclass(frozen=True)
class Gradient:
    """Two-stop diagonal background gradient."""
    start: str  # hex color, e.g. "#1e3c72"
    end: str

    @property
    def css(self) -> str:
        return f"linear-gradient(135deg, {self.start}, {self.end})"


DEFAULT_GRADIENT = Gradient("#1e3c72", "#2a5298")

MOOD_GRADIENTS = {
    "clear": Gradient("#f8cdda", "#1d2b64"),
    "clouds": Gradient("#bdc3c7", "#2c3e50"),
    "rain": Gradient("#000046", "#1cb5e0"),
    "snow": Gradient("#83a4d4", "#b6fbff"),
    "thunderstorm": Gradient("#232526", "#414345"),
}


@dataclass(frozen=True)
class CurrentPanel:
    """Everything the current-conditions regions show."""
    temperature_text: str  # e.g. "21°C"
    toggle_label: str  # e.g. "Switch to °F"
    city_name: str
    description: str
    icon_url: str
    icon_alt: str


@dataclass(frozen=True)
class HourlyItem:
    """One cell of the hourly forecast strip."""
    hour_text: str  # e.g. "09:00"
    icon_url: str
    icon_alt: str
    temperature_text: str


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 9 / 5 + 32


def display_temperature(celsius: float, unit: DisplayUnit) -> int:
    """
    Convert a stored Celsius value to the integer shown on screen.

    Rounding only happens here, so toggling units back and forth never
    accumulates error.
    """
    if unit is DisplayUnit.FAHRENHEIT:
        return round_half_up(celsius_to_fahrenheit(celsius))
    return round_half_up(celsius)


def format_temperature(celsius: float, unit: DisplayUnit) -> str:
    return f"{display_temperature(celsius, unit)}{unit.glyph}"


def format_hour(timestamp_seconds: int, tz: Optional[tzinfo] = None) -> str:
    """
    Format a forecast timestamp as a zero-padded 24h clock hour.

    Args:
        timestamp_seconds: UNIX timestamp
        tz: Time zone to display in (None = local time)
    """
    moment = datetime.fromtimestamp(timestamp_seconds, tz=tz)
    return f"{moment.hour:02d}:00"


def icon_url(icon_code: str, large: bool = False) -> str:
    suffix = "@4x" if large else ""
    return f"{ICON_BASE_URL}/{icon_code}{suffix}.png"


def mood_gradient(condition_main: Optional[str]) -> Gradient:
    """
    Get the background gradient for a weather condition keyword.

    Matching is case-insensitive and exact; unknown keywords (or none at
    all) get the default gradient.
    """
    if not isinstance(condition_main, str):
        return DEFAULT_GRADIENT
    return MOOD_GRADIENTS.get(condition_main.lower(), DEFAULT_GRADIENT)


def calculate_current_panel(current: CurrentConditions, unit: DisplayUnit) -> CurrentPanel:
    return CurrentPanel(
        temperature_text=format_temperature(current.temperature_celsius, unit),
        toggle_label=f"Switch to {unit.toggled().glyph}",
        city_name=current.city_name,
        description=current.description,
        icon_url=icon_url(current.icon_code, large=True),
        icon_alt=current.description,
    )


def calculate_forecast_strip(
    entries: Iterable[ForecastEntry],
    unit: DisplayUnit,
    tz: Optional[tzinfo] = None
) -> List[HourlyItem]:
    """
    Build the hourly strip: the first FORECAST_LIMIT entries, in input order.
    """
    items = []
    for entry in list(entries)[:FORECAST_LIMIT]:
        items.append(HourlyItem(
            hour_text=format_hour(entry.timestamp_seconds, tz),
            icon_url=icon_url(entry.icon_code),
            icon_alt=entry.description,
            temperature_text=format_temperature(entry.temperature_celsius, unit),
        ))
    return items
