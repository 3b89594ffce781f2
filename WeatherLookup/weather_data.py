"""Weather domain model - pure data structures independent of any API."""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

# ~24h of forecast at 3-hour spacing
FORECAST_LIMIT = 8

HTTP_OK = 200
HTTP_UNAUTHORIZED = 401


class EmptyQueryError(ValueError):
    """Raised when the city name is blank after trimming."""
    pass


class DisplayUnit(Enum):
    """Temperature unit used when rendering."""
    CELSIUS = "C"
    FAHRENHEIT = "F"

    @property
    def glyph(self) -> str:
        return f"°{self.value}"

    def toggled(self) -> "DisplayUnit":
        if self is DisplayUnit.CELSIUS:
            return DisplayUnit.FAHRENHEIT
        return DisplayUnit.CELSIUS


@dataclass(frozen=True)
class Query:
    """A validated city lookup."""
    city_name: str

    @classmethod
    def from_input(cls, text: Optional[str]) -> "Query":
        """
        Build a query from raw user input.

        Raises:
            EmptyQueryError: If the input is empty or whitespace only
        """
        city = (text or "").strip()
        if not city:
            raise EmptyQueryError("Please enter a city name!")
        return cls(city_name=city)


@dataclass
class CurrentConditions:
    """Point-in-time weather snapshot for a city."""
    city_name: str
    temperature_celsius: float  # unrounded, as returned by the provider
    description: str  # e.g., "broken clouds"
    condition_main: str  # e.g., "Clouds", "Rain", "Clear"
    icon_code: str  # e.g., "04d"
    status_code: int

    @property
    def is_valid(self) -> bool:
        return self.status_code == HTTP_OK


@dataclass
class ForecastEntry:
    """One 3-hourly forecast step."""
    timestamp_seconds: int  # UNIX timestamp (UTC)
    temperature_celsius: float
    description: str
    icon_code: str


@dataclass
class SessionState:
    """
    Per-session display state owned by the orchestrator.

    Keeps the active unit and the last successfully fetched data so that a
    unit toggle can re-render without another network round trip.
    """
    unit: DisplayUnit = DisplayUnit.CELSIUS
    current: Optional[CurrentConditions] = None
    forecast: List[ForecastEntry] = field(default_factory=list)
