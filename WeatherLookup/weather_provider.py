"""Weather provider abstraction - the seam between the pipeline and the HTTP API."""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

from weather_data import CurrentConditions, ForecastEntry


class WeatherProviderError(Exception):
    """Exception raised when a weather provider fails."""
    pass


class TransportError(WeatherProviderError):
    """Network failure or unparseable body, before a status code is known."""
    pass


class UnauthorizedError(WeatherProviderError):
    """The provider rejected the API key (status 401)."""
    pass


class CityNotFoundError(WeatherProviderError):
    """The provider answered with a non-success status."""
    pass


@dataclass
class ApiResponse:
    """Parsed provider response with its status code already normalized."""
    status_code: int
    message: Optional[str] = None
    payload: dict = field(default_factory=dict)


def normalize_status_code(value, fallback: int) -> int:
    """
    Normalize the provider's ``cod`` field to an int.

    OpenWeather returns it as a number on some endpoints and as a numeric
    string on others.

    Args:
        value: Raw ``cod`` value from the response body (may be missing)
        fallback: HTTP status to use when the body carries no code

    Raises:
        WeatherProviderError: If the value is not an integer or numeric string
    """
    if value is None:
        return fallback
    if isinstance(value, bool):
        raise WeatherProviderError(f"Unexpected status code: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip(), 10)
        except ValueError:
            pass
    raise WeatherProviderError(f"Unexpected status code: {value!r}")


class WeatherProviderBase(ABC):
    """Abstract base class for weather data providers."""

    @abstractmethod
    async def fetch_current(self, city_name: str) -> ApiResponse:
        """
        Fetch current conditions for a city.

        Raises:
            TransportError: If no status code could be obtained
        """
        pass

    @abstractmethod
    async def fetch_forecast(self, city_name: str) -> ApiResponse:
        """
        Fetch the 3-hourly forecast for a city.

        Raises:
            TransportError: If no status code could be obtained
        """
        pass

    @abstractmethod
    def parse_current(self, response: ApiResponse) -> CurrentConditions:
        pass

    @abstractmethod
    def parse_forecast(self, response: ApiResponse) -> List[ForecastEntry]:
        pass
