"""OpenWeather current weather + 5 day / 3 hour forecast provider implementation."""
import asyncio
import logging
import requests
from typing import List, Optional
from weather_provider import (
    ApiResponse,
    TransportError,
    WeatherProviderBase,
    WeatherProviderError,
    normalize_status_code,
)
from weather_data import CurrentConditions, ForecastEntry


class OpenWeatherProvider(WeatherProviderBase):
    """
    Weather provider using the OpenWeather city-name endpoints.

    Uses the free Current Weather API (https://openweathermap.org/current)
    and the 5 day / 3 hour Forecast API (https://openweathermap.org/forecast5).
    """

    CURRENT_URL = "https://api.openweathermap.org/data/2.5/weather"
    FORECAST_URL = "https://api.openweathermap.org/data/2.5/forecast"

    def __init__(
        self,
        api_key: Optional[str],
        units: str = "metric",
        timeout: Optional[float] = None
    ):
        """
        Initialize OpenWeather provider.

        Args:
            api_key: OpenWeather API key (None sends no usable key; the API answers 401)
            units: Temperature units; the pipeline stores Celsius so keep "metric"
            timeout: HTTP request timeout in seconds (None waits indefinitely)
        """
        self.api_key = api_key
        self.units = units
        self.timeout = timeout

    async def fetch_current(self, city_name: str) -> ApiResponse:
        return await asyncio.to_thread(self._get, self.CURRENT_URL, city_name)

    async def fetch_forecast(self, city_name: str) -> ApiResponse:
        return await asyncio.to_thread(self._get, self.FORECAST_URL, city_name)

    def _get(self, url: str, city_name: str) -> ApiResponse:
        """
        Issue one GET and normalize the body.

        The body is parsed whatever the HTTP status: OpenWeather reports
        errors through the ``cod`` and ``message`` fields.

        Raises:
            TransportError: On network failure or a non-JSON body
        """
        params = {
            "q": city_name,
            "appid": self.api_key,
            "units": self.units,
        }

        try:
            logging.info(f"Making OpenWeather API request: {url}")
            logging.debug(f"Request parameters: q={city_name}, units={self.units}")
            response = requests.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logging.error(f"Network error during API request: {e}")
            raise TransportError(f"Network error: {str(e)}")

        logging.info(f"API response status: {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            logging.error(f"Non-JSON response: HTTP {response.status_code}: {e}")
            raise TransportError(f"Failed to parse response: {str(e)}")

        if not isinstance(data, dict):
            raise TransportError(f"Failed to parse response: expected an object, got {type(data).__name__}")

        # Log full response in debug mode (truncated for readability)
        logging.debug(f"API response (truncated): {str(data)[:500]}...")

        status_code = normalize_status_code(data.get("cod"), response.status_code)
        return ApiResponse(
            status_code=status_code,
            message=data.get("message") or None,
            payload=data,
        )

    def parse_current(self, response: ApiResponse) -> CurrentConditions:
        """
        Map a current weather response to CurrentConditions.

        Raises:
            WeatherProviderError: If a required block is missing or malformed
        """
        data = response.payload
        try:
            weather_array = data.get("weather", [])
            if not weather_array:
                logging.error("Response missing 'weather' array")
                raise WeatherProviderError("Response missing 'weather' array")
            weather = weather_array[0]
            logging.debug(f"Weather condition: {weather.get('main')} - {weather.get('description')}")

            main_data = data.get("main", {})
            if not main_data or "temp" not in main_data:
                raise WeatherProviderError("Response missing 'main' block")

            current = CurrentConditions(
                city_name=data.get("name", ""),
                temperature_celsius=float(main_data["temp"]),
                description=weather.get("description", ""),
                condition_main=weather.get("main", "Unknown"),
                icon_code=weather.get("icon", ""),
                status_code=response.status_code,
            )
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            logging.error(f"Failed to parse API response: {e}", exc_info=True)
            raise WeatherProviderError(f"Failed to parse response: {str(e)}")

        logging.info(f"Successfully parsed weather data: {current.temperature_celsius}°C, {current.condition_main}")
        return current

    def parse_forecast(self, response: ApiResponse) -> List[ForecastEntry]:
        """
        Map a forecast response to ForecastEntry objects, in provider order.

        Raises:
            WeatherProviderError: If the 'list' array is missing or malformed
        """
        items = response.payload.get("list")
        if not isinstance(items, list):
            logging.error("Forecast response missing 'list' array")
            raise WeatherProviderError("Response missing 'list' array")

        entries = []
        try:
            for item in items:
                weather = (item.get("weather") or [{}])[0]
                entries.append(ForecastEntry(
                    timestamp_seconds=int(item["dt"]),
                    temperature_celsius=float(item["main"]["temp"]),
                    description=weather.get("description", ""),
                    icon_code=weather.get("icon", ""),
                ))
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            logging.error(f"Failed to parse forecast entry: {e}", exc_info=True)
            raise WeatherProviderError(f"Failed to parse response: {str(e)}")

        logging.debug(f"Parsed {len(entries)} forecast entries")
        return entries
