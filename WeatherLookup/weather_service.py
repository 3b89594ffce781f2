"""Weather query orchestration: fetch, validate, then render or report."""
import asyncio
import logging
from typing import Optional

from renderer import WeatherRenderer
from status_reporter import StatusReporter
from weather_data import (
    FORECAST_LIMIT,
    HTTP_OK,
    HTTP_UNAUTHORIZED,
    DisplayUnit,
    EmptyQueryError,
    Query,
    SessionState,
)
from weather_provider import (
    CityNotFoundError,
    UnauthorizedError,
    WeatherProviderBase,
    WeatherProviderError,
)

KEY_ERROR_MESSAGE = (
    "Invalid or missing OpenWeather API key. "
    "See https://openweathermap.org/faq#error401 for help."
)
MISSING_KEY_MESSAGE = (
    "No OpenWeather API key configured. Set OPENWEATHER_API_KEY in the "
    "environment or a .env file. See README."
)
DEFAULT_NOT_FOUND_MESSAGE = "City not found"
DEFAULT_FAILURE_MESSAGE = "An error occurred while fetching weather."


class WeatherService:
    """
    Runs one lookup at a time against a provider and drives the page.

    Owns the session state (active unit plus the last good data) so a unit
    toggle can re-render without fetching again.
    """

    def __init__(
        self,
        provider: WeatherProviderBase,
        renderer: WeatherRenderer,
        reporter: StatusReporter,
        api_key_configured: bool,
        state: Optional[SessionState] = None
    ):
        """
        Initialize weather service.

        Args:
            provider: Weather provider to query
            renderer: Renderer for weather data
            reporter: Loading/error reporter
            api_key_configured: Whether an API key was supplied at startup
            state: Initial session state (fresh Celsius state by default)
        """
        self.provider = provider
        self.renderer = renderer
        self.reporter = reporter
        self.api_key_configured = api_key_configured
        self.state = state or SessionState()

    async def execute_query(self, city_name: str) -> None:
        """
        Look up a city and render the result, or report why it failed.

        Never raises: every failure ends up on the page, and the loading
        indicator is hidden again on every path.
        """
        try:
            query = Query.from_input(city_name)
        except EmptyQueryError as e:
            self.reporter.alert(str(e))
            return

        self.reporter.set_loading(True)
        try:
            await self._fetch_and_render(query)
        except WeatherProviderError as e:
            self._report_failure(e)
        except Exception as e:
            logging.exception(f"Unexpected error: {e}")
            self._report_failure(e)
        finally:
            self.reporter.set_loading(False)

    async def _fetch_and_render(self, query: Query) -> None:
        logging.info(f"Fetching weather for {query.city_name!r}")
        # Join: both requests finish before either outcome is looked at
        current, forecast = await asyncio.gather(
            self.provider.fetch_current(query.city_name),
            self.provider.fetch_forecast(query.city_name),
            return_exceptions=True,
        )
        if isinstance(current, BaseException):
            raise current

        # 401 wins over anything the forecast request produced
        if current.status_code == HTTP_UNAUTHORIZED:
            self.reporter.report_key_error(KEY_ERROR_MESSAGE)
            raise UnauthorizedError(KEY_ERROR_MESSAGE)

        if isinstance(forecast, BaseException):
            raise forecast

        if current.status_code != HTTP_OK:
            raise CityNotFoundError(current.message or DEFAULT_NOT_FOUND_MESSAGE)

        conditions = self.provider.parse_current(current)
        entries = self.provider.parse_forecast(forecast)[:FORECAST_LIMIT]

        self.state.current = conditions
        self.state.forecast = entries

        self.renderer.render_current(conditions, self.state.unit)
        self.renderer.render_forecast(entries, self.state.unit)
        self.renderer.set_mood_background(conditions.condition_main)

    def _report_failure(self, error: Exception) -> None:
        logging.error(f"Weather fetch error: {error}")
        message = str(error)
        if not self.api_key_configured:
            self.reporter.report_key_error(MISSING_KEY_MESSAGE)
        elif "invalid or missing" in message.lower():
            self.reporter.report_key_error(message)
        else:
            self.reporter.alert("⚠️ " + (message or DEFAULT_FAILURE_MESSAGE))

    def toggle_unit(self) -> DisplayUnit:
        """
        Switch between Celsius and Fahrenheit and redraw from retained data.

        Returns:
            The newly active unit
        """
        self.state.unit = self.state.unit.toggled()
        logging.info(f"Display unit switched to {self.state.unit.glyph}")
        if self.state.current is not None:
            self.renderer.render_current(self.state.current, self.state.unit)
            self.renderer.render_forecast(self.state.forecast, self.state.unit)
        return self.state.unit
