"""Presentation renderer - pushes computed layout into a page."""
import logging
from datetime import tzinfo
from typing import Iterable, Optional

from layout import calculate_current_panel, calculate_forecast_strip, mood_gradient
from page import WeatherPage
from weather_data import CurrentConditions, DisplayUnit, ForecastEntry


class WeatherRenderer:
    """
    Renders weather data onto a page.

    Every call replaces what the target region showed before; the active
    unit is passed in rather than read from shared state.
    """

    def __init__(self, page: WeatherPage, tz: Optional[tzinfo] = None):
        """
        Args:
            page: Surface to draw on
            tz: Time zone for forecast hours (None = local time)
        """
        self.page = page
        self.tz = tz

    def render_current(self, data: CurrentConditions, unit: DisplayUnit) -> None:
        panel = calculate_current_panel(data, unit)
        self.page.set_temperature(panel.temperature_text, panel.toggle_label)
        self.page.set_info(panel.city_name, panel.description)
        self.page.set_icon(panel.icon_url, panel.icon_alt)
        logging.info("Rendered current conditions: %s %s", panel.city_name, panel.temperature_text)

    def render_forecast(self, entries: Iterable[ForecastEntry], unit: DisplayUnit) -> None:
        items = calculate_forecast_strip(entries, unit, self.tz)
        self.page.set_hourly(items)
        logging.debug("Rendered %s forecast items", len(items))

    def set_mood_background(self, condition_main: str) -> None:
        gradient = mood_gradient(condition_main)
        self.page.set_background(gradient)
        logging.debug("Background for %r: %s", condition_main, gradient.css)
