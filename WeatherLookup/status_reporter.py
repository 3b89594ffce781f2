"""Loading state and error reporting for the weather page."""
import logging

from page import KeyErrorBanner, LoadingIndicator, WeatherPage


class StatusReporter:
    """
    Surfaces loading state and failures on the page.

    Holds references to the page's single loading indicator and single
    key-error banner; transient alerts go straight to the page and are not
    remembered here.
    """

    def __init__(self, page: WeatherPage):
        self.page = page
        self.loading: LoadingIndicator = page.loading_indicator
        self.banner: KeyErrorBanner = page.key_banner

    def set_loading(self, visible: bool) -> None:
        logging.debug("Loading indicator %s", "shown" if visible else "hidden")
        self.loading.set_visible(visible)

    def report_key_error(self, message: str) -> None:
        logging.warning("API key problem: %s", message)
        self.banner.show(message)

    def alert(self, message: str) -> None:
        logging.info("Alert: %s", message)
        self.page.alert(message)
