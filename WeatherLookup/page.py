"""Page abstraction for the weather widget - allows swapping output surfaces and test backends."""
import html
import logging
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from layout import DEFAULT_GRADIENT, Gradient, HourlyItem

KEY_HELP_URL = "https://openweathermap.org/faq#error401"
KEY_HELP_LABEL = "OpenWeather FAQ"


class LoadingIndicator:
    """The single shared spinner. Hidden until told otherwise; no timeout."""

    def __init__(self):
        self.visible = False

    def set_visible(self, visible: bool) -> None:
        self.visible = bool(visible)


class KeyErrorBanner:
    """
    The single persistent API-key banner.

    Showing a new message overwrites the previous one; there is only ever
    one banner per page.
    """

    def __init__(self, help_url: str = KEY_HELP_URL, help_label: str = KEY_HELP_LABEL):
        self.help_url = help_url
        self.help_label = help_label
        self.message: Optional[str] = None

    @property
    def visible(self) -> bool:
        return self.message is not None

    def show(self, message: str) -> None:
        self.message = message


class WeatherPage(ABC):
    """
    Abstract display surface with the widget's mount points.

    The loading indicator and key-error banner are created here, once per
    page, and handed by reference to whoever reports status.
    """

    def __init__(self):
        self.loading_indicator = LoadingIndicator()
        self.key_banner = KeyErrorBanner()

    @abstractmethod
    def set_temperature(self, temperature_text: str, toggle_label: str) -> None:
        """Replace the temperature/toggle region."""
        pass

    @abstractmethod
    def set_info(self, city_name: str, description: str) -> None:
        """Replace the textual info region."""
        pass

    @abstractmethod
    def set_icon(self, url: str, alt: str) -> None:
        """Point the icon region at a new image and make it visible."""
        pass

    @abstractmethod
    def set_hourly(self, items: List[HourlyItem]) -> None:
        """Rebuild the hourly forecast strip."""
        pass

    @abstractmethod
    def set_background(self, gradient: Gradient) -> None:
        pass

    @abstractmethod
    def alert(self, message: str) -> None:
        """Show a transient, acknowledge-to-dismiss notice."""
        pass


class MemoryPage(WeatherPage):
    """
    In-memory page - stores region contents as plain attributes.

    Useful for unit tests and for the console front end.
    """

    def __init__(self, alert_sink: Optional[Callable[[str], None]] = None):
        """
        Args:
            alert_sink: Called with each transient alert (e.g. print)
        """
        super().__init__()
        self.temperature_text: Optional[str] = None
        self.toggle_label: Optional[str] = None
        self.city_name: Optional[str] = None
        self.description: Optional[str] = None
        self.icon_url: Optional[str] = None
        self.icon_alt: Optional[str] = None
        self.icon_visible = False
        self.hourly: List[HourlyItem] = []
        self.background: Optional[Gradient] = None
        self.alerts: List[str] = []
        self._alert_sink = alert_sink

    def set_temperature(self, temperature_text: str, toggle_label: str) -> None:
        self.temperature_text = temperature_text
        self.toggle_label = toggle_label

    def set_info(self, city_name: str, description: str) -> None:
        self.city_name = city_name
        self.description = description

    def set_icon(self, url: str, alt: str) -> None:
        self.icon_url = url
        self.icon_alt = alt
        self.icon_visible = True

    def set_hourly(self, items: List[HourlyItem]) -> None:
        self.hourly = list(items)

    def set_background(self, gradient: Gradient) -> None:
        self.background = gradient

    def alert(self, message: str) -> None:
        self.alerts.append(message)
        if self._alert_sink is not None:
            self._alert_sink(message)

    def to_text(self) -> str:
        """
        Plain-text rendering of the page (for the console and debugging).

        Returns:
            Multi-line string representation
        """
        lines = []
        if self.loading_indicator.visible:
            lines.append("[loading...]")
        if self.temperature_text is not None:
            lines.append(f"{self.temperature_text}  ({self.toggle_label})")
        if self.city_name is not None:
            lines.append(self.city_name)
            lines.append(self.description or "")
        if self.hourly:
            lines.append("  ".join(f"{item.hour_text} {item.temperature_text}" for item in self.hourly))
        if self.key_banner.visible:
            lines.append(f"⚠️ {self.key_banner.message} ({self.key_banner.help_label}: {self.key_banner.help_url})")
        return "\n".join(lines)


class HtmlPage(MemoryPage):
    """Page that can be written out as a standalone HTML snapshot."""

    def to_html(self) -> str:
        esc = html.escape
        background = (self.background or DEFAULT_GRADIENT).css
        parts = [
            "<!DOCTYPE html>",
            "<html>",
            "<head><meta charset=\"utf-8\"><title>Weather</title></head>",
            f"<body style=\"background: {esc(background)}\">",
            "<div id=\"weather-container\">",
            "<div id=\"temp-div\">",
        ]
        if self.temperature_text is not None:
            parts.append(f"<p id=\"temp-value\">{esc(self.temperature_text)}</p>")
            parts.append(f"<button id=\"toggle-temp\" class=\"toggle-btn\">{esc(self.toggle_label or '')}</button>")
        parts.append("</div>")

        parts.append("<div id=\"weather-info\">")
        if self.city_name is not None:
            parts.append(f"<p>{esc(self.city_name)}</p>")
            parts.append(f"<p>{esc(self.description or '')}</p>")
        parts.append("</div>")

        display = "block" if self.icon_visible else "none"
        parts.append(
            f"<img id=\"weather-icon\" src=\"{esc(self.icon_url or '')}\" "
            f"alt=\"{esc(self.icon_alt or '')}\" style=\"display: {display}\">"
        )

        parts.append("<div id=\"hourly-forecast\">")
        for item in self.hourly:
            parts.append(
                "<div class=\"hourly-item\">"
                f"<span>{esc(item.hour_text)}</span>"
                f"<img src=\"{esc(item.icon_url)}\" alt=\"{esc(item.icon_alt)}\">"
                f"<span>{esc(item.temperature_text)}</span>"
                "</div>"
            )
        parts.append("</div>")
        parts.append("</div>")

        loader_display = "flex" if self.loading_indicator.visible else "none"
        parts.append(f"<div id=\"loader\" style=\"display: {loader_display}\"><div class=\"spinner\"></div></div>")

        if self.key_banner.visible:
            parts.append(
                f"<div id=\"api-key-banner\">⚠️ {esc(self.key_banner.message)} "
                f"<a href=\"{esc(self.key_banner.help_url)}\" target=\"_blank\" rel=\"noopener\">"
                f"{esc(self.key_banner.help_label)}</a></div>"
            )

        parts.append("</body>")
        parts.append("</html>")
        return "\n".join(parts)

    def save(self, filename: str) -> None:
        """
        Write the HTML snapshot to disk.

        Args:
            filename: Output filename (e.g., "weather.html")
        """
        with open(filename, "w", encoding="utf-8") as fh:
            fh.write(self.to_html())
        logging.info("Saved HTML snapshot: %s", filename)


def hex_to_rgb(color: str) -> Tuple[int, int, int]:
    """Convert "#rrggbb" to an (r, g, b) tuple."""
    value = color.lstrip("#")
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


class PILPage(MemoryPage):
    """
    PIL-based page for rendering PNG previews.

    Useful for eyeballing the layout without a browser.
    """

    def __init__(self, width: int = 480, height: int = 320, scale: int = 1, alert_sink=None):
        """
        Initialize PIL page.

        Args:
            width: Image width in pixels
            height: Image height in pixels
            scale: Scale factor for the saved image
            alert_sink: Called with each transient alert
        """
        super().__init__(alert_sink=alert_sink)
        self._width = width
        self._height = height
        self._scale = scale

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _draw_background(self) -> Image.Image:
        gradient = self.background or DEFAULT_GRADIENT
        start = Image.new("RGB", (self._width, self._height), hex_to_rgb(gradient.start))
        end = Image.new("RGB", (self._width, self._height), hex_to_rgb(gradient.end))

        # 0 at the top-left corner, 255 at the bottom-right (CSS 135deg)
        mask = Image.linear_gradient("L").rotate(45, expand=True)
        # stay inside the rotated square so no fill color leaks into the corners
        side = int(256 / 2 ** 0.5) - 4
        left = (mask.width - side) // 2
        top = (mask.height - side) // 2
        mask = mask.crop((left, top, left + side, top + side)).resize((self._width, self._height))
        return Image.composite(end, start, mask)

    def get_image(self) -> Image.Image:
        """Compose the current page state into a PIL Image."""
        image = self._draw_background()
        draw = ImageDraw.Draw(image)
        font = ImageFont.load_default()
        white = (255, 255, 255)

        y = 10
        if self.temperature_text is not None:
            draw.text((10, y), self.temperature_text, fill=white, font=font)
            draw.text((self._width - 110, y), f"[{self.toggle_label}]", fill=white, font=font)
            y += 20
        if self.city_name is not None:
            draw.text((10, y), self.city_name, fill=white, font=font)
            draw.text((10, y + 14), self.description or "", fill=white, font=font)
            y += 34
        if self.icon_visible and self.icon_alt:
            draw.text((10, y), f"({self.icon_alt})", fill=white, font=font)
            y += 20

        if self.hourly:
            cell = max(1, self._width // len(self.hourly))
            for i, item in enumerate(self.hourly):
                x = i * cell + 4
                draw.text((x, y), item.hour_text, fill=white, font=font)
                draw.text((x, y + 14), item.temperature_text, fill=white, font=font)

        if self.loading_indicator.visible:
            draw.text((self._width // 2 - 30, self._height // 2), "Loading...", fill=white, font=font)

        if self.key_banner.visible:
            box = (8, self._height - 40, self._width - 8, self._height - 8)
            draw.rectangle(box, fill=(255, 239, 239), outline=(245, 194, 194))
            draw.text((14, self._height - 34), f"{self.key_banner.message}"[:80], fill=(34, 34, 34), font=font)
            draw.text((14, self._height - 20), self.key_banner.help_url, fill=(6, 69, 173), font=font)

        return image

    def save(self, filename: str) -> None:
        """
        Save page to PNG file (scaled up when scale > 1).

        Args:
            filename: Output filename (e.g., "weather.png")
        """
        image = self.get_image()
        if self._scale > 1:
            image = image.resize(
                (self._width * self._scale, self._height * self._scale),
                Image.NEAREST
            )
        image.save(filename)
        logging.info("Saved PNG preview: %s", filename)
