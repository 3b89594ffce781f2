"""Tests for page surfaces."""
import pytest
from PIL import Image
from layout import DEFAULT_GRADIENT, MOOD_GRADIENTS, HourlyItem
from page import HtmlPage, KeyErrorBanner, LoadingIndicator, MemoryPage, PILPage, hex_to_rgb


def fill_page(page):
    page.set_temperature("19°C", "Switch to °F")
    page.set_info("London", "broken clouds")
    page.set_icon("https://openweathermap.org/img/wn/04d@4x.png", "broken clouds")
    page.set_hourly([
        HourlyItem("09:00", "https://openweathermap.org/img/wn/10d.png", "light rain", "18°C"),
        HourlyItem("12:00", "https://openweathermap.org/img/wn/04d.png", "clouds", "20°C"),
    ])
    page.set_background(MOOD_GRADIENTS["rain"])


def test_loading_indicator_starts_hidden():
    """Test initial state and transitions."""
    loading = LoadingIndicator()
    assert loading.visible is False

    loading.set_visible(True)
    assert loading.visible is True

    loading.set_visible(False)
    assert loading.visible is False


def test_banner_overwrites_message():
    """Test that a second message replaces the first."""
    banner = KeyErrorBanner()
    assert banner.visible is False

    banner.show("first")
    banner.show("second")

    assert banner.visible is True
    assert banner.message == "second"
    assert banner.help_url == "https://openweathermap.org/faq#error401"


def test_page_owns_single_handles():
    """Each page creates its indicator and banner once."""
    page = MemoryPage()
    loading = page.loading_indicator
    banner = page.key_banner

    fill_page(page)

    assert page.loading_indicator is loading
    assert page.key_banner is banner


def test_memory_page_regions():
    """Test that setters replace region contents."""
    page = MemoryPage()
    assert page.icon_visible is False

    fill_page(page)
    page.set_info("Paris", "clear sky")

    assert page.temperature_text == "19°C"
    assert page.toggle_label == "Switch to °F"
    assert page.city_name == "Paris"
    assert page.description == "clear sky"
    assert page.icon_visible is True
    assert len(page.hourly) == 2
    assert page.background == MOOD_GRADIENTS["rain"]


def test_memory_page_alert_sink():
    """Alerts are recorded and forwarded."""
    seen = []
    page = MemoryPage(alert_sink=seen.append)

    page.alert("Please enter a city name!")

    assert page.alerts == ["Please enter a city name!"]
    assert seen == ["Please enter a city name!"]


def test_memory_page_to_text():
    """Test the console rendering."""
    page = MemoryPage()
    assert page.to_text() == ""

    fill_page(page)
    page.loading_indicator.set_visible(True)
    page.key_banner.show("bad key")

    text = page.to_text()
    lines = text.split("\n")
    assert lines[0] == "[loading...]"
    assert "19°C" in lines[1]
    assert "09:00 18°C" in text
    assert "bad key" in lines[-1]


def test_html_page_contents():
    """Test the HTML snapshot uses the widget's mount points."""
    page = HtmlPage()
    fill_page(page)

    doc = page.to_html()

    assert '<p id="temp-value">19°C</p>' in doc
    assert 'id="toggle-temp"' in doc
    assert "<p>London</p>" in doc
    assert 'src="https://openweathermap.org/img/wn/04d@4x.png"' in doc
    assert 'style="display: block"' in doc
    assert doc.count('class="hourly-item"') == 2
    assert "linear-gradient(135deg, #000046, #1cb5e0)" in doc
    assert 'id="loader" style="display: none"' in doc
    assert "api-key-banner" not in doc


def test_html_page_escapes_text():
    """User-derived text is escaped."""
    page = HtmlPage()
    page.set_info("<script>alert(1)</script>", "a & b")

    doc = page.to_html()

    assert "<script>alert(1)</script>" not in doc
    assert "&lt;script&gt;" in doc
    assert "a &amp; b" in doc


def test_html_page_single_banner():
    """Two key errors still give one banner element."""
    page = HtmlPage()
    page.key_banner.show("first")
    page.key_banner.show("second")

    doc = page.to_html()

    assert doc.count('id="api-key-banner"') == 1
    assert "second" in doc
    assert "first" not in doc
    assert 'href="https://openweathermap.org/faq#error401"' in doc


def test_html_page_save(tmp_path):
    """Test writing the snapshot to disk."""
    page = HtmlPage()
    fill_page(page)
    out = tmp_path / "weather.html"

    page.save(str(out))

    assert out.read_text(encoding="utf-8") == page.to_html()


def test_hex_to_rgb():
    """Test hex color parsing."""
    assert hex_to_rgb("#1e3c72") == (30, 60, 114)
    assert hex_to_rgb("ffffff") == (255, 255, 255)


def test_pil_page_gradient_corners():
    """Background runs from the start color (top-left) to the end color (bottom-right)."""
    page = PILPage(width=120, height=80)
    image = page.get_image()

    assert image.size == (120, 80)
    start = hex_to_rgb(DEFAULT_GRADIENT.start)
    end = hex_to_rgb(DEFAULT_GRADIENT.end)
    top_left = image.getpixel((0, 0))
    bottom_right = image.getpixel((119, 79))
    assert all(abs(a - b) <= 12 for a, b in zip(top_left, start))
    assert all(abs(a - b) <= 12 for a, b in zip(bottom_right, end))


def test_pil_page_save_scaled(tmp_path):
    """Test rendering a populated page to a scaled PNG."""
    page = PILPage(width=200, height=120, scale=2)
    fill_page(page)
    page.loading_indicator.set_visible(True)
    page.key_banner.show("Invalid or missing OpenWeather API key.")
    out = tmp_path / "weather.png"

    page.save(str(out))

    with Image.open(out) as saved:
        assert saved.size == (400, 240)
