"""Command-line front end for the city weather lookup."""
import argparse
import asyncio
import logging
import os
import sys
from typing import Optional

from dotenv import load_dotenv

from openweather_provider import OpenWeatherProvider
from page import HtmlPage, MemoryPage, PILPage
from renderer import WeatherRenderer
from status_reporter import StatusReporter
from weather_service import WeatherService

# Relative to the working directory, not the install location
DEFAULT_LOG_FILE = "weather-lookup.log"

UNIT_COMMAND = ":unit"
QUIT_COMMANDS = (":quit", ":q")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("City weather lookup")
    parser.add_argument("--city", help="Look up one city and exit (interactive otherwise)")
    parser.add_argument("--output", help="Write the page after each action (.html or .png)")
    parser.add_argument("--timeout", type=float, default=None, help="HTTP timeout in seconds (default: none)")
    parser.add_argument("--log-file", default=DEFAULT_LOG_FILE)
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def setup_logging(log_file: str, verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_file)
        ]
    )


def load_config() -> Optional[str]:
    """Return the configured API key, or None; a missing key is reported in the UI."""
    load_dotenv()
    api_key = os.getenv("OPENWEATHER_API_KEY") or None
    if api_key is None:
        logging.warning("OPENWEATHER_API_KEY is not set")
    else:
        logging.info("Configuration loaded: API key present")
    return api_key


def build_page(output: Optional[str]) -> MemoryPage:
    if output and output.lower().endswith(".png"):
        return PILPage(alert_sink=print)
    if output and output.lower().endswith((".html", ".htm")):
        return HtmlPage(alert_sink=print)
    if output:
        raise SystemExit(f"Unsupported output format: {output} (use .html or .png)")
    return MemoryPage(alert_sink=print)


def build_weather_service(api_key: Optional[str], page: MemoryPage, args: argparse.Namespace) -> WeatherService:
    provider = OpenWeatherProvider(api_key=api_key, timeout=args.timeout)
    service = WeatherService(
        provider=provider,
        renderer=WeatherRenderer(page),
        reporter=StatusReporter(page),
        api_key_configured=api_key is not None,
    )
    logging.info("Weather service ready (timeout=%s)", args.timeout)
    return service


def show_page(page: MemoryPage, output: Optional[str]) -> None:
    text = page.to_text()
    if text:
        print(text)
    if output:
        page.save(output)


def run_interactive(service: WeatherService, page: MemoryPage, output: Optional[str]) -> None:
    """Prompt for cities until EOF or a quit command; one event loop per lookup."""
    print(f"Enter a city name, {UNIT_COMMAND} to switch units, {QUIT_COMMANDS[0]} to exit.")
    while True:
        try:
            line = input("city> ")
        except EOFError:
            break
        command = line.strip()
        if command in QUIT_COMMANDS:
            break
        if command == UNIT_COMMAND:
            service.toggle_unit()
        else:
            asyncio.run(service.execute_query(line))
        show_page(page, output)


def main(argv=None) -> None:
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    api_key = load_config()

    page = build_page(args.output)
    service = build_weather_service(api_key, page, args)

    try:
        if args.city is not None:
            asyncio.run(service.execute_query(args.city))
            show_page(page, args.output)
        else:
            run_interactive(service, page, args.output)
    except KeyboardInterrupt:
        logging.info("Stopping lookup")


if __name__ == "__main__":
    main()
