"""Main application entry point for PathTracker."""

import sys
import argparse
import logging
from pathlib import Path
from typing import Optional

from aiohttp import web
from rich.console import Console
from rich.panel import Panel

from . import __version__
from .api.server import create_app
from .config import PathTrackerConfig

logger = logging.getLogger(__name__)


def setup_logging(config: PathTrackerConfig, level: str = "INFO") -> None:
    """Set up logging configuration from YAML config."""
    log_file_path = config.get('logging.file_path')
    console_output = config.get('logging.console_output', True)

    handlers = []

    # File handler - only if a log file is configured
    if log_file_path:
        Path(log_file_path).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file_path)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
        ))
        handlers.append(file_handler)

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        handlers.append(console_handler)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in handlers:
        root_logger.addHandler(handler)

    logger.info("=" * 50)
    logger.info("PathTracker starting up")
    logger.info(f"Log file: {log_file_path or '(none)'}")
    logger.info(f"Log level set to: {level}")
    logger.info("=" * 50)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="PathTracker - session-based GPS path tracking backend"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration YAML file (default: built-in defaults)"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level (overrides config)"
    )

    parser.add_argument(
        "--host",
        type=str,
        help="Interface to bind (overrides server.host)"
    )

    parser.add_argument(
        "--port",
        type=int,
        help="Port to listen on (overrides server.port and PORT)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"PathTracker v{__version__}"
    )

    return parser


def main(argv: Optional[list] = None) -> None:
    """Main entry point for PathTracker."""
    args = build_parser().parse_args(argv)
    console = Console()

    try:
        config = PathTrackerConfig(args.config)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"❌ Configuration error: {e}", style="red")
        sys.exit(1)

    if args.host:
        config.set('server.host', args.host)
    if args.port:
        config.set('server.port', args.port)

    setup_logging(config, args.log_level or config.get('logging.level', 'INFO'))

    host = config.get('server.host')
    port = config.get('server.port')
    app = create_app(config)

    console.print(Panel(
        f"Path Tracker Backend running on port {port}\n"
        f"Health check: http://localhost:{port}/health",
        title=f"PathTracker v{__version__}",
        style="green",
    ))

    try:
        web.run_app(app, host=host, port=port, print=None)
    except KeyboardInterrupt:
        console.print("\n👋 Goodbye!")


if __name__ == "__main__":
    main()
