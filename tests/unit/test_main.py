"""Unit tests for the command-line entry point."""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from pathtracker.config import PathTrackerConfig
from pathtracker.main import build_parser, main, setup_logging


@pytest.mark.unit
class TestMain:
    """Test cases for main() and setup_logging()."""

    def test_parser_options(self):
        args = build_parser().parse_args(["--config", "x.yaml", "--port", "8080", "--log-level", "DEBUG"])

        assert args.config == "x.yaml"
        assert args.port == 8080
        assert args.log_level == "DEBUG"

    def test_setup_logging_writes_file(self, temp_data_dir):
        """Test a configured log file gets a handler and the directory is created."""
        config = PathTrackerConfig()
        log_file = Path(temp_data_dir) / "logs" / "pathtracker.log"
        config.set("logging.file_path", str(log_file))
        config.set("logging.console_output", False)
        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level

        try:
            setup_logging(config, "DEBUG")
            assert log_file.parent.exists()
            assert root.level == logging.DEBUG
            assert [type(h) for h in root.handlers] == [logging.FileHandler]
        finally:
            for handler in root.handlers:
                handler.close()
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

    def test_main_runs_app_with_overrides(self):
        """Test CLI overrides reach run_app."""
        with patch("pathtracker.main.web.run_app") as mock_run_app, \
                patch("pathtracker.main.setup_logging") as mock_setup_logging:
            main(["--host", "127.0.0.1", "--port", "9999"])

        mock_setup_logging.assert_called_once()
        mock_run_app.assert_called_once()
        assert mock_run_app.call_args.kwargs["host"] == "127.0.0.1"
        assert mock_run_app.call_args.kwargs["port"] == 9999

    def test_main_exits_on_missing_config(self, temp_data_dir):
        """Test a missing config file exits with status 1."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--config", str(Path(temp_data_dir) / "missing.yaml")])

        assert exc_info.value.code == 1
