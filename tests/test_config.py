"""Tests for settings and logging setup."""

import json
import logging

import pytest
from pydantic import ValidationError

from massing_builder.config import MassingSettings, load_settings
from massing_builder.logging_config import setup_logging


class TestSettings:
    def test_defaults(self):
        s = MassingSettings()
        assert s.arc_resolution == 128
        assert s.floor_height == 3.5
        assert s.facade_tolerance == 1.0

    def test_load_none(self):
        assert load_settings(None) == MassingSettings()

    def test_load_missing_file(self, tmp_path):
        assert load_settings(tmp_path / "nope.json") == MassingSettings()

    def test_load_partial_override(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"arc_resolution": 256, "floor_height": 3.2}))
        s = load_settings(path)
        assert s.arc_resolution == 256
        assert s.floor_height == 3.2
        assert s.join_tolerance == 1e-6

    @pytest.mark.parametrize(
        "data",
        [{"arc_resolution": 4}, {"floor_height": 0}, {"facade_tolerance": 45}],
    )
    def test_invalid_values(self, tmp_path, data):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps(data))
        with pytest.raises(ValidationError):
            load_settings(path)


class TestLogging:
    def test_setup_logging(self, tmp_path):
        log_file = tmp_path / "massing.log"
        logger = setup_logging(logging.DEBUG, str(log_file))
        logging.getLogger("massing_builder.generators.mass").debug("hello")
        for handler in logger.handlers:
            handler.flush()
        assert "hello" in log_file.read_text()
        assert len(logger.handlers) == 2
        # Calling again replaces handlers instead of stacking them
        setup_logging(logging.INFO)
        assert len(logger.handlers) == 1
        logger.handlers.clear()
