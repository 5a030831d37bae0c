"""Unit tests for JSON Schema configuration validation."""

import copy
import unittest

from configs.validator import validate_config
from exceptions import ConfigError, ConfigValidationError


VALID_CONFIG = {
    "camera": {"width": 640, "height": 480},
    "recording": {"output_dir": "camera_output"},
}


class TestValidateConfig(unittest.TestCase):
    """Test schema validation of raw config mappings."""

    def setUp(self):
        """Set up test fixtures."""
        self.config = copy.deepcopy(VALID_CONFIG)

    def test_valid_config_passes(self):
        """Test that valid configuration passes validation."""
        validate_config(self.config)

    def test_defaults_filled_in_place(self):
        """Test that schema defaults are written into the mapping."""
        validate_config(self.config)

        self.assertEqual(self.config["camera"]["position"], "rear")
        self.assertEqual(self.config["camera"]["backend"], "opencv")
        self.assertEqual(self.config["recording"]["default_fps"], 30)
        self.assertEqual(self.config["recording"]["jpeg_quality"], 95)

    def test_invalid_camera_width(self):
        """Test that invalid camera width is caught."""
        self.config["camera"]["width"] = -640

        with self.assertRaises(ConfigValidationError) as context:
            validate_config(self.config)

        self.assertTrue(any("width" in e for e in context.exception.validation_errors))

    def test_wrong_types_reported_together(self):
        """Test that every schema violation is collected, not just the first."""
        self.config["camera"]["height"] = "tall"
        self.config["camera"]["position"] = "side"
        self.config["recording"]["jpeg_quality"] = 150

        with self.assertRaises(ConfigValidationError) as context:
            validate_config(self.config)

        self.assertEqual(len(context.exception.validation_errors), 3)

    def test_codec_tag_length(self):
        """Test that codec tags must be four characters."""
        self.config["recording"]["codecs"] = ["mp4v", "H264X"]

        with self.assertRaises(ConfigValidationError):
            validate_config(self.config)

    def test_missing_section(self):
        """Test that required top-level sections are enforced."""
        del self.config["recording"]

        with self.assertRaises(ConfigValidationError) as context:
            validate_config(self.config)

        self.assertTrue(any(e.startswith("root") for e in context.exception.validation_errors))

    def test_unknown_device_position_rejected(self):
        """Test that only rear/front device indices are accepted."""
        self.config["camera"]["device_indices"] = {"rear": 0, "side": 2}

        with self.assertRaises(ConfigValidationError):
            validate_config(self.config)

    def test_validation_error_is_config_error(self):
        """Test that callers can catch the base ConfigError."""
        self.config["camera"]["width"] = 0

        with self.assertRaises(ConfigError):
            validate_config(self.config)


if __name__ == '__main__':
    unittest.main()
