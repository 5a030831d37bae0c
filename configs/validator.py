"""Configuration validation using JSON Schema."""

from __future__ import annotations

from typing import Any, Dict

import jsonschema
from jsonschema import Draft7Validator, validators

from exceptions import ConfigValidationError
from log_config.logger import get_logger

logger = get_logger(__name__)

_CODEC_TAG = {"type": "string", "minLength": 4, "maxLength": 4}

# JSON Schema for default.yaml configuration
CONFIG_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["camera", "recording"],
    "properties": {
        "camera": {
            "type": "object",
            "required": ["width", "height"],
            "properties": {
                "width": {"type": "integer", "minimum": 1, "maximum": 7680},
                "height": {"type": "integer", "minimum": 1, "maximum": 4320},
                "position": {"type": "string", "enum": ["rear", "front"], "default": "rear"},
                "backend": {"type": "string", "enum": ["opencv", "sim"], "default": "opencv"},
                "device_indices": {
                    "type": "object",
                    "properties": {
                        "rear": {"type": "integer", "minimum": 0},
                        "front": {"type": "integer", "minimum": 0},
                    },
                    "additionalProperties": False,
                },
                "open_timeout_s": {"type": "number", "exclusiveMinimum": 0, "maximum": 60, "default": 5.0},
            },
        },
        "recording": {
            "type": "object",
            "properties": {
                "output_dir": {"type": "string", "minLength": 1, "default": "camera_output"},
                "codecs": {"type": "array", "items": _CODEC_TAG, "minItems": 1},
                "default_fps": {"type": "number", "exclusiveMinimum": 0, "maximum": 120, "default": 30},
                "max_fps": {"type": "number", "exclusiveMinimum": 0, "maximum": 1000, "default": 120},
                "jpeg_quality": {"type": "integer", "minimum": 0, "maximum": 100, "default": 95},
            },
        },
        "ui": {
            "type": "object",
            "properties": {
                "title": {"type": "string"},
                "window_width": {"type": "integer", "minimum": 320, "maximum": 7680},
                "window_height": {"type": "integer", "minimum": 240, "maximum": 4320},
                "max_preview_width": {"type": "integer", "minimum": 1},
                "controls_reserve_px": {"type": "integer", "minimum": 0},
            },
        },
        "logging": {
            "type": "object",
            "properties": {
                "level": {
                    "type": "string",
                    "enum": ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"],
                },
                "log_dir": {"type": ["string", "null"]},
            },
        },
    },
}


def extend_with_default(validator_class):
    """Extend JSON Schema validator to set default values."""
    validate_properties = validator_class.VALIDATORS["properties"]

    def set_defaults(validator, properties, instance, schema):
        for prop, subschema in properties.items():
            if "default" in subschema and isinstance(instance, dict):
                instance.setdefault(prop, subschema["default"])

        for error in validate_properties(validator, properties, instance, schema):
            yield error

    return validators.extend(validator_class, {"properties": set_defaults})


DefaultValidatingValidator = extend_with_default(Draft7Validator)


def validate_config(config: Dict[str, Any]) -> None:
    """Validate configuration against JSON Schema.

    Fills in schema defaults in place.

    Args:
        config: Configuration dictionary

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    try:
        validator = DefaultValidatingValidator(CONFIG_SCHEMA)
        errors = list(validator.iter_errors(config))

        if errors:
            error_messages = []
            for error in errors:
                path = " -> ".join(str(p) for p in error.path) if error.path else "root"
                error_messages.append(f"{path}: {error.message}")

            logger.error(f"Configuration validation failed with {len(errors)} errors")
            for msg in error_messages:
                logger.error(f"  - {msg}")

            raise ConfigValidationError(
                f"Configuration validation failed with {len(errors)} error(s). See logs for details.",
                validation_errors=error_messages,
            )

        logger.debug("Configuration validation passed")

    except jsonschema.exceptions.SchemaError as e:
        logger.error(f"Invalid schema: {e}")
        raise ConfigValidationError(f"Invalid schema definition: {e}")


__all__ = ["validate_config", "CONFIG_SCHEMA"]
