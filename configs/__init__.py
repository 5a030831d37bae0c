"""Configuration loading and persisted UI state."""
