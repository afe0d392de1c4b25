import os
import json
import logging
from rewriter import REWRITE_MODES, DEFAULT_MODE
from monitor import DEFAULT_INTERVAL_MS

log = logging.getLogger(__name__)

MIN_INTERVAL_MS = 50
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def default_settings():
    return {
        "monitoring_enabled": True,
        "poll_interval_ms": DEFAULT_INTERVAL_MS,
        "rewrite_mode": DEFAULT_MODE,
        "log_level": "INFO",
    }


def validate_settings(settings):
    # replace bad values with defaults instead of refusing to start
    defaults = default_settings()
    interval = settings.get("poll_interval_ms")
    if isinstance(interval, bool) or not isinstance(interval, int) or interval < MIN_INTERVAL_MS:
        log.warning("invalid poll_interval_ms %r, using %d", interval, defaults["poll_interval_ms"])
        settings["poll_interval_ms"] = defaults["poll_interval_ms"]
    if settings.get("rewrite_mode") not in REWRITE_MODES:
        log.warning("invalid rewrite_mode %r, using %r", settings.get("rewrite_mode"), defaults["rewrite_mode"])
        settings["rewrite_mode"] = defaults["rewrite_mode"]
    if not isinstance(settings.get("monitoring_enabled"), bool):
        settings["monitoring_enabled"] = defaults["monitoring_enabled"]
    level = settings.get("log_level")
    if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
        settings["log_level"] = defaults["log_level"]
    else:
        settings["log_level"] = level.upper()
    return settings


class SettingsManager:
    @staticmethod
    def load_settings(settings_path):
        if not os.path.exists(settings_path):
            return None
        try:
            with open(settings_path, 'r') as f:
                settings = json.load(f)
        except (OSError, ValueError) as e:
            log.error("failed to read settings from %s, using defaults: %s", settings_path, e)
            return default_settings()
        if not isinstance(settings, dict):
            log.error("settings file %s is not a JSON object, using defaults", settings_path)
            return default_settings()
        for key, value in default_settings().items():
            settings.setdefault(key, value)
        return validate_settings(settings)

    @staticmethod
    def save_settings(settings, settings_path):
        with open(settings_path, 'w') as f:
            json.dump(settings, f, indent=4)

    @staticmethod
    def load_or_create(settings_path):
        settings = SettingsManager.load_settings(settings_path)
        if settings is None:
            settings = default_settings()
            SettingsManager.save_settings(settings, settings_path)
        return settings
