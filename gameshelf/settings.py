import copy
import os
import logging

import yaml

from gameshelf.constants import CONFIG_FILE, DEFAULT_SETTINGS

# Retrieve main logger
logger = logging.getLogger("main")


# Cache variable
_cached_settings = None


def _merge_settings(settings):
    merged_settings = copy.deepcopy(DEFAULT_SETTINGS)
    for section, values in settings.items():
        if isinstance(values, dict) and section in merged_settings and isinstance(merged_settings[section], dict):
            merged_settings[section].update(values)
        else:
            merged_settings[section] = values
    return merged_settings


def _apply_environment(settings):
    """Environment variables win over the settings file."""
    if os.environ.get("PORT"):
        settings["server"]["port"] = int(os.environ["PORT"])

    environment = os.environ.get("GAMESHELF_ENV") or os.environ.get("NODE_ENV")
    if environment:
        settings["server"]["environment"] = environment

    if os.environ.get("REDIS_URL"):
        settings["session"]["redis_url"] = os.environ["REDIS_URL"]

    frontend_url = os.environ.get("FRONTEND_URL")
    if frontend_url and frontend_url not in settings["cors"]["origins"]:
        settings["cors"]["origins"] = [frontend_url] + list(settings["cors"]["origins"])

    return settings


def load_settings(force=False, config_file=None):
    global _cached_settings

    if _cached_settings and not force:
        return _cached_settings

    config_file = config_file or CONFIG_FILE
    if os.path.exists(config_file):
        logger.debug(f"Reading configuration file: {config_file}")
        with open(config_file, "r") as yaml_file:
            settings = yaml.safe_load(yaml_file) or {}
        settings = _merge_settings(settings)
    else:
        logger.debug(f"Configuration file {config_file} not found, using defaults.")
        settings = copy.deepcopy(DEFAULT_SETTINGS)

    _cached_settings = _apply_environment(settings)
    return _cached_settings


def is_production(settings=None):
    settings = settings or load_settings()
    return settings["server"].get("environment") == "production"
