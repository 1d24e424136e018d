import argparse
import logging
import os

from pathlib import Path
import yaml

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = 'sqlite:///local.db'

# New York City, the location the weather archive is queried for
DEFAULTS = {
    'token': None,
    'database_url': DEFAULT_DATABASE_URL,
    'workers': 4,
    'since_years': 2,
    'latitude': 40.7128,
    'longitude': -74.006,
    'location': 'NYC',
    'timezone': 'America/New_York',
}


def get_default_value(arg_name):
    """Get the default value for a setting, environment first"""
    env_defaults = {
        'token': os.getenv('GITHUB_TOKEN'),
        'database_url': os.getenv('DATABASE_URL'),
    }
    value = env_defaults.get(arg_name)
    if value is not None:
        return value
    return DEFAULTS.get(arg_name)


def load_config(config_path):
    """Load configuration from a YAML/YML file"""
    if not config_path:
        return {}

    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(path, 'r') as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        logger.warning("Could not load config from %s: %s. Input supports only YAML/YML format!", path, e)
        return {}


def merge_config_with_args(args, config):
    """Merge command line arguments with config file values"""
    final_args = argparse.Namespace(**vars(args))

    for key in DEFAULTS:
        config_value = config.get(key)
        if config_value is None:
            continue
        current_value = getattr(args, key, None)
        if current_value is None or current_value == get_default_value(key):
            setattr(final_args, key, config_value)

    for key in DEFAULTS:
        if getattr(final_args, key, None) is None:
            setattr(final_args, key, get_default_value(key))

    return final_args


def get_settings(config_path=None) -> argparse.Namespace:
    """
    Settings for non-CLI entry points (the HTTP API).

    The file path comes from COMMIT_WEATHER_CONFIG when not given.
    """
    config_path = config_path or os.getenv('COMMIT_WEATHER_CONFIG')
    config = load_config(config_path)
    defaults = argparse.Namespace(**{key: get_default_value(key) for key in DEFAULTS})
    return merge_config_with_args(defaults, config)
