"""
eve configuration.

Built-in defaults can be overridden per project with an ``eve.yaml`` file
in the project root. Command-line flags always take precedence over both.

Example eve.yaml:

    state_dir: .eve
    builder: paketobuildpacks/builder:base
    pack_binary: /usr/local/bin/pack
"""

import os

import yaml

from .errors import ConfigError
from .logger import get_logger
from .pack import DEFAULT_BUILDER, PACK_BINARY

CONFIG_FILES = ("eve.yaml", "eve.yml")

# Configuration settings
CONFIG = {
    "state_dir": ".eve",
    "builder": DEFAULT_BUILDER,
    "pack_binary": PACK_BINARY,
}


def find_config_file(path):
    """Return the first config file present in path, or None."""
    for name in CONFIG_FILES:
        candidate = os.path.join(path, name)
        if os.path.isfile(candidate):
            return candidate
    return None


def load_config(path="."):
    """
    Load the project configuration.

    Args:
        path (str): Project root to look for eve.yaml in

    Returns:
        dict: CONFIG with any values from the project file merged over it

    Raises:
        ConfigError: If the file is not valid YAML or not a mapping
    """
    config = dict(CONFIG)
    config_file = find_config_file(path)
    if config_file is None:
        return config

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"failed to load config {config_file}: {e}") from e

    if data is None:
        return config
    if not isinstance(data, dict):
        raise ConfigError(f"config {config_file} must be a mapping, got {type(data).__name__}")

    log = get_logger()
    for key, value in data.items():
        if key not in CONFIG:
            log.warnf("ignoring unknown config key '%s' in %s", key, config_file)
            continue
        if value is None:
            continue
        config[key] = str(value)

    log.debugf("loaded config from %s", config_file)
    return config
