from .load import load_config, load_config_for
from .model import FormatterConfig
from .paths import CONFIG_FILE, find_config

__all__ = [
    "FormatterConfig",
    "load_config",
    "load_config_for",
    "find_config",
    "CONFIG_FILE",
]
