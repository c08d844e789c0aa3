"""
Configuration loading for goco.

See :mod:`goco.config.loader` for the file format and defaults.
"""

from .loader import Config, create_config_file, get_config_path, load_config  # noqa: F401
from goco.errors import ConfigError  # noqa: F401
