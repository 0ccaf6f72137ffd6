"""Application settings from JSON files.

Example:
    >>> from molcal.configs import get_config
    >>> config = get_config()
    >>> print(config.weight_decimals, config.export_filename)
"""

from .loader import (
    AppConfig,
    load_config,
    get_config,
    clear_cache,
)

__all__ = [
    "AppConfig",
    "load_config",
    "get_config",
    "clear_cache",
]
