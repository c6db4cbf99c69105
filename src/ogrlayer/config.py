# src/ogrlayer/config.py

"""
This module holds the configuration object used when opening or creating datasets.
"""

import logging
from contextlib import contextmanager
from typing import Dict, Generator, List, Optional

from .bindings import gdal

log = logging.getLogger(__name__)

__all__ = [
    "EngineConfig"
]

class EngineConfig:
    """Configuration object for dataset access.

    Args:
        open_options: Driver open options, passed to the engine as KEY=VALUE strings.
        allowed_drivers: Restrict opening to these driver short names (e.g. ["GPKG"]).
        config_options: GDAL configuration options applied while the dataset
            is opened or created, then restored.
        size_hint: If True, feature iterators ask the layer for a cheap feature
            count to report as a length hint. Default=True.
    """
    def __init__(
        self,
        open_options: Optional[Dict[str, str]] = None,
        allowed_drivers: Optional[List[str]] = None,
        config_options: Optional[Dict[str, str]] = None,
        size_hint: bool = True
    ):
        self.open_options = dict(open_options) if open_options else {}
        self.allowed_drivers = list(allowed_drivers) if allowed_drivers else None
        self.config_options = dict(config_options) if config_options else {}
        self.size_hint = size_hint

    def open_option_list(self) -> List[str]:
        return [f"{key}={value}" for key, value in self.open_options.items()]

    @contextmanager
    def applied(self) -> Generator[None, None, None]:
        """Sets the configuration options for the duration of the block."""
        previous = {key: gdal.GetConfigOption(key) for key in self.config_options}
        for key, value in self.config_options.items():
            log.debug(f"Setting GDAL config option {key}={value}")
            gdal.SetConfigOption(key, str(value))
        try:
            yield
        finally:
            for key, value in previous.items():
                gdal.SetConfigOption(key, value)

    def __repr__(self):
        return (
            f"<EngineConfig open_options={self.open_options} "
            f"allowed_drivers={self.allowed_drivers} "
            f"config_options={self.config_options} size_hint={self.size_hint}>"
        )
