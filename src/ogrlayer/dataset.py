# src/ogrlayer/dataset.py

"""
This module defines the Dataset wrapper, the owner of every layer handle.

Layer handles are only valid while their dataset is open. Each Layer keeps a
reference to its Dataset and calls ensure_open() before touching the engine,
so using a layer after close() fails fast with DatasetClosedError instead of
dereferencing freed memory.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from .bindings import gdal, ogr, engine_call, null_pointer_error, ensure_c_string
from .config import EngineConfig
from .errors import DatasetClosedError
from .srs import SpatialRef
from .vector.layer import Layer

log = logging.getLogger(__name__)

__all__ = [
    "Dataset"
]

MEMORY_DRIVERS = ("Memory", "MEM")


def _vector_driver(name: str):
    driver = gdal.GetDriverByName(name)
    if driver is None or driver.GetMetadataItem(gdal.DCAP_VECTOR) != "YES":
        return None
    return driver


class Dataset:
    """
    Open vector dataset.

    Use Dataset.open(), Dataset.create() or Dataset.memory() rather than the
    constructor. Datasets are context managers:

        with Dataset.open("roads.gpkg") as ds:
            layer = ds.layer(0)
            for feature in layer.features():
                ...
    """
    def __init__(self, handle: Any, description: str = "", config: Optional[EngineConfig] = None):
        if handle is None:
            raise ValueError("Dataset cannot wrap a NULL handle")
        self._handle = handle
        self._description = description
        self._config = config or EngineConfig()
        self._layers: Dict[str, Layer] = {}

    @classmethod
    def open(
        cls,
        path: Union[str, Path],
        update: bool = False,
        config: Optional[EngineConfig] = None
    ) -> "Dataset":
        """
        Opens an existing vector dataset.

        Args:
            path: File path or connection string.
            update: Open in update mode. Default=False.
            config: Optional EngineConfig with open options and driver restrictions.

        Returns:
            Dataset: The opened dataset.

        Raises:
            NullPointerError: If the engine cannot open the dataset.
        """
        config = config or EngineConfig()
        path = ensure_c_string(str(path), "dataset path")
        flags = gdal.OF_VECTOR | (gdal.OF_UPDATE if update else gdal.OF_READONLY)

        with config.applied(), engine_call("GDALOpenEx"):
            handle = gdal.OpenEx(
                path,
                flags,
                allowed_drivers=config.allowed_drivers,
                open_options=config.open_option_list()
            )
            if handle is None:
                raise null_pointer_error("GDALOpenEx")

        log.info(f"Opened {path} ({'update' if update else 'read-only'})")
        return cls(handle, path, config)

    @classmethod
    def create(
        cls,
        driver_name: str,
        path: Union[str, Path] = "",
        options: Optional[Dict[str, str]] = None,
        config: Optional[EngineConfig] = None
    ) -> "Dataset":
        """
        Creates a new, empty vector dataset.

        Args:
            driver_name: Driver short name (e.g. "GPKG", "ESRI Shapefile").
            path: Output path (ignored by in-memory drivers).
            options: Driver creation options.
            config: Optional EngineConfig.

        Raises:
            NullPointerError: If the driver is unknown or creation fails.
        """
        config = config or EngineConfig()
        path = ensure_c_string(str(path), "dataset path")
        creation_options = [f"{k}={v}" for k, v in (options or {}).items()]

        with config.applied(), engine_call("GDALCreate"):
            driver = _vector_driver(driver_name)
            if driver is None:
                raise null_pointer_error("GDALGetDriverByName")
            handle = driver.Create(path, 0, 0, 0, gdal.GDT_Unknown, creation_options)
            if handle is None:
                raise null_pointer_error("GDALCreate")

        log.info(f"Created {driver_name} dataset {path or '(in memory)'}")
        return cls(handle, path, config)

    @classmethod
    def memory(cls, name: str = "", config: Optional[EngineConfig] = None) -> "Dataset":
        """Creates an in-memory vector dataset."""
        for driver_name in MEMORY_DRIVERS:
            if _vector_driver(driver_name) is not None:
                return cls.create(driver_name, name, config=config)
        raise null_pointer_error("GDALGetDriverByName")

    # --- Lifetime ---

    @property
    def closed(self) -> bool:
        return self._handle is None

    def ensure_open(self, operation: str = "operation") -> None:
        if self._handle is None:
            raise DatasetClosedError(
                f"Cannot run {operation}: dataset '{self._description}' has been closed"
            )

    @property
    def handle(self) -> Any:
        self.ensure_open("GDALDatasetH access")
        return self._handle

    def close(self) -> None:
        """Flushes and releases the dataset. Its layers become unusable."""
        if self._handle is None:
            return
        handle, self._handle = self._handle, None
        self._layers.clear()
        with engine_call("GDALClose"):
            handle.FlushCache()
            # Layer proxies may keep the dataset alive; Close() releases it regardless
            if hasattr(handle, "Close"):
                handle.Close()
        log.debug(f"Closed dataset {self._description or '(in memory)'}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    # --- Properties ---

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def description(self) -> str:
        return self._description

    @property
    def driver_name(self) -> str:
        return self.handle.GetDriver().ShortName

    # --- Layers ---

    def _wrap(self, raw: Any) -> Layer:
        """
        Returns the single Layer wrapper for an engine layer.

        The engine hands back the same layer object for every lookup of the
        same index or name, and that object has one read cursor. Sharing one
        wrapper per layer keeps cursor tracking and the cached Defn in one place.
        """
        name = raw.GetName()
        layer = self._layers.get(name)
        if layer is None:
            layer = Layer(self, raw)
            self._layers[name] = layer
        return layer

    @property
    def layer_count(self) -> int:
        return self.handle.GetLayerCount()

    def layer(self, index: int) -> Layer:
        """
        Returns the layer at the given index.

        Raises:
            NullPointerError: If there is no layer at that index.
        """
        handle = self.handle
        with engine_call("GDALDatasetGetLayer"):
            raw = handle.GetLayerByIndex(int(index)) if 0 <= int(index) else None
            if raw is None:
                raise null_pointer_error("GDALDatasetGetLayer")
        return self._wrap(raw)

    def layer_by_name(self, name: str) -> Layer:
        """
        Returns the layer with the given name.

        Raises:
            NullPointerError: If there is no layer with that name.
        """
        handle = self.handle
        ensure_c_string(name, "layer name")
        with engine_call("GDALDatasetGetLayerByName"):
            raw = handle.GetLayerByName(name)
            if raw is None:
                raise null_pointer_error("GDALDatasetGetLayerByName")
        return self._wrap(raw)

    def layers(self) -> Iterator[Layer]:
        for i in range(self.layer_count):
            yield self.layer(i)

    def layer_names(self) -> List[str]:
        return [layer.name for layer in self.layers()]

    def create_layer(
        self,
        name: str,
        spatial_ref: Optional[Union[SpatialRef, str, int]] = None,
        geometry_type: int = ogr.wkbUnknown,
        options: Optional[Dict[str, str]] = None
    ) -> Layer:
        """
        Creates a new layer in this dataset.

        Args:
            name: Layer name.
            spatial_ref: SpatialRef, pyproj CRS, EPSG code or user input string (e.g. "EPSG:4326").
            geometry_type: Engine geometry type code. Default=ogr.wkbUnknown.
            options: Driver layer creation options.

        Raises:
            NullPointerError: If the engine cannot create the layer.
        """
        handle = self.handle
        ensure_c_string(name, "layer name")
        srs = SpatialRef.from_user_input(spatial_ref) if spatial_ref is not None else None
        layer_options = [f"{k}={v}" for k, v in (options or {}).items()]

        with engine_call("GDALDatasetCreateLayer"):
            raw = handle.CreateLayer(
                name,
                srs=srs.handle if srs is not None else None,
                geom_type=geometry_type,
                options=layer_options
            )
            if raw is None:
                raise null_pointer_error("GDALDatasetCreateLayer")

        log.debug(f"Created layer '{name}' in {self._description or '(in memory)'}")
        return self._wrap(raw)

    def __repr__(self):
        if self.closed:
            return f"<Dataset {self._description!r} closed>"
        return f"<Dataset {self._description!r} driver={self.driver_name} layers={self.layer_count}>"
