# src/ogrlayer/vector/feature.py

"""
This module defines the Feature wrapper: one geometry plus named attribute values.

Field values are exchanged as plain Python objects:

    Integer, Integer64           <-> int
    Real                         <-> float
    String                       <-> str
    IntegerList, Integer64List   <-> list of int
    RealList                     <-> list of float
    StringList                   <-> list of str
    Date, Time, DateTime         <-> datetime.date, datetime.time, datetime.datetime
    Binary                       <-> bytes
    null or unset                <-> None

NumPy scalars are accepted when setting values.
"""

import datetime
import logging
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional, Tuple

import numpy as np

from ..bindings import ogr, engine_call, check_ogrerr, null_pointer_error, ensure_c_string
from ..errors import InvalidFieldNameError, UnsupportedFieldValueError
from ..handle import OwnedHandle
from .field import FieldType
from .geometry import Geometry

if TYPE_CHECKING:
    from .defn import Defn
    from .layer import Layer

log = logging.getLogger(__name__)

__all__ = [
    "Feature"
]

OGR_NULL_FID = -1

# TZFlag values: 0 unknown, 1 local time, 100 UTC, 100 +/- n for n * 15 minutes offset
_TZ_UTC = 100


def _tzinfo_from_flag(flag: int) -> Optional[datetime.tzinfo]:
    if flag < _TZ_UTC:
        return None
    return datetime.timezone(datetime.timedelta(minutes=(flag - _TZ_UTC) * 15))


def _tzflag_from_datetime(value: datetime.datetime) -> int:
    offset = value.utcoffset()
    if offset is None:
        return 0
    return _TZ_UTC + int(offset.total_seconds() // 60) // 15


def _seconds_delta(seconds: float) -> datetime.timedelta:
    # Seconds are stored as float32; keep millisecond precision and let overflow carry into minutes
    return datetime.timedelta(seconds=round(seconds, 3))


class Feature(OwnedHandle):
    """
    A feature owned by Python code, bound to the schema of the layer it came from.

    Args:
        defn: Schema descriptor shared with the producing layer.
        handle: Engine feature object (ownership is taken).
    """
    def __init__(self, defn: "Defn", handle: Any):
        super().__init__(handle)
        self._defn = defn

    @classmethod
    def new(cls, defn: "Defn") -> "Feature":
        """Creates an empty feature against the given schema."""
        with engine_call("OGR_F_Create"):
            handle = ogr.Feature(defn.handle)
            if handle is None:
                raise null_pointer_error("OGR_F_Create")
        return cls(defn, handle)

    @property
    def defn(self) -> "Defn":
        return self._defn

    @property
    def fid(self) -> Optional[int]:
        fid = self.handle.GetFID()
        return None if fid == OGR_NULL_FID else fid

    # --- Geometry ---

    def geometry(self) -> Optional[Geometry]:
        """Returns an owned copy of the feature's geometry, or None if it has none."""
        with engine_call("OGR_F_GetGeometryRef"):
            ref = self.handle.GetGeometryRef()
            if ref is None:
                return None
            return Geometry(ref.Clone())

    def set_geometry(self, geometry: Geometry) -> None:
        """
        Sets the feature geometry, transferring ownership of it to the feature.

        The Geometry wrapper is consumed whether or not the engine accepts it.

        Raises:
            OgrError: If the engine rejects the geometry.
        """
        handle = self.handle
        with engine_call("OGR_F_SetGeometryDirectly"):
            rv = handle.SetGeometryDirectly(geometry.take())
            check_ogrerr(rv, "OGR_F_SetGeometryDirectly")

    # --- Attributes ---

    def _field_index(self, name: str, method_name: str) -> int:
        ensure_c_string(name, "field name")
        idx = self.handle.GetFieldIndex(name)
        if idx < 0:
            raise InvalidFieldNameError(name, method_name)
        return idx

    @property
    def field_names(self) -> List[str]:
        handle = self.handle
        return [handle.GetFieldDefnRef(i).GetName() for i in range(handle.GetFieldCount())]

    def field(self, name: str) -> Any:
        """
        Reads a field value.

        Returns:
            The value converted to a Python object, or None if the field is null or unset.

        Raises:
            InvalidFieldNameError: If the schema has no field with that name.
        """
        idx = self._field_index(name, "OGR_F_GetFieldIndex")
        with engine_call("OGR_F_GetField"):
            return self._read_field(idx)

    def _read_field(self, idx: int) -> Any:
        h = self.handle
        if not h.IsFieldSetAndNotNull(idx):
            return None

        ftype = FieldType(h.GetFieldType(idx))
        if ftype in (FieldType.INTEGER, FieldType.INTEGER64):
            return h.GetFieldAsInteger64(idx)
        if ftype == FieldType.REAL:
            return h.GetFieldAsDouble(idx)
        if ftype in (FieldType.STRING, FieldType.WIDE_STRING):
            return h.GetFieldAsString(idx)
        if ftype == FieldType.INTEGER_LIST:
            return list(h.GetFieldAsIntegerList(idx))
        if ftype == FieldType.INTEGER64_LIST:
            return list(h.GetFieldAsInteger64List(idx))
        if ftype == FieldType.REAL_LIST:
            return list(h.GetFieldAsDoubleList(idx))
        if ftype in (FieldType.STRING_LIST, FieldType.WIDE_STRING_LIST):
            return list(h.GetFieldAsStringList(idx))
        if ftype == FieldType.BINARY:
            return bytes(h.GetFieldAsBinary(idx))

        year, month, day, hour, minute, second, tzflag = h.GetFieldAsDateTime(idx)
        if ftype == FieldType.DATE:
            return datetime.date(year, month, day)
        if ftype == FieldType.TIME:
            base = datetime.datetime.combine(datetime.date.min, datetime.time(hour, minute))
            return (base + _seconds_delta(second)).time()
        base = datetime.datetime(year, month, day, hour, minute, tzinfo=_tzinfo_from_flag(tzflag))
        return base + _seconds_delta(second)

    def set_field(self, name: str, value: Any) -> None:
        """
        Writes a field value.

        Raises:
            InvalidFieldNameError: If the schema has no field with that name.
            EncodingError: If a string value contains an embedded NUL character.
            UnsupportedFieldValueError: If the value type cannot be stored.
        """
        idx = self._field_index(name, "OGR_F_SetField")
        with engine_call("OGR_F_SetField"):
            self._write_field(idx, name, value)

    def _write_field(self, idx: int, name: str, value: Any) -> None:
        h = self.handle
        if isinstance(value, np.generic):
            value = value.item()

        if value is None:
            h.SetFieldNull(idx)
        elif isinstance(value, (bool, int)):
            h.SetFieldInteger64(idx, int(value))
        elif isinstance(value, float):
            h.SetField(idx, value)
        elif isinstance(value, str):
            h.SetField(idx, ensure_c_string(value, f"value of field '{name}'"))
        elif isinstance(value, (bytes, bytearray)):
            h.SetFieldBinaryFromHexString(idx, bytes(value).hex())
        elif isinstance(value, datetime.datetime):
            seconds = value.second + value.microsecond / 1_000_000
            h.SetField(idx, value.year, value.month, value.day, value.hour, value.minute, seconds,
                       _tzflag_from_datetime(value))
        elif isinstance(value, datetime.date):
            h.SetField(idx, value.year, value.month, value.day, 0, 0, 0.0, 0)
        elif isinstance(value, datetime.time):
            seconds = value.second + value.microsecond / 1_000_000
            h.SetField(idx, 0, 0, 0, value.hour, value.minute, seconds, 0)
        elif isinstance(value, (list, tuple, np.ndarray)):
            self._write_list(idx, name, list(value))
        else:
            raise UnsupportedFieldValueError(
                f"Cannot store value of type {type(value).__name__} in field '{name}'"
            )

    def _write_list(self, idx: int, name: str, values: list) -> None:
        h = self.handle
        values = [v.item() if isinstance(v, np.generic) else v for v in values]
        ftype = FieldType(h.GetFieldType(idx))

        if ftype == FieldType.INTEGER_LIST:
            h.SetFieldIntegerList(idx, [int(v) for v in values])
        elif ftype == FieldType.INTEGER64_LIST:
            h.SetFieldInteger64List(idx, [int(v) for v in values])
        elif ftype == FieldType.REAL_LIST:
            h.SetFieldDoubleList(idx, [float(v) for v in values])
        elif ftype in (FieldType.STRING_LIST, FieldType.WIDE_STRING_LIST):
            h.SetFieldStringList(idx, [ensure_c_string(str(v), f"value of field '{name}'") for v in values])
        else:
            raise UnsupportedFieldValueError(
                f"Cannot store a list in field '{name}' of type {ftype.name}"
            )

    def fields(self) -> Iterator[Tuple[str, Any]]:
        """Yields (name, value) pairs in schema order."""
        for idx, name in enumerate(self.field_names):
            with engine_call("OGR_F_GetField"):
                value = self._read_field(idx)
            yield name, value

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.fields())

    def create(self, layer: "Layer") -> None:
        """Writes this feature into the layer as a new feature."""
        layer._create_raw_feature(self)

    def __repr__(self):
        if self.closed:
            return "<Feature released>"
        return f"<Feature fid={self.fid} fields={len(self.field_names)}>"
