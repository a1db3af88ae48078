"""Classification of Python values into the kinds the encoder understands"""
import dataclasses
import datetime
import math
import numbers
import uuid
from collections.abc import Mapping, Sequence, Set
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from pathlib import PurePath
from typing import Any, Iterator, Tuple

from pydantic import BaseModel

_TEXT_TYPES = (str, datetime.date, datetime.time, datetime.timedelta, uuid.UUID, PurePath)
_BYTES_TYPES = (bytes, bytearray, memoryview)


class ValueKind(Enum):
    """Kinds of values met during traversal"""
    NONE = "none"
    BOOL = "bool"
    INTEGER = "integer"
    FLOAT = "float"
    TEXT = "text"
    BYTES = "bytes"
    ENUM_VARIANT = "enum_variant"
    RECORD = "record"
    MAP = "map"
    SET = "set"
    SEQUENCE = "sequence"
    UNSUPPORTED = "unsupported"


SCALAR_KINDS = frozenset({ValueKind.BOOL, ValueKind.INTEGER, ValueKind.FLOAT})
SKIPPED_KINDS = frozenset({
    ValueKind.NONE,
    ValueKind.TEXT,
    ValueKind.BYTES,
    ValueKind.ENUM_VARIANT,
    ValueKind.MAP,
    ValueKind.SET,
})


@dataclass(frozen=True)
class Record:
    """An explicit record with named fields, for data that has no class of its own.
    
    Plain dicts are maps and are skipped; wrap them with ``Record.from_mapping``
    to have their keys treated as field names.
    """
    fields: Tuple[Tuple[str, Any], ...] = ()
    
    def __post_init__(self):
        object.__setattr__(self, "fields", tuple((name, value) for name, value in self.fields))
    
    @classmethod
    def of(cls, **fields: Any) -> "Record":
        return cls(tuple(fields.items()))
    
    @classmethod
    def from_mapping(cls, mapping: Mapping, recursive: bool = True) -> "Record":
        """Build a record from a mapping, keeping key order.
        
        With ``recursive`` set, nested mappings (also inside lists and tuples) become records too.
        """
        def convert(value):
            if not recursive:
                return value
            if isinstance(value, Mapping):
                return cls.from_mapping(value)
            if isinstance(value, list):
                return [convert(item) for item in value]
            if type(value) is tuple:
                return tuple(convert(item) for item in value)
            return value
        
        return cls(tuple((str(key), convert(value)) for key, value in mapping.items()))


def classify(value: Any) -> ValueKind:
    """Return the kind of a value"""
    if value is None:
        return ValueKind.NONE
    if isinstance(value, bool):
        return ValueKind.BOOL
    # Before numbers: IntEnum and StrEnum members are unit variants
    if isinstance(value, Enum):
        return ValueKind.ENUM_VARIANT
    if isinstance(value, numbers.Integral):
        return ValueKind.INTEGER
    if isinstance(value, (numbers.Real, Decimal)):
        return ValueKind.FLOAT
    if isinstance(value, _TEXT_TYPES):
        return ValueKind.TEXT
    if isinstance(value, _BYTES_TYPES):
        return ValueKind.BYTES
    if is_record(value):
        return ValueKind.RECORD
    if isinstance(value, Mapping):
        return ValueKind.MAP
    # Sets are unordered and skipped
    if isinstance(value, Set):
        return ValueKind.SET
    if isinstance(value, Sequence):
        return ValueKind.SEQUENCE
    return ValueKind.UNSUPPORTED


def is_record(value: Any) -> bool:
    """Check for values with named fields in declaration order"""
    if isinstance(value, (Record, BaseModel)):
        return True
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return True
    return isinstance(value, tuple) and hasattr(type(value), "_fields")


def record_fields(value: Any) -> Iterator[Tuple[str, Any]]:
    """Yield ``(field_name, field_value)`` pairs of a record in declaration order"""
    if isinstance(value, Record):
        yield from value.fields
    elif isinstance(value, BaseModel):
        for name in type(value).model_fields:
            yield name, getattr(value, name)
    elif dataclasses.is_dataclass(value):
        for f in dataclasses.fields(value):
            yield f.name, getattr(value, f.name)
    else:
        yield from zip(type(value)._fields, value)


def format_number(value: Any) -> str:
    """Render a numeric value as sample text"""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, numbers.Integral):
        return str(int(value))
    if isinstance(value, Decimal):
        if value.is_nan():
            return "NaN"
        if value.is_infinite():
            return "+Inf" if value > 0 else "-Inf"
        return str(value)
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return repr(value)
