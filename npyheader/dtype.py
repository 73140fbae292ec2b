"""Element type model for NPY arrays and the ``descr`` header entry.

A :class:`RecordDType` is either :class:`Simple`, one type shared by every
element, or :class:`Structured`, an ordered sequence of named fields. Field
order is the on-disk order of the fields within a record.

The two directions of the codec are :meth:`RecordDType.descr`, which
produces the exact text numpy writes into a header, and
:meth:`RecordDType.from_descr`, which interprets a parsed
:class:`~npyheader.value.Value`.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np

from npyheader.config import config
from npyheader.errors import MalformedFieldError, UnsupportedDescriptorError
from npyheader.util import normalize_shape
from npyheader.value import Integer, List, String, Value, value_type_name

from typing import Iterable, Tuple

logger = logging.getLogger(__name__)

# descr strings are single-quoted and the literal grammar has no escapes
_QUOTE = "'"


@dataclass(frozen=True)
class DType:
    """One element encoding, e.g. ``'<i4'``, with an optional subarray shape.

    ``ty`` starts with a byte-order character (``<``, ``>``, ``=`` or ``|``)
    followed by a kind letter and a byte width. The kind letter is passed
    through unchecked. An empty ``shape`` means a scalar.
    """
    ty: str
    shape: Tuple[int, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "shape", normalize_shape(self.shape))

    def to_value(self, name: str) -> List:
        """Field tuple for this type, as it appears in a structured descr."""
        if not self.shape:
            return List((String(name), String(self.ty)))
        return List((String(name), String(self.ty),
                     List(Integer(n) for n in self.shape)))


class RecordDType(ABC):
    """Layout of one array record. See :class:`Simple` and :class:`Structured`."""

    @abstractmethod
    def descr(self) -> str:
        ...

    @abstractmethod
    def to_value(self) -> Value:
        ...

    @abstractmethod
    def to_numpy(self) -> np.dtype:
        ...

    @property
    def itemsize(self) -> int:
        """Size in bytes of one record."""
        return self.to_numpy().itemsize

    @staticmethod
    def from_descr(descr: Value) -> "RecordDType":
        """Create a record dtype from a parsed ``descr`` value.

        A :class:`~npyheader.value.String` becomes :class:`Simple`, a
        :class:`~npyheader.value.List` of field tuples becomes
        :class:`Structured`. Field shapes are dropped unless the
        ``descr.field_shapes`` config option is set.

        Raises
        ------
        MalformedFieldError
            If a field entry is not a list starting with two strings.
        UnsupportedDescriptorError
            For any other kind of value.
        """
        if isinstance(descr, String):
            if not descr.text:
                raise UnsupportedDescriptorError(descr.text)
            return Simple(DType(descr.text))
        elif isinstance(descr, List):
            return Structured(_fields_from_list(descr))
        else:
            raise UnsupportedDescriptorError(descr.to_python())

    @staticmethod
    def from_numpy(dtype) -> "RecordDType":
        """Create a record dtype from anything ``numpy.dtype`` accepts."""
        dtype = np.dtype(dtype)
        if dtype.names is None:
            return Simple(DType(dtype.str))
        fields = []
        for entry in dtype.descr:
            name, ty = entry[0], entry[1]
            if not isinstance(name, str) or not isinstance(ty, str):
                # titled or nested structured fields
                raise UnsupportedDescriptorError(entry)
            shape = entry[2] if len(entry) > 2 else ()
            fields.append((name, DType(ty, shape)))
        return Structured(fields)


@dataclass(frozen=True)
class Simple(RecordDType):
    dtype: DType

    def __post_init__(self):
        # the descr string has no way to carry a shape
        if self.dtype.shape:
            raise UnsupportedDescriptorError(self.dtype)
        if _QUOTE in self.dtype.ty:
            raise UnsupportedDescriptorError(self.dtype.ty)

    def descr(self) -> str:
        return "'{}'".format(self.dtype.ty)

    def to_value(self) -> String:
        return String(self.dtype.ty)

    def to_numpy(self) -> np.dtype:
        return np.dtype(self.dtype.ty)


@dataclass(frozen=True)
class Structured(RecordDType):
    fields: Tuple[Tuple[str, DType], ...]

    def __post_init__(self):
        object.__setattr__(self, "fields",
                           tuple((name, dtype) for name, dtype in self.fields))
        for name, dtype in self.fields:
            if _QUOTE in name or _QUOTE in dtype.ty:
                raise MalformedFieldError((name, dtype.ty),
                                          "names and types cannot contain a single quote")

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.fields)

    def descr(self) -> str:
        # numpy writes this with a trailing comma after every field and
        # every shape dimension
        parts = ["["]
        for name, dtype in self.fields:
            if not dtype.shape:
                parts.append("('{}', '{}'), ".format(name, dtype.ty))
            else:
                shape = "".join("{},".format(n) for n in dtype.shape)
                parts.append("('{}', '{}', ({})), ".format(name, dtype.ty, shape))
        parts.append("]")
        return "".join(parts)

    def to_value(self) -> List:
        return List(dtype.to_value(name) for name, dtype in self.fields)

    def to_numpy(self) -> np.dtype:
        spec = []
        for name, dtype in self.fields:
            if dtype.shape:
                spec.append((name, dtype.ty, dtype.shape))
            else:
                spec.append((name, dtype.ty))
        return np.dtype(spec)


def _field_shape(entry: List) -> Tuple[int, ...]:
    shape = entry[2]
    if not isinstance(shape, List) or not all(isinstance(n, Integer) for n in shape):
        raise MalformedFieldError(entry.to_python(), "shape must be a tuple of integers")
    try:
        return normalize_shape(n.value for n in shape)
    except ValueError as e:
        raise MalformedFieldError(entry.to_python(), str(e)) from e


def _convert_field(entry: Value) -> Tuple[str, DType]:
    if not isinstance(entry, List):
        raise MalformedFieldError(entry.to_python(),
                                  "expected a tuple, found {}".format(value_type_name(entry)))
    if len(entry) < 2:
        raise MalformedFieldError(entry.to_python(), "expected at least a name and a type")
    name, ty = entry[0], entry[1]
    if not isinstance(name, String) or not isinstance(ty, String) or not ty.text:
        raise MalformedFieldError(entry.to_python(), "name and type must be strings")
    shape: Tuple[int, ...] = ()
    if len(entry) > 2:
        if config.get("descr.field_shapes"):
            shape = _field_shape(entry)
        else:
            logger.debug("ignoring shape of field %r", name.text)
    return name.text, DType(ty.text, shape)


def _fields_from_list(entries: Iterable[Value]) -> Tuple[Tuple[str, DType], ...]:
    fields = []
    seen = set()
    unique = config.get("descr.unique_names")
    for entry in entries:
        name, dtype = _convert_field(entry)
        if unique and name in seen:
            raise MalformedFieldError(entry.to_python(), "duplicate field name")
        seen.add(name)
        fields.append((name, dtype))
    return tuple(fields)
