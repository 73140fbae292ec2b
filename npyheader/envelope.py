"""Fixed binary prefix of an NPY file: magic string, version and header length."""
import logging
import struct

from numcodecs.compat import ensure_bytes

from npyheader.errors import (InvalidMagicError, TruncatedInputError,
                              UnsupportedVersionError)
from npyheader.parser import parse_value
from npyheader.value import Value

from typing import Tuple

logger = logging.getLogger(__name__)

MAGIC_PREFIX = b"\x93NUMPY"
MAGIC_LEN = len(MAGIC_PREFIX) + 2
SUPPORTED_VERSION = (1, 0)

# little-endian u16 header length
header_len_struct = struct.Struct("<H")
PREFIX_LEN = MAGIC_LEN + header_len_struct.size


def read_magic(data) -> Tuple[int, int]:
    """Check the magic string and return the ``(major, minor)`` version pair.

    Only version 1.0 is accepted.
    """
    data = ensure_bytes(data)
    found = data[:len(MAGIC_PREFIX)]
    if found != MAGIC_PREFIX[:len(found)]:
        raise InvalidMagicError(MAGIC_PREFIX, found)
    if len(data) < MAGIC_LEN:
        raise TruncatedInputError(len(data), MAGIC_LEN - len(data))
    major, minor = data[len(MAGIC_PREFIX)], data[len(MAGIC_PREFIX) + 1]
    if (major, minor) != SUPPORTED_VERSION:
        raise UnsupportedVersionError(major, minor)
    return major, minor


def parse_header(data) -> Tuple[Value, int]:
    """Parse the envelope and header literal at the start of ``data``.

    Parameters
    ----------
    data : bytes-like
        The start of an NPY file. Bytes beyond the header are ignored.

    Returns
    -------
    value : Value
        The parsed header literal, normally a :class:`npyheader.value.Map`.
    consumed : int
        Number of bytes taken by the envelope and the header, i.e. the
        offset of the array payload.
    """
    data = ensure_bytes(data)
    read_magic(data)
    if len(data) < PREFIX_LEN:
        raise TruncatedInputError(len(data), PREFIX_LEN - len(data))
    header_len, = header_len_struct.unpack_from(data, MAGIC_LEN)
    end = PREFIX_LEN + header_len
    if len(data) < end:
        raise TruncatedInputError(len(data), end - len(data))
    # offsets in parse errors are relative to the start of the file
    value = parse_value(data[:end], PREFIX_LEN)
    logger.debug("read version %d.%d header of %d bytes", *SUPPORTED_VERSION, header_len)
    return value, end
