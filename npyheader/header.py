"""The header dictionary of a version 1.0 NPY file.

Reading::

    header, offset = read_header(buf)
    header.descr        # RecordDType
    buf[offset:]        # array payload

Writing::

    buf = encode_header(Header(Simple(DType('<f8')), shape=(3,)))
"""
import logging
from dataclasses import dataclass

from npyheader.config import config, parse_alignment
from npyheader.dtype import RecordDType
from npyheader.envelope import (MAGIC_PREFIX, PREFIX_LEN, SUPPORTED_VERSION,
                                header_len_struct, parse_header)
from npyheader.errors import (HeaderEncodingError, HeaderError, HeaderTooLargeError,
                              MalformedHeaderError)
from npyheader.util import ValueTreeViewer, normalize_shape
from npyheader.value import Bool, Integer, List, Map, Value

from typing import Tuple

logger = logging.getLogger(__name__)

HEADER_KEYS = ('descr', 'fortran_order', 'shape')
MAX_HEADER_LEN = 2 ** 16 - 1


@dataclass(frozen=True)
class Header:
    descr: RecordDType
    fortran_order: bool = False
    shape: Tuple[int, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'fortran_order', bool(self.fortran_order))
        object.__setattr__(self, 'shape', normalize_shape(self.shape))

    @classmethod
    def from_value(cls, value: Value) -> 'Header':
        """Interpret a parsed header dictionary. Only ``descr`` is required."""
        if not isinstance(value, Map):
            raise MalformedHeaderError('expected a dictionary, found {}'
                                       .format(type(value).__name__))
        if 'descr' not in value:
            raise MalformedHeaderError("missing 'descr' entry")

        for key in value.keys():
            if key not in HEADER_KEYS:
                logger.debug('ignoring unknown header entry %r', key)

        descr = RecordDType.from_descr(value['descr'])

        fortran_order = value.get('fortran_order', Bool(False))
        if not isinstance(fortran_order, Bool):
            raise MalformedHeaderError("'fortran_order' must be True or False, found {!r}"
                                       .format(fortran_order.to_python()))

        shape = value.get('shape', List())
        if not isinstance(shape, List) or not all(isinstance(n, Integer) for n in shape):
            raise MalformedHeaderError("'shape' must be a tuple of integers, found {!r}"
                                       .format(shape.to_python()))
        try:
            shape = normalize_shape(n.value for n in shape)
        except ValueError as e:
            raise MalformedHeaderError(str(e)) from e

        return cls(descr, fortran_order.value, shape)

    def to_value(self) -> Map:
        return Map({
            'descr': self.descr.to_value(),
            'fortran_order': Bool(self.fortran_order),
            'shape': List(Integer(n) for n in self.shape),
        })

    def to_text(self) -> str:
        """Header dictionary as numpy writes it, without padding."""
        return "{{'descr': {}, 'fortran_order': {!r}, 'shape': {!r}, }}".format(
            self.descr.descr(), self.fortran_order, self.shape)

    @property
    def info(self) -> ValueTreeViewer:
        return ValueTreeViewer(self.to_value())


def encode_header(header: Header) -> bytes:
    """Encode ``header`` with the version 1.0 envelope.

    The text is padded with spaces and terminated by a newline so that the
    payload starts at a multiple of the ``header.alignment`` config value.
    """
    alignment = parse_alignment(config.get('header.alignment'))
    text = header.to_text()
    try:
        # numpy reads version 1.0 headers as latin-1
        text = text.encode('ascii')
    except UnicodeEncodeError as e:
        raise HeaderEncodingError(text[e.start:e.end], e.start) from e
    # room for the terminating newline
    hlen = len(text) + 1
    padlen = -(PREFIX_LEN + hlen) % alignment
    hlen += padlen
    if hlen > MAX_HEADER_LEN:
        raise HeaderTooLargeError(hlen, MAX_HEADER_LEN)
    return b''.join([
        MAGIC_PREFIX,
        bytes(SUPPORTED_VERSION),
        header_len_struct.pack(hlen),
        text,
        b' ' * padlen,
        b'\n',
    ])


def read_header(data) -> Tuple[Header, int]:
    """Read the envelope and header dictionary at the start of ``data``.

    Returns the :class:`Header` and the offset of the array payload.
    """
    value, offset = parse_header(data)
    try:
        header = Header.from_value(value)
    except HeaderError:
        logger.debug('rejected header %r', value.to_python())
        raise
    return header, offset

