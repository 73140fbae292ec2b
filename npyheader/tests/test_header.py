import io

import numpy as np
import pytest

from npyheader.config import config
from npyheader.dtype import DType, RecordDType, Simple, Structured
from npyheader.envelope import MAGIC_PREFIX
from npyheader.errors import (HeaderEncodingError, HeaderError, HeaderTooLargeError,
                              MalformedHeaderError,
                              UnsupportedDescriptorError)
from npyheader.header import Header, encode_header, read_header
from npyheader.parser import loads


def test_to_text():
    header = Header(Simple(DType('<f8')), shape=(3,))
    assert "{'descr': '<f8', 'fortran_order': False, 'shape': (3,), }" == header.to_text()

    header = Header(Structured([('a', DType('<i4')), ('b', DType('<f4'))]),
                    fortran_order=True, shape=(2, 5))
    expect = ("{'descr': [('a', '<i4'), ('b', '<f4'), ], "
              "'fortran_order': True, 'shape': (2, 5), }")
    assert expect == header.to_text()

    assert "'shape': (), }" in Header(Simple(DType('|u1'))).to_text()


def test_encode_header():
    header = Header(Simple(DType('<f8')), shape=(3,))
    buf = encode_header(header)
    assert buf.startswith(MAGIC_PREFIX + b'\x01\x00')
    assert buf.endswith(b' \n')
    assert 0 == len(buf) % 64

    decoded, offset = read_header(buf)
    assert header == decoded
    assert len(buf) == offset


def test_encode_header_alignment():
    header = Header(Simple(DType('<f8')), shape=(3,))
    with config.set({'header.alignment': 16}):
        buf = encode_header(header)
    assert 0 == len(buf) % 16
    assert 80 == len(buf)
    assert header == read_header(buf)[0]

    with config.set({'header.alignment': 0}):
        with pytest.raises(ValueError):
            encode_header(header)


def test_encode_header_too_large():
    fields = [('f{}'.format(i), DType('<f8')) for i in range(5000)]
    with pytest.raises(HeaderTooLargeError):
        encode_header(Header(Structured(fields), shape=(1,)))


@pytest.mark.parametrize('a', [
    np.arange(10, dtype='<f8'),
    np.zeros((2, 3), dtype='>i2'),
    np.array(42, dtype='<u4'),
    np.asfortranarray(np.ones((3, 4), dtype='<f4')),
    np.array([(1, 2.5, 4), (2, 3.1, 5)],
             dtype=[('a', '<i4'), ('b', '<f4'), ('c', '<i8')]),
])
def test_numpy_reads_encoded_header(a):
    fortran_order = a.flags.f_contiguous and not a.flags.c_contiguous
    header = Header(RecordDType.from_numpy(a.dtype), fortran_order, a.shape)
    buf = encode_header(header) + a.tobytes(order='F' if fortran_order else 'C')

    f = io.BytesIO(buf)
    assert (1, 0) == np.lib.format.read_magic(f)
    shape, fortran, dtype = np.lib.format.read_array_header_1_0(f)
    assert a.shape == shape
    assert fortran_order == fortran
    assert a.dtype == dtype

    b = np.load(io.BytesIO(buf))
    assert a.dtype == b.dtype
    assert a.shape == b.shape
    assert np.all(a == b)


def test_read_numpy_written_header():
    a = np.array([(1, 2.5, 4), (2, 3.1, 5)],
                 dtype=[('a', '<i4'), ('b', '<f4'), ('c', '<i8')])
    f = io.BytesIO()
    np.save(f, a)
    buf = f.getvalue()

    header, offset = read_header(buf)
    expect = Structured([
        ('a', DType('<i4')),
        ('b', DType('<f4')),
        ('c', DType('<i8')),
    ])
    assert expect == header.descr
    assert (2,) == header.shape
    assert not header.fortran_order
    assert a.tobytes() == buf[offset:]
    assert a.dtype == header.descr.to_numpy()


def test_read_numpy_written_fortran_header():
    a = np.asfortranarray(np.ones((3, 4)))
    f = io.BytesIO()
    np.save(f, a)
    header, offset = read_header(f.getvalue())
    assert header.fortran_order
    assert (3, 4) == header.shape


def test_from_value_defaults():
    header = Header.from_value(loads("{'descr': '<f8'}"))
    assert Header(Simple(DType('<f8'))) == header
    assert () == header.shape
    assert not header.fortran_order

    # unknown entries are ignored
    header = Header.from_value(loads("{'descr': '<f8', 'shape': (2,), 'extra': 1}"))
    assert (2,) == header.shape


@pytest.mark.parametrize('text', [
    "'<f8'",
    "['<f8']",
    "{'shape': (3,)}",
    "{'descr': '<f8', 'fortran_order': 0}",
    "{'descr': '<f8', 'shape': 3}",
    "{'descr': '<f8', 'shape': ('3',)}",
    "{'descr': '<f8', 'shape': (-3,)}",
])
def test_malformed_header(text):
    with pytest.raises(MalformedHeaderError):
        Header.from_value(loads(text))


def test_unsupported_descr_in_header():
    with pytest.raises(UnsupportedDescriptorError):
        Header.from_value(loads("{'descr': 8}"))


def test_header_info():
    header = Header(Simple(DType('<f8')), shape=(3,))
    text = str(header.info)
    lines = text.splitlines()
    assert 'header Map(3)' == lines[0]
    assert 5 == len(lines)
    assert any(line.endswith("'descr': '<f8'") for line in lines)
    assert any(line.endswith("'fortran_order': False") for line in lines)
    assert any(line.endswith("'shape' List(1)") for line in lines)
    assert any(line.endswith("[0]: 3") for line in lines)

    ascii_text = bytes(header.info).decode('ascii')
    assert '+--' in ascii_text
    assert 'header Map(3)' == repr(header.info).splitlines()[0]


def test_encode_header_rejects_non_ascii():
    header = Header(RecordDType.from_numpy([('\xe9', '<i4')]), shape=(2,))
    with pytest.raises(HeaderEncodingError) as excinfo:
        encode_header(header)
    assert isinstance(excinfo.value, HeaderError)
    # the text itself is still available
    assert "('\xe9', '<i4')" in header.to_text()


def test_fortran_order_numpy_bool():
    header = Header(Simple(DType('<f8')), fortran_order=np.bool_(True), shape=(2, 2))
    assert header.fortran_order is True
    assert "'fortran_order': True," in header.to_text()

    buf = encode_header(header)
    assert header == read_header(buf)[0]
    f = io.BytesIO(buf)
    np.lib.format.read_magic(f)
    assert ((2, 2), True, np.dtype('<f8')) == np.lib.format.read_array_header_1_0(f)
