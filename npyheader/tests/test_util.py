import pytest

from npyheader.parser import loads
from npyheader.util import ValueTreeViewer, normalize_shape


def test_normalize_shape():
    assert (100,) == normalize_shape((100,))
    assert (100,) == normalize_shape([100])
    assert (100,) == normalize_shape(100)
    assert () == normalize_shape(())
    with pytest.raises(TypeError):
        normalize_shape(None)
    with pytest.raises(ValueError):
        normalize_shape('foo')
    with pytest.raises(ValueError):
        normalize_shape((2, -1))


def test_tree_viewer():
    value = loads("[('a', '<i4'), ('b', '<f8', (2,))]")
    lines = str(ValueTreeViewer(value, name='descr')).splitlines()
    assert 'descr List(2)' == lines[0]
    assert 9 == len(lines)
    assert any(line.endswith("[0]: 'a'") for line in lines)
    assert any(line.endswith("[2] List(1)") for line in lines)


def test_tree_viewer_level():
    value = loads("[('a', '<i4'), ('b', '<f8', (2,))]")
    lines = str(ValueTreeViewer(value, name='descr', level=1)).splitlines()
    assert 3 == len(lines)
    assert any(line.endswith("[1] List(3)") for line in lines)


def test_tree_viewer_scalar():
    assert "header: '<f8'" == str(ValueTreeViewer(loads("'<f8'")))
    assert b"header: 3" == bytes(ValueTreeViewer(loads("3")))
