import numbers

from asciitree import BoxStyle, LeftAligned
from asciitree.traversal import Traversal

from npyheader.value import List, Map

from typing import Tuple


def normalize_shape(shape) -> Tuple[int, ...]:
    """Convenience function to normalize a `shape` argument."""

    if shape is None:
        raise TypeError('shape is None')

    # handle 1D convenience form
    if isinstance(shape, numbers.Integral):
        shape = (int(shape),)

    # normalize
    shape = tuple(int(s) for s in shape)
    if any(s < 0 for s in shape):
        raise ValueError('shape must be non-negative, got {!r}'.format(shape))
    return shape


class TreeNode(object):

    def __init__(self, label, value, depth=0, level=None):
        self.label = label
        self.value = value
        self.depth = depth
        self.level = level

    def get_children(self):
        if self.level is not None and self.depth >= self.level:
            return []
        depth = self.depth + 1
        if isinstance(self.value, Map):
            return [TreeNode(repr(k), v, depth=depth, level=self.level)
                    for k, v in sorted(self.value.entries.items())]
        if isinstance(self.value, List):
            return [TreeNode('[{}]'.format(i), v, depth=depth, level=self.level)
                    for i, v in enumerate(self.value)]
        return []

    def get_text(self):
        if isinstance(self.value, (Map, List)):
            return '{} {}({})'.format(self.label, type(self.value).__name__, len(self.value))
        return '{}: {!r}'.format(self.label, self.value.to_python())


class TreeTraversal(Traversal):

    def get_children(self, node):
        return node.get_children()

    def get_root(self, tree):
        return tree

    def get_text(self, node):
        return node.get_text()


class ValueTreeViewer(object):
    """Text rendering of a parsed header value, one node per line."""

    def __init__(self, value, name='header', level=None):

        self.value = value
        self.name = name
        self.level = level

        self.text_kwargs = dict(
            horiz_len=2,
            label_space=1,
            indent=1
        )

        self.bytes_kwargs = dict(
            UP_AND_RIGHT="+",
            HORIZONTAL="-",
            VERTICAL="|",
            VERTICAL_AND_RIGHT="+"
        )

        self.unicode_kwargs = dict(
            UP_AND_RIGHT="└",
            HORIZONTAL="─",
            VERTICAL="│",
            VERTICAL_AND_RIGHT="├"
        )

    def _draw(self, gfx):
        drawer = LeftAligned(
            traverse=TreeTraversal(),
            draw=BoxStyle(gfx=gfx, **self.text_kwargs)
        )
        return drawer(TreeNode(self.name, self.value, level=self.level))

    def __bytes__(self):
        return self._draw(self.bytes_kwargs).encode()

    def __str__(self):
        return self._draw(self.unicode_kwargs)

    def __repr__(self):
        return self.__str__()
