"""Generic nodes produced by the header literal parser.

Brackets and parentheses both produce :class:`List`, so a tuple and a list
of the same items compare equal after parsing.
"""
from dataclasses import dataclass, field

from typing import Any, Dict, Tuple, Union


@dataclass(frozen=True)
class String:
    text: str

    def to_python(self) -> str:
        return self.text


@dataclass(frozen=True)
class Integer:
    value: int

    def to_python(self) -> int:
        return self.value


@dataclass(frozen=True)
class Bool:
    value: bool

    def to_python(self) -> bool:
        return self.value


@dataclass(frozen=True)
class List:
    items: Tuple["Value", ...] = ()

    def __post_init__(self):
        # accept any iterable, store a tuple
        object.__setattr__(self, "items", tuple(self.items))

    def __len__(self):
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __getitem__(self, index):
        return self.items[index]

    def to_python(self) -> list:
        return [item.to_python() for item in self.items]


@dataclass(frozen=True)
class Map:
    entries: Dict[str, "Value"] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "entries", dict(self.entries))

    def __len__(self):
        return len(self.entries)

    def __contains__(self, key):
        return key in self.entries

    def __getitem__(self, key):
        return self.entries[key]

    def get(self, key, default=None):
        return self.entries.get(key, default)

    def keys(self):
        return self.entries.keys()

    def to_python(self) -> Dict[str, Any]:
        return {k: v.to_python() for k, v in self.entries.items()}


Value = Union[String, Integer, Bool, List, Map]


def value_type_name(value) -> str:
    """Short name of a node's kind, used in error messages."""
    return type(value).__name__
