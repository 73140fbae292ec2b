from __future__ import annotations

import sys

from donfig import Config

config = Config(
    "npyheader",
    defaults=[
        {
            "parser": {"max_depth": 64},
            "descr": {"field_shapes": False, "unique_names": False},
            "header": {"alignment": 64},
        }
    ],
)


def parse_alignment(data) -> int:
    alignment = int(data)
    if alignment < 1:
        msg = f"Expected a positive header alignment, got {data} instead."
        raise ValueError(msg)
    return alignment


def parse_max_depth(data) -> int:
    depth = int(data)
    if depth < 0:
        msg = f"Expected a non-negative nesting depth, got {data} instead."
        raise ValueError(msg)
    # each nesting level costs a few interpreter frames
    return min(depth, sys.getrecursionlimit() // 8)
