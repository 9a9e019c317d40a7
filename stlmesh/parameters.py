"""Tunable constants for the STL loaders."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .transform import UNITS_PER_MM


@dataclass(frozen=True)
class LoaderParameters:
    """Settings shared by the ASCII and binary parsers."""

    units_per_mm: int = UNITS_PER_MM
    # ASCII detection gives up after this many lines without a triangle.
    ascii_probe_lines: int = 100
    # An ASCII mesh must have strictly more faces than this.
    ascii_min_faces: int = 3


DEFAULT_PARAMETERS = LoaderParameters()


def load_parameters(path: Optional[Union[str, Path]]) -> LoaderParameters:
    """Read overrides for :class:`LoaderParameters` from a JSON object."""

    if path is None:
        return DEFAULT_PARAMETERS
    with Path(path).open("r", encoding="utf-8") as fp:
        data = json.load(fp)
    return LoaderParameters(**data)
