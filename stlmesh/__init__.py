"""Fixed-point STL mesh loading."""

from .cli import main
from .model import Face, Mesh, MeshCollection
from .parameters import DEFAULT_PARAMETERS, LoaderParameters, load_parameters
from .points import FixedPoint3
from .stl import (
    StlFormatError,
    StlLoadError,
    load_model_from_file,
    load_model_from_stream,
    load_stl,
)
from .transform import parse_matrix, to_fixed_point

__all__ = [
    "main",
    "Face",
    "Mesh",
    "MeshCollection",
    "DEFAULT_PARAMETERS",
    "LoaderParameters",
    "load_parameters",
    "FixedPoint3",
    "StlFormatError",
    "StlLoadError",
    "load_model_from_file",
    "load_model_from_stream",
    "load_stl",
    "parse_matrix",
    "to_fixed_point",
]
