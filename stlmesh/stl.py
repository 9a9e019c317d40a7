"""Loading STL models into fixed-point meshes.

STL files do not declare whether they are ASCII or binary. Loading tries
each parser in :data:`PARSERS` against the start of the stream and keeps
the first mesh that is accepted.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from typing import BinaryIO, Callable, List, Optional, Tuple, Union

import numpy as np

from .model import Mesh, MeshCollection
from .parameters import DEFAULT_PARAMETERS, LoaderParameters
from .points import FixedPoint3
from .transform import as_matrix, to_fixed_points

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

HEADER_SIZE = 80
COUNT_SIZE = 4
RECORD_DTYPE = np.dtype(
    [("normal", "<f4", (3,)), ("vertices", "<f4", (3, 3)), ("attribute", "<u2")]
)
RECORD_SIZE = RECORD_DTYPE.itemsize  # 50 bytes

_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class StlFormatError(ValueError):
    """The stream does not hold what the parser expected."""


class StlLoadError(ValueError):
    """No parser accepted the model."""


@dataclass(frozen=True)
class Accepted:
    mesh: Mesh


@dataclass(frozen=True)
class Rejected:
    reason: str


ParseOutcome = Union[Accepted, Rejected]
Parser = Callable[[BinaryIO, Optional[np.ndarray], LoaderParameters], ParseOutcome]


def filter_degenerate(mesh: Mesh) -> Mesh:
    """Clear the faces of a mesh that has no extent along X."""

    extent = mesh.max_xyz() - mesh.min_xyz()
    if mesh.faces and extent.x == 0:
        logger.warning("Mesh with %d faces has zero X extent, clearing it", len(mesh))
        mesh.clear()
    return mesh


def _to_point(row: np.ndarray) -> FixedPoint3:
    return FixedPoint3(int(row[0]), int(row[1]), int(row[2]))


def _parse_coordinate(token: str) -> float:
    if not _NUMBER.fullmatch(token):
        raise StlFormatError(f"Malformed coordinate: {token!r}")
    return float(token)


def _read_ascii(stream: BinaryIO, matrix: np.ndarray, parameters: LoaderParameters) -> Mesh:
    coords: List[Tuple[float, float, float]] = []
    for line_number, raw in enumerate(stream):
        if line_number > parameters.ascii_probe_lines and len(coords) < 3:
            raise StlFormatError(
                f"No triangle in the first {parameters.ascii_probe_lines} lines"
            )
        parts = raw.decode("utf-8", errors="replace").split()
        if not parts or parts[0] != "vertex":
            continue
        if len(parts) < 4:
            raise StlFormatError(f"Malformed vertex line {line_number + 1}")
        coords.append(
            (
                _parse_coordinate(parts[1]),
                _parse_coordinate(parts[2]),
                _parse_coordinate(parts[3]),
            )
        )

    # A trailing partial triangle is dropped.
    usable = len(coords) - len(coords) % 3
    mesh = Mesh()
    if usable:
        points = to_fixed_points(np.array(coords[:usable]), matrix, parameters.units_per_mm)
        for tri in points.reshape(-1, 3, 3):
            mesh.add_face_triangle(_to_point(tri[0]), _to_point(tri[1]), _to_point(tri[2]))

    if len(mesh) <= parameters.ascii_min_faces:
        raise StlFormatError(f"Only {len(mesh)} triangles found in ASCII STL")
    return mesh


def _read_binary(stream: BinaryIO, matrix: np.ndarray, parameters: LoaderParameters) -> Mesh:
    data = stream.read()
    if len(data) < HEADER_SIZE + COUNT_SIZE:
        raise StlFormatError("STL header truncated")

    count = int(np.frombuffer(data, dtype="<u4", count=1, offset=HEADER_SIZE)[0])
    expected_size = HEADER_SIZE + COUNT_SIZE + count * RECORD_SIZE
    if len(data) < expected_size:
        raise StlFormatError(
            f"Binary STL declares {count} triangles ({expected_size} bytes) "
            f"but holds {len(data)} bytes"
        )
    if count == 0:
        raise StlFormatError("Binary STL declares no triangles")

    records = np.frombuffer(
        data, dtype=RECORD_DTYPE, count=count, offset=HEADER_SIZE + COUNT_SIZE
    )
    points = to_fixed_points(records["vertices"], matrix, parameters.units_per_mm)

    mesh = Mesh()
    for tri in points.reshape(-1, 3, 3):
        # Binary facets are stored with the opposite winding.
        mesh.add_face_triangle(_to_point(tri[2]), _to_point(tri[1]), _to_point(tri[0]))
    return mesh


def parse_ascii(
    stream: BinaryIO,
    matrix: Optional[np.ndarray] = None,
    parameters: LoaderParameters = DEFAULT_PARAMETERS,
) -> ParseOutcome:
    """Parse ``vertex`` records from an ASCII STL stream."""

    try:
        mesh = _read_ascii(stream, as_matrix(matrix), parameters)
    except StlFormatError as exc:
        return Rejected(str(exc))
    return Accepted(filter_degenerate(mesh))


def parse_binary(
    stream: BinaryIO,
    matrix: Optional[np.ndarray] = None,
    parameters: LoaderParameters = DEFAULT_PARAMETERS,
) -> ParseOutcome:
    """Parse a binary STL stream, reading it fully into memory."""

    try:
        mesh = _read_binary(stream, as_matrix(matrix), parameters)
    except StlFormatError as exc:
        return Rejected(str(exc))
    return Accepted(filter_degenerate(mesh))


PARSERS: Tuple[Parser, ...] = (parse_ascii, parse_binary)


def load_model_from_stream(
    collection: MeshCollection,
    stream: BinaryIO,
    matrix: Optional[np.ndarray] = None,
    parameters: LoaderParameters = DEFAULT_PARAMETERS,
) -> bool:
    """Append the mesh held in ``stream`` to ``collection``.

    Returns ``False`` and leaves ``collection`` untouched when no parser
    accepts the data.
    """

    matrix = as_matrix(matrix)
    for parser in PARSERS:
        stream.seek(0)
        outcome = parser(stream, matrix, parameters)
        if isinstance(outcome, Accepted):
            collection.append(outcome.mesh)
            logger.info("%s loaded mesh with %d faces", parser.__name__, len(outcome.mesh))
            return True
        logger.debug("%s rejected input: %s", parser.__name__, outcome.reason)
    return False


def load_model_from_file(
    collection: MeshCollection,
    path: PathLike,
    matrix: Optional[np.ndarray] = None,
    parameters: LoaderParameters = DEFAULT_PARAMETERS,
) -> bool:
    """Load an STL file into ``collection``. See :func:`load_model_from_stream`."""

    with open(path, "rb") as fh:
        loaded = load_model_from_stream(collection, fh, matrix, parameters)
    if not loaded:
        logger.debug("No STL parser accepted %s", os.fspath(path))
    return loaded


def load_stl(
    path: PathLike,
    matrix: Optional[np.ndarray] = None,
    parameters: LoaderParameters = DEFAULT_PARAMETERS,
) -> MeshCollection:
    """Load a single STL file into a new collection."""

    collection = MeshCollection()
    if not load_model_from_file(collection, path, matrix, parameters):
        raise StlLoadError(f"Could not read {os.fspath(path)} as ASCII or binary STL")
    return collection
