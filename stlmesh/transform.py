"""Conversion of model-space vertices into fixed-point micrometres."""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from .points import FixedPoint3

UNITS_PER_MM = 1000  # micrometres


def identity() -> np.ndarray:
    return np.eye(4, dtype=np.float64)


def as_matrix(matrix: Optional[np.ndarray]) -> np.ndarray:
    """Return ``matrix`` as a float64 4x4 array, or the identity for ``None``."""

    if matrix is None:
        return identity()
    array = np.asarray(matrix, dtype=np.float64)
    if array.shape != (4, 4):
        raise ValueError(f"Transform must be a 4x4 matrix, got shape {array.shape}")
    return array


def parse_matrix(text: str) -> np.ndarray:
    """Build a transform from 16 comma separated values.

    The values are a row-vector matrix written row by row, so the
    translation is in values 12 to 14.
    They are transposed into the column-vector layout used by
    :func:`to_fixed_points`. Entries that are not numbers keep the value of
    the identity matrix.
    """

    values = text.split(",")
    if len(values) < 16:
        raise ValueError(f"Expected 16 matrix values, got {len(values)}")

    matrix = identity()
    for i in range(4):
        for j in range(4):
            try:
                matrix[j, i] = float(values[i * 4 + j])
            except ValueError:
                continue
    return matrix


def to_fixed_points(
    vertices: np.ndarray,
    matrix: Optional[np.ndarray] = None,
    units_per_mm: int = UNITS_PER_MM,
) -> np.ndarray:
    """Transform and quantise an array of vertices.

    Parameters
    ----------
    vertices:
        Array of shape ``(N, 3)`` in millimetres.
    matrix:
        Affine transform applied as ``matrix @ [x, y, z, 1]``. ``None`` is
        the identity.
    units_per_mm:
        Scale applied after the transform.

    Returns
    -------
    np.ndarray
        ``(N, 3)`` int64 array, truncated toward zero.
    """

    m = as_matrix(matrix)
    points = np.asarray(vertices, dtype=np.float64).reshape(-1, 3)
    transformed = points @ m[:3, :3].T + m[:3, 3]
    # Out of range and non-finite values are the caller's responsibility.
    with np.errstate(invalid="ignore", over="ignore"):
        return np.trunc(transformed * units_per_mm).astype(np.int64)


def to_fixed_point(
    vertex: Sequence[float],
    matrix: Optional[np.ndarray] = None,
    units_per_mm: int = UNITS_PER_MM,
) -> FixedPoint3:
    """Transform a single vertex into a :class:`FixedPoint3`."""

    x, y, z = to_fixed_points(np.asarray(vertex), matrix, units_per_mm)[0]
    return FixedPoint3(int(x), int(y), int(z))
