"""Command line interface for inspecting STL models."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Iterable

from .logging_config import setup_logging
from .model import MeshCollection
from .parameters import load_parameters
from .stl import load_model_from_file
from .transform import identity, parse_matrix

logger = logging.getLogger(__name__)


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Load STL models into fixed-point meshes")
    parser.add_argument("stl", type=Path, nargs="+", help="Input STL model(s)")
    parser.add_argument(
        "-m",
        "--matrix",
        default=None,
        help="16 comma separated values (row-major) of the transform applied to every model",
    )
    parser.add_argument(
        "--params",
        type=Path,
        default=None,
        help="Optional JSON file overriding the loader parameters",
    )
    parser.add_argument(
        "--metadata",
        type=Path,
        default=None,
        help="Write the mesh summary JSON here instead of stdout",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def summarize(collection: MeshCollection) -> Dict[str, Any]:
    return {
        "meshes": [
            {
                "faces": len(mesh),
                "min_um": mesh.min_xyz().as_tuple(),
                "max_um": mesh.max_xyz().as_tuple(),
            }
            for mesh in collection
        ],
        "min_um": collection.min_xyz().as_tuple(),
        "max_um": collection.max_xyz().as_tuple(),
    }


def run(argv: Iterable[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(verbose=args.verbose)

    try:
        parameters = load_parameters(args.params)
    except (TypeError, ValueError) as exc:
        logger.error("Invalid loader parameters in %s: %s", args.params, exc)
        return 1
    try:
        matrix = parse_matrix(args.matrix) if args.matrix else identity()
    except ValueError as exc:
        logger.error("Invalid matrix %r: %s", args.matrix, exc)
        return 1

    collection = MeshCollection()
    for path in args.stl:
        if not load_model_from_file(collection, path, matrix, parameters):
            logger.error("Failed to load %s as ASCII or binary STL", path)
            return 1

    summary = json.dumps(summarize(collection), indent=2)
    if args.metadata:
        args.metadata.write_text(summary)
    else:
        sys.stdout.write(summary + "\n")
    return 0


def main() -> None:
    raise SystemExit(run())


if __name__ == "__main__":  # pragma: no cover
    main()
