"""Entry point for running the STL loader from a source checkout."""

from stlmesh.cli import main


if __name__ == "__main__":
    main()
