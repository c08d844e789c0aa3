"""
Top-level package for goco.

goco generates a Conventional Commit message for the current changes of
a git repository using an AI backend and commits with it. The CLI entry
point lives in :mod:`goco.cli`.
"""

__all__ = ["__version__"]

__version__ = "0.3.0"
