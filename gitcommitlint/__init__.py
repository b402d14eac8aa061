"""Commit message linting for conventional headers and tracked issue references."""

__version__ = "0.1.0"
