"""Command line interface."""

from .app import EXIT_FAILURE, EXIT_SUCCESS, main

__all__ = [
    "EXIT_FAILURE",
    "EXIT_SUCCESS",
    "main",
]
