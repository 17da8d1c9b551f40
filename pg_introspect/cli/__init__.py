"""Command line interface."""

from .introspect import cli

__all__ = ["cli"]
