"""Utility module for noddy."""

from .process import spawn_detached

__all__ = ["spawn_detached"]
