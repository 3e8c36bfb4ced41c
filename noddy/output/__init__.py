"""Output rendering for action responses."""

from .render import render_human, render_json

__all__ = ["render_human", "render_json"]
