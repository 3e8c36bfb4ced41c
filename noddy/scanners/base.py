"""Shared pieces for discovery sources."""

from dataclasses import dataclass
from typing import Callable

from pydantic import ValidationError

from noddy.errors import EntryInvalid
from noddy.models import DiscoveredApp, Source, MAX_DISPLAY_NAME_LENGTH


@dataclass(frozen=True)
class DiscoverySource:
    """A named, independently failing discovery mechanism."""
    
    name: str
    discover: Callable[[], list[DiscoveredApp]]


def make_app(name: str, display_name: str, path: str, source: Source) -> DiscoveredApp | None:
    """Build a DiscoveredApp, or None when the entry fails validation."""
    try:
        return DiscoveredApp(name=name, display_name=display_name, path=path, source=source)
    except ValidationError:
        return None


def checked_display_name(value: object) -> str:
    """
    Trimmed display name of a registry or shortcut entry.
    
    Raises:
        EntryInvalid: If the value is not a non-empty string of at most
            MAX_DISPLAY_NAME_LENGTH characters
    """
    if not isinstance(value, str):
        raise EntryInvalid("Display name is not a string")
    display_name = value.strip()
    if not display_name or len(display_name) > MAX_DISPLAY_NAME_LENGTH:
        raise EntryInvalid(f"Unusable display name: {display_name[:40]!r}")
    return display_name
