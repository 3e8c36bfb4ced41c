"""Merging discovered apps into the read-only lookup registry."""

import logging
from typing import Iterable, Mapping

from noddy.models import AppRegistry, DiscoveredApp, Source


logger = logging.getLogger(__name__)

SYSTEM_FALLBACKS = {
    "notepad": "notepad.exe",
    "explorer": "explorer.exe",
    "cmd": "cmd.exe",
}


def normalize_app_name(name: str) -> str:
    """
    Project a name onto its lookup key: lowercase ASCII letters and digits.
    
    Example:
        >>> normalize_app_name("µTorrent (64-bit)")
        'torrent64bit'
    """
    return "".join(c for c in name.lower() if c.isascii() and c.isalnum())


def dedupe_by_name(apps: Iterable[DiscoveredApp]) -> list[DiscoveredApp]:
    """Drop entries whose raw name was already seen, keeping discovery order."""
    seen: set[str] = set()
    unique = []
    for app in apps:
        if app.name in seen:
            continue
        seen.add(app.name)
        unique.append(app)
    return unique


def with_fallbacks(apps: list[DiscoveredApp], fallbacks: Mapping[str, str]) -> list[DiscoveredApp]:
    """Append system utilities whose raw name was not discovered."""
    merged = list(apps)
    present = {app.name for app in merged}
    for name, path in fallbacks.items():
        if name in present:
            continue
        merged.append(DiscoveredApp(name=name, display_name=name, path=path, source=Source.FALLBACK))
        present.add(name)
        logger.info("Added fallback app: %s -> %s", name, path)
    return merged


def build_app_registry(
    apps: Iterable[DiscoveredApp],
    fallbacks: Mapping[str, str] | None = None
) -> AppRegistry:
    """
    Build the registry from discovered apps.
    
    Steps: append missing system fallbacks, dedupe by raw name (first seen
    wins), collect sorted unique display names, then map normalized names
    to paths. Two different raw names that normalize to the same key both
    survive the dedupe, and the later one overwrites the earlier in the map.
    
    Args:
        apps: Discovered apps in discovery order
        fallbacks: name -> path pairs (defaults to SYSTEM_FALLBACKS)
    
    Returns:
        Immutable AppRegistry
    """
    fallbacks = SYSTEM_FALLBACKS if fallbacks is None else fallbacks
    merged = dedupe_by_name(with_fallbacks(list(apps), fallbacks))
    
    display_names = sorted(set(app.display_name for app in merged))
    
    lookup: dict[str, str] = {}
    for app in merged:
        lookup[normalize_app_name(app.name)] = app.path
    
    return AppRegistry(apps=lookup, display_names=tuple(display_names))
