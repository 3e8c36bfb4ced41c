"""Discovery from Start Menu program trees."""

import logging
import os
import re
from pathlib import Path
from typing import Callable, Iterator

from noddy.models import DiscoveredApp, Source
from noddy.scanners.base import make_app
from noddy.scanners.locator import SKIP_KEYWORDS, find_primary_exe_in_folder


logger = logging.getLogger(__name__)

START_MENU_ROOTS = (
    r"%ProgramData%\Microsoft\Windows\Start Menu\Programs",
    r"%AppData%\Microsoft\Windows\Start Menu\Programs",
)

SHORTCUT_SUFFIX = ".lnk"

_ENV_REF = re.compile(r"%([^%]+)%")


def unresolved_shortcut(shortcut: Path) -> str | None:
    """
    Shortcut target resolution.
    
    Link targets are not resolved; every shortcut yields None and discovery
    relies on the folder-based heuristic instead.
    """
    return None


def expand_root(root: str) -> Path:
    """Expand %VAR% references in a configured root (unset variables become empty)."""
    return Path(_ENV_REF.sub(lambda m: os.environ.get(m.group(1), ""), root))


def _sorted_entries(folder: Path) -> list[os.DirEntry]:
    try:
        with os.scandir(folder) as it:
            return sorted(it, key=lambda e: e.name.lower())
    except OSError:
        return []


def _scan_tree(
    root: Path,
    apps: list[DiscoveredApp],
    resolve_shortcut: Callable[[Path], str | None],
    skip_keywords: tuple[str, ...]
) -> None:
    """
    Depth-first walk using an explicit stack of pending directories.
    
    A subfolder's contents are scanned before the subfolder itself is tested
    as an application folder, so depth is bounded only by the filesystem.
    """
    # Each frame: remaining entries of a directory, and that directory's own
    # entry (None for the root) to test once its contents are done.
    stack: list[tuple[Iterator[os.DirEntry], os.DirEntry | None]] = [
        (iter(_sorted_entries(root)), None)
    ]
    
    while stack:
        entries, owner = stack[-1]
        entry = next(entries, None)
        if entry is None:
            stack.pop()
            if owner is not None:
                _add_folder_app(owner, apps, skip_keywords)
            continue
        
        entry_path = Path(entry.path)
        try:
            is_dir = entry.is_dir()
        except OSError:
            continue
        
        if is_dir:
            stack.append((iter(_sorted_entries(entry_path)), entry))
            continue
        
        if entry.name.lower().endswith(SHORTCUT_SUFFIX):
            target = resolve_shortcut(entry_path)
            if not target:
                continue
            stem = entry_path.stem
            app = make_app(stem.lower(), stem, target, Source.START_MENU)
            if app is not None:
                logger.debug("Start Menu: %s -> %s", stem, target)
                apps.append(app)


def _add_folder_app(entry: os.DirEntry, apps: list[DiscoveredApp], skip_keywords: tuple[str, ...]) -> None:
    # The folder may itself be an install directory (e.g. "Discord Inc")
    exe = find_primary_exe_in_folder(entry.path, skip_keywords)
    if not exe:
        return
    app = make_app(entry.name.lower(), entry.name, exe, Source.START_MENU)
    if app is not None:
        logger.debug("Start Menu: %s -> %s", entry.name, exe)
        apps.append(app)


def scan_start_menu(
    roots=START_MENU_ROOTS,
    resolve_shortcut: Callable[[Path], str | None] = unresolved_shortcut,
    skip_keywords: tuple[str, ...] = SKIP_KEYWORDS
) -> list[DiscoveredApp]:
    """
    Walk Start Menu trees to any depth.
    
    Every subfolder is both recursed into and tested as an application
    folder. Shortcut files are passed to ``resolve_shortcut``; unresolved
    ones are skipped.
    
    Args:
        roots: Root directories, optionally containing %VAR% references
        resolve_shortcut: Callable mapping a .lnk path to its target
        skip_keywords: Utility denylist
    
    Returns:
        List of discovered applications
    """
    apps: list[DiscoveredApp] = []
    for root in roots:
        path = expand_root(str(root))
        if not path.is_dir():
            continue
        _scan_tree(path, apps, resolve_shortcut, skip_keywords)
    
    logger.info("Start Menu: found %d apps", len(apps))
    return apps
