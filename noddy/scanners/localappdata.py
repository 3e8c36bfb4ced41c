"""Discovery of per-user installs under %LOCALAPPDATA%."""

import logging
import os
from pathlib import Path

from noddy.models import DiscoveredApp, Source
from noddy.scanners.base import make_app
from noddy.scanners.locator import SKIP_KEYWORDS, find_primary_exe_in_folder


logger = logging.getLogger(__name__)

# Per-user (mostly self-updating) apps known to install here
COMMON_LOCAL_APPS = (
    "Discord",
    "Slack",
    "Teams",
    "Spotify",
    "WhatsApp",
    "Signal",
    "Obsidian",
)


def scan_local_app_data(
    base: Path | str | None = None,
    app_names=COMMON_LOCAL_APPS,
    skip_keywords: tuple[str, ...] = SKIP_KEYWORDS
) -> list[DiscoveredApp]:
    """
    Check the allow-listed app names against subfolders of the data root.
    
    Args:
        base: Data root; defaults to the LOCALAPPDATA environment variable
        app_names: Folder names to look for (case-insensitive)
        skip_keywords: Utility denylist
    
    Returns:
        List of discovered applications
    """
    if base is None:
        base = os.environ.get("LOCALAPPDATA")
        if not base:
            return []
    base = Path(base)
    if not base.is_dir():
        return []
    
    wanted = [name.lower() for name in app_names]
    apps: list[DiscoveredApp] = []
    try:
        folders = sorted((p for p in base.iterdir() if p.is_dir()), key=lambda p: p.name.lower())
    except OSError:
        return []
    
    for folder in folders:
        if folder.name.lower() not in wanted:
            continue
        exe = find_primary_exe_in_folder(folder, skip_keywords)
        if not exe:
            continue
        app = make_app(folder.name.lower(), folder.name, exe, Source.LOCALAPPDATA)
        if app is not None:
            logger.debug("LocalAppData: %s -> %s", folder.name, exe)
            apps.append(app)
    
    logger.info("LocalAppData: found %d apps", len(apps))
    return apps
