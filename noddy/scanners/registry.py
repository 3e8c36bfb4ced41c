"""Installed-application discovery from Windows uninstall registry keys."""

import logging
import sys
from pathlib import Path

from noddy.errors import EntryInvalid, SourceUnavailable
from noddy.models import DiscoveredApp, Source
from noddy.scanners.base import checked_display_name, make_app
from noddy.scanners.locator import SKIP_KEYWORDS, find_exe_in_directory, is_executable_name

if sys.platform == "win32":
    import winreg
else:
    winreg = None


logger = logging.getLogger(__name__)

UNINSTALL_ROOTS = (
    ("HKLM", r"SOFTWARE\Microsoft\Windows\CurrentVersion\Uninstall"),
    ("HKLM", r"SOFTWARE\WOW6432Node\Microsoft\Windows\CurrentVersion\Uninstall"),
    ("HKCU", r"SOFTWARE\Microsoft\Windows\CurrentVersion\Uninstall"),
)

HIVES = {
    "HKLM": "HKEY_LOCAL_MACHINE",
    "HKCU": "HKEY_CURRENT_USER",
}


def clean_display_icon(icon: str) -> str | None:
    """
    Turn a DisplayIcon value into an executable path.
    
    Handles quoted paths and a trailing ``,<index>`` resource suffix,
    e.g. ``"C:\\App\\app.exe",0``. Only existing ``.exe`` files qualify.
    """
    cleaned = icon.strip().strip('"')
    cleaned = cleaned.split(",")[0].strip().strip('"')
    if not is_executable_name(cleaned):
        return None
    if not Path(cleaned).exists():
        return None
    return cleaned


def exe_from_install_location(
    install_location: str,
    app_name_hint: str,
    skip_keywords: tuple[str, ...] = SKIP_KEYWORDS
) -> str | None:
    """Resolve an InstallLocation value that is either an .exe or a directory."""
    if not install_location:
        return None
    
    location = install_location.strip().strip('"')
    if is_executable_name(location) and Path(location).exists():
        return location
    
    return find_exe_in_directory(location, app_name_hint, skip_keywords)


def _read_string(reg, key, value_name: str) -> str | None:
    try:
        value, _ = reg.QueryValueEx(key, value_name)
    except OSError:
        return None
    return value if isinstance(value, str) else None


def _scan_root(
    reg,
    hive: str,
    root_path: str,
    seen: set[str],
    skip_keywords: tuple[str, ...]
) -> list[DiscoveredApp]:
    """
    Scan the subkeys of a single uninstall root.
    
    Raises:
        SourceUnavailable: If the root key cannot be opened
    """
    handle = getattr(reg, HIVES.get(hive, ""), None)
    if handle is None:
        raise SourceUnavailable(f"Unknown registry hive: {hive}")
    
    try:
        root = reg.OpenKey(handle, root_path)
    except OSError as e:
        raise SourceUnavailable(f"Could not open {hive}\\{root_path}: {e}") from e
    
    apps: list[DiscoveredApp] = []
    with root:
        try:
            subkey_count = reg.QueryInfoKey(root)[0]
        except OSError as e:
            raise SourceUnavailable(f"Could not enumerate {hive}\\{root_path}: {e}") from e
        
        for index in range(subkey_count):
            try:
                entry_name = reg.EnumKey(root, index)
                subkey = reg.OpenKey(root, entry_name)
            except OSError:
                continue
            
            with subkey:
                try:
                    display_name = checked_display_name(_read_string(reg, subkey, "DisplayName"))
                except EntryInvalid:
                    continue
                
                name = display_name.lower()
                if name in seen:
                    continue
                
                path = None
                icon = _read_string(reg, subkey, "DisplayIcon")
                if icon:
                    path = clean_display_icon(icon)
                if path is None:
                    location = _read_string(reg, subkey, "InstallLocation")
                    if location:
                        path = exe_from_install_location(location, display_name, skip_keywords)
                if path is None:
                    continue
                
                app = make_app(name, display_name, path, Source.REGISTRY)
                if app is None:
                    continue
                apps.append(app)
                seen.add(name)
                logger.debug("Registry: %s -> %s", display_name, path)
    
    logger.info("%s\\%s: found %d apps", hive, root_path, len(apps))
    return apps


def scan_registry(
    roots=UNINSTALL_ROOTS,
    reg=None,
    skip_keywords: tuple[str, ...] = SKIP_KEYWORDS
) -> list[DiscoveredApp]:
    """
    Enumerate installed applications across uninstall registry roots.
    
    Entries are deduplicated across roots by lowercase display name;
    entries without a resolvable executable are dropped. A root that cannot
    be opened contributes nothing and is logged.
    
    Args:
        roots: Sequence of (hive, key path) pairs, hive being HKLM or HKCU
        reg: Registry API module (defaults to ``winreg``; absent off Windows)
        skip_keywords: Utility denylist for install-location lookups
    
    Returns:
        List of discovered applications
    """
    reg = reg if reg is not None else winreg
    if reg is None:
        return []
    
    seen: set[str] = set()
    apps: list[DiscoveredApp] = []
    for hive, root_path in roots:
        try:
            apps.extend(_scan_root(reg, hive, root_path, seen, skip_keywords))
        except SourceUnavailable as e:
            logger.warning("%s", e)
    return apps
