"""Primary executable location inside install directories."""

import os
from pathlib import Path


EXECUTABLE_SUFFIX = ".exe"

# Executables whose stem contains any of these are installer/updater utilities.
SKIP_KEYWORDS = (
    "uninstall",
    "setup",
    "install",
    "update",
    "helper",
    "tool",
    "crash",
    "report",
    "telemetry",
    "vcredist",
    "webview",
)

# Ranking tiers for find_exe_in_directory
EXACT_MATCH = 1000
HINT_CONTAINS = 500
GENERIC = 100


def is_executable_name(name: str) -> bool:
    return name.lower().endswith(EXECUTABLE_SUFFIX)


def is_utility(stem: str, skip_keywords: tuple[str, ...] = SKIP_KEYWORDS) -> bool:
    """Check whether an executable stem names an installer/updater/helper."""
    stem = stem.lower()
    return any(keyword.lower() in stem for keyword in skip_keywords)


def _list_executables(folder: Path, skip_keywords: tuple[str, ...]) -> list[Path]:
    """
    Non-utility executables directly inside ``folder``, sorted by name.
    
    Sorting makes tie-breaks independent of directory enumeration order.
    """
    found = []
    try:
        with os.scandir(folder) as entries:
            for entry in entries:
                if not is_executable_name(entry.name):
                    continue
                try:
                    if not entry.is_file():
                        continue
                except OSError:
                    continue
                path = Path(entry.path)
                if is_utility(path.stem, skip_keywords):
                    continue
                found.append(path)
    except OSError:
        return []
    
    found.sort(key=lambda p: p.name.lower())
    return found


def score_candidate(stem: str, hint: str) -> int:
    """Rank an executable stem against the application's display name."""
    stem = stem.lower()
    hint = hint.lower()
    if stem == hint:
        return EXACT_MATCH
    if stem in hint:
        return HINT_CONTAINS
    return GENERIC


def find_exe_in_directory(
    dir_path: Path | str,
    app_name_hint: str,
    skip_keywords: tuple[str, ...] = SKIP_KEYWORDS
) -> str | None:
    """
    Pick the most plausible primary executable in a directory.
    
    Candidates are the directory's own ``.exe`` files minus utilities.
    An exact (case-insensitive) stem match with the hint ranks highest,
    then stems contained in the hint, then anything else. Ties keep the
    first candidate in name order.
    
    Args:
        dir_path: Directory to inspect (not recursed)
        app_name_hint: Usually the display name of the application
        skip_keywords: Utility denylist
    
    Returns:
        Path to the executable, or None if the directory has no candidate
    
    Example:
        >>> find_exe_in_directory(r"C:\\Program Files\\VideoLAN\\VLC", "VLC media player")
        'C:\\\\Program Files\\\\VideoLAN\\\\VLC\\\\vlc.exe'
    """
    folder = Path(dir_path)
    if not folder.is_dir():
        return None
    
    best: Path | None = None
    best_score = -1
    for candidate in _list_executables(folder, skip_keywords):
        score = score_candidate(candidate.stem, app_name_hint)
        if score > best_score:
            best, best_score = candidate, score
    
    return str(best) if best else None


def find_primary_exe_in_folder(
    folder: Path | str,
    skip_keywords: tuple[str, ...] = SKIP_KEYWORDS
) -> str | None:
    """
    Find the main executable of an application folder.
    
    Self-updating installers keep the real binaries in versioned ``app-*``
    subdirectories, so those are searched first; then the folder itself.
    The first non-utility executable wins.
    """
    folder = Path(folder)
    if not folder.is_dir():
        return None
    
    try:
        subdirs = sorted(
            (p for p in folder.iterdir() if p.name.lower().startswith("app-") and p.is_dir()),
            key=lambda p: p.name.lower()
        )
    except OSError:
        subdirs = []
    
    for subdir in subdirs:
        exes = _list_executables(subdir, skip_keywords)
        if exes:
            return str(exes[0])
    
    exes = _list_executables(folder, skip_keywords)
    return str(exes[0]) if exes else None
