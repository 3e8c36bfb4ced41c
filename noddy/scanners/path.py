"""Discovery of well-known executables through the OS command resolver."""

import logging
import subprocess

from noddy.errors import SourceUnavailable
from noddy.models import DiscoveredApp, Source
from noddy.scanners.base import make_app
from noddy.util.host import is_windows


logger = logging.getLogger(__name__)

LOCATE_TIMEOUT = 5

PATH_CANDIDATES = (
    "chrome",
    "code",
    "code.cmd",
    "notepad",
    "notepad.exe",
    "explorer",
    "explorer.exe",
    "powershell",
    "powershell.exe",
    "cmd",
    "cmd.exe",
    "python",
    "python.exe",
    "firefox",
    "firefox.exe",
    "spotify",
    "spotify.exe",
    "discord",
    "discord.exe",
    "slack",
    "slack.exe",
    "vlc",
    "vlc.exe",
)


def candidate_key(candidate: str) -> str:
    """Raw identity key of a PATH candidate: lowercase, without .exe/.cmd."""
    return candidate.lower().removesuffix(".exe").removesuffix(".cmd")


def locate(locator: str, candidate: str, timeout: int = LOCATE_TIMEOUT) -> str:
    """
    Run ``locator candidate`` without a shell and return the first path it prints.
    
    Returns an empty string when the locator reports no match.
    
    Raises:
        SourceUnavailable: If the locator cannot be run or times out
    """
    try:
        completed = subprocess.run(
            [locator, candidate],
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
            shell=False,
            check=False
        )
    except subprocess.TimeoutExpired as e:
        raise SourceUnavailable(f"{locator} timed out after {timeout}s for {candidate}") from e
    except OSError as e:
        raise SourceUnavailable(f"Failed to run {locator} for {candidate}: {e}") from e
    
    if completed.returncode != 0:
        return ""
    # where prints every match, one per line (CRLF on Windows)
    for line in (completed.stdout or "").splitlines():
        if line.strip():
            return line.strip()
    return ""


def probe_path(candidates=PATH_CANDIDATES, locator: str | None = None) -> list[DiscoveredApp]:
    """
    Ask the OS command resolver for each candidate name.
    
    Uses ``where`` on Windows and ``which`` elsewhere; the first line of
    its output is taken as the executable path.
    
    Raises:
        SourceUnavailable: If the resolver command cannot be run or times out
    """
    locator = locator or ("where" if is_windows() else "which")
    apps: list[DiscoveredApp] = []
    failed: list[str] = []
    
    for candidate in candidates:
        path = locate(locator, candidate)
        if not path:
            failed.append(candidate)
            continue
        
        app = make_app(candidate_key(candidate), candidate, path, Source.PATH)
        if app is None:
            failed.append(candidate)
            continue
        logger.debug("PATH: %s -> %s", candidate, path)
        apps.append(app)
    
    if not apps:
        logger.warning("No apps discovered from PATH. Checked: %s", ", ".join(failed))
    else:
        logger.info("PATH: found %d apps", len(apps))
    return apps
