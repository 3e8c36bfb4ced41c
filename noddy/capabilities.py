"""OS capabilities consumed by the dispatcher, one implementation per platform."""

import logging
import webbrowser
from dataclasses import dataclass
from typing import Protocol

from noddy.errors import AppNotFound, InvalidInput, NoddyError
from noddy.launcher import launch
from noddy.resolver import sanitize_native_name
from noddy.util.host import is_windows
from noddy.util.process import spawn_detached


logger = logging.getLogger(__name__)


class ProcessLauncher(Protocol):
    def launch(self, path: str) -> None: ...


class NativeResolver(Protocol):
    def open_by_name(self, name: str) -> None: ...


class UrlOpener(Protocol):
    def open_url(self, url: str) -> None: ...


class ProcessKiller(Protocol):
    def kill(self, name: str) -> None: ...


class DetachedLauncher:
    """Starts executables via launcher.launch."""
    
    def launch(self, path: str) -> None:
        launch(path)


class ShellStartResolver:
    """Lets the Windows shell resolve a bare app name (``cmd /C start "" name``)."""
    
    def open_by_name(self, name: str) -> None:
        sanitized = sanitize_native_name(name)
        try:
            spawn_detached(["cmd", "/C", "start", "", sanitized])
        except OSError as e:
            raise AppNotFound(f"Windows native resolution failed: {e}") from e
        logger.info("Launched '%s' via Windows native resolution", sanitized)


class NoNativeResolver:
    """Platforms without shell-level app name resolution."""
    
    def open_by_name(self, name: str) -> None:
        raise AppNotFound(f"Native app resolution is not available: {name}")


class BrowserUrlOpener:
    """Opens URLs with the OS default handler."""
    
    def open_url(self, url: str) -> None:
        try:
            opened = webbrowser.open(url.strip())
        except webbrowser.Error as e:
            raise NoddyError(str(e)) from e
        if not opened:
            raise NoddyError("No handler available for URL")


class CommandKiller:
    """Terminates processes by name with an OS command (not awaited)."""
    
    def __init__(self, argv_prefix: list[str]):
        self.argv_prefix = list(argv_prefix)
    
    def kill(self, name: str) -> None:
        target = name.strip()
        if not target:
            raise InvalidInput("Empty process name")
        if not all((c.isascii() and c.isalnum()) or c in " ._-" for c in target):
            raise InvalidInput("Invalid characters in process name")
        spawn_detached(self.argv_prefix + [target])


@dataclass(frozen=True)
class Capabilities:
    """Bundle of OS capabilities injected into the dispatcher."""
    
    launcher: ProcessLauncher
    native: NativeResolver
    urls: UrlOpener
    killer: ProcessKiller


def default_capabilities() -> Capabilities:
    """Select the capability implementations for the running platform."""
    if is_windows():
        return Capabilities(
            launcher=DetachedLauncher(),
            native=ShellStartResolver(),
            urls=BrowserUrlOpener(),
            killer=CommandKiller(["taskkill", "/F", "/IM"])
        )
    return Capabilities(
        launcher=DetachedLauncher(),
        native=NoNativeResolver(),
        urls=BrowserUrlOpener(),
        killer=CommandKiller(["pkill", "-f"])
    )
