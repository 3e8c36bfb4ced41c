"""Error taxonomy for discovery and request handling."""


class NoddyError(Exception):
    """Base class for all noddy errors."""


class SourceUnavailable(NoddyError):
    """A discovery source could not be opened."""


class EntryInvalid(NoddyError):
    """A registry or shortcut entry is malformed."""


class AppNotFound(NoddyError):
    """No registry entry or native resolution matched the query."""


class InvalidInput(NoddyError):
    """Request input was rejected before reaching the OS."""


class LaunchError(NoddyError):
    """Base class for launch-time failures."""


class PathNotFound(LaunchError):
    def __init__(self, path: str):
        super().__init__(f"Executable path does not exist: {path}")
        self.path = path


class NoWorkingDirectory(LaunchError):
    def __init__(self, path: str):
        super().__init__("Could not determine working directory")
        self.path = path


class ElevationRequired(LaunchError):
    def __init__(self, path: str):
        super().__init__(f"App requires admin rights: {path}")
        self.path = path


class SpawnFailed(LaunchError):
    def __init__(self, detail: str):
        super().__init__(f"Spawn failed: {detail}")
        self.detail = detail
