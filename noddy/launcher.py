"""Launching resolved executables."""

import logging
import os
from pathlib import Path

from noddy.errors import ElevationRequired, NoWorkingDirectory, PathNotFound, SpawnFailed
from noddy.util.process import spawn_detached


logger = logging.getLogger(__name__)

# Windows: "The requested operation requires elevation."
ERROR_ELEVATION_REQUIRED = 740


def _needs_elevation(error: OSError) -> bool:
    return getattr(error, "winerror", None) == ERROR_ELEVATION_REQUIRED


def launch(exe_path: str) -> int:
    """
    Start an executable detached, with its own folder as working directory.
    
    The process is not waited for or supervised.
    
    Args:
        exe_path: Path to the executable
    
    Returns:
        The process id of the started application
    
    Raises:
        PathNotFound: If the executable does not exist
        NoWorkingDirectory: If no parent directory can be derived
        ElevationRequired: If the OS requires admin rights to start it
        SpawnFailed: For any other spawn failure
    """
    path = Path(exe_path)
    if not path.exists():
        raise PathNotFound(exe_path)
    
    work_dir = os.path.dirname(exe_path)
    if not work_dir:
        raise NoWorkingDirectory(exe_path)
    
    try:
        pid = spawn_detached([exe_path], cwd=work_dir)
    except OSError as e:
        if _needs_elevation(e):
            raise ElevationRequired(exe_path) from e
        raise SpawnFailed(str(e)) from e
    
    logger.info("Launched %s (pid %d)", exe_path, pid)
    return pid
