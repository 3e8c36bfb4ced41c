"""Detached process spawning."""

import subprocess
import sys


# Windows process creation flag: do not allocate a console window.
CREATE_NO_WINDOW = 0x08000000


def spawn_detached(argv: list[str], cwd: str | None = None) -> int:
    """
    Start a process that outlives the caller and is never waited on.
    
    On Windows the child gets no console window; elsewhere it is placed in
    a new session so it is not tied to the caller's terminal.
    
    Args:
        argv: Executable and arguments
        cwd: Working directory for the child (inherit when None)
    
    Returns:
        The child's process id
    
    Raises:
        OSError: If the OS refuses to create the process
    """
    kwargs: dict = {
        "cwd": cwd,
        "stdin": subprocess.DEVNULL,
        "stdout": subprocess.DEVNULL,
        "stderr": subprocess.DEVNULL,
        "close_fds": True,
    }
    if sys.platform == "win32":
        kwargs["creationflags"] = CREATE_NO_WINDOW
    else:
        kwargs["start_new_session"] = True
    
    proc = subprocess.Popen(argv, **kwargs)
    return proc.pid
