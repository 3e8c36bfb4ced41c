"""Host system information collection."""

import platform
import socket
import sys

from noddy.models import HostInfo


def is_windows() -> bool:
    """True when running on Windows, where the full discovery stack applies."""
    return sys.platform == "win32"


def get_host_info() -> HostInfo:
    """
    Collect host system information for report headers.
    
    Example:
        >>> info = get_host_info()
        >>> print(f"{info.system} {info.release} on {info.arch}")
    """
    return HostInfo(
        system=platform.system() or sys.platform,
        release=platform.release(),
        arch=platform.machine(),
        hostname=socket.gethostname()
    )
