"""Discovery sources for installed applications."""

from noddy.scanners.base import DiscoverySource
from noddy.scanners.localappdata import scan_local_app_data
from noddy.scanners.path import probe_path
from noddy.scanners.registry import scan_registry
from noddy.scanners.start_menu import scan_start_menu
from noddy.util.host import is_windows

__all__ = ["DiscoverySource", "platform_sources"]


def platform_sources(config, windows: bool | None = None) -> list[DiscoverySource]:
    """
    Discovery sources for the running platform, in merge order.
    
    PATH probing runs everywhere; Start Menu, LocalAppData and registry
    scanning only on Windows.
    """
    if windows is None:
        windows = is_windows()
    
    skip = tuple(config.skip_keywords)
    sources = [
        DiscoverySource("PATH", lambda: probe_path(config.path_candidates)),
    ]
    if windows:
        sources.extend([
            DiscoverySource(
                "Start Menu",
                lambda: scan_start_menu(config.start_menu_roots, skip_keywords=skip)
            ),
            DiscoverySource(
                "LocalAppData",
                lambda: scan_local_app_data(app_names=config.local_app_names, skip_keywords=skip)
            ),
            DiscoverySource(
                "Registry",
                lambda: scan_registry(config.registry_root_pairs(), skip_keywords=skip)
            ),
        ])
    return sources
