"""Startup discovery orchestrating all sources into the registry."""

import logging

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from noddy.config import Config
from noddy.models import AppRegistry, DiscoveredApp
from noddy.registry import build_app_registry
from noddy.scanners import DiscoverySource, platform_sources
from noddy.util.host import get_host_info


logger = logging.getLogger(__name__)


def discover_all(sources: list[DiscoverySource], console: Console | None = None) -> list[DiscoveredApp]:
    """
    Run each discovery source once, sequentially, in the given order.
    
    A failing source is logged and contributes no apps; it never stops the
    remaining sources.
    
    Args:
        sources: Sources in merge order
        console: Console for progress output (stderr by default)
    
    Returns:
        Concatenated discovered apps in source order
    """
    console = console or Console(stderr=True)
    apps: list[DiscoveredApp] = []
    
    with Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        console=console,
        transient=True
    ) as progress:
        for source in sources:
            task = progress.add_task(f"Discovering apps from {source.name}...", total=None)
            try:
                found = source.discover()
            except Exception as e:
                logger.warning("App discovery from %s failed: %s", source.name, e)
                found = []
            progress.remove_task(task)
            apps.extend(found)
    
    return apps


def build_registry(config: Config | None = None, sources: list[DiscoverySource] | None = None) -> AppRegistry:
    """
    Discover installed apps and build the process-wide registry.
    
    Args:
        config: Configuration (defaults when None)
        sources: Override the platform's discovery sources
    
    Returns:
        Immutable AppRegistry
    
    Example:
        >>> registry = build_registry()
        >>> "notepad" in registry
        True
    """
    config = config or Config()
    host = get_host_info()
    logger.info("Discovering apps on %s %s (%s)", host.system, host.release, host.arch)
    if sources is None:
        sources = platform_sources(config)
    
    apps = discover_all(sources)
    registry = build_app_registry(apps, config.system_fallbacks)
    
    logger.info("Discovered %d total app(s)", len(registry))
    for key, path in registry.apps.items():
        logger.debug("  %s -> %s", key, path)
    return registry
