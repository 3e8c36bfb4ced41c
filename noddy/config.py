"""Configuration file management for noddy."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from noddy.registry import SYSTEM_FALLBACKS
from noddy.resolver import MIN_SUBSTRING_QUERY_LENGTH
from noddy.scanners.localappdata import COMMON_LOCAL_APPS
from noddy.scanners.locator import SKIP_KEYWORDS
from noddy.scanners.path import PATH_CANDIDATES
from noddy.scanners.registry import HIVES, UNINSTALL_ROOTS
from noddy.scanners.start_menu import START_MENU_ROOTS


@dataclass
class Config:
    """Configuration for discovery and request handling."""
    
    # Discovery sources
    path_candidates: list[str] = field(default_factory=lambda: list(PATH_CANDIDATES))
    registry_roots: list[dict[str, str]] = field(
        default_factory=lambda: [{"hive": hive, "path": path} for hive, path in UNINSTALL_ROOTS]
    )
    start_menu_roots: list[str] = field(default_factory=lambda: list(START_MENU_ROOTS))
    local_app_names: list[str] = field(default_factory=lambda: list(COMMON_LOCAL_APPS))
    system_fallbacks: dict[str, str] = field(default_factory=lambda: dict(SYSTEM_FALLBACKS))
    skip_keywords: list[str] = field(default_factory=lambda: list(SKIP_KEYWORDS))
    
    # Matching
    min_substring_query_length: int = MIN_SUBSTRING_QUERY_LENGTH
    
    # Logging
    log_level: str = "WARNING"
    log_file: str | None = None
    
    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.min_substring_query_length < 1:
            raise ValueError("min_substring_query_length must be positive")
        
        if not isinstance(logging.getLevelName(str(self.log_level).upper()), int):
            raise ValueError(f"Invalid log level '{self.log_level}'")
        
        for root in self.registry_roots:
            if not isinstance(root, dict) or root.get("hive") not in HIVES or not root.get("path"):
                raise ValueError(
                    f"Invalid registry root {root!r}: expected hive (HKLM or HKCU) and path"
                )
    
    def registry_root_pairs(self) -> list[tuple[str, str]]:
        return [(root["hive"], root["path"]) for root in self.registry_roots]


def load_config(config_path: Path | str | None = None) -> Config:
    """
    Load configuration from file.
    
    Args:
        config_path: Path to config file. If None, checks default locations:
            1. ~/.noddy.yaml
            2. ~/.noddy.yml
            3. ~/.config/noddy/config.yaml
            4. ~/.config/noddy/config.yml
    
    Returns:
        Config object with loaded settings (or defaults if no config found)
    
    Raises:
        FileNotFoundError: If an explicit path does not exist
        ValueError: If the file cannot be parsed or fails validation
    """
    if config_path:
        config_file = Path(config_path).expanduser()
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")
    else:
        default_paths = [
            Path.home() / ".noddy.yaml",
            Path.home() / ".noddy.yml",
            Path.home() / ".config" / "noddy" / "config.yaml",
            Path.home() / ".config" / "noddy" / "config.yml",
        ]
        config_file = next((p for p in default_paths if p.exists()), None)
        if not config_file:
            return Config()
    
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError("top-level value must be a mapping")
        return Config(**data)
    except (yaml.YAMLError, TypeError, ValueError) as e:
        raise ValueError(f"Failed to load config from {config_file}: {e}") from e


def save_example_config(output_path: Path | str) -> None:
    """
    Save an example configuration file with all options documented.
    
    Args:
        output_path: Where to save the example config
    """
    example = r"""# noddy configuration file
# Place at ~/.noddy.yaml or ~/.config/noddy/config.yaml

# Names probed with the OS command resolver (where / which)
path_candidates:
  - code
  - code.cmd
  - notepad
  - firefox
  - spotify

# Uninstall registry roots to scan (Windows only)
registry_roots:
  - hive: HKLM
    path: SOFTWARE\Microsoft\Windows\CurrentVersion\Uninstall
  - hive: HKLM
    path: SOFTWARE\WOW6432Node\Microsoft\Windows\CurrentVersion\Uninstall
  - hive: HKCU
    path: SOFTWARE\Microsoft\Windows\CurrentVersion\Uninstall

# Start Menu trees (%VAR% references are expanded)
start_menu_roots:
  - '%ProgramData%\Microsoft\Windows\Start Menu\Programs'
  - '%AppData%\Microsoft\Windows\Start Menu\Programs'

# Folders looked up under %LOCALAPPDATA%
local_app_names: [Discord, Slack, Teams, Spotify, WhatsApp, Signal, Obsidian]

# Always-available system utilities
system_fallbacks:
  notepad: notepad.exe
  explorer: explorer.exe
  cmd: cmd.exe

# Executables containing these words are never picked as an app's main binary
skip_keywords: [uninstall, setup, install, update, helper, tool, crash, report, telemetry, vcredist, webview]

# Shortest query allowed to match in the middle of an app name
min_substring_query_length: 4

# Logging (DEBUG, INFO, WARNING, ERROR)
log_level: WARNING
# log_file: ~/.noddy/noddy.log
"""
    
    path = Path(output_path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(example, encoding="utf-8")
