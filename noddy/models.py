"""Data models for the noddy launcher core."""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, Field, ConfigDict


MAX_DISPLAY_NAME_LENGTH = 120


class Source(str, Enum):
    """Provenance of a discovered application (diagnostics only)."""
    
    PATH = "path"
    REGISTRY = "registry"
    START_MENU = "start_menu"
    LOCALAPPDATA = "localappdata"
    FALLBACK = "fallback"


class Action(str, Enum):
    """Actions understood by the dispatcher."""
    
    LIST_APPS = "list_apps"
    OPEN_APP = "open_app"
    OPEN_URL = "open_url"
    KILL_PROCESS = "kill_process"


class DiscoveredApp(BaseModel):
    """One candidate application found by a discovery source."""
    
    model_config = ConfigDict(frozen=True)
    
    name: str = Field(description="Lowercase identity key as produced by the source")
    display_name: str = Field(
        min_length=1,
        max_length=MAX_DISPLAY_NAME_LENGTH,
        description="Human-readable label"
    )
    path: str = Field(min_length=1, description="Absolute or command-resolvable executable")
    source: Source = Field(description="Discovery source that produced this entry")


@dataclass(frozen=True)
class AppRegistry:
    """
    Read-only lookup tables built once at startup.
    
    ``apps`` maps normalized names to executable paths in insertion order;
    ``display_names`` is sorted and free of duplicates.
    """
    
    apps: Mapping[str, str] = field(default_factory=dict)
    display_names: tuple[str, ...] = ()
    
    def __post_init__(self) -> None:
        object.__setattr__(self, "apps", MappingProxyType(dict(self.apps)))
        object.__setattr__(self, "display_names", tuple(self.display_names))
    
    def __len__(self) -> int:
        return len(self.apps)
    
    def __contains__(self, key: object) -> bool:
        return key in self.apps


class ActionRequest(BaseModel):
    """A request coming from the front end."""
    
    action: str = Field(description="Action identifier, e.g. 'open_app'")
    value: str = Field(default="", description="Free-text argument for the action")


class ActionResponse(BaseModel):
    """Structured outcome of a dispatched action."""
    
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": False,
                "message": "App not found. Should I open this in Chrome? (Unknown app: zzz)",
                "requires_confirmation": True,
                "fallback_action": "open_url",
                "fallback_value": "https://www.zzz.com",
                "data": None
            }
        }
    )
    
    success: bool
    message: str
    requires_confirmation: bool = False
    fallback_action: str | None = None
    fallback_value: str | None = None
    data: list[str] | None = None
    
    @classmethod
    def ok(cls, message: str, data: list[str] | None = None) -> "ActionResponse":
        return cls(success=True, message=message, data=data)
    
    @classmethod
    def fail(cls, message: str) -> "ActionResponse":
        return cls(success=False, message=message)


class HostInfo(BaseModel):
    """Host system information."""
    
    system: str = Field(description="Operating system name (e.g., 'Windows', 'Linux')")
    release: str = Field(description="Operating system release")
    arch: str = Field(description="System architecture (e.g., 'AMD64', 'x86_64')")
    hostname: str = Field(description="System hostname")
