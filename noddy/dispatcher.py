"""Action dispatcher: the single entry point for front-end requests."""

import logging
import time

from noddy.capabilities import Capabilities
from noddy.errors import AppNotFound, NoddyError
from noddy.models import Action, ActionRequest, ActionResponse, AppRegistry
from noddy.resolver import MIN_SUBSTRING_QUERY_LENGTH, resolve


logger = logging.getLogger(__name__)
action_logger = logging.getLogger("noddy.actions")


def is_valid_url(url: str) -> bool:
    trimmed = url.strip()
    return trimmed.startswith("https://") or trimmed.startswith("http://")


def build_fallback_url(value: str) -> str:
    """
    Website offered when an app cannot be opened.
    
    Example:
        >>> build_fallback_url("Spotify")
        'https://www.spotify.com'
    """
    normalized = value.strip().lower()
    if normalized == "youtube":
        return "https://www.youtube.com"
    return f"https://www.{normalized}.com"


def log_action(action: str, value: str, success: bool) -> None:
    """Record the outcome of one request."""
    action_logger.info(
        "[%.3f] action=%s value=%s success=%s",
        time.monotonic(), action, value, str(success).lower()
    )


class ActionDispatcher:
    """
    Maps (action, value) requests onto registry lookups and OS actions.
    
    Holds no per-request state; the registry is read-only and may be shared
    by concurrent callers.
    """
    
    def __init__(
        self,
        registry: AppRegistry,
        capabilities: Capabilities,
        min_substring_length: int = MIN_SUBSTRING_QUERY_LENGTH
    ):
        self.registry = registry
        self.capabilities = capabilities
        self.min_substring_length = min_substring_length
        self._handlers = {
            Action.LIST_APPS.value: self._list_apps,
            Action.OPEN_APP.value: self._open_app,
            Action.OPEN_URL.value: self._open_url,
            Action.KILL_PROCESS.value: self._kill_process,
        }
    
    def handle(self, request: ActionRequest) -> ActionResponse:
        return self.execute(request.action, request.value)
    
    def execute(self, action: str, value: str = "") -> ActionResponse:
        """
        Process one request start to finish.
        
        Never raises for request-time failures; every outcome is returned
        as an ActionResponse and logged.
        """
        handler = self._handlers.get(action)
        if handler is None:
            response = ActionResponse.fail(f"Unknown action: {action}")
        else:
            response = handler(value)
        
        log_action(action, value, response.success)
        return response
    
    def _list_apps(self, value: str) -> ActionResponse:
        return ActionResponse.ok("Installed apps listed", data=list(self.registry.display_names))
    
    def open_app(self, name: str) -> None:
        """
        Resolve and launch an app, deferring to OS name resolution when the
        registry has no match.
        
        Raises:
            AppNotFound: If neither the registry nor the OS knows the name
            LaunchError: If a registry match could not be started
        """
        try:
            path = resolve(name, self.registry, self.min_substring_length)
        except AppNotFound:
            try:
                self.capabilities.native.open_by_name(name)
            except NoddyError as e:
                logger.info("App '%s' not found in registry (%s)", name, e)
                raise AppNotFound(f"Unknown app: {name}") from e
            return
        
        try:
            self.capabilities.launcher.launch(path)
        except NoddyError as e:
            logger.warning("Failed to launch %s: %s", path, e)
            raise
    
    def _open_app(self, value: str) -> ActionResponse:
        try:
            self.open_app(value)
        except (NoddyError, OSError) as err:
            return ActionResponse(
                success=False,
                message=f"App not found. Should I open this in Chrome? ({err})",
                requires_confirmation=True,
                fallback_action=Action.OPEN_URL.value,
                fallback_value=build_fallback_url(value)
            )
        return ActionResponse.ok("Application opened")
    
    def _open_url(self, value: str) -> ActionResponse:
        if not is_valid_url(value):
            return ActionResponse.fail("Invalid URL")
        try:
            self.capabilities.urls.open_url(value)
        except (NoddyError, OSError) as err:
            return ActionResponse.fail(f"Failed to open URL: {err}")
        return ActionResponse.ok("URL opened")
    
    def _kill_process(self, value: str) -> ActionResponse:
        try:
            self.capabilities.killer.kill(value)
        except (NoddyError, OSError) as err:
            return ActionResponse.fail(f"Failed to terminate process: {err}")
        return ActionResponse.ok("Process terminated")
