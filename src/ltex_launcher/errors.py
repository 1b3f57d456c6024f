"""Error handling for the language server launcher."""
import logging
from typing import Any, Dict, Optional
from mcp.types import (
    ErrorData,
    INVALID_PARAMS,
    INVALID_REQUEST,
    INTERNAL_ERROR,
)

from ltex_launcher.logging import log_with_data

logger = logging.getLogger(__name__)


def log_error(
    error: Exception,
    context: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None
) -> None:
    """Log an error with context."""
    logger = logger or logging.getLogger(__name__)

    error_info = {
        "error_type": error.__class__.__name__,
        "error_message": str(error)
    }
    if context:
        error_info["context"] = context
    if isinstance(error, ResolutionError):
        error_info["code"] = error.code
        error_info["details"] = error.details
    if error.__cause__ is not None:
        cause = error.__cause__
        error_info["cause"] = (
            f"{type(cause).__name__}: {cause}" if str(cause) else type(cause).__name__
        )

    log_with_data(logger, logging.ERROR, "Language server resolution failed", error_info)


class ResolutionError(Exception):
    """No usable language server binary could be found or downloaded."""
    def __init__(
        self,
        message: str,
        code: int = INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.code = code
        self.details = details or {}

    def to_error_data(self) -> ErrorData:
        """Convert to ErrorData format."""
        return ErrorData(
            code=self.code,
            message=str(self),
            data=self.details
        )


class UnsupportedArchitectureError(ResolutionError):
    """Release assets do not exist for this CPU architecture."""
    def __init__(self, architecture: str, tool: str):
        super().__init__(
            f"The requested architecture {architecture} is not supported by `{tool}`.",
            code=INVALID_REQUEST,
            details={"architecture": architecture, "tool": tool}
        )


class UnsupportedPlatformError(ResolutionError):
    """Operating system or machine cannot be mapped to a release platform."""
    def __init__(self, system: str, machine: Optional[str] = None):
        platform_name = f"{system} {machine}" if machine else system
        super().__init__(
            f"Unsupported platform: {platform_name}",
            code=INVALID_REQUEST,
            details={"system": system, "machine": machine}
        )


class AssetNotFoundError(ResolutionError):
    """Upstream release lacks the expected asset."""
    def __init__(self, asset_name: str, version: str):
        super().__init__(
            f"no asset found matching {asset_name!r}",
            details={"asset_name": asset_name, "version": version}
        )


class NetworkOrFilesystemError(ResolutionError):
    """Download, release lookup or working directory access failed."""
    def __init__(self, context: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(context, code=INTERNAL_ERROR, details=details)


class SettingsError(ResolutionError):
    """Worktree settings could not be read."""
    def __init__(self, path: str, reason: str):
        super().__init__(
            f"failed to read settings from {path}: {reason}",
            code=INVALID_PARAMS,
            details={"path": path}
        )


class UnknownLanguageServerError(ResolutionError):
    """Server id is not a known language server."""
    def __init__(self, server_id: str):
        super().__init__(
            f"Unknown language server: {server_id}",
            code=INVALID_PARAMS,
            details={"server_id": server_id}
        )
