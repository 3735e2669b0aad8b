"""
Exception taxonomy for nbsync.

DiscoveryError is fatal to a run. DirectiveError subclasses are scoped to a
single directive and are collected into the batch report instead of aborting.
"""

from pathlib import Path
from typing import Optional, Union


class NbSyncError(Exception):
    """Base exception for nbsync operations."""


class ConfigError(NbSyncError):
    """Raised when the configuration file cannot be read or is invalid."""


class DiscoveryError(NbSyncError):
    """Raised when the source tree cannot be traversed."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"cannot scan {self.path}: {reason}")


class DirectiveError(NbSyncError):
    """Base class for failures attributable to a single directive."""

    kind = "error"

    def __init__(self, directive, message: str):
        self.directive = directive
        self.message = message
        super().__init__(f"{directive.source_path}: {self.kind}: {message}")


class DirectoryCreationError(DirectiveError):
    """Raised when the destination directory cannot be created."""

    kind = "cannot create destination directory"


class ExternalToolError(DirectiveError):
    """Raised when the converter process cannot be launched."""

    kind = "converter unavailable"


class ConversionFailedError(DirectiveError):
    """Raised when the converter ran but exited with a non-zero status."""

    kind = "conversion failed"

    def __init__(self, directive, message: str, returncode: Optional[int] = None, stderr: str = ""):
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(directive, message)


class ConversionTimeoutError(ConversionFailedError):
    """Raised when the converter exceeds its time budget."""

    kind = "conversion timed out"
