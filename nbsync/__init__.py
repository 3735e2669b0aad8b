"""
nbsync - keep Jupyter notebooks and their hidden script twins in sync.

Every ``dir/name.ipynb`` is paired with ``dir/.nb/name.py``; the actual
content conversion is delegated to jupytext.
"""

__version__ = "0.1.0"

from .errors import (
    ConfigError,
    ConversionFailedError,
    ConversionTimeoutError,
    DirectiveError,
    DirectoryCreationError,
    DiscoveryError,
    ExternalToolError,
    NbSyncError,
)
from .mapping import Direction, Directive, destination_for, discover, matches
from .orchestrator import BatchReport, DirectiveResult, apply, run


def main(*args, **kwargs):
    """Lazy import to avoid CLI startup side effects on library import."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "__version__",
    "main",
    "Direction",
    "Directive",
    "destination_for",
    "discover",
    "matches",
    "apply",
    "run",
    "BatchReport",
    "DirectiveResult",
    "NbSyncError",
    "ConfigError",
    "DiscoveryError",
    "DirectiveError",
    "DirectoryCreationError",
    "ExternalToolError",
    "ConversionFailedError",
    "ConversionTimeoutError",
]
