"""
External converter interface.

The orchestrator talks to anything implementing ``Converter``. The default
implementation shells out to jupytext::

    jupytext --to=<format> --output=<destination> <source>

Launch failures surface as ``OSError`` and overruns as
``subprocess.TimeoutExpired``; the orchestrator maps both onto its own
error types.
"""

import logging
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Protocol, Sequence, Union

logger = logging.getLogger(__name__)

DEFAULT_COMMAND = "jupytext"
DEFAULT_TIMEOUT = 300


@dataclass
class ConversionResult:
    """Outcome of one converter invocation."""
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class Converter(Protocol):
    """Protocol for the content converter."""

    def convert(self, source: Path, destination: Path, target_format: str) -> ConversionResult:
        """Read ``source`` and write ``destination`` in ``target_format``."""
        ...


class JupytextConverter:
    """Runs the jupytext command line as a subprocess."""

    def __init__(self, command: Union[str, Sequence[str]] = DEFAULT_COMMAND,
                 timeout: Optional[float] = DEFAULT_TIMEOUT):
        """
        Args:
            command: Executable plus any leading arguments, either as a list
                or a shell-style string such as ``"python -m jupytext"``
            timeout: Seconds allowed per invocation; ``None`` or ``0`` waits
                indefinitely
        """
        self.command = shlex.split(command) if isinstance(command, str) else list(command)
        if not self.command:
            raise ValueError("converter command must not be empty")
        self.timeout = timeout or None

    def build_argv(self, source: Path, destination: Path, target_format: str) -> List[str]:
        return [
            *self.command,
            f"--to={target_format}",
            f"--output={destination}",
            str(source),
        ]

    def convert(self, source: Path, destination: Path, target_format: str) -> ConversionResult:
        argv = self.build_argv(source, destination, target_format)
        logger.debug("Running %s", shlex.join(argv))
        proc = subprocess.run(
            argv,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            errors="replace",
            timeout=self.timeout,
            check=False,
        )
        return ConversionResult(proc.returncode, proc.stdout, proc.stderr)
