"""
Conversion orchestration.

``apply`` realizes a single directive; ``run`` discovers and applies a whole
batch, isolating per-directive failures so one bad file never stops the rest.
"""

import logging
import queue
import subprocess
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .converter import ConversionResult, Converter, JupytextConverter
from .errors import (
    ConversionFailedError,
    ConversionTimeoutError,
    DirectiveError,
    DirectoryCreationError,
    ExternalToolError,
)
from .mapping import DEFAULT_HIDDEN_DIR, Direction, Directive, discover

logger = logging.getLogger(__name__)


@dataclass
class DirectiveResult:
    directive: Directive
    error: Optional[DirectiveError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchReport:
    """Per-directive outcomes of one run, in discovery order."""
    direction: Direction
    results: List[DirectiveResult] = field(default_factory=list)
    dry_run: bool = False

    @property
    def succeeded(self) -> List[DirectiveResult]:
        return [result for result in self.results if result.ok]

    @property
    def failed(self) -> List[DirectiveResult]:
        return [result for result in self.results if not result.ok]

    @property
    def ok(self) -> bool:
        return not self.failed

    def summary(self) -> str:
        if self.dry_run:
            return f"{len(self.results)} file(s) would be converted"
        return (f"{len(self.succeeded)} converted, {len(self.failed)} failed, "
                f"{len(self.results)} total")


def ensure_destination_dir(directive: Directive) -> Path:
    """Create the destination's parent directory; existing ones are left untouched."""
    parent = directive.destination_path.parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryCreationError(directive, f"{parent}: {exc.strerror or exc}") from exc
    return parent


def apply(directive: Directive, converter: Converter) -> None:
    """
    Convert one file.

    Raises:
        DirectoryCreationError: destination directory could not be created
        ExternalToolError: converter could not be launched
        ConversionTimeoutError: converter exceeded its timeout
        ConversionFailedError: converter exited non-zero
    """
    ensure_destination_dir(directive)

    try:
        result = converter.convert(
            directive.source_path,
            directive.destination_path,
            directive.target_format,
        )
    except subprocess.TimeoutExpired as exc:
        raise ConversionTimeoutError(
            directive, f"no result after {exc.timeout:g} seconds"
        ) from exc
    except OSError as exc:
        raise ExternalToolError(directive, exc.strerror or str(exc)) from exc

    if result.stdout.strip():
        logger.debug("%s output:\n%s", directive.source_path, result.stdout.rstrip())
    if not result.ok:
        raise ConversionFailedError(
            directive, _describe_failure(result), result.returncode, result.stderr
        )
    logger.info("Converted %s", directive)


def run(direction: Direction, root: Union[str, Path] = ".",
        converter: Optional[Converter] = None, jobs: int = 1,
        ignore_patterns: Sequence[str] = (), hidden_dir: str = DEFAULT_HIDDEN_DIR,
        dry_run: bool = False) -> BatchReport:
    """
    Discover every directive under ``root`` and apply each one.

    A DiscoveryError propagates and aborts the run. DirectiveErrors are
    recorded on the returned report and the batch carries on.

    Args:
        direction: Which way to convert
        root: Directory to scan
        converter: Converter to use; defaults to ``JupytextConverter()``
        jobs: Number of worker threads; 1 applies directives in order
        ignore_patterns: Names to prune from discovery
        hidden_dir: Name of the script directory
        dry_run: Only discover; no directories or conversions

    Returns:
        BatchReport with one entry per discovered directive
    """
    directives = discover(direction, root, ignore_patterns=ignore_patterns, hidden_dir=hidden_dir)
    logger.info("Found %d file(s) to convert %s under %s", len(directives), direction.value, root)

    report = BatchReport(direction=direction, dry_run=dry_run)
    if dry_run:
        report.results = [DirectiveResult(directive) for directive in directives]
        return report

    if converter is None:
        converter = JupytextConverter()

    if jobs > 1 and len(directives) > 1:
        report.results = _apply_parallel(directives, converter, jobs)
    else:
        report.results = [_apply_isolated(directive, converter) for directive in directives]
    return report


def _apply_isolated(directive: Directive, converter: Converter) -> DirectiveResult:
    try:
        apply(directive, converter)
    except DirectiveError as exc:
        logger.info("%s", exc)
        return DirectiveResult(directive, exc)
    return DirectiveResult(directive)


def _apply_parallel(directives: List[Directive], converter: Converter, jobs: int) -> List[DirectiveResult]:
    work: "queue.Queue" = queue.Queue()
    for index, directive in enumerate(directives):
        work.put((index, directive))

    results: List[Optional[DirectiveResult]] = [None] * len(directives)
    unexpected: List[BaseException] = []

    def worker():
        while not unexpected:
            try:
                index, directive = work.get_nowait()
            except queue.Empty:
                return
            try:
                results[index] = _apply_isolated(directive, converter)
            except Exception as exc:
                unexpected.append(exc)
                return

    threads = [
        threading.Thread(target=worker, name=f"nbsync-worker-{n}")
        for n in range(min(jobs, len(directives)))
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    if unexpected:
        raise unexpected[0]
    return results


def _describe_failure(result: ConversionResult) -> str:
    message = f"exit status {result.returncode}"
    lines = [line for line in result.stderr.splitlines() if line.strip()]
    if lines:
        message += f": {lines[-1].strip()}"
    return message
