"""
Command line interface for nbsync.
"""
import argparse
import sys
from typing import List, Optional

from . import __version__
from .config import GlobalConfig, resolve_config_path
from .converter import JupytextConverter
from .errors import ConfigError, DiscoveryError
from .mapping import Direction
from .orchestrator import BatchReport, run
from .utils import (
    Colors,
    _filter_suppressed_help,
    configure_logging,
    print_error,
    print_info,
    print_subheader,
    print_success,
    print_warning,
    styled_print,
)


EXIT_OK = 0
EXIT_PARTIAL_FAILURE = 1
EXIT_ERROR = 2


class StyledArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that prints colourised help with an optional banner."""

    def __init__(self, *args, show_banner=False, **kwargs):
        super().__init__(*args, **kwargs)
        self.show_banner = show_banner

    def print_help(self, file=None):
        if self.show_banner:
            import pyfiglet

            ascii_art = pyfiglet.figlet_format("nbsync", font="slant")
            for line in ascii_art.split('\n'):
                if line.strip():
                    styled_print(line, Colors.BRIGHT_CYAN, Colors.BOLD, 0, file=file)
            print(file=file)

        help_text = _filter_suppressed_help(super().format_help())
        for line in help_text.split('\n'):
            if not line.strip():
                continue
            elif line.startswith('usage:'):
                styled_print(line, Colors.BRIGHT_YELLOW, Colors.BOLD, 0, file=file)
            elif line.startswith('options:') or line.startswith('optional arguments:'):
                styled_print(line, Colors.BRIGHT_CYAN, Colors.BOLD, 0, file=file)
            elif line.startswith('  -'):
                styled_print(line, Colors.BRIGHT_YELLOW, None, 0, file=file)
            else:
                styled_print(line, Colors.BRIGHT_GREEN, None, 0, file=file)

        if self.show_banner:
            print(file=file)
            styled_print(f" nbsync v{__version__} ", Colors.BRIGHT_MAGENTA, None, 0, file=file)


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return number


def _non_negative_float(value: str) -> float:
    number = float(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {value}")
    return number


def create_parser(show_banner: bool = True) -> argparse.ArgumentParser:
    """Create the argument parser for nbsync."""
    parser = StyledArgumentParser(
        prog="nbsync",
        description="Keep notebooks and their .nb/ script twins in sync.\n\n"
                    "By default every *.ipynb is converted to .nb/<name>.py next to it;\n"
                    "--reverse converts every .nb/*.py back to <name>.ipynb.",
        formatter_class=argparse.RawTextHelpFormatter,
        show_banner=show_banner,
        allow_abbrev=False,
    )
    parser.add_argument('--version', action='version',
                        version=f'nbsync {__version__}',
                        help='Show version information')
    parser.add_argument('--reverse', action='store_true',
                        help='Convert scripts back to notebooks')
    parser.add_argument('--root', default='.',
                        help='Directory to scan (default: current directory)')
    parser.add_argument('--config', default=None,
                        help='Path to config file (default: $NBSYNC_CONFIG or <root>/.nbsync.toml)')
    parser.add_argument('-j', '--jobs', type=_positive_int, default=None,
                        help='Number of conversions to run in parallel')
    parser.add_argument('--timeout', type=_non_negative_float, default=None,
                        help='Seconds allowed per conversion, 0 for no limit')
    parser.add_argument('--converter', default=None,
                        help='Converter command (default: jupytext)')
    parser.add_argument('-n', '--dry-run', action='store_true',
                        help='List the conversions without running them')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Show debug logging')
    parser.add_argument('-q', '--quiet', action='store_true',
                        help='Only report failures')
    return parser


def print_report(report: BatchReport, quiet: bool = False) -> None:
    if report.dry_run:
        for result in report.results:
            print_info(str(result.directive))
        if not quiet:
            print_subheader(report.summary())
        return

    for result in report.failed:
        error = result.error
        print_error(f"FAILED {result.directive}: {error.kind}: {error.message}")

    if quiet:
        return
    if report.ok:
        print_success(report.summary())
    else:
        print_warning(report.summary())


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the nbsync CLI; returns the process exit code."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = GlobalConfig.load(resolve_config_path(args.root, args.config))
    except ConfigError as e:
        print_error(f"Error: {e}")
        return EXIT_ERROR

    configure_logging(verbose=args.verbose or config.verbose, quiet=args.quiet)

    direction = Direction.REVERSE if args.reverse else Direction.FORWARD
    jobs = args.jobs if args.jobs is not None else config.sync.jobs
    timeout = args.timeout if args.timeout is not None else config.converter.timeout
    command = args.converter or config.converter.command

    try:
        converter = JupytextConverter(command, timeout)
    except ValueError as e:
        print_error(f"Error: {e}")
        return EXIT_ERROR

    try:
        report = run(
            direction,
            root=args.root,
            converter=converter,
            jobs=jobs,
            ignore_patterns=config.sync.ignore_patterns,
            hidden_dir=config.sync.hidden_dir,
            dry_run=args.dry_run,
        )
    except DiscoveryError as e:
        print_error(f"Error: {e}")
        return EXIT_ERROR

    print_report(report, quiet=args.quiet)
    return EXIT_OK if report.ok else EXIT_PARTIAL_FAILURE


if __name__ == '__main__':
    sys.exit(main())
