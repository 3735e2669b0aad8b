"""
Terminal styling and logging helpers for nbsync.
"""
import logging
import sys

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


# ANSI color codes for styling
class Colors:
    # Text colors
    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    BLUE = '\033[34m'
    CYAN = '\033[36m'

    # Bright colors
    BRIGHT_GREEN = '\033[92m'
    BRIGHT_YELLOW = '\033[93m'
    BRIGHT_MAGENTA = '\033[95m'
    BRIGHT_CYAN = '\033[96m'
    BRIGHT_WHITE = '\033[97m'

    # Formatting
    BOLD = '\033[1m'
    DIM = '\033[2m'

    # Reset
    RESET = '\033[0m'


def styled_print(text, color=None, style=None, indent=0, file=None):
    """
    Print styled text with optional color, style, and indentation.

    Args:
        text (str): Text to print
        color (str): Color from Colors class
        style (str): Style from Colors class
        indent (int): Number of spaces to indent
        file: Stream to write to (defaults to stdout)
    """
    stream = file or sys.stdout
    indent_str = " " * indent
    color_code = color or ""
    style_code = style or ""
    reset = Colors.RESET

    # Only apply colors if we're in a terminal that supports them
    if not (hasattr(stream, 'isatty') and stream.isatty()):
        color_code = style_code = reset = ""

    print(f"{indent_str}{color_code}{style_code}{text}{reset}", file=stream)


def print_subheader(text):
    """Print a styled subheader."""
    styled_print(f"\n{text}", Colors.CYAN, Colors.BOLD, 2)


def print_success(text, indent=0):
    """Print success message in green."""
    styled_print(text, Colors.GREEN, Colors.BOLD, indent)


def print_warning(text, indent=0):
    """Print warning message in yellow."""
    styled_print(text, Colors.YELLOW, Colors.BOLD, indent)


def print_error(text, indent=0):
    """Print error message in red, on stderr."""
    styled_print(text, Colors.RED, Colors.BOLD, indent, file=sys.stderr)


def print_info(text, indent=0):
    """Print info message in blue."""
    styled_print(text, Colors.BLUE, None, indent)


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Set the root log level: DEBUG with verbose, ERROR with quiet, WARNING otherwise."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)


def _filter_suppressed_help(help_text: str) -> str:
    """Remove lines carrying argparse's SUPPRESS marker from help text."""
    return '\n'.join(line for line in help_text.split('\n') if 'SUPPRESS' not in line)
