import logging

import pytest

from nbsync.utils import Colors, configure_logging, print_error, styled_print


@pytest.mark.parametrize(
    "verbose, quiet, level",
    [
        (False, False, logging.WARNING),
        (True, False, logging.DEBUG),
        (False, True, logging.ERROR),
        (True, True, logging.DEBUG),
    ],
)
def test_configure_logging_levels(verbose, quiet, level):
    configure_logging(verbose=verbose, quiet=quiet)

    assert logging.getLogger().level == level


def test_styled_print_plain_when_not_a_tty(capsys):
    styled_print("hello", Colors.GREEN, Colors.BOLD, indent=2)

    assert capsys.readouterr().out == "  hello\n"


def test_print_error_goes_to_stderr(capsys):
    print_error("bad")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == "bad\n"
