import logging
import os
import sys
import textwrap
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def ensure_valid_cwd():
    try:
        os.getcwd()
    except FileNotFoundError:
        os.chdir(Path(__file__).resolve().parents[1])
    yield


@pytest.fixture(autouse=True)
def isolate_config(monkeypatch):
    """Keep a developer's NBSYNC_CONFIG from leaking into tests."""
    monkeypatch.delenv("NBSYNC_CONFIG", raising=False)
    yield


@pytest.fixture(autouse=True)
def restore_root_logging():
    """The CLI reconfigures the root logger; put it back after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def touch():
    """Create a file (and its parents) and return its path."""

    def _touch(path: Path, content: str = "") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _touch


FAKE_JUPYTEXT = textwrap.dedent(
    """
    import os
    import sys
    import time

    args = sys.argv[1:]
    fmt = next(a for a in args if a.startswith("--to="))[len("--to="):]
    output = next(a for a in args if a.startswith("--output="))[len("--output="):]
    source = args[-1]

    name = os.path.basename(source)
    if "broken" in name:
        sys.stderr.write("[jupytext] Error: cannot read " + source + "\\n")
        sys.exit(3)
    if "garbled" in name:
        sys.stderr.flush()
        os.write(2, b"\\xff\\xfe garbage\\n")
        sys.exit(1)
    if "chatty" in name:
        print("[jupytext] Reading " + source)
    if "slow" in name:
        time.sleep(30)

    with open(source, encoding="utf-8") as f:
        data = f.read()
    with open(output, "w", encoding="utf-8") as f:
        f.write(fmt + ":" + data)
    """
)


@pytest.fixture
def fake_jupytext(tmp_path):
    """
    A stand-in for the jupytext CLI, returned as an argv prefix.

    It copies the source into the output prefixed with the format token,
    fails on sources containing "broken", writes undecodable stderr for
    "garbled", prints progress for "chatty" and hangs on "slow".
    """
    script = tmp_path / "bin" / "fake_jupytext.py"
    script.parent.mkdir()
    script.write_text(FAKE_JUPYTEXT, encoding="utf-8")
    return [sys.executable, str(script)]
