# tests/conftest.py
"""Shared fixtures for the dcl test suite."""

import io

import pytest
from rich.console import Console

from dcl.core.messages import MessageWriter
from dcl.dispatch.context import InvocationContext
from dcl.dispatch.options import GlobalOptions


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the user's rc-file and DCL_* environment out of every test."""
    for name in ("DCL_LINK_DIR", "DCL_TARGET", "DCL_VERBOSE", "DCL_PAGER",
                 "DCL_PRESERVE", "DCL_CONFIRM", "DCL_DEBUG"):
        monkeypatch.delenv(name, raising=False)
    config_file = tmp_path / "config" / ".dcl.yaml.rc"
    monkeypatch.setenv("DCL_CONFIG_FILE", str(config_file))
    return config_file


@pytest.fixture
def stderr_buffer():
    return io.StringIO()


@pytest.fixture
def messages(stderr_buffer):
    """A MessageWriter that records into a buffer instead of the terminal."""
    return MessageWriter(Console(file=stderr_buffer, highlight=False, width=200))


@pytest.fixture
def make_context():
    def _make(name, args=(), **options):
        return InvocationContext.build(name, list(args), GlobalOptions(**options))
    return _make
