"""
p4lite Test Configuration
=========================

Isolates every test from P4LITE_* environment variables and from default
parser options cached by earlier tests.
"""

import pytest

from p4lite.config import set_default_options


@pytest.fixture(autouse=True)
def clean_parser_environment(monkeypatch):
    """Fixture: fresh default options and no P4LITE_* overrides."""
    for name in ("P4LITE_ALLOW_COMMENTS", "P4LITE_MAX_NESTING_DEPTH", "P4LITE_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    set_default_options(None)
    yield
    set_default_options(None)
