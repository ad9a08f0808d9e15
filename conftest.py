"""Workspace-level pytest configuration and fixtures."""

import os

import pytest


@pytest.fixture(autouse=True, scope="function")
def isolate_classmeta_environment(monkeypatch: pytest.MonkeyPatch):
    """Automatically clear CLASSMETA_* environment variables for each test.

    Configuration falls back to the environment, so a variable exported in
    the developer's shell would otherwise change test results.
    """
    for name in list(os.environ):
        if name.startswith("CLASSMETA_"):
            monkeypatch.delenv(name)

    yield
