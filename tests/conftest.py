"""Pytest configuration. Shared fixtures for the fake tool runner and log capture."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from fakes import FakeToolRunner
from makeuniversal.log import ROOT_LOGGER


@pytest.fixture
def fake_runner() -> FakeToolRunner:
    return FakeToolRunner()


@pytest.fixture
def trees(tmp_path: Path):
    """Return (primary, secondary, destination) roots; the first two exist."""
    primary = tmp_path / "x86_64"
    secondary = tmp_path / "arm64"
    destination = tmp_path / "universal"
    primary.mkdir()
    secondary.mkdir()
    return primary, secondary, destination


@pytest.fixture
def captured_log(caplog):
    """Attach caplog directly to the makeuniversal logger, which does not propagate once configured."""
    logger = logging.getLogger(ROOT_LOGGER)
    previous_level = logger.level
    logger.addHandler(caplog.handler)
    logger.setLevel(logging.DEBUG)
    yield caplog
    logger.removeHandler(caplog.handler)
    logger.setLevel(previous_level)
