"""Shared pytest fixtures for FitFlow tests."""

import sys
import pytest

from PyQt6.QtCore import QCoreApplication

from fitflow.database.db import configure_engine, init_db
from fitflow.program import FULL_BODY_EXPRESS
from fitflow.session import Start, initial_state, reduce
from fitflow.session.driver import SessionDriver

from helpers import FakeClock, FakeSoundManager


@pytest.fixture(scope="session")
def qapp():
    """A single Qt application instance shared across the entire test run."""
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def idle():
    return initial_state()


@pytest.fixture
def running(clock):
    """FULL_BODY_EXPRESS just started at ``clock.now``."""
    return reduce(initial_state(), Start(FULL_BODY_EXPRESS), clock)


@pytest.fixture
def sounds():
    return FakeSoundManager()


@pytest.fixture
def driver(qapp, clock, sounds):
    """Driver on a fake clock with history ON and a recording sound sink."""
    d = SessionDriver(parent=None, clock=clock, sound_manager=sounds)
    yield d
    d.reset()


@pytest.fixture
def driver_no_history(qapp, clock):
    d = SessionDriver(parent=None, clock=clock, history_enabled=False)
    yield d
    d.reset()
