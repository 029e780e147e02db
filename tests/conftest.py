import os

import pytest

from BackEnd.core.store import MemoryStore
from BackEnd.repos.session_repo import SessionLedger
from BackEnd.repos.user_repo import UserDirectory


class FakeClock:
	"""Manually advanced epoch-ms clock."""

	def __init__(self, start_ms=1_700_000_000_000):
		self.now = start_ms

	def __call__(self):
		return self.now

	def advance(self, seconds=0, ms=0):
		self.now += seconds * 1000 + ms


@pytest.fixture
def clock():
	return FakeClock()


@pytest.fixture
def store():
	return MemoryStore()


@pytest.fixture
def directory(store):
	return UserDirectory(store)


@pytest.fixture
def ledger(store, directory):
	return SessionLedger(store, directory)


@pytest.fixture(scope="session")
def qapp():
	"""One widget-capable QApplication for every Qt test, rendered offscreen."""
	os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
	QtWidgets = pytest.importorskip("PySide6.QtWidgets")
	return QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
