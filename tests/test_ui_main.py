"""MainWindow timer flow, rendered offscreen with a hand-driven clock."""

import pytest

pytest.importorskip("PySide6.QtWidgets")
pytest.importorskip("matplotlib")

from BackEnd.core.config import QUOTE_FALLBACK, USERS_KEY
from BackEnd.services.accumulator import NO_SUBJECT_WARNING, TOO_SHORT_WARNING
from BackEnd.services.advisory_service import Advisor
from FrontEnd import ui_main


class OfflineGenerator:
	def generate(self, prompt):
		raise ConnectionError("offline")


@pytest.fixture
def warnings(monkeypatch):
	shown = []
	monkeypatch.setattr(ui_main.QMessageBox, "warning",
		lambda parent, title, text: shown.append(text))
	return shown


@pytest.fixture
def window(qapp, directory, ledger, clock, warnings):
	user = directory.login_or_create("a@x.com", "Alice")
	win = ui_main.MainWindow(directory, ledger, Advisor(OfflineGenerator()))
	win.timer_service.clock = clock
	win.alice = user
	yield win
	win.timer_service.discard()
	win.close()
	win.deleteLater()


def run_for(win, clock, seconds):
	win.timer_service.toggle()
	clock.advance(seconds=seconds)
	win._end()


def test_restores_logged_in_user(window):
	assert window.user == window.alice
	assert window.root_stack.currentIndex() == 1


def test_short_run_then_valid_run_saves_once(window, ledger, directory, clock, warnings):
	window.subject_input.setText("Math")
	window.notes_input.setPlainText("warm-up")
	run_for(window, clock, 30)
	assert warnings == [TOO_SHORT_WARNING]
	assert window.subject_input.text() == ""
	assert window.notes_input.toPlainText() == ""

	window.subject_input.setText("Math")
	run_for(window, clock, 120)
	assert warnings == [TOO_SHORT_WARNING]
	sessions = ledger.sessions_for_user(window.alice.id)
	assert [(s.subject, s.duration_seconds) for s in sessions] == [("Math", 120)]
	assert directory.get(window.alice.id).total_seconds == 120
	assert window.user.total_seconds == 120
	assert window.subject_input.text() == ""


def test_visible_subject_is_what_gets_saved(window, ledger, clock, warnings):
	window.subject_input.setText("Chemistry")
	window.timer_service.set_subject("")  # service out of step with the form
	run_for(window, clock, 90)
	assert warnings == []
	assert ledger.sessions_for_user(window.alice.id)[0].subject == "Chemistry"


def test_missing_subject_keeps_timer_and_form(window, ledger, clock, warnings):
	window.notes_input.setPlainText("notes so far")
	run_for(window, clock, 200)
	assert warnings == [NO_SUBJECT_WARNING]
	assert window.timer_service.elapsed_sec() == 200
	assert window.notes_input.toPlainText() == "notes so far"
	assert ledger.sessions_for_user(window.alice.id) == []


def test_failed_save_warns_and_keeps_timer(window, store, ledger, clock, warnings):
	window.subject_input.setText("Math")
	window.timer_service.toggle()
	clock.advance(seconds=600)
	store.set(USERS_KEY, [])
	window._end()
	assert len(warnings) == 1
	assert warnings[0].startswith("Could not save this session")
	assert window.timer_service.elapsed_sec() == 600
	assert window.subject_input.text() == "Math"
	assert window.end_btn.isEnabled()


def test_quote_falls_back_when_offline(window):
	assert window.advisor.motivational_quote(1) == QUOTE_FALLBACK
