import random

import pytest

from BackEnd.core.config import CURRENT_USER_KEY, SESSIONS_KEY, USERS_KEY
from BackEnd.core.errors import UnknownUserError, ValidationError
from BackEnd.core.models import StudySession
from BackEnd.repos.session_repo import SessionLedger


def make_session(user_id, start_ms, seconds=600, subject="Math", sid=None):
	return StudySession(
		id=sid or f"sess_{start_ms}",
		user_id=user_id,
		start_time=start_ms,
		end_time=start_ms + seconds * 1000,
		duration_seconds=seconds,
		subject=subject,
		notes="",
	)


def test_record_appends_and_credits_owner(store, directory, ledger):
	user = directory.login_or_create("a@x.com", "Alice")
	updated = ledger.record_session(make_session(user.id, 1_000, seconds=90))
	assert updated.total_seconds == 90
	assert directory.get(user.id).total_seconds == 90
	assert directory.current_identity().total_seconds == 90
	assert len(store.get(SESSIONS_KEY)) == 1


def test_record_writes_everything_in_one_call(store, directory, ledger):
	user = directory.login_or_create("a@x.com", "Alice")
	calls = []
	original = store.set_many

	def spy(values):
		calls.append(set(values))
		original(values)

	store.set_many = spy
	ledger.record_session(make_session(user.id, 1_000))
	assert calls == [{SESSIONS_KEY, USERS_KEY, CURRENT_USER_KEY}]


def test_other_users_identity_untouched(directory, ledger):
	alice = directory.login_or_create("a@x.com", "Alice")
	bob = directory.login_or_create("b@x.com", "Bob")
	ledger.record_session(make_session(alice.id, 1_000, seconds=120))
	assert directory.current_identity() == bob
	assert directory.get(alice.id).total_seconds == 120


def test_short_session_rejected(directory, ledger):
	user = directory.login_or_create("a@x.com", "Alice")
	with pytest.raises(ValidationError):
		ledger.record_session(make_session(user.id, 1_000, seconds=59))
	assert ledger.sessions_for_user(user.id) == []


def test_unknown_user_rejected(store, ledger):
	with pytest.raises(UnknownUserError):
		ledger.record_session(make_session("u_ghost", 1_000))
	assert store.get(SESSIONS_KEY) is None


def test_sessions_for_user_most_recent_first(directory, ledger):
	alice = directory.login_or_create("a@x.com", "Alice")
	bob = directory.login_or_create("b@x.com", "Bob")
	starts = list(range(0, 20 * 3_600_000, 3_600_000))
	random.Random(7).shuffle(starts)
	for start in starts:
		ledger.record_session(make_session(alice.id, start))
	ledger.record_session(make_session(bob.id, 5, sid="sess_bob"))

	mine = ledger.sessions_for_user(alice.id)
	assert len(mine) == 20
	assert all(s.user_id == alice.id for s in mine)
	assert [s.start_time for s in mine] == sorted(starts, reverse=True)
	assert [s.id for s in ledger.sessions_for_user(bob.id)] == ["sess_bob"]


def test_totals_never_decrease(directory, ledger):
	user = directory.login_or_create("a@x.com", "Alice")
	seen = [0]
	for i, seconds in enumerate([60, 3600, 61, 7200]):
		ledger.record_session(make_session(user.id, i * 10_000_000, seconds=seconds))
		seen.append(directory.get(user.id).total_seconds)
	assert seen == sorted(seen)
	assert seen[-1] == 60 + 3600 + 61 + 7200


def test_corrupt_sessions_collection_reads_empty(store, directory):
	user = directory.login_or_create("a@x.com", "Alice")
	store._data[SESSIONS_KEY] = "not-json"
	ledger = SessionLedger(store, directory)
	assert ledger.sessions_for_user(user.id) == []
	ledger.record_session(make_session(user.id, 1_000))
	assert len(ledger.sessions_for_user(user.id)) == 1
