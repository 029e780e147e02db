import pytest

from BackEnd.core.config import USERS_KEY
from BackEnd.core.errors import UnknownUserError, ValidationError
from BackEnd.core.models import User
from BackEnd.repos.user_repo import UserDirectory


def test_first_login_creates_user(directory):
	user = directory.login_or_create("a@x.com", "Alice")
	assert user.name == "Alice"
	assert user.email == "a@x.com"
	assert user.total_seconds == 0
	assert user.id.startswith("u_")
	assert user.avatar == "https://picsum.photos/seed/a@x.com/200"
	assert directory.current_identity() == user


def test_second_login_fetches_same_user(directory):
	first = directory.login_or_create("a@x.com", "Alice")
	directory.logout()
	again = directory.login_or_create("a@x.com", "Someone Else")
	assert again == first
	assert len(directory.all_users()) == 1


def test_blank_name_falls_back_to_email_local_part(directory):
	assert directory.login_or_create("bob@x.com", "").name == "bob"


def test_blank_email_rejected(directory):
	with pytest.raises(ValidationError):
		directory.login_or_create("  ", "Nobody")


def test_logout_clears_identity(directory):
	directory.login_or_create("a@x.com", "Alice")
	directory.logout()
	assert directory.current_identity() is None


def test_round_trip_through_store(store, directory):
	created = directory.login_or_create("a@x.com", "Alice")
	reread = UserDirectory(store)
	assert reread.get(created.id) == created
	assert reread.find_by_email("a@x.com") == created
	assert store.get(USERS_KEY) == [created.to_dict()]


def test_leaderboard_sorted_desc_and_stable(store, directory):
	users = [
		User("u_a", "A", "a@x.com", "", 100),
		User("u_b", "B", "b@x.com", "", 300),
		User("u_c", "C", "c@x.com", "", 100),
		User("u_d", "D", "d@x.com", "", 0),
		User("u_e", "E", "e@x.com", "", 900),
	]
	store.set(USERS_KEY, [u.to_dict() for u in users])
	board = directory.leaderboard()
	assert [u.id for u in board] == ["u_e", "u_b", "u_a", "u_c", "u_d"]
	totals = [u.total_seconds for u in board]
	assert totals == sorted(totals, reverse=True)


def test_malformed_users_collection_is_empty(store, directory):
	store.set(USERS_KEY, {"oops": True})
	assert directory.all_users() == []
	assert directory.leaderboard() == []


def test_credit_writes_does_not_write(store, directory):
	user = directory.login_or_create("a@x.com", "Alice")
	updated, writes = directory.credit_writes(user.id, 120)
	assert updated.total_seconds == 120
	assert directory.get(user.id).total_seconds == 0
	assert set(writes) == {"focus400_users", "focus400_currentUser"}


def test_credit_unknown_user(directory):
	with pytest.raises(UnknownUserError):
		directory.credit_writes("u_missing", 60)
