from BackEnd.core.config import SESSIONS_KEY, USERS_KEY
from BackEnd.core.store import MemoryStore
from reset_stats import reset_all_stats


def seeded():
	store = MemoryStore()
	store.set_many({USERS_KEY: [{"id": "u_1"}], SESSIONS_KEY: []})
	return store


def test_reset_after_confirmation(capsys):
	store = seeded()
	assert reset_all_stats(store, ask=lambda prompt: "yes")
	assert store.get(USERS_KEY) is None
	assert store.get(SESSIONS_KEY) is None
	assert "removed" in capsys.readouterr().out


def test_reset_cancelled():
	store = seeded()
	assert not reset_all_stats(store, ask=lambda prompt: "no")
	assert store.get(USERS_KEY) == [{"id": "u_1"}]


def test_reset_assume_yes_skips_prompt():
	def no_prompt(prompt):
		raise AssertionError("should not ask")

	store = seeded()
	assert reset_all_stats(store, assume_yes=True, ask=no_prompt)
	assert store.get(USERS_KEY) is None


def test_nothing_to_reset(capsys):
	assert not reset_all_stats(MemoryStore(), ask=lambda prompt: "yes")
	assert "already at 0" in capsys.readouterr().out
