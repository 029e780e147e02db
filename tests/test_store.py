from BackEnd.core.config import CURRENT_USER_KEY, SESSIONS_KEY, USERS_KEY
from BackEnd.core.store import MemoryStore, SqliteStore


def test_missing_key_returns_default():
	store = MemoryStore()
	assert store.get(USERS_KEY) is None
	assert store.get(USERS_KEY, []) == []


def test_corrupt_value_reads_as_default():
	store = MemoryStore({SESSIONS_KEY: "{not json"})
	assert store.get(SESSIONS_KEY, []) == []


def test_set_get_remove():
	store = MemoryStore()
	store.set(CURRENT_USER_KEY, {"id": "u_1"})
	assert store.get(CURRENT_USER_KEY) == {"id": "u_1"}
	store.remove(CURRENT_USER_KEY)
	assert store.get(CURRENT_USER_KEY) is None


def test_sqlite_store_survives_reopen(tmp_path):
	path = tmp_path / "focus400.db"
	store = SqliteStore(path)
	store.set_many({USERS_KEY: [{"id": "u_1", "totalSeconds": 5}], SESSIONS_KEY: []})
	store.set(USERS_KEY, [{"id": "u_1", "totalSeconds": 65}])

	reopened = SqliteStore(path)
	assert reopened.get(USERS_KEY) == [{"id": "u_1", "totalSeconds": 65}]
	assert reopened.get(SESSIONS_KEY) == []
	reopened.remove(SESSIONS_KEY)
	assert SqliteStore(path).get(SESSIONS_KEY) is None


def test_sqlite_store_corrupt_row(tmp_path):
	store = SqliteStore(tmp_path / "focus400.db")
	conn = store.connect()
	with conn:
		conn.execute("INSERT INTO kv (key, value) VALUES (?, ?)", (USERS_KEY, "[{"))
	conn.close()
	assert store.get(USERS_KEY, []) == []


def test_default_path_honours_data_dir_env(tmp_path, monkeypatch):
	monkeypatch.setenv("FOCUS400_DATA_DIR", str(tmp_path / "data"))
	store = SqliteStore()
	store.set(CURRENT_USER_KEY, {"id": "u_9"})
	assert (tmp_path / "data" / "focus400.db").exists()
