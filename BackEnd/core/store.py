"""
Key-value persistence for Focus400.

Values are JSON documents stored under string keys. `SqliteStore` keeps them
in a single table inside the per-user data directory; `MemoryStore` keeps
them in a dict and is used by tests.
"""

import json
import logging
import sqlite3

from BackEnd.core.paths import db_path

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS kv (
	key TEXT PRIMARY KEY,
	value TEXT NOT NULL
);
"""


class Store:
	"""Synchronous get/set/remove of JSON values by key."""

	def get(self, key, default=None):
		raw = self._read(key)
		if raw is None:
			return default
		try:
			return json.loads(raw)
		except (TypeError, ValueError):
			logger.warning("Corrupt value under %r, treating as empty", key)
			return default

	def set(self, key, value):
		self.set_many({key: value})

	def set_many(self, values):
		"""Write several keys at once; None removes a key."""
		encoded = {k: (None if v is None else json.dumps(v)) for k, v in values.items()}
		self._write(encoded)

	def remove(self, key):
		self.set_many({key: None})

	def _read(self, key):
		raise NotImplementedError

	def _write(self, encoded):
		raise NotImplementedError


class MemoryStore(Store):
	def __init__(self, initial=None):
		self._data = dict(initial or {})

	def _read(self, key):
		return self._data.get(key)

	def _write(self, encoded):
		for key, raw in encoded.items():
			if raw is None:
				self._data.pop(key, None)
			else:
				self._data[key] = raw


class SqliteStore(Store):
	def __init__(self, path=None):
		self.path = path or db_path()

	def connect(self):
		"""Open SQLite connection and ensure schema is applied."""
		conn = sqlite3.connect(self.path)
		conn.row_factory = sqlite3.Row
		conn.executescript(SCHEMA)
		return conn

	def _read(self, key):
		conn = self.connect()
		try:
			row = conn.execute("SELECT value FROM kv WHERE key=?", (key,)).fetchone()
			return row["value"] if row else None
		finally:
			conn.close()

	def _write(self, encoded):
		conn = self.connect()
		try:
			# the connection context manager commits all keys together or rolls back
			with conn:
				for key, raw in encoded.items():
					if raw is None:
						conn.execute("DELETE FROM kv WHERE key=?", (key,))
					else:
						conn.execute(
							"INSERT INTO kv (key, value) VALUES (?, ?) "
							"ON CONFLICT(key) DO UPDATE SET value=excluded.value",
							(key, raw)
						)
		finally:
			conn.close()
