import logging
import uuid

from BackEnd.core.config import MIN_SESSION_SECONDS, SESSIONS_KEY
from BackEnd.core.errors import ValidationError
from BackEnd.core.models import StudySession

logger = logging.getLogger(__name__)


def new_session_id():
	return f"sess_{uuid.uuid4().hex[:12]}"


class SessionLedger:
	"""Append-only store of finished study sessions."""

	def __init__(self, store, directory):
		self.store = store
		self.directory = directory

	def _all_sessions(self):
		raw = self.store.get(SESSIONS_KEY, [])
		if not isinstance(raw, list):
			logger.warning("Sessions collection is not a list, treating as empty")
			return []
		sessions = []
		for item in raw:
			try:
				sessions.append(StudySession.from_dict(item))
			except (KeyError, TypeError, ValueError):
				logger.warning("Skipping malformed session record: %r", item)
		return sessions

	def record_session(self, session):
		"""
		Append a session and credit its duration to the owner.

		The session list, the users list and (when it is the owner) the
		current identity go to the store in one write. Returns the updated user.
		"""
		if session.duration_seconds < MIN_SESSION_SECONDS:
			raise ValidationError(
				f"session shorter than {MIN_SESSION_SECONDS}s: {session.duration_seconds}s")
		user, writes = self.directory.credit_writes(session.user_id, session.duration_seconds)
		sessions = self._all_sessions()
		sessions.append(session)
		writes[SESSIONS_KEY] = [s.to_dict() for s in sessions]
		self.store.set_many(writes)
		logger.info("Recorded %ss of %s for %s", session.duration_seconds, session.subject, user.id)
		return user

	def sessions_for_user(self, user_id):
		"""Return a user's sessions, most recent start first."""
		mine = [s for s in self._all_sessions() if s.user_id == user_id]
		return sorted(mine, key=lambda s: s.start_time, reverse=True)
