import logging
import uuid

from BackEnd.core.config import AVATAR_URL, CURRENT_USER_KEY, USERS_KEY
from BackEnd.core.errors import UnknownUserError, ValidationError
from BackEnd.core.models import User

logger = logging.getLogger(__name__)


def new_user_id():
	return f"u_{uuid.uuid4().hex[:12]}"


def avatar_for(email):
	return AVATAR_URL.format(email=email)


class UserDirectory:
	"""Users keyed by email, plus the persisted current-identity pointer."""

	def __init__(self, store):
		self.store = store

	def all_users(self):
		"""Return every stored user in insertion order; unreadable data reads as empty."""
		raw = self.store.get(USERS_KEY, [])
		if not isinstance(raw, list):
			logger.warning("Users collection is not a list, treating as empty")
			return []
		users = []
		for item in raw:
			try:
				users.append(User.from_dict(item))
			except (KeyError, TypeError, ValueError):
				logger.warning("Skipping malformed user record: %r", item)
		return users

	def get(self, user_id):
		for user in self.all_users():
			if user.id == user_id:
				return user
		return None

	def find_by_email(self, email):
		for user in self.all_users():
			if user.email == email:
				return user
		return None

	def login_or_create(self, email, name=""):
		"""Fetch the user for `email`, creating it on first login, and make it current."""
		email = (email or "").strip()
		if not email:
			raise ValidationError("email is required")
		users = self.all_users()
		user = next((u for u in users if u.email == email), None)
		writes = {}
		if user is None:
			user = User(
				id=new_user_id(),
				name=(name or "").strip() or email.split("@")[0],
				email=email,
				avatar=avatar_for(email),
				total_seconds=0,
			)
			users.append(user)
			writes[USERS_KEY] = [u.to_dict() for u in users]
			logger.info("Created user %s for %s", user.id, email)
		writes[CURRENT_USER_KEY] = user.to_dict()
		self.store.set_many(writes)
		return user

	def current_identity(self):
		raw = self.store.get(CURRENT_USER_KEY)
		if not raw:
			return None
		try:
			return User.from_dict(raw)
		except (KeyError, TypeError, ValueError, AttributeError):
			logger.warning("Current identity is unreadable, treating as logged out")
			return None

	def logout(self):
		self.store.remove(CURRENT_USER_KEY)

	def leaderboard(self):
		"""Return all users by total seconds, highest first. Ties keep stored order."""
		return sorted(self.all_users(), key=lambda u: u.total_seconds, reverse=True)

	def credit_writes(self, user_id, seconds):
		"""
		Build the store writes that add `seconds` to a user's total.

		Returns (updated_user, writes). The current identity is included when it
		points at the same user. Nothing is written here.
		"""
		users = self.all_users()
		for i, user in enumerate(users):
			if user.id == user_id:
				break
		else:
			raise UnknownUserError(f"unknown user id {user_id!r}")
		updated = user.with_added_seconds(seconds)
		users[i] = updated
		writes = {USERS_KEY: [u.to_dict() for u in users]}
		current = self.current_identity()
		if current is not None and current.id == user_id:
			writes[CURRENT_USER_KEY] = updated.to_dict()
		return updated, writes
