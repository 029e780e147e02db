"""Exception types shared by the Focus400 backend."""


class Focus400Error(Exception):
	"""Base class for application errors."""


class ValidationError(Focus400Error, ValueError):
	"""Input rejected by a repository or service rule."""


class UnknownUserError(ValidationError):
	"""A record references a user id the directory does not hold."""


class AdvisoryError(Focus400Error):
	"""The text-generation collaborator could not produce a reply."""
