import os
from pathlib import Path

from BackEnd.core.config import APP_NAME, DATA_DIR_ENV, DB_FILENAME


def user_data_dir(app_name=APP_NAME):
	"""Return per-user data dir (Windows/macOS/Linux), honouring FOCUS400_DATA_DIR."""
	override = os.environ.get(DATA_DIR_ENV)
	if override:
		path = Path(override)
	else:
		if os.name == "nt":
			base = os.environ.get("LOCALAPPDATA", os.path.expanduser("~\\AppData\\Local"))
		elif os.name == "posix":
			base = os.environ.get("XDG_DATA_HOME", os.path.expanduser("~/.local/share"))
		else:
			base = os.path.expanduser("~")
		path = Path(base) / app_name
	path.mkdir(parents=True, exist_ok=True)
	return path


def db_path():
	"""Return Path to focus400.db inside user data dir."""
	return user_data_dir() / DB_FILENAME
