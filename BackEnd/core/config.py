"""
Application configuration.

Domain constants plus the environment variables the app reads at runtime.
"""

import os

APP_NAME = "Focus400"
DATA_DIR_ENV = "FOCUS400_DATA_DIR"
DB_FILENAME = "focus400.db"

# Goal and timer rules
GOAL_HOURS = 400
MIN_SESSION_SECONDS = 60
TICK_INTERVAL_MS = 1000

# Store keys
USERS_KEY = "focus400_users"
SESSIONS_KEY = "focus400_sessions"
CURRENT_USER_KEY = "focus400_currentUser"
STORE_KEYS = (USERS_KEY, SESSIONS_KEY, CURRENT_USER_KEY)

AVATAR_URL = "https://picsum.photos/seed/{email}/200"

# AI advisory
DEFAULT_MODEL = "gemini-2.5-flash"
SUMMARY_SESSION_COUNT = 5
QUOTE_FALLBACK = "Consistency is the key to mastery. Keep going!"
SUMMARY_FALLBACK = "Great job logging your sessions! Review your notes to consolidate memory."


def gemini_api_key():
	"""Return the Gemini API key from GEMINI_API_KEY or API_KEY, or None."""
	return os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY") or None


def gemini_model():
	return os.environ.get("FOCUS400_MODEL", DEFAULT_MODEL)
