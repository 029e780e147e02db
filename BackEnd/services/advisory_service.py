"""
Motivational text from Google Gemini.

`GeminiGenerator` is the network collaborator and raises `AdvisoryError` on
any failure. `Advisor` builds the prompts and is the one place that turns a
failure into the fixed fallback text.
"""

import logging
from datetime import datetime

from google import genai

from BackEnd.core import config
from BackEnd.core.errors import AdvisoryError

logger = logging.getLogger(__name__)


class GeminiGenerator:
	def __init__(self, api_key=None, model=None):
		self.api_key = api_key if api_key is not None else config.gemini_api_key()
		self.model = model or config.gemini_model()
		self._client = None

	def generate(self, prompt: str) -> str:
		if not self.api_key:
			raise AdvisoryError("no Gemini API key configured (set GEMINI_API_KEY)")
		try:
			if self._client is None:
				self._client = genai.Client(api_key=self.api_key)
			resp = self._client.models.generate_content(model=self.model, contents=prompt)
		except Exception as exc:
			raise AdvisoryError(f"Gemini request failed: {exc}") from exc
		text = (getattr(resp, "text", None) or "").strip()
		if not text:
			raise AdvisoryError("Gemini returned an empty reply")
		return text


def quote_prompt(current_hours: float) -> str:
	return (
		f"Generate a short, punchy motivational quote for a student who has studied for "
		f"{int(current_hours)} hours towards a {config.GOAL_HOURS}-hour goal.\n"
		"Do not use quotes from famous people, generate a new one.\n"
		"Keep it under 20 words."
	)


def summary_prompt(sessions) -> str:
	lines = []
	for s in sessions[:config.SUMMARY_SESSION_COUNT]:
		day = datetime.fromtimestamp(s.start_time / 1000).strftime("%x")
		lines.append(
			f"- {day}: Studied {s.subject} for {s.duration_seconds // 60} mins. Note: {s.notes}")
	recent = "\n".join(lines)
	return (
		f"Here are my recent study sessions:\n{recent}\n\n"
		"Based on this, give me a 2-sentence summary of my progress and 1 specific tip "
		"for my next session.\nTalk to me like a supportive coach."
	)


class Advisor:
	def __init__(self, generator=None):
		self.generator = generator if generator is not None else GeminiGenerator()

	def _ask(self, prompt, fallback):
		try:
			text = self.generator.generate(prompt)
		except Exception as exc:
			logger.warning("Advisory unavailable, using fallback: %s", exc)
			return fallback
		return (text or "").strip() or fallback

	def motivational_quote(self, current_hours: float) -> str:
		return self._ask(quote_prompt(current_hours), config.QUOTE_FALLBACK)

	def study_summary(self, sessions) -> str:
		"""Coach-style summary of the most recent sessions (newest first)."""
		return self._ask(summary_prompt(sessions), config.SUMMARY_FALLBACK)
