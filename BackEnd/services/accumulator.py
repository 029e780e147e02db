"""
Elapsed-time accumulator for the study timer.

State is an immutable `AccumulatorState`; every transition is a plain
function `(state, now_ms) -> state`, so callers own the single current value
and tests can drive it with any clock. Elapsed time is never counted tick by
tick: it is `accumulated_ms` plus the open segment since `start_ms`.
"""

from collections import namedtuple
from dataclasses import dataclass, replace
from typing import Optional

from BackEnd.core.config import MIN_SESSION_SECONDS
from BackEnd.core.models import StudySession
from BackEnd.repos.session_repo import new_session_id

TOO_SHORT_WARNING = "Session too short to save (minimum 1 minute)."
NO_SUBJECT_WARNING = "Please enter a subject."


@dataclass(frozen=True)
class AccumulatorState:
	active: bool = False
	accumulated_ms: int = 0
	start_ms: Optional[int] = None
	subject: str = ""
	notes: str = ""


# state to adopt, the session to record (or None), warning to show (or None)
FinishResult = namedtuple("FinishResult", ["state", "session", "warning"])


def ensure_started(state: AccumulatorState, now: int) -> AccumulatorState:
	"""An active state always has a start timestamp."""
	if state.active and state.start_ms is None:
		return replace(state, start_ms=now)
	return state


def elapsed_ms(state: AccumulatorState, now: int) -> int:
	state = ensure_started(state, now)
	if state.active:
		return state.accumulated_ms + max(0, now - state.start_ms)
	return state.accumulated_ms


def elapsed_seconds(state: AccumulatorState, now: int) -> int:
	return elapsed_ms(state, now) // 1000


def toggle(state: AccumulatorState, now: int) -> AccumulatorState:
	"""Pause an active timer (folding the open segment) or resume a paused one."""
	if state.active:
		return replace(state, active=False, accumulated_ms=elapsed_ms(state, now), start_ms=None)
	return replace(state, active=True, start_ms=now)


def with_details(state: AccumulatorState, subject=None, notes=None) -> AccumulatorState:
	changes = {}
	if subject is not None:
		changes["subject"] = subject
	if notes is not None:
		changes["notes"] = notes
	return replace(state, **changes)


def reset() -> AccumulatorState:
	return AccumulatorState()


def finish(state: AccumulatorState, now: int, user_id: str) -> FinishResult:
	"""
	Close out the timer.

	Under a minute the session is dropped and the timer resets. With no
	subject the session is refused but the elapsed time is kept (an active
	timer keeps running). Otherwise a `StudySession` ending at `now` is
	produced and the timer resets.
	"""
	final_seconds = elapsed_seconds(state, now)
	if final_seconds < MIN_SESSION_SECONDS:
		return FinishResult(reset(), None, TOO_SHORT_WARNING)
	subject = state.subject.strip()
	if not subject:
		return FinishResult(ensure_started(state, now), None, NO_SUBJECT_WARNING)
	session = StudySession(
		id=new_session_id(),
		user_id=user_id,
		start_time=now - final_seconds * 1000,
		end_time=now,
		duration_seconds=final_seconds,
		subject=subject,
		notes=state.notes.strip(),
	)
	return FinishResult(reset(), session, None)
