"""
Derived numbers for the dashboard, calendar and leaderboard screens.

All day grouping uses the local calendar: a session belongs to the day its
start instant falls on, midnight to midnight.
"""

import calendar
from datetime import date, timedelta

from BackEnd.core.clock import day_bounds_ms, local_date, week_start
from BackEnd.core.config import GOAL_HOURS

RANK_BADGES = {1: "🥇", 2: "🥈", 3: "🥉"}
MAX_DAY_MARKS = 4


def raw_progress_percent(total_seconds: int) -> float:
	return total_seconds / 3600 / GOAL_HOURS * 100


def progress_percent(total_seconds: int) -> float:
	"""Progress toward the goal, capped at 100 for bars."""
	return min(raw_progress_percent(total_seconds), 100.0)


def is_master(total_seconds: int) -> bool:
	return total_seconds / 3600 >= GOAL_HOURS


def format_total_time(seconds: int) -> str:
	"""8100 -> '2h 15m'."""
	return f"{seconds // 3600}h {(seconds % 3600) // 60}m"


def format_day_total(seconds: int) -> str:
	"""0 -> '0 min', 600 -> '10 min', 4500 -> '1h 15m'."""
	if seconds == 0:
		return "0 min"
	h = seconds // 3600
	m = (seconds % 3600) // 60
	if h == 0:
		return f"{m} min"
	return f"{h}h {m}m"


def format_cell_total(seconds: int) -> str:
	"""Compact calendar cell label: whole minutes under an hour, else hours."""
	if seconds < 3600:
		return f"{seconds // 60}m"
	return f"{seconds / 3600:.1f}h"


def session_minutes(session) -> int:
	return max(1, session.duration_seconds // 60)


def sessions_on_day(sessions, day: date):
	start, end = day_bounds_ms(day)
	return [s for s in sessions if start <= s.start_time < end]


def seconds_on_day(sessions, day: date) -> int:
	return sum(s.duration_seconds for s in sessions_on_day(sessions, day))


def week_chart(sessions, today: date = None):
	"""Return [(weekday label, hours)] for the Sunday-to-Saturday week holding `today`."""
	today = today or date.today()
	first = week_start(today)
	rows = []
	for i in range(7):
		day = first + timedelta(days=i)
		hours = round(seconds_on_day(sessions, day) / 3600, 1)
		rows.append((day.strftime("%a"), hours))
	return rows


def group_by_day(sessions):
	"""Map local date -> sessions started that day, keeping input order."""
	days = {}
	for s in sessions:
		days.setdefault(local_date(s.start_time), []).append(s)
	return days


def month_grid(year: int, month: int):
	"""
	Return 42 cells (six Sunday-first weeks) for a month.

	Each cell is a day-of-month number or None for padding.
	"""
	first_weekday = (calendar.monthrange(year, month)[0] + 1) % 7
	num_days = calendar.monthrange(year, month)[1]
	cells = []
	for i in range(42):
		day = i - first_weekday + 1
		cells.append(day if 1 <= day <= num_days else None)
	return cells


def shift_month(year: int, month: int, delta: int):
	index = year * 12 + (month - 1) + delta
	return index // 12, index % 12 + 1


def day_cell(sessions_for_day):
	"""Return (label, mark count) for a calendar cell, label empty when idle."""
	total = sum(s.duration_seconds for s in sessions_for_day)
	if total <= 0:
		return "", 0
	return format_cell_total(total), min(len(sessions_for_day), MAX_DAY_MARKS)


def rank_label(rank: int) -> str:
	"""1-based rank to medal or '#N'."""
	return RANK_BADGES.get(rank, f"#{rank}")


def leaderboard_rows(users, current_user_id=None):
	"""Flatten ranked users into the values a leaderboard row shows."""
	rows = []
	for index, user in enumerate(users):
		rows.append({
			"rank": rank_label(index + 1),
			"name": user.name,
			"avatar": user.avatar,
			"is_current": user.id == current_user_id,
			"is_master": is_master(user.total_seconds),
			"time": format_total_time(user.total_seconds),
			"progress": progress_percent(user.total_seconds),
		})
	return rows
