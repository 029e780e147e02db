import time
from datetime import date, datetime, time as dtime, timedelta


def now_ms() -> int:
	"""Return current wall-clock time as epoch milliseconds."""
	return int(time.time() * 1000)


def local_date(epoch_ms: int) -> date:
	"""Return the local calendar date an epoch-ms instant falls on."""
	return datetime.fromtimestamp(epoch_ms / 1000).date()


def day_bounds_ms(day: date):
	"""Return (start_ms, end_ms) of a local day, end exclusive."""
	start = datetime.combine(day, dtime.min)
	end = datetime.combine(day + timedelta(days=1), dtime.min)
	return int(start.timestamp() * 1000), int(end.timestamp() * 1000)


def week_start(day: date) -> date:
	"""Return the Sunday that opens the week containing `day`."""
	return day - timedelta(days=(day.weekday() + 1) % 7)


def fmt_hms(seconds: int) -> str:
	"""Format seconds as HH:MM:SS."""
	h = seconds // 3600
	m = (seconds % 3600) // 60
	s = seconds % 60
	return f"{h:02}:{m:02}:{s:02}"


def fmt_clock(epoch_ms: int) -> str:
	"""Format an instant as local HH:MM."""
	return datetime.fromtimestamp(epoch_ms / 1000).strftime("%H:%M")
