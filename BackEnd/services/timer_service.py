from PySide6.QtCore import QObject, Signal, QTimer

from BackEnd.core.clock import now_ms
from BackEnd.core.config import TICK_INTERVAL_MS
from BackEnd.services import accumulator


class TimerService(QObject):
	tick = Signal(int)  # emits elapsed seconds
	state_changed = Signal(str)  # emits 'idle', 'running', 'paused'
	rejected = Signal(str)  # emits a warning for the user
	session_saved = Signal(object)  # emits the updated User

	def __init__(self, ledger, clock=now_ms):
		super().__init__()
		self.ledger = ledger
		self.clock = clock
		self.state = accumulator.reset()
		self.display_sec = 0
		self._timer = QTimer()
		self._timer.setInterval(TICK_INTERVAL_MS)
		self._timer.timeout.connect(self._on_tick)

	@property
	def running(self):
		return self.state.active

	@property
	def paused(self):
		# under a whole second there is nothing to show, so it reads as idle
		return not self.state.active and self.state.accumulated_ms >= 1000

	def status(self):
		if self.running:
			return 'running'
		if self.paused:
			return 'paused'
		return 'idle'

	def elapsed_sec(self):
		return accumulator.elapsed_seconds(self.state, self.clock())

	def toggle(self):
		"""Start, pause or resume."""
		self.state = accumulator.toggle(self.state, self.clock())
		if self.state.active:
			self._timer.start()
		else:
			self._timer.stop()
		self._refresh()
		self.state_changed.emit(self.status())

	def set_subject(self, subject):
		self.state = accumulator.with_details(self.state, subject=subject)

	def set_notes(self, notes):
		self.state = accumulator.with_details(self.state, notes=notes)

	def finish(self, user_id):
		"""Try to save the current run. Returns the recorded session or None."""
		result = accumulator.finish(self.state, self.clock(), user_id)
		if result.session is None:
			self.state = result.state
			if not self.state.active:
				self._timer.stop()
			self._refresh()
			self.state_changed.emit(self.status())
			self.rejected.emit(result.warning)
			return None
		# the run is only dropped once the ledger has accepted it
		user = self.ledger.record_session(result.session)
		self.state = result.state
		self._timer.stop()
		self._refresh()
		self.state_changed.emit('idle')
		self.session_saved.emit(user)
		return result.session

	def discard(self):
		self._timer.stop()
		self.state = accumulator.reset()
		self._refresh()
		self.state_changed.emit('idle')

	def _refresh(self):
		self.display_sec = self.elapsed_sec()
		self.tick.emit(self.display_sec)

	def _on_tick(self):
		self._refresh()
