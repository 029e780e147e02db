from PySide6.QtCore import QObject, QRunnable, Signal


class _Relay(QObject):
	done = Signal(str)


class AdvisoryTask(QRunnable):
	"""Run an advisory call on the global thread pool and report the text back."""

	def __init__(self, fn, *args):
		super().__init__()
		self.setAutoDelete(False)
		self.fn = fn
		self.args = args
		self.finished = False
		self.relay = _Relay()
		self.done = self.relay.done

	def run(self):
		# Advisor methods never raise; they fall back to fixed text
		text = self.fn(*self.args)
		self.finished = True
		self.done.emit(text)
