from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QLabel, QProgressBar

from BackEnd.core.config import GOAL_HOURS
from BackEnd.services import stats_service


class ProgressCard(QWidget):
	"""Total time, raw percentage and capped bar toward the hour goal."""

	def __init__(self):
		super().__init__()
		self.setObjectName("Card")
		layout = QVBoxLayout()
		layout.setContentsMargins(24, 20, 24, 20)
		top = QHBoxLayout()
		self.total_label = QLabel("0h 0m")
		self.total_label.setObjectName("Title")
		self.goal_label = QLabel(f"/ {GOAL_HOURS}h goal")
		self.goal_label.setObjectName("Muted")
		self.percent_label = QLabel("0.0%")
		self.percent_label.setObjectName("Title")
		top.addWidget(self.total_label)
		top.addWidget(self.goal_label)
		top.addStretch()
		top.addWidget(self.percent_label)
		layout.addLayout(top)
		self.bar = QProgressBar()
		self.bar.setRange(0, 1000)
		self.bar.setTextVisible(False)
		layout.addWidget(self.bar)
		self.setLayout(layout)

	def set_total(self, total_seconds):
		self.total_label.setText(stats_service.format_total_time(total_seconds))
		self.percent_label.setText(f"{stats_service.raw_progress_percent(total_seconds):.1f}%")
		self.bar.setValue(int(stats_service.progress_percent(total_seconds) * 10))
		self.bar.setProperty("master", stats_service.is_master(total_seconds))
		self.bar.style().unpolish(self.bar)
		self.bar.style().polish(self.bar)
