from PySide6.QtWidgets import (
	QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QGridLayout, QLabel, QPushButton,
	QListWidget, QStackedWidget, QListWidgetItem, QTableWidget, QTableWidgetItem,
	QSizePolicy, QLineEdit, QTextEdit, QMessageBox, QProgressBar, QHeaderView
)
from PySide6.QtCore import Qt, QThreadPool
from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.figure import Figure
import datetime
import logging
import sqlite3

from BackEnd.core.clock import fmt_hms, fmt_clock
from BackEnd.core.config import GOAL_HOURS
from BackEnd.core.errors import Focus400Error, ValidationError
from BackEnd.services import stats_service
from BackEnd.services.accumulator import TOO_SHORT_WARNING
from BackEnd.services.timer_service import TimerService
from FrontEnd.components.advisory_task import AdvisoryTask
from FrontEnd.components.progress_card import ProgressCard
from FrontEnd.styles.design_tokens import COLORS, build_stylesheet

logger = logging.getLogger(__name__)

PAGES = ["Dashboard", "Timer", "Calendar", "Leaderboard"]


def _card():
	card = QWidget()
	card.setObjectName("Card")
	layout = QVBoxLayout()
	layout.setContentsMargins(24, 20, 24, 20)
	card.setLayout(layout)
	return card, layout


class MainWindow(QMainWindow):
	def __init__(self, directory, ledger, advisor):
		super().__init__()
		self.directory = directory
		self.ledger = ledger
		self.advisor = advisor
		self.user = None
		self._advisory_tasks = []

		self.setWindowTitle("Focus400")
		self.resize(1100, 720)
		self.setStyleSheet(build_stylesheet())

		# --- Sidebar ---
		self.sidebar = QListWidget()
		self.sidebar.setFixedWidth(220)
		self.sidebar.setSpacing(8)
		self.sidebar.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
		self.sidebar.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
		for name in PAGES:
			self.sidebar.addItem(QListWidgetItem(name))
		self.user_label = QLabel("")
		self.user_label.setObjectName("Muted")
		self.user_label.setWordWrap(True)
		self.logout_btn = QPushButton("Log out")

		sidebar_col = QWidget()
		sidebar_layout = QVBoxLayout()
		sidebar_layout.setContentsMargins(0, 24, 0, 16)
		brand = QLabel("Focus400")
		brand.setObjectName("Title")
		brand.setAlignment(Qt.AlignmentFlag.AlignCenter)
		sidebar_layout.addWidget(brand)
		sidebar_layout.addWidget(self.sidebar)
		sidebar_layout.addWidget(self.user_label)
		sidebar_layout.addWidget(self.logout_btn)
		sidebar_col.setLayout(sidebar_layout)
		sidebar_col.setFixedWidth(220)

		# --- Pages ---
		self.stack = QStackedWidget()
		self.timer_service = TimerService(self.ledger)
		self.dashboard_tab = self._build_dashboard_tab()
		self.timer_tab = self._build_timer_tab()
		self.calendar_tab = self._build_calendar_tab()
		self.leaderboard_tab = self._build_leaderboard_tab()
		for page in (self.dashboard_tab, self.timer_tab, self.calendar_tab, self.leaderboard_tab):
			self.stack.addWidget(page)

		shell = QWidget()
		shell_layout = QHBoxLayout()
		shell_layout.setContentsMargins(0, 0, 0, 0)
		shell_layout.setSpacing(0)
		shell_layout.addWidget(sidebar_col)
		shell_layout.addWidget(self.stack)
		shell.setLayout(shell_layout)

		# Auth page and the signed-in shell share one top-level stack
		self.root_stack = QStackedWidget()
		self.auth_tab = self._build_auth_tab()
		self.root_stack.addWidget(self.auth_tab)
		self.root_stack.addWidget(shell)
		self.setCentralWidget(self.root_stack)

		self.sidebar.currentRowChanged.connect(self._on_page_changed)
		self.logout_btn.clicked.connect(self._logout)

		stored = self.directory.current_identity()
		if stored is not None:
			self._enter(stored)
		else:
			self.root_stack.setCurrentIndex(0)

	# --- Auth ---

	def _build_auth_tab(self):
		w = QWidget()
		outer = QVBoxLayout()
		outer.addStretch()
		card, layout = _card()
		card.setFixedWidth(420)
		title = QLabel("Focus400")
		title.setObjectName("Title")
		title.setAlignment(Qt.AlignmentFlag.AlignCenter)
		subtitle = QLabel(f"Track your journey to {GOAL_HOURS} hours of deep work.")
		subtitle.setObjectName("Muted")
		subtitle.setWordWrap(True)
		subtitle.setAlignment(Qt.AlignmentFlag.AlignCenter)
		self.username_input = QLineEdit()
		self.username_input.setPlaceholderText("Username (e.g. Scholar123)")
		self.email_input = QLineEdit()
		self.email_input.setPlaceholderText("Email (you@example.com)")
		self.login_btn = QPushButton("Start the Challenge")
		self.login_btn.setObjectName("StartBtn")
		for widget in (title, subtitle, self.username_input, self.email_input, self.login_btn):
			layout.addWidget(widget)
		outer.addWidget(card, alignment=Qt.AlignmentFlag.AlignHCenter)
		outer.addStretch()
		w.setLayout(outer)

		self.login_btn.clicked.connect(self._login)
		self.email_input.returnPressed.connect(self._login)
		return w

	def _login(self):
		email = self.email_input.text().strip()
		name = self.username_input.text().strip()
		if not email or not name:
			return
		try:
			user = self.directory.login_or_create(email, name)
		except ValidationError as e:
			QMessageBox.warning(self, "Focus400", str(e))
			return
		self._enter(user)

	def _enter(self, user):
		self.user = user
		self.user_label.setText(f"{user.name}\n{user.email}")
		self.root_stack.setCurrentIndex(1)
		self.sidebar.setCurrentRow(0)
		self._refresh_all()

	def _logout(self):
		self.timer_service.discard()
		self.directory.logout()
		self.user = None
		self.email_input.clear()
		self.username_input.clear()
		self.root_stack.setCurrentIndex(0)

	def _on_page_changed(self, index):
		self.stack.setCurrentIndex(index)
		if self.user is not None:
			self._refresh_page(index)

	def _refresh_page(self, index):
		if index == 0:
			self._refresh_dashboard()
		elif index == 2:
			self._refresh_calendar()
		elif index == 3:
			self._refresh_leaderboard()

	def _refresh_all(self):
		self._refresh_dashboard()
		self._refresh_calendar()
		self._refresh_leaderboard()

	def _run_advisory(self, fn, arg, on_done):
		# on_done must be a MainWindow method so the reply is queued onto the GUI thread
		self._advisory_tasks = [t for t in self._advisory_tasks if not t.finished]
		task = AdvisoryTask(fn, arg)
		task.done.connect(on_done)
		self._advisory_tasks.append(task)
		QThreadPool.globalInstance().start(task)

	# --- Dashboard ---

	def _build_dashboard_tab(self):
		w = QWidget()
		layout = QVBoxLayout()
		layout.setAlignment(Qt.AlignmentFlag.AlignTop)
		layout.setContentsMargins(32, 32, 32, 32)
		layout.setSpacing(16)

		header = QHBoxLayout()
		self.welcome_label = QLabel("")
		self.welcome_label.setObjectName("Title")
		self.master_badge = QLabel("🏆 400h Master")
		self.master_badge.setObjectName("MasterBadge")
		header.addWidget(self.welcome_label)
		header.addWidget(self.master_badge)
		header.addStretch()
		layout.addLayout(header)

		self.progress_card = ProgressCard()
		layout.addWidget(self.progress_card)

		row = QHBoxLayout()
		row.setSpacing(16)
		chart_card, chart_layout = _card()
		chart_title = QLabel("This Week's Focus")
		chart_title.setObjectName("Title")
		chart_layout.addWidget(chart_title)
		self.figure = Figure(figsize=(5, 2.5))
		self.canvas = FigureCanvas(self.figure)
		self.canvas.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
		chart_layout.addWidget(self.canvas)
		row.addWidget(chart_card, stretch=2)

		ai_card, ai_layout = _card()
		ai_title = QLabel("AI Coach")
		ai_title.setObjectName("Title")
		self.ai_summary_label = QLabel("Get a personalised summary of your recent sessions.")
		self.ai_summary_label.setWordWrap(True)
		self.ai_report_btn = QPushButton("Generate Report")
		self.ai_report_btn.setObjectName("StartBtn")
		ai_layout.addWidget(ai_title)
		ai_layout.addWidget(self.ai_summary_label)
		ai_layout.addStretch()
		ai_layout.addWidget(self.ai_report_btn)
		row.addWidget(ai_card, stretch=1)
		layout.addLayout(row)
		w.setLayout(layout)

		self.ai_report_btn.clicked.connect(self._request_summary)
		return w

	def _refresh_dashboard(self):
		user = self.user
		self.welcome_label.setText(f"Welcome back, {user.name} 👋")
		self.master_badge.setVisible(stats_service.is_master(user.total_seconds))
		self.progress_card.set_total(user.total_seconds)
		self._update_bar_chart()

	def _update_bar_chart(self):
		sessions = self.ledger.sessions_for_user(self.user.id)
		rows = stats_service.week_chart(sessions, datetime.date.today())
		x = [label for label, _ in rows]
		y = [hours for _, hours in rows]
		master = stats_service.is_master(self.user.total_seconds)
		active = COLORS['gold'] if master else COLORS['primary']

		self.figure.clear()
		self.figure.patch.set_facecolor(COLORS['surface'])
		ax = self.figure.add_subplot(111)
		ax.set_facecolor(COLORS['surface'])
		bars = ax.bar(x, y, color=[active if v > 0 else COLORS['bar_idle'] for v in y])
		for bar, value in zip(bars, y):
			if value > 0:
				ax.text(bar.get_x() + bar.get_width()/2, bar.get_height() + 0.05,
					f'{value:.1f}h', ha='center', va='bottom', fontsize=9, color=COLORS['text'])
		ax.set_ylim(bottom=0)
		ax.tick_params(axis='both', colors=COLORS['text_muted'], labelsize=10)
		for spine in ax.spines.values():
			spine.set_visible(False)
		self.figure.tight_layout()
		self.canvas.draw()

	def _request_summary(self):
		self.ai_report_btn.setEnabled(False)
		self.ai_report_btn.setText("Analyzing...")
		sessions = self.ledger.sessions_for_user(self.user.id)
		self._run_advisory(self.advisor.study_summary, sessions, self._show_summary)

	def _show_summary(self, text):
		self.ai_summary_label.setText(text)
		self.ai_report_btn.setEnabled(True)
		self.ai_report_btn.setText("Generate Report")

	# --- Timer ---

	def _build_timer_tab(self):
		w = QWidget()
		outer = QVBoxLayout()
		outer.setContentsMargins(32, 32, 32, 32)
		outer.setSpacing(16)

		timer_card, timer_layout = _card()
		timer_layout.setAlignment(Qt.AlignmentFlag.AlignCenter)
		self.timer_label = QLabel("00:00:00")
		self.timer_label.setObjectName("TimerLabel")
		self.timer_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
		timer_layout.addWidget(self.timer_label)
		self.timer_hint = QLabel("Ready to focus?")
		self.timer_hint.setObjectName("Muted")
		self.timer_hint.setAlignment(Qt.AlignmentFlag.AlignCenter)
		timer_layout.addWidget(self.timer_hint)

		btn_layout = QHBoxLayout()
		btn_layout.setSpacing(24)
		self.start_pause_btn = QPushButton("Start")
		self.start_pause_btn.setObjectName("StartBtn")
		self.end_btn = QPushButton("Finish")
		self.end_btn.setObjectName("EndBtn")
		for btn in (self.start_pause_btn, self.end_btn):
			btn.setMinimumHeight(52)
			btn_layout.addWidget(btn)
		timer_layout.addSpacing(16)
		timer_layout.addLayout(btn_layout)
		outer.addWidget(timer_card)

		details_card, details_layout = _card()
		details_title = QLabel("Session Details")
		details_title.setObjectName("Title")
		self.subject_input = QLineEdit()
		self.subject_input.setPlaceholderText("Subject / Topic, e.g. Linear Algebra")
		self.notes_input = QTextEdit()
		self.notes_input.setPlaceholderText("Briefly describe what you accomplished...")
		self.notes_input.setFixedHeight(96)
		details_layout.addWidget(details_title)
		details_layout.addWidget(self.subject_input)
		details_layout.addWidget(self.notes_input)
		outer.addWidget(details_card)

		self.quote_btn = QPushButton("✨ Get AI Motivation")
		self.quote_label = QLabel("")
		self.quote_label.setWordWrap(True)
		self.quote_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
		outer.addWidget(self.quote_btn, alignment=Qt.AlignmentFlag.AlignHCenter)
		outer.addWidget(self.quote_label)
		outer.addStretch()
		w.setLayout(outer)

		self.timer_service.tick.connect(self._on_tick)
		self.timer_service.state_changed.connect(self._on_state)
		self.timer_service.rejected.connect(self._on_rejected)
		self.timer_service.session_saved.connect(self._on_saved)
		self.start_pause_btn.clicked.connect(lambda: self.timer_service.toggle())
		self.end_btn.clicked.connect(self._end)
		self.subject_input.textChanged.connect(self.timer_service.set_subject)
		self.notes_input.textChanged.connect(
			lambda: self.timer_service.set_notes(self.notes_input.toPlainText()))
		self.quote_btn.clicked.connect(self._request_quote)

		self._set_buttons("idle")
		return w

	def _on_tick(self, elapsed):
		self.timer_label.setText(fmt_hms(elapsed))
		self.end_btn.setVisible(elapsed > 0 or self.timer_service.running)

	def _on_state(self, state):
		self._set_buttons(state)

	def _set_buttons(self, state):
		if state == "running":
			self.start_pause_btn.setText("Pause")
			self.timer_hint.setText("Focusing...")
			self.end_btn.setVisible(True)
		elif state == "paused":
			self.start_pause_btn.setText("Resume")
			self.timer_hint.setText("Paused")
			self.end_btn.setVisible(True)
		else:
			self.start_pause_btn.setText("Start")
			self.timer_hint.setText("Ready to focus?")
			self.end_btn.setVisible(self.timer_service.display_sec > 0)

	def _end(self):
		if self.user is None:
			return
		self.end_btn.setEnabled(False)
		# the boxes are the source of truth for what gets saved
		self.timer_service.set_subject(self.subject_input.text())
		self.timer_service.set_notes(self.notes_input.toPlainText())
		try:
			self.timer_service.finish(self.user.id)
		except (Focus400Error, sqlite3.Error) as e:
			logger.error("Failed to save session: %s", e)
			QMessageBox.warning(self, "Focus400", f"Could not save this session, the timer was kept.\n{e}")
		finally:
			self.end_btn.setEnabled(True)

	def _on_rejected(self, warning):
		logger.info("Session not saved: %s", warning)
		if warning == TOO_SHORT_WARNING:
			# the timer was reset, so the form goes with it
			self.subject_input.clear()
			self.notes_input.clear()
		QMessageBox.warning(self, "Focus400", warning)

	def _on_saved(self, user):
		self.user = user
		self.subject_input.clear()
		self.notes_input.clear()
		self.quote_label.clear()
		self._refresh_all()

	def _request_quote(self):
		self.quote_btn.setEnabled(False)
		hours = self.timer_service.elapsed_sec() / 3600
		self._run_advisory(self.advisor.motivational_quote, hours, self._show_quote)

	def _show_quote(self, text):
		self.quote_label.setText(f"“{text}”")
		self.quote_btn.setEnabled(True)

	# --- Calendar ---

	def _build_calendar_tab(self):
		w = QWidget()
		layout = QHBoxLayout()
		layout.setContentsMargins(32, 32, 32, 32)
		layout.setSpacing(16)

		grid_card, grid_layout = _card()
		nav = QHBoxLayout()
		self.cal_title = QLabel("")
		self.cal_title.setObjectName("Title")
		self.cal_prev_btn = QPushButton("◀")
		self.cal_prev_btn.setFixedSize(36, 36)
		self.cal_next_btn = QPushButton("▶")
		self.cal_next_btn.setFixedSize(36, 36)
		nav.addWidget(self.cal_title)
		nav.addStretch()
		nav.addWidget(self.cal_prev_btn)
		nav.addWidget(self.cal_next_btn)
		grid_layout.addLayout(nav)

		grid = QGridLayout()
		grid.setSpacing(6)
		for col, name in enumerate(["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]):
			head = QLabel(name)
			head.setObjectName("Muted")
			head.setAlignment(Qt.AlignmentFlag.AlignCenter)
			grid.addWidget(head, 0, col)
		self.day_cells = []
		for i in range(42):
			cell = QPushButton("")
			cell.setMinimumSize(72, 64)
			cell.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
			cell.clicked.connect(lambda _=False, idx=i: self._select_cell(idx))
			grid.addWidget(cell, 1 + i // 7, i % 7)
			self.day_cells.append(cell)
		grid_layout.addLayout(grid)
		layout.addWidget(grid_card, stretch=2)

		detail_card, detail_layout = _card()
		self.day_title = QLabel("")
		self.day_title.setObjectName("Title")
		self.day_list = QListWidget()
		self.day_total_label = QLabel("")
		detail_layout.addWidget(self.day_title)
		detail_layout.addWidget(self.day_list)
		detail_layout.addWidget(self.day_total_label)
		layout.addWidget(detail_card, stretch=1)
		w.setLayout(layout)

		self.selected_date = datetime.date.today()
		self._month_cells = []
		self.cal_prev_btn.clicked.connect(lambda: self._change_month(-1))
		self.cal_next_btn.clicked.connect(lambda: self._change_month(1))
		return w

	def _change_month(self, delta):
		year, month = stats_service.shift_month(self.selected_date.year, self.selected_date.month, delta)
		self.selected_date = datetime.date(year, month, 1)
		self._refresh_calendar()

	def _select_cell(self, index):
		day = self._month_cells[index] if index < len(self._month_cells) else None
		if day is None:
			return
		self.selected_date = self.selected_date.replace(day=day)
		self._refresh_calendar()

	def _refresh_calendar(self):
		sel = self.selected_date
		sessions = self.ledger.sessions_for_user(self.user.id)
		by_day = stats_service.group_by_day(sessions)
		self._month_cells = stats_service.month_grid(sel.year, sel.month)
		self.cal_title.setText(sel.strftime("%B %Y"))

		for cell, day in zip(self.day_cells, self._month_cells):
			if day is None:
				cell.setText("")
				cell.setEnabled(False)
				cell.setStyleSheet("background: transparent;")
				continue
			cell.setEnabled(True)
			label, marks = stats_service.day_cell(by_day.get(datetime.date(sel.year, sel.month, day), []))
			text = str(day)
			if label:
				text += f"\n{label}\n" + "•" * marks
			cell.setText(text)
			if day == sel.day:
				cell.setStyleSheet(f"border: 2px solid {COLORS['primary']};")
			elif label:
				cell.setStyleSheet(f"color: {COLORS['primary']};")
			else:
				cell.setStyleSheet("")

		day_sessions = by_day.get(sel, [])
		self.day_title.setText(f"Activity for {sel.strftime('%x')}")
		self.day_list.clear()
		if not day_sessions:
			self.day_list.addItem("No study sessions logged.")
			self.day_total_label.setText("")
			return
		for s in day_sessions:
			text = f"{s.subject}  ·  {stats_service.session_minutes(s)} min  ·  {fmt_clock(s.start_time)}"
			if s.notes:
				text += f"\n{s.notes}"
			self.day_list.addItem(text)
		total = sum(s.duration_seconds for s in day_sessions)
		self.day_total_label.setText(f"Total: {stats_service.format_day_total(total)}")

	# --- Leaderboard ---

	def _build_leaderboard_tab(self):
		w = QWidget()
		layout = QVBoxLayout()
		layout.setAlignment(Qt.AlignmentFlag.AlignTop)
		layout.setContentsMargins(32, 32, 32, 32)
		title = QLabel("Global Leaderboard")
		title.setObjectName("Title")
		layout.addWidget(title)

		self.board_table = QTableWidget()
		self.board_table.setColumnCount(4)
		self.board_table.setHorizontalHeaderLabels(["Rank", "Scholar", "Time", "Progress"])
		self.board_table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
		self.board_table.setSelectionMode(QTableWidget.SelectionMode.NoSelection)
		self.board_table.verticalHeader().setVisible(False)
		self.board_table.horizontalHeader().setSectionResizeMode(3, QHeaderView.Stretch)
		self.board_table.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
		layout.addWidget(self.board_table)
		self.board_empty = QLabel("No users yet. Be the first to join the challenge!")
		self.board_empty.setObjectName("Muted")
		layout.addWidget(self.board_empty)
		note = QLabel("Rankings update automatically after every session.")
		note.setObjectName("Muted")
		layout.addWidget(note)
		w.setLayout(layout)
		return w

	def _refresh_leaderboard(self):
		rows = stats_service.leaderboard_rows(self.directory.leaderboard(), self.user.id)
		self.board_empty.setVisible(not rows)
		self.board_table.setRowCount(len(rows))
		for r, row in enumerate(rows):
			name = row["name"] + (" (You)" if row["is_current"] else "")
			if row["is_master"]:
				name += "  🏆 400h Club"
			self.board_table.setItem(r, 0, QTableWidgetItem(row["rank"]))
			self.board_table.setItem(r, 1, QTableWidgetItem(name))
			self.board_table.setItem(r, 2, QTableWidgetItem(row["time"]))
			bar = QProgressBar()
			bar.setRange(0, 1000)
			bar.setTextVisible(False)
			bar.setValue(int(row["progress"] * 10))
			bar.setProperty("master", row["is_master"])
			self.board_table.setCellWidget(r, 3, bar)
