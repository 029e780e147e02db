# Design tokens for Focus400 UI

COLORS = {
    'background': '#0F172A',
    'surface': '#1E293B',
    'surface_alt': '#334155',
    'primary': '#0EA5E9',
    'primary_hover': '#0284C7',
    'gold': '#F59E0B',
    'danger': '#EF4444',
    'text': '#CBD5E1',
    'text_muted': '#64748B',
    'text_strong': '#F8FAFC',
    'border': '#334155',
    'sidebar_bg': '#0B1220',
    'sidebar_active_bg': '#1E293B',
    'bar_idle': '#334155',
}

FONTS = {
    'family': 'Inter, Manrope, Arial, sans-serif',
    'timer_size': 88,
    'timer_weight': 'bold',
    'button_size': 16,
    'button_weight': 600,
    'sidebar_size': 16,
    'text': 15,
    'text_strong': 22,
}


def build_stylesheet():
    """Return the application QSS built from the tokens above."""
    c, f = COLORS, FONTS
    return f"""
QWidget {{ background: {c['background']}; color: {c['text']}; font-family: {f['family']}; font-size: {f['text']}px; }}
QListWidget {{ background: {c['sidebar_bg']}; border: none; font-size: {f['sidebar_size']}px; }}
QListWidget::item {{ padding: 12px 0 12px 24px; }}
QListWidget::item:selected {{ background: {c['sidebar_active_bg']}; color: {c['primary']}; border-left: 4px solid {c['primary']}; }}
QWidget#Card {{ background: {c['surface']}; border: 1px solid {c['border']}; border-radius: 16px; }}
QLabel#Title {{ color: {c['text_strong']}; font-size: {f['text_strong']}px; font-weight: 700; background: transparent; }}
QLabel#Muted {{ color: {c['text_muted']}; background: transparent; }}
QLabel#MasterBadge {{ color: {c['gold']}; font-weight: 700; background: transparent; }}
QLabel#TimerLabel {{ color: {c['text_strong']}; font-size: {f['timer_size']}px; font-weight: {f['timer_weight']}; background: transparent; }}
QPushButton {{ background: {c['surface_alt']}; color: {c['text_strong']}; border: none; border-radius: 10px; padding: 10px 24px; font-size: {f['button_size']}px; font-weight: {f['button_weight']}; }}
QPushButton#StartBtn {{ background: {c['primary']}; }}
QPushButton#StartBtn:hover {{ background: {c['primary_hover']}; }}
QPushButton#EndBtn {{ background: {c['danger']}; }}
QPushButton:disabled {{ color: {c['text_muted']}; }}
QLineEdit, QTextEdit {{ background: {c['background']}; border: 1px solid {c['border']}; border-radius: 8px; padding: 8px; }}
QProgressBar {{ background: {c['background']}; border: none; border-radius: 6px; height: 12px; text-align: center; }}
QProgressBar::chunk {{ background: {c['primary']}; border-radius: 6px; }}
QProgressBar[master="true"]::chunk {{ background: {c['gold']}; }}
"""
