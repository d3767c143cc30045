"""
main_window.py – Game Hub main window (Qt adapter for the controller).

Layout
------
  ┌──────────────────────────────────────────────────────────────┐
  │ [Library][Store]  [Search bar]  [Grid][List] [⟳] [+ Add]     │  ← TOP
  ├───────────────┬──────────────────────────────────────────────┤
  │ Categories    │                                              │
  │  All (n)      │  Library: card grid / list                   │
  │  Installed    │           (or loading / empty state)         │
  │  Uninstalled  │  Store:   search box + result cards          │
  │ Stats         │                                              │
  ├───────────────┴──────────────────────────────────────────────┤
  │  Notification log (QPlainTextEdit, read-only)                │  ← BOTTOM
  └──────────────────────────────────────────────────────────────┘

The window holds no catalogue state of its own. It implements the controller's
LibraryView protocol by rebuilding widgets from the view trees it receives and
forwards every user interaction to the controller.
"""

from __future__ import annotations

import datetime
import logging
from typing import Dict, Optional

from PySide6.QtCore import Qt, Signal, Slot
from PySide6.QtGui import QFont, QPixmap
from PySide6.QtWidgets import (
    QButtonGroup,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QFrame,
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPlainTextEdit,
    QPushButton,
    QScrollArea,
    QSplitter,
    QStackedWidget,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)
from qasync import asyncSlot
import shiboken6

from controllers.interaction_controller import InteractionController
from models.view_state import SECTION_LIBRARY, SECTION_STORE, CategoryCounts
from models.view_tree import (
    ActionView,
    CardView,
    CatalogView,
    DetailView,
    StatsView,
    StoreResultsView,
)
from services.cover_cache import CoverCache
from services.notifications import Notification, NotificationCenter
from services.tasks import spawn
from views.renderer import log_entry_html

logger = logging.getLogger(__name__)

# ── Colour palette ─────────────────────────────────────────────────────────────
_BG         = "#0f1117"
_BG2        = "#1a1d27"
_BG3        = "#22263a"
_ACCENT     = "#4f8ef7"
_ACCENT2    = "#7c5af0"
_TEXT       = "#e2e8f0"
_TEXT_DIM   = "#718096"
_SUCCESS    = "#48bb78"
_WARNING    = "#ed8936"
_ERROR      = "#fc8181"
_BORDER     = "#2d3748"

_LEVEL_COLOURS = {
    "info": _TEXT_DIM,
    "success": _SUCCESS,
    "warning": _WARNING,
    "error": _ERROR,
}
_LEVEL_MARKS = {"info": " ", "success": "✓", "warning": "!", "error": "✗"}

# How long a notification stays in the status bar (ms).
NOTIFICATION_TIMEOUT_MS: int = 5000

# Cards per row in grid mode.
GRID_COLUMNS: int = 3

_STYLESHEET = f"""
QMainWindow, QWidget {{
    background-color: {_BG};
    color: {_TEXT};
    font-family: 'Segoe UI', 'Consolas', monospace;
    font-size: 13px;
}}

/* ── Search bars ────────────────────────────────────────────────────────── */
QLineEdit#searchBar, QLineEdit#storeSearchBar {{
    background-color: {_BG2};
    border: 1px solid {_BORDER};
    border-radius: 6px;
    padding: 8px 14px;
    font-size: 14px;
    color: {_TEXT};
    selection-background-color: {_ACCENT};
}}
QLineEdit#searchBar:focus, QLineEdit#storeSearchBar:focus {{
    border-color: {_ACCENT};
}}

/* ── Group boxes ────────────────────────────────────────────────────────── */
QGroupBox {{
    background-color: {_BG2};
    border: 1px solid {_BORDER};
    border-radius: 8px;
    margin-top: 18px;
    padding: 12px 10px 10px 10px;
    font-weight: bold;
    color: {_TEXT_DIM};
    font-size: 11px;
    text-transform: uppercase;
    letter-spacing: 1px;
}}
QGroupBox::title {{
    subcontrol-origin: margin;
    subcontrol-position: top left;
    padding: 0 6px;
    left: 10px;
}}

/* ── Buttons ────────────────────────────────────────────────────────────── */
QPushButton {{
    background-color: {_BG3};
    border: 1px solid {_BORDER};
    border-radius: 5px;
    padding: 7px 14px;
    color: {_TEXT};
}}
QPushButton:hover {{
    background-color: {_ACCENT};
    border-color: {_ACCENT};
    color: white;
}}
QPushButton:pressed {{
    background-color: {_ACCENT2};
}}
QPushButton:checked {{
    background-color: {_ACCENT};
    border-color: {_ACCENT};
    color: white;
}}
QPushButton#primaryBtn {{
    background: qlineargradient(x1:0, y1:0, x2:1, y2:0,
        stop:0 {_ACCENT}, stop:1 {_ACCENT2});
    color: white;
    font-weight: bold;
    border: none;
}}
QPushButton#primaryBtn:hover {{
    background: qlineargradient(x1:0, y1:0, x2:1, y2:0,
        stop:0 {_ACCENT2}, stop:1 {_ACCENT});
}}

/* ── Game cards ─────────────────────────────────────────────────────────── */
QFrame#gameCard {{
    background-color: {_BG2};
    border: 1px solid {_BORDER};
    border-radius: 8px;
}}
QFrame#gameCard:hover {{
    border-color: {_ACCENT};
}}
QLabel#cardTitle {{
    font-size: 15px;
    font-weight: bold;
}}
QLabel#cardSummary, QLabel#emptyState, QLabel#storeMessage {{
    color: {_TEXT_DIM};
}}
QLabel#cardGenre {{
    color: {_ACCENT};
    font-size: 11px;
}}
QLabel#cardRating {{
    color: {_SUCCESS};
    font-weight: bold;
}}
QLabel#coverPlaceholder {{
    background-color: {_BG3};
    border-radius: 6px;
    font-size: 28px;
    color: {_TEXT_DIM};
}}

/* ── Log area ───────────────────────────────────────────────────────────── */
QPlainTextEdit#logArea {{
    background-color: {_BG};
    border: 1px solid {_BORDER};
    border-radius: 6px;
    padding: 6px;
    font-family: 'Consolas', 'Courier New', monospace;
    font-size: 12px;
    color: {_TEXT_DIM};
}}

/* ── Scrollbars ─────────────────────────────────────────────────────────── */
QScrollBar:vertical {{
    width: 8px;
    background: {_BG};
    border: none;
}}
QScrollBar::handle:vertical {{
    background: {_BG3};
    border-radius: 4px;
    min-height: 20px;
}}
QScrollBar::add-line:vertical, QScrollBar::sub-line:vertical {{
    height: 0;
}}

/* ── Status bar ─────────────────────────────────────────────────────────── */
QStatusBar {{
    background: {_BG2};
    color: {_TEXT_DIM};
    border-top: 1px solid {_BORDER};
    font-size: 11px;
}}

/* ── Splitter handle ────────────────────────────────────────────────────── */
QSplitter::handle {{
    background-color: {_BORDER};
    width: 2px;
}}
"""


class MainWindow(QMainWindow):
    """Primary application window."""

    def __init__(
        self, notifications: NotificationCenter, covers: Optional[CoverCache] = None
    ) -> None:
        super().__init__()
        self.setWindowTitle("SH Game Hub")
        self.setMinimumSize(1020, 700)
        self.resize(1280, 820)
        self.setStyleSheet(_STYLESHEET)

        self._controller: Optional[InteractionController] = None
        self._covers = covers
        self._view_mode = "grid"
        self._catalog = CatalogView(cards=(), grid_visible=False, empty_state_visible=True)
        self._loading = False
        self._detail_dialog: Optional[_GameDetailDialog] = None
        self._add_dialog: Optional[_AddGameDialog] = None

        self._build_ui()
        notifications.subscribe(self._on_notification)

    def bind(self, controller: InteractionController) -> None:
        """Attach the controller and wire widget signals to it."""
        self._controller = controller
        self._connect_signals()

    # ── UI construction ───────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QWidget()
        self.setCentralWidget(root)
        root_layout = QVBoxLayout(root)
        root_layout.setContentsMargins(24, 24, 24, 16)
        root_layout.setSpacing(16)

        root_layout.addLayout(self._build_top_bar())

        self._sections = QStackedWidget()
        self._sections.addWidget(self._build_library_page())
        self._sections.addWidget(self._build_store_page())
        root_layout.addWidget(self._sections, stretch=1)

        self._log_area = QPlainTextEdit()
        self._log_area.setObjectName("logArea")
        self._log_area.setReadOnly(True)
        self._log_area.setMaximumBlockCount(500)
        self._log_area.setFixedHeight(110)
        root_layout.addWidget(self._log_area)

        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)

    def _build_top_bar(self) -> QHBoxLayout:
        top = QHBoxLayout()
        top.setSpacing(12)

        self._nav_group = QButtonGroup(self)
        self._nav_buttons: Dict[str, QPushButton] = {}
        for section, label in ((SECTION_LIBRARY, "Library"), (SECTION_STORE, "Store")):
            btn = QPushButton(label)
            btn.setCheckable(True)
            btn.setFixedHeight(40)
            self._nav_group.addButton(btn)
            self._nav_buttons[section] = btn
            top.addWidget(btn)
        self._nav_buttons[SECTION_LIBRARY].setChecked(True)

        self._search_bar = QLineEdit()
        self._search_bar.setObjectName("searchBar")
        self._search_bar.setPlaceholderText("Search your library...")
        self._search_bar.setClearButtonEnabled(True)
        self._search_bar.setMinimumHeight(40)
        self._search_bar.setFont(QFont("Segoe UI", 14))
        top.addWidget(self._search_bar, 6)

        self._view_group = QButtonGroup(self)
        self._view_buttons: Dict[str, QPushButton] = {}
        for mode, label in (("grid", "▦ Grid"), ("list", "☰ List")):
            btn = QPushButton(label)
            btn.setCheckable(True)
            btn.setFixedHeight(40)
            self._view_group.addButton(btn)
            self._view_buttons[mode] = btn
            top.addWidget(btn)
        self._view_buttons["grid"].setChecked(True)

        self._refresh_btn = QPushButton("⟳  Refresh")
        self._refresh_btn.setFixedHeight(40)
        top.addWidget(self._refresh_btn)

        self._add_btn = QPushButton("+  Add Game")
        self._add_btn.setObjectName("primaryBtn")
        self._add_btn.setFixedHeight(40)
        top.addWidget(self._add_btn)
        return top

    def _build_library_page(self) -> QWidget:
        splitter = QSplitter(Qt.Orientation.Horizontal)
        splitter.setChildrenCollapsible(False)
        splitter.setHandleWidth(4)

        # Left – categories and stats
        sidebar = QWidget()
        sidebar.setFixedWidth(240)
        side_layout = QVBoxLayout(sidebar)
        side_layout.setContentsMargins(0, 0, 6, 0)

        cat_group = QGroupBox("Categories")
        cat_layout = QVBoxLayout(cat_group)
        self._filter_group = QButtonGroup(self)
        self._filter_buttons: Dict[str, QPushButton] = {}
        for catalog_filter in ("all", "installed", "uninstalled"):
            btn = QPushButton()
            btn.setCheckable(True)
            self._filter_group.addButton(btn)
            self._filter_buttons[catalog_filter] = btn
            cat_layout.addWidget(btn)
        self._filter_buttons["all"].setChecked(True)
        self._set_counts(CategoryCounts())
        side_layout.addWidget(cat_group)

        stats_group = QGroupBox("Library Stats")
        stats_layout = QFormLayout(stats_group)
        self._total_games = QLabel("0")
        self._total_size = QLabel("0 GB")
        stats_layout.addRow("Games:", self._total_games)
        stats_layout.addRow("Total size:", self._total_size)
        side_layout.addWidget(stats_group)
        side_layout.addStretch()
        splitter.addWidget(sidebar)

        # Right – loading / empty state / cards
        self._library_stack = QStackedWidget()

        self._loading_label = QLabel("Loading games…")
        self._loading_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._library_stack.addWidget(self._loading_label)

        empty = QWidget()
        empty_layout = QVBoxLayout(empty)
        empty_layout.addStretch()
        empty_label = QLabel("No games found.\nAdd a game or change the filter.")
        empty_label.setObjectName("emptyState")
        empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        empty_layout.addWidget(empty_label)
        self._add_first_btn = QPushButton("+  Add Your First Game")
        self._add_first_btn.setObjectName("primaryBtn")
        empty_layout.addWidget(self._add_first_btn, alignment=Qt.AlignmentFlag.AlignCenter)
        empty_layout.addStretch()
        self._library_stack.addWidget(empty)

        self._games_scroll = QScrollArea()
        self._games_scroll.setWidgetResizable(True)
        self._games_scroll.setFrameShape(QFrame.Shape.NoFrame)
        self._library_stack.addWidget(self._games_scroll)

        splitter.addWidget(self._library_stack)
        splitter.setStretchFactor(0, 2)
        splitter.setStretchFactor(1, 8)
        return splitter

    def _build_store_page(self) -> QWidget:
        page = QWidget()
        layout = QVBoxLayout(page)
        layout.setContentsMargins(0, 0, 0, 0)

        row = QHBoxLayout()
        self._store_search_bar = QLineEdit()
        self._store_search_bar.setObjectName("storeSearchBar")
        self._store_search_bar.setPlaceholderText("Search IGDB for games to add...")
        self._store_search_bar.setMinimumHeight(40)
        self._store_search_btn = QPushButton("Search")
        self._store_search_btn.setFixedHeight(40)
        row.addWidget(self._store_search_bar, 1)
        row.addWidget(self._store_search_btn)
        layout.addLayout(row)

        self._store_scroll = QScrollArea()
        self._store_scroll.setWidgetResizable(True)
        self._store_scroll.setFrameShape(QFrame.Shape.NoFrame)
        layout.addWidget(self._store_scroll, stretch=1)
        return page

    # ── Signal wiring ─────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        for section, btn in self._nav_buttons.items():
            btn.clicked.connect(lambda _=False, s=section: self._switch_section(s))
        for mode, btn in self._view_buttons.items():
            btn.clicked.connect(lambda _=False, m=mode: self._controller.switch_view(m))
        for catalog_filter, btn in self._filter_buttons.items():
            btn.clicked.connect(
                lambda _=False, f=catalog_filter: self._controller.filter_games(f)
            )
        self._search_bar.textChanged.connect(self._on_search_changed)
        self._refresh_btn.clicked.connect(self._on_refresh)
        self._add_btn.clicked.connect(self._on_add_clicked)
        self._add_first_btn.clicked.connect(self._on_add_clicked)
        self._store_search_btn.clicked.connect(self._on_store_search)
        self._store_search_bar.returnPressed.connect(self._on_store_search)

    # ── Slots ─────────────────────────────────────────────────────────────────

    @Slot(str)
    def _on_search_changed(self, text: str) -> None:
        self._controller.search_games(text)

    @asyncSlot()
    async def _on_refresh(self) -> None:
        await self._controller.refresh_library()

    @Slot()
    def _on_add_clicked(self) -> None:
        self._controller.show_add_game_form()

    @asyncSlot()
    async def _on_store_search(self) -> None:
        await self._controller.search_store(self._store_search_bar.text())

    def _switch_section(self, section: str) -> None:
        spawn(self._controller.switch_section(section))

    def _dispatch(self, action: ActionView) -> None:
        spawn(self._controller.dispatch(action))

    def _on_notification(self, notification: Notification) -> None:
        self._log(notification.message, level=notification.level)
        self._status_bar.showMessage(notification.message, NOTIFICATION_TIMEOUT_MS)

    # ── LibraryView protocol ──────────────────────────────────────────────────

    def show_catalog(self, view: CatalogView) -> None:
        self._catalog = view
        self._populate_catalog()

    def show_stats(self, view: StatsView) -> None:
        self._total_games.setText(view.total_games)
        self._total_size.setText(view.total_size)
        self._set_counts(view.counts)

    def set_loading(self, loading: bool) -> None:
        self._loading = loading
        self._refresh_btn.setEnabled(not loading)
        if loading:
            self._set_status("Loading games…")
            self._library_stack.setCurrentIndex(0)
        else:
            self._set_status(f"{self._total_games.text()} games in library.")
            self._show_catalog_page()

    def set_active_filter(self, catalog_filter: str) -> None:
        self._filter_buttons[catalog_filter].setChecked(True)

    def set_section(self, section: str) -> None:
        btn = self._nav_buttons.get(section)
        if btn is not None:
            btn.setChecked(True)
        self._sections.setCurrentIndex(1 if section == SECTION_STORE else 0)
        self._search_bar.setEnabled(section == SECTION_LIBRARY)

    def set_view_mode(self, mode: str) -> None:
        self._view_mode = mode
        self._view_buttons[mode].setChecked(True)
        self._populate_catalog()

    def show_store_results(self, view: StoreResultsView) -> None:
        container = QWidget()
        layout = QGridLayout(container)
        layout.setSpacing(12)
        if view.message:
            label = QLabel(view.message)
            label.setObjectName("storeMessage")
            label.setAlignment(Qt.AlignmentFlag.AlignCenter)
            layout.addWidget(label, 0, 0, 1, GRID_COLUMNS)
        for index, card in enumerate(view.cards):
            layout.addWidget(
                _CardWidget(card, self._dispatch, self._covers),
                index // GRID_COLUMNS,
                index % GRID_COLUMNS,
            )
        layout.setRowStretch(layout.rowCount(), 1)
        self._store_scroll.setWidget(container)
        self._store_search_btn.setEnabled(not view.loading)

    def show_detail(self, view: DetailView) -> None:
        if self._detail_dialog is None:
            self._detail_dialog = _GameDetailDialog(self._dispatch, self._covers, self)
            self._detail_dialog.rejected.connect(self._controller.hide_game_details)
        self._detail_dialog.render(view)
        self._detail_dialog.show()
        self._detail_dialog.raise_()

    def hide_detail(self) -> None:
        if self._detail_dialog is not None and self._detail_dialog.isVisible():
            self._detail_dialog.hide()

    def show_add_game_form(self) -> None:
        if self._add_dialog is None:
            self._add_dialog = _AddGameDialog(self)
            self._add_dialog.submitted.connect(self._on_add_submitted)
        self._add_dialog.reset()
        self._add_dialog.show()
        self._add_dialog.focus_name()

    def hide_add_game_form(self) -> None:
        if self._add_dialog is not None:
            self._add_dialog.hide()
            self._add_dialog.reset()

    @asyncSlot(str, str, str)
    async def _on_add_submitted(self, name: str, igdb_id: str, file_path: str) -> None:
        await self._controller.submit_add_game(name, igdb_id, file_path)

    # ── UI helpers ────────────────────────────────────────────────────────────

    def _populate_catalog(self) -> None:
        container = QWidget()
        columns = GRID_COLUMNS if self._view_mode == "grid" else 1
        layout = QGridLayout(container)
        layout.setSpacing(12)
        for index, card in enumerate(self._catalog.cards):
            layout.addWidget(
                _CardWidget(
                    card, self._dispatch, self._covers, compact=self._view_mode == "list"
                ),
                index // columns,
                index % columns,
            )
        layout.setRowStretch(layout.rowCount(), 1)
        self._games_scroll.setWidget(container)
        if not self._loading:
            self._show_catalog_page()

    def _show_catalog_page(self) -> None:
        if self._catalog.empty_state_visible:
            self._library_stack.setCurrentIndex(1)
        else:
            self._library_stack.setCurrentIndex(2)

    def _set_counts(self, counts: CategoryCounts) -> None:
        self._filter_buttons["all"].setText(f"All Games  ({counts.all})")
        self._filter_buttons["installed"].setText(f"Installed  ({counts.installed})")
        self._filter_buttons["uninstalled"].setText(f"Not Installed  ({counts.uninstalled})")

    def _set_status(self, msg: str) -> None:
        self._status_bar.showMessage(msg)

    def _log(self, msg: str, *, level: str = "info") -> None:
        ts = datetime.datetime.now().strftime("%H:%M:%S")
        colour = _LEVEL_COLOURS.get(level, _TEXT_DIM)
        mark = _LEVEL_MARKS.get(level, " ")
        self._log_area.appendHtml(log_entry_html(ts, msg, colour, mark))
        # Scroll to bottom.
        sb = self._log_area.verticalScrollBar()
        sb.setValue(sb.maximum())


# ── Card and dialog widgets ──────────────────────────────────────────────────


class _CardWidget(QFrame):
    """One game card; buttons are re-created and re-bound on every render."""

    def __init__(
        self,
        card: CardView,
        dispatch,
        covers: Optional[CoverCache] = None,
        *,
        compact: bool = False,
    ) -> None:
        super().__init__()
        self.setObjectName("gameCard")
        self._card = card
        self._dispatch = dispatch
        if card.open_action is not None:
            self.setCursor(Qt.CursorShape.PointingHandCursor)

        layout = QHBoxLayout(self) if compact else QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(8)
        layout.addWidget(_cover_label(card.cover_url, 80 if compact else 140, covers))

        info = QVBoxLayout()
        title = QLabel(card.title)
        title.setObjectName("cardTitle")
        title.setWordWrap(True)
        info.addWidget(title)

        summary = QLabel(card.summary)
        summary.setObjectName("cardSummary")
        summary.setWordWrap(True)
        info.addWidget(summary)

        meta = QHBoxLayout()
        if card.genre_label:
            genre = QLabel(card.genre_label)
            genre.setObjectName("cardGenre")
            meta.addWidget(genre)
        meta.addStretch()
        if card.rating_label is not None:
            rating = QLabel(card.rating_label)
            rating.setObjectName("cardRating")
            meta.addWidget(rating)
        info.addLayout(meta)

        actions = QHBoxLayout()
        for action in card.actions:
            actions.addWidget(_action_button(action, dispatch))
        info.addLayout(actions)
        layout.addLayout(info, 1)

    def mousePressEvent(self, event) -> None:  # noqa: N802
        if self._card.open_action is not None and event.button() == Qt.MouseButton.LeftButton:
            self._dispatch(self._card.open_action)
        super().mousePressEvent(event)


class _GameDetailDialog(QDialog):
    def __init__(self, dispatch, covers: Optional[CoverCache] = None, parent=None) -> None:
        super().__init__(parent)
        self.setMinimumSize(720, 520)
        self._dispatch = dispatch
        self._covers = covers
        self._layout = QVBoxLayout(self)
        self._body: Optional[QWidget] = None

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Close)
        buttons.rejected.connect(self.reject)
        self._layout.addWidget(buttons)

    def render(self, view: DetailView) -> None:
        self.setWindowTitle(view.title)
        if self._body is not None:
            self._layout.removeWidget(self._body)
            self._body.deleteLater()

        body = QWidget()
        body_layout = QVBoxLayout(body)

        top = QHBoxLayout()
        top.addWidget(_cover_label(view.cover_url, 240, self._covers))
        form = QFormLayout()
        for label, value in view.fields:
            value_label = QLabel(value)
            value_label.setWordWrap(True)
            form.addRow(f"{label}:", value_label)
        top.addLayout(form, 1)
        body_layout.addLayout(top)

        for heading, text in (("Summary", view.summary), ("Storyline", view.storyline)):
            if text:
                section = QGroupBox(heading)
                section_layout = QVBoxLayout(section)
                text_label = QLabel(text)
                text_label.setWordWrap(True)
                section_layout.addWidget(text_label)
                body_layout.addWidget(section)

        actions = QHBoxLayout()
        for action in view.actions:
            actions.addWidget(_action_button(action, self._dispatch))
        actions.addStretch()
        body_layout.addLayout(actions)

        self._layout.insertWidget(0, body, 1)
        self._body = body


class _AddGameDialog(QDialog):
    submitted = Signal(str, str, str)  # name, igdb_id, file_path

    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Add Game")
        self.setMinimumWidth(420)

        layout = QVBoxLayout(self)
        form = QFormLayout()
        self._name = QLineEdit()
        self._name.setPlaceholderText("Game title (required)")
        self._igdb_id = QLineEdit()
        self._igdb_id.setPlaceholderText("Optional IGDB ID")
        self._file_path = QLineEdit()
        self._file_path.setPlaceholderText("Optional install path")
        form.addRow("Name:", self._name)
        form.addRow("IGDB ID:", self._igdb_id)
        form.addRow("File path:", self._file_path)
        layout.addLayout(form)

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel
        )
        buttons.button(QDialogButtonBox.StandardButton.Ok).setText("Add Game")
        buttons.accepted.connect(self._on_accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def reset(self) -> None:
        for field in (self._name, self._igdb_id, self._file_path):
            field.clear()

    def focus_name(self) -> None:
        self._name.setFocus()

    def _on_accept(self) -> None:
        # The controller closes the dialog once the game was added.
        self.submitted.emit(self._name.text(), self._igdb_id.text(), self._file_path.text())


# ── Helpers ──────────────────────────────────────────────────────────────────


def _action_button(action: ActionView, dispatch) -> QPushButton:
    btn = QPushButton(action.label)
    if action.primary:
        btn.setObjectName("primaryBtn")
    btn.clicked.connect(lambda _=False, a=action: dispatch(a))
    return btn


def _cover_label(
    cover_url: Optional[str], height: int, covers: Optional[CoverCache] = None
) -> QLabel:
    label = QLabel("🎮")
    label.setObjectName("coverPlaceholder")
    label.setAlignment(Qt.AlignmentFlag.AlignCenter)
    label.setFixedHeight(height)
    label.setMinimumWidth(int(height * 0.75))
    if cover_url:
        label.setToolTip(cover_url)
        if covers is not None:
            spawn(_load_cover(label, cover_url, covers))
    return label


async def _load_cover(label: QLabel, cover_url: str, covers: CoverCache) -> None:
    """Swap the placeholder glyph for the cover once it has downloaded."""
    data = await covers.get(cover_url)
    # The card may have been re-rendered away while the download ran.
    if not data or not shiboken6.isValid(label):
        return
    pixmap = QPixmap()
    if not pixmap.loadFromData(data):
        logger.debug("Cover is not a readable image: %s", cover_url)
        return
    label.setPixmap(
        pixmap.scaledToHeight(
            label.maximumHeight(), Qt.TransformationMode.SmoothTransformation
        )
    )
