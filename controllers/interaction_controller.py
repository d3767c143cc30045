"""
controllers/interaction_controller.py – Top-level coordinator.

Owns the view state and drives the flow

    user action → controller → (gateway) → catalog store → renderer → view

Every handler is a coroutine (or a plain method for purely local
re-derivation) scheduled on the single asyncio loop shared with Qt. Steps of
one flow are awaited strictly in order; independent flows may interleave, so
store searches are generation-stamped and stale responses dropped.

Collaborators are passed in, never looked up globally, so tests can hand in a
fake gateway and a recording view.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Protocol, Union

from models.game_record import GameRecord, StoreResult
from models.view_state import (
    FILTERS,
    SECTION_LIBRARY,
    VIEW_MODES,
    ViewState,
)
from models.view_tree import (
    ActionView,
    CatalogView,
    DetailView,
    StatsView,
    StoreResultsView,
)
from services.api_gateway import ApiGateway
from services.catalog_store import CatalogStore
from services.exceptions import ApiError, GameHubError, ValidationError
from services.notifications import NotificationCenter, NotificationLevel
from views.renderer import ViewRenderer

logger = logging.getLogger(__name__)


class LibraryView(Protocol):
    """What the controller needs from the presentation layer."""

    def show_catalog(self, view: CatalogView) -> None: ...
    def show_stats(self, view: StatsView) -> None: ...
    def set_loading(self, loading: bool) -> None: ...
    def set_active_filter(self, catalog_filter: str) -> None: ...
    def set_section(self, section: str) -> None: ...
    def set_view_mode(self, mode: str) -> None: ...
    def show_store_results(self, view: StoreResultsView) -> None: ...
    def show_detail(self, view: DetailView) -> None: ...
    def hide_detail(self) -> None: ...
    def show_add_game_form(self) -> None: ...
    def hide_add_game_form(self) -> None: ...


def build_add_game_payload(
    name: Optional[str],
    igdb_id: Union[str, int, None],
    file_path: Optional[str],
) -> Dict[str, Any]:
    """
    Validate add-game form input and build the ``POST /games`` body.

    Blank optional fields become None, never empty strings.

    Raises
    ------
    ValidationError
        When the name is blank or the IGDB id is not an integer.
    """
    clean_name = (name or "").strip()
    if not clean_name:
        raise ValidationError("Game name is required.")

    parsed_igdb_id: Optional[int] = None
    if isinstance(igdb_id, int) and not isinstance(igdb_id, bool):
        parsed_igdb_id = igdb_id
    elif isinstance(igdb_id, str) and igdb_id.strip():
        try:
            parsed_igdb_id = int(igdb_id.strip())
        except ValueError as exc:
            raise ValidationError(f"IGDB ID must be a number, got {igdb_id!r}.") from exc

    clean_path = file_path.strip() if isinstance(file_path, str) else ""

    return {
        "name": clean_name,
        "igdb_id": parsed_igdb_id,
        "file_path": clean_path or None,
    }


class InteractionController:
    """Coordinates the catalog store, the gateway, the renderer and the view."""

    def __init__(
        self,
        store: CatalogStore,
        gateway: ApiGateway,
        renderer: ViewRenderer,
        view: LibraryView,
        notifications: NotificationCenter,
    ) -> None:
        self.state = ViewState()
        self._store = store
        self._gateway = gateway
        self._renderer = renderer
        self._view = view
        self._notifications = notifications
        self._load_generation = 0
        self._search_generation = 0

        self._actions: Dict[str, Callable[[ActionView], Awaitable[Any]]] = {
            "install": lambda a: self.install_game(a.target_id),
            "uninstall": lambda a: self.uninstall_game(a.target_id),
            "details": lambda a: self.show_game_details(a.target_id),
            "add": lambda a: self.add_game_from_store(a.target_id, a.target_name),
            "refresh_metadata": lambda a: self.refresh_metadata(a.target_id),
        }

    async def start(self) -> None:
        await self.load_games()

    async def dispatch(self, action: ActionView) -> None:
        """Run the handler bound to a rendered button."""
        handler = self._actions.get(action.kind)
        if handler is None:
            raise ValueError(f"Unknown action: {action.kind!r}")
        await handler(action)

    # ── Navigation & derivation ──────────────────────────────────────────────

    async def switch_section(self, section: str) -> None:
        self.state.current_section = section
        self._view.set_section(section)
        if section == SECTION_LIBRARY:
            await self.load_games()

    def switch_view(self, mode: str) -> None:
        if mode not in VIEW_MODES:
            raise ValueError(f"Unknown view mode: {mode!r}")
        self.state.current_view = mode
        self._view.set_view_mode(mode)

    def filter_games(self, catalog_filter: str) -> None:
        if catalog_filter not in FILTERS:
            raise ValueError(f"Unknown catalogue filter: {catalog_filter!r}")
        self.state.current_filter = catalog_filter
        self._view.set_active_filter(catalog_filter)
        self.render_games()

    def search_games(self, query: str) -> None:
        self.state.current_search_query = query.strip().lower()
        self.render_games()

    def render_games(self) -> None:
        subset = self._store.visible_subset(
            self.state.current_filter, self.state.current_search_query
        )
        self._view.show_catalog(self._renderer.render_catalog(subset))

    def update_stats(self) -> None:
        self._view.show_stats(
            self._renderer.render_stats(self._store.counts(), self._store.total_size())
        )

    # ── Library ──────────────────────────────────────────────────────────────

    async def load_games(self) -> None:
        self._load_generation += 1
        generation = self._load_generation
        self._view.set_loading(True)
        try:
            games = await self._store.load()
            if games is not None:
                self.render_games()
                self.update_stats()
        except GameHubError as exc:
            logger.error("Failed to load games: %s", exc)
        finally:
            # An older load finishing must not hide a newer one's indicator.
            if generation == self._load_generation:
                self._view.set_loading(False)

    async def refresh_library(self) -> None:
        self._notify("Refreshing library...", "info")
        await self.load_games()

    async def submit_add_game(
        self,
        name: Optional[str],
        igdb_id: Union[str, int, None] = None,
        file_path: Optional[str] = None,
    ) -> bool:
        """Handle the add-game form. Returns True when the game was added."""
        try:
            payload = build_add_game_payload(name, igdb_id, file_path)
        except ValidationError as exc:
            self._notify(str(exc), "warning")
            return False

        game_id = await self._create_game(payload, failure_message="Failed to add game")
        if game_id is None:
            return False

        self._notify("Game added successfully!", "success")
        self.hide_add_game_form()
        if payload["igdb_id"] is not None and game_id:
            await self.fetch_game_metadata(game_id)
        await self.load_games()
        return True

    async def add_game_from_store(self, igdb_id: Union[str, int], name: str) -> bool:
        try:
            payload = build_add_game_payload(name, igdb_id, None)
        except ValidationError as exc:
            self._notify(str(exc), "warning")
            return False
        if payload["igdb_id"] is None:
            self._notify(f"{name} has no IGDB reference.", "warning")
            return False

        game_id = await self._create_game(payload, failure_message=f"Failed to add {name}")
        if game_id is None:
            return False

        self._notify(f"{name} added to library!", "success")
        if game_id:
            await self.fetch_game_metadata(game_id)
        if self.state.current_section == SECTION_LIBRARY:
            await self.load_games()
        return True

    async def fetch_game_metadata(self, game_id: str) -> Optional[Any]:
        """Best-effort IGDB enrichment; failure is only a warning."""
        try:
            envelope = await self._gateway.fetch_metadata(game_id)
        except ApiError as exc:
            logger.warning("Metadata enrichment failed for %s: %s", game_id, exc)
            self._notify("Failed to fetch game metadata", "warning")
            return None
        if not envelope.success:
            return None
        self._notify("Game metadata updated!", "success")
        return envelope.data

    async def refresh_metadata(self, game_id: str) -> None:
        data = await self.fetch_game_metadata(game_id)
        if isinstance(data, dict):
            self._view.show_detail(self._renderer.render_detail(GameRecord.from_dict(data)))
            if self.state.current_section == SECTION_LIBRARY:
                await self.load_games()

    async def install_game(self, game_id: str) -> None:
        # TODO: call the backend once an install endpoint exists.
        logger.info("Install game: %s", game_id)
        self._notify("Install functionality coming soon!", "info")

    async def uninstall_game(self, game_id: str) -> None:
        logger.info("Uninstall game: %s", game_id)
        self._notify("Uninstall functionality coming soon!", "info")

    # ── Store ────────────────────────────────────────────────────────────────

    async def search_store(self, query: str) -> None:
        query = query.strip()
        if not query:
            return

        self._search_generation += 1
        generation = self._search_generation
        self._view.show_store_results(self._renderer.render_store_loading())

        try:
            envelope = await self._gateway.search_store(query)
        except ApiError:
            if generation == self._search_generation:
                self._notify("Store search failed", "error")
                self._view.show_store_results(StoreResultsView())
            return

        if generation != self._search_generation:
            logger.debug("Discarding stale store search for %r", query)
            return
        if not envelope.success:
            self._view.show_store_results(StoreResultsView())
            return

        raw = envelope.data if isinstance(envelope.data, list) else []
        results = [StoreResult.from_dict(r) for r in raw if isinstance(r, dict)]
        self._view.show_store_results(self._renderer.render_store_results(results))

    # ── Dialogs ──────────────────────────────────────────────────────────────

    async def show_game_details(self, game_id: str) -> None:
        """Open the dialog from the cached record, then refresh it from the backend."""
        cached = self._store.get(game_id)
        if cached is not None:
            self._view.show_detail(self._renderer.render_detail(cached))
        try:
            envelope = await self._gateway.fetch_game_details(game_id)
        except ApiError:
            self._notify("Failed to load game details", "error")
            return
        if envelope.success and isinstance(envelope.data, dict):
            record = GameRecord.from_dict(envelope.data)
            self._view.show_detail(self._renderer.render_detail(record))

    def hide_game_details(self) -> None:
        self._view.hide_detail()

    def show_add_game_form(self) -> None:
        self._view.show_add_game_form()

    def hide_add_game_form(self) -> None:
        self._view.hide_add_game_form()

    # ── Private helpers ──────────────────────────────────────────────────────

    async def _create_game(
        self, payload: Dict[str, Any], *, failure_message: str
    ) -> Optional[str]:
        """POST the game; returns its new id ("" if the server sent none) or None."""
        try:
            envelope = await self._gateway.add_game(payload)
        except ApiError:
            self._notify(failure_message, "error")
            return None
        if not envelope.success:
            return None
        data = envelope.data if isinstance(envelope.data, dict) else {}
        return str(data.get("id") or "")

    def _notify(self, message: str, level: NotificationLevel) -> None:
        self._notifications.notify(message, level)
