"""
views/renderer.py – Turns catalogue data into view trees.

Rendering is total and idempotent: every call builds a fresh, fully-wired tree
from its input alone, so equal input always yields an equal tree. Absent
fields are handled here, field by field, and never raise.
"""

import html
import math
from datetime import datetime
from typing import List, Optional, Sequence

from models.game_record import GameRecord, StoreResult, parse_tag_names
from models.view_state import CategoryCounts
from models.view_tree import (
    ActionView,
    CardView,
    CatalogView,
    DetailView,
    StatsView,
    StoreResultsView,
)

# ── Configuration ────────────────────────────────────────────────────────────

CATALOG_SUMMARY_LIMIT: int = 150
STORE_SUMMARY_LIMIT: int = 120
ELLIPSIS: str = "..."

NO_DESCRIPTION: str = "No description available."
NO_STORE_RESULTS: str = "No games found. Try a different search term."
STORE_LOADING: str = "Searching games..."
UNKNOWN: str = "Unknown"

# Number of genres shown on a library card.
CARD_GENRE_COUNT: int = 2

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB", "TB")


class ViewRenderer:
    """Stateless renderer; one instance is shared by the controller."""

    # ── Library ──────────────────────────────────────────────────────────────

    def render_catalog(self, games: Sequence[GameRecord]) -> CatalogView:
        if not games:
            return CatalogView(cards=(), grid_visible=False, empty_state_visible=True)
        return CatalogView(
            cards=tuple(self.render_game_card(g) for g in games),
            grid_visible=True,
            empty_state_visible=False,
        )

    def render_game_card(self, game: GameRecord) -> CardView:
        genres = parse_tag_names(game.genres) or []
        details = ActionView("details", "Details", game.id)
        return CardView(
            key=game.id,
            title=game.name,
            summary=truncate_summary(game.summary, CATALOG_SUMMARY_LIMIT),
            cover_url=game.cover_url or None,
            genre_label=", ".join(genres[:CARD_GENRE_COUNT]),
            rating_label=rating_label(game.rating),
            actions=(install_toggle(game), details),
            open_action=details,
        )

    def render_stats(self, counts: CategoryCounts, total_size: int) -> StatsView:
        return StatsView(
            total_games=str(counts.all),
            total_size=format_file_size(total_size),
            counts=counts,
        )

    # ── Store ────────────────────────────────────────────────────────────────

    def render_store_results(self, results: Sequence[StoreResult]) -> StoreResultsView:
        if not results:
            return StoreResultsView(message=NO_STORE_RESULTS)
        return StoreResultsView(cards=tuple(self.render_store_card(r) for r in results))

    def render_store_loading(self) -> StoreResultsView:
        return StoreResultsView(message=STORE_LOADING, loading=True)

    def render_store_card(self, result: StoreResult) -> CardView:
        add = ActionView(
            "add", "Add to Library", str(result.id), target_name=result.name, primary=True
        )
        return CardView(
            key=f"igdb-{result.id}",
            title=result.name,
            summary=truncate_summary(result.summary, STORE_SUMMARY_LIMIT),
            cover_url=store_cover_url(result.cover_url),
            genre_label="",
            rating_label=rating_label(result.rating),
            actions=(add,),
        )

    # ── Detail dialog ────────────────────────────────────────────────────────

    def render_detail(self, game: GameRecord) -> DetailView:
        fields = [
            ("Developer", game.developer or UNKNOWN),
            ("Publisher", game.publisher or UNKNOWN),
            ("Release Year", release_year(game.release_date)),
            ("Genres", _tag_label(game.genres)),
            ("Platforms", _tag_label(game.platforms)),
        ]
        rating = rating_label(game.rating)
        if rating is not None:
            fields.append(("Rating", rating))
        fields.append(("Status", "Installed" if game.is_installed else "Not Installed"))

        return DetailView(
            game_id=game.id,
            title=game.name or UNKNOWN,
            cover_url=game.cover_url or None,
            fields=tuple(fields),
            summary=game.summary or None,
            storyline=game.storyline or None,
            actions=(
                install_toggle(game),
                ActionView("refresh_metadata", "Update Metadata", game.id),
            ),
        )


# ── Formatting helpers ────────────────────────────────────────────────────────


def install_toggle(game: GameRecord) -> ActionView:
    """Exactly one of install / uninstall, keyed on the installation flag."""
    if game.is_installed:
        return ActionView("uninstall", "Uninstall", game.id)
    return ActionView("install", "Install", game.id, primary=True)


def truncate_summary(summary: Optional[str], limit: int) -> str:
    if not summary or not summary.strip():
        return NO_DESCRIPTION
    if len(summary) > limit:
        return summary[:limit] + ELLIPSIS
    return summary


def rating_label(rating: Optional[float]) -> Optional[str]:
    """``"87%"`` for a present rating, clamped to 0-100; None (no badge) when absent."""
    if rating is None or not math.isfinite(rating):
        return None
    return f"{math.floor(min(max(rating, 0.0), 100.0) + 0.5)}%"


def release_year(release_date: Optional[str]) -> str:
    if not release_date:
        return UNKNOWN
    text = release_date.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return str(datetime.fromisoformat(text).year)
    except ValueError:
        return UNKNOWN


def store_cover_url(raw_url: Optional[str]) -> Optional[str]:
    """IGDB sends protocol-relative thumbnail URLs; display the big cover."""
    if not raw_url:
        return None
    url = raw_url.replace("t_thumb", "t_cover_big")
    if url.startswith("//"):
        return "https:" + url
    return url


def format_file_size(size: int) -> str:
    """``0 → "0 GB"``; otherwise 1024-based units with at most two decimals."""
    if size <= 0:
        return "0 GB"
    exponent = 0
    while exponent < len(_SIZE_UNITS) - 1 and size >= 1024 ** (exponent + 1):
        exponent += 1
    value = f"{size / 1024 ** exponent:.2f}".rstrip("0").rstrip(".")
    return f"{value} {_SIZE_UNITS[exponent]}"


def _tag_label(serialized: Optional[str]) -> str:
    names: Optional[List[str]] = parse_tag_names(serialized)
    if names is None:
        return UNKNOWN
    return ", ".join(names)


def log_entry_html(timestamp: str, message: str, colour: str, mark: str) -> str:
    """One coloured line for the log area; the message is shown as plain text."""
    return f'<span style="color:{colour}">[{timestamp}] {mark}  {html.escape(message)}</span>'
