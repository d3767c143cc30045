"""
models/view_tree.py – Toolkit-independent render output.

The renderer produces these frozen structures; the Qt adapter turns them into
widgets and the tests assert on them directly. Equal input always yields
equal trees.
"""

from dataclasses import dataclass
from typing import Literal, Optional, Tuple

from models.view_state import CategoryCounts

ActionKind = Literal["install", "uninstall", "details", "add", "refresh_metadata"]


@dataclass(frozen=True)
class ActionView:
    """
    A button bound to a controller operation.

    Attributes
    ----------
    kind        : Which controller handler the button triggers.
    label       : Button caption.
    target_id   : Game id (library) or IGDB id (store) the action applies to.
    target_name : Game name, used by the store "add" action.
    primary     : Render with the accent style.
    """

    kind: ActionKind
    label: str
    target_id: str
    target_name: str = ""
    primary: bool = False


@dataclass(frozen=True)
class CardView:
    key: str
    title: str
    summary: str
    cover_url: Optional[str]
    genre_label: str
    rating_label: Optional[str]
    actions: Tuple[ActionView, ...]
    # Clicking the card body opens the detail dialog (library cards only).
    open_action: Optional[ActionView] = None


@dataclass(frozen=True)
class CatalogView:
    cards: Tuple[CardView, ...]
    grid_visible: bool
    empty_state_visible: bool


@dataclass(frozen=True)
class StoreResultsView:
    cards: Tuple[CardView, ...] = ()
    message: Optional[str] = None
    loading: bool = False


@dataclass(frozen=True)
class DetailView:
    game_id: str
    title: str
    cover_url: Optional[str]
    fields: Tuple[Tuple[str, str], ...]
    summary: Optional[str]
    storyline: Optional[str]
    actions: Tuple[ActionView, ...]


@dataclass(frozen=True)
class StatsView:
    total_games: str
    total_size: str
    counts: CategoryCounts
