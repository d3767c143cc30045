"""
models/view_state.py – Interaction state owned by the controller.
"""

from dataclasses import dataclass
from typing import Literal

CatalogFilter = Literal["all", "installed", "uninstalled"]
ViewMode = Literal["grid", "list"]

FILTERS = ("all", "installed", "uninstalled")
VIEW_MODES = ("grid", "list")

SECTION_LIBRARY = "library"
SECTION_STORE = "store"


@dataclass
class ViewState:
    """
    Mutable UI state. Only interaction handlers write to it; rendering code
    reads it.

    Attributes
    ----------
    current_filter       : Active category filter.
    current_search_query : Lower-cased, trimmed library search text.
    current_section      : Top-level navigation context.
    current_view         : Card layout mode (presentation only).
    """

    current_filter: CatalogFilter = "all"
    current_search_query: str = ""
    current_section: str = SECTION_LIBRARY
    current_view: ViewMode = "grid"


@dataclass(frozen=True)
class CategoryCounts:
    """Per-category totals over the unfiltered catalogue."""

    all: int = 0
    installed: int = 0
    uninstalled: int = 0
