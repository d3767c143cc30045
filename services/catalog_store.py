"""
services/catalog_store.py – In-memory game catalogue and its derived views.

The store is the only shared mutable state: ``load`` is its single writer and
replaces the list wholesale; everything else is a pure read.
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from models.game_record import GameRecord
from models.view_state import FILTERS, CategoryCounts
from services.api_gateway import ApiGateway

logger = logging.getLogger(__name__)


class CatalogStore:
    """Holds the current GameRecord list for the session."""

    def __init__(self, gateway: ApiGateway) -> None:
        self._gateway = gateway
        self._games: Tuple[GameRecord, ...] = ()
        self._generation = 0

    @property
    def games(self) -> Tuple[GameRecord, ...]:
        return self._games

    async def load(self) -> Optional[List[GameRecord]]:
        """
        Fetch the catalogue and replace the in-memory list.

        Returns
        -------
        The new list, or None when the server rejected the request or a newer
        load was started while this one was in flight. In both cases the
        previous list is kept.

        Raises
        ------
        ApiError
            Propagated from the gateway; the previous list is kept.
        """
        self._generation += 1
        generation = self._generation

        envelope = await self._gateway.load_games()

        if generation != self._generation:
            logger.debug("Discarding stale catalogue load #%d", generation)
            return None
        if not envelope.success:
            return None

        data = envelope.data if isinstance(envelope.data, dict) else {}
        raw_games = data.get("games") or []
        self._games = tuple(
            _unique(GameRecord.from_dict(g) for g in raw_games if isinstance(g, dict))
        )
        logger.info("Catalogue loaded: %d games.", len(self._games))
        return list(self._games)

    def get(self, game_id: str) -> Optional[GameRecord]:
        for game in self._games:
            if game.id == game_id:
                return game
        return None

    def visible_subset(self, catalog_filter: str, query: str) -> List[GameRecord]:
        return visible_subset(self._games, catalog_filter, query)

    def counts(self) -> CategoryCounts:
        installed = sum(1 for g in self._games if g.is_installed)
        return CategoryCounts(
            all=len(self._games),
            installed=installed,
            uninstalled=len(self._games) - installed,
        )

    def total_size(self) -> int:
        return sum(g.file_size for g in self._games)


def visible_subset(
    games: Sequence[GameRecord], catalog_filter: str, query: str
) -> List[GameRecord]:
    """
    Apply a category filter, then narrow by a case-insensitive search.

    A game matches the query when it is a substring of its name or summary.
    An empty query matches everything.
    """
    if catalog_filter not in FILTERS:
        raise ValueError(f"Unknown catalogue filter: {catalog_filter!r}")

    if catalog_filter == "installed":
        result = [g for g in games if g.is_installed]
    elif catalog_filter == "uninstalled":
        result = [g for g in games if not g.is_installed]
    else:
        result = list(games)

    q = query.strip().lower()
    if not q:
        return result
    return [g for g in result if _matches(g, q)]


# ── Private helpers ───────────────────────────────────────────────────────────


def _matches(game: GameRecord, q: str) -> bool:
    if game.name and q in game.name.lower():
        return True
    return bool(game.summary) and q in game.summary.lower()


def _unique(games) -> List[GameRecord]:
    seen: Dict[str, GameRecord] = {}
    for game in games:
        if game.id in seen:
            logger.warning("Duplicate game id %r in catalogue; keeping first.", game.id)
            continue
        seen[game.id] = game
    return list(seen.values())
