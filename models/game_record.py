"""
models/game_record.py – Data models for catalogue entries, store candidates
and the API response envelope.

All constructors are tolerant: the backend may omit any optional field and
the serialized ``genres`` / ``platforms`` columns may hold malformed JSON.
"""

import json
import logging
import math
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameRecord:
    """
    One game in the user's library.

    Attributes
    ----------
    id           : Stable backend identifier (UUID string).
    name         : Title as stored by the backend.
    summary      : Short description; None when absent.
    storyline    : Long description; None when absent.
    developer    : Developer company name.
    publisher    : Publisher company name.
    release_date : RFC 3339 timestamp string as sent by the backend.
    rating       : IGDB rating 0–100; None when unrated.
    genres       : Serialized JSON list of ``{"name": ...}`` objects.
    platforms    : Serialized JSON list of ``{"name": ...}`` objects.
    cover_url    : Absolute cover image URL.
    file_path    : Local path of the game files, if known.
    file_size    : Size in bytes, never negative.
    is_installed : Installation flag.
    igdb_id      : IGDB reference used for metadata enrichment.
    """

    id: str
    name: str
    summary: Optional[str] = None
    storyline: Optional[str] = None
    developer: Optional[str] = None
    publisher: Optional[str] = None
    release_date: Optional[str] = None
    rating: Optional[float] = None
    genres: Optional[str] = None
    platforms: Optional[str] = None
    cover_url: Optional[str] = None
    file_path: Optional[str] = None
    file_size: int = 0
    is_installed: bool = False
    igdb_id: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GameRecord":
        """Build a record from an API dict, normalising absent fields."""
        file_size = _optional_int(data.get("file_size")) or 0
        return cls(
            id=_optional_str(data.get("id")) or "",
            name=_optional_str(data.get("name")) or "",
            summary=_optional_str(data.get("summary")),
            storyline=_optional_str(data.get("storyline")),
            developer=_optional_str(data.get("developer")),
            publisher=_optional_str(data.get("publisher")),
            release_date=_optional_str(data.get("release_date")),
            rating=_optional_float(data.get("rating")),
            genres=_serialized(data.get("genres")),
            platforms=_serialized(data.get("platforms")),
            cover_url=_optional_str(data.get("cover_url")),
            file_path=_optional_str(data.get("file_path")),
            file_size=max(file_size, 0),
            is_installed=bool(data.get("is_installed")),
            igdb_id=_optional_int(data.get("igdb_id")),
        )

    def __str__(self) -> str:
        state = "installed" if self.is_installed else "not installed"
        return f"{self.name}  [{state}]"


@dataclass(frozen=True)
class StoreResult:
    """
    A transient IGDB search candidate.

    ``cover_url`` is kept exactly as IGDB sends it (protocol-relative,
    ``t_thumb`` size); the renderer converts it for display.
    """

    id: int
    name: str
    summary: Optional[str] = None
    rating: Optional[float] = None
    cover_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StoreResult":
        cover = data.get("cover")
        cover_url = None
        if isinstance(cover, Mapping):
            cover_url = _optional_str(cover.get("url"))
        return cls(
            id=_optional_int(data.get("id")) or 0,
            name=_optional_str(data.get("name")) or "",
            summary=_optional_str(data.get("summary")),
            rating=_optional_float(data.get("rating")),
            cover_url=cover_url,
        )


@dataclass(frozen=True)
class Envelope:
    """The ``{success, data, error}`` wrapper every endpoint responds with."""

    success: bool
    data: Any = None
    error: Optional[str] = None

    @classmethod
    def from_json(cls, payload: Any) -> "Envelope":
        if not isinstance(payload, Mapping):
            return cls(success=False, error="Malformed response from server.")
        return cls(
            success=bool(payload.get("success")),
            data=payload.get("data"),
            error=_optional_str(payload.get("error")),
        )


def parse_tag_names(serialized: Optional[str]) -> Optional[List[str]]:
    """
    Decode a serialized ``[{"name": ...}, ...]`` list into its names.

    Returns None when the value is absent or not a JSON list; entries that
    are not objects with a string ``name`` are skipped.
    """
    if not serialized:
        return None
    try:
        parsed = json.loads(serialized)
    except (TypeError, ValueError):
        logger.debug("Ignoring malformed tag list: %r", serialized)
        return None
    if not isinstance(parsed, list):
        return None
    names: List[str] = []
    for item in parsed:
        if isinstance(item, Mapping) and isinstance(item.get("name"), str):
            names.append(item["name"])
    return names


# ── Private helpers ───────────────────────────────────────────────────────────


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _optional_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _optional_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _serialized(value: Any) -> Optional[str]:
    """Keep strings as-is; re-serialize lists sent already decoded."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return None
