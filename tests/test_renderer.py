#!/usr/bin/env python3
"""
Tests for views/renderer.py and the tolerant model constructors it relies on.

Run with:
    python -m pytest tests/test_renderer.py
"""
import json
import os
import sys
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from models.game_record import GameRecord, StoreResult, parse_tag_names
from models.view_state import CategoryCounts
from views.renderer import (
    NO_DESCRIPTION,
    NO_STORE_RESULTS,
    ViewRenderer,
    format_file_size,
    log_entry_html,
    release_year,
    store_cover_url,
)

GENRES = json.dumps([{"id": 5, "name": "Shooter"}, {"id": 12, "name": "RPG"},
                     {"id": 31, "name": "Adventure"}])
PLATFORMS = json.dumps([{"id": 6, "name": "PC"}, {"id": 49, "name": "Xbox One"}])


def _game(**overrides):
    fields = dict(id="g1", name="Halo", summary="Short summary.", genres=GENRES,
                  platforms=PLATFORMS, rating=87.4, is_installed=False)
    fields.update(overrides)
    return GameRecord(**fields)


# ===========================================================================
# Library cards
# ===========================================================================

class TestCatalogRendering(unittest.TestCase):

    def setUp(self):
        self.renderer = ViewRenderer()

    def test_long_summary_truncated_to_150(self):
        card = self.renderer.render_game_card(_game(summary="x" * 200))
        self.assertEqual(card.summary, "x" * 150 + "...")

    def test_short_summary_unmodified(self):
        summary = "y" * 100
        self.assertEqual(self.renderer.render_game_card(_game(summary=summary)).summary, summary)

    def test_summary_at_limit_unmodified(self):
        summary = "z" * 150
        self.assertEqual(self.renderer.render_game_card(_game(summary=summary)).summary, summary)

    def test_missing_summary_placeholder(self):
        for summary in (None, "", "   "):
            card = self.renderer.render_game_card(_game(summary=summary))
            self.assertEqual(card.summary, NO_DESCRIPTION)

    def test_card_shows_first_two_genres(self):
        card = self.renderer.render_game_card(_game())
        self.assertEqual(card.genre_label, "Shooter, RPG")

    def test_malformed_genres_render_empty_tag(self):
        for genres in ("not json", "{\"name\": \"RPG\"}", "[1, 2]", None, ""):
            card = self.renderer.render_game_card(_game(genres=genres))
            self.assertEqual(card.genre_label, "")

    def test_rating_rounded(self):
        self.assertEqual(self.renderer.render_game_card(_game(rating=87.4)).rating_label, "87%")
        self.assertEqual(self.renderer.render_game_card(_game(rating=87.5)).rating_label, "88%")

    def test_absent_rating_has_no_badge(self):
        self.assertIsNone(self.renderer.render_game_card(_game(rating=None)).rating_label)

    def test_non_finite_rating_has_no_badge(self):
        for rating in (float("inf"), float("-inf"), float("nan")):
            self.assertIsNone(self.renderer.render_game_card(_game(rating=rating)).rating_label)

    def test_infinite_rating_from_api_renders(self):
        game = GameRecord.from_dict({"id": "1", "name": "x", "rating": "Infinity"})
        card = self.renderer.render_game_card(game)
        self.assertIsNone(card.rating_label)
        self.assertNotIn("Rating", dict(self.renderer.render_detail(game).fields))

    def test_out_of_range_rating_is_clamped(self):
        self.assertEqual(self.renderer.render_game_card(_game(rating=-5)).rating_label, "0%")
        self.assertEqual(self.renderer.render_game_card(_game(rating=150)).rating_label, "100%")

    def test_install_toggle_for_uninstalled_game(self):
        card = self.renderer.render_game_card(_game(is_installed=False))
        kinds = [a.kind for a in card.actions]
        self.assertIn("install", kinds)
        self.assertNotIn("uninstall", kinds)

    def test_uninstall_toggle_for_installed_game(self):
        card = self.renderer.render_game_card(_game(is_installed=True))
        kinds = [a.kind for a in card.actions]
        self.assertIn("uninstall", kinds)
        self.assertNotIn("install", kinds)

    def test_card_opens_details(self):
        card = self.renderer.render_game_card(_game())
        self.assertEqual(card.open_action.kind, "details")
        self.assertEqual(card.open_action.target_id, "g1")

    def test_render_is_idempotent(self):
        games = [_game(id=str(i), name=f"Game {i}") for i in range(5)]
        self.assertEqual(self.renderer.render_catalog(games), self.renderer.render_catalog(games))

    def test_empty_subset_shows_empty_state(self):
        view = self.renderer.render_catalog([])
        self.assertFalse(view.grid_visible)
        self.assertTrue(view.empty_state_visible)
        self.assertEqual(view.cards, ())

    def test_non_empty_subset_shows_grid(self):
        view = self.renderer.render_catalog([_game()])
        self.assertTrue(view.grid_visible)
        self.assertFalse(view.empty_state_visible)
        self.assertEqual(len(view.cards), 1)

    def test_sparse_record_renders(self):
        card = self.renderer.render_game_card(GameRecord.from_dict({"id": 9}))
        self.assertEqual(card.title, "")
        self.assertEqual(card.summary, NO_DESCRIPTION)
        self.assertIsNone(card.cover_url)


# ===========================================================================
# Store cards
# ===========================================================================

class TestStoreRendering(unittest.TestCase):

    def setUp(self):
        self.renderer = ViewRenderer()

    def test_long_summary_truncated_to_120(self):
        card = self.renderer.render_store_card(StoreResult(id=1, name="Zelda", summary="x" * 200))
        self.assertEqual(card.summary, "x" * 120 + "...")

    def test_short_summary_unmodified(self):
        card = self.renderer.render_store_card(StoreResult(id=1, name="Zelda", summary="y" * 100))
        self.assertEqual(card.summary, "y" * 100)

    def test_no_results_message(self):
        view = self.renderer.render_store_results([])
        self.assertEqual(view.message, NO_STORE_RESULTS)
        self.assertEqual(view.cards, ())

    def test_add_action_carries_igdb_id_and_name(self):
        view = self.renderer.render_store_results([StoreResult(id=1025, name="Zelda")])
        (action,) = view.cards[0].actions
        self.assertEqual((action.kind, action.target_id, action.target_name),
                         ("add", "1025", "Zelda"))

    def test_cover_url_convention(self):
        result = StoreResult.from_dict({
            "id": 1, "name": "Zelda",
            "cover": {"id": 7, "url": "//images.igdb.com/igdb/image/upload/t_thumb/co1.jpg"},
        })
        card = self.renderer.render_store_card(result)
        self.assertEqual(card.cover_url,
                         "https://images.igdb.com/igdb/image/upload/t_cover_big/co1.jpg")

    def test_absolute_cover_url_keeps_scheme(self):
        self.assertEqual(store_cover_url("https://x/t_thumb/a.jpg"), "https://x/t_cover_big/a.jpg")
        self.assertIsNone(store_cover_url(None))

    def test_loading_view(self):
        self.assertTrue(self.renderer.render_store_loading().loading)


# ===========================================================================
# Detail dialog
# ===========================================================================

class TestDetailRendering(unittest.TestCase):

    def setUp(self):
        self.renderer = ViewRenderer()

    def _fields(self, game):
        return dict(self.renderer.render_detail(game).fields)

    def test_release_year(self):
        fields = self._fields(_game(release_date="2011-11-15T00:00:00Z"))
        self.assertEqual(fields["Release Year"], "2011")

    def test_missing_or_bad_release_date(self):
        self.assertEqual(self._fields(_game(release_date=None))["Release Year"], "Unknown")
        self.assertEqual(self._fields(_game(release_date="soon"))["Release Year"], "Unknown")

    def test_all_genres_and_platforms(self):
        fields = self._fields(_game())
        self.assertEqual(fields["Genres"], "Shooter, RPG, Adventure")
        self.assertEqual(fields["Platforms"], "PC, Xbox One")

    def test_malformed_tags_are_unknown(self):
        fields = self._fields(_game(genres="oops", platforms=None))
        self.assertEqual(fields["Genres"], "Unknown")
        self.assertEqual(fields["Platforms"], "Unknown")

    def test_rating_row_only_when_present(self):
        self.assertEqual(self._fields(_game(rating=91.2))["Rating"], "91%")
        self.assertNotIn("Rating", self._fields(_game(rating=None)))

    def test_actions_for_installed_game(self):
        view = self.renderer.render_detail(_game(is_installed=True))
        self.assertEqual([a.kind for a in view.actions], ["uninstall", "refresh_metadata"])
        self.assertEqual(dict(view.fields)["Status"], "Installed")

    def test_actions_for_uninstalled_game(self):
        view = self.renderer.render_detail(_game(is_installed=False))
        self.assertEqual([a.kind for a in view.actions], ["install", "refresh_metadata"])
        self.assertEqual(dict(view.fields)["Status"], "Not Installed")

    def test_unknown_developer_publisher_and_title(self):
        view = self.renderer.render_detail(GameRecord(id="x", name=""))
        fields = dict(view.fields)
        self.assertEqual(view.title, "Unknown")
        self.assertEqual(fields["Developer"], "Unknown")
        self.assertEqual(fields["Publisher"], "Unknown")
        self.assertIsNone(view.summary)
        self.assertIsNone(view.storyline)


# ===========================================================================
# Stats and helpers
# ===========================================================================

class TestFormatting(unittest.TestCase):

    def test_format_file_size(self):
        self.assertEqual(format_file_size(0), "0 GB")
        self.assertEqual(format_file_size(512), "512 Bytes")
        self.assertEqual(format_file_size(1536), "1.5 KB")
        self.assertEqual(format_file_size(1024 ** 2), "1 MB")
        self.assertEqual(format_file_size(int(7.25 * 1024 ** 3)), "7.25 GB")

    def test_log_entry_escapes_message(self):
        line = log_entry_html("12:00:00", "Added <Halo> & \"ODST\"", "#34d399", "OK")
        self.assertIn("Added &lt;Halo&gt; &amp; &quot;ODST&quot;", line)
        self.assertTrue(line.startswith('<span style="color:#34d399">[12:00:00] OK  '))
        self.assertNotIn("<Halo>", line)

    def test_release_year_plain_date(self):
        self.assertEqual(release_year("1998-11-21"), "1998")

    def test_render_stats(self):
        stats = ViewRenderer().render_stats(CategoryCounts(2, 0, 2), 2 * 1024 ** 3)
        self.assertEqual(stats.total_games, "2")
        self.assertEqual(stats.total_size, "2 GB")
        self.assertEqual(stats.counts.uninstalled, 2)


class TestModels(unittest.TestCase):

    def test_parse_tag_names_tolerates_garbage(self):
        self.assertIsNone(parse_tag_names("not json"))
        self.assertIsNone(parse_tag_names(None))
        self.assertEqual(parse_tag_names('[{"name": "RPG"}, {"id": 3}, "x"]'), ["RPG"])

    def test_from_dict_normalises_fields(self):
        game = GameRecord.from_dict({
            "id": "abc", "name": "Halo", "rating": "77.5", "file_size": -10,
            "is_installed": 1, "igdb_id": "740", "genres": [{"name": "Shooter"}],
        })
        self.assertEqual(game.rating, 77.5)
        self.assertEqual(game.file_size, 0)
        self.assertTrue(game.is_installed)
        self.assertEqual(game.igdb_id, 740)
        self.assertEqual(parse_tag_names(game.genres), ["Shooter"])

    def test_null_id_becomes_empty(self):
        self.assertEqual(GameRecord.from_dict({"id": None, "name": "Halo"}).id, "")
        self.assertEqual(GameRecord.from_dict({"name": "Halo"}).id, "")
        self.assertEqual(GameRecord.from_dict({"id": 7}).id, "7")

    def test_non_finite_rating_is_absent(self):
        for raw in ("Infinity", "-inf", "NaN", float("inf")):
            self.assertIsNone(GameRecord.from_dict({"id": "1", "rating": raw}).rating)

    def test_store_result_without_cover(self):
        result = StoreResult.from_dict({"id": 3, "name": "Zelda", "cover": None})
        self.assertIsNone(result.cover_url)


if __name__ == "__main__":
    unittest.main()
