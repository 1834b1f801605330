"""Unit tests for regional aggregation."""

import pytest

from app.schemas.dream import DreamCategory
from app.schemas.region import BoundaryGeometry, RegionBoundary, TrendingSymbol
from app.services.aggregation_service import (
    compute_region_stats,
    compute_theme_map,
    dominant_theme,
    mood_score,
    trending_symbols,
)
from factories import make_dream, polygon_boundary, rectangle_ring


class TestComputeRegionStats:
    def test_no_matching_dreams_returns_empty_stats(self, square_boundary) -> None:
        far_away = [make_dream(lat=60, lng=60), make_dream(lat=-30, lng=-100)]

        stats = compute_region_stats("Squareland", square_boundary, far_away)

        assert stats.country_name == "Squareland"
        assert stats.total_dreams == 0
        assert stats.dominant_theme == "N/A"
        assert stats.mood_score == 0
        assert stats.trending_symbols == []

    def test_empty_snapshot(self, square_boundary) -> None:
        stats = compute_region_stats("Squareland", square_boundary, [])

        assert stats.total_dreams == 0
        assert stats.dominant_theme == "N/A"

    def test_counts_only_dreams_inside_boundary(self, square_boundary) -> None:
        dreams = [
            make_dream(lat=1, lng=1),
            make_dream(lat=9, lng=9),
            make_dream(lat=11, lng=5),
            make_dream(lat=5, lng=-0.5),
        ]

        stats = compute_region_stats("Squareland", square_boundary, dreams)

        assert stats.total_dreams == 2

    def test_theme_and_mood_for_nightmare_majority(self, square_boundary) -> None:
        dreams = [
            make_dream(category=DreamCategory.NIGHTMARE),
            make_dream(category=DreamCategory.NIGHTMARE),
            make_dream(category=DreamCategory.ROMANTIC),
        ]

        stats = compute_region_stats("Squareland", square_boundary, dreams)

        assert stats.dominant_theme == DreamCategory.NIGHTMARE
        assert stats.mood_score == -30

    def test_country_name_is_echoed_not_taken_from_boundary(self, square_boundary) -> None:
        stats = compute_region_stats("Display Name", square_boundary, [make_dream()])

        assert stats.country_name == "Display Name"

    def test_trending_symbols_blue_whale(self, square_boundary) -> None:
        dreams = [
            make_dream(text="I saw a blue whale"),
            make_dream(text="A blue whale swam"),
        ]

        stats = compute_region_stats("Squareland", square_boundary, dreams)

        assert stats.trending_symbols[:2] == [
            TrendingSymbol(word="#blue", count=2),
            TrendingSymbol(word="#whale", count=2),
        ]
        assert TrendingSymbol(word="#swam", count=1) in stats.trending_symbols
        words = [s.word for s in stats.trending_symbols]
        assert "#a" not in words
        assert "#i" not in words
        assert "#saw" not in words

    def test_symbol_limit_is_respected(self, square_boundary) -> None:
        dreams = [make_dream(text="alpha bravo charlie delta echo foxtrot golf")]

        stats = compute_region_stats("Squareland", square_boundary, dreams, symbol_limit=3)

        assert [s.word for s in stats.trending_symbols] == ["#alpha", "#bravo", "#charlie"]

    def test_identical_inputs_give_identical_output(self, square_boundary) -> None:
        dreams = [
            make_dream(category=DreamCategory.LUCID, text="flying above glass towers"),
            make_dream(category=DreamCategory.STRESS, text="late for the exam again"),
            make_dream(category=DreamCategory.LUCID, text="glass ocean and towers"),
        ]

        first = compute_region_stats("Squareland", square_boundary, dreams)
        second = compute_region_stats("Squareland", square_boundary, dreams)

        assert first == second
        assert first.model_dump_json() == second.model_dump_json()

    def test_malformed_boundary_yields_empty_stats(self) -> None:
        broken = RegionBoundary(name="Broken", geometry=BoundaryGeometry(type="Circle"))

        stats = compute_region_stats("Broken", broken, [make_dream()])

        assert stats.total_dreams == 0


class TestDominantTheme:
    def test_empty_is_sentinel(self) -> None:
        assert dominant_theme([]) == "N/A"

    def test_strict_majority_wins(self) -> None:
        dreams = [
            make_dream(category=DreamCategory.ADVENTURE),
            make_dream(category=DreamCategory.SURREAL),
            make_dream(category=DreamCategory.ADVENTURE),
        ]
        assert dominant_theme(dreams) == DreamCategory.ADVENTURE

    def test_tie_is_deterministic_for_fixed_input(self) -> None:
        dreams = [
            make_dream(category=DreamCategory.STRESS),
            make_dream(category=DreamCategory.LUCID),
        ]
        assert dominant_theme(dreams) == dominant_theme(dreams)

    def test_tie_goes_to_earlier_declared_category(self) -> None:
        dreams = [
            make_dream(category=DreamCategory.STRESS),
            make_dream(category=DreamCategory.LUCID),
        ]
        assert dominant_theme(dreams) == DreamCategory.LUCID


class TestMoodScore:
    def test_empty_is_zero(self) -> None:
        assert mood_score([]) == 0

    @pytest.mark.parametrize(
        "category,expected",
        [
            (DreamCategory.NIGHTMARE, -90),
            (DreamCategory.STRESS, -70),
            (DreamCategory.MUNDANE, 0),
            (DreamCategory.SURREAL, 20),
            (DreamCategory.PROPHETIC, 40),
            (DreamCategory.ADVENTURE, 70),
            (DreamCategory.LUCID, 80),
            (DreamCategory.ROMANTIC, 90),
        ],
    )
    def test_single_category_weight(self, category, expected) -> None:
        assert mood_score([make_dream(category=category)]) == expected

    def test_result_is_integer_in_range(self) -> None:
        dreams = [make_dream(category=c) for c in DreamCategory]

        score = mood_score(dreams)

        assert isinstance(score, int)
        assert -100 <= score <= 100

    def test_rounds_half_away_from_zero(self) -> None:
        # 0.2 / 8 * 100 = 2.5
        dreams = [make_dream(category=DreamCategory.SURREAL)] + [
            make_dream(category=DreamCategory.MUNDANE) for _ in range(7)
        ]
        assert mood_score(dreams) == 3

    def test_negative_half_rounds_away_from_zero(self) -> None:
        # (-0.9 + 0.7) / 8 * 100 = -2.5
        dreams = [
            make_dream(category=DreamCategory.NIGHTMARE),
            make_dream(category=DreamCategory.ADVENTURE),
        ] + [make_dream(category=DreamCategory.MUNDANE) for _ in range(6)]
        assert mood_score(dreams) == -3


class TestTrendingSymbols:
    def test_empty_text_gives_no_symbols(self) -> None:
        assert trending_symbols([make_dream(text="")]) == []

    def test_only_stop_words_and_short_tokens(self) -> None:
        assert trending_symbols([make_dream(text="I saw it, and it was so on me")]) == []

    def test_punctuation_is_stripped_and_case_folded(self) -> None:
        symbols = trending_symbols([make_dream(text="Ocean! ocean... OCEAN; (ocean)")])

        assert symbols == [TrendingSymbol(word="#ocean", count=4)]

    def test_ties_keep_first_appearance_order(self) -> None:
        dreams = [
            make_dream(text="zebra apple mango"),
            make_dream(text="mango zebra apple"),
        ]

        symbols = trending_symbols(dreams, limit=3)

        assert [s.word for s in symbols] == ["#zebra", "#apple", "#mango"]

    def test_higher_counts_rank_first(self) -> None:
        dreams = [
            make_dream(text="forest river"),
            make_dream(text="river mountain"),
            make_dream(text="river forest"),
        ]

        symbols = trending_symbols(dreams, limit=5)

        assert symbols == [
            TrendingSymbol(word="#river", count=3),
            TrendingSymbol(word="#forest", count=2),
            TrendingSymbol(word="#mountain", count=1),
        ]

    def test_zero_limit(self) -> None:
        assert trending_symbols([make_dream(text="forest river")], limit=0) == []


class TestThemeMap:
    def test_one_bad_boundary_does_not_abort_others(self) -> None:
        good = polygon_boundary("Good", rectangle_ring(0, 0, 10, 10))
        bad = RegionBoundary(name="Bad", geometry=BoundaryGeometry(type="Polygon", coordinates="oops"))
        empty = polygon_boundary("Empty", rectangle_ring(50, 50, 60, 60))
        dreams = [make_dream(category=DreamCategory.LUCID)]

        themes = compute_theme_map([good, bad, empty], dreams)

        assert themes == {"Good": DreamCategory.LUCID, "Bad": "N/A", "Empty": "N/A"}

    def test_keyed_vertices_and_huge_coordinates_do_not_abort_others(self) -> None:
        good = polygon_boundary("Good", rectangle_ring(0, 0, 10, 10))
        keyed = RegionBoundary(
            name="Keyed",
            geometry=BoundaryGeometry(
                type="Polygon",
                coordinates=[[{"lng": 0, "lat": 0}, {"lng": 10, "lat": 0}, {"lng": 10, "lat": 10}]],
            ),
        )
        huge = RegionBoundary(
            name="Huge",
            geometry=BoundaryGeometry(type="Polygon", coordinates=[[[0, 0], [10**400, 1], [0, 10]]]),
        )
        dreams = [make_dream(category=DreamCategory.LUCID)]

        themes = compute_theme_map([keyed, good, huge], dreams)

        assert themes == {"Keyed": "N/A", "Good": DreamCategory.LUCID, "Huge": "N/A"}
