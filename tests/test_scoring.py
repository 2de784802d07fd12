"""Tests for build scoring."""

import pytest

from spacewar.ai.config import AIConfig
from spacewar.ai.scoring import (
    ScoreBreakdown,
    early_weights,
    mine_room_scale,
    score_build,
    shipyard_diminish,
    wanted_defense,
)
from spacewar.ai.view import WorldView
from spacewar.models.game import Game
from spacewar.models.kinds import StructureKind
from spacewar.models.star import QueueJob, Star


def make_star(star_id, owner="p2", **kwargs):
    kwargs.setdefault("position", (0, 0, 0))
    return Star(id=star_id, name=star_id, owner=owner, **kwargs)


def make_view(*stars):
    return WorldView.snapshot(Game(seed=1, stars=list(stars)))


@pytest.fixture
def config():
    return AIConfig()


class TestScoreBreakdown:
    def test_total_multiplies_modifiers(self):
        breakdown = ScoreBreakdown(2.0)
        breakdown.apply("colony", 1.5)
        breakdown.apply("no shipyard", 0.1)

        assert breakdown.total == pytest.approx(0.3)

    def test_explain_lists_modifiers(self):
        breakdown = ScoreBreakdown(1.5)
        breakdown.apply("colony", 1.3)

        text = breakdown.explain()
        assert "colony x1.3" in text
        assert text.endswith("= 1.950")

    def test_empty_breakdown_scores_zero(self):
        assert ScoreBreakdown().total == 0


@pytest.mark.parametrize(
    "mines,expected",
    [(0, 1.0), (4, 1.0), (5, 0.7), (10, 0.6), (15, 0.5), (20, 0.4), (24, 0.4)],
)
def test_early_weights_damp_mines(mines, expected):
    weights = early_weights(mines)
    assert weights["mine"] == expected
    assert weights["new_shipyard"] == 0


def test_early_weights_end_at_25_mines():
    assert early_weights(25) is None
    assert early_weights(100) is None


class TestMineRoomScale:
    def test_full_star_scores_zero(self, config):
        star = make_star("A", mines=5)
        view = make_view(star)

        assert mine_room_scale(view, view.star("A"), "p2", config) == 0

    def test_unmined_star_waits_for_others(self, config):
        """Mining concentrates on stars that already have mines."""
        view = make_view(make_star("A"), make_star("B", mines=2))

        assert mine_room_scale(view, view.star("A"), "p2", config) == 0

    def test_unmined_star_opens_when_others_full(self, config):
        view = make_view(make_star("A"), make_star("B", mines=5))

        assert mine_room_scale(view, view.star("A"), "p2", config) == 0.25

    def test_partial_star(self, config):
        view = make_view(make_star("A", mines=3))

        # 2 free slots: 2 / 5 + 0.2
        assert mine_room_scale(view, view.star("A"), "p2", config) == pytest.approx(0.6)

    def test_queued_mines_count_as_built(self, config):
        star = make_star(
            "A",
            mines=4,
            planetary_queue=[QueueJob(id="j", kind=StructureKind.MINE, time_left=5, total_time=10)],
        )
        view = make_view(star)

        assert mine_room_scale(view, view.star("A"), "p2", config) == 0


def test_shipyard_diminish():
    assert shipyard_diminish(make_view(make_star("A", shipyard_level=1)), "p2") == 1.0
    view = make_view(make_star("A", shipyard_level=1), make_star("B", shipyard_level=1))
    assert shipyard_diminish(view, "p2") == 0.5


@pytest.mark.parametrize(
    "infra,yard,expected",
    [(1, 0, 0), (1, 1, 1), (2, 0, 2), (3, 0, 2), (3, 1, 3), (4, 0, 4), (4, 2, 6)],
)
def test_wanted_defense(infra, yard, expected):
    star = make_view(make_star("A", infrastructure_level=infra)).star("A")
    assert wanted_defense(star, yard) == expected


class TestScoreBuild:
    def test_homeworld_mine(self, config):
        star = make_star("A", is_homeworld=True, mines=1, shipyard_level=1)
        view = make_view(star)

        breakdown = score_build(view, view.star("A"), StructureKind.MINE, "p2", config)

        # 1.5 * (1 - 1/5), no modifiers for a homeworld with a shipyard
        assert breakdown.total == pytest.approx(1.2)
        assert breakdown.modifiers == []

    def test_mine_cap_scores_zero(self, config):
        view = make_view(make_star("A", mines=5, shipyard_level=1))

        assert score_build(view, view.star("A"), StructureKind.MINE, "p2", config).total == 0

    def test_colony_without_shipyard(self, config):
        star = make_star("A", connections={"B", "C", "D"})
        view = make_view(star)

        breakdown = score_build(view, view.star("A"), StructureKind.MINE, "p2", config)

        assert [name for name, _ in breakdown.modifiers] == ["colony", "junction", "no shipyard"]
        assert breakdown.total == pytest.approx(1.5 * 1.3 * 1.2 * 0.1)

    def test_infrastructure_needs_mine_or_shipyard(self, config):
        view = make_view(make_star("A"))

        score = score_build(view, view.star("A"), StructureKind.INFRASTRUCTURE, "p2", config)
        assert score.total == 0

    def test_infrastructure_feeds_economy(self, config):
        star = make_star("A", is_homeworld=True, mines=1, shipyard_level=1)
        view = make_view(star)

        score = score_build(view, view.star("A"), StructureKind.INFRASTRUCTURE, "p2", config)

        assert score.total == pytest.approx(1.3 * 3 * 1.8 * 1.8)

    def test_infrastructure_outpacing_shipyard_is_damped(self, config):
        star = make_star(
            "A", is_homeworld=True, infrastructure_level=2, mines=1, shipyard_level=1
        )
        view = make_view(star)

        score = score_build(view, view.star("A"), StructureKind.INFRASTRUCTURE, "p2", config)

        assert ("outpaces shipyard", 0.1) in score.modifiers

    def test_cruiser_unlock_bonus(self, config):
        star = make_star("A", is_homeworld=True, infrastructure_level=3, shipyard_level=2)
        view = make_view(star)

        score = score_build(view, view.star("A"), StructureKind.SHIPYARD, "p2", config)

        assert score.total == pytest.approx(1.2 * 1 * 3.0)

    def test_shipyard_capped_by_tier(self, config):
        view = make_view(make_star("A", is_homeworld=True, shipyard_level=1))

        assert score_build(view, view.star("A"), StructureKind.SHIPYARD, "p2", config).total == 0

    def test_defense_on_homeworld_with_shipyard(self, config):
        view = make_view(make_star("A", is_homeworld=True, shipyard_level=1))

        score = score_build(view, view.star("A"), StructureKind.DEFENSE_UPGRADE, "p2", config)

        # One missing level, star value x2 for the shipyard
        assert score.total == pytest.approx(4.0)

    def test_defense_skipped_on_bare_colony(self, config):
        view = make_view(make_star("A"))

        score = score_build(view, view.star("A"), StructureKind.DEFENSE_UPGRADE, "p2", config)
        assert score.total == 0
