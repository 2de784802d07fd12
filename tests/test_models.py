"""Tests for data models."""

import pytest

from spacewar.models import (
    Action,
    ActionType,
    Cost,
    Game,
    Player,
    QueueJob,
    Resources,
    Ship,
    ShipKind,
    ShipState,
    Star,
    StructureKind,
    upgrade_cost,
)
from spacewar.utils import GameRNG


class TestStar:
    """Test Star dataclass."""

    def test_create_star(self):
        """Test basic star creation with defaults."""
        star = Star(id="A", name="Altair", position=(1, 2, 3))
        assert star.owner is None
        assert star.infrastructure_level == 1
        assert star.population == 1
        assert star.mines == 0
        assert star.connections == set()
        assert star.planetary_queue == []

    def test_invalid_position(self):
        with pytest.raises(ValueError, match="Invalid position"):
            Star(id="A", name="Altair", position=(1, 2))

    def test_negative_counts(self):
        with pytest.raises(ValueError, match="Invalid mines"):
            Star(id="A", name="Altair", position=(0, 0, 0), mines=-1)

    def test_self_connection(self):
        with pytest.raises(ValueError, match="connected to itself"):
            Star(id="A", name="Altair", position=(0, 0, 0), connections={"A"})


class TestShip:
    """Test Ship dataclass."""

    def test_hit_points_from_kind(self):
        ship = Ship(id="s", kind=ShipKind.CRUISER, owner="p2", parent_star_id="A")
        assert ship.hp == 3
        assert ship.max_hp == 3

    def test_orbiting_requires_parent(self):
        with pytest.raises(ValueError, match="no parent star"):
            Ship(id="s", kind=ShipKind.FIGHTER, owner="p2")

    def test_moving_requires_target(self):
        with pytest.raises(ValueError, match="no target star"):
            Ship(id="s", kind=ShipKind.FIGHTER, owner="p2", state=ShipState.MOVING)

    def test_requires_owner(self):
        with pytest.raises(ValueError, match="must have an owner"):
            Ship(id="s", kind=ShipKind.FIGHTER, owner="", parent_star_id="A")


class TestQueueJob:
    def test_wire_format(self):
        job = QueueJob(
            id="j", kind=StructureKind.SHIPYARD, time_left=3, total_time=26, target_level=2
        )
        assert job.to_dict() == {
            "id": "j",
            "type": "Shipyard",
            "timeLeft": 3,
            "totalTime": 26,
            "level": 2,
        }

    def test_invalid_time(self):
        with pytest.raises(ValueError, match="total_time"):
            QueueJob(id="j", kind=StructureKind.MINE, time_left=0, total_time=0)


class TestKinds:
    def test_ship_kind_data(self):
        assert ShipKind.DESTROYER.cost == Cost(credits=100, minerals=50, time=25)
        assert ShipKind.CRUISER.required_yard_level == 3
        assert ShipKind.SLIPSTREAM_FRIGATE.power == 0

    def test_labels(self):
        assert ShipKind.from_label("Slipstream Frigate") is ShipKind.SLIPSTREAM_FRIGATE
        assert StructureKind.from_label("Defense Upgrade") is StructureKind.DEFENSE_UPGRADE
        with pytest.raises(ValueError, match="Unknown ship type"):
            ShipKind.from_label("Battleship")
        with pytest.raises(ValueError, match="Unknown structure type"):
            StructureKind.from_label("Castle")

    @pytest.mark.parametrize(
        "level,expected",
        [
            (0, Cost(credits=150, minerals=100, time=20)),
            (1, Cost(credits=195, minerals=130, time=26)),
            (2, Cost(credits=240, minerals=160, time=32)),
            (4, Cost(credits=330, minerals=220, time=44)),
        ],
    )
    def test_upgrade_cost(self, level, expected):
        assert upgrade_cost(level) == expected


class TestAction:
    def test_queue_requires_matching_kind(self):
        with pytest.raises(ValueError, match="cannot build"):
            Action.queue_planetary("A", ShipKind.FIGHTER, 10)

    def test_move_requires_target(self):
        with pytest.raises(ValueError, match="MOVE_SHIP requires"):
            Action.move_ship("s", "A", None)

    def test_wire_format(self):
        action = Action.queue_planetary("A", StructureKind.INFRASTRUCTURE, 26, level=2)
        action.player_id = "p2"

        assert action.to_dict() == {
            "action": "QUEUE_PLANETARY",
            "starId": "A",
            "build": {"type": "Infrastructure", "time": 26, "level": 2},
            "playerId": "p2",
        }

    def test_move_wire_format(self):
        data = Action.move_ship("s", "A", "B").to_dict()
        assert data["fromStarId"] == "A"
        assert data["toStarId"] == "B"

    def test_no_base(self):
        assert Action(action=ActionType.NO_BASE).to_dict() == {
            "action": "NO_BASE",
            "playerId": None,
        }


class TestGame:
    def test_rng_initialized(self):
        game = Game(seed=42)
        assert isinstance(game.rng, GameRNG)

    def test_negative_tick(self):
        with pytest.raises(ValueError, match="Invalid tick"):
            Game(seed=42, tick=-1)

    def test_id_counters(self):
        game = Game(seed=42)
        assert game.next_ship_id("p2") == "p2-0000"
        assert game.next_ship_id("p2") == "p2-0001"
        assert game.next_ship_id("p1") == "p1-0000"
        assert game.next_job_id() == "job-00001"

    def test_lookup(self):
        star = Star(id="A", name="A", position=(0, 0, 0))
        game = Game(seed=1, stars=[star], players={"p2": Player(id="p2", name="AI", is_ai=True)})
        assert game.star("A") is star
        assert game.star("B") is None
        assert game.ship("x") is None
        assert game.ai_player_ids() == ["p2"]


def test_resources_copy_is_independent():
    res = Resources(credits=10, minerals=5)
    clone = res.copy()
    clone.credits = 0

    assert res.credits == 10
    assert res.to_dict() == {"credits": 10, "minerals": 5}


def test_player_requires_id():
    with pytest.raises(ValueError, match="cannot be empty"):
        Player(id="", name="Nobody")
