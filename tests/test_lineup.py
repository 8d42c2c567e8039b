from __future__ import annotations
import json

from models.player import Player
from models.team import DEFAULT_442, Formation, Team, formation_positions
from simulation.config import EngineConfig
from simulation.events import Side
from simulation.match import MatchEngine


def _squad(base_id, size=11, numbered=True):
    return [
        Player(id=base_id + i, name=f"P{base_id + i}",
               position="GK" if i == 0 else None,
               shirt_number=(i + 20) if numbered else None)
        for i in range(size)
    ]


def _engine(home_formation=None, away_formation=None, home_squad=None, away_squad=None):
    return MatchEngine(
        Team(1, "Home"), Team(2, "Away"),
        home_squad or _squad(100), away_squad or _squad(200),
        home_formation=home_formation, away_formation=away_formation,
        seed=1, config=EngineConfig(),
    )


def test_default_442_and_away_mirroring():
    lineup = _engine().get_lineup_data()
    assert len(lineup.home) == len(lineup.away) == 11
    for h, a, fp in zip(lineup.home, lineup.away, DEFAULT_442):
        assert (h.x, h.y) == (fp.x, fp.y)
        assert (a.x, a.y) == (100.0 - fp.x, fp.y)
        assert h.team is Side.HOME
        assert a.team is Side.AWAY
    assert (lineup.home[0].x, lineup.away[0].x) == (5.0, 95.0)


def test_bench_is_not_in_lineup():
    lineup = _engine(home_squad=_squad(100, size=15)).get_lineup_data()
    assert [p.id for p in lineup.home] == list(range(100, 111))


def test_shirt_number_and_position_fallbacks():
    lineup = _engine(home_squad=_squad(100, numbered=False)).get_lineup_data()
    assert [p.shirt_number for p in lineup.home] == list(range(1, 12))
    assert lineup.home[0].position == "GK"
    assert lineup.home[1].position == "CM"
    assert lineup.away[3].shirt_number == 23


def test_formation_from_json_string():
    positions = [{"position": "GK", "x": 4, "y": 34}] + [
        {"role": "CM", "x": 30 + i, "y": 5 * i} for i in range(10)
    ]
    lineup = _engine(home_formation=Formation("custom", json.dumps(positions))).get_lineup_data()
    assert (lineup.home[0].x, lineup.home[0].y) == (4.0, 34.0)
    assert (lineup.home[10].x, lineup.home[10].y) == (39.0, 45.0)


def test_short_formation_puts_remaining_players_centre():
    positions = [{"position": "GK", "x": 5, "y": 34}] * 9
    lineup = _engine(away_formation=Formation("short", positions)).get_lineup_data()
    assert (lineup.away[8].x, lineup.away[8].y) == (95.0, 34.0)
    assert (lineup.away[9].x, lineup.away[9].y) == (50.0, 50.0)
    assert (lineup.away[10].x, lineup.away[10].y) == (50.0, 50.0)


def test_malformed_formation_falls_back_to_442():
    for raw in ("not json", "{}", "[]", [{"x": 1, "y": 2}], [{"position": "GK", "x": "far"}], [1, 2]):
        assert formation_positions(Formation("bad", raw)) == DEFAULT_442
    assert formation_positions(None) == DEFAULT_442


def test_lineup_serialization():
    d = _engine().get_lineup_data().to_dict()
    assert set(d) == {"home", "away"}
    assert d["away"][0]["team"] == "away"
    assert set(d["home"][0]) == {"id", "name", "shirt_number", "position", "x", "y", "team"}
