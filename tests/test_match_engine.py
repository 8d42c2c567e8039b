"""Testy przebiegu pełnego meczu."""
import pytest

from models.player import Player, PlayerAttributes
from models.team import Team
from simulation.config import EngineConfig
from simulation.errors import PreconditionError
from simulation.events import (
    ATTACK_PHASE_EVENTS, COUNTER_FIELDS, EventType, Phase, Side, Zone,
)
from simulation.match import MatchEngine, _round_half_up

NO_EVENTS = {
    'decisions': {
        'shot_attacking_third': 0.0,
        'shot_elsewhere': 0.0,
        'foul': 0.0,
        'tackle': 0.0,
        'offside': 0.0,
    }
}


def make_squad(team_id, base_id, size=11):
    return [
        Player(id=base_id + i, name=f"Gracz {base_id + i}", position="GK" if i == 0 else "CM",
               shirt_number=i + 1, team_id=team_id)
        for i in range(size)
    ]


def make_engine(overrides=None, seed=42, home_attrs=None, away_attrs=None):
    cfg = EngineConfig().with_overrides(overrides or {})
    return MatchEngine(
        Team(1, "Home"), Team(2, "Away"),
        make_squad(1, 100), make_squad(2, 200),
        home_attrs, away_attrs,
        seed=seed, config=cfg,
    )


class TestMatchEngine:
    """Testy dla silnika meczowego."""

    def test_match_simulation_with_seed(self):
        """Ten sam seed - identyczny przebieg."""
        ticks1 = make_engine(seed=42).simulate()
        ticks2 = make_engine(seed=42).simulate()
        assert [t.to_dict() for t in ticks1] == [t.to_dict() for t in ticks2]

    def test_different_seeds_differ(self):
        ticks1 = make_engine(seed=1).simulate()
        ticks2 = make_engine(seed=2).simulate()
        assert [t.to_dict() for t in ticks1] != [t.to_dict() for t in ticks2]

    @pytest.mark.parametrize("seed", range(6))
    def test_tick_layout_and_injury_time(self, seed):
        ticks = make_engine(seed=seed).simulate()
        half_idx = [i for i, t in enumerate(ticks) if t.phase is Phase.HALF_TIME]
        assert len(half_idx) == 1
        idx = half_idx[0]
        # 45 + doliczone 1..4, potem 45 + doliczone 1..5
        assert 46 <= idx <= 49
        second = len(ticks) - idx - 2
        assert 46 <= second <= 50
        assert 94 <= len(ticks) <= 101

        assert [t.minute for t in ticks[:idx]] == list(range(1, idx + 1))
        assert ticks[idx].minute == 45
        assert [t.minute for t in ticks[idx + 1:-1]] == list(range(46, 46 + second))
        assert ticks[-1].minute == 90
        assert ticks[-1].phase is Phase.FULL_TIME
        assert sum(1 for t in ticks if t.phase is Phase.FULL_TIME) == 1

    def test_markers_have_no_events_and_ball_at_kickoff(self):
        ticks = make_engine(seed=3).simulate()
        for t in ticks:
            if t.phase in (Phase.HALF_TIME, Phase.FULL_TIME):
                assert t.events == []
                assert t.zone is Zone.MID
                assert (t.ball.x, t.ball.y) == (50.0, 34.0)
        ht = next(t for t in ticks if t.phase is Phase.HALF_TIME)
        assert ht.commentary == f"Half time! Home {ht.score.home} - {ht.score.away} Away"

    @pytest.mark.parametrize("seed", range(8))
    def test_score_matches_goal_events(self, seed):
        ticks = make_engine(seed=seed).simulate()
        home_goals = away_goals = 0
        prev = (0, 0)
        for t in ticks:
            for e in t.events:
                if e.event_type is EventType.GOAL:
                    if e.team is Side.HOME:
                        home_goals += 1
                    else:
                        away_goals += 1
            assert (t.score.home, t.score.away) == (home_goals, away_goals)
            assert t.score.home >= prev[0] and t.score.away >= prev[1]
            prev = (t.score.home, t.score.away)

    @pytest.mark.parametrize("seed", range(5))
    def test_counters_never_decrease(self, seed):
        ticks = make_engine(seed=seed).simulate()
        for a, b in zip(ticks, ticks[1:]):
            for name in COUNTER_FIELDS:
                assert getattr(b.stats.home, name) >= getattr(a.stats.home, name)
                assert getattr(b.stats.away, name) >= getattr(a.stats.away, name)

    @pytest.mark.parametrize("seed", range(5))
    def test_possession_sums_to_100(self, seed):
        ticks = make_engine(seed=seed).simulate()
        st = ticks[-1].stats
        assert st.home.possession_pct + st.away.possession_pct == 100.0
        assert st.home.possession_pct == int(st.home.possession_pct)
        home_ticks = sum(1 for t in ticks if t.possession is Side.HOME)
        assert st.home.possession_pct == _round_half_up(100.0 * home_ticks / len(ticks))

    def test_round_half_up(self):
        assert _round_half_up(50.5) == 51.0
        assert _round_half_up(49.5) == 50.0
        assert _round_half_up(33.4) == 33.0

    def test_attack_phase_only_with_attack_events(self):
        ticks = make_engine(seed=11).simulate()
        for t in ticks:
            if t.phase in (Phase.HALF_TIME, Phase.FULL_TIME):
                continue
            has_attack = any(e.event_type in ATTACK_PHASE_EVENTS for e in t.events)
            if has_attack:
                assert t.phase in (Phase.ATTACK_HOME, Phase.ATTACK_AWAY)
            else:
                assert t.phase is Phase.OPEN_PLAY

    def test_fatigue_grows_only_after_minute_60(self):
        engine = make_engine(seed=5)
        engine.simulate()
        starters = [p.id for p in engine.starters()]
        for pid in starters:
            assert 0.0 < engine.state.fatigue(pid) <= 1.0
        # zawodnicy z ławki nie grają - nie męczą się
        assert engine.state.player_fatigue.keys() <= set(starters)


def test_zero_event_match():
    ticks = make_engine(NO_EVENTS, seed=9).simulate()
    assert all(t.events == [] for t in ticks)
    assert all(t.phase in (Phase.OPEN_PLAY, Phase.HALF_TIME, Phase.FULL_TIME) for t in ticks)
    last = ticks[-1]
    assert (last.score.home, last.score.away) == (0, 0)
    assert last.commentary == "Full time! Home 0 - 0 Away"
    for side in (last.stats.home, last.stats.away):
        assert side.shots == side.fouls == side.tackles == side.offsides == 0
    assert last.stats.home.passes + last.stats.away.passes >= 3 * (len(ticks) - 2)
    minute_line = ticks[0].commentary
    assert minute_line.startswith("1' - ")
    assert minute_line.endswith("keep possession in midfield.")


def test_sent_off_players_never_act_again():
    overrides = {'decisions': {'foul': 0.4, 'tackle': 0.0}, 'discipline': {'yellow_base': 0.4}}
    for seed in range(4):
        ticks = make_engine(overrides, seed=seed).simulate()
        gone = set()
        for t in ticks:
            for e in t.events:
                assert e.primary_player not in gone
                assert e.secondary_player not in gone
            for e in t.events:
                if e.event_type in (EventType.SECOND_YELLOW, EventType.RED_CARD):
                    gone.add(e.primary_player)


def test_second_yellow_only_after_first():
    overrides = {'decisions': {'foul': 0.5, 'tackle': 0.0}, 'discipline': {'yellow_base': 0.5}}
    ticks = make_engine(overrides, seed=21).simulate()
    yellows = {}
    seen_second = False
    for t in ticks:
        for e in t.events:
            if e.event_type is EventType.YELLOW_CARD:
                assert yellows.get(e.primary_player_id, 0) == 0
                yellows[e.primary_player_id] = 1
            elif e.event_type is EventType.SECOND_YELLOW:
                assert yellows.get(e.primary_player_id) == 1
                yellows[e.primary_player_id] = 2
                seen_second = True
    assert seen_second
    last = ticks[-1].stats
    card_events = [e for t in ticks for e in t.events]
    assert last.home.yellow_cards + last.away.yellow_cards == sum(
        1 for e in card_events if e.event_type in (EventType.YELLOW_CARD, EventType.SECOND_YELLOW)
    )


def test_short_squad_is_rejected():
    with pytest.raises(PreconditionError):
        MatchEngine(Team(1, "Home"), Team(2, "Away"), make_squad(1, 100, size=10), make_squad(2, 200))
    with pytest.raises(PreconditionError):
        MatchEngine(Team(1, "Home"), Team(2, "Away"), make_squad(1, 100), [])


def test_seed_and_injected_rng_are_equivalent():
    import random
    cfg = EngineConfig()
    a = MatchEngine(Team(1, "Home"), Team(2, "Away"), make_squad(1, 100), make_squad(2, 200),
                    rng=random.Random(77), config=cfg).simulate()
    b = MatchEngine(Team(1, "Home"), Team(2, "Away"), make_squad(1, 100), make_squad(2, 200),
                    seed=77, config=cfg).simulate()
    assert [t.to_dict() for t in a] == [t.to_dict() for t in b]


def test_strong_finishers_score_more():
    strong = {100 + i: PlayerAttributes.from_dict(100 + i, {'finishing': 20, 'composure': 20}) for i in range(11)}
    weak = {200 + i: PlayerAttributes.from_dict(200 + i, {'finishing': 1, 'composure': 1}) for i in range(11)}
    overrides = {'decisions': {'shot_attacking_third': 0.6, 'shot_elsewhere': 0.3}}
    home = away = 0
    for seed in range(30):
        last = make_engine(overrides, seed=seed, home_attrs=strong, away_attrs=weak).simulate()[-1]
        home += last.score.home
        away += last.score.away
    assert home > away
