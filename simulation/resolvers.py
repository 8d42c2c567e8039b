from __future__ import annotations
"""
simulation/resolvers.py

Niezależne procedury rozstrzygania zdarzeń w minucie: strzał, faul/kartki,
odbiór piłki, spalony. Każda dostaje jawnie stan przebiegu (EngineState),
mutuje go (wynik, statystyki, kartki, posiadanie, piłka) i zwraca listę zdarzeń.
"""
from typing import TYPE_CHECKING, List

from models.player import Skill
from . import commentary
from .ball import PITCH_LENGTH
from .events import EventType, Side, SimulationEvent
from .state import EngineState

if TYPE_CHECKING:  # pragma: no cover
    from .match import MatchEngine


def _event(state: EngineState, kind: EventType, side: Side, description: str, **kw) -> SimulationEvent:
    x = kw.pop('x', state.ball.x)
    y = kw.pop('y', state.ball.y)
    return SimulationEvent(event_type=kind, team=side, description=description, x=x, y=y, **kw)


def _corner(engine: 'MatchEngine', state: EngineState, side: Side) -> SimulationEvent:
    state.stats.inc(side, 'corners')
    return _event(
        state, EventType.CORNER, side,
        commentary.describe(EventType.CORNER, team=engine.team(side).name),
        x=PITCH_LENGTH if side is Side.HOME else 0.0,
    )


def resolve_shot(engine: 'MatchEngine', state: EngineState, side: Side) -> List[SimulationEvent]:
    """
    Kaskada strzału: blok -> niecelny -> celny (gol albo obrona).

    Każda gałąź kończy rozstrzyganie. Strzał zawsze zwiększa licznik `shots`.
    """
    rng, cfg = engine.rng, engine.cfg
    events: List[SimulationEvent] = []
    opp = side.opponent

    shooter = engine.pick_weighted(state, side, Skill.FINISHING)
    finishing = engine.resolve_attribute(state, shooter.id, Skill.FINISHING)
    composure = engine.resolve_attribute(state, shooter.id, Skill.COMPOSURE)
    keeper = engine.goalkeeper(state, opp)

    state.stats.inc(side, 'shots')

    if rng.random() < cfg.num('shot.block'):
        events.append(_event(
            state, EventType.SHOT_BLOCKED, side,
            commentary.describe(EventType.SHOT_BLOCKED, player=shooter.name),
            primary_player=shooter.name, primary_player_id=shooter.id,
        ))
        if rng.random() < cfg.num('shot.corner_after_block'):
            events.append(_corner(engine, state, side))
        return events

    miss_chance = cfg.num('shot.miss_base') - (finishing + composure) / 80.0 * cfg.num('shot.miss_skill_factor')
    if rng.random() < miss_chance:
        events.append(_event(
            state, EventType.SHOT_OFF_TARGET, side,
            commentary.describe(EventType.SHOT_OFF_TARGET, player=shooter.name),
            primary_player=shooter.name, primary_player_id=shooter.id,
        ))
        return events

    state.stats.inc(side, 'shots_on_target')

    goal_chance = cfg.num('shot.goal_base') + (finishing - 10.0) / 40.0 * cfg.num('shot.goal_skill_factor')
    if rng.random() < goal_chance:
        state.score.add_goal(side)
        events.append(_event(
            state, EventType.GOAL, side,
            commentary.describe(EventType.GOAL, player=shooter.name),
            x=95.0 if side is Side.HOME else 5.0, y=34.0,
            primary_player=shooter.name, primary_player_id=shooter.id,
        ))
        # wznowienie ze środka przez drużynę, która straciła gola
        state.reset_ball(cfg.num('match.kickoff.x'), cfg.num('match.kickoff.y'))
        state.possession = opp
        return events

    state.stats.inc(opp, 'saves')
    events.append(_event(
        state, EventType.SAVE, opp,
        commentary.describe(EventType.SAVE, player=keeper.name, other=shooter.name),
        primary_player=keeper.name, secondary_player=shooter.name, primary_player_id=keeper.id,
    ))
    if rng.random() < cfg.num('shot.corner_after_save'):
        events.append(_corner(engine, state, side))
    return events


def resolve_foul(engine: 'MatchEngine', state: EngineState, side: Side) -> List[SimulationEvent]:
    """
    Faul drużyny broniącej na zawodniku strony `side` (w posiadaniu).

    Dwa niezależne losowania kartek: żółta (druga żółta = wykluczenie)
    oraz rzadka bezpośrednia czerwona. Oba mogą zajść przy jednym faulu.
    """
    rng, cfg = engine.rng, engine.cfg
    events: List[SimulationEvent] = []
    opp = side.opponent

    fouler = engine.pick_weighted(state, opp, Skill.AGGRESSION)
    fouled = engine.pick_uniform(state, side)

    state.stats.inc(opp, 'fouls')
    events.append(_event(
        state, EventType.FOUL, opp,
        commentary.describe(EventType.FOUL, player=fouler.name, other=fouled.name),
        primary_player=fouler.name, secondary_player=fouled.name, primary_player_id=fouler.id,
    ))

    aggression = engine.resolve_attribute(state, fouler.id, Skill.AGGRESSION)
    card_chance = cfg.num('discipline.yellow_base') + (aggression - 10.0) / 20.0 * cfg.num('discipline.yellow_aggression_factor')
    if rng.random() < card_chance:
        if state.yellow_cards(fouler.id) >= 1:
            state.player_yellow_cards[fouler.id] = state.yellow_cards(fouler.id) + 1
            state.send_off(fouler.id)
            state.stats.inc(opp, 'yellow_cards')
            state.stats.inc(opp, 'red_cards')
            events.append(_event(
                state, EventType.SECOND_YELLOW, opp,
                commentary.describe(EventType.SECOND_YELLOW, player=fouler.name),
                primary_player=fouler.name, primary_player_id=fouler.id,
            ))
        else:
            state.player_yellow_cards[fouler.id] = 1
            state.stats.inc(opp, 'yellow_cards')
            events.append(_event(
                state, EventType.YELLOW_CARD, opp,
                commentary.describe(EventType.YELLOW_CARD, player=fouler.name),
                primary_player=fouler.name, primary_player_id=fouler.id,
            ))

    if rng.random() < cfg.num('discipline.straight_red'):
        state.send_off(fouler.id)
        state.stats.inc(opp, 'red_cards')
        events.append(_event(
            state, EventType.RED_CARD, opp,
            commentary.describe(EventType.RED_CARD, player=fouler.name),
            primary_player=fouler.name, primary_player_id=fouler.id,
        ))
    return events


def resolve_tackle(engine: 'MatchEngine', state: EngineState, side: Side) -> List[SimulationEvent]:
    """Odbiór piłki przez stronę broniącą; posiadanie zawsze przechodzi na nią."""
    opp = side.opponent
    tackler = engine.pick_weighted(state, opp, Skill.TACKLING)
    state.stats.inc(opp, 'tackles')
    event = _event(
        state, EventType.TACKLE, opp,
        commentary.describe(EventType.TACKLE, player=tackler.name),
        primary_player=tackler.name, primary_player_id=tackler.id,
    )
    state.possession = opp
    return [event]


def resolve_offside(engine: 'MatchEngine', state: EngineState, side: Side) -> List[SimulationEvent]:
    """Spalony strony atakującej (tylko w tercji ataku - pilnuje tego wywołujący)."""
    state.stats.inc(side, 'offsides')
    event = _event(state, EventType.OFFSIDE, side, commentary.describe(EventType.OFFSIDE))
    state.possession = side.opponent
    return [event]
