from __future__ import annotations
"""
simulation/minute_simulator.py

Logika pojedynczej minuty meczu.
API: simulate_minute(engine, state, minute) -> SimulationTick
"""
from typing import TYPE_CHECKING, List

from models.player import Skill
from . import ball as ball_model
from . import commentary
from .events import ATTACK_PHASE_EVENTS, Phase, SimulationEvent, SimulationTick
from .fatigue import apply_fatigue_tick
from .resolvers import resolve_foul, resolve_offside, resolve_shot, resolve_tackle
from .state import EngineState

if TYPE_CHECKING:  # pragma: no cover
    from .match import MatchEngine


def choose_event(engine: 'MatchEngine', state: EngineState) -> List[SimulationEvent]:
    """
    Drzewo decyzyjne: strzał -> faul -> odbiór -> spalony.

    Gałęzie sprawdzane po kolei, każda z własnym losowaniem; odpala co najwyżej jedna.
    """
    rng, cfg = engine.rng, engine.cfg
    side = state.possession
    in_attacking = ball_model.is_attacking_third(state.ball, side, cfg)

    shot_chance = cfg.num('decisions.shot_attacking_third') if in_attacking else cfg.num('decisions.shot_elsewhere')
    if rng.random() < shot_chance:
        return resolve_shot(engine, state, side)
    if rng.random() < cfg.num('decisions.foul'):
        return resolve_foul(engine, state, side)
    if rng.random() < cfg.num('decisions.tackle'):
        return resolve_tackle(engine, state, side)
    if in_attacking and rng.random() < cfg.num('decisions.offside'):
        return resolve_offside(engine, state, side)
    return []


def simulate_minute(engine: 'MatchEngine', state: EngineState, minute: int) -> SimulationTick:
    rng, cfg = engine.rng, engine.cfg
    side = state.possession

    apply_fatigue_tick(
        state, engine.starters(), minute,
        lambda pid: engine.resolve_attribute(state, pid, Skill.STAMINA), cfg,
    )

    # podania w tle
    for _ in range(rng.randint(int(cfg.num('passing.min_per_minute')), int(cfg.num('passing.max_per_minute')))):
        state.stats.inc(side, 'passes')
        ball_model.jitter(state.ball, rng, cfg)

    if rng.random() < cfg.num('ball.advance_prob'):
        ball_model.move_forward(state.ball, side, rng, cfg)

    events = choose_event(engine, state)

    # walka o piłkę bez zdarzenia dyskretnego
    if rng.random() < cfg.num('decisions.possession_flip'):
        state.flip_possession()

    state.zone = ball_model.classify_zone(state.ball, state.possession, cfg)

    if any(e.event_type in ATTACK_PHASE_EVENTS for e in events):
        phase = Phase.attack(side)
    else:
        phase = Phase.OPEN_PLAY

    return SimulationTick(
        minute=minute,
        phase=phase,
        possession=state.possession,
        zone=state.zone,
        ball=state.ball.copy(),
        events=events,
        score=state.score.copy(),
        stats=state.stats.snapshot(),
        commentary=commentary.minute_commentary(minute, events, engine.team(state.possession).name),
    )
