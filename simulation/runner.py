from __future__ import annotations
"""
simulation/runner.py

Uruchomienie meczu po stronie hosta: walidacja fixture, budowa silnika,
rozgłoszenie składów i ticków, zapis wyniku.
API: run_match(fixture, notify, ...) -> List[SimulationTick]
"""
import logging
import random
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from models.player import Player, PlayerAttributes
from models.team import Formation, Team
from .broadcast import Notifier, broadcast_lineup, broadcast_ticks, delay_for_speed
from .config import EngineConfig
from .errors import MatchAlreadyCompletedError, PreconditionError, SimulationRejectedError
from .events import SimulationTick
from .match import MatchEngine
from .persistence import MatchRepository, persist_match

logger = logging.getLogger(__name__)

STATUS_SCHEDULED = "scheduled"
STATUS_COMPLETED = "completed"


@dataclass
class MatchFixture:
    match_id: int
    home_team: Team
    away_team: Team
    home_squad: List[Player]
    away_squad: List[Player]
    home_attrs: Dict[int, PlayerAttributes] = field(default_factory=dict)
    away_attrs: Dict[int, PlayerAttributes] = field(default_factory=dict)
    home_formation: Optional[Formation] = None
    away_formation: Optional[Formation] = None
    status: str = STATUS_SCHEDULED


def build_engine(fixture: MatchFixture, *, rng: Optional[random.Random] = None,
                 config: Optional[EngineConfig] = None) -> MatchEngine:
    """Silnik dla fixture; zakończony mecz albo niepełna kadra -> SimulationRejectedError."""
    if fixture.status == STATUS_COMPLETED:
        raise MatchAlreadyCompletedError(f"match {fixture.match_id} is already completed")
    try:
        return MatchEngine(
            fixture.home_team, fixture.away_team,
            fixture.home_squad, fixture.away_squad,
            fixture.home_attrs, fixture.away_attrs,
            fixture.home_formation, fixture.away_formation,
            rng=rng, config=config,
        )
    except PreconditionError as e:
        raise SimulationRejectedError(f"match {fixture.match_id} cannot start: {e}") from e


def run_match(fixture: MatchFixture, notify: Notifier, *,
              repository: Optional[MatchRepository] = None,
              speed: str = "instant",
              rng: Optional[random.Random] = None,
              config: Optional[EngineConfig] = None,
              sleep: Callable[[float], None] = time.sleep) -> List[SimulationTick]:
    engine = build_engine(fixture, rng=rng, config=config)
    broadcast_lineup(engine.get_lineup_data(), notify)

    try:
        ticks = engine.simulate()
    except PreconditionError as e:
        raise SimulationRejectedError(f"match {fixture.match_id} aborted: {e}") from e

    broadcast_ticks(ticks, notify, delay_ms=delay_for_speed(speed, engine.cfg), sleep=sleep)

    if repository is not None:
        saved = persist_match(repository, fixture.match_id, ticks)
        logger.debug("Match %s: persisted %d events", fixture.match_id, saved)
    fixture.status = STATUS_COMPLETED
    return ticks
