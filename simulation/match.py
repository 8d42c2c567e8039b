from __future__ import annotations
import logging
import math
import random
from typing import Dict, List, Mapping, Optional, Sequence, Union

from models.player import Player, PlayerAttributes, Skill
from models.team import Formation, Team, formation_positions
from . import commentary
from .config import EngineConfig, get_config
from .errors import PreconditionError
from .events import (
    BallPosition, LineupData, LineupPlayer, Phase, SimulationTick, Side, Zone,
)
from .fatigue import effective_skill
from .minute_simulator import simulate_minute
from .selection import STARTING_ELEVEN, pick_goalkeeper, pick_player, pick_weighted_player
from .state import EngineState

logger = logging.getLogger(__name__)

TOTAL_SIM_MINUTES = 90


def _round_half_up(value: float) -> float:
    return float(math.floor(value + 0.5))


class MatchEngine:
    """
    Minutowy silnik meczu.

    Budowany raz na mecz z danych statycznych (drużyny, kadry, atrybuty, ustawienia),
    uruchamiany synchronicznie przez `simulate()` i porzucany. Losowość pochodzi
    wyłącznie z `rng` (albo `random.Random(seed)`), więc przebieg z tym samym
    seedem jest powtarzalny.

    Raises:
        PreconditionError: gdy któraś kadra ma mniej niż 11 zawodników
    """

    def __init__(self, home_team: Team, away_team: Team,
                 home_squad: Sequence[Player], away_squad: Sequence[Player],
                 home_attrs: Optional[Mapping[int, PlayerAttributes]] = None,
                 away_attrs: Optional[Mapping[int, PlayerAttributes]] = None,
                 home_formation: Optional[Formation] = None,
                 away_formation: Optional[Formation] = None,
                 *, rng: Optional[random.Random] = None, seed: Optional[int] = None,
                 config: Optional[EngineConfig] = None) -> None:
        for side, squad in ((Side.HOME, home_squad), (Side.AWAY, away_squad)):
            if len(squad) < STARTING_ELEVEN:
                raise PreconditionError(
                    f"{side.value} squad has {len(squad)} players, at least {STARTING_ELEVEN} required"
                )
        self.home_team = home_team
        self.away_team = away_team
        self.home_squad: List[Player] = list(home_squad)
        self.away_squad: List[Player] = list(away_squad)
        self.home_attrs: Dict[int, PlayerAttributes] = dict(home_attrs or {})
        self.away_attrs: Dict[int, PlayerAttributes] = dict(away_attrs or {})
        self.home_formation = home_formation
        self.away_formation = away_formation
        self.rng = rng if rng is not None else random.Random(seed)
        self.cfg = config or get_config()
        self.state = EngineState()

    # ————— dostęp do danych statycznych —————

    def team(self, side: Side) -> Team:
        return self.home_team if side is Side.HOME else self.away_team

    def squad(self, side: Side) -> List[Player]:
        return self.home_squad if side is Side.HOME else self.away_squad

    def starters(self) -> List[Player]:
        return self.home_squad[:STARTING_ELEVEN] + self.away_squad[:STARTING_ELEVEN]

    # ————— atrybuty —————

    def resolve_attribute(self, state: EngineState, player_id: int, skill: Union[Skill, str]) -> float:
        """
        Efektywna wartość umiejętności: rekord z obu stron (neutralne 10 przy braku
        rekordu lub nieznanej nazwie), pomniejszona o karę za zmęczenie.
        """
        attrs = self.home_attrs.get(player_id) or self.away_attrs.get(player_id)
        parsed = Skill.parse(skill)
        if attrs is None or parsed is None:
            base = self.cfg.num('attributes.neutral')
        else:
            base = float(attrs.get(parsed))
        return effective_skill(base, state.fatigue(player_id), self.cfg)

    def get_attribute(self, player_id: int, skill: Union[Skill, str]) -> float:
        return self.resolve_attribute(self.state, player_id, skill)

    # ————— wybór zawodników —————

    def pick_uniform(self, state: EngineState, side: Side) -> Player:
        return pick_player(self.rng, self.squad(side), state)

    def pick_weighted(self, state: EngineState, side: Side, skill: Skill) -> Player:
        return pick_weighted_player(
            self.rng, self.squad(side), state,
            lambda p: self.resolve_attribute(state, p.id, skill),
            min_weight=self.cfg.num('attributes.min_weight'),
        )

    def goalkeeper(self, state: EngineState, side: Side) -> Player:
        return pick_goalkeeper(self.squad(side), state)

    # ————— składy —————

    def get_lineup_data(self) -> LineupData:
        """Rzut pierwszej jedenastki na współrzędne ustawienia (goście w lustrze x' = 100 - x)."""
        def build(side: Side, formation: Optional[Formation]) -> List[LineupPlayer]:
            positions = formation_positions(formation)
            out: List[LineupPlayer] = []
            for i, p in enumerate(self.squad(side)[:STARTING_ELEVEN]):
                if i < len(positions):
                    fp = positions[i]
                    x = fp.x if side is Side.HOME else 100.0 - fp.x
                    y = fp.y
                else:
                    x, y = 50.0, 50.0
                out.append(LineupPlayer(
                    id=p.id,
                    name=p.name,
                    shirt_number=p.shirt_number if p.shirt_number is not None else i + 1,
                    position=p.position or "CM",
                    x=x,
                    y=y,
                    team=side,
                ))
            return out

        return LineupData(home=build(Side.HOME, self.home_formation),
                          away=build(Side.AWAY, self.away_formation))

    # ————— przebieg meczu —————

    def _kickoff(self, state: EngineState, side: Side) -> None:
        state.reset_ball(self.cfg.num('match.kickoff.x'), self.cfg.num('match.kickoff.y'))
        state.possession = side

    def _injury_time(self, key: str) -> int:
        lo, hi = self.cfg.get(key)
        return self.rng.randint(int(lo), int(hi))

    def _marker_tick(self, state: EngineState, minute: int, phase: Phase, line: str) -> SimulationTick:
        return SimulationTick(
            minute=minute,
            phase=phase,
            possession=state.possession,
            zone=Zone.MID,
            ball=BallPosition(self.cfg.num('match.kickoff.x'), self.cfg.num('match.kickoff.y')),
            events=[],
            score=state.score.copy(),
            stats=state.stats.snapshot(),
            commentary=line,
        )

    def simulate(self) -> List[SimulationTick]:
        """
        Pełny mecz: 1. połowa + doliczony czas, znacznik przerwy, 2. połowa
        + doliczony czas, znacznik końca; na końcu posiadanie piłki w procentach.

        Returns:
            Uporządkowana lista ticków (minuty + dwa znaczniki)
        """
        state = EngineState()
        self.state = state
        half = int(self.cfg.num('match.half_minutes'))
        home, away = self.home_team.name, self.away_team.name
        ticks: List[SimulationTick] = []

        self._kickoff(state, Side.HOME)
        injury_h1 = self._injury_time('match.injury_time_h1')
        logger.debug("%s vs %s: first half, +%d injury time", home, away, injury_h1)
        for minute in range(1, half + injury_h1 + 1):
            ticks.append(simulate_minute(self, state, minute))

        ticks.append(self._marker_tick(
            state, half, Phase.HALF_TIME,
            commentary.half_time(home, state.score.home, state.score.away, away),
        ))

        self._kickoff(state, Side.AWAY)
        injury_h2 = self._injury_time('match.injury_time_h2')
        logger.debug("%s vs %s: second half, +%d injury time", home, away, injury_h2)
        for minute in range(half + 1, 2 * half + injury_h2 + 1):
            ticks.append(simulate_minute(self, state, minute))

        ticks.append(self._marker_tick(
            state, 2 * half, Phase.FULL_TIME,
            commentary.full_time(home, state.score.home, state.score.away, away),
        ))

        home_ticks = sum(1 for t in ticks if t.possession is Side.HOME)
        state.stats.home.possession_pct = _round_half_up(100.0 * home_ticks / len(ticks))
        state.stats.away.possession_pct = 100.0 - state.stats.home.possession_pct
        ticks[-1].stats = state.stats.snapshot()

        logger.info("Full time: %s %d - %d %s (%d ticks)",
                    home, state.score.home, state.score.away, away, len(ticks))
        return ticks
