from __future__ import annotations

from dataclasses import dataclass, field, asdict, fields
from enum import Enum
from typing import Any, Dict, List, Optional


class Side(str, Enum):
    HOME = "home"
    AWAY = "away"

    @property
    def opponent(self) -> "Side":
        return Side.AWAY if self is Side.HOME else Side.HOME


class EventType(str, Enum):
    GOAL = "goal"
    SHOT_BLOCKED = "shot_blocked"
    SHOT_OFF_TARGET = "shot_off_target"
    SAVE = "save"
    CORNER = "corner"
    FOUL = "foul"
    YELLOW_CARD = "yellow_card"
    SECOND_YELLOW = "second_yellow"
    RED_CARD = "red_card"
    TACKLE = "tackle"
    OFFSIDE = "offside"


CARD_EVENTS = frozenset({EventType.YELLOW_CARD, EventType.SECOND_YELLOW, EventType.RED_CARD})
# Zdarzenia, po których minuta dostaje fazę attack_<strona>
ATTACK_PHASE_EVENTS = frozenset({EventType.GOAL, EventType.SHOT_BLOCKED, EventType.SAVE})


class Phase(str, Enum):
    OPEN_PLAY = "open_play"
    ATTACK_HOME = "attack_home"
    ATTACK_AWAY = "attack_away"
    HALF_TIME = "half_time"
    FULL_TIME = "full_time"

    @classmethod
    def attack(cls, side: Side) -> "Phase":
        return cls.ATTACK_HOME if side is Side.HOME else cls.ATTACK_AWAY


class Zone(str, Enum):
    DEF_HOME = "def_home"
    ATT_HOME = "att_home"
    DEF_AWAY = "def_away"
    ATT_AWAY = "att_away"
    MID = "mid"


@dataclass
class BallPosition:
    x: float = 50.0
    y: float = 34.0

    def copy(self) -> "BallPosition":
        return BallPosition(self.x, self.y)

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass
class Score:
    home: int = 0
    away: int = 0

    def copy(self) -> "Score":
        return Score(self.home, self.away)

    def add_goal(self, side: Side) -> None:
        if side is Side.HOME:
            self.home += 1
        else:
            self.away += 1

    def to_dict(self) -> Dict[str, int]:
        return {"home": self.home, "away": self.away}


@dataclass
class TeamStats:
    # possession_pct liczone raz, po zakończeniu meczu
    possession_pct: float = 50.0
    shots: int = 0
    shots_on_target: int = 0
    corners: int = 0
    fouls: int = 0
    yellow_cards: int = 0
    red_cards: int = 0
    saves: int = 0
    passes: int = 0
    tackles: int = 0
    offsides: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# Liczniki niemalejące w trakcie meczu
COUNTER_FIELDS = tuple(f.name for f in fields(TeamStats) if f.name != "possession_pct")


@dataclass
class MatchStats:
    home: TeamStats = field(default_factory=TeamStats)
    away: TeamStats = field(default_factory=TeamStats)

    def side(self, side: Side) -> TeamStats:
        return self.home if side is Side.HOME else self.away

    def inc(self, side: Side, counter: str, amount: int = 1) -> None:
        """Zwiększa licznik `counter` po stronie `side`."""
        if counter not in COUNTER_FIELDS:
            raise KeyError(f"unknown stat counter: {counter}")
        team = self.side(side)
        setattr(team, counter, getattr(team, counter) + amount)

    def snapshot(self) -> "MatchStats":
        return MatchStats(
            home=TeamStats(**asdict(self.home)),
            away=TeamStats(**asdict(self.away)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"home": self.home.to_dict(), "away": self.away.to_dict()}


@dataclass
class SimulationEvent:
    event_type: EventType
    team: Side
    description: str
    x: float
    y: float
    primary_player: Optional[str] = None
    secondary_player: Optional[str] = None
    # id aktora (primary_player) - do weryfikacji stanu kartek
    primary_player_id: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": self.event_type.value,
            "team": self.team.value,
            "primary_player": self.primary_player,
            "secondary_player": self.secondary_player,
            "description": self.description,
            "x": self.x,
            "y": self.y,
        }


@dataclass
class SimulationTick:
    minute: int
    phase: Phase
    possession: Side
    zone: Zone
    ball: BallPosition
    events: List[SimulationEvent]
    score: Score
    stats: MatchStats
    commentary: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "minute": self.minute,
            "phase": self.phase.value,
            "possession": self.possession.value,
            "zone": self.zone.value,
            "ball": self.ball.to_dict(),
            "events": [e.to_dict() for e in self.events],
            "score": self.score.to_dict(),
            "stats": self.stats.to_dict(),
            "commentary": self.commentary,
        }


@dataclass
class LineupPlayer:
    id: int
    name: str
    shirt_number: int
    position: str
    x: float
    y: float
    team: Side

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["team"] = self.team.value
        return d


@dataclass
class LineupData:
    home: List[LineupPlayer]
    away: List[LineupPlayer]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "home": [p.to_dict() for p in self.home],
            "away": [p.to_dict() for p in self.away],
        }
