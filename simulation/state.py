from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict

from .events import BallPosition, MatchStats, Score, Side, Zone


@dataclass
class EngineState:
    """
    Mutowalny stan jednego przebiegu meczu.

    Tworzony od nowa w `MatchEngine.simulate()` i przekazywany jawnie do
    resolverów. Nie jest współdzielony między meczami.
    """
    score: Score = field(default_factory=Score)
    stats: MatchStats = field(default_factory=MatchStats)
    ball: BallPosition = field(default_factory=BallPosition)
    possession: Side = Side.HOME
    zone: Zone = Zone.MID
    player_fatigue: Dict[int, float] = field(default_factory=dict)
    player_yellow_cards: Dict[int, int] = field(default_factory=dict)
    player_sent_off: Dict[int, bool] = field(default_factory=dict)

    def fatigue(self, player_id: int) -> float:
        return self.player_fatigue.get(player_id, 0.0)

    def is_sent_off(self, player_id: int) -> bool:
        return self.player_sent_off.get(player_id, False)

    def send_off(self, player_id: int) -> None:
        self.player_sent_off[player_id] = True

    def yellow_cards(self, player_id: int) -> int:
        return self.player_yellow_cards.get(player_id, 0)

    def flip_possession(self) -> None:
        self.possession = self.possession.opponent

    def reset_ball(self, x: float, y: float) -> None:
        self.ball = BallPosition(x, y)
