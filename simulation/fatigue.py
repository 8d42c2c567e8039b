from __future__ import annotations
from typing import Callable, Iterable

from models.player import Player
from .config import EngineConfig
from .state import EngineState


def effective_skill(base_skill: float, fatigue: float, cfg: EngineConfig) -> float:
    """Zmęczenie liniowo obniża umiejętność, maksymalnie o `skill_penalty` przy fatigue=1.0."""
    return base_skill * (1.0 - fatigue * cfg.num('fatigue.skill_penalty'))


def fatigue_rate(stamina: float, cfg: EngineConfig) -> float:
    """Przyrost zmęczenia na minutę; niższa wytrzymałość - szybciej, ale nigdy poniżej progu."""
    factor = max(cfg.num('fatigue.min_rate_factor'), 1.0 - stamina / cfg.num('fatigue.stamina_divisor'))
    return cfg.num('fatigue.rate_per_min') * factor


def apply_fatigue_tick(state: EngineState, players: Iterable[Player], minute: int,
                       stamina_of: Callable[[int], float], cfg: EngineConfig) -> None:
    if minute <= int(cfg.num('fatigue.start_after_minute')):
        return
    for p in players:
        # wytrzymałość odczytana z uwzględnieniem dotychczasowego zmęczenia
        rate = fatigue_rate(stamina_of(p.id), cfg)
        state.player_fatigue[p.id] = min(1.0, state.fatigue(p.id) + rate)
