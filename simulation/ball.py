from __future__ import annotations
import random

from .config import EngineConfig
from .events import BallPosition, Side, Zone

PITCH_LENGTH = 100.0
PITCH_WIDTH = 68.0


def _clamp(v: float, lo: float, hi: float) -> float:
    return lo if v < lo else (hi if v > hi else v)


def move_forward(ball: BallPosition, side: Side, rng: random.Random, cfg: EngineConfig) -> None:
    """Przesuwa piłkę o 5-15 w stronę bramki rywala `side`; y dostaje niezależny szum."""
    delta = rng.uniform(cfg.num('ball.advance_min'), cfg.num('ball.advance_max'))
    if side is Side.HOME:
        ball.x = min(PITCH_LENGTH, ball.x + delta)
    else:
        ball.x = max(0.0, ball.x - delta)
    spread = cfg.num('ball.advance_y_jitter')
    ball.y = _clamp(ball.y + rng.uniform(-spread, spread), 0.0, PITCH_WIDTH)


def jitter(ball: BallPosition, rng: random.Random, cfg: EngineConfig) -> None:
    """Mały losowy ruch piłki (podania w tle) bez postępu w żadną stronę."""
    spread = cfg.num('passing.jitter')
    ball.x = _clamp(ball.x + rng.uniform(-spread, spread), 0.0, PITCH_LENGTH)
    ball.y = _clamp(ball.y + rng.uniform(-spread, spread), 0.0, PITCH_WIDTH)


def is_attacking_third(ball: BallPosition, side: Side, cfg: EngineConfig) -> bool:
    if side is Side.HOME:
        return ball.x > cfg.num('ball.attacking_third.home')
    return ball.x < cfg.num('ball.attacking_third.away')


def classify_zone(ball: BallPosition, possession: Side, cfg: EngineConfig) -> Zone:
    if ball.x < cfg.num('ball.zone.low'):
        return Zone.DEF_HOME if possession is Side.HOME else Zone.ATT_AWAY
    if ball.x > cfg.num('ball.zone.high'):
        return Zone.ATT_HOME if possession is Side.HOME else Zone.DEF_AWAY
    return Zone.MID
