from __future__ import annotations
"""
simulation/broadcast.py

Przekazywanie wyniku silnika do konsumenta (UI, websocket, okno aplikacji).
Silnik nic nie wie o kanałach ani tempie - to warstwa nałożona na gotową listę ticków.
"""
import logging
import time
from enum import Enum
from typing import Any, Callable, Dict, Optional, Sequence

from .config import EngineConfig, get_config
from .events import CARD_EVENTS, EventType, LineupData, Phase, SimulationTick

logger = logging.getLogger(__name__)


class Channel(str, Enum):
    LINEUP = "match:lineup"
    MINUTE = "match:minute"
    GOAL = "match:goal"
    CARD = "match:card"
    HALF_TIME = "match:half_time"
    FULL_TIME = "match:full_time"


# notify(kanał, payload) - payload to już zserializowany dict
Notifier = Callable[[str, Dict[str, Any]], None]


def delay_for_speed(speed: Optional[str], cfg: Optional[EngineConfig] = None) -> int:
    """Opóźnienie między tickami w ms; nieznane tempo = bez czekania."""
    cfg = cfg or get_config()
    delays = cfg.get('broadcast.speed_delay_ms', {}) or {}
    return int(delays.get((speed or '').lower(), 0))


def broadcast_lineup(lineup: LineupData, notify: Notifier) -> None:
    notify(Channel.LINEUP.value, lineup.to_dict())


def broadcast_ticks(ticks: Sequence[SimulationTick], notify: Notifier, *, delay_ms: int = 0,
                    sleep: Callable[[float], None] = time.sleep) -> None:
    """
    Każdy tick idzie na `match:minute`; gole i kartki dodatkowo na własne kanały,
    przerwa na `match:half_time`, a ostatni tick po pętli na `match:full_time`.
    """
    for tick in ticks:
        notify(Channel.MINUTE.value, tick.to_dict())
        for event in tick.events:
            if event.event_type is EventType.GOAL:
                notify(Channel.GOAL.value, event.to_dict())
            elif event.event_type in CARD_EVENTS:
                notify(Channel.CARD.value, event.to_dict())
        if tick.phase is Phase.HALF_TIME:
            notify(Channel.HALF_TIME.value, tick.to_dict())
        if delay_ms > 0:
            sleep(delay_ms / 1000.0)
    if ticks:
        notify(Channel.FULL_TIME.value, ticks[-1].to_dict())
        logger.debug("Broadcast %d ticks", len(ticks))
