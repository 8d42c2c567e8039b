from __future__ import annotations
from typing import Any, Dict, List, Sequence

from .events import CARD_EVENTS, EventType, SimulationTick

# Zdarzenia pokazywane w skrócie meczu
KEY_EVENTS = frozenset({EventType.GOAL, EventType.CORNER, EventType.SAVE}) | CARD_EVENTS


def build_report(ticks: Sequence[SimulationTick], home: str, away: str) -> Dict[str, Any]:
    """
    Podsumowanie meczu do wydruku/zapisu JSON.

    Returns:
        Słownik: drużyny, wynik, bramki, pełna i kluczowa chronologia, statystyki końcowe
    """
    if not ticks:
        raise ValueError("empty match: no ticks to report")
    last = ticks[-1]
    names = {'home': home, 'away': away}

    goals: List[Dict[str, Any]] = []
    timeline: List[Dict[str, Any]] = []
    for tick in ticks:
        for e in tick.events:
            row = {
                'minute': tick.minute,
                'event_type': e.event_type.value,
                'team': names[e.team.value],
                'description': f"{tick.minute}' {e.description}",
            }
            timeline.append(row)
            if e.event_type is EventType.GOAL:
                goals.append({'minute': tick.minute, 'team': names[e.team.value], 'scorer': e.primary_player})

    return {
        'home': home,
        'away': away,
        'score_home': last.score.home,
        'score_away': last.score.away,
        'goals': goals,
        'timeline': timeline,
        'key_events': [r for r in timeline if EventType(r['event_type']) in KEY_EVENTS],
        'stats': last.stats.to_dict(),
        'ticks': len(ticks),
        'final_commentary': last.commentary,
    }
