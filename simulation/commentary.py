from __future__ import annotations
from typing import Dict, Sequence

from .events import EventType, SimulationEvent

# Opisy zdarzeń; pola: {player}, {other}, {team}
TEMPLATES: Dict[EventType, str] = {
    EventType.GOAL: "GOAL! {player} scores!",
    EventType.SHOT_BLOCKED: "{player}'s shot is blocked!",
    EventType.SHOT_OFF_TARGET: "{player} fires wide!",
    EventType.SAVE: "Great save by {player}!",
    EventType.CORNER: "Corner kick to {team}",
    EventType.FOUL: "Foul by {player}",
    EventType.YELLOW_CARD: "Yellow card for {player}",
    EventType.SECOND_YELLOW: "Second yellow card! {player} is sent off!",
    EventType.RED_CARD: "Straight red card for {player}!",
    EventType.TACKLE: "Good tackle by {player}",
    EventType.OFFSIDE: "Offside! The flag is up.",
}


def describe(kind: EventType, *, player: str = "", other: str = "", team: str = "") -> str:
    return TEMPLATES[kind].format(player=player, other=other, team=team)


def minute_commentary(minute: int, events: Sequence[SimulationEvent], possessing_team: str) -> str:
    """Bez zdarzeń - ogólna linia o posiadaniu; inaczej opisy z prefiksem minuty."""
    if not events:
        return f"{minute}' - {possessing_team} keep possession in midfield."
    return " ".join(f"{minute}' - {e.description}" for e in events)


def score_line(prefix: str, home_name: str, home_goals: int, away_goals: int, away_name: str) -> str:
    return f"{prefix}! {home_name} {home_goals} - {away_goals} {away_name}"


def half_time(home_name: str, home_goals: int, away_goals: int, away_name: str) -> str:
    return score_line("Half time", home_name, home_goals, away_goals, away_name)


def full_time(home_name: str, home_goals: int, away_goals: int, away_name: str) -> str:
    return score_line("Full time", home_name, home_goals, away_goals, away_name)
