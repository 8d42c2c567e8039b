from __future__ import annotations
"""
simulation/selection.py

Wybór zawodnika z wyjściowej jedenastki strony, z pominięciem usuniętych z boiska.

Warunek wstępny: zbiór uprawnionych nie może być pusty. Wywołujący gwarantuje,
że na boisku został co najmniej jeden zawodnik; w przeciwnym razie
podnoszony jest PreconditionError (to nie jest przypadek do obsłużenia w trakcie meczu).
"""
import random
from typing import Callable, List, Sequence

from models.player import Player
from .errors import PreconditionError
from .state import EngineState

STARTING_ELEVEN = 11


def eligible_players(squad: Sequence[Player], state: EngineState) -> List[Player]:
    available = [p for p in squad[:STARTING_ELEVEN] if not state.is_sent_off(p.id)]
    if not available:
        raise PreconditionError("no eligible players left on the pitch")
    return available


def pick_player(rng: random.Random, squad: Sequence[Player], state: EngineState) -> Player:
    """Jednostajny wybór uprawnionego zawodnika."""
    return rng.choice(eligible_players(squad, state))


def pick_weighted_player(rng: random.Random, squad: Sequence[Player], state: EngineState,
                         weight_of: Callable[[Player], float], min_weight: float = 1.0) -> Player:
    """
    Wybór ruletkowy proporcjonalny do wagi (np. efektywnej umiejętności).

    Waga każdego zawodnika jest podłogowana do `min_weight`, żeby nikt nie miał zerowej szansy.
    """
    available = eligible_players(squad, state)
    weights = [max(min_weight, weight_of(p)) for p in available]
    r = rng.random() * sum(weights)
    for p, w in zip(available, weights):
        r -= w
        if r <= 0.0:
            return p
    return available[-1]


def pick_goalkeeper(squad: Sequence[Player], state: EngineState) -> Player:
    """
    Pierwszy bramkarz (GK) w całej kadrze, także z ławki; usunięty z boiska jest pomijany.

    Fallback: pierwszy uprawniony zawodnik z wyjściowej jedenastki.
    """
    for p in squad:
        if p.is_goalkeeper() and not state.is_sent_off(p.id):
            return p
    return eligible_players(squad, state)[0]
