"""Model drużyny i ustawienia taktycznego."""
from __future__ import annotations
import json
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence


@dataclass
class Team:
    """
    Reprezentuje drużynę piłkarską (wyłącznie dane identyfikacyjne/prezentacyjne).

    Attributes:
        id: Identyfikator drużyny
        name: Nazwa drużyny
        short_name: Skrót nazwy
        primary_color: Kolor podstawowy
        secondary_color: Kolor dodatkowy
    """
    id: int
    name: str
    short_name: Optional[str] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None


@dataclass(frozen=True)
class FormationPosition:
    role: str
    x: float
    y: float


# Kanoniczne 4-4-2 (gospodarze atakują w stronę x=100)
DEFAULT_442: List[FormationPosition] = [
    FormationPosition("GK", 5.0, 34.0),
    FormationPosition("LB", 20.0, 8.0),
    FormationPosition("CB", 20.0, 24.0),
    FormationPosition("CB", 20.0, 44.0),
    FormationPosition("RB", 20.0, 60.0),
    FormationPosition("LM", 45.0, 8.0),
    FormationPosition("CM", 45.0, 24.0),
    FormationPosition("CM", 45.0, 44.0),
    FormationPosition("RM", 45.0, 60.0),
    FormationPosition("ST", 75.0, 24.0),
    FormationPosition("ST", 75.0, 44.0),
]


@dataclass
class Formation:
    """
    Ustawienie taktyczne.

    `positions` może być gotową listą albo surowym JSON-em z bazy
    (lista obiektów {"position"|"role", "x", "y"}).
    """
    name: str = "4-4-2"
    positions: Any = field(default_factory=list)

    def parsed_positions(self) -> List[FormationPosition]:
        """Zwraca pozycje; przy błędnych danych - kanoniczne 4-4-2."""
        raw = self.positions
        if isinstance(raw, (str, bytes)):
            try:
                raw = json.loads(raw)
            except ValueError:
                return list(DEFAULT_442)
        if not isinstance(raw, Sequence) or not raw:
            return list(DEFAULT_442)
        out: List[FormationPosition] = []
        for item in raw:
            if isinstance(item, FormationPosition):
                out.append(item)
                continue
            if not isinstance(item, dict):
                return list(DEFAULT_442)
            role = item.get("position", item.get("role"))
            if role is None:
                return list(DEFAULT_442)
            try:
                out.append(FormationPosition(str(role), float(item["x"]), float(item["y"])))
            except (KeyError, TypeError, ValueError):
                return list(DEFAULT_442)
        return out


def formation_positions(formation: Optional[Formation]) -> List[FormationPosition]:
    if formation is None:
        return list(DEFAULT_442)
    return formation.parsed_positions()
