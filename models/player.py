"""Model zawodnika piłkarskiego i jego profilu atrybutów."""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

# Wartość neutralna: brak rekordu atrybutów albo nieznana umiejętność
NEUTRAL_SKILL = 10


class Skill(str, Enum):
    """Katalog umiejętności zawodnika (skala 0-20)."""
    # Techniczne
    FINISHING = "finishing"
    FIRST_TOUCH = "first_touch"
    FREE_KICK_TAKING = "free_kick_taking"
    HEADING = "heading"
    LONG_SHOTS = "long_shots"
    LONG_THROWS = "long_throws"
    MARKING = "marking"
    PASSING = "passing"
    PENALTY_TAKING = "penalty_taking"
    TACKLING = "tackling"
    TECHNIQUE = "technique"
    CORNERS = "corners"
    CROSSING = "crossing"
    DRIBBLING = "dribbling"
    # Mentalne
    AGGRESSION = "aggression"
    ANTICIPATION = "anticipation"
    BRAVERY = "bravery"
    COMPOSURE = "composure"
    CONCENTRATION = "concentration"
    DECISIONS = "decisions"
    DETERMINATION = "determination"
    FLAIR = "flair"
    LEADERSHIP = "leadership"
    OFF_THE_BALL = "off_the_ball"
    POSITIONING = "positioning"
    TEAMWORK = "teamwork"
    VISION = "vision"
    WORK_RATE = "work_rate"
    # Fizyczne
    ACCELERATION = "acceleration"
    AGILITY = "agility"
    BALANCE = "balance"
    JUMPING_REACH = "jumping_reach"
    NATURAL_FITNESS = "natural_fitness"
    PACE = "pace"
    STAMINA = "stamina"
    STRENGTH = "strength"
    # Bramkarskie
    AERIAL_REACH = "aerial_reach"
    COMMAND_OF_AREA = "command_of_area"
    COMMUNICATION = "communication"
    ECCENTRICITY = "eccentricity"
    HANDLING = "handling"
    KICKING = "kicking"
    ONE_ON_ONES = "one_on_ones"
    REFLEXES = "reflexes"
    RUSHING_OUT = "rushing_out"
    THROWING = "throwing"

    @classmethod
    def parse(cls, name: Union["Skill", str]) -> Optional["Skill"]:
        """Zwraca Skill dla nazwy; None gdy nazwa nieznana."""
        if isinstance(name, Skill):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            return None


_SKILL_INDEX: Dict[Skill, int] = {s: i for i, s in enumerate(Skill)}


@dataclass
class PlayerAttributes:
    """
    Profil atrybutów zawodnika, przechowywany jako tablica indeksowana przez `Skill`.

    Attributes:
        player_id: Identyfikator zawodnika
        values: Wartości umiejętności w kolejności `Skill`
        current_ability: Aktualny poziom ogólny
        potential_ability: Potencjał
    """
    player_id: int
    values: List[int] = field(default_factory=lambda: [NEUTRAL_SKILL] * len(_SKILL_INDEX))
    current_ability: float = 0.0
    potential_ability: float = 0.0

    def __post_init__(self) -> None:
        if len(self.values) != len(_SKILL_INDEX):
            raise ValueError(f"expected {len(_SKILL_INDEX)} skill values, got {len(self.values)}")

    @classmethod
    def from_dict(cls, player_id: int, data: Mapping[str, Any]) -> "PlayerAttributes":
        """
        Buduje profil ze słownika {nazwa_umiejętności: wartość}.

        Nieznane klucze są ignorowane, brakujące umiejętności dostają NEUTRAL_SKILL.
        """
        data = data or {}
        values = [NEUTRAL_SKILL] * len(_SKILL_INDEX)
        for key, raw in data.items():
            skill = Skill.parse(key)
            if skill is None:
                continue
            try:
                values[_SKILL_INDEX[skill]] = int(round(float(raw)))
            except (TypeError, ValueError):
                raise ValueError(f"player {player_id}: invalid value for skill {skill.value!r}: {raw!r}") from None
        return cls(
            player_id=player_id,
            values=values,
            current_ability=float(data.get("current_ability", 0.0) or 0.0),
            potential_ability=float(data.get("potential_ability", 0.0) or 0.0),
        )

    def get(self, skill: Skill) -> int:
        return self.values[_SKILL_INDEX[skill]]

    def set(self, skill: Skill, value: int) -> None:
        self.values[_SKILL_INDEX[skill]] = int(value)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {s.value: self.values[i] for s, i in _SKILL_INDEX.items()}
        out["player_id"] = self.player_id
        out["current_ability"] = self.current_ability
        out["potential_ability"] = self.potential_ability
        return out


@dataclass
class Player:
    """
    Reprezentuje zawodnika w kadrze meczowej.

    Attributes:
        id: Unikalny identyfikator zawodnika
        name: Imię i nazwisko zawodnika
        position: Skrót pozycji (GK, CB, LB, CM, ST, ...)
        shirt_number: Numer na koszulce (opcjonalny)
        team_id: Identyfikator drużyny (opcjonalny)
    """
    id: int
    name: str
    position: Optional[str] = None
    shirt_number: Optional[int] = None
    team_id: Optional[int] = None

    def is_goalkeeper(self) -> bool:
        """Sprawdza czy zawodnik jest bramkarzem."""
        return (self.position or "").upper() == "GK"
