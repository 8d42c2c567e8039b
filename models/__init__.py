"""Modele danych wejściowych meczu."""
from models.player import NEUTRAL_SKILL, Player, PlayerAttributes, Skill
from models.team import DEFAULT_442, Formation, FormationPosition, Team, formation_positions

__all__ = [
    'NEUTRAL_SKILL', 'Player', 'PlayerAttributes', 'Skill',
    'DEFAULT_442', 'Formation', 'FormationPosition', 'Team', 'formation_positions',
]
