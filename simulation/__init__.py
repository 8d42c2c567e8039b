"""Minutowy silnik meczu i warstwa uruchomieniowa (rozgłaszanie, zapis)."""
from simulation.config import EngineConfig, get_config, load_config
from simulation.errors import (
    MatchAlreadyCompletedError, MatchNotFoundError, PreconditionError,
    SimulationError, SimulationRejectedError,
)
from simulation.events import EventType, LineupData, Phase, SimulationEvent, SimulationTick, Side, Zone
from simulation.match import MatchEngine

__all__ = [
    'EngineConfig', 'get_config', 'load_config',
    'MatchAlreadyCompletedError', 'MatchNotFoundError', 'PreconditionError',
    'SimulationError', 'SimulationRejectedError',
    'EventType', 'LineupData', 'Phase', 'SimulationEvent', 'SimulationTick', 'Side', 'Zone',
    'MatchEngine',
]
