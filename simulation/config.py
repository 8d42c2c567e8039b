from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional
import copy
import logging
import os

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = 'MATCH_ENGINE_CONFIG'
DEFAULT_CONFIG_PATH = 'engine_config.yml'


DEFAULTS: Dict[str, Any] = {
    'match': {
        'half_minutes': 45,
        'injury_time_h1': [1, 4],
        'injury_time_h2': [1, 5],
        'kickoff': {'x': 50.0, 'y': 34.0},
    },
    'attributes': {
        'neutral': 10.0,
        'min_weight': 1.0,
    },
    'fatigue': {
        'start_after_minute': 60,
        'rate_per_min': 0.01,
        'stamina_divisor': 40.0,
        'min_rate_factor': 0.2,
        'skill_penalty': 0.25,
    },
    'passing': {
        'min_per_minute': 3,
        'max_per_minute': 8,
        'jitter': 3.0,
    },
    'ball': {
        'advance_prob': 0.6,
        'advance_min': 5.0,
        'advance_max': 15.0,
        'advance_y_jitter': 8.0,
        'attacking_third': {'home': 70.0, 'away': 30.0},
        'zone': {'low': 33.0, 'high': 67.0},
    },
    'decisions': {
        'shot_attacking_third': 0.15,
        'shot_elsewhere': 0.03,
        'foul': 0.08,
        'tackle': 0.20,
        'offside': 0.06,
        'possession_flip': 0.35,
    },
    'shot': {
        'block': 0.25,
        'corner_after_block': 0.4,
        'miss_base': 0.40,
        'miss_skill_factor': 0.15,
        'goal_base': 0.25,
        'goal_skill_factor': 0.10,
        'corner_after_save': 0.5,
    },
    'discipline': {
        'yellow_base': 0.13,
        'yellow_aggression_factor': 0.07,
        'straight_red': 0.005,
    },
    'broadcast': {
        'speed_delay_ms': {'slow': 5000, 'realtime': 2500, 'fast': 500, 'instant': 0},
    },
}


def _merge(a: Dict[str, Any], b: Mapping[str, Any]) -> Dict[str, Any]:
    out = dict(a)
    for k, v in (b or {}).items():
        if isinstance(v, Mapping) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out


@dataclass
class EngineConfig:
    data: Dict[str, Any] = field(default_factory=lambda: copy.deepcopy(DEFAULTS))

    def get(self, path: str, default: Any = None) -> Any:
        cur: Any = self.data
        for part in path.split('.'):
            if isinstance(cur, dict) and part in cur:
                cur = cur[part]
            else:
                return default
        return cur

    def num(self, path: str) -> float:
        """Wartość liczbowa; brak klucza w konfiguracji to błąd programisty."""
        val = self.get(path)
        if val is None:
            raise KeyError(f"missing config value: {path}")
        return float(val)

    def with_overrides(self, overrides: Mapping[str, Any]) -> 'EngineConfig':
        """Nowa konfiguracja z nałożonymi (deep-merge) nadpisaniami."""
        return EngineConfig(data=_merge(copy.deepcopy(self.data), overrides))


_GLOBAL_CONFIG: Optional[EngineConfig] = None


def load_config(path: Optional[str] = None) -> EngineConfig:
    global _GLOBAL_CONFIG
    path = path or os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH
    cfg = EngineConfig()
    if os.path.exists(path):
        with open(path, 'r', encoding='utf-8') as f:
            loaded = yaml.safe_load(f) or {}
        cfg.data = _merge(copy.deepcopy(DEFAULTS), loaded)
        logger.debug("Loaded engine config overrides from %s", path)
    _GLOBAL_CONFIG = cfg
    return cfg


def get_config() -> EngineConfig:
    global _GLOBAL_CONFIG
    if _GLOBAL_CONFIG is None:
        _GLOBAL_CONFIG = load_config()
    return _GLOBAL_CONFIG
