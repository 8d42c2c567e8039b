from __future__ import annotations
import pytest

from models.player import Player
from simulation.config import EngineConfig
from simulation.fatigue import apply_fatigue_tick, effective_skill, fatigue_rate
from simulation.state import EngineState

CFG = EngineConfig()


def _players(n=2):
    return [Player(id=i, name=f"P{i}") for i in range(1, n + 1)]


def test_no_fatigue_until_minute_60():
    st = EngineState()
    for minute in range(1, 61):
        apply_fatigue_tick(st, _players(), minute, lambda pid: 10.0, CFG)
    assert st.player_fatigue == {}


def test_rate_depends_on_stamina_with_floor():
    assert fatigue_rate(0.0, CFG) == pytest.approx(0.01)
    assert fatigue_rate(20.0, CFG) == pytest.approx(0.005)
    # wytrzymałość >= 32 - próg 0.2
    assert fatigue_rate(40.0, CFG) == pytest.approx(0.002)
    assert fatigue_rate(35.0, CFG) == pytest.approx(0.002)


def test_low_stamina_tires_faster_over_second_half():
    st = EngineState()
    stamina = {1: 4.0, 2: 18.0}
    for minute in range(1, 91):
        apply_fatigue_tick(st, _players(), minute, lambda pid: stamina[pid], CFG)
    assert st.fatigue(1) > st.fatigue(2) > 0.0


def test_fatigue_is_monotonic_and_capped():
    st = EngineState()
    st.player_fatigue[1] = 0.995
    prev = {1: 0.995, 2: 0.0}
    for minute in range(61, 120):
        apply_fatigue_tick(st, _players(), minute, lambda pid: 0.0, CFG)
        for pid in (1, 2):
            assert st.fatigue(pid) >= prev[pid]
            assert st.fatigue(pid) <= 1.0
            prev[pid] = st.fatigue(pid)
    assert st.fatigue(1) == 1.0


def test_effective_skill_reduces_with_fatigue():
    base = 16.0
    assert effective_skill(base, 0.0, CFG) == base
    assert effective_skill(base, 0.4, CFG) == pytest.approx(14.4)
    assert effective_skill(base, 1.0, CFG) == pytest.approx(12.0)
