from __future__ import annotations
"""
simulation/persistence.py

Zapis wyniku meczu po zakończeniu symulacji. Zapis jest best-effort:
błąd pojedynczego zapisu jest logowany i pomijany, nigdy nie przerywa meczu.
"""
import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Sequence, Set, Tuple

from .events import EventType, SimulationTick

logger = logging.getLogger(__name__)

PERSISTED_EVENT_TYPES = frozenset({
    EventType.GOAL,
    EventType.YELLOW_CARD,
    EventType.RED_CARD,
    EventType.SECOND_YELLOW,
    EventType.FOUL,
    EventType.CORNER,
})


@dataclass
class MatchEventRecord:
    match_id: int
    minute: int
    event_type: str
    team: str
    player_name: Optional[str]
    description: str
    x: float
    y: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class MatchRepository(Protocol):
    def save_match_result(self, match_id: int, home_score: int, away_score: int, stats_json: str) -> None:
        ...

    def save_match_event(self, record: MatchEventRecord) -> None:
        ...


class InMemoryRepository:
    def __init__(self) -> None:
        self.results: Dict[int, Tuple[int, int, str]] = {}
        self.events: List[MatchEventRecord] = []

    def save_match_result(self, match_id: int, home_score: int, away_score: int, stats_json: str) -> None:
        self.results[match_id] = (home_score, away_score, stats_json)

    def save_match_event(self, record: MatchEventRecord) -> None:
        self.events.append(record)


class JsonFileRepository:
    """Wynik jako `match_<id>.json`, zdarzenia jako wiersze NDJSON w `match_<id>_events.ndjson`.

    Zapis wyniku (albo pierwszego zdarzenia meczu w tej instancji) nadpisuje plik zdarzeń
    z poprzedniego przebiegu.
    """

    def __init__(self, out_dir: str = 'out') -> None:
        self.out = Path(out_dir)
        self.out.mkdir(parents=True, exist_ok=True)
        self._started: Set[int] = set()

    def result_path(self, match_id: int) -> Path:
        return self.out / f"match_{match_id}.json"

    def events_path(self, match_id: int) -> Path:
        return self.out / f"match_{match_id}_events.ndjson"

    def save_match_result(self, match_id: int, home_score: int, away_score: int, stats_json: str) -> None:
        data = {
            'match_id': match_id,
            'status': 'completed',
            'home_score': home_score,
            'away_score': away_score,
            'stats': json.loads(stats_json),
        }
        with self.result_path(match_id).open('w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        # wynik zapisywany jest przed zdarzeniami - nowy przebieg zaczyna plik zdarzeń od zera
        self.events_path(match_id).write_text("", encoding="utf-8")
        self._started.add(match_id)

    def save_match_event(self, record: MatchEventRecord) -> None:
        mode = 'a' if record.match_id in self._started else 'w'
        self._started.add(record.match_id)
        with self.events_path(record.match_id).open(mode, encoding='utf-8') as f:
            f.write(json.dumps(record.to_dict(), ensure_ascii=False) + "\n")


def event_records(match_id: int, ticks: Sequence[SimulationTick]) -> List[MatchEventRecord]:
    out: List[MatchEventRecord] = []
    for tick in ticks:
        for e in tick.events:
            if e.event_type not in PERSISTED_EVENT_TYPES:
                continue
            out.append(MatchEventRecord(
                match_id=match_id,
                minute=tick.minute,
                event_type=e.event_type.value,
                team=e.team.value,
                player_name=e.primary_player,
                description=e.description,
                x=e.x,
                y=e.y,
            ))
    return out


def persist_match(repo: MatchRepository, match_id: int, ticks: Sequence[SimulationTick]) -> int:
    """
    Zapisuje wynik + statystyki ostatniego ticka oraz wybrane zdarzenia.

    Returns:
        Liczba udanych zapisów zdarzeń
    """
    if not ticks:
        return 0
    last = ticks[-1]
    try:
        repo.save_match_result(match_id, last.score.home, last.score.away, json.dumps(last.stats.to_dict()))
    except Exception:
        logger.warning("Saving result of match %s failed", match_id, exc_info=True)

    saved = 0
    for record in event_records(match_id, ticks):
        try:
            repo.save_match_event(record)
            saved += 1
        except Exception:
            logger.warning("Saving %s event (minute %d) of match %s failed",
                           record.event_type, record.minute, match_id, exc_info=True)
    return saved
