from __future__ import annotations
import csv
import random
import sys
from pathlib import Path
from typing import Dict, List, Optional

# Katalog repo na ścieżce - skrypt działa też bez instalacji pakietu
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from main import TEAMS_JSON, load_teams, make_fixture  # noqa: E402
from simulation.runner import build_engine  # noqa: E402


def simulate_many(n: int = 200, home: Optional[str] = None, away: Optional[str] = None,
                  data: Path = TEAMS_JSON) -> List[Dict]:
    teams = load_teams(data)
    results: List[Dict] = []
    for seed in range(n):
        fixture = make_fixture(teams, home, away, match_id=seed)
        ticks = build_engine(fixture, rng=random.Random(seed)).simulate()
        last = ticks[-1]
        h, a = last.stats.home, last.stats.away
        results.append({
            "seed": seed,
            "score_home": last.score.home,
            "score_away": last.score.away,
            "shots_home": h.shots,
            "shots_away": a.shots,
            "on_home": h.shots_on_target,
            "on_away": a.shots_on_target,
            "pos_home": h.possession_pct,
            "pos_away": a.possession_pct,
            "corners_home": h.corners,
            "corners_away": a.corners,
            "fouls_home": h.fouls,
            "fouls_away": a.fouls,
            "yellows_home": h.yellow_cards,
            "yellows_away": a.yellow_cards,
            "reds_home": h.red_cards,
            "reds_away": a.red_cards,
        })
    return results


def write_csv(rows: List[Dict], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if not rows:
        return
    with path.open("w", encoding="utf-8", newline="") as f:
        w = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
        w.writeheader()
        w.writerows(rows)


if __name__ == "__main__":
    data = simulate_many(n=200)
    out = ROOT / "reports" / "batch_stats.csv"
    write_csv(data, out)
    print(f"Wrote {len(data)} rows to {out}")
