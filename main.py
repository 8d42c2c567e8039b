from __future__ import annotations
import argparse
import json
import logging
import random
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from models.player import Player, PlayerAttributes
from models.team import Formation, Team
from simulation.broadcast import Channel
from simulation.errors import MatchNotFoundError, SimulationRejectedError
from simulation.match import TOTAL_SIM_MINUTES
from simulation.persistence import JsonFileRepository
from simulation.report import build_report
from simulation.runner import MatchFixture, run_match

DATA_DIR = Path(__file__).parent / "data"
TEAMS_JSON = DATA_DIR / "teams.json"

# Wymuś wyjście UTF-8 w konsoli (zapobiega krzaczeniu polskich znaków)
try:
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")
except (AttributeError, ValueError):
    pass


@dataclass
class TeamData:
    team: Team
    squad: List[Player]
    attrs: Dict[int, PlayerAttributes] = field(default_factory=dict)
    formation: Optional[Formation] = None


def load_teams(path: Path = TEAMS_JSON) -> Dict[str, TeamData]:
    if not path.exists():
        print(f"[BŁĄD] Brak pliku z danymi: {path}")
        sys.exit(1)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except ValueError as e:
        print(f"[BŁĄD] Nie udało się wczytać {path}: {e}")
        sys.exit(1)

    teams: Dict[str, TeamData] = {}
    for i, t in enumerate(data.get("teams", []), start=1):
        team = Team(
            id=t.get("id", i),
            name=t.get("name", "Unknown Team"),
            short_name=t.get("short_name"),
            primary_color=t.get("primary_color"),
            secondary_color=t.get("secondary_color"),
        )
        squad: List[Player] = []
        attrs: Dict[int, PlayerAttributes] = {}
        for p in t.get("players", []):
            player = Player(
                id=p.get("id", 0),
                name=p.get("name", "Anon"),
                position=p.get("position"),
                shirt_number=p.get("shirt_number"),
                team_id=team.id,
            )
            squad.append(player)
            if p.get("attributes"):
                attrs[player.id] = PlayerAttributes.from_dict(player.id, p["attributes"])
        formation = None
        if t.get("formation"):
            f = t["formation"]
            formation = Formation(name=f.get("name", "4-4-2"), positions=f.get("positions", []))
        teams[team.name] = TeamData(team=team, squad=squad, attrs=attrs, formation=formation)
    if not teams:
        print("[BŁĄD] Nie znaleziono żadnych drużyn w teams.json.")
        sys.exit(1)
    return teams


def make_fixture(teams: Dict[str, TeamData], home: Optional[str], away: Optional[str],
                 match_id: int = 1) -> MatchFixture:
    """Fixture z dwóch drużyn; domyślnie pierwsza i kolejna różna od niej."""
    names = list(teams.keys())
    home = home or names[0]
    away = away or next((n for n in names if n != home), names[0])
    for name in (home, away):
        if name not in teams:
            raise MatchNotFoundError(f"unknown team: {name}")
    h, a = teams[home], teams[away]
    return MatchFixture(
        match_id=match_id,
        home_team=h.team,
        away_team=a.team,
        home_squad=h.squad,
        away_squad=a.squad,
        home_attrs=h.attrs,
        away_attrs=a.attrs,
        home_formation=h.formation,
        away_formation=a.formation,
    )


def render_lineups(lineup: Dict[str, Any], home: str, away: str) -> None:
    print("\n" + "=" * 80)
    print("⚽ SKŁADY DRUŻYN ⚽")
    print("=" * 80 + "\n")
    for icon, name, players in (("🔴", home, lineup["home"]), ("🔵", away, lineup["away"])):
        print(f"{icon} {name}")
        for p in players:
            print(f"   #{p['shirt_number']:<3} {p['name']:<22} {p['position']:<3} ({p['x']:.0f}, {p['y']:.0f})")
        print()
    print("=" * 80 + "\n")


def print_match_report(report: Dict, *, timeline_mode: str = "all", timeline_limit: int = 120) -> None:
    home, away = report["home"], report["away"]
    print("\n" + "=" * 70)
    print(f"RAPORT Z MECZU: {home} vs {away}")
    print("=" * 70 + "\n")
    print(f"📊 WYNIK KOŃCOWY: {home} {report['score_home']} - {report['score_away']} {away}\n")

    if report["goals"]:
        print("⚽ BRAMKI:")
        for g in report["goals"]:
            print(f"   {g['team']}: {g['minute']}' {g['scorer']}")
    else:
        print("⚽ BRAMKI: Brak bramek w tym meczu")

    h, a = report["stats"]["home"], report["stats"]["away"]
    print("\n📈 STATYSTYKI:")
    print(f"   Posiadanie piłki:\n      {home}: {h['possession_pct']:.0f}%\n      {away}: {a['possession_pct']:.0f}%")
    print(
        f"\n   Strzały:\n      {home}: {h['shots']} ({h['shots_on_target']} celnych)\n"
        f"      {away}: {a['shots']} ({a['shots_on_target']} celnych)"
    )
    print(f"\n   Obrony bramkarzy: {home}: {h['saves']}  |  {away}: {a['saves']}")
    print(f"   Rzuty rożne: {home}: {h['corners']}  |  {away}: {a['corners']}")
    print(f"   Podania: {home}: {h['passes']}  |  {away}: {a['passes']}")
    print(f"   Odbiory: {home}: {h['tackles']}  |  {away}: {a['tackles']}")
    print(f"   Spalone: {home}: {h['offsides']}  |  {away}: {a['offsides']}")
    print(
        f"\n   Faule i kartki:\n      Faule: {home}: {h['fouls']}  |  {away}: {a['fouls']}\n"
        f"      Żółte: {home}: {h['yellow_cards']}  |  {away}: {a['yellow_cards']}\n"
        f"      Czerwone: {home}: {h['red_cards']}  |  {away}: {a['red_cards']}"
    )

    timeline = report["timeline"]
    if timeline_mode == "key":
        timeline = report["key_events"]
        title = "CHRONOLOGIA (kluczowe)"
    elif timeline_mode == "last":
        limit = max(1, int(timeline_limit))
        timeline = timeline[-limit:]
        title = f"CHRONOLOGIA (ostatnie {limit})"
    else:
        title = "CHRONOLOGIA (pełna)"

    if timeline:
        print(f"\n{title}:")
        for e in timeline:
            print(f"   {e['description']}")

    print(f"\n{report['final_commentary']}")
    print("\n" + "=" * 80 + "\n")


def _flag(v: str) -> bool:
    return str(v).lower() not in ("0", "false", "no")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Minutowa symulacja meczu piłkarskiego")
    p.add_argument("--data", type=str, default=str(TEAMS_JSON), help="Plik JSON z drużynami")
    p.add_argument("--home", type=str, help="Nazwa gospodarzy")
    p.add_argument("--away", type=str, help="Nazwa gości")
    p.add_argument("--seed", type=int)
    p.add_argument(
        "--speed",
        type=str,
        default="instant",
        choices=["slow", "realtime", "fast", "instant"],
        help="Tempo rozgłaszania minut",
    )
    p.add_argument("--verbose", action="store_true", help="Logi DEBUG i komentarz minuta po minucie")
    p.add_argument(
        "--timeline",
        type=str,
        default="all",
        choices=["all", "key", "last"],
        help="Tryb wyświetlania chronologii w CLI",
    )
    p.add_argument("--timeline-limit", type=int, default=120, help="Limit zdarzeń dla trybu 'last'")
    p.add_argument(
        "--save-json",
        dest="save_json",
        type=_flag,
        default=True,
        help="Czy zapisać raport do pliku JSON (domyślnie True)",
    )
    p.add_argument(
        "--json-path",
        type=str,
        default=str(Path("out") / "last_report.json"),
        help="Ścieżka docelowa pliku JSON (domyślnie out/last_report.json)",
    )
    p.add_argument("--out-dir", type=str, help="Katalog zapisu wyniku i zdarzeń (match_<id>.json + NDJSON)")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    teams = load_teams(Path(args.data))
    try:
        fixture = make_fixture(teams, args.home, args.away)
    except MatchNotFoundError as e:
        print(f"[BŁĄD] {e}")
        return 1
    home, away = fixture.home_team.name, fixture.away_team.name

    print("\n⚽ FOOTBALL MANAGER - MATCH ENGINE")
    print(f"   Mecz: {home} vs {away}\n   Czas trwania: {TOTAL_SIM_MINUTES} minut + doliczony czas\n")

    def notify(channel: str, payload: Dict[str, Any]) -> None:
        if channel == Channel.LINEUP.value:
            render_lineups(payload, home, away)
        elif channel == Channel.MINUTE.value and args.verbose:
            print(payload["commentary"])

    repository = JsonFileRepository(args.out_dir) if args.out_dir else None
    try:
        ticks = run_match(fixture, notify, repository=repository, speed=args.speed,
                          rng=random.Random(args.seed))
    except SimulationRejectedError as e:
        print(f"[BŁĄD] Symulacja odrzucona: {e}")
        return 1

    report = build_report(ticks, home, away)
    print_match_report(report, timeline_mode=args.timeline, timeline_limit=args.timeline_limit)

    if args.save_json:
        out_path = Path(args.json_path)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(json.dumps(report, ensure_ascii=False, indent=2), encoding="utf-8")
    return 0


if __name__ == "__main__":
    sys.exit(main())
