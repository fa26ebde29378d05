"""Consolidated ingestion of the yearly ATP CSVs.

All ``YYYY.csv`` files in the input folder are read in name order and
pushed through one shared :class:`EntityResolver`, then written out as
``players.json``, ``tournaments.json``, ``matches.json`` and
``derived.json``. Bracket trees are generated from the same data.
"""

from __future__ import annotations

import csv
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .brackets import generate_brackets
from .common import (
    COL_BEST_OF,
    COL_COMMENT,
    COL_COURT,
    COL_DATE,
    COL_LOCATION,
    COL_LOSER,
    COL_LPTS,
    COL_LRANK,
    COL_LSETS,
    COL_ROUND,
    COL_SERIES,
    COL_SURFACE,
    COL_TOURNAMENT,
    COL_WINNER,
    COL_WPTS,
    COL_WRANK,
    COL_WSETS,
    MAX_SETS,
    normalize_number,
    normalize_round,
    normalize_value,
    parse_date,
    set_columns,
)
from .config import Config
from .models import Derived, Match, Player, Tournament
from .resolver import EntityResolver
from .storage import PathLike, write_json

logger = logging.getLogger(__name__)

YEAR_FILE_RE = re.compile(r"^\d{4}\.csv$")
SCORELESS_COMMENTS = {"Retired", "Walkover"}

Row = Dict[str, Any]


class IngestError(RuntimeError):
    """Input folder missing or holding no yearly CSV files."""


@dataclass
class BatchStats:
    name: str
    rows: int = 0
    processed: int = 0

    @property
    def skipped(self) -> int:
        return self.rows - self.processed


@dataclass
class IngestResult:
    players: List[Player]
    tournaments: List[Tournament]
    matches: List[Match]
    derived: List[Derived]
    batches: List[BatchStats] = field(default_factory=list)


def discover_year_files(directory: PathLike) -> List[Path]:
    root = Path(directory)
    if not root.is_dir():
        raise IngestError(f"Input directory not found: {root}")
    return sorted(p for p in root.iterdir() if p.is_file() and YEAR_FILE_RE.match(p.name))


def read_rows(path: PathLike) -> List[Row]:
    with open(path, "r", encoding="utf-8-sig", newline="") as handle:
        return list(csv.DictReader(handle))


def _parse_sets(row: Row) -> Tuple[List[Any], List[Any]]:
    w: List[Any] = []
    l: List[Any] = []
    for idx in range(1, MAX_SETS + 1):
        w_col, l_col = set_columns(idx)
        w_games = normalize_number(row.get(w_col))
        l_games = normalize_number(row.get(l_col))
        if w_games is None and l_games is None:
            break
        # One-sided sets come from retirements mid-set.
        w.append(w_games if w_games is not None else 0)
        l.append(l_games if l_games is not None else 0)
    return w, l


def build_match(row: Row, resolver: EntityResolver) -> Optional[Match]:
    """Turn one CSV row into a :class:`Match`, or ``None`` if the row is unusable.

    Players and the tournament are registered before the score check, so a
    scoreless row still introduces its players to the registry.
    """
    tournament_name = normalize_value(row.get(COL_TOURNAMENT))
    winner_name = normalize_value(row.get(COL_WINNER))
    loser_name = normalize_value(row.get(COL_LOSER))
    if not tournament_name or not winner_name or not loser_name:
        return None

    match_date = parse_date(row.get(COL_DATE))
    if not match_date:
        return None

    year = int(match_date[:4])
    round_code = normalize_round(row.get(COL_ROUND))
    best_of = 5 if normalize_number(row.get(COL_BEST_OF)) == 5 else 3

    winner = resolver.resolve_player(winner_name)
    loser = resolver.resolve_player(loser_name)
    tournament = resolver.resolve_tournament(
        year,
        tournament_name,
        normalize_value(row.get(COL_LOCATION)),
        series=row.get(COL_SERIES),
        court=row.get(COL_COURT),
        surface=row.get(COL_SURFACE),
    )

    w, l = _parse_sets(row)
    wsets = normalize_number(row.get(COL_WSETS)) or 0
    lsets = normalize_number(row.get(COL_LSETS)) or 0
    comment = normalize_value(row.get(COL_COMMENT))

    if not w and not (wsets == 0 and lsets == 0 and comment in SCORELESS_COMMENTS):
        return None

    return Match(
        id=resolver.match_id(tournament, match_date, round_code, winner, loser),
        tournament_id=tournament.id,
        date=match_date,
        round=round_code,
        best_of=best_of,
        winner_id=winner.id,
        loser_id=loser.id,
        w=tuple(w),
        l=tuple(l),
        wsets=wsets,
        lsets=lsets,
        w_rank=normalize_number(row.get(COL_WRANK)),
        l_rank=normalize_number(row.get(COL_LRANK)),
        w_pts=normalize_number(row.get(COL_WPTS)),
        l_pts=normalize_number(row.get(COL_LPTS)),
        comment=comment,
    )


def _is_tiebreak_set(w_games, l_games) -> bool:
    return (w_games == 7 and l_games >= 5) or (l_games == 7 and w_games >= 5)


def compute_derived(match: Match) -> Derived:
    rank_diff = None
    if match.w_rank is not None and match.l_rank is not None:
        rank_diff = match.w_rank - match.l_rank
    pts_diff = None
    if match.w_pts is not None and match.l_pts is not None:
        pts_diff = match.w_pts - match.l_pts
    upset = None
    if match.w_rank is not None and match.l_rank is not None:
        upset = match.l_rank < match.w_rank

    total_games = sum(match.w) + sum(match.l)
    return Derived(
        match_id=match.id,
        rank_diff=rank_diff,
        pts_diff=pts_diff,
        total_games=total_games if total_games > 0 else None,
        sets_played=match.wsets + match.lsets,
        straight_sets=match.lsets == 0,
        has_tiebreak=any(_is_tiebreak_set(w, l) for w, l in zip(match.w, match.l)),
        upset=upset,
    )


def ingest_batches(
    batches: Iterable[Tuple[str, Iterable[Row]]],
    resolver: Optional[EntityResolver] = None,
) -> IngestResult:
    """Run every ``(name, rows)`` batch through one resolver, in order."""
    resolver = resolver or EntityResolver()
    matches: List[Match] = []
    derived: List[Derived] = []
    stats: List[BatchStats] = []

    for name, rows in batches:
        batch = BatchStats(name=name)
        for row in rows:
            batch.rows += 1
            match = build_match(row, resolver)
            if match is None:
                continue
            matches.append(match)
            derived.append(compute_derived(match))
            batch.processed += 1
        logger.info("Processed %d/%d rows from %s", batch.processed, batch.rows, name)
        stats.append(batch)

    return IngestResult(
        players=resolver.players,
        tournaments=resolver.tournaments,
        matches=matches,
        derived=derived,
        batches=stats,
    )


def write_outputs(result: IngestResult, output_dir: PathLike) -> List[Path]:
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)
    return [
        write_json(out / Config.PLAYERS_FILE, [p.to_dict() for p in result.players]),
        write_json(out / Config.TOURNAMENTS_FILE, [t.to_dict() for t in result.tournaments]),
        write_json(out / Config.MATCHES_FILE, [m.to_dict() for m in result.matches]),
        write_json(out / Config.DERIVED_FILE, [d.to_dict() for d in result.derived]),
    ]


def _missing_files_message(root: Path) -> str:
    message = f"No year CSV files (e.g., 2024.csv) found in {root}."
    misnamed = sorted(root.glob("atp_matches_*.csv"))
    if misnamed:
        message += (
            f' Hint: found "{misnamed[0].name}". The pipeline expects files named like "2024.csv".'
        )
    return message


def run_ingest(
    input_dir: PathLike = Config.INPUT_DIR,
    output_dir: PathLike = Config.OUTPUT_DIR,
    brackets: bool = True,
) -> Dict[str, Any]:
    files = discover_year_files(input_dir)
    if not files:
        raise IngestError(_missing_files_message(Path(input_dir)))
    logger.info("Found CSV files to process: %s", ", ".join(p.name for p in files))

    result = ingest_batches((path.name, read_rows(path)) for path in files)
    write_outputs(result, output_dir)

    bracket_count = 0
    if brackets:
        bracket_count = generate_brackets(
            result.matches,
            result.players,
            result.tournaments,
            Path(output_dir) / Config.BRACKETS_SUBDIR,
        )

    return {
        "files": [p.name for p in files],
        "rows": sum(b.rows for b in result.batches),
        "skipped": sum(b.skipped for b in result.batches),
        "players": len(result.players),
        "tournaments": len(result.tournaments),
        "matches": len(result.matches),
        "brackets": bracket_count,
        "output_dir": str(output_dir),
    }
