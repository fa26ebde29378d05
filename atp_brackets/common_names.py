"""Merge well-known tournament names into ``tournaments.json``.

The sponsor-heavy formal names in the CSVs ("BNP Paribas Open") are mapped
to the names people actually use ("Indian Wells"). To maintain, update
``COMMON_NAMES`` and re-run; the file always ends up reflecting exactly
this table, so stale ``commonName`` values are removed.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .config import Config
from .storage import PathLike, read_json, write_json

logger = logging.getLogger(__name__)

# Formal name -> common name
COMMON_NAMES: Dict[str, str] = {
    "Brisbane International": "Brisbane International",
    "Hong Kong Tennis Open": "Hong Kong Open",
    "Adelaide International": "Adelaide International",
    "ASB Classic": "Auckland Open",
    "Australian Open": "Australian Open",
    "Open Sud de France": "Montpellier Open",
    "Dallas Open": "Dallas Open",
    "ABN AMRO World Tennis Tournament": "Rotterdam Open",
    "Argentina Open": "Buenos Aires Open",
    "Delray Beach Open": "Delray Beach Open",
    "Open 13": "Marseille Open",
    "Qatar Exxon Mobil Open": "Doha Open",
    "Rio Open": "Rio Open",
    "Abierto Mexicano": "Acapulco Open",
    "Dubai Tennis Championships": "Dubai Open",
    "Chile Open": "Santiago Open",
    "BNP Paribas Open": "Indian Wells",
    "Miami Open": "Miami Open",
    "Tiriac Open": "Bucharest Open",
    "U.S. Men's Clay Court Championships": "Houston Open",
    "Grand Prix Hassan II": "Marrakech Open",
    "Monte Carlo Masters": "Monte Carlo Masters",
    "Barcelona Open": "Barcelona Open",
    "BMW Open": "Munich Open",
    "Mutua Madrid Open": "Madrid Open",
    "Internazionali BNL d'Italia": "Italian Open",
    "Geneva Open": "Geneva Open",
    "Hamburg Open": "Hamburg Open",
    "French Open": "French Open",
    "Stuttgart Open": "Stuttgart Open",
    "Rosmalen Grass Court Championships": "Rosmalen Open",
    "Halle Open": "Halle Open",
    "Queen's Club Championships": "Queen's Club",
    "Eastbourne International": "Eastbourne International",
    "Mallorca Championships": "Mallorca Open",
    "Wimbledon": "Wimbledon",
    "Nordea Open": "Swedish Open",
    "Suisse Open Gstaad": "Gstaad Open",
    "Los Cabos Open": "Los Cabos Open",
    "Generali Open": "Kitzbühel Open",
    "Croatia Open": "Umag Open",
    "Citi Open": "Washington Open",
    "Canadian Open": "Canadian Open",
    "Western & Southern Financial Group Masters": "Cincinnati Masters",
    "Winston-Salem Open at Wake Forest University": "Winston-Salem Open",
    "US Open": "US Open",
    "Chengdu Open": "Chengdu Open",
    "Hangzhou Open": "Hangzhou Open",
    "China Open": "China Open",
    "Japan Open Tennis Championships": "Japan Open",
    "Shanghai Masters": "Shanghai Masters",
    "Almaty Open": "Almaty Open",
    "European Open": "Antwerp Open",
    "Nordic Open": "Stockholm Open",
    "Swiss Indoors": "Basel Open",
    "Vienna Open": "Vienna Open",
    "BNP Paribas Masters": "Paris Masters",
}


class AugmentError(RuntimeError):
    pass


def display_name(tournament: Optional[Mapping[str, Any]]) -> str:
    if not tournament:
        return "Unknown"
    return tournament.get("commonName") or tournament.get("name") or "Unknown"


def apply_common_names(
    tournaments: List[Dict[str, Any]],
    name_map: Mapping[str, str] = COMMON_NAMES,
) -> Tuple[List[Dict[str, Any]], int, int]:
    """Return ``(tournaments, updated, skipped)`` with ``commonName`` set from ``name_map``.

    Tournaments missing from the map lose any ``commonName`` they had.
    """
    updated_count = 0
    skipped_count = 0
    out: List[Dict[str, Any]] = []
    for tournament in tournaments:
        record = dict(tournament)
        common = name_map.get(record.get("name"))
        if common is not None:
            record["commonName"] = common
            updated_count += 1
        else:
            record.pop("commonName", None)
            skipped_count += 1
        out.append(record)
    return out, updated_count, skipped_count


def add_common_names(
    path: PathLike = Path(Config.OUTPUT_DIR) / Config.TOURNAMENTS_FILE,
    name_map: Mapping[str, str] = COMMON_NAMES,
) -> Tuple[int, int]:
    tournaments_path = Path(path)
    if not tournaments_path.exists():
        raise AugmentError(
            f"File not found: {tournaments_path}. Run the ingest step first to generate tournaments.json"
        )
    tournaments = read_json(tournaments_path)
    if not isinstance(tournaments, list):
        raise AugmentError(f"{tournaments_path} does not hold a JSON array")

    logger.info("Loaded %d tournaments, %d common names in table", len(tournaments), len(name_map))
    updated, updated_count, skipped_count = apply_common_names(tournaments, name_map)
    write_json(tournaments_path, updated)
    return updated_count, skipped_count
