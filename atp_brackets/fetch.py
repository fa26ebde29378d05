"""Download yearly match CSVs into the ingestion input folder."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import requests

from .config import Config
from .storage import PathLike

logger = logging.getLogger(__name__)

MIN_YEAR = 1968
MAX_YEAR = 2100
USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


class FetchError(RuntimeError):
    pass


def build_session() -> requests.Session:
    session = requests.Session()
    session.headers.update({"User-Agent": USER_AGENT, "Accept": "text/csv,*/*;q=0.8"})
    return session


def csv_url(year: int, template: str = Config.CSV_URL_TEMPLATE) -> str:
    return template.format(year=year)


def download_year_csv(
    year: int,
    dest_dir: PathLike = Config.INPUT_DIR,
    session: Optional[Any] = None,
    timeout: int = Config.FETCH_TIMEOUT,
    template: str = Config.CSV_URL_TEMPLATE,
) -> Path:
    """Save the season's CSV as ``<dest_dir>/<year>.csv`` and return its path."""
    if year < MIN_YEAR or year > MAX_YEAR:
        raise ValueError(f"year out of supported range: {year}")

    session = session or build_session()
    source_url = csv_url(year, template)
    try:
        resp = session.get(source_url, timeout=max(5, min(timeout, 120)))
    except requests.RequestException as exc:
        raise FetchError(f"{source_url}: {exc}") from exc
    if resp.status_code != 200:
        raise FetchError(f"{source_url}: upstream returned {resp.status_code}")

    out_dir = Path(dest_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / f"{year}.csv"
    with open(out_path, "wb") as handle:
        handle.write(resp.content)
    logger.info("Saved %s (%d bytes) from %s", out_path, len(resp.content), source_url)
    return out_path
