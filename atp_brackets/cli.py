#!/usr/bin/env python3
"""Command-line entry point for the ATP bracket data pipeline.

Usage:
  atp-brackets ingest [--input-dir .] [--output-dir public/data]
  atp-brackets brackets [--data-dir public/data]
  atp-brackets common-names [--data-dir public/data]
  atp-brackets fetch 2023 2024 [--input-dir .]
  atp-brackets serve [--data-dir public/data]
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .brackets import load_and_generate
from .common_names import AugmentError, add_common_names
from .config import Config
from .fetch import FetchError, build_session, download_year_csv
from .ingest import IngestError, run_ingest
from .server import run_server


def _cmd_ingest(args: argparse.Namespace) -> int:
    try:
        stats = run_ingest(args.input_dir, args.output_dir, brackets=not args.no_brackets)
    except IngestError as exc:
        print(f"[ERROR] {exc}")
        return 1

    print("========== INGEST SUMMARY ==========")
    print(f"csv files:        {', '.join(stats['files'])}")
    print(f"source rows:      {stats['rows']}")
    print(f"skipped rows:     {stats['skipped']}")
    print(f"players:          {stats['players']}")
    print(f"tournaments:      {stats['tournaments']}")
    print(f"matches:          {stats['matches']}")
    print(f"bracket files:    {stats['brackets']}")
    print(f"output dir:       {stats['output_dir']}")
    return 0


def _cmd_brackets(args: argparse.Namespace) -> int:
    try:
        count = load_and_generate(args.data_dir)
    except FileNotFoundError as exc:
        print(f"[ERROR] {exc}. Run the ingest step first.")
        return 1
    print(f"Generated {count} bracket files in {Path(args.data_dir) / Config.BRACKETS_SUBDIR}")
    return 0


def _cmd_common_names(args: argparse.Namespace) -> int:
    path = Path(args.data_dir) / Config.TOURNAMENTS_FILE
    try:
        updated, skipped = add_common_names(path)
    except AugmentError as exc:
        print(f"[ERROR] {exc}")
        return 1
    print(f"Added/updated common names for {updated} tournaments")
    print(f"{skipped} tournaments without mappings (kept original names)")
    print(f"Updated file: {path}")
    return 0


def _cmd_fetch(args: argparse.Namespace) -> int:
    session = build_session()
    failed = 0
    for year in args.years:
        try:
            path = download_year_csv(year, args.input_dir, session=session, timeout=args.timeout)
        except (FetchError, ValueError) as exc:
            print(f"[WARN] {year}: {exc}")
            failed += 1
            continue
        print(f"[{year}] saved {path}")
    return 1 if failed else 0


def _cmd_serve(args: argparse.Namespace) -> int:
    run_server(args.data_dir, host=args.host, port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="atp-brackets", description="Build ATP match JSON data and bracket trees from yearly CSVs.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("ingest", help="Ingest YYYY.csv files into JSON data files")
    p.add_argument("--input-dir", type=str, default=Config.INPUT_DIR, help="Folder holding YYYY.csv files")
    p.add_argument("--output-dir", type=str, default=Config.OUTPUT_DIR, help="Output folder")
    p.add_argument("--no-brackets", action="store_true", help="Skip bracket generation")
    p.set_defaults(func=_cmd_ingest)

    p = sub.add_parser("brackets", help="Regenerate bracket trees from existing JSON data")
    p.add_argument("--data-dir", type=str, default=Config.OUTPUT_DIR, help="Folder holding the JSON data files")
    p.set_defaults(func=_cmd_brackets)

    p = sub.add_parser("common-names", help="Merge common tournament names into tournaments.json")
    p.add_argument("--data-dir", type=str, default=Config.OUTPUT_DIR, help="Folder holding tournaments.json")
    p.set_defaults(func=_cmd_common_names)

    p = sub.add_parser("fetch", help="Download yearly CSVs")
    p.add_argument("years", type=int, nargs="+", help="Season years")
    p.add_argument("--input-dir", type=str, default=Config.INPUT_DIR, help="Destination folder")
    p.add_argument("--timeout", type=int, default=Config.FETCH_TIMEOUT, help="HTTP timeout seconds")
    p.set_defaults(func=_cmd_fetch)

    p = sub.add_parser("serve", help="Serve the JSON data files over HTTP")
    p.add_argument("--data-dir", type=str, default=Config.OUTPUT_DIR, help="Folder holding the JSON data files")
    p.add_argument("--host", type=str, default=Config.HOST)
    p.add_argument("--port", type=int, default=Config.PORT)
    p.set_defaults(func=_cmd_serve)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
