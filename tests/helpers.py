"""Row and match builders shared by the test modules."""

import csv

from atp_brackets.models import Match

CSV_FIELDS = [
    "ATP", "Location", "Tournament", "Date", "Series", "Court", "Surface", "Round",
    "Best of", "Winner", "Loser", "WRank", "LRank", "WPts", "LPts",
    "W1", "L1", "W2", "L2", "W3", "L3", "W4", "L4", "W5", "L5",
    "Wsets", "Lsets", "Comment", "B365W", "B365L",
]


def make_row(**overrides):
    """CSV row dict for a completed two-set 1st round match."""
    row = {
        "ATP": "1",
        "Location": "Brisbane",
        "Tournament": "Brisbane International",
        "Date": "01/02/24",
        "Series": "ATP250",
        "Court": "Outdoor",
        "Surface": "Hard",
        "Round": "1st Round",
        "Best of": "3",
        "Winner": "John Smith",
        "Loser": "Jane Doe",
        "WRank": "10",
        "LRank": "20",
        "WPts": "2000",
        "LPts": "1000",
        "W1": "6", "L1": "4",
        "W2": "6", "L2": "3",
        "W3": "", "L3": "",
        "W4": "", "L4": "",
        "W5": "", "L5": "",
        "Wsets": "2",
        "Lsets": "0",
        "Comment": "Completed",
        "B365W": "1.5",
        "B365L": "2.5",
    }
    row.update(overrides)
    return row


def write_csv(path, rows):
    with open(path, "w", encoding="utf-8", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)
    return path


def make_match(match_id, round_code, winner_id, loser_id, w=(6, 6), l=(4, 4), tournament_id="t1", comment=None):
    return Match(
        id=match_id,
        tournament_id=tournament_id,
        date="2024-01-07",
        round=round_code,
        best_of=3,
        winner_id=winner_id,
        loser_id=loser_id,
        w=tuple(w),
        l=tuple(l),
        wsets=2,
        lsets=0,
        comment=comment,
    )
