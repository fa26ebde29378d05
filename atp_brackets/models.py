"""Record types written to the JSON data files.

``to_dict`` produces the exact shape the browser app reads: camelCase keys,
and optional fields left out entirely when unknown.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

Number = Union[int, float]


def _drop_none(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in payload.items() if value is not None}


@dataclass
class Player:
    id: str
    name: str
    aliases: Optional[List[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({"id": self.id, "name": self.name, "aliases": self.aliases})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        return cls(id=data["id"], name=data["name"], aliases=data.get("aliases"))


@dataclass
class Tournament:
    id: str
    year: int
    name: str
    location: str
    series: str
    court: str
    surface: str
    common_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none(
            {
                "id": self.id,
                "year": self.year,
                "name": self.name,
                "location": self.location,
                "series": self.series,
                "court": self.court,
                "surface": self.surface,
                "commonName": self.common_name,
            }
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tournament":
        return cls(
            id=data["id"],
            year=int(data["year"]),
            name=data["name"],
            location=data["location"],
            series=data["series"],
            court=data["court"],
            surface=data["surface"],
            common_name=data.get("commonName"),
        )


@dataclass(frozen=True)
class Match:
    id: str
    tournament_id: str
    date: str
    round: str
    best_of: int
    winner_id: str
    loser_id: str
    w: Tuple[int, ...]
    l: Tuple[int, ...]
    wsets: Number
    lsets: Number
    w_rank: Optional[Number] = None
    l_rank: Optional[Number] = None
    w_pts: Optional[Number] = None
    l_pts: Optional[Number] = None
    comment: Optional[str] = None

    def __post_init__(self):
        if len(self.w) != len(self.l):
            raise ValueError(f"match {self.id}: {len(self.w)} winner sets vs {len(self.l)} loser sets")

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none(
            {
                "id": self.id,
                "tournamentId": self.tournament_id,
                "date": self.date,
                "round": self.round,
                "bestOf": self.best_of,
                "winnerId": self.winner_id,
                "loserId": self.loser_id,
                "wRank": self.w_rank,
                "lRank": self.l_rank,
                "wPts": self.w_pts,
                "lPts": self.l_pts,
                "w": list(self.w),
                "l": list(self.l),
                "wsets": self.wsets,
                "lsets": self.lsets,
                "comment": self.comment,
            }
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        return cls(
            id=data["id"],
            tournament_id=data["tournamentId"],
            date=data["date"],
            round=data["round"],
            best_of=data["bestOf"],
            winner_id=data["winnerId"],
            loser_id=data["loserId"],
            w=tuple(data.get("w") or ()),
            l=tuple(data.get("l") or ()),
            wsets=data.get("wsets", 0),
            lsets=data.get("lsets", 0),
            w_rank=data.get("wRank"),
            l_rank=data.get("lRank"),
            w_pts=data.get("wPts"),
            l_pts=data.get("lPts"),
            comment=data.get("comment"),
        )


@dataclass(frozen=True)
class Derived:
    match_id: str
    sets_played: Number
    straight_sets: bool
    has_tiebreak: bool
    rank_diff: Optional[Number] = None
    pts_diff: Optional[Number] = None
    total_games: Optional[int] = None
    upset: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none(
            {
                "matchId": self.match_id,
                "rankDiff": self.rank_diff,
                "ptsDiff": self.pts_diff,
                "totalGames": self.total_games,
                "setsPlayed": self.sets_played,
                "straightSets": self.straight_sets,
                "hasTiebreak": self.has_tiebreak,
                "upset": self.upset,
            }
        )


@dataclass
class BracketNode:
    name: str
    round: str
    winner_name: str
    loser_name: str
    score: str
    children: List["BracketNode"] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "attributes": {
                "round": self.round,
                "winnerName": self.winner_name,
                "loserName": self.loser_name,
                "score": self.score,
            },
            "children": [child.to_dict() for child in self.children],
        }
