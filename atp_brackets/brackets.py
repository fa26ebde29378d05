"""Rebuild single-elimination draws from flat match lists.

The CSVs carry no draw positions, so the tree is inferred backwards: start
at the Final and, for each match, look for the previous-round match each
player won. A player with no such match gets a ``BYE`` leaf.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .config import Config
from .models import BracketNode, Match, Player, Tournament
from .storage import PathLike, read_json, write_json

logger = logging.getLogger(__name__)

# round -> round whose matches feed into it. Round robin has no entry.
ROUND_PRECEDENCE: Dict[str, str] = {
    "F": "SF",
    "SF": "QF",
    "QF": "4R",
    "4R": "3R",
    "3R": "2R",
    "2R": "1R",
    "1R": "Q3",
    "Q3": "Q2",
    "Q2": "Q1",
}
MAX_BRACKET_DEPTH = len(ROUND_PRECEDENCE)

FINAL = "F"
ROUND_ROBIN = "RR"
BYE = "BYE"
UNKNOWN_PLAYER = "Unknown"


def format_score(w: Sequence, l: Sequence, comment: Optional[str] = None) -> str:
    score = " ".join(f"{w_games}-{l_games}" for w_games, l_games in zip(w, l))
    if comment == "Retired":
        score += " (RET)"
    return score


class BracketBuilder:
    """Builds the tree for one tournament.

    Lookups keep the first match in list order for each ``(round, winner)``
    pair, so duplicate rows resolve to whichever came first in the CSV.
    """

    def __init__(self, matches: Iterable[Match], players_by_id: Dict[str, Player]):
        self.players_by_id = players_by_id
        self._won: Dict[Tuple[str, str], Match] = {}
        for match in matches:
            self._won.setdefault((match.round, match.winner_id), match)

    def player_name(self, player_id: str) -> str:
        player = self.players_by_id.get(player_id)
        return player.name if player else UNKNOWN_PLAYER

    def previous_match(self, round_code: str, player_id: str) -> Optional[Match]:
        return self._won.get((round_code, player_id))

    def _bye(self, round_code: str, player_name: str) -> BracketNode:
        return BracketNode(
            name=player_name,
            round=round_code,
            winner_name=player_name,
            loser_name=BYE,
            score=BYE,
        )

    def build(self, match: Match) -> BracketNode:
        winner_name = self.player_name(match.winner_id)
        loser_name = self.player_name(match.loser_id)
        node = BracketNode(
            name=f"{winner_name} d. {loser_name}",
            round=match.round,
            winner_name=winner_name,
            loser_name=loser_name,
            score=format_score(match.w, match.l, match.comment),
        )

        child_round = ROUND_PRECEDENCE.get(match.round)
        if child_round is None:
            return node

        winner_prev = self.previous_match(child_round, match.winner_id)
        loser_prev = self.previous_match(child_round, match.loser_id)
        node.children = [
            self.build(winner_prev) if winner_prev else self._bye(child_round, winner_name),
            self.build(loser_prev) if loser_prev else self._bye(child_round, loser_name),
        ]
        return node


def build_bracket(final: Match, matches: Sequence[Match], players_by_id: Dict[str, Player]) -> BracketNode:
    return BracketBuilder(matches, players_by_id).build(final)


def build_tournament_bracket(
    tournament: Tournament,
    matches: Sequence[Match],
    players_by_id: Dict[str, Player],
) -> Optional[BracketNode]:
    """Tree rooted at the tournament's Final, or ``None`` when there is none.

    With several Finals the first one in list order is used.
    """
    final = next((m for m in matches if m.round == FINAL), None)
    if final is None:
        if not any(m.round == ROUND_ROBIN for m in matches):
            logger.warning("No Final found for %s (%s), skipping bracket.", tournament.name, tournament.id)
        return None
    return build_bracket(final, matches, players_by_id)


def tree_depth(node: BracketNode) -> int:
    """Longest root-to-leaf path, counted in edges."""
    if not node.children:
        return 0
    return 1 + max(tree_depth(child) for child in node.children)


def generate_brackets(
    matches: Iterable[Match],
    players: Iterable[Player],
    tournaments: Iterable[Tournament],
    bracket_dir: PathLike,
) -> int:
    """Write ``<tournamentId>.json`` for every tournament with a Final."""
    out_dir = Path(bracket_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    players_by_id = {p.id: p for p in players}
    by_tournament: Dict[str, List[Match]] = defaultdict(list)
    for match in matches:
        by_tournament[match.tournament_id].append(match)

    written = 0
    for tournament in tournaments:
        tournament_matches = by_tournament.get(tournament.id)
        if not tournament_matches:
            continue
        tree = build_tournament_bracket(tournament, tournament_matches, players_by_id)
        if tree is None:
            continue
        write_json(out_dir / f"{tournament.id}.json", tree.to_dict())
        written += 1

    logger.info("Generated %d bracket files in %s", written, out_dir)
    return written


def load_and_generate(data_dir: PathLike = Config.OUTPUT_DIR) -> int:
    """Regenerate every bracket file from the persisted JSON data files."""
    root = Path(data_dir)
    players = [Player.from_dict(p) for p in read_json(root / Config.PLAYERS_FILE)]
    tournaments = [Tournament.from_dict(t) for t in read_json(root / Config.TOURNAMENTS_FILE)]
    matches = [Match.from_dict(m) for m in read_json(root / Config.MATCHES_FILE)]
    return generate_brackets(matches, players, tournaments, root / Config.BRACKETS_SUBDIR)
