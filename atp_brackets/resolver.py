"""Player and tournament registries shared by every batch of one ingestion run."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from .common import normalize_court, normalize_series, normalize_surface
from .ids import Hash32IdGenerator, IdGenerator, PlayerIdAllocator
from .models import Player, Tournament

UNKNOWN_TOURNAMENT = "Unknown Tournament"
UNKNOWN_LOCATION = "Unknown Location"


class EntityResolver:
    """Assigns stable ids to players and tournaments.

    One instance lives for exactly one ingestion run and is handed to every
    batch, so a player seen in ``2023.csv`` keeps the same id in ``2024.csv``.
    Players are keyed by their exact name string: two people sharing a name
    become one player. Tournaments are keyed by ``(year, name, location)``,
    so each yearly edition is its own tournament.
    """

    def __init__(self, id_generator: Optional[IdGenerator] = None):
        self.id_generator = id_generator or Hash32IdGenerator()
        self._player_ids = PlayerIdAllocator()
        self._players: Dict[str, Player] = {}
        self._tournaments: Dict[Tuple[int, str, str], Tournament] = {}

    def resolve_player(self, name: str) -> Player:
        player = self._players.get(name)
        if player is None:
            player = Player(id=self._player_ids.allocate(name), name=name)
            self._players[name] = player
        return player

    def resolve_tournament(
        self,
        year: int,
        name: Optional[str],
        location: Optional[str],
        series: Any = None,
        court: Any = None,
        surface: Any = None,
    ) -> Tournament:
        name = name or UNKNOWN_TOURNAMENT
        location = location or UNKNOWN_LOCATION
        key = (year, name, location)
        tournament = self._tournaments.get(key)
        if tournament is None:
            tournament = Tournament(
                id=self.id_generator.tournament_id(year, name, location),
                year=year,
                name=name,
                location=location,
                series=normalize_series(series),
                court=normalize_court(court),
                surface=normalize_surface(surface),
            )
            self._tournaments[key] = tournament
        return tournament

    def match_id(self, tournament: Tournament, match_date: str, round_code: str, winner: Player, loser: Player) -> str:
        return self.id_generator.match_id(tournament.id, match_date, round_code, winner.id, loser.id)

    @property
    def players(self) -> List[Player]:
        return list(self._players.values())

    @property
    def tournaments(self) -> List[Tournament]:
        return list(self._tournaments.values())

    def players_by_id(self) -> Dict[str, Player]:
        return {player.id: player for player in self._players.values()}
