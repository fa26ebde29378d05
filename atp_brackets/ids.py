"""Identifier generation for players, tournaments and matches."""

from __future__ import annotations

from typing import Dict, Set

from .common import slugify

INT32_MASK = 0xFFFFFFFF
INT32_SIGN = 0x80000000


def _utf16_units(text: str):
    raw = text.encode("utf-16-le")
    for idx in range(0, len(raw), 2):
        yield raw[idx] | (raw[idx + 1] << 8)


def java_string_hash(text: str) -> int:
    """Absolute value of the 32-bit ``h = h * 31 + c`` string hash.

    Runs over UTF-16 code units so ids stay identical to the ones the
    browser app already links to. Not collision-free: ``"Aa"`` and ``"BB"``
    hash the same.
    """
    h = 0
    for unit in _utf16_units(text):
        h = (h * 31 + unit) & INT32_MASK
    if h & INT32_SIGN:
        h -= 1 << 32
    return abs(h)


class IdGenerator:
    """Builds tournament and match ids from their composite keys.

    Subclasses only decide how a key string is digested.
    """

    tournament_prefix = "t"
    match_prefix = "m"

    def digest(self, key: str) -> str:
        raise NotImplementedError

    def tournament_id(self, year: int, name: str, location: str) -> str:
        return self.tournament_prefix + self.digest(f"{year}-{name}-{location}")

    def match_id(self, tournament_id: str, match_date: str, round_code: str, winner_id: str, loser_id: str) -> str:
        key = f"{tournament_id}-{match_date}-{round_code}-{winner_id}-{loser_id}"
        return self.match_prefix + self.digest(key)


class Hash32IdGenerator(IdGenerator):
    def digest(self, key: str) -> str:
        return str(java_string_hash(key))


class PlayerIdAllocator:
    """Hands out slug-based player ids: ``john-smith``, then ``john-smith-1`` ...

    Counters only grow, so a suffix is never handed out twice within a run.
    """

    fallback = "player"

    def __init__(self):
        self._counts: Dict[str, int] = {}
        self._issued: Set[str] = set()

    def allocate(self, name: str) -> str:
        base = slugify(name) or self.fallback
        if base not in self._counts:
            self._counts[base] = 0
            if base not in self._issued:
                self._issued.add(base)
                return base
        while True:
            self._counts[base] += 1
            candidate = f"{base}-{self._counts[base]}"
            if candidate not in self._issued:
                self._issued.add(candidate)
                return candidate
