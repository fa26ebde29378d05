import pytest

from atp_brackets.models import Player
from atp_brackets.resolver import EntityResolver


@pytest.fixture
def resolver():
    return EntityResolver()


@pytest.fixture
def players_by_id():
    names = {
        "a": "Alcaraz C.",
        "b": "Sinner J.",
        "c": "Zverev A.",
        "d": "Medvedev D.",
        "e": "Rune H.",
        "f": "Fritz T.",
    }
    return {pid: Player(id=pid, name=name) for pid, name in names.items()}
