import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return str(value).strip().lower() in {'1', 'true', 'yes', 'on'}


class Config:
    """Configuration for the ATP bracket data pipeline and data server"""

    # Pipeline locations
    INPUT_DIR = os.getenv('ATP_INPUT_DIR', '.')
    OUTPUT_DIR = os.getenv('ATP_OUTPUT_DIR', os.path.join('public', 'data'))
    BRACKETS_SUBDIR = 'brackets'

    # Yearly match CSV source, formatted with the season year
    CSV_URL_TEMPLATE = os.getenv(
        'ATP_CSV_URL_TEMPLATE',
        'http://www.tennis-data.co.uk/{year}/{year}.csv'
    )
    FETCH_TIMEOUT = int(os.getenv('ATP_FETCH_TIMEOUT', 45))

    # Server settings
    HOST = os.getenv('HOST', '0.0.0.0')
    PORT = int(os.getenv('PORT', 5001))
    DEBUG = _env_bool('DEBUG', False)
    QUIET_HTTP_LOGS = _env_bool('QUIET_HTTP_LOGS', True)

    # Cache settings (seconds)
    CACHE_DATA_FILES = int(os.getenv('CACHE_DATA_FILES', 60))

    # Output file names read by the browser app
    PLAYERS_FILE = 'players.json'
    TOURNAMENTS_FILE = 'tournaments.json'
    MATCHES_FILE = 'matches.json'
    DERIVED_FILE = 'derived.json'
