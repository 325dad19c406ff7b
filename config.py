import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from anki import ANKI_CONNECT_URL, DEFAULT_DECK, DEFAULT_NOTE_MODEL
from lookup import DEFAULT_LOOKUP_URL


@dataclass(frozen=True)
class Settings:
    lookup_url: str = DEFAULT_LOOKUP_URL
    lookup_timeout: float | None = None
    anki_url: str = ANKI_CONNECT_URL
    deck: str = DEFAULT_DECK
    note_model: str = DEFAULT_NOTE_MODEL
    data_dir: Path = Path('~/.ankiminer').expanduser()
    log_level: str = 'WARNING'


def _optional_float(name: str) -> float | None:
    value = os.getenv(name)
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        raise ValueError(f'{name} must be a number of seconds, got "{value}"')


def load_settings() -> Settings:
    load_dotenv()

    defaults = Settings()
    return Settings(
        lookup_url=os.getenv('ANKIMINER_LOOKUP_URL', defaults.lookup_url),
        lookup_timeout=_optional_float('ANKIMINER_LOOKUP_TIMEOUT'),
        anki_url=os.getenv('ANKIMINER_ANKI_URL', defaults.anki_url),
        deck=os.getenv('ANKIMINER_DECK', defaults.deck),
        note_model=os.getenv('ANKIMINER_NOTE_MODEL', defaults.note_model),
        data_dir=Path(
            os.getenv('ANKIMINER_DATA_DIR', str(defaults.data_dir))
        ).expanduser(),
        log_level=os.getenv('ANKIMINER_LOG_LEVEL', defaults.log_level).upper(),
    )
