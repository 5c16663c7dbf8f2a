"""Runtime configuration from the environment (and an optional .env file)."""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from anki_sentence_audio.constants import (
    DEFAULT_COLLECTION_PATH,
    DEFAULT_MEDIA_DIR,
    DEFAULT_AUDIO_LIST,
    INTER_TASK_DELAY,
    TTS_PROVIDERS,
)


@dataclass
class Config:
    """Application configuration."""

    api_key: Optional[str] = None
    collection_path: str = DEFAULT_COLLECTION_PATH
    media_directory: str = DEFAULT_MEDIA_DIR    # where synthesized audio files go
    audio_list_path: str = DEFAULT_AUDIO_LIST
    tts_provider: str = "elevenlabs"           # elevenlabs, edge
    request_delay: float = INTER_TASK_DELAY


def load_config(env_file: Optional[str] = None) -> Config:
    """Build a Config from environment variables.

    Variables from env_file (or a .env found from the working directory)
    are loaded first but never override variables already set.
    """
    load_dotenv(env_file or find_dotenv(usecwd=True))

    provider = os.environ.get("ANKI_TTS_PROVIDER", "elevenlabs").lower()
    if provider not in TTS_PROVIDERS:
        raise ValueError(f"Unknown TTS provider: {provider}")

    delay = os.environ.get("ANKI_TTS_DELAY")
    return Config(
        api_key=os.environ.get("ELEVEN_LABS_API_KEY") or None,
        collection_path=os.environ.get("ANKI_COLLECTION_PATH", DEFAULT_COLLECTION_PATH),
        media_directory=os.environ.get("ANKI_MEDIA_DIR", DEFAULT_MEDIA_DIR),
        audio_list_path=os.environ.get("ANKI_AUDIO_LIST", DEFAULT_AUDIO_LIST),
        tts_provider=provider,
        request_delay=float(delay) if delay else INTER_TASK_DELAY,
    )
