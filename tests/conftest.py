"""Shared fixtures for anki sentence audio tests."""

import json
import sqlite3

import pytest

from anki_sentence_audio.constants import FIELD_SEPARATOR
from anki_sentence_audio.models import Record

MODEL_ID = 1342697561419

ENV_KEYS = [
    "ELEVEN_LABS_API_KEY",
    "ANKI_COLLECTION_PATH",
    "ANKI_MEDIA_DIR",
    "ANKI_AUDIO_LIST",
    "ANKI_TTS_PROVIDER",
    "ANKI_TTS_DELAY",
]


def make_blob(sentence, extra_fields=1):
    """Frequency-dictionary style note: 4 leading fields, sentence, then extras."""
    fields = ["slovo", "noun", "1234", "word"] + [sentence] + ["translation"] * extra_fields
    return FIELD_SEPARATOR.join(fields)


def create_collection(path, blobs, with_models=True):
    """Write a minimal Anki-shaped SQLite file. Note ids are 1..N."""
    conn = sqlite3.connect(str(path))
    conn.executescript("""
        CREATE TABLE notes (
            id INTEGER PRIMARY KEY,
            guid TEXT NOT NULL DEFAULT '',
            mid INTEGER NOT NULL,
            mod INTEGER NOT NULL,
            usn INTEGER NOT NULL DEFAULT 0,
            tags TEXT NOT NULL DEFAULT '',
            flds TEXT NOT NULL,
            sfld TEXT NOT NULL DEFAULT '',
            csum INTEGER NOT NULL DEFAULT 0,
            flags INTEGER NOT NULL DEFAULT 0,
            data TEXT NOT NULL DEFAULT ''
        );
        CREATE TABLE col (id INTEGER PRIMARY KEY, models TEXT NOT NULL);
    """)
    models = {}
    if with_models:
        models[str(MODEL_ID)] = {
            "name": "Czech Frequency Dictionary",
            "flds": [{"name": n} for n in ["Czech", "POS", "Rank", "English", "Sentence", "Translation"]],
        }
    conn.execute("INSERT INTO col (id, models) VALUES (1, ?)", (json.dumps(models),))
    conn.executemany(
        "INSERT INTO notes (id, mid, mod, flds) VALUES (?, ?, ?, ?)",
        [(i, MODEL_ID, 1000, blob) for i, blob in enumerate(blobs, start=1)],
    )
    conn.commit()
    conn.close()
    return str(path)


@pytest.fixture
def scenario_blobs():
    """A: plain sentence, B: empty sentence, C: already has audio."""
    return [
        make_blob("Dobrý den"),
        make_blob(""),
        make_blob("Ahoj [sound:old.mp3]"),
    ]


@pytest.fixture
def scenario_records(scenario_blobs):
    return [
        Record(id=i, type_id=MODEL_ID, fields_blob=blob, modified=1000)
        for i, blob in enumerate(scenario_blobs, start=1)
    ]


@pytest.fixture
def collection_path(tmp_path, scenario_blobs):
    return create_collection(tmp_path / "collection.anki21", scenario_blobs)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Unset config variables and run from an empty directory (no stray .env).

    Each key is set then deleted so monkeypatch restores it on teardown,
    including values load_dotenv() adds during the test.
    """
    for key in ENV_KEYS:
        monkeypatch.setenv(key, "unset")
        monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    return monkeypatch
