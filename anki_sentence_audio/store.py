"""Read and update notes in an Anki collection (SQLite)."""

import json
import logging
import os
import sqlite3
import time

from anki_sentence_audio.constants import SAMPLE_NOTES
from anki_sentence_audio.models import Record, NoteType, PendingUpdate

logger = logging.getLogger(__name__)


def open_collection(path: str) -> sqlite3.Connection:
    """Open an existing collection file.

    Raises FileNotFoundError if path does not exist; sqlite3 would
    otherwise create an empty database there.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Database not found at: {path}")
    conn = sqlite3.connect(path)
    conn.row_factory = sqlite3.Row
    return conn


def _to_record(row: sqlite3.Row) -> Record:
    return Record(id=row["id"], type_id=row["mid"], fields_blob=row["flds"], modified=row["mod"])


def list_records(conn: sqlite3.Connection) -> list[Record]:
    """All notes, ordered by id so filename numbering is stable."""
    rows = conn.execute("SELECT id, mid, flds, mod FROM notes ORDER BY id").fetchall()
    return [_to_record(row) for row in rows]


def sample_records(conn: sqlite3.Connection, limit: int = SAMPLE_NOTES) -> list[Record]:
    rows = conn.execute(
        "SELECT id, mid, flds, mod FROM notes ORDER BY id LIMIT ?", (limit,)
    ).fetchall()
    return [_to_record(row) for row in rows]


def count_records(conn: sqlite3.Connection) -> int:
    return conn.execute("SELECT COUNT(*) FROM notes").fetchone()[0]


def load_note_types(conn: sqlite3.Connection) -> list[NoteType]:
    """Parse the note type definitions stored as JSON in col.models."""
    row = conn.execute("SELECT models FROM col").fetchone()
    if row is None or not row["models"]:
        return []
    models = json.loads(row["models"])
    note_types = []
    for model_id, model in models.items():
        if "name" not in model:
            continue
        field_names = [f["name"] for f in model.get("flds", []) if "name" in f]
        note_types.append(NoteType(id=model_id, name=model["name"], field_names=field_names))
    return note_types


def apply_updates(
    conn: sqlite3.Connection,
    updates: list[PendingUpdate],
    now: int | None = None,
) -> int:
    """Write all updates in one transaction and stamp their mod time.

    Either every update commits or none does. Callers are responsible for
    getting the operator's confirmation first.
    """
    if now is None:
        now = int(time.time())
    with conn:
        conn.executemany(
            "UPDATE notes SET flds = ?, mod = ? WHERE id = ?",
            [(u.updated, now, u.record_id) for u in updates],
        )
    logger.debug("Committed %d note updates at %d", len(updates), now)
    return len(updates)
