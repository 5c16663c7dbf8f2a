"""Two-phase note update: compute a plan, then commit it."""

import sqlite3

from anki_sentence_audio.annotator import annotate
from anki_sentence_audio.constants import SENTENCE_FIELD_INDEX, SAMPLE_UPDATES
from anki_sentence_audio.fields import split_fields
from anki_sentence_audio.models import UpdatePlan
from anki_sentence_audio.store import list_records, apply_updates


def compute_updates(conn: sqlite3.Connection, extract_existing: bool = False) -> UpdatePlan:
    """Scan every note and return the plan. Nothing is written."""
    return annotate(list_records(conn), extract_existing=extract_existing)


def commit(conn: sqlite3.Connection, plan: UpdatePlan) -> int:
    """Apply the plan's updates in a single transaction. Returns the count."""
    if not plan.updates:
        return 0
    return apply_updates(conn, plan.updates)


def describe_plan(plan: UpdatePlan, samples: int = SAMPLE_UPDATES) -> None:
    """Print plan totals and a preview of the first few modifications."""
    print(f"\nFound {len(plan.updates)} notes to update with audio references")
    print(f"Found {len(plan.tasks)} total audio entries (including existing)")

    if not plan.updates or not samples:
        return

    print("Sample modifications:")
    for update in plan.updates[:samples]:
        before = split_fields(update.original)
        after = split_fields(update.updated)
        print(f"\nNote {update.record_id}:")
        print(f"  Sentence (original): {before[SENTENCE_FIELD_INDEX]}")
        print(f"  Sentence (modified): {after[SENTENCE_FIELD_INDEX]}")
        print(f"  Audio file: {update.filename}")
