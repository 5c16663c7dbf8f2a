"""Decide which notes need sentence audio and plan the field rewrites."""

import logging

from anki_sentence_audio.constants import SENTENCE_FIELD_INDEX, PROGRESS_EVERY
from anki_sentence_audio.fields import (
    split_fields,
    join_fields,
    has_sound_marker,
    strip_sound_marker,
    add_sound_marker,
    audio_filename,
)
from anki_sentence_audio.models import Record, AudioTask, PendingUpdate, UpdatePlan

logger = logging.getLogger(__name__)


def sentence_of(record: Record) -> str:
    """Trimmed sentence field of a record, or "" if the note has none.

    A note with too few fields and a note with a blank sentence are
    treated the same.
    """
    fields = split_fields(record.fields_blob)
    if len(fields) <= SENTENCE_FIELD_INDEX:
        return ""
    return fields[SENTENCE_FIELD_INDEX].strip()


def annotate(records, extract_existing: bool = False) -> UpdatePlan:
    """Scan records in order and build the update plan.

    Sentences without a sound marker get the next filename in the
    _czech_frequency_<n>.mp3 sequence appended, producing a PendingUpdate
    and an AudioTask. Sentences that already carry a marker are left alone;
    with extract_existing=True their (filename, text) pair is added to the
    task list so the audio can be regenerated.

    The filename counter starts at 1 for every call and only advances for
    newly annotated notes.
    """
    plan = UpdatePlan()
    counter = 1

    for record in records:
        plan.scanned += 1
        if plan.scanned % PROGRESS_EVERY == 0:
            logger.debug("Processed %d notes...", plan.scanned)

        sentence = sentence_of(record)
        if not sentence:
            continue

        if has_sound_marker(sentence):
            if extract_existing:
                extracted = strip_sound_marker(sentence)
                if extracted:
                    filename, text = extracted
                    plan.tasks.append(AudioTask(filename=filename, text=text))
            continue

        filename = audio_filename(counter)
        counter += 1

        fields = split_fields(record.fields_blob)
        fields[SENTENCE_FIELD_INDEX] = add_sound_marker(sentence, filename)
        plan.updates.append(PendingUpdate(
            record_id=record.id,
            original=record.fields_blob,
            updated=join_fields(fields),
            filename=filename,
        ))
        plan.tasks.append(AudioTask(filename=filename, text=sentence))

    logger.debug(
        "Scanned %d notes: %d updates, %d audio tasks",
        plan.scanned, len(plan.updates), len(plan.tasks),
    )
    return plan
