"""Split and join Anki note field blobs, and handle inline sound markers."""

import re

from anki_sentence_audio.constants import (
    FIELD_SEPARATOR,
    AUDIO_FILE_PREFIX,
    SOUND_MARKER_PATTERN,
)

_SOUND_MARKER_RE = re.compile(SOUND_MARKER_PATTERN)


def split_fields(blob: str) -> list[str]:
    """Split a field blob on the unit separator.

    Empty leading/trailing fields are preserved, so join_fields() restores
    the blob exactly. The field count is not checked.
    """
    return blob.split(FIELD_SEPARATOR)


def join_fields(fields: list[str]) -> str:
    """Inverse of split_fields()."""
    return FIELD_SEPARATOR.join(fields)


def has_sound_marker(text: str) -> bool:
    return "[sound:" in text


def find_sound_marker(text: str) -> re.Match | None:
    """Return the first [sound:<file>] match in text, or None."""
    return _SOUND_MARKER_RE.search(text)


def strip_sound_marker(text: str) -> tuple[str, str] | None:
    """Split "Ahoj [sound:x.mp3]" into ("x.mp3", "Ahoj").

    Returns None if the text holds no well-formed marker.
    """
    match = find_sound_marker(text)
    if not match:
        return None
    stripped = text.replace(match.group(0), "").strip()
    return match.group(1), stripped


def add_sound_marker(text: str, filename: str) -> str:
    return f"{text} [sound:{filename}]"


def audio_filename(n: int) -> str:
    """Audio filename for the n-th (1-based) newly annotated note."""
    return f"{AUDIO_FILE_PREFIX}{n}.mp3"
