"""Read and write the <filename>|<sentence> audio list file."""

import logging
import os

from anki_sentence_audio.models import AudioTask

logger = logging.getLogger(__name__)

SEPARATOR = "|"


def write_audio_list(path: str, tasks: list[AudioTask]) -> str:
    """Write one `filename|text` line per task. Returns the path."""
    with open(path, "w", encoding="utf-8") as f:
        for task in tasks:
            f.write(f"{task.filename}{SEPARATOR}{task.text}\n")
    return path


def load_audio_list(path: str) -> list[AudioTask]:
    """Load tasks from an audio list file.

    Blank lines and lines without a separator are dropped. The text may
    itself contain "|"; only the first one splits.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Text file not found: {path}")

    tasks = []
    with open(path, encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.rstrip("\r\n")
            if not line.strip():
                continue
            if SEPARATOR not in line:
                logger.debug("Skipping line %d without separator: %r", lineno, line)
                continue
            filename, text = line.split(SEPARATOR, 1)
            tasks.append(AudioTask(filename=filename, text=text))
    return tasks
