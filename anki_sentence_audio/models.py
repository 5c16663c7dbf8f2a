"""Data models for note annotation and audio generation."""

from dataclasses import dataclass, field


@dataclass
class Record:
    id: int
    type_id: int
    fields_blob: str       # field values joined with FIELD_SEPARATOR
    modified: int = 0      # seconds since epoch


@dataclass
class AudioTask:
    filename: str
    text: str              # sentence with any sound marker removed


@dataclass
class PendingUpdate:
    record_id: int
    original: str
    updated: str
    filename: str          # audio file newly referenced by `updated`


@dataclass
class UpdatePlan:
    updates: list[PendingUpdate] = field(default_factory=list)
    tasks: list[AudioTask] = field(default_factory=list)
    scanned: int = 0

    @property
    def new_tasks(self) -> list[AudioTask]:
        """Tasks for files assigned in this scan (excludes extracted ones)."""
        assigned = {u.filename for u in self.updates}
        return [t for t in self.tasks if t.filename in assigned]


@dataclass
class NoteType:
    id: str
    name: str
    field_names: list[str] = field(default_factory=list)


@dataclass
class BatchResult:
    generated: list[str] = field(default_factory=list)     # written file paths
    failed: list[tuple[AudioTask, int, str]] = field(default_factory=list)
