"""
models.py - Exercise records as delivered by the Pybites Rust API

Each record is one "bite": a small Rust exercise with a starter template.
Records are decoded once per run and never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, List, Mapping

from bitefetch.errors import RecordDecodeError, missing_fields_error


@dataclass(frozen=True)
class ExerciseRecord:
    """One exercise descriptor from the API"""
    name: str
    slug: str
    description: str
    level: str
    template: str
    libraries: str
    author: str

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], index: int = 0) -> "ExerciseRecord":
        """Build a record from a decoded JSON object, ignoring unknown keys."""
        if not isinstance(data, Mapping):
            raise RecordDecodeError(
                message=f"Exercise record #{index} is not a JSON object",
                context={"type": type(data).__name__},
            )

        names = cls.field_names()
        missing = [name for name in names if data.get(name) is None]
        if missing:
            raise missing_fields_error(index, missing)

        values = {name: str(data[name]) for name in names}
        unencodable = [name for name, value in values.items() if not _is_utf8(value)]
        if unencodable:
            raise RecordDecodeError(
                message=f"Exercise record #{index} contains text that is not valid UTF-8",
                context={"fields": unencodable},
            )

        return cls(**values)

    @property
    def path(self) -> str:
        """Workspace member path, e.g. "intro/hello"."""
        return f"{self.level}/{self.slug}"


def _is_utf8(value: str) -> bool:
    # JSON allows lone surrogate escapes such as "\ud800"
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def parse_records(payload: Any) -> List[ExerciseRecord]:
    """Turn the decoded JSON array into records, keeping API order."""
    if not isinstance(payload, list):
        raise RecordDecodeError(
            message="Expected a JSON array of exercises",
            context={"type": type(payload).__name__},
        )
    return [ExerciseRecord.from_dict(item, index) for index, item in enumerate(payload)]
