#!/usr/bin/env python3

"""
scaffold.py (bitefetch)

Materialize exercise records as a Cargo workspace under exercises/.

- Creates <level>/<slug>/ for every exercise
- Writes Cargo.toml and bite.md for each exercise (always overwritten)
- Writes src/lib.rs from the exercise template; an existing lib.rs is first
  renamed to lib.rs.<unix_seconds> so in-progress work is kept
- Rebuilds the workspace Cargo.toml and README.md index on every run
"""

from __future__ import annotations

import logging
import re
import textwrap
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

from bitefetch.errors import write_failed_error
from bitefetch.models import ExerciseRecord

logger = logging.getLogger(__name__)

MANIFEST_NAME = "Cargo.toml"
INSTRUCTIONS_NAME = "bite.md"
INDEX_NAME = "README.md"
STARTER_PATH = Path("src") / "lib.rs"

EDITION = "2024"
WORKSPACE_RESOLVER = "3"

# Levels listed in the README index, in display order. Exercises with any
# other level are still scaffolded but get no index link.
KNOWN_LEVELS = ("intro", "easy", "medium")

Clock = Callable[[], float]


@dataclass(frozen=True)
class ExerciseResult:
    record: ExerciseRecord
    directory: Path
    backup: Optional[Path] = None


EXERCISE_MANIFEST = textwrap.dedent(
    """\
    [package]
    name = "{slug}"
    version = "0.1.0"
    edition = "{edition}"

    [dependencies]
    """
)

EXERCISE_INSTRUCTIONS = textwrap.dedent(
    """\
    # {name}

    - Level: {level}
    - Author: {author}

    ## Instructions
    {description}
    """
)

WORKSPACE_MANIFEST = textwrap.dedent(
    """\
    [workspace]
    resolver = "{resolver}"
    members = [
    {members}]"""
)

INDEX_HEADER = textwrap.dedent(
    """\
    # Pybites Rust

    https://rustplatform.com/


    ## Exercises

    """
)

INSTRUCTIONS_PLACEHOLDER = re.compile(r"\{(name|level|author|description)\}")

INDEX_SECTION = "### Level: {level}\n{links}\n"
INDEX_LINK = "- [{path}]({path}/{instructions})\n"


# =============================================================================
# File helpers
# =============================================================================

def ensure_dir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise write_failed_error(path, e) from e


def check_utf8(path: Path, content: str) -> None:
    try:
        content.encode("utf-8")
    except UnicodeEncodeError as e:
        raise write_failed_error(path, e) from e


def write_file(path: Path, content: str) -> None:
    check_utf8(path, content)
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise write_failed_error(path, e) from e
    logger.debug("Wrote %s", path)


# =============================================================================
# Per-exercise files
# =============================================================================

def render_manifest(slug: str, libraries: str) -> str:
    # Template text is fixed; the libraries block is appended verbatim
    return EXERCISE_MANIFEST.format(slug=slug, edition=EDITION) + libraries


def write_manifest(exercise_dir: Path, slug: str, libraries: str) -> Path:
    path = exercise_dir / MANIFEST_NAME
    write_file(path, render_manifest(slug, libraries))
    return path


def render_instructions(name: str, description: str, level: str, author: str) -> str:
    # Single pass, not str.format: values are free text with braces (Rust
    # code samples) and must never be substituted again.
    values = {"name": name, "level": level, "author": author, "description": description}
    return INSTRUCTIONS_PLACEHOLDER.sub(lambda m: values[m.group(1)], EXERCISE_INSTRUCTIONS)


def write_instructions(
    exercise_dir: Path,
    name: str,
    description: str,
    level: str,
    author: str,
) -> Path:
    path = exercise_dir / INSTRUCTIONS_NAME
    write_file(path, render_instructions(name, description, level, author))
    return path


def backup_path(path: Path, timestamp: int) -> Path:
    """lib.rs -> lib.rs.<timestamp>"""
    return path.with_name(f"{path.name}.{timestamp}")


def write_starter(exercise_dir: Path, template: str, now: Clock = time.time) -> Optional[Path]:
    """
    Write src/lib.rs, backing up any existing file first.

    Backups are named with one-second resolution, so a second backup taken
    within the same second replaces the first one.

    Returns:
        Path of the backup made, or None if there was no previous lib.rs
    """
    starter = exercise_dir / STARTER_PATH
    ensure_dir(starter.parent)
    # Fail before the rename so an unwritable template never leaves
    # the exercise without a live lib.rs
    check_utf8(starter, template)

    backup = None
    if starter.exists():
        backup = backup_path(starter, int(now()))
        try:
            starter.replace(backup)
        except OSError as e:
            raise write_failed_error(backup, e) from e
        logger.info("Backed up %s -> %s", starter, backup.name)

    write_file(starter, template)
    return backup


def scaffold_exercise(root: Path, record: ExerciseRecord, now: Clock = time.time) -> ExerciseResult:
    exercise_dir = root / record.level / record.slug
    ensure_dir(exercise_dir)
    write_manifest(exercise_dir, record.slug, record.libraries)
    write_instructions(
        exercise_dir,
        record.name,
        record.description,
        record.level,
        record.author,
    )
    backup = write_starter(exercise_dir, record.template, now=now)
    return ExerciseResult(record=record, directory=exercise_dir, backup=backup)


# =============================================================================
# Workspace-level files
# =============================================================================

def render_workspace_manifest(records: Iterable[ExerciseRecord]) -> str:
    members = "".join(f'    "{record.path}",\n' for record in records)
    return WORKSPACE_MANIFEST.format(resolver=WORKSPACE_RESOLVER, members=members)


def write_workspace_manifest(root: Path, records: Sequence[ExerciseRecord]) -> Path:
    path = root / MANIFEST_NAME
    write_file(path, render_workspace_manifest(records))
    return path


def render_index(records: Sequence[ExerciseRecord]) -> str:
    sections = []
    for level in KNOWN_LEVELS:
        links = "".join(
            INDEX_LINK.format(path=record.path, instructions=INSTRUCTIONS_NAME)
            for record in records
            if record.level == level
        )
        sections.append(INDEX_SECTION.format(level=level, links=links))
    return INDEX_HEADER + "".join(sections)


def write_index(root: Path, records: Sequence[ExerciseRecord]) -> Path:
    path = root / INDEX_NAME
    write_file(path, render_index(records))
    return path


def write_all_exercises(
    root: Path,
    records: Sequence[ExerciseRecord],
    now: Clock = time.time,
) -> List[ExerciseResult]:
    """
    Scaffold every record in order, then rebuild the workspace files.

    The first I/O failure aborts the run; already written exercises are
    left as they are.
    """
    ensure_dir(root)

    unlisted = sorted({r.level for r in records if r.level not in KNOWN_LEVELS})
    if unlisted:
        logger.info("Levels not listed in %s: %s", INDEX_NAME, ", ".join(unlisted))

    results = []
    for record in records:
        logger.info("Scaffolding %s", record.path)
        results.append(scaffold_exercise(root, record, now=now))

    write_workspace_manifest(root, records)
    write_index(root, records)
    return results
