"""Load and save the task list as JSON."""

from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from todo.errors import StorageError
from todo.models import Task, TaskList

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


class TaskListDocument(BaseModel):
    """On-disk shape of the task list."""

    version: int = FORMAT_VERSION
    tasks: list[Task] = Field(default_factory=list)


def load_tasks(path: Path) -> TaskList:
    """Load the task list from ``path``.

    A missing file is an empty list. Anything else that goes wrong raises
    StorageError.
    """
    if not path.exists():
        logger.debug("No task list at %s; starting empty", path)
        return TaskList()

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise StorageError(f"Cannot read {path}: {e}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise StorageError(f"Corrupt task list {path}: {e}") from e

    # Bare lists are accepted as a list of task objects
    if isinstance(data, list):
        data = {"tasks": data}

    try:
        document = TaskListDocument.model_validate(data)
    except ValidationError as e:
        raise StorageError(f"Invalid task list {path}: {e}") from e

    if document.version > FORMAT_VERSION:
        raise StorageError(
            f"Task list {path} has format version {document.version}; "
            f"this version of todo reads up to {FORMAT_VERSION}"
        )

    logger.debug("Loaded %d tasks from %s", len(document.tasks), path)
    return TaskList(document.tasks)


def _file_mode(path: Path) -> int:
    """Permission bits for a saved list: the existing file's, else the umask default."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def save_tasks(task_list: TaskList, path: Path) -> None:
    """Write the task list to ``path``, replacing what was there.

    The document goes to a temporary file in the same directory which is then
    renamed over the target, so readers see either the old or the new list.
    """
    document = TaskListDocument(tasks=list(task_list))
    payload = json.dumps(document.model_dump(mode="json"), indent=2) + "\n"

    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
        os.chmod(tmp_name, _file_mode(path))
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as e:
        raise StorageError(f"Cannot write {path}: {e}") from e
    finally:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)

    logger.debug("Saved %d tasks to %s", len(document.tasks), path)
