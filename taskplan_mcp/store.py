"""JSON file store for tasks and planning artifacts.

The task file is a JSON array of task objects in insertion order. Every load
returns a :class:`TaskSnapshot` carrying a revision token (a digest of the
file bytes); saving requires that token and fails with
:class:`StoreConflictError` if the file changed in between. Writes go to a
temporary file in the target directory and are moved into place with
``os.replace``, so a failed write leaves the previous file intact.
"""

import hashlib
import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError

from taskplan_mcp.exceptions import StoreConflictError, StoreIOError, TaskNotFoundError
from taskplan_mcp.models.task import TaskModel

logger = logging.getLogger(__name__)


@dataclass
class TaskSnapshot:
    """Tasks as loaded from disk, plus the revision they were read at."""

    tasks: list[TaskModel] = field(default_factory=list)
    revision: str | None = None

    def find(self, task_id: str) -> TaskModel:
        """Get a task by id, compared as strings.

        Raises:
            TaskNotFoundError: if no task has that id
        """
        for task in self.tasks:
            if task.key == str(task_id):
                return task
        raise TaskNotFoundError(str(task_id))

    def replace(self, updated: TaskModel) -> None:
        """Swap in ``updated`` for the task with the same id."""
        for i, task in enumerate(self.tasks):
            if task.key == updated.key:
                self.tasks[i] = updated
                return
        raise TaskNotFoundError(updated.key)


def _digest(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def write_json_atomic(path: Path, payload: Any) -> None:
    """
    Write ``payload`` as indented JSON through a temp file and rename.

    Raises:
        StoreIOError: if the directory or file cannot be written
    """
    path = Path(path)
    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
        ) as tmp:
            tmp_name = tmp.name
            json.dump(payload, tmp, indent=2)
            tmp.write("\n")
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        logger.error(f"Error writing {path}: {e}")
        raise StoreIOError(f"Failed to write {path} - {e}") from e


def write_artifact(path: Path, artifact: BaseModel) -> None:
    """Persist a report model using its camelCase field names."""
    write_json_atomic(path, artifact.model_dump(mode="json", by_alias=True))
    logger.info(f"Wrote {type(artifact).__name__} to {path}")


def read_json(path: Path) -> Any | None:
    """Read a JSON file, or ``None`` if it does not exist.

    Raises:
        StoreIOError: if the file exists but cannot be read or parsed
    """
    path = Path(path)
    if not path.exists():
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.error(f"Error reading {path}: {e}")
        raise StoreIOError(f"Failed to read {path} - {e}") from e


class TaskStore:
    """File-backed task list."""

    def __init__(self, path: Path) -> None:
        """
        Initialize the store.

        Args:
            path: Location of the task JSON file (created on first save)
        """
        self.path = Path(path)

    def _current_revision(self) -> str | None:
        try:
            return _digest(self.path.read_bytes())
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StoreIOError(f"Failed to read {self.path} - {e}") from e

    def load(self) -> TaskSnapshot:
        """
        Load all tasks.

        A missing file is an empty task list.

        Raises:
            StoreIOError: if the file cannot be read, is not a JSON array, or
                contains a malformed task
        """
        try:
            data = self.path.read_bytes()
        except FileNotFoundError:
            logger.info(f"No task file at {self.path}, starting empty")
            return TaskSnapshot()
        except OSError as e:
            logger.error(f"Error loading tasks from {self.path}: {e}")
            raise StoreIOError(f"Failed to read {self.path} - {e}") from e

        try:
            raw = json.loads(data) if data.strip() else []
        except ValueError as e:
            logger.error(f"Error parsing tasks from {self.path}: {e}")
            raise StoreIOError(f"Failed to parse task file {self.path} - {e}") from e

        if not isinstance(raw, list):
            raise StoreIOError(f"Task file {self.path} must contain a JSON array of tasks")

        try:
            tasks = [TaskModel.model_validate(t) for t in raw]
        except ValidationError as e:
            logger.error(f"Invalid task in {self.path}: {e}")
            raise StoreIOError(f"Invalid task in {self.path} - {e}") from e

        logger.info(f"Loaded {len(tasks)} task(s) from {self.path}")
        return TaskSnapshot(tasks=tasks, revision=_digest(data))

    def save(self, tasks: list[TaskModel], revision: str | None) -> str:
        """
        Save the full task list.

        Args:
            tasks: Tasks in the order they should be stored
            revision: Revision from the snapshot the tasks were derived from

        Returns:
            The new revision

        Raises:
            StoreConflictError: if the file changed since ``revision``
            StoreIOError: if the file cannot be written
        """
        current = self._current_revision()
        if current != revision:
            raise StoreConflictError(
                f"Task file {self.path} was modified by another process; reload and try again"
            )

        payload = [t.to_store_dict() for t in tasks]
        write_json_atomic(self.path, payload)
        logger.info(f"Saved {len(tasks)} task(s) to {self.path}")
        return self._current_revision() or ""

    def commit(self, snapshot: TaskSnapshot) -> TaskSnapshot:
        """Save a snapshot's tasks and return it with the new revision."""
        snapshot.revision = self.save(snapshot.tasks, snapshot.revision)
        return snapshot
