"""Task list data model.

A TaskList is an ordered sequence of tasks. Insertion order is the canonical
(and persisted) order. Users address tasks by 1-based position; positions are
recomputed from the current order on every call, so there are no stable task
IDs.

Nothing in this module touches the filesystem, logs, or reads configuration.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from datetime import date, datetime
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, field_validator

from todo.errors import InvalidDate, InvalidInput, OutOfRange

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_due_date(value: str | date | None) -> date | None:
    """Parse a due-date literal in YYYY-MM-DD form.

    None and the empty string mean "no due date". A date is returned as is.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not DATE_PATTERN.match(text):
        raise InvalidDate(f"Invalid date '{value}'. Use YYYY-MM-DD.")
    try:
        return date.fromisoformat(text)
    except ValueError as e:
        raise InvalidDate(f"Invalid date '{value}': {e}") from e


class Task(BaseModel):
    """A single item on the list."""

    model_config = ConfigDict(frozen=True)

    description: str
    due_date: date | None = None

    @field_validator("description")
    @classmethod
    def _description_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("description must not be empty")
        return value

    @field_validator("due_date", mode="before")
    @classmethod
    def _due_date_iso(cls, value: object) -> date | None:
        if value is not None and not isinstance(value, (str, date)):
            raise ValueError(f"due_date must be a YYYY-MM-DD string, got {value!r}")
        try:
            return parse_due_date(value)
        except InvalidDate as e:
            raise ValueError(str(e)) from e

    def __str__(self) -> str:
        if self.due_date is None:
            return self.description
        return f"{self.description} (due {self.due_date.isoformat()})"


class PositionedTask(NamedTuple):
    """A task paired with its 1-based position in insertion order."""

    position: int
    task: Task


class TaskList:
    """Ordered collection of tasks, mutated only by add, remove and move.

    Every mutation validates its arguments before touching the list, so a
    failed call leaves the list unchanged.
    """

    def __init__(self, tasks: list[Task] | None = None) -> None:
        self._tasks: list[Task] = list(tasks) if tasks else []

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TaskList):
            return NotImplemented
        return self._tasks == other._tasks

    def __repr__(self) -> str:
        return f"TaskList({self._tasks!r})"

    def _check_position(self, position: int, upper: int) -> None:
        if not 1 <= position <= upper:
            if upper == 0:
                raise OutOfRange(f"Position {position} is out of range: the list is empty.")
            raise OutOfRange(f"Position {position} is out of range. Must be 1-{upper}.")

    def add(
        self,
        description: str,
        due_date: str | date | None = None,
        position: int | None = None,
    ) -> Task:
        """Add a task and return it.

        The task is appended unless ``position`` is given, in which case it is
        inserted there (1 to length + 1) and later tasks shift up by one.
        """
        if description is None or not description.strip():
            raise InvalidInput("Task description must not be empty.")
        due = parse_due_date(due_date)
        if position is not None:
            self._check_position(position, len(self._tasks) + 1)

        task = Task(description=description, due_date=due)
        if position is None:
            self._tasks.append(task)
        else:
            self._tasks.insert(position - 1, task)
        return task

    def remove(self, position: int) -> Task:
        """Remove and return the task at ``position``; later tasks shift down."""
        self._check_position(position, len(self._tasks))
        return self._tasks.pop(position - 1)

    def move(self, from_position: int, to_position: int) -> None:
        """Move the task at ``from_position`` so it ends up at ``to_position``.

        The task is taken out first and then inserted at ``to_position`` in the
        shortened list, so [A, B, C] with move(1, 2) gives [B, A, C].
        """
        self._check_position(from_position, len(self._tasks))
        self._check_position(to_position, len(self._tasks))
        if from_position == to_position:
            return

        task = self._tasks.pop(from_position - 1)
        self._tasks.insert(to_position - 1, task)

    def in_insertion_order(self) -> list[PositionedTask]:
        """Return the tasks in stored order with their positions."""
        return [PositionedTask(i, task) for i, task in enumerate(self._tasks, 1)]

    def by_due_date(self, undated_last: bool = True) -> list[PositionedTask]:
        """Return the tasks sorted ascending by due date.

        Tasks sharing a due date keep their insertion order. Undated tasks go
        after every dated task, or before them with ``undated_last=False``.
        Positions still refer to insertion order.
        """
        undated_rank = 1 if undated_last else 0
        dated_rank = 1 - undated_rank

        def sort_key(entry: PositionedTask) -> tuple[int, date]:
            due = entry.task.due_date
            if due is None:
                return (undated_rank, date.min)
            return (dated_rank, due)

        # sorted() is stable, so equal keys keep insertion order
        return sorted(self.in_insertion_order(), key=sort_key)
