"""Configuration for todo."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, ValidationError

from todo.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE = Path(".todo.json")
DEFAULT_LIST_FILE = ".todo"
LIST_FILE_ENV = "TODO_FILE"


class TodoConfig(BaseModel):
    """Main configuration for todo."""

    list_file: str = DEFAULT_LIST_FILE
    undated_last: bool = True
    """Sort tasks without a due date after dated ones in the date view."""

    @classmethod
    def load(cls, path: Path | None = None) -> TodoConfig:
        """Load configuration from file or return defaults."""
        if path is None:
            path = CONFIG_FILE

        if not path.exists():
            return cls()

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            config = cls.model_validate(data)
        except (OSError, ValueError, ValidationError) as e:
            raise ConfigError(f"Invalid configuration in {path}: {e}") from e

        logger.debug("Loaded configuration from %s", path)
        return config

    def save(self, path: Path | None = None) -> None:
        """Save configuration to file."""
        if path is None:
            path = CONFIG_FILE

        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.model_dump(), f, indent=2)

    def list_path(self) -> Path:
        """Resolve where the task list lives.

        The TODO_FILE environment variable wins over ``list_file``.
        """
        env = os.getenv(LIST_FILE_ENV)
        if env:
            return Path(env).expanduser()
        return Path(self.list_file).expanduser()
