# services/prompts/loader.py
"""
Loads the task prompts from ``configs/prompts.yaml`` and validates them with
Pydantic models. The file can contain a top-level ``prompts`` key or just the
mapping of task names -> prompt dictionaries.

Public API:
* ``get_task_prompt(name)`` - returns a validated ``TaskPrompt`` or raises
  ``TaskNotFoundError``.
* ``list_available_tasks()`` - task names, in file order.
"""

from pathlib import Path
from typing import Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from core.config import get_settings


class TaskPrompt(BaseModel):
    """Instructions for one article task."""
    system: str
    user: str
    max_tokens: Optional[int] = Field(default=None, ge=1)

    @field_validator("system", "user")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("prompt text must not be empty")
        return value

    def render(self, language: str) -> "TaskPrompt":
        """Substitute ``{language}`` in both prompts."""
        return self.model_copy(
            update={
                "system": self.system.replace("{language}", language),
                "user": self.user.replace("{language}", language),
            }
        )


class AllPrompts(BaseModel):
    """Top-level container - maps task name -> its prompts."""
    tasks: Dict[str, TaskPrompt]


# ----------------------------------------------------------------------
# Internal helpers & caching
# ----------------------------------------------------------------------
# One validated copy per file path, read on first use
_cache: Dict[Path, AllPrompts] = {}


def _load_yaml(path: Path) -> dict:
    """Read the YAML file and return the inner ``prompts`` mapping."""
    with path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
        return raw.get("prompts", raw)


def _load_all(path: Optional[Path] = None) -> AllPrompts:
    """
    Parse and validate the whole prompt file. Any problem raises pydantic's
    ``ValidationError`` naming the offending task and field.
    """
    path = Path(path or get_settings().PROMPTS_PATH)
    if path not in _cache:
        _cache[path] = AllPrompts(tasks=_load_yaml(path))
    return _cache[path]


# ----------------------------------------------------------------------
# Custom exception for a missing task
# ----------------------------------------------------------------------
class TaskNotFoundError(KeyError):
    """Raised when a requested task has no entry in the prompt file."""

    def __init__(self, task_name: str):
        super().__init__(f"Task '{task_name}' not found.")
        self.task_name = task_name


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------
def get_task_prompt(task_name: str, path: Optional[Path] = None) -> TaskPrompt:
    """
    Return the validated ``TaskPrompt`` for ``task_name``.

    Raises
    ------
    TaskNotFoundError
        If the task is not present in the YAML.
    ValidationError
        If the YAML does not conform to the schema.
    """
    all_prompts = _load_all(path)
    try:
        return all_prompts.tasks[task_name]
    except KeyError as exc:
        raise TaskNotFoundError(task_name) from exc


def list_available_tasks(path: Optional[Path] = None) -> List[str]:
    return list(_load_all(path).tasks.keys())
