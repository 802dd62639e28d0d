from .loader import (
    TaskNotFoundError,
    TaskPrompt,
    get_task_prompt,
    list_available_tasks,
)

__all__ = ["TaskNotFoundError", "TaskPrompt", "get_task_prompt", "list_available_tasks"]
