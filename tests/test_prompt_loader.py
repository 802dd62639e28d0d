# tests/test_prompt_loader.py
"""
Tests for ``services.prompts.loader``.

The loader returns validated ``TaskPrompt`` models, so the tests use attribute
access (``prompt.system``) rather than key lookups.
"""

import pydantic
import pytest

from services.prompts import TaskNotFoundError, TaskPrompt, get_task_prompt, list_available_tasks

TASKS = ["summary", "thesis", "telegram", "translate", "illustration"]


def test_every_task_has_prompts():
    assert list_available_tasks() == TASKS

    for name in list_available_tasks():
        prompt: TaskPrompt = get_task_prompt(name)
        assert prompt.system, f"{name} missing system prompt"
        assert prompt.user, f"{name} missing user prompt"


def test_language_placeholder_is_rendered():
    rendered = get_task_prompt("summary").render("Russian")
    assert "{language}" not in rendered.system
    assert "{language}" not in rendered.user
    assert "Russian" in rendered.system


def test_render_does_not_touch_the_cached_prompt():
    get_task_prompt("translate").render("German")
    assert "{language}" in get_task_prompt("translate").user


def test_illustration_prompt_token_budget():
    assert get_task_prompt("illustration").max_tokens == 500
    # the other tasks fall back to the client default
    assert get_task_prompt("summary").max_tokens is None


def test_unknown_task():
    with pytest.raises(TaskNotFoundError) as exc_info:
        get_task_prompt("haiku")
    assert exc_info.value.task_name == "haiku"


def test_custom_file_without_top_level_key(tmp_path):
    path = tmp_path / "prompts.yaml"
    path.write_text(
        "digest:\n"
        "  system: Summarise for {language} readers.\n"
        "  user: Digest please\n",
        encoding="utf-8",
    )

    assert list_available_tasks(path) == ["digest"]
    prompt = get_task_prompt("digest", path).render("French")
    assert prompt.system == "Summarise for French readers."


def test_blank_prompt_is_rejected(tmp_path):
    path = tmp_path / "prompts.yaml"
    path.write_text(
        "prompts:\n"
        "  summary:\n"
        "    system: '   '\n"
        "    user: Summarise\n",
        encoding="utf-8",
    )

    with pytest.raises(pydantic.ValidationError):
        get_task_prompt("summary", path)
