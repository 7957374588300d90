"""Run OmniFocus JXA scripts through osascript."""

from __future__ import annotations

import json
import logging
import os
import subprocess
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from ..models import NewOmnifocusTask, OmnifocusTask, TaskQuery

logger = logging.getLogger(__name__)

JXA_DIR = Path(__file__).parent / "jxa"

_TASK = TypeAdapter(OmnifocusTask)
_TASK_LIST = TypeAdapter(list[OmnifocusTask])


class OmnifocusError(Exception):
    """Base exception for OmniFocus errors."""

    pass


class OmnifocusScriptError(OmnifocusError):
    """A JXA script failed or returned unusable output."""

    pass


def run_script(name: str, args: Any) -> Any:
    """Run a bundled JXA script and return its decoded JSON output.

    Arguments are passed as JSON in the OSA_ARGS environment variable.

    Args:
        name: Script filename in the jxa directory
        args: JSON-serializable arguments

    Raises:
        OmnifocusScriptError: osascript is missing, the script failed, or
            its output is not JSON
    """
    script = JXA_DIR / name
    env = {**os.environ, "OSA_ARGS": json.dumps(args)}
    logger.debug("Running %s: args=%s", name, args)

    try:
        result = subprocess.run(
            ["osascript", "-l", "JavaScript", str(script)],
            capture_output=True,
            text=True,
            env=env,
        )
    except FileNotFoundError as e:
        raise OmnifocusScriptError("osascript not found; OmniFocus sync requires macOS") from e

    if result.returncode != 0:
        logger.error("%s failed (exit %d): %s", name, result.returncode, result.stderr.strip())
        raise OmnifocusScriptError(f"{name} failed: {result.stderr.strip()}")

    try:
        return json.loads(result.stdout)
    except ValueError as e:
        raise OmnifocusScriptError(f"{name} returned invalid JSON: {result.stdout!r}") from e


def _parse(name: str, adapter: TypeAdapter, data: Any) -> Any:
    """Validate decoded script output against ``adapter``."""
    try:
        return adapter.validate_python(data)
    except ValidationError as e:
        raise OmnifocusScriptError(f"{name} returned unexpected output: {data!r}") from e


def tasks_for_query(query: TaskQuery) -> list[OmnifocusTask]:
    """Incomplete tasks in the query's project carrying all of its tags."""
    data = run_script("tasks_for_query.js", query.model_dump(by_alias=True))
    return _parse("tasks_for_query.js", _TASK_LIST, data)


def add_task(task: NewOmnifocusTask) -> OmnifocusTask:
    """Create a task, creating any tags it needs."""
    data = run_script("add_task.js", task.model_dump(by_alias=True))
    return _parse("add_task.js", _TASK, data)


def mark_complete(task: OmnifocusTask) -> OmnifocusTask:
    """Mark a task complete."""
    data = run_script("mark_complete.js", {"id": task.id})
    return _parse("mark_complete.js", _TASK, data)
