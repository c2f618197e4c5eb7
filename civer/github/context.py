"""Trigger context from the GitHub Actions environment.

Reads the variables the runner sets for every job together with the event
payload JSON that ``GITHUB_EVENT_PATH`` points to.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from civer.core.result import Err, Ok, Result
from civer.core.structured import StrDict, as_str_dict, get_str, get_table
from civer.version.model import (
    DispatchTrigger,
    PullRequestTrigger,
    PushTrigger,
    ReleaseTrigger,
    Repository,
    Trigger,
    TriggerContext,
    UnrecognizedTrigger,
)

__all__ = ["ContextError", "load_trigger_context", "load_event_payload", "trigger_from_event"]


@dataclass(frozen=True, slots=True)
class ContextError:
    """The CI environment is missing or malformed."""

    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message


def load_event_payload(path: Path) -> Result[StrDict, ContextError]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        return Err(ContextError(f"Cannot read event payload: {e}", hint=str(path)))

    try:
        obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(ContextError(f"Event payload is not valid JSON: {e}", hint=str(path)))

    data = as_str_dict(obj)
    if data is None:
        return Err(ContextError("Event payload must be a JSON object", hint=str(path)))
    return Ok(data)


def _dispatch_flag(value: object) -> str | None:
    # Boolean inputs show up as JSON booleans or as strings depending on
    # how the workflow was dispatched.
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value.strip()
    return None


def trigger_from_event(event_name: str, payload: Mapping[str, object]) -> Trigger:
    match event_name:
        case "release":
            release: StrDict = get_table(payload, "release") or {}
            return ReleaseTrigger(
                tag=get_str(release, "tag_name"),
                prerelease=release.get("prerelease"),
            )
        case "workflow_dispatch":
            inputs: StrDict = get_table(payload, "inputs") or {}
            return DispatchTrigger(
                version=get_str(inputs, "version"),
                will_publish=_dispatch_flag(inputs.get("will_publish_packages")),
            )
        case "push":
            return PushTrigger()
        case "pull_request":
            return PullRequestTrigger()
        case _:
            return UnrecognizedTrigger(name=event_name)


def _repository(payload: Mapping[str, object], env: Mapping[str, str]) -> Repository | None:
    repo: StrDict = get_table(payload, "repository") or {}
    owner_tbl: StrDict = get_table(repo, "owner") or {}
    owner = get_str(owner_tbl, "login")
    name = get_str(repo, "name")
    if owner and name:
        return Repository(owner=owner, name=name)

    slug = env.get("GITHUB_REPOSITORY", "").strip()
    owner, sep, name = slug.partition("/")
    if sep and owner and name:
        return Repository(owner=owner, name=name)
    return None


def _run_number(env: Mapping[str, str]) -> Result[int, ContextError]:
    raw = env.get("GITHUB_RUN_NUMBER", "").strip()
    if not raw:
        return Err(ContextError("GITHUB_RUN_NUMBER is not set", hint="run inside GitHub Actions"))
    try:
        number = int(raw)
    except ValueError:
        return Err(ContextError(f"GITHUB_RUN_NUMBER is not an integer: '{raw}'"))
    if number <= 0:
        return Err(ContextError(f"GITHUB_RUN_NUMBER must be positive: {number}"))
    return Ok(number)


def load_trigger_context(
    env: Mapping[str, str],
    *,
    default_branch: str = "main",
    event_path: Path | None = None,
) -> Result[TriggerContext, ContextError]:
    """Build a TriggerContext from runner variables and the event payload.

    Args:
        env: Environment variables (usually ``os.environ``)
        default_branch: Used when the payload does not name one
        event_path: Overrides ``GITHUB_EVENT_PATH``

    Returns:
        Ok(TriggerContext), or Err(ContextError) when required variables are
        missing or the payload cannot be read
    """
    event_name = env.get("GITHUB_EVENT_NAME", "").strip()
    if not event_name:
        return Err(ContextError("GITHUB_EVENT_NAME is not set", hint="run inside GitHub Actions"))

    ref = env.get("GITHUB_REF", "").strip()
    if not ref:
        return Err(ContextError("GITHUB_REF is not set", hint="run inside GitHub Actions"))

    run_number = _run_number(env)
    if isinstance(run_number, Err):
        return run_number

    payload: StrDict = {}
    path = event_path
    if path is None and env.get("GITHUB_EVENT_PATH"):
        path = Path(env["GITHUB_EVENT_PATH"])
    if path is not None:
        loaded = load_event_payload(path)
        if isinstance(loaded, Err):
            return loaded
        payload = loaded.value

    repo_tbl: StrDict = get_table(payload, "repository") or {}
    return Ok(
        TriggerContext(
            event=trigger_from_event(event_name, payload),
            ref=ref,
            run_number=run_number.value,
            default_branch=get_str(repo_tbl, "default_branch") or default_branch,
            repository=_repository(payload, env),
        )
    )
