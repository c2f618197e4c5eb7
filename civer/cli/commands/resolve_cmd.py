"""Resolve command - compute and export the version of this CI build."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path

import typer

from civer.cli.context import CLIContext, build_context
from civer.core.errors import ErrorCode
from civer.core.result import Err
from civer.github.context import load_trigger_context
from civer.github.http import RealHttpClient
from civer.github.outputs import emit_result
from civer.github.releases import GitHubReleases
from civer.version.model import ReleaseLookup, ResolutionErrorKind, TriggerContext
from civer.version.resolver import resolve as resolve_version

_EXIT_CODES: dict[ResolutionErrorKind, ErrorCode] = {
    "missing_version": ErrorCode.USER_ERROR,
    "invalid_version": ErrorCode.USER_ERROR,
    "invalid_release_metadata": ErrorCode.USER_ERROR,
    "prerelease_mismatch": ErrorCode.USER_ERROR,
    "explicit_version_required": ErrorCode.USER_ERROR,
    "unexpected_build_metadata": ErrorCode.USER_ERROR,
    "release_lookup_failed": ErrorCode.NETWORK_ERROR,
    "internal_invariant_violation": ErrorCode.INTERNAL_ERROR,
}


def exit_code_for(kind: ResolutionErrorKind) -> ErrorCode:
    return _EXIT_CODES[kind]


def _token(ctx: CLIContext, explicit: str | None) -> str | None:
    if explicit:
        return explicit
    # Action inputs are exposed as INPUT_<NAME> with the name upper-cased.
    return ctx.env.get("INPUT_REPO-TOKEN") or ctx.env.get("GITHUB_TOKEN") or None


def make_lookup(ctx: CLIContext, token: str | None) -> ReleaseLookup:
    http = RealHttpClient(token=_token(ctx, token), timeout=ctx.config.github.timeout)
    api_url = ctx.env.get("GITHUB_API_URL") or ctx.config.github.api_url
    return GitHubReleases(http, api_url=api_url)


def _dump_context(ctx: CLIContext, context: TriggerContext) -> None:
    if not ctx.console.is_debug:
        return
    ctx.console.start_group("Context dump")
    for line in json.dumps(asdict(context), indent=2, default=str).splitlines():
        ctx.console.debug(line)
    ctx.console.end_group()


def resolve(
    config: Path | None = typer.Option(
        None, "--config", help="Path to civer.toml (default: ./civer.toml if present)"
    ),
    token: str | None = typer.Option(
        None, "--token", help="GitHub token (default: INPUT_REPO-TOKEN or GITHUB_TOKEN)"
    ),
    event_path: Path | None = typer.Option(
        None, "--event-path", help="Event payload JSON (overrides GITHUB_EVENT_PATH)"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Print the outputs instead of exporting them"
    ),
    debug: bool = typer.Option(False, "--debug", help="Show debug diagnostics"),
) -> None:
    """Resolve the version of this CI build and export it to later steps."""
    ctx = build_context(config_path=config, debug=debug)
    console = ctx.console

    loaded = load_trigger_context(
        ctx.env,
        default_branch=ctx.config.resolve.default_branch,
        event_path=event_path,
    )
    if isinstance(loaded, Err):
        console.error(loaded.error.pretty())
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
    context = loaded.value
    _dump_context(ctx, context)

    resolved = resolve_version(context, make_lookup(ctx, token), console=console)
    if isinstance(resolved, Err):
        console.error(resolved.error.pretty())
        raise typer.Exit(code=int(exit_code_for(resolved.error.kind)))
    result = resolved.value

    purpose = "build and release" if result.is_for_release else "build"
    console.info(f"Configuring build environment to {purpose} version {result.version_string}")

    emitted = emit_result(result, ctx.env, ctx.config.outputs, dry_run=dry_run)
    if isinstance(emitted, Err):
        console.error(emitted.error.pretty())
        raise typer.Exit(code=int(ErrorCode.IO_ERROR))

    for line in emitted.value:
        typer.echo(line)
