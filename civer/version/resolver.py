"""Version resolution for a single CI run.

Steps run strictly in order and stop at the first error:

    classify -> [resolve_fallback -> append_ci_suffix] -> finalize

The bracketed steps only run when the event carries no explicit version.
"""

from __future__ import annotations

from civer.core.result import Err, Ok, Result
from civer.output.console import ConsoleProtocol
from civer.version.classify import classify
from civer.version.fallback import resolve_fallback
from civer.version.finalize import finalize
from civer.version.model import (
    ReleaseLookup,
    ResolutionError,
    ResolutionResult,
    TriggerContext,
)
from civer.version.suffix import append_ci_suffix


def resolve(
    context: TriggerContext,
    lookup: ReleaseLookup,
    *,
    console: ConsoleProtocol,
) -> Result[ResolutionResult, ResolutionError]:
    classified = classify(context, console=console)
    if isinstance(classified, Err):
        return classified
    decision = classified.value

    if decision.use_fallback:
        if decision.explicit_version is not None:
            return Err(
                ResolutionError(
                    kind="internal_invariant_violation",
                    message="Fallback requested although an explicit version was given",
                )
            )
        base = resolve_fallback(
            context.repository,
            lookup,
            is_for_release=decision.is_for_release,
            console=console,
        )
        if isinstance(base, Err):
            return base
        version = append_ci_suffix(
            base.value,
            ref=context.ref,
            default_branch=context.default_branch,
            run_number=context.run_number,
        )
    elif decision.explicit_version is not None:
        version = decision.explicit_version
    else:
        return Err(
            ResolutionError(
                kind="internal_invariant_violation",
                message="Did not determine the version number to use",
            )
        )

    final = finalize(version, is_for_release=decision.is_for_release, console=console)
    if isinstance(final, Err):
        return final
    return Ok(ResolutionResult(version=final.value, is_for_release=decision.is_for_release))
