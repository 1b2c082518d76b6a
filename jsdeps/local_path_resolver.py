"""Logic for resolving relative and repo-local import paths.

Local identifiers are resolved the way TypeScript's "classic" module
resolution does it: starting in the importing unit's directory, each
candidate path is tried with every source extension, then the search moves
one directory up until the project root is reached.
"""

import posixpath

from jsdeps.resolution_outcome import (
    Ambiguous,
    Error,
    FileOnDisk,
    Resolved,
    ResolutionOutcome,
    SelfReferential,
    Unresolved,
)
from jsdeps.try_resolve import ResolveContext, try_resolve

PACKAGE_ROOT = "."


def normalize_identifier(identifier: str) -> str:
    """Map directory and manifest shorthands to the file they stand for."""
    if identifier == "package":
        return "package.json"
    if identifier == ".":
        return "index"
    return identifier


def join_path(base: str, rel: str) -> str:
    """Join two POSIX paths and normalize the result (``""`` becomes ``"."``)."""
    return posixpath.normpath(posixpath.join(base, rel))


def candidate_paths(target: str, ctx: ResolveContext) -> list[str]:
    """Return ``target`` followed by ``target`` plus each source extension."""
    if ctx.config.is_web_asset(target):
        return [target]
    return [target + ext for ext in ("", *ctx.config.source_extensions)]


def resolve_repo_rooted(identifier: str, ctx: ResolveContext) -> ResolutionOutcome | None:
    """Try an identifier such as ``lib/util/index.ts`` as a repo-relative path."""
    if identifier.startswith((".", "/")):
        return None
    outcome = try_resolve(identifier, ctx)
    if isinstance(outcome, (Resolved, SelfReferential, Ambiguous)):
        return outcome
    return None


def resolve_local_path(identifier: str, ctx: ResolveContext) -> ResolutionOutcome:
    """Walk up from the unit's directory until a candidate path resolves.

    The walk stops at the configured ``js_root`` or at the package root,
    whichever comes first; both are checked independently.
    """
    direct = resolve_repo_rooted(identifier, ctx)
    if direct is not None:
        return direct

    name = normalize_identifier(identifier)
    tried: list[str] = []
    parents = 0

    while True:
        local_dir = join_path(ctx.unit.pkg, "../" * parents)
        if local_dir.startswith(".."):
            # Only reachable with a package path that itself climbs out.
            return Error(f"import {identifier} escapes the repository")
        target = join_path(local_dir, name)

        for file_path in candidate_paths(target, ctx):
            tried.append(file_path)
            outcome = try_resolve(file_path, ctx)

            if isinstance(outcome, Resolved):
                if ctx.config.is_web_asset(file_path):
                    return Resolved(outcome.label, data=True)
                return outcome
            if isinstance(outcome, (Ambiguous, SelfReferential, FileOnDisk)):
                return outcome

        if local_dir in (ctx.config.js_root, PACKAGE_ROOT):
            return Unresolved(identifier, tuple(tried))

        parents += 1
