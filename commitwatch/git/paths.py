"""Path resolution for staging.

Paths reach the engine in whatever form the caller had at hand: absolute,
repo-relative, with or without a leading "./", or in a display form that
differs from the index by a leading dot. These helpers turn such a path
back into strings git is likely to accept. Disk existence decides; the
dot-prefixed guesses are only tried after the plain form fails.
"""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def to_repo_relative(repo_root: Path, path: str) -> str:
    """Make an absolute path repo-relative (forward slashes); leave relative paths alone."""
    if os.path.isabs(path):
        rel = os.path.relpath(path, str(repo_root))
        return rel.replace(os.sep, "/")
    return path


def _strip_dot_slash(path: str) -> str:
    return path[2:] if path.startswith("./") else path


def _dot_rooted(path: str) -> str:
    """Root the path at "." ("src/a.ts" -> "./src/a.ts")."""
    return "." + (path if path.startswith("/") else "/" + path)


def _exists(repo_root: Path, relative_path: str) -> bool:
    return os.path.exists(os.path.join(str(repo_root), relative_path))


def resolve_path(repo_root: Path, input_path: str) -> str:
    """
    Best-effort mapping of input_path to the form git expects.

    Order:
        1. plain cleaned path, if it exists on disk (or is "/")
        2. first segment dot-prefixed ("lib/x" -> ".lib/x")
        3. "."-rooted form of the whole path
        4. the cleaned path unchanged
    """
    cleaned = _strip_dot_slash(to_repo_relative(repo_root, input_path))
    if cleaned == "/" or _exists(repo_root, cleaned):
        return cleaned

    parts = cleaned.split("/")
    if parts and not parts[0].startswith("."):
        dotted_head = "/".join(["." + parts[0]] + parts[1:])
        if _exists(repo_root, dotted_head):
            logger.debug(f"Resolved {input_path!r} to {dotted_head!r}")
            return dotted_head

    if not cleaned.startswith("."):
        rooted = _dot_rooted(cleaned)
        if _exists(repo_root, rooted):
            return rooted

    return cleaned


def staging_candidates(
    repo_root: Path,
    input_path: str,
    known_changed_paths: set[str],
) -> list[str]:
    """
    Ordered, de-duplicated list of paths to try with `git add`.

    Args:
        repo_root: Repository root
        input_path: Path as supplied by the caller
        known_changed_paths: Relative and absolute forms of every path git
            currently reports as changed

    Returns:
        Candidates in the order they should be tried
    """
    rel = to_repo_relative(repo_root, input_path)
    normalized = resolve_path(repo_root, rel)

    ordered = [
        normalized,
        rel if rel in known_changed_paths else "",
        f".{rel}" if f".{rel}" in known_changed_paths else "",
    ]
    if not normalized.startswith(".") and not normalized.startswith("/"):
        ordered.append(_dot_rooted(normalized))
    if not normalized.startswith("./"):
        ordered.append(f"./{normalized}")

    candidates = []
    for candidate in ordered:
        if candidate and candidate not in candidates:
            candidates.append(candidate)
    return candidates
