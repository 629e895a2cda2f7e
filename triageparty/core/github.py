"""GitHub repository reference utilities."""

from __future__ import annotations

from triageparty.exceptions import InvalidRepoError

_HOST = "github.com"


def parse_repo(ref: str) -> tuple[str, str]:
    """Split a repository reference into ``(org, project)``.

    Raises :class:`InvalidRepoError` if the reference cannot be parsed.
    """
    result = _extract_org_project(ref)
    if result is None:
        raise InvalidRepoError(ref)
    return result


def _extract_org_project(ref: str) -> tuple[str, str] | None:
    """Extract org and project from a repository reference.

    Handles:
      - org/project
      - github.com/org/project
      - https://github.com/org/project
      - https://github.com/org/project.git
      - git@github.com:org/project.git
    """
    ref = ref.strip().rstrip("/")
    if ref.endswith(".git"):
        ref = ref[:-4]

    # SSH format: git@github.com:org/project
    if ref.startswith("git@"):
        host, sep, path = ref[len("git@") :].partition(":")
        if not sep or host != _HOST:
            return None
        return _split_pair(path)

    has_scheme = False
    for prefix in ("https://", "http://"):
        if ref.startswith(prefix):
            ref = ref[len(prefix) :]
            has_scheme = True
            break

    if ref.startswith(_HOST + "/"):
        ref = ref[len(_HOST) + 1 :]
    elif has_scheme:
        # A URL must point at the GitHub host
        return None
    return _split_pair(ref)


def _split_pair(path: str) -> tuple[str, str] | None:
    parts = path.split("/")
    if len(parts) == 2 and all(parts):
        return parts[0], parts[1]
    return None
