"""Path normalisation helpers shared by the file systems."""

from __future__ import annotations

__all__ = ["normalize_path", "parent_dirs"]


def normalize_path(path: str) -> str:
    """Collapse repeated slashes, ``.`` and ``..`` segments.

    ``..`` never climbs above the start of the path. An absolute path that
    reduces to nothing becomes ``/``; an empty or fully collapsed relative
    path becomes ``""``.
    """
    if not path:
        return ""

    absolute = path.startswith("/")
    stack: list[str] = []
    for segment in path.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if stack:
                stack.pop()
        else:
            stack.append(segment)

    out = ("/" if absolute else "") + "/".join(stack)
    return out


def parent_dirs(path: str) -> list[str]:
    """Return the ancestor directories of ``path``, shallowest first.

    The root directory and the path itself are not included.
    """
    normalized = normalize_path(path)
    if "/" not in normalized:
        return []
    parent = normalized.rsplit("/", 1)[0]
    if not parent or parent == "/":
        return []

    absolute = parent.startswith("/")
    parts = [p for p in parent.split("/") if p]
    prefix = "/" if absolute else ""
    return [prefix + "/".join(parts[: i + 1]) for i in range(len(parts))]