from __future__ import annotations

ROOT_SENTINEL = "root"


def extension_for_path(path: str) -> str | None:
    # Text after the last dot anywhere in the path; no dot or a trailing dot means no extension.
    if "." not in path:
        return None
    ext = path.rsplit(".", 1)[-1]
    return ext or None


def root_module_for_path(path: str) -> str:
    return path.split("/", 1)[0] or ROOT_SENTINEL


def repo_relative_path(path: str) -> str:
    p = path.strip()
    if p.startswith("./"):
        p = p[2:]
    return p
