from __future__ import annotations

from pathlib import Path
from typing import Protocol
from urllib.parse import unquote, urlparse


class PathResolver(Protocol):
    def relpath(self, uri: str) -> str: ...

    def abspath(self, filepath: str) -> str: ...


def uri_to_fs_path(uri: str) -> str:
    parsed = urlparse(uri)
    if parsed.scheme != "file":
        return uri
    path = unquote(parsed.path)
    if parsed.netloc:
        path = f"//{parsed.netloc}{path}"
    return path


class WorkspacePaths:
    """Display paths relative to ``cwd`` when the file lives below it."""

    def __init__(self, cwd: Path) -> None:
        self.cwd = cwd.resolve()

    def relpath(self, uri: str) -> str:
        fs_path = Path(uri_to_fs_path(uri))
        if not fs_path.is_absolute():
            return fs_path.as_posix()
        try:
            return fs_path.relative_to(self.cwd).as_posix()
        except ValueError:
            return str(fs_path)

    def abspath(self, filepath: str) -> str:
        path = Path(filepath)
        return str(path if path.is_absolute() else self.cwd / path)
