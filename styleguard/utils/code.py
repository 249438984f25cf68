"""Source file discovery."""

from __future__ import annotations

from fnmatch import fnmatch
from pathlib import Path
from typing import Generator, Iterable, List, Sequence


def iter_code_files(root_paths: Iterable[str], extensions: tuple[str, ...] = (".swift",)) -> Generator[Path, None, None]:
    """Yield code files beneath the provided directories, in sorted order."""

    for root in root_paths:
        for path in sorted(Path(root).rglob("*")):
            if path.suffix in extensions and path.is_file():
                yield path


def _excluded(path: Path, patterns: Sequence[str]) -> bool:
    posix = path.as_posix()
    return any(fnmatch(posix, pattern) or fnmatch(path.name, pattern) for pattern in patterns)


def resolve_inputs(
    paths: Iterable[str],
    extensions: tuple[str, ...] = (".swift",),
    exclude: Sequence[str] = (),
) -> List[Path]:
    """Expand directories and drop excluded or duplicate paths.

    Explicit file arguments are kept even when they do not exist, so the
    engine can report them as unreadable.
    """

    resolved: List[Path] = []
    seen = set()
    for raw in paths:
        root = Path(raw)
        candidates = iter_code_files([raw], extensions) if root.is_dir() else [root]
        for path in candidates:
            key = path.as_posix()
            if key in seen or _excluded(path, exclude):
                continue
            seen.add(key)
            resolved.append(path)
    return resolved
