import logging
import os
from collections.abc import Callable, Collection
from pathlib import Path

import typer

from .models import DirectorySummary, FileInfo

logger: logging.Logger = logging.getLogger(__name__)

EnterHook = Callable[[int, Path], None]


def should_skip(name: str, skip_folders: Collection[str]) -> bool:
    """Exact, case-sensitive match of a directory base name against the skip list."""
    return any(skip == name for skip in skip_folders)


def display_path(path: str | os.PathLike[str]) -> str:
    """Text form of a path; bytes that are not valid UTF-8 become U+FFFD."""
    return os.fsencode(path).decode("utf-8", "replace")


def print_folder_tree(depth: int, path: Path) -> None:
    typer.echo(f"{'  ' * depth}{display_path(path)}")


def relative_folder(path: Path, root_path: Path) -> str:
    """
    Return `path` with the `root_path` prefix removed.

    Files that sit directly in the root get an empty string. A path that
    is not below the root is returned unchanged.
    """
    try:
        relative: Path = path.relative_to(root_path)
    except ValueError:
        return display_path(path)

    if relative == Path("."):
        return ""

    return display_path(relative)


def _entry_name(entry: os.DirEntry[str]) -> str:
    # Undecodable bytes survive os.scandir as lone surrogates
    try:
        _ = entry.name.encode("utf-8")
    except UnicodeEncodeError:
        logger.warning("Entry name in %s is not valid text, using an empty name", entry.path)
        return ""

    return entry.name


def aggregate(
    path: str | os.PathLike[str],
    skip_folders: Collection[str],
    root_path: str | os.PathLike[str],
    *,
    depth: int = 0,
    on_enter: EnterHook | None = None,
) -> DirectorySummary:
    """
    Summarize the directory at `path` and everything below it.

    Parameters
    ----------
    path : str | PathLike
        Directory to summarize, the root or any descendant of it.
    skip_folders : Collection[str]
        Directory base names that are pruned. A pruned directory becomes a
        zero-valued leaf in its parent's `subdirectories`.
    root_path : str | PathLike
        Aggregation root, passed unchanged through the recursion. Every
        `FileInfo.folder` is relative to it.
    depth : int
        Nesting level of `path` below the root, handed to `on_enter`.
    on_enter : callable, optional
        Called as ``on_enter(depth, path)`` before a non-skipped directory
        is read.

    Returns
    -------
    DirectorySummary
        Totals, the cumulative file list and the child summaries. A `path`
        that is not a directory yields an empty summary.

    Raises
    ------
    OSError
        If a directory cannot be listed or an entry cannot be stat'ed. The
        whole traversal is aborted; there are no partial results.
    """
    dir_path: Path = Path(path)
    base_path: Path = Path(root_path)

    if not dir_path.is_dir():
        logger.debug("%s is not a directory", dir_path)
        return DirectorySummary.empty(display_path(dir_path))

    if should_skip(dir_path.name, skip_folders):
        logger.debug("Skipping %s", dir_path)
        return DirectorySummary.empty(display_path(dir_path))

    if on_enter is not None:
        on_enter(depth, dir_path)

    total_size: int = 0
    file_count: int = 0
    files: list[FileInfo] = []
    subdirectories: list[DirectorySummary] = []

    with os.scandir(dir_path) as it:
        for entry in it:
            if entry.is_file(follow_symlinks=False):
                size: int = entry.stat(follow_symlinks=False).st_size

                files.append(
                    FileInfo(
                        name=_entry_name(entry),
                        size=size,
                        folder=relative_folder(dir_path, base_path),
                    )
                )
                total_size += size
                file_count += 1

            elif entry.is_dir(follow_symlinks=False):
                child: DirectorySummary = aggregate(
                    Path(entry.path),
                    skip_folders,
                    base_path,
                    depth=depth + 1,
                    on_enter=on_enter,
                )

                total_size += child.total_size
                file_count += child.file_count
                files.extend(child.files)
                subdirectories.append(child)

    logger.debug("%s: %s files, %s bytes", dir_path, file_count, total_size)

    return DirectorySummary(
        directory=display_path(dir_path),
        total_size=total_size,
        file_count=file_count,
        files=tuple(files),
        subdirectories=tuple(subdirectories),
    )
