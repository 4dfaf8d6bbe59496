from dataclasses import dataclass, field
from typing import NoReturn, TypedDict, cast


class RawFileInfo(TypedDict):
    name: str
    size: int
    folder: str


class RawDirectorySummary(TypedDict):
    directory: str
    total_size: int
    file_count: int
    files: list[RawFileInfo]
    subdirectories: list["RawDirectorySummary"]


def type_error(value: object) -> NoReturn:
    raise TypeError(f"Unexpected value of wrong type: {value!r}")


def _get(raw: dict[str, object], key: str, kind: type) -> object:
    if key not in raw:
        raise TypeError(f"Missing field {key!r} in {raw!r}")

    value: object = raw[key]
    # bool is an int subclass, but never a valid size or count
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        type_error(value)

    return value


def _as_dict(raw: object) -> dict[str, object]:
    if not isinstance(raw, dict):
        type_error(raw)

    return cast(dict[str, object], raw)


@dataclass(frozen=True, slots=True)
class FileInfo:
    name: str
    size: int
    # Containing directory, relative to the aggregation root
    folder: str

    def to_raw(self) -> RawFileInfo:
        return {"name": self.name, "size": self.size, "folder": self.folder}

    @staticmethod
    def from_raw(raw: object) -> "FileInfo":
        raw_dict: dict[str, object] = _as_dict(raw)

        return FileInfo(
            name=cast(str, _get(raw_dict, "name", str)),
            size=cast(int, _get(raw_dict, "size", int)),
            folder=cast(str, _get(raw_dict, "folder", str)),
        )


@dataclass(frozen=True, slots=True)
class DirectorySummary:
    """
    Summary of one directory and everything below it.

    `files` is cumulative: it holds every file of the subtree, so a file
    shows up in the summary of each of its ancestors. `subdirectories`
    only holds the immediate children.
    """

    directory: str
    total_size: int = 0
    file_count: int = 0
    files: tuple[FileInfo, ...] = field(default_factory=tuple)
    subdirectories: tuple["DirectorySummary", ...] = field(default_factory=tuple)

    @staticmethod
    def empty(directory: str) -> "DirectorySummary":
        """Zero-valued leaf used for skipped and non-directory paths."""
        return DirectorySummary(directory=directory)

    def to_raw(self) -> RawDirectorySummary:
        return {
            "directory": self.directory,
            "total_size": self.total_size,
            "file_count": self.file_count,
            "files": [file.to_raw() for file in self.files],
            "subdirectories": [subdir.to_raw() for subdir in self.subdirectories],
        }

    @staticmethod
    def from_raw(raw: object) -> "DirectorySummary":
        raw_dict: dict[str, object] = _as_dict(raw)

        raw_files: list[object] = cast(list[object], _get(raw_dict, "files", list))
        raw_subdirs: list[object] = cast(list[object], _get(raw_dict, "subdirectories", list))

        return DirectorySummary(
            directory=cast(str, _get(raw_dict, "directory", str)),
            total_size=cast(int, _get(raw_dict, "total_size", int)),
            file_count=cast(int, _get(raw_dict, "file_count", int)),
            files=tuple(FileInfo.from_raw(item) for item in raw_files),
            subdirectories=tuple(DirectorySummary.from_raw(item) for item in raw_subdirs),
        )
