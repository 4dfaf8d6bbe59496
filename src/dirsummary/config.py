from dataclasses import dataclass, field
from pathlib import Path
from typing import TypedDict, cast

import yaml

from .models import type_error


class RawAnalyzeDefaults(TypedDict, total=False):
    skip_folders: list[str]
    output: str | None
    show_tree: bool


class RawConfigFile(TypedDict):
    config: RawAnalyzeDefaults


CONFIG_FILENAME: Path = Path("dirsummary.yaml")


@dataclass(slots=True)
class AnalyzeConfig:
    directory: Path
    output: Path | None = None
    skip_folders: list[str] = field(default_factory=list)
    show_tree: bool = True

    @staticmethod
    def load_defaults(path: Path = CONFIG_FILENAME) -> RawAnalyzeDefaults:
        """
        Read the `config` section of a defaults file.

        Only the default file is optional: when `CONFIG_FILENAME` does not exist
        an empty mapping is returned, any other missing file is an error.
        """
        if not path.exists():
            if path == CONFIG_FILENAME:
                return {}
            raise FileNotFoundError(f"Config file {path} does not exist.")

        with path.open("r", encoding="UTF-8") as f:
            raw_loaded_obj: object | None = cast(object, yaml.safe_load(f))

        if not raw_loaded_obj:
            raise ValueError("Config file is empty or invalid YAML.")

        if not isinstance(raw_loaded_obj, dict):
            type_error(raw_loaded_obj)

        raw_dict: dict[str, object] = cast(dict[str, object], raw_loaded_obj)

        cfg_raw: object | None = raw_dict.get("config")
        if not isinstance(cfg_raw, dict):
            type_error(cfg_raw)

        cfg: dict[str, object] = cast(dict[str, object], cfg_raw)
        defaults: RawAnalyzeDefaults = {}

        if "skip_folders" in cfg:
            skip_folders: object = cfg["skip_folders"]
            if not isinstance(skip_folders, list) or not all(
                isinstance(name, str) for name in cast(list[object], skip_folders)
            ):
                type_error(skip_folders)
            defaults["skip_folders"] = cast(list[str], skip_folders)

        if "output" in cfg:
            output: object = cfg["output"]
            if output is not None and not isinstance(output, str):
                type_error(output)
            defaults["output"] = output

        if "show_tree" in cfg:
            show_tree: object = cfg["show_tree"]
            if not isinstance(show_tree, bool):
                type_error(show_tree)
            defaults["show_tree"] = show_tree

        return defaults

    @staticmethod
    def build(
        *,
        directory: Path,
        output: Path | None,
        skip_folders: list[str],
        quiet: bool,
        config_path: Path = CONFIG_FILENAME,
    ) -> "AnalyzeConfig":
        """Merge command line values over the defaults file."""
        defaults: RawAnalyzeDefaults = AnalyzeConfig.load_defaults(config_path)

        if output is None and defaults.get("output"):
            output = Path(cast(str, defaults["output"]))

        return AnalyzeConfig(
            directory=directory,
            output=output,
            skip_folders=[*defaults.get("skip_folders", []), *skip_folders],
            show_tree=defaults.get("show_tree", True) and not quiet,
        )

    def save(self, path: Path = CONFIG_FILENAME) -> None:
        raw: RawConfigFile = {"config": self.to_raw()}
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(raw, f, sort_keys=False)

    def to_raw(self) -> RawAnalyzeDefaults:
        return {
            "skip_folders": list(self.skip_folders),
            "output": str(self.output) if self.output is not None else None,
            "show_tree": self.show_tree,
        }
