import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import cast

import yaml

from .models import DirectorySummary, RawDirectorySummary, type_error

logger: logging.Logger = logging.getLogger(__name__)


def export_to_yaml(summaries: Sequence[DirectorySummary], output_path: Path | None = None) -> None:
    """Write the summaries as a YAML list to `output_path`, or to stdout when it is None."""
    raw: list[RawDirectorySummary] = [summary.to_raw() for summary in summaries]

    if output_path is None:
        yaml.safe_dump(raw, sys.stdout, sort_keys=False, allow_unicode=True)
        return

    with output_path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(raw, f, sort_keys=False, allow_unicode=True)

    logger.debug("Report written to %s", output_path)


def load_report(path: Path) -> list[DirectorySummary]:
    with path.open("r", encoding="utf-8") as f:
        raw_loaded_obj: object | None = cast(object, yaml.safe_load(f))

    if raw_loaded_obj is None:
        raise ValueError(f"Report {path} is empty.")

    if not isinstance(raw_loaded_obj, list):
        type_error(raw_loaded_obj)

    return [DirectorySummary.from_raw(item) for item in cast(list[object], raw_loaded_obj)]
