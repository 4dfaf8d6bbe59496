from .aggregate import aggregate, should_skip
from .models import DirectorySummary, FileInfo

__all__ = [
    "DirectorySummary",
    "FileInfo",
    "aggregate",
    "should_skip",
]
