"""File-name exclusion for assembly probing.

The embedding host usually sets this to its own assembly file name so that a
script engine never resolves a reference back to itself, wherever in the
search directories that file happens to live.

Example:
    exclusion = ExclusionFilter("host.dll")
    exclusion.should_exclude("/opt/app/bin/host.dll")   # True
    exclusion.should_exclude("/opt/app/bin/other.dll")  # False
"""

from __future__ import annotations

import logging
import os
from pathlib import PurePath

logger = logging.getLogger(__name__)


class ExclusionFilter:
    """A single file name that must never be returned as a resolution result.

    Contract:
    - Inputs: file_name (a bare name, not a path); "" disables the filter
    - Outputs: should_exclude(candidate) -> bool
    - Side effects: None

    The value may be reassigned by the embedding caller. Concurrent mutation
    while resolutions are running must be synchronized by that caller.
    """

    def __init__(self, file_name: str = "") -> None:
        self.file_name = file_name

    @property
    def file_name(self) -> str:
        return self._file_name

    @file_name.setter
    def file_name(self, value: str | None) -> None:
        value = value or ""
        # Only the file-name part is meaningful for comparison
        name = PurePath(value).name if value else ""
        if name != value:
            logger.debug(f"ExclusionFilter given a path ({value}), using file name '{name}'")
        self._file_name = name

    def should_exclude(self, candidate: str | os.PathLike[str]) -> bool:
        """Check whether the file name of ``candidate`` equals the excluded name.

        Comparison is exact (case-sensitive), matching on the final path
        component only.
        """
        if not self._file_name:
            return False
        return os.path.basename(os.fspath(candidate)) == self._file_name

    def __bool__(self) -> bool:
        return bool(self._file_name)

    def __repr__(self) -> str:
        return f"ExclusionFilter(file_name={self._file_name!r})"
