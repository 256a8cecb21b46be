"""Directory probes for assembly resolution.

- find_local_assembly: extension-priority search of a single directory
- find_global_assembly: the same search against the shared runtime directory

Probes never raise for a missing file or a malformed name; every failure site
degrades to an empty result.
"""

import logging
import os
from pathlib import Path
from pathlib import PurePath

from .exclusion_filter import ExclusionFilter
from .path_tokens import extension_priority

logger = logging.getLogger(__name__)


def _join(directory: str | os.PathLike[str], name: str) -> Path | None:
    """Combine directory and name, or None if either cannot form a path."""
    try:
        return Path(directory) / name
    except TypeError as e:
        logger.debug(f"[asm:probe] cannot combine {directory!r} and {name!r}: {e}")
        return None


def _directory_exists(path: Path) -> bool:
    try:
        return path.is_dir()
    except (OSError, ValueError) as e:
        logger.debug(f"[asm:probe] directory check failed for {path}: {e}")
        return False


def _file_exists(path: Path) -> bool:
    try:
        return path.is_file()
    except (OSError, ValueError) as e:
        logger.debug(f"[asm:probe] file check failed for {path}: {e}")
        return False


def _has_directory_part(name: str) -> bool:
    return PurePath(name).name != name


def find_local_assembly(
    name: str,
    directory: str | os.PathLike[str],
    exclusion: ExclusionFilter | None = None,
) -> list[str]:
    """Resolve a namespace/assembly name within one directory.

    Only the first match is returned, but the result is a list so that a name
    standing for several assembly files can be supported later.

    Args:
        name: Namespace or assembly file name; may contain subdirectory parts
        directory: Directory to probe
        exclusion: File name that must never be returned

    Returns:
        ``[absolute_path]`` for the first existing candidate, otherwise ``[]``
    """
    if exclusion is None:
        exclusion = ExclusionFilter()

    if not name or not directory:
        return []

    asm_file = _join(directory, name)
    if asm_file is None:
        return []

    # "name" may carry its own subdirectory parts, so check the joined parent
    # rather than "directory" itself
    if not _directory_exists(asm_file.parent):
        logger.debug(f"[asm:probe] {name} -> no directory {asm_file.parent}")
        return []

    for ext in extension_priority(name):
        candidate = Path(f"{asm_file}{ext}")
        if exclusion.should_exclude(candidate):
            logger.debug(f"[asm:probe] {name} -> skipping excluded {candidate.name}")
            continue
        if _file_exists(candidate):
            logger.debug(f"[asm:probe] {name} -> {candidate}")
            return [os.path.abspath(candidate)]

    if _has_directory_part(name) and not exclusion.should_exclude(asm_file) and _file_exists(asm_file):
        logger.debug(f"[asm:probe] {name} -> raw path {asm_file}")
        return [os.path.abspath(asm_file)]

    return []


def shared_runtime_dir() -> Path | None:
    """Directory holding the running interpreter's own standard library.

    This is the closest analogue of a global shared-modules location for a
    Python host. Returns None if it cannot be determined (frozen builds).
    """
    location = getattr(os, "__file__", None)
    if not location:
        logger.debug("[asm:shared] interpreter standard library location unknown")
        return None
    return Path(location).parent


def find_global_assembly(
    namespace: str,
    exclusion: ExclusionFilter | None = None,
    shared_dir: str | os.PathLike[str] | None = None,
) -> list[str]:
    """Resolve a namespace against the shared runtime directory.

    There is no global assembly registry to query, so this only probes one
    directory: ``shared_dir`` when given, otherwise :func:`shared_runtime_dir`.

    Returns:
        ``[absolute_path]`` or ``[]``; never raises
    """
    directory = shared_dir if shared_dir is not None else shared_runtime_dir()
    if directory is None:
        return []
    return find_local_assembly(namespace, directory, exclusion)
