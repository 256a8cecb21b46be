"""Assembly resolver implementations.

- DefaultAssemblyResolver: literal path, then search directories, then the
  shared runtime directory (first match wins)
- AssemblyResolver: entry point that delegates to a replaceable algorithm

The algorithm is a plain callable so an embedding host can swap the whole
probing policy without subclassing:

    resolver = AssemblyResolver(exclusion=ExclusionFilter("host.dll"))
    resolver.use_algorithm(lambda name, dirs: [f"/opt/libs/{name}.dll"])
"""

import logging
import os
from collections.abc import Callable
from collections.abc import Sequence
from typing import Literal

from .exclusion_filter import ExclusionFilter
from .path_tokens import contains_reserved_chars
from .path_tokens import remove_assembly_extension
from .probes import find_global_assembly
from .probes import find_local_assembly

logger = logging.getLogger(__name__)

ResolveAssemblyHandler = Callable[[str, Sequence[str]], list[str]]

# Which stage produced a resolution
ResolutionStage = Literal["path", "local", "shared", "none"]


class DefaultAssemblyResolver:
    """Reference probing policy.

    Resolution order:
    1. Literal path (name contains a reserved character): the name itself if
       it is an absolute path to an existing file; no directory search
    2. Search directories, in order; the first directory with a match wins
    3. Shared runtime directory, probed with the .dll/.exe-stripped name
    """

    def __init__(self, exclusion: ExclusionFilter | None = None, shared_dir: str | None = None):
        """Initialize resolver.

        Args:
            exclusion: File name that must never be resolved. Shared with the
                caller, so later reassignment of its value is observed.
            shared_dir: Override for the shared runtime directory
        """
        self.exclusion = exclusion if exclusion is not None else ExclusionFilter()
        self.shared_dir = shared_dir

    def __call__(self, name: str, search_dirs: Sequence[str]) -> list[str]:
        return self.resolve(name, search_dirs)

    def resolve(self, name: str, search_dirs: Sequence[str]) -> list[str]:
        """Resolve namespace/assembly name into existing assembly file paths."""
        paths, _stage = self.resolve_with_location(name, search_dirs)
        return paths

    def resolve_with_location(self, name: str, search_dirs: Sequence[str]) -> tuple[list[str], ResolutionStage]:
        """Resolve and report which stage produced the result.

        Returns:
            Tuple of (paths, stage); stage is one of path, local, shared, none
        """
        if not name or not name.strip():
            logger.debug("[asm:resolve] empty name, nothing to resolve")
            return ([], "none")

        if contains_reserved_chars(name):
            if self._is_existing_rooted_file(name):
                logger.debug(f"[asm:resolve] {name} -> literal path")
                return ([name], "path")
            logger.debug(f"[asm:resolve] {name} -> literal path not found")
            return ([], "none")

        for directory in search_dirs:
            if found := find_local_assembly(name, directory, self.exclusion):
                logger.debug(f"[asm:resolve] {name} -> {directory}")
                return (found, "local")

        namespace = remove_assembly_extension(name)
        if found := find_global_assembly(namespace, self.exclusion, self.shared_dir):
            logger.debug(f"[asm:resolve] {name} -> shared location")
            return (found, "shared")

        logger.debug(f"[asm:resolve] {name} -> not found in {len(search_dirs)} dir(s) or shared location")
        return ([], "none")

    def _is_existing_rooted_file(self, name: str) -> bool:
        try:
            return os.path.isabs(name) and os.path.isfile(name)
        except (OSError, ValueError) as e:
            logger.debug(f"[asm:resolve] cannot check literal path {name!r}: {e}")
            return False

    def __repr__(self) -> str:
        return f"DefaultAssemblyResolver(exclusion={self.exclusion.file_name!r}, shared_dir={self.shared_dir!r})"


class AssemblyResolver:
    """Resolution entry point for embedding hosts.

    ``find_assembly`` always goes through ``self.algorithm``; by default that is
    a :class:`DefaultAssemblyResolver` sharing this resolver's exclusion filter.
    """

    def __init__(
        self,
        exclusion: ExclusionFilter | None = None,
        shared_dir: str | None = None,
        algorithm: ResolveAssemblyHandler | None = None,
    ):
        self.exclusion = exclusion if exclusion is not None else ExclusionFilter()
        self.default = DefaultAssemblyResolver(self.exclusion, shared_dir)
        self.algorithm: ResolveAssemblyHandler = algorithm or self.default

    def find_assembly(self, name: str, search_dirs: Sequence[str]) -> list[str]:
        """Resolve namespace/assembly(file) name into assembly locations.

        Args:
            name: Namespace or assembly file name, or a rooted path
            search_dirs: Directories to probe, in priority order

        Returns:
            A new list of existing assembly file paths (possibly empty)
        """
        return list(self.algorithm(name, list(search_dirs)))

    def use_algorithm(self, algorithm: ResolveAssemblyHandler) -> None:
        """Replace the probing algorithm wholesale."""
        logger.debug(f"[asm:resolve] algorithm replaced with {algorithm!r}")
        self.algorithm = algorithm

    def reset_algorithm(self) -> None:
        """Restore the default probing algorithm."""
        self.algorithm = self.default

    @property
    def ignore_file_name(self) -> str:
        return self.exclusion.file_name

    @ignore_file_name.setter
    def ignore_file_name(self, value: str) -> None:
        self.exclusion.file_name = value

    def __repr__(self) -> str:
        return f"AssemblyResolver(algorithm={self.algorithm!r})"


_default_resolver = AssemblyResolver()


def get_default_resolver() -> AssemblyResolver:
    """Process-wide resolver used by :func:`find_assembly`."""
    return _default_resolver


def find_assembly(name: str, search_dirs: Sequence[str]) -> list[str]:
    """Resolve with the process-wide resolver."""
    return _default_resolver.find_assembly(name, search_dirs)
