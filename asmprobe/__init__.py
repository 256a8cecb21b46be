"""Resolve namespace and assembly references to existing assembly files.

Resolution order (first match wins):
1. Literal rooted path (names containing reserved path characters)
2. Caller-supplied search directories, probed in order
3. Shared runtime directory
"""

from .exclusion_filter import ExclusionFilter
from .path_tokens import contains_reserved_chars
from .path_tokens import get_extension
from .path_tokens import is_legal_path_token
from .path_tokens import remove_assembly_extension
from .probes import find_global_assembly
from .probes import find_local_assembly
from .resolvers import AssemblyResolver
from .resolvers import DefaultAssemblyResolver
from .resolvers import ResolveAssemblyHandler
from .resolvers import find_assembly
from .resolvers import get_default_resolver

__all__ = [
    "AssemblyResolver",
    "DefaultAssemblyResolver",
    "ExclusionFilter",
    "ResolveAssemblyHandler",
    "contains_reserved_chars",
    "find_assembly",
    "find_global_assembly",
    "find_local_assembly",
    "get_default_resolver",
    "get_extension",
    "is_legal_path_token",
    "remove_assembly_extension",
]
