"""Classification of resolution inputs as literal paths or symbolic names.

A symbolic name (``System.Xml``, ``MyLib.dll``, ``sub/Tool``) can never contain
any of the reserved characters below, while a rooted path on some platforms can
(``C:\\libs\\MyLib.dll``). Presence of any of them routes the input to the
literal-path branch of the resolver.
"""

import os

RESERVED_CHARS = frozenset(':*?<>|"')

ASSEMBLY_EXTENSIONS = (".dll", ".exe")


def contains_reserved_chars(name: str) -> bool:
    """Return True if ``name`` contains any reserved character.

    Pure string scan, no file-system access. The empty string contains none
    and is therefore classified as a symbolic name.
    """
    return any(ch in RESERVED_CHARS for ch in name)


def is_legal_path_token(name: str) -> bool:
    """Historical name for :func:`contains_reserved_chars`.

    True means the string can only be a path, not a bare symbolic name.
    """
    return contains_reserved_chars(name)


def get_extension(name: str) -> str:
    """Return the trailing extension of ``name`` including the dot, or ``""``.

    A lone trailing dot (``"Foo."``) is not an extension.
    """
    ext = os.path.splitext(name)[1]
    return "" if ext == "." else ext


def remove_assembly_extension(name: str) -> str:
    """Strip a trailing ``.dll``/``.exe`` (any case); other extensions are kept."""
    base, ext = os.path.splitext(name)
    if ext.lower() in ASSEMBLY_EXTENSIONS:
        return base
    return name


def extension_priority(name: str) -> tuple[str, ...]:
    """Suffixes to probe for ``name``, most specific first.

    Extensionless names are most likely shorthand for a compiled module, so the
    well-known assembly extensions are tried before the bare name. Names that
    already carry an extension are tried verbatim first.
    """
    if get_extension(name) == "":
        return (*ASSEMBLY_EXTENSIONS, "")
    return ("", *ASSEMBLY_EXTENSIONS)
