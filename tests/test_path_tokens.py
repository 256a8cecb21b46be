"""Tests for path token classification and extension helpers."""

import pytest

from asmprobe.path_tokens import contains_reserved_chars
from asmprobe.path_tokens import extension_priority
from asmprobe.path_tokens import get_extension
from asmprobe.path_tokens import is_legal_path_token
from asmprobe.path_tokens import remove_assembly_extension


class TestReservedChars:
    @pytest.mark.parametrize("ch", list(':*?<>|"'))
    def test_each_reserved_char_marks_a_path(self, ch: str) -> None:
        assert contains_reserved_chars(f"Foo{ch}Bar") is True

    @pytest.mark.parametrize("name", ["System.Xml", "MyLib.dll", "sub/Tool", "Foo Bar", "/opt/libs/Foo.dll"])
    def test_symbolic_names(self, name: str) -> None:
        assert contains_reserved_chars(name) is False

    def test_windows_rooted_path_is_a_path(self) -> None:
        assert contains_reserved_chars(r"C:\libs\Foo.dll") is True

    def test_empty_string_is_symbolic(self) -> None:
        assert contains_reserved_chars("") is False

    def test_historical_name_has_same_meaning(self) -> None:
        assert is_legal_path_token("C:/Foo.dll") is True
        assert is_legal_path_token("Foo") is False


class TestExtensions:
    def test_get_extension(self) -> None:
        assert get_extension("Foo.dll") == ".dll"
        assert get_extension("System.Xml") == ".Xml"
        assert get_extension("Foo") == ""
        assert get_extension("Foo.") == ""
        assert get_extension("sub.dir/Foo") == ""

    def test_remove_assembly_extension(self) -> None:
        assert remove_assembly_extension("Foo.dll") == "Foo"
        assert remove_assembly_extension("Foo.EXE") == "Foo"
        assert remove_assembly_extension("System.Xml") == "System.Xml"
        assert remove_assembly_extension("Foo") == "Foo"

    def test_extensionless_names_try_binaries_first(self) -> None:
        assert extension_priority("Foo") == (".dll", ".exe", "")

    def test_names_with_extension_try_exact_first(self) -> None:
        assert extension_priority("Foo.txt") == ("", ".dll", ".exe")
        assert extension_priority("System.Xml") == ("", ".dll", ".exe")
