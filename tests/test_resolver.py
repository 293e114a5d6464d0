"""Tests for f2bs_installer.resolver."""

from __future__ import annotations

import pytest
from conftest import FakeFileSystem

from f2bs_installer.errors import NoWritableInstallDirectory
from f2bs_installer.resolver import (
    PREFERRED_DIRS,
    is_under_home,
    resolve_install_dir,
    split_search_path,
)

HOME = "/home/u"


class TestSplitSearchPath:
    def test_keeps_order_and_empty_entries(self) -> None:
        assert split_search_path("/a::/b") == ["/a", "", "/b"]

    def test_empty_value(self) -> None:
        assert split_search_path("") == []
        assert split_search_path(None) == []


class TestIsUnderHome:
    def test_home_itself_and_descendants(self) -> None:
        assert is_under_home("/home/u", HOME)
        assert is_under_home("/home/u/", HOME)
        assert is_under_home("/home/u/.local/bin", HOME)

    def test_sibling_with_shared_prefix_is_not_under_home(self) -> None:
        assert not is_under_home("/home/u2/bin", HOME)

    def test_root_home_excludes_nothing(self) -> None:
        assert not is_under_home("/usr/bin", "/")

    @pytest.mark.parametrize(
        "path",
        ["/home//u/bin", "/home/./u/bin", "/opt/../home/u/bin", "//home/u/bin"],
    )
    def test_alternate_spellings_of_home(self, path: str) -> None:
        assert is_under_home(path, HOME)
        assert is_under_home(path, "/home/./u/")

    def test_dotdot_leaving_home(self) -> None:
        assert not is_under_home("/home/u/../shared/bin", HOME)


class TestPreferredPhase:
    def test_skips_earlier_home_entry_for_preferred_dir(self) -> None:
        fs = FakeFileSystem(
            dirs={"/home/u/bin", "/usr/local/bin", "/usr/bin"},
            writable={"/home/u/bin", "/usr/local/bin"},
        )
        search_path = split_search_path("/home/u/bin:/usr/local/bin:/usr/bin")

        assert resolve_install_dir(search_path, False, fs, HOME) == "/usr/local/bin"

    def test_first_preferred_wins_over_path_order(self) -> None:
        fs = FakeFileSystem(
            dirs={"/usr/bin", "/usr/local/bin", "/opt/tools"},
            writable={"/usr/bin", "/usr/local/bin", "/opt/tools"},
        )
        search_path = ["/opt/tools", "/usr/bin", "/usr/local/bin"]

        assert resolve_install_dir(search_path, False, fs, HOME) == "/usr/local/bin"

    def test_preferred_dir_must_be_on_search_path(self) -> None:
        fs = FakeFileSystem(
            dirs={"/usr/local/bin", "/opt/tools"},
            writable={"/usr/local/bin", "/opt/tools"},
        )

        assert resolve_install_dir(["/opt/tools"], False, fs, HOME) == "/opt/tools"

    def test_unwritable_preferred_falls_through_to_next(self) -> None:
        fs = FakeFileSystem(
            dirs={"/usr/local/bin", "/usr/bin"},
            writable={"/usr/bin"},
        )

        assert resolve_install_dir(["/usr/local/bin", "/usr/bin"], False, fs, HOME) == "/usr/bin"

    def test_trailing_slash_matches_preferred(self) -> None:
        fs = FakeFileSystem(dirs={"/usr/local/bin"}, writable={"/usr/local/bin"})

        assert resolve_install_dir(["/usr/local/bin/"], False, fs, HOME) == "/usr/local/bin"

    def test_preferred_under_home_is_still_eligible(self) -> None:
        fs = FakeFileSystem(dirs={"/home/u/bin"}, writable={"/home/u/bin"})

        result = resolve_install_dir(["/home/u/bin"], False, fs, HOME, preferred=("/home/u/bin",))

        assert result == "/home/u/bin"

    def test_default_priority_order(self) -> None:
        assert PREFERRED_DIRS == ("/usr/local/bin", "/usr/bin", "/bin")


class TestFallbackPhase:
    def test_first_writable_non_home_entry_in_path_order(self) -> None:
        fs = FakeFileSystem(
            dirs={"/home/u/bin", "/opt/a", "/opt/b", "/opt/c"},
            writable={"/home/u/bin", "/opt/b", "/opt/c"},
        )
        search_path = ["/home/u/bin", "/opt/a", "/opt/b", "/opt/c"]

        assert resolve_install_dir(search_path, False, fs, HOME) == "/opt/b"

    def test_skips_empty_relative_and_missing_entries(self) -> None:
        fs = FakeFileSystem(dirs={"bin", "/opt/b"}, writable={"bin", "/opt/b"})
        search_path = ["", "bin", "/does/not/exist", "/opt/b"]

        assert resolve_install_dir(search_path, False, fs, HOME) == "/opt/b"

    def test_not_writable_fails(self) -> None:
        fs = FakeFileSystem(dirs={"/opt/tools"})

        with pytest.raises(NoWritableInstallDirectory) as excinfo:
            resolve_install_dir(["/opt/tools"], False, fs, HOME)
        assert str(excinfo.value) == "No writable directory found on PATH for install"

    def test_only_home_paths_fails(self) -> None:
        dirs = {"/home/u/bin", "/home/u/.local/bin", "/home/u"}
        fs = FakeFileSystem(dirs=dirs, writable=dirs)

        with pytest.raises(NoWritableInstallDirectory):
            resolve_install_dir(sorted(dirs), False, fs, HOME)

    @pytest.mark.parametrize(
        "path",
        ["/home//u/bin", "/home/./u/bin", "/opt/../home/u/bin"],
    )
    def test_home_spelled_differently_is_skipped(self, path: str) -> None:
        fs = FakeFileSystem(dirs={"/home/u/bin"}, writable={"/home/u/bin"})

        with pytest.raises(NoWritableInstallDirectory):
            resolve_install_dir([path], False, fs, HOME)

    def test_dotdot_out_of_home_is_eligible(self) -> None:
        fs = FakeFileSystem(dirs={"/home/shared/bin"}, writable={"/home/shared/bin"})

        result = resolve_install_dir(["/home/u/../shared/bin"], False, fs, HOME)

        assert result == "/home/shared/bin"

    def test_equivalent_spellings_are_one_entry(self) -> None:
        fs = FakeFileSystem(dirs={"/opt/a"})

        with pytest.raises(NoWritableInstallDirectory):
            resolve_install_dir(["/opt/a", "/opt//a", "/opt/./a"], False, fs, HOME)
        assert fs.calls.count(("is_dir", "/opt/a")) == 1

    def test_empty_search_path_fails(self) -> None:
        with pytest.raises(NoWritableInstallDirectory):
            resolve_install_dir([], False, FakeFileSystem(), HOME)

    def test_duplicates_are_checked_once(self) -> None:
        fs = FakeFileSystem(dirs={"/opt/a"})

        with pytest.raises(NoWritableInstallDirectory):
            resolve_install_dir(["/opt/a", "/opt/a/", "/opt/a"], False, fs, HOME)
        assert fs.calls.count(("is_dir", "/opt/a")) == 1

    def test_duplicates_do_not_change_outcome(self) -> None:
        fs = FakeFileSystem(dirs={"/opt/a", "/opt/b"}, writable={"/opt/b"})

        once = resolve_install_dir(["/opt/a", "/opt/b"], False, fs, HOME)
        twice = resolve_install_dir(["/opt/a", "/opt/a", "/opt/b", "/opt/b"], False, fs, HOME)
        assert once == twice == "/opt/b"


class TestRoot:
    def test_root_bypasses_writability(self) -> None:
        fs = FakeFileSystem(dirs={"/usr/bin", "/usr/local/bin"})

        assert resolve_install_dir(["/usr/bin", "/usr/local/bin"], True, fs, "/root") == "/usr/local/bin"
        assert not any(call[0] == "is_writable" for call in fs.calls)

    def test_root_still_requires_existence(self) -> None:
        fs = FakeFileSystem(dirs={"/opt/b"})

        assert resolve_install_dir(["/usr/local/bin", "/opt/a", "/opt/b"], True, fs, "/root") == "/opt/b"

    def test_root_may_install_into_another_users_bin(self) -> None:
        fs = FakeFileSystem(dirs={"/home/u/bin"})

        assert resolve_install_dir(["/home/u/bin"], True, fs, "/root") == "/home/u/bin"

    def test_root_fallback_still_skips_own_home(self) -> None:
        fs = FakeFileSystem(dirs={"/root/bin"})

        with pytest.raises(NoWritableInstallDirectory):
            resolve_install_dir(["/root/bin"], True, fs, "/root")


class TestIdempotence:
    def test_repeat_calls_give_same_answer(self) -> None:
        fs = FakeFileSystem(dirs={"/usr/bin", "/opt/x"}, writable={"/opt/x"})
        search_path = ["/usr/bin", "/opt/x"]

        first = resolve_install_dir(search_path, False, fs, HOME)
        second = resolve_install_dir(search_path, False, fs, HOME)
        assert first == second == "/opt/x"
        assert search_path == ["/usr/bin", "/opt/x"]


class TestOsFileSystem:
    def test_real_directory(self, tmp_path) -> None:
        target = tmp_path / "bin"
        target.mkdir()
        home = tmp_path / "home"

        assert resolve_install_dir([str(target)], False, home=str(home)) == str(target)
