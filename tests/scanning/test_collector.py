"""Tests for source file collection."""

import os

from codebase_archeologist.config import DEFAULT_EXCLUDE_DIRS
from codebase_archeologist.scanning import collect_source_files

EXTENSIONS = (".h", ".hpp", ".cpp", ".cc")


def _names(paths, root):
    return [p.relative_to(root).as_posix() for p in paths]


class TestCollectSourceFiles:
    def test_extension_filter(self, tmp_path, write_tree):
        write_tree(
            tmp_path,
            {
                "A.h": "x",
                "B.cpp": "x",
                "C.hpp": "x",
                "D.cc": "x",
                "E.cs": "x",
                "F.txt": "x",
                "G.CPP": "x",
            },
        )
        found = _names(collect_source_files(tmp_path, EXTENSIONS), tmp_path)
        assert found == ["A.h", "B.cpp", "C.hpp", "D.cc", "G.CPP"]

    def test_excluded_directories_pruned(self, tmp_path, write_tree):
        write_tree(
            tmp_path,
            {
                "Game/Hero.cpp": "x",
                "Intermediate/Build/Gen.cpp": "x",
                "Game/ThirdParty/Lib.h": "x",
                "Binaries/Stub.h": "x",
            },
        )
        found = collect_source_files(tmp_path, EXTENSIONS, exclude_dirs=DEFAULT_EXCLUDE_DIRS)
        assert _names(found, tmp_path) == ["Game/Hero.cpp"]

    def test_depth_limit(self, tmp_path, write_tree):
        deep = "/".join(f"d{i}" for i in range(1, 10))
        write_tree(
            tmp_path,
            {
                "Top.h": "x",
                "d1/d2/d3/d4/d5/d6/d7/d8/AtEight.h": "x",
                f"{deep}/AtNine.h": "x",
            },
        )
        found = _names(collect_source_files(tmp_path, EXTENSIONS, max_depth=8), tmp_path)
        assert "Top.h" in found
        assert "d1/d2/d3/d4/d5/d6/d7/d8/AtEight.h" in found
        assert f"{deep}/AtNine.h" not in found

    def test_max_files_cap(self, tmp_path, write_tree):
        write_tree(tmp_path, {f"F{i:02d}.cpp": "x" for i in range(12)})
        found = collect_source_files(tmp_path, EXTENSIONS, max_files=5)
        assert _names(found, tmp_path) == [f"F{i:02d}.cpp" for i in range(5)]

    def test_sorted_and_absolute(self, tmp_path, write_tree):
        write_tree(tmp_path, {"b/Two.h": "x", "a/One.h": "x", "Zed.h": "x"})
        found = collect_source_files(tmp_path, EXTENSIONS)
        assert all(p.is_absolute() for p in found)
        assert _names(found, tmp_path) == ["Zed.h", "a/One.h", "b/Two.h"]

    def test_missing_directory_yields_nothing(self, tmp_path):
        assert collect_source_files(tmp_path / "nope", EXTENSIONS) == []

    def test_unreadable_subdirectory_skipped(self, tmp_path, write_tree, monkeypatch):
        write_tree(
            tmp_path,
            {"Game/Hero.cpp": "x", "Locked/Secret.cpp": "x", "Zoo/Zebra.h": "x"},
        )
        real_scandir = os.scandir

        def scandir(path):
            if os.path.basename(path) == "Locked":
                raise PermissionError(13, "Permission denied", str(path))
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", scandir)

        found = collect_source_files(tmp_path, EXTENSIONS)

        assert _names(found, tmp_path) == ["Game/Hero.cpp", "Zoo/Zebra.h"]
