"""Tests for batched source file reading."""

import asyncio

import pytest

from codebase_archeologist.cancellation import CancellationToken
from codebase_archeologist.exceptions import ScanCancelledError
from codebase_archeologist.scanning import read_source_files, relative_posix

HEADERS = (".h", ".hpp")


class TestRelativePosix:
    def test_inside_root(self, tmp_path):
        assert relative_posix(tmp_path / "Source" / "A.h", tmp_path) == "Source/A.h"

    def test_outside_root_kept_whole(self, tmp_path):
        other = tmp_path.parent / "elsewhere" / "B.h"
        assert relative_posix(other, tmp_path) == other.as_posix()


class TestReadSourceFiles:
    def test_reads_in_order_across_batches(self, tmp_path, write_tree):
        files = {f"Source/F{i:02d}.cpp": f"// {i}\n" for i in range(45)}
        write_tree(tmp_path, files)
        paths = sorted(tmp_path.joinpath("Source").iterdir())

        sources = asyncio.run(read_source_files(paths, tmp_path, HEADERS, batch_size=20))

        assert [s.relative_path for s in sources] == sorted(files)
        assert sources[7].content == "// 7\n"

    def test_header_flag(self, tmp_path, write_tree):
        write_tree(tmp_path, {"Source/A.h": "a", "Source/B.cpp": "b", "Source/C.HPP": "c"})
        paths = sorted(tmp_path.joinpath("Source").iterdir())

        sources = asyncio.run(read_source_files(paths, tmp_path, HEADERS))

        assert {s.relative_path: s.is_header for s in sources} == {
            "Source/A.h": True,
            "Source/B.cpp": False,
            "Source/C.HPP": True,
        }

    def test_empty_and_missing_files_skipped(self, tmp_path, write_tree):
        write_tree(tmp_path, {"Source/Empty.h": "", "Source/Full.h": "x"})
        paths = [
            tmp_path / "Source" / "Empty.h",
            tmp_path / "Source" / "Gone.h",
            tmp_path / "Source" / "Full.h",
        ]

        sources = asyncio.run(read_source_files(paths, tmp_path, HEADERS))

        assert [s.relative_path for s in sources] == ["Source/Full.h"]

    def test_invalid_utf8_replaced(self, tmp_path):
        target = tmp_path / "Source" / "Bin.cpp"
        target.parent.mkdir(parents=True)
        target.write_bytes(b"int x; \xff\xfe\n")

        sources = asyncio.run(read_source_files([target], tmp_path, HEADERS))

        assert sources[0].content.startswith("int x; ")

    def test_cancelled_before_first_batch(self, tmp_path, write_tree):
        write_tree(tmp_path, {"Source/A.h": "a"})
        token = CancellationToken()
        token.cancel()

        with pytest.raises(ScanCancelledError) as exc_info:
            asyncio.run(
                read_source_files(
                    [tmp_path / "Source" / "A.h"], tmp_path, HEADERS, cancel_token=token
                )
            )
        assert exc_info.value.stage == "reading"
