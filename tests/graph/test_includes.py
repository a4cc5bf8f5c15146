"""Tests for include graph construction."""

from pathlib import Path

from codebase_archeologist.graph import (
    build_include_graph,
    header_paths_by_basename,
    parse_local_includes,
)
from codebase_archeologist.models import SourceFile


def _header(rel: str, content: str) -> SourceFile:
    return SourceFile(path=Path("/proj") / rel, relative_path=rel, content=content, is_header=True)


class TestParseLocalIncludes:
    def test_quoted_includes_in_order(self):
        content = '#include "CoreMinimal.h"\n#include <vector>\n#include "Weapons/Gun.h"\n'
        assert parse_local_includes(content) == ["CoreMinimal.h", "Gun.h"]

    def test_spacing_variants_and_backslashes(self):
        content = '  #  include   "Sub\\Dir\\Thing.h"\n'
        assert parse_local_includes(content) == ["Thing.h"]

    def test_line_comment_not_matched(self):
        assert parse_local_includes('// #include "Old.h"\n') == []


class TestBuildIncludeGraph:
    def test_keys_are_basenames(self):
        graph = build_include_graph(
            [
                _header("Source/Game/A.h", '#include "Game/B.h"\n'),
                _header("Source/Game/B.h", "#pragma once\n"),
            ]
        )
        assert graph == {"A.h": ["B.h"], "B.h": []}

    def test_duplicate_basenames_collapse_to_last(self):
        headers = [
            _header("Source/One/Types.h", '#include "X.h"\n'),
            _header("Source/Two/Types.h", '#include "Y.h"\n'),
        ]
        assert build_include_graph(headers) == {"Types.h": ["Y.h"]}
        assert header_paths_by_basename(headers) == {"Types.h": "Source/Two/Types.h"}
