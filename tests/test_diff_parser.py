"""
Unit tests for the unified diff parser.

Run with:
    pytest tests/test_diff_parser.py -v
"""

import pytest

from smartcommit.git.diff_parser import FileDelta, parse_diff


NEW_FILE_DIFF = """\
diff --git a/src/Foo.kt b/src/Foo.kt
index e69de29..4b825dc 100644
--- a/src/Foo.kt
+++ b/src/Foo.kt
@@ -0,0 +1,3 @@
+package a
+class Foo {}
+
"""


# ---------------------------------------------------------------------------
# FileDelta
# ---------------------------------------------------------------------------

class TestFileDelta:

    @pytest.mark.parametrize("path, expected", [
        ("src/app.py", "py"),
        ("README.MD", "md"),
        ("archive.tar.GZ", "gz"),
        ("Makefile", ""),
    ])
    def test_extension(self, path, expected):
        assert FileDelta(path=path).extension == expected

    def test_total_changes(self):
        assert FileDelta(path="a.py", added=4, deleted=3).total_changes == 7


# ---------------------------------------------------------------------------
# parse_diff
# ---------------------------------------------------------------------------

class TestParseDiff:

    def test_new_file_counts(self):
        files = parse_diff(NEW_FILE_DIFF)
        assert files == [FileDelta(path="src/Foo.kt", added=3, deleted=0)]

    def test_metadata_lines_not_counted(self):
        diff = (
            "diff --git a/x.py b/x.py\n"
            "--- a/x.py\n"
            "+++ b/x.py\n"
            "@@ -1,2 +1,2 @@\n"
            "-old\n"
            "+new\n"
        )
        assert parse_diff(diff) == [FileDelta(path="x.py", added=1, deleted=1)]

    def test_keeps_header_order(self):
        diff = (
            "diff --git a/z.py b/z.py\n"
            "+z\n"
            "diff --git a/a.py b/a.py\n"
            "-a\n"
            "-a\n"
        )
        files = parse_diff(diff)
        assert [f.path for f in files] == ["z.py", "a.py"]
        assert (files[1].added, files[1].deleted) == (0, 2)

    def test_repeated_path_produces_two_records(self):
        diff = (
            "diff --git a/x.py b/x.py\n"
            "+1\n"
            "diff --git a/x.py b/x.py\n"
            "+2\n"
        )
        assert len(parse_diff(diff)) == 2

    def test_lines_before_first_header_are_dropped(self):
        diff = "+orphan\n-orphan\n" + NEW_FILE_DIFF
        files = parse_diff(diff)
        assert len(files) == 1
        assert files[0].added == 3

    def test_no_headers_gives_no_files(self):
        assert parse_diff("+just\n-some\nnoise\n") == []

    def test_empty_input(self):
        assert parse_diff("") == []

    def test_uses_b_side_path_for_renames(self):
        diff = "diff --git a/old/name.py b/new/name.py\n+x\n"
        assert parse_diff(diff)[0].path == "new/name.py"

    def test_malformed_header_falls_back_to_last_token(self):
        assert parse_diff("diff --git b/only.py\n")[0].path == "only.py"

    def test_empty_header_is_unknown(self):
        assert parse_diff("diff --git \n")[0].path == "unknown"

    def test_section_markers_are_ignored(self):
        diff = "# STAGED\n" + NEW_FILE_DIFF + "\n# UNSTAGED\n"
        assert parse_diff(diff) == [FileDelta(path="src/Foo.kt", added=3, deleted=0)]

    def test_bare_plus_and_minus_lines_count(self):
        diff = "diff --git a/x b/x\n+\n-\n"
        assert parse_diff(diff) == [FileDelta(path="x", added=1, deleted=1)]
