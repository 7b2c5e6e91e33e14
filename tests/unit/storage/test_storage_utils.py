"""Tests for object key naming helpers."""

import pytest

from bucketgate.core.modules.storage.utils import basename, content_disposition, download_filename, make_object_key


class TestMakeObjectKey:
    def test_timestamp_prefix(self):
        assert make_object_key("a.txt", 1700000000123) == "1700000000123-a.txt"

    def test_client_path_stripped(self):
        assert make_object_key("C:\\Users\\me\\report.pdf", 1) == "1-report.pdf"
        assert make_object_key("../../etc/passwd", 1) == "1-passwd"

    def test_empty_name(self):
        assert make_object_key("", 1) == "1-unnamed"

    def test_distinct_names_same_instant(self):
        assert make_object_key("a.txt", 5) != make_object_key("b.txt", 5)


class TestDownloadFilename:
    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            ("1700000000000-a.txt", "1700000000000-a.txt"),
            ("folder/sub/report.pdf", "report.pdf"),
            ("folder\\report.pdf", "report.pdf"),
            ('evil".txt', "evil.txt"),
            ("evil\r\nSet-Cookie: x=1.txt", "evilSet-Cookie: x=1.txt"),
            ("folder/", "unnamed"),
        ],
    )
    def test_final_segment_sanitized(self, key, expected):
        assert download_filename(key) == expected

    def test_basename(self):
        assert basename("a/b/c") == "c"
        assert basename("c") == "c"


class TestContentDisposition:
    def test_ascii_name(self):
        assert content_disposition("report.pdf") == 'attachment; filename="report.pdf"'

    def test_non_ascii_name(self):
        assert content_disposition("文档.pdf") == "attachment; filename*=utf-8''%E6%96%87%E6%A1%A3.pdf"
