"""
Tests for record suppliers and report formatting
"""

import io
import os
import pytest

from wordcount.common.config import EngineConfig
from wordcount.coordinator.engine import run_word_count
from wordcount.client.records import SAMPLE_CORPUS, load_records, read_records
from wordcount.client.report import format_duration, format_report, format_summary, write_report


class TestRecords:
    """Tests for loading records"""

    def test_default_is_sample_corpus(self):
        assert load_records() == SAMPLE_CORPUS
        assert len(SAMPLE_CORPUS) == 4

    def test_one_record_per_line(self, sample_input_file):
        records = load_records(sample_input_file)

        assert len(records) == 5
        assert records[1] == "The dog was really lazy."

    def test_read_records_strips_line_endings_only(self):
        records = read_records(io.StringIO("  a b \r\n\nc\n"))

        assert records == ("  a b ", "", "c")

    def test_stdin(self, monkeypatch):
        monkeypatch.setattr('sys.stdin', io.StringIO("x\ny\n"))

        assert load_records('-') == ("x", "y")

    def test_missing_file(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            load_records(os.path.join(temp_dir, 'missing.txt'))

    def test_invalid_utf8_file_is_rejected(self, temp_dir):
        path = os.path.join(temp_dir, 'latin1.txt')
        with open(path, 'wb') as f:
            f.write(b"caf\xe9 caf\n")

        with pytest.raises(UnicodeDecodeError):
            load_records(path)

    def test_invalid_utf8_stdin_is_rejected(self, monkeypatch):
        monkeypatch.setattr('sys.stdin', io.TextIOWrapper(io.BytesIO(b"caf\xe9 caf\n")))

        with pytest.raises(UnicodeDecodeError):
            load_records('-')

    def test_stdin_bytes_decoded_as_utf8(self, monkeypatch):
        stdin = io.TextIOWrapper(io.BytesIO("caf\u00e9\r\nx\n".encode('utf-8')), encoding='latin-1')
        monkeypatch.setattr('sys.stdin', stdin)

        assert load_records('-') == ("caf\u00e9", "x")


class TestReport:
    """Tests for report lines"""

    def test_lines_are_word_colon_count_sorted(self):
        result = run_word_count(["b a", "c a"], EngineConfig(parallelism=2))

        assert format_report(result) == ["a: 2", "b: 1", "c: 1"]

    def test_empty_result_has_no_lines(self):
        result = run_word_count([], EngineConfig(parallelism=2))
        sink = io.StringIO()

        write_report(result, sink)

        assert format_report(result) == []
        assert sink.getvalue() == ""

    def test_write_report_to_sink(self):
        result = run_word_count(["Hello, hello!! HELLO"], EngineConfig(parallelism=1))
        sink = io.StringIO()

        write_report(result, sink)

        assert sink.getvalue() == "hello: 3\n"

    def test_summary(self):
        result = run_word_count(["one two two"], EngineConfig(parallelism=2))

        summary = format_summary(result)

        assert summary.startswith("1 records, 3 words, 2 distinct, 2 worker(s)")

    @pytest.mark.parametrize("seconds,expected", [
        (0.0123, "12.3ms"),
        (5.5, "5.5s"),
        (125.0, "2m 5.0s"),
    ])
    def test_format_duration(self, seconds, expected):
        assert format_duration(seconds) == expected
