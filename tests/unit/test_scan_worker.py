"""
Unit tests for ScanWorker.
"""

import logging
from pathlib import Path

import pytest

from fuzzgrep.core.closable_queue import ClosableQueue
from fuzzgrep.services.scan_worker import ScanWorker
from fuzzgrep.services.search_models import SearchResult


def _run_worker(worker: ScanWorker, paths: list[str]) -> tuple[list[SearchResult], object]:
    path_queue: ClosableQueue[str] = ClosableQueue()
    result_queue: ClosableQueue[SearchResult] = ClosableQueue()
    for p in paths:
        path_queue.put(p)
    path_queue.close()

    stats = worker.run(path_queue, result_queue)
    result_queue.close()
    return list(result_queue), stats


class TestScanFile:
    def test_line_numbers_are_one_based(self, tmp_path: Path):
        target = tmp_path / "a.txt"
        target.write_text("hello world\nfoo bar\nhello again\n", encoding="utf-8")

        results = list(ScanWorker("hello").scan_file(str(target)))

        assert results == [
            SearchResult(str(target), 1, "hello world"),
            SearchResult(str(target), 3, "hello again"),
        ]

    def test_crlf_and_missing_final_newline(self, tmp_path: Path):
        target = tmp_path / "dos.txt"
        target.write_bytes(b"first hit\r\nmiss\r\nlast hit")

        results = list(ScanWorker("hit").scan_file(str(target)))

        assert [(r.line_number, r.line_content) for r in results] == [
            (1, "first hit"),
            (3, "last hit"),
        ]

    def test_empty_lines_are_counted(self, tmp_path: Path):
        target = tmp_path / "gaps.txt"
        target.write_text("\n\nneedle\n", encoding="utf-8")

        results = list(ScanWorker("needle").scan_file(str(target)))

        assert [r.line_number for r in results] == [3]

    def test_undecodable_bytes_are_replaced(self, tmp_path: Path):
        target = tmp_path / "latin.txt"
        target.write_bytes(b"caf\xe9 needle\n")

        results = list(ScanWorker("needle").scan_file(str(target)))

        assert len(results) == 1
        assert results[0].line_content == "caf\ufffd needle"

    def test_custom_matcher_is_used(self, tmp_path: Path):
        target = tmp_path / "a.txt"
        target.write_text("one\ntwo\nthree\n", encoding="utf-8")
        calls: list[tuple[str, str]] = []

        def matcher(pattern: str, text: str) -> bool:
            calls.append((pattern, text))
            return text.startswith("t")

        results = list(ScanWorker("p", matcher=matcher).scan_file(str(target)))

        assert calls == [("p", "one"), ("p", "two"), ("p", "three")]
        assert [r.line_number for r in results] == [2, 3]

    def test_open_failure_raises(self, tmp_path: Path):
        with pytest.raises(OSError):
            ScanWorker("x").scan_file(str(tmp_path / "missing.txt"))


class TestWorkerRun:
    def test_processes_every_path(self, tmp_path: Path):
        a = tmp_path / "a.txt"
        b = tmp_path / "b.go"
        a.write_text("hello world\nfoo bar\n", encoding="utf-8")
        b.write_text("hello there\n", encoding="utf-8")

        results, stats = _run_worker(ScanWorker("hello"), [str(a), str(b)])

        assert set(results) == {
            SearchResult(str(a), 1, "hello world"),
            SearchResult(str(b), 1, "hello there"),
        }
        assert stats.files_scanned == 2
        assert stats.files_failed == 0
        assert stats.matches == 2

    def test_unreadable_file_is_logged_and_skipped(self, tmp_path: Path, caplog):
        good = tmp_path / "good.txt"
        good.write_text("hello\n", encoding="utf-8")
        missing = tmp_path / "missing.txt"

        with caplog.at_level(logging.ERROR, logger="fuzzgrep.services.scan_worker"):
            results, stats = _run_worker(ScanWorker("hello"), [str(missing), str(good)])

        assert results == [SearchResult(str(good), 1, "hello")]
        assert stats.files_failed == 1
        assert stats.files_scanned == 1
        assert "Error opening file" in caplog.text

    def test_directory_path_counts_as_failure(self, tmp_path: Path):
        results, stats = _run_worker(ScanWorker("x"), [str(tmp_path)])

        assert results == []
        assert stats.files_failed == 1

    def test_matcher_error_skips_file_only(self, tmp_path: Path, caplog):
        bad = tmp_path / "bad.txt"
        good = tmp_path / "good.txt"
        bad.write_text("boom\n", encoding="utf-8")
        good.write_text("fine\n", encoding="utf-8")

        def matcher(pattern: str, text: str) -> bool:
            if text == "boom":
                raise RuntimeError("matcher exploded")
            return True

        with caplog.at_level(logging.ERROR, logger="fuzzgrep.services.scan_worker"):
            results, stats = _run_worker(
                ScanWorker("x", matcher=matcher), [str(bad), str(good)]
            )

        assert results == [SearchResult(str(good), 1, "fine")]
        assert stats.files_failed == 1
        assert "Unexpected error scanning" in caplog.text
