#!/usr/bin/env python3
"""
BOA ENGINE SUITE - File Collaborators
-------------------------------------
Exercises the BuildEngine read/compile/write cycle and the SourceWatcher
polling loop against real files under pytest's tmp_path.

Author: Boa Team
"""

import io
import logging
import os
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

from pathlib import Path

import pytest

from boa.core.engine import BuildEngine, SourceWatcher
from boa.core.models import CompileOptions

SOURCE = "$c: #333\nbody\n  color: $c\n"
EXPECTED = ":root {\n  --c: #333;\n}\n\nbody {\n  color: var(--c);\n}\n"

def rewrite(path: Path, text):
    """Writes text (or raw bytes) and forces a visible mtime change."""
    previous = path.stat().st_mtime_ns
    if isinstance(text, bytes):
        path.write_bytes(text)
    else:
        path.write_text(text, encoding="utf-8")
    bumped = previous + 1_000_000_000
    os.utime(path, ns=(bumped, bumped))

def test_build_writes_output_file(tmp_path):
    src = tmp_path / "site.boa"
    out = tmp_path / "dist" / "site.css"
    src.write_text(SOURCE, encoding="utf-8")

    report = BuildEngine().build(str(src), str(out))

    assert report["success"] is True
    assert report["status"] == "COMPILED"
    assert report["written"] is True
    assert out.read_text(encoding="utf-8") == EXPECTED
    assert not list(tmp_path.rglob("*.boa.tmp"))

def test_build_reads_bom_prefixed_source(tmp_path):
    src = tmp_path / "site.boa"
    out = tmp_path / "site.css"
    src.write_bytes(b"\xef\xbb\xbf" + SOURCE.encode("utf-8"))

    BuildEngine().build(str(src), str(out))

    assert out.read_text(encoding="utf-8") == EXPECTED

def test_build_uses_stdin_and_stdout():
    stdout = io.StringIO()
    engine = BuildEngine(CompileOptions(compact=True), stdin=io.StringIO(SOURCE), stdout=stdout)

    report = engine.build("-", "-")

    assert report["success"] is True
    assert stdout.getvalue() == ":root{--c:#333;}body{color:var(--c);}"

def test_missing_input_is_reported(tmp_path):
    report = BuildEngine().build(str(tmp_path / "nope.boa"), str(tmp_path / "out.css"))

    assert report["status"] == "FILE_NOT_FOUND"
    assert report["success"] is False
    assert not (tmp_path / "out.css").exists()

def test_compile_error_report_is_positioned(tmp_path):
    src = tmp_path / "bad.boa"
    out = tmp_path / "bad.css"
    src.write_text(".a\n  .b\n\tcolor: red\n", encoding="utf-8")

    report = BuildEngine().build(str(src), str(out))

    assert report["status"] == "COMPILE_ERROR"
    assert report["code"] == "MixedIndentation"
    assert (report["line"], report["column"]) == (3, 1)
    assert report["index"] == 8
    assert not out.exists()

def test_undecodable_input_is_reported(tmp_path):
    src = tmp_path / "bad.boa"
    out = tmp_path / "bad.css"
    src.write_bytes(b"a\n  b: \xff\n")

    built = BuildEngine().build(str(src), str(out))
    checked = BuildEngine().check(str(src))

    assert built["status"] == "READ_ERROR"
    assert built["success"] is False
    assert checked["status"] == "READ_ERROR"
    assert not out.exists()

def test_compile_errors_are_not_logged_above_debug(tmp_path, caplog):
    src = tmp_path / "bad.boa"
    src.write_text("  broken\n", encoding="utf-8")

    with caplog.at_level(logging.INFO, logger="boa.engine"):
        report = BuildEngine().build(str(src), str(tmp_path / "bad.css"))

    assert report["status"] == "COMPILE_ERROR"
    assert not [r for r in caplog.records if r.levelno >= logging.INFO]

def test_compile_error_report_carries_byte_offset(tmp_path):
    src = tmp_path / "bad.boa"
    src.write_text("/* \u00e9 */\n  broken\n", encoding="utf-8")

    report = BuildEngine().build(str(src), str(tmp_path / "bad.css"))

    assert report["code"] == "UnexpectedIndent"
    assert report["index"] == 8
    assert report["byte_offset"] == 9

def test_check_does_not_write(tmp_path):
    src = tmp_path / "site.boa"
    src.write_text(SOURCE, encoding="utf-8")

    report = BuildEngine().check(str(src))

    assert report["status"] == "VALID"
    assert report["bytes"] == len(EXPECTED)
    assert sorted(p.name for p in tmp_path.iterdir()) == ["site.boa"]

def test_generate_summary():
    engine = BuildEngine()
    reports = [
        {"status": "COMPILED", "success": True, "written": True},
        {"status": "COMPILE_ERROR", "success": False},
    ]

    summary = engine.generate_summary(reports)

    assert summary == {
        "total_builds": 2,
        "successful": 1,
        "failed": 1,
        "compile_errors": 1,
        "written": 1,
    }

# --- Watch Mode ---

@pytest.fixture
def watched(tmp_path):
    src = tmp_path / "site.boa"
    out = tmp_path / "site.css"
    src.write_text(SOURCE, encoding="utf-8")
    reports = []
    watcher = SourceWatcher(BuildEngine(), str(src), str(out), interval=0, debounce=0,
                            on_report=reports.append)
    return watcher, src, out, reports

def test_watch_initial_build(watched):
    watcher, src, out, reports = watched

    report = watcher.initial_build()

    assert report["success"] is True
    assert out.read_text(encoding="utf-8") == EXPECTED
    assert reports == [report]

def test_watch_poll_without_change_does_nothing(watched):
    watcher, src, out, reports = watched
    watcher.initial_build()

    assert watcher.poll() is None
    assert len(reports) == 1

def test_watch_recompiles_on_change(watched):
    watcher, src, out, reports = watched
    watcher.initial_build()

    rewrite(src, "main\n  margin: 0\n")
    report = watcher.poll()

    assert report["success"] is True
    assert out.read_text(encoding="utf-8") == "main {\n  margin: 0;\n}\n"

def test_watch_skips_unchanged_text(watched):
    watcher, src, out, reports = watched
    watcher.initial_build()

    rewrite(src, SOURCE)

    assert watcher.poll() is None
    assert len(reports) == 1

def test_watch_keeps_last_good_output_after_error(watched):
    watcher, src, out, reports = watched
    watcher.initial_build()

    rewrite(src, "  broken\n")
    failed = watcher.poll()
    rewrite(src, SOURCE)
    restored = watcher.poll()

    assert failed["status"] == "COMPILE_ERROR"
    assert failed["code"] == "UnexpectedIndent"
    assert out.read_text(encoding="utf-8") == EXPECTED
    # Identical to the last successful compile, so nothing is re-emitted
    assert restored is None

def test_watch_survives_undecodable_save(watched):
    watcher, src, out, reports = watched
    watcher.initial_build()

    rewrite(src, b"a\n  b: \xff\n")
    failed = watcher.poll()
    rewrite(src, "main\n  margin: 0\n")
    recovered = watcher.poll()

    assert failed["status"] == "READ_ERROR"
    assert reports[1] is failed
    assert recovered["success"] is True
    assert out.read_text(encoding="utf-8") == "main {\n  margin: 0;\n}\n"

def test_watch_run_stops_on_request(watched):
    watcher, src, out, reports = watched

    watcher.run(should_stop=lambda: True)

    assert len(reports) == 1
    assert out.exists()

def test_watch_requires_real_input_path():
    with pytest.raises(ValueError):
        SourceWatcher(BuildEngine(), "-")
