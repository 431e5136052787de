#!/usr/bin/env python3
"""
BOA ENGINE - Build Orchestrator
-------------------------------
Connects the compiler core to the outside world: reads sources (file or
stdin), writes CSS (file or stdout) atomically, and watches a source file
for changes. Every build produces a report dict that the CLI renders.

Author: Boa Team
"""

import os
import sys
import time
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from boa.core.errors import BoaCompileError
from boa.core.models import CompileOptions
from boa.compiler.pipeline import CompilerPipeline

logger = logging.getLogger("boa.engine")

STDIO = "-"

def _is_stdio(path: Optional[str]) -> bool:
    return path is None or str(path) == STDIO

class BuildEngine:
    """
    Runs builds for one set of CompileOptions.
    Holds no per-build state, so it may be reused across watch cycles.
    """

    def __init__(self, options: Optional[CompileOptions] = None, stdin=None, stdout=None):
        self.options = options or CompileOptions()
        self.pipeline = CompilerPipeline(self.options)
        self.stdin = stdin
        self.stdout = stdout

    # --- I/O ---

    def read_source(self, path: Optional[str]) -> str:
        """Reads a file (BOM-aware) or standard input for None/'-'."""
        if _is_stdio(path):
            return (self.stdin or sys.stdin).read()

        source_path = Path(path)
        if not source_path.is_file():
            raise FileNotFoundError(f"Input file not found: {path}")
        return source_path.read_text(encoding="utf-8-sig")

    def write_output(self, css: str, path: Optional[str]):
        """Writes to a file atomically, or to standard output for None/'-'."""
        if _is_stdio(path):
            stream = self.stdout or sys.stdout
            stream.write(css)
            stream.flush()
            return
        self._atomic_write(Path(path), css)

    def _atomic_write(self, target_path: Path, content: str):
        target_path.parent.mkdir(parents=True, exist_ok=True)
        if not os.access(target_path.parent, os.W_OK):
            raise PermissionError(f"No write access to {target_path.parent}")
        temp_file = target_path.with_name(target_path.name + ".boa.tmp")
        try:
            temp_file.write_text(content, encoding="utf-8")
            os.replace(temp_file, target_path)
        except OSError as e:
            if temp_file.exists():
                temp_file.unlink()
            raise IOError(f"Atomic write failed: {str(e)}")

    # --- Builds ---

    def compile_source(self, source: str) -> str:
        return self.pipeline.run(source).output

    def build(self, input_path: Optional[str], output_path: Optional[str] = None,
              source: Optional[str] = None) -> Dict[str, Any]:
        """
        Performs a full read/compile/write cycle. Never raises for build
        failures (missing or unreadable input, compile faults, write errors);
        the report's `status` says what happened.
        """
        label = STDIO if _is_stdio(input_path) else str(input_path)
        try:
            if source is None:
                source = self.read_source(input_path)
        except FileNotFoundError as e:
            logger.error(str(e))
            return self._file_error(label, "FILE_NOT_FOUND", str(e))
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Could not read {label}: {e}")
            return self._file_error(label, "READ_ERROR", str(e))

        try:
            css = self.compile_source(source)
        except BoaCompileError as e:
            logger.debug(f"Compile failed for {label}: {e}")
            return self._compile_error(label, source, e)

        result = self._report(label, "COMPILED", success=True)
        result["output_path"] = STDIO if _is_stdio(output_path) else str(output_path)
        result["bytes"] = len(css.encode("utf-8"))

        try:
            self.write_output(css, output_path)
            result["written"] = True
        except OSError as e:
            logger.error(f"Write failed for {result['output_path']}: {e}")
            result.update(status="WRITE_ERROR", success=False, error=str(e))
            return result

        logger.info(f"Compiled {label}{' (minified)' if self.options.compact else ''}")
        return result

    def check(self, input_path: Optional[str]) -> Dict[str, Any]:
        """Compiles without writing anything."""
        label = STDIO if _is_stdio(input_path) else str(input_path)
        try:
            source = self.read_source(input_path)
        except FileNotFoundError as e:
            return self._file_error(label, "FILE_NOT_FOUND", str(e))
        except (OSError, UnicodeDecodeError) as e:
            return self._file_error(label, "READ_ERROR", str(e))

        try:
            css = self.compile_source(source)
        except BoaCompileError as e:
            return self._compile_error(label, source, e)

        result = self._report(label, "VALID", success=True)
        result["bytes"] = len(css.encode("utf-8"))
        return result

    def generate_summary(self, reports: List[Dict[str, Any]]) -> Dict[str, Any]:
        total = len(reports)
        successful = sum(1 for r in reports if r.get("success", False))
        return {
            "total_builds": total,
            "successful": successful,
            "failed": total - successful,
            "compile_errors": sum(1 for r in reports if r.get("status") == "COMPILE_ERROR"),
            "written": sum(1 for r in reports if r.get("written", False)),
        }

    # --- Report Helpers ---

    def _report(self, path: str, status: str, success: bool) -> Dict[str, Any]:
        return {
            "file_path": path,
            "status": status,
            "success": success,
            "written": False,
            "timestamp": time.time(),
        }

    def _file_error(self, path: str, status: str, error: str) -> Dict[str, Any]:
        result = self._report(path, status, success=False)
        result["error"] = error
        return result

    def _compile_error(self, path: str, source: str, error: BoaCompileError) -> Dict[str, Any]:
        line, column = error.location(source)
        result = self._report(path, "COMPILE_ERROR", success=False)
        result.update(
            error=error.message,
            code=error.code,
            index=error.index,
            byte_offset=error.byte_offset(source),
            line=line,
            column=column,
            source=source,
        )
        return result

class SourceWatcher:
    """
    Recompiles a source file whenever it changes on disk.

    The file is polled for mtime/size changes; after a change the watcher
    waits `debounce` seconds for writes to settle, then re-reads. Text equal
    to the last successfully compiled source is not re-emitted.
    """

    def __init__(self, engine: BuildEngine, input_path: str, output_path: Optional[str] = None,
                 interval: float = 0.1, debounce: float = 0.03,
                 on_report: Optional[Callable[[Dict[str, Any]], None]] = None):
        if _is_stdio(input_path):
            raise ValueError("Watch mode requires a real input file path.")
        self.engine = engine
        self.input_path = Path(input_path).resolve()
        self.output_path = output_path
        self.interval = interval
        self.debounce = debounce
        self.on_report = on_report
        self.previous: Optional[str] = None
        self._stamp = None

    def _current_stamp(self):
        try:
            stat = self.input_path.stat()
        except FileNotFoundError:
            return None
        return stat.st_mtime_ns, stat.st_size

    def initial_build(self) -> Dict[str, Any]:
        self._stamp = self._current_stamp()
        return self._compile()

    def poll(self) -> Optional[Dict[str, Any]]:
        """
        One watch cycle. Returns the build report, or None when nothing
        changed or the text matches the last successful compile.
        """
        stamp = self._current_stamp()
        if stamp is None or stamp == self._stamp:
            return None

        if self.debounce:
            time.sleep(self.debounce)
        self._stamp = self._current_stamp()
        return self._compile()

    def _compile(self) -> Optional[Dict[str, Any]]:
        try:
            source = self.engine.read_source(str(self.input_path))
        except FileNotFoundError as e:
            logger.error(str(e))
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Could not read {self.input_path.name}: {e}")
            report = self.engine._file_error(str(self.input_path), "READ_ERROR", str(e))
            if self.on_report:
                self.on_report(report)
            return report

        if source == self.previous:
            logger.debug(f"Skipping {self.input_path.name}: unchanged since last compile")
            return None

        report = self.engine.build(str(self.input_path), self.output_path, source=source)
        if report["success"]:
            self.previous = source
        if self.on_report:
            self.on_report(report)
        return report

    def run(self, should_stop: Optional[Callable[[], bool]] = None):
        """Builds once, then polls until `should_stop` returns True."""
        self.initial_build()
        logger.info(f"Watching {self.input_path}")
        while not (should_stop and should_stop()):
            time.sleep(self.interval)
            self.poll()
