import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import pytest

from swiftly.cache import CacheStore
from swiftly.compile import Builder, Compiler
from swiftly.interpreter import Interpreter
from swiftly.launcher import Launcher

# Records each invocation as one line: every argument wrapped in brackets.
_RECORD_ARGS = """for arg in "$@"; do printf '[%s]' "$arg" >> "{log}"; done
printf '\\n' >> "{log}"
"""

# Accepts `-o OUTPUT SOURCE` and "compiles" a shell script by copying it. Rejects sources
# without the .swift extension and sources containing COMPILE_ERROR, like a real compiler.
_FAKE_COMPILER = """#!/bin/sh
{record}
if [ "$1" != "-o" ] || [ -z "$2" ] || [ -z "$3" ]; then
  echo "fakec: usage: fakec -o OUTPUT SOURCE" >&2
  exit 2
fi
case "$3" in
  *.swift) ;;
  *) echo "fakec: unrecognized source extension: $3" >&2; exit 3 ;;
esac
if grep -q COMPILE_ERROR "$3"; then
  echo "fakec: error in $3" >&2
  exit 1
fi
cp "$3" "$2" && chmod +x "$2"
"""

_FAKE_INTERPRETER = """#!/bin/sh
{record}
if [ "$1" = "-h" ]; then
  echo "INTERPRETER HELP"
  exit 0
fi
echo "interpreter ran"
exit 7
"""


@dataclass
class FakeTool:
    """A shell-script stand-in for an external tool that logs its invocations."""

    path: Path
    log: Path

    def calls(self) -> List[str]:
        if not self.log.exists():
            return []
        return self.log.read_text().splitlines()


def _write_executable(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


def _make_tool(directory: Path, name: str, template: str) -> FakeTool:
    log = directory / f"{name}.log"
    record = _RECORD_ARGS.format(log=log)
    path = _write_executable(directory / name, template.format(record=record))
    return FakeTool(path=path, log=log)


@pytest.fixture
def tmp_cache_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Use isolated temporary directory for the cache root in all tests.

    This fixture sets SWIFTLY_CACHE_PATH to a unique temporary directory for each test, so
    the real ``~/.swiftly/cache`` is never touched.
    """
    cache_dir = tmp_path / "cache"
    monkeypatch.setenv("SWIFTLY_CACHE_PATH", str(cache_dir))
    return cache_dir


@pytest.fixture
def fake_compiler(tmp_path: Path) -> FakeTool:
    return _make_tool(tmp_path / "tools", "fakec", _FAKE_COMPILER)


@pytest.fixture
def fake_interpreter(tmp_path: Path) -> FakeTool:
    return _make_tool(tmp_path / "tools", "fakeswift", _FAKE_INTERPRETER)


@pytest.fixture
def store(tmp_cache_dir: Path) -> CacheStore:
    return CacheStore(tmp_cache_dir)


@pytest.fixture
def builder(store: CacheStore, fake_compiler: FakeTool) -> Builder:
    return Builder(store, Compiler(str(fake_compiler.path)), "swift")


@pytest.fixture
def launcher(store: CacheStore, builder: Builder, fake_interpreter: FakeTool) -> Launcher:
    return Launcher(store, builder, Interpreter(str(fake_interpreter.path)))


@pytest.fixture
def write_script(tmp_path: Path):
    """Write an executable shell script that stands in for a source file.

    The script echoes its name and arguments, then exits with ``exit_code``. The file's
    modification time is set to ``mtime`` when given.
    """

    def _write(
        name: str, *, mtime: Optional[int] = None, exit_code: int = 0, body: str = ""
    ) -> Path:
        path = tmp_path / "scripts" / name
        content = f'#!/bin/sh\n{body}echo "{name}:$#:$*"\nexit {exit_code}\n'
        _write_executable(path, content)
        if mtime is not None:
            os.utime(path, (mtime, mtime))
        return path

    return _write
