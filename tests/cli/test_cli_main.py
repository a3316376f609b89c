import logging
import os
import signal
import subprocess
import sys
import time
from pathlib import Path

import pytest

import swiftly
import swiftly.logging as swiftly_logging
from swiftly.cli.main import build_parser, main, parse_args


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop the stderr handler installed by ``main`` so it does not outlive captured streams."""
    yield
    root = logging.getLogger("swiftly")
    if swiftly_logging._handler is not None:
        root.removeHandler(swiftly_logging._handler)
        swiftly_logging._handler = None
    root.setLevel(logging.NOTSET)


@pytest.fixture
def tool_env(
    tmp_cache_dir: Path, fake_compiler, fake_interpreter, monkeypatch: pytest.MonkeyPatch
):
    monkeypatch.setenv("SWIFTLY_COMPILER", str(fake_compiler.path))
    monkeypatch.setenv("SWIFTLY_INTERPRETER", str(fake_interpreter.path))
    monkeypatch.delenv("SWIFTLY_COMPILER_FLAGS", raising=False)
    monkeypatch.delenv("SWIFTLY_SOURCE_EXTENSION", raising=False)
    monkeypatch.delenv("SWIFTLY_LOG_LEVEL", raising=False)
    return tmp_cache_dir


def _exit_status(argv) -> int:
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    return excinfo.value.code


@pytest.mark.parametrize(
    "argv, help_, program, args",
    [
        ([], False, None, []),
        (["-h"], True, None, []),
        (["--help"], True, None, []),
        (["-h", "--anything"], True, None, []),
        (["--help", "prog", "x"], True, None, []),
        (["--version"], False, "--version", []),
        (["prog"], False, "prog", []),
        (["prog", "-h", "--", "x"], False, "prog", ["-h", "--", "x"]),
        (["prog", "", "a b"], False, "prog", ["", "a b"]),
    ],
)
def test_parse_args(argv, help_, program, args):
    ns = parse_args(argv)

    assert ns.help is help_
    assert ns.program == program
    assert ns.args == args


def test_usage_mentions_environment():
    text = build_parser().format_help()

    assert text.startswith("usage: swiftly")
    assert "SWIFTLY_CACHE_PATH" in text


def test_main_compiles_and_runs(tool_env: Path, write_script, fake_compiler, capfd):
    src = write_script("hello", mtime=1000)

    assert _exit_status([str(src), "a b", "c"]) == 0
    assert capfd.readouterr().out == "hello:2:a b c\n"
    assert (tool_env / "hello" / "1000" / "hello").is_file()

    assert _exit_status([str(src)]) == 0
    assert len(fake_compiler.calls()) == 1


def test_main_exits_with_program_status(tool_env: Path, write_script):
    src = write_script("failing", mtime=1000, exit_code=9)

    assert _exit_status([str(src)]) == 9


def test_main_build_failure_exits_with_compiler_status(tool_env: Path, write_script, capfd):
    # The fake compiler rejects sources without the .swift extension with status 3.
    src = write_script("bad.txt", mtime=1000)

    assert _exit_status([str(src)]) == 3
    assert "bad.txt:" not in capfd.readouterr().out


def test_main_cache_root_not_creatable(
    tool_env: Path, write_script, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, fake_compiler
):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    monkeypatch.setenv("SWIFTLY_CACHE_PATH", str(blocker / "cache"))
    src = write_script("hello", mtime=1000)

    assert _exit_status([str(src)]) == 1
    assert fake_compiler.calls() == []


def test_main_falls_back_to_interpreter(
    tool_env: Path, fake_interpreter, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capfd
):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("PATH", os.pathsep.join([str(tmp_path / "empty"), os.environ["PATH"]]))

    assert _exit_status(["--version"]) == 7
    assert fake_interpreter.calls() == ["[--version]"]
    assert not tool_env.exists()
    capfd.readouterr()


def test_main_without_program_runs_interpreter(tool_env: Path, fake_interpreter, capfd):
    assert _exit_status([]) == 1
    assert fake_interpreter.calls() == [""]
    capfd.readouterr()


def test_main_help(tool_env: Path, fake_interpreter, capfd):
    assert _exit_status(["-h"]) == 1

    out = capfd.readouterr().out
    assert out.startswith("usage: swiftly")
    assert out.endswith("INTERPRETER HELP\n")
    assert fake_interpreter.calls() == ["[-h]"]


def test_main_help_ignores_trailing_arguments(tool_env: Path, fake_interpreter, capfd):
    assert _exit_status(["-h", "--anything"]) == 1

    out = capfd.readouterr().out
    assert out.startswith("usage: swiftly")
    assert out.endswith("INTERPRETER HELP\n")


def test_main_invalid_log_level(tool_env: Path, monkeypatch: pytest.MonkeyPatch, fake_compiler):
    monkeypatch.setenv("SWIFTLY_LOG_LEVEL", "chatty")

    assert _exit_status(["anything"]) == 1
    assert fake_compiler.calls() == []


@pytest.mark.skipif(sys.platform == "win32", reason="needs POSIX process groups")
def test_keyboard_interrupt_is_left_to_the_program(tool_env: Path, write_script, tmp_path: Path):
    ready = tmp_path / "ready"
    body = (
        "trap 'echo trapped-int' INT\n"
        f"touch '{ready}'\n"
        "sleep 1 &\n"
        "wait\n"
        "wait\n"
        "echo finished-cleanly\n"
    )
    src = write_script("trapper", mtime=1000, body=body)
    package_root = str(Path(swiftly.__file__).resolve().parents[1])
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [package_root, env.get("PYTHONPATH")]))

    # A new session stands in for the terminal's foreground process group.
    proc = subprocess.Popen(
        [sys.executable, "-m", "swiftly.cli.main", str(src)],
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        env=env,
        start_new_session=True,
    )
    try:
        deadline = time.monotonic() + 30
        while not ready.exists():
            assert proc.poll() is None, proc.communicate()
            assert time.monotonic() < deadline
            time.sleep(0.05)
        time.sleep(0.2)
        os.killpg(proc.pid, signal.SIGINT)
        out, err = proc.communicate(timeout=30)
    finally:
        if proc.poll() is None:
            proc.kill()
            proc.wait()

    assert proc.returncode == 0
    assert out.splitlines() == ["trapped-int", "finished-cleanly", "trapper:0:"]
    assert "Traceback" not in err
    assert "KeyboardInterrupt" not in err


if __name__ == "__main__":
    pytest.main(sys.argv)
