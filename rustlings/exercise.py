"""Exercises listed in info.toml: their state, compilation and execution."""

from __future__ import annotations

import os
import re
import subprocess
import threading
import tomllib
import weakref
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

RUSTC_COLOR_ARGS = ("--color", "always")
I_AM_DONE_REGEX = re.compile(r"^\s*///?\s*I\s+AM\s+NOT\s+DONE", re.MULTILINE)
CONTEXT = 2
CLIPPY_CARGO_TOML_PATH = "./exercises/clippy/Cargo.toml"


class Mode(Enum):
    """How an exercise is checked."""

    COMPILE = "compile"
    TEST = "test"
    CLIPPY = "clippy"


@dataclass(frozen=True)
class ContextLine:
    """A source line shown around the pending marker."""

    line: str
    number: int
    important: bool


@dataclass(frozen=True)
class ExerciseOutput:
    """Captured standard output and error of a finished process."""

    stdout: str
    stderr: str

    @classmethod
    def from_process(cls, result: subprocess.CompletedProcess) -> ExerciseOutput:
        return cls(
            stdout=(result.stdout or b"").decode("utf-8", errors="replace"),
            stderr=(result.stderr or b"").decode("utf-8", errors="replace"),
        )


class _ProcessFailure(Exception):
    def __init__(self, output: ExerciseOutput) -> None:
        super().__init__(output.stderr or output.stdout)
        self.output = output


class CompileError(_ProcessFailure):
    """Compiling (or linting) an exercise failed."""


class RunError(_ProcessFailure):
    """The compiled exercise exited unsuccessfully."""


def _temp_file() -> Path:
    return Path.cwd() / f"temp_{os.getpid()}_{threading.get_ident()}"


def _remove(path: Path) -> None:
    try:
        path.unlink()
    except OSError:
        pass


def _lines(source: str) -> list[str]:
    lines = source.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class CompiledExercise:
    """A successfully built exercise; its binary is removed on close."""

    def __init__(self, exercise: Exercise, binary: Path) -> None:
        self.exercise = exercise
        self.binary = binary
        self._finalizer = weakref.finalize(self, _remove, binary)

    def run(self) -> ExerciseOutput:
        """Run the binary; raise RunError if it fails."""
        return self.exercise._run(self.binary)

    def close(self) -> None:
        self._finalizer()

    def __enter__(self) -> CompiledExercise:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


@dataclass
class Exercise:
    """One exercise entry of info.toml."""

    name: str
    path: Path
    mode: Mode
    hint: str

    def __post_init__(self) -> None:
        self.path = Path(self.path)
        self.mode = Mode(self.mode)

    @classmethod
    def from_dict(cls, entry: dict[str, Any]) -> Exercise:
        try:
            return cls(
                name=entry["name"],
                path=Path(entry["path"]),
                mode=Mode(entry["mode"]),
                hint=entry["hint"],
            )
        except KeyError as exc:
            raise ValueError(f"missing field `{exc.args[0]}`") from exc

    def __str__(self) -> str:
        return str(self.path)

    def compile(self) -> CompiledExercise:
        """Build the exercise; raise CompileError with the compiler output on failure."""
        binary = _temp_file()
        if self.mode is Mode.CLIPPY:
            result = self._clippy(binary)
        else:
            args = ["rustc"]
            if self.mode is Mode.TEST:
                args.append("--test")
            args += [str(self.path), "-o", str(binary), *RUSTC_COLOR_ARGS]
            result = subprocess.run(args, capture_output=True)

        if result.returncode == 0:
            return CompiledExercise(self, binary)
        _remove(binary)
        raise CompileError(ExerciseOutput.from_process(result))

    def _clippy(self, binary: Path) -> subprocess.CompletedProcess:
        cargo_toml = (
            "[package]\n"
            f'name = "{self.name}"\n'
            'version = "0.0.1"\n'
            'edition = "2021"\n'
            "[[bin]]\n"
            f'name = "{self.name}"\n'
            f'path = "{self.name}.rs"'
        )
        if "NO_EMOJI" in os.environ:
            error_msg = "Failed to write Clippy Cargo.toml file."
        else:
            error_msg = "Failed to write 📎 Clippy 📎 Cargo.toml file."
        try:
            Path(CLIPPY_CARGO_TOML_PATH).write_text(cargo_toml, encoding="utf-8")
        except OSError as exc:
            raise RuntimeError(error_msg) from exc

        # Build an executable too so clippy exercises can be run afterwards.
        subprocess.run(
            ["rustc", str(self.path), "-o", str(binary), *RUSTC_COLOR_ARGS],
            capture_output=True,
        )
        # A clean is needed for clippy to report every lint.
        subprocess.run(
            ["cargo", "clean", "--manifest-path", CLIPPY_CARGO_TOML_PATH, *RUSTC_COLOR_ARGS],
            capture_output=True,
        )
        return subprocess.run(
            [
                "cargo",
                "clippy",
                "--manifest-path",
                CLIPPY_CARGO_TOML_PATH,
                *RUSTC_COLOR_ARGS,
                "--",
                "-D",
                "warnings",
                "-D",
                "clippy::float_cmp",
            ],
            capture_output=True,
        )

    def _run(self, binary: Path) -> ExerciseOutput:
        args = [str(binary)]
        if self.mode is Mode.TEST:
            args.append("--show-output")
        result = subprocess.run(args, capture_output=True)
        output = ExerciseOutput.from_process(result)
        if result.returncode != 0:
            raise RunError(output)
        return output

    def state(self) -> list[ContextLine]:
        """Return the lines around the pending marker, or an empty list once done."""
        source = self.path.read_text(encoding="utf-8")
        if not I_AM_DONE_REGEX.search(source):
            return []

        lines = _lines(source)
        matched = next(
            (i for i, line in enumerate(lines) if I_AM_DONE_REGEX.search(line)), None
        )
        if matched is None:
            raise RuntimeError(f"{self.path}: pending marker spans several lines")

        first = max(matched - CONTEXT, 0)
        window = lines[first : matched + CONTEXT + 1]
        return [
            ContextLine(line=line, number=index + 1, important=index == matched)
            for index, line in enumerate(window, start=first)
        ]

    def looks_done(self) -> bool:
        """True when the exercise no longer carries the pending marker."""
        return not self.state()


def load_exercises(path: str | os.PathLike = "info.toml") -> list[Exercise]:
    """Read the exercise list from an info.toml file."""
    with open(path, "rb") as fh:
        data = tomllib.load(fh)
    try:
        entries = data["exercises"]
    except KeyError as exc:
        raise ValueError("missing field `exercises`") from exc
    return [Exercise.from_dict(entry) for entry in entries]