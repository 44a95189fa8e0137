"""Running a single exercise and resetting it."""

from __future__ import annotations

import subprocess
import sys

from rich.console import Console

from .exercise import CompileError, Exercise, Mode, RunError
from .ui import success, warn
from .verify import ExerciseFailed, test


class RunFailed(Exception):
    """Running or resetting an exercise did not succeed."""

    def __init__(self, exercise: Exercise) -> None:
        super().__init__(f"{exercise} failed")
        self.exercise = exercise


def run(exercise: Exercise, verbose: bool = False) -> None:
    """Compile and run (or test) one exercise; raise RunFailed if it fails."""
    if exercise.mode is Mode.TEST:
        try:
            test(exercise, verbose)
        except ExerciseFailed as exc:
            raise RunFailed(exercise) from exc
    else:
        _compile_and_run(exercise)


def reset(exercise: Exercise) -> None:
    """Discard the changes to the exercise with git stash."""
    try:
        subprocess.run(["git", "stash", "--", str(exercise.path)])
    except OSError as exc:
        raise RunFailed(exercise) from exc


def _compile_and_run(exercise: Exercise) -> None:
    status = Console(file=sys.stderr, highlight=False).status(f"Compiling {exercise}...")
    try:
        with status:
            with exercise.compile() as compiled:
                status.update(f"Running {exercise}...")
                output = compiled.run()
    except CompileError as exc:
        warn(f"Compilation of {exercise} failed!, Compiler error message:\n")
        print(exc.output.stderr)
        raise RunFailed(exercise) from exc
    except RunError as exc:
        print(exc.output.stdout)
        print(exc.output.stderr)
        warn(f"Ran {exercise} with errors")
        raise RunFailed(exercise) from exc

    print(output.stdout)
    success(f"Successfully ran {exercise}")