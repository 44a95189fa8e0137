"""Checking exercises in order, with a progress bar and completion prompts."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterable

from rich.console import Console
from rich.status import Status
from rich.text import Text

from .exercise import CompileError, Exercise, ExerciseOutput, Mode, RunError
from .ui import success, warn

BAR_WIDTH = 60
SEPARATOR = "===================="


class ExerciseFailed(Exception):
    """An exercise did not compile, did not pass, or is still marked as pending."""

    def __init__(self, exercise: Exercise) -> None:
        super().__init__(f"{exercise} is not finished")
        self.exercise = exercise


def _stdout() -> Console:
    return Console(file=sys.stdout, highlight=False, emoji=False, soft_wrap=True)


def _spinner(message: str) -> Status:
    return Console(file=sys.stderr, highlight=False).status(message)


def _show_progress(done: int, total: int, message: str) -> None:
    filled = min(BAR_WIDTH * done // total, BAR_WIDTH) if total else BAR_WIDTH
    if filled < BAR_WIDTH:
        head, tail = "#" * filled + ">", "-" * (BAR_WIDTH - filled - 1)
    else:
        head, tail = "#" * BAR_WIDTH, ""
    line = Text.assemble(
        "Progress: [", (head, "green"), (tail, "red"), f"] {done}/{total} {message}"
    )
    Console(file=sys.stderr, highlight=False, soft_wrap=True).print(line)


def _report_compile_failure(exercise: Exercise, output: ExerciseOutput) -> None:
    warn(f"Compiling of {exercise} failed! Please try again. Here's the output:")
    print(output.stderr)


def _success_message(mode: Mode, no_emoji: bool) -> str:
    if mode is Mode.COMPILE:
        return "The code is compiling!"
    if mode is Mode.TEST:
        return "The code is compiling, and the tests pass!"
    if no_emoji:
        return "The code is compiling, and Clippy is happy!"
    return "The code is compiling, and 📎 Clippy 📎 is happy!"


def _prompt_for_completion(exercise: Exercise, prompt_output: str | None = None) -> bool:
    context = exercise.state()
    if not context:
        return True

    verb = {Mode.COMPILE: "ran", Mode.TEST: "tested", Mode.CLIPPY: "compiled"}[exercise.mode]
    success(f"Successfully {verb} {exercise}!")

    no_emoji = "NO_EMOJI" in os.environ
    message = _success_message(exercise.mode, no_emoji)
    console = _stdout()

    print()
    print(f"~*~ {message} ~*~" if no_emoji else f"🎉 🎉  {message} 🎉 🎉")
    print()

    if prompt_output is not None:
        print("Output:")
        console.print(Text(SEPARATOR, style="bold"))
        print(prompt_output)
        console.print(Text(SEPARATOR, style="bold"))
        print()

    print("You can keep working on this exercise,")
    console.print(
        Text.assemble(
            "or jump into the next one by removing the ",
            ("`I AM NOT DONE`", "bold"),
            " comment:",
        )
    )
    print()
    for context_line in context:
        console.print(
            Text.assemble(
                (f"{context_line.number:>2}", "bold blue"),
                " ",
                ("|", "blue"),
                "  ",
                (context_line.line, "bold" if context_line.important else ""),
            )
        )
    return False


def _compile_only(exercise: Exercise) -> bool:
    try:
        with _spinner(f"Compiling {exercise}..."):
            compiled = exercise.compile()
    except CompileError as exc:
        _report_compile_failure(exercise, exc.output)
        return False
    compiled.close()
    return _prompt_for_completion(exercise)


def _compile_and_run_interactively(exercise: Exercise) -> bool:
    try:
        with _spinner(f"Compiling {exercise}...") as status:
            with exercise.compile() as compiled:
                status.update(f"Running {exercise}...")
                output = compiled.run()
    except CompileError as exc:
        _report_compile_failure(exercise, exc.output)
        return False
    except RunError as exc:
        warn(f"Ran {exercise} with errors")
        print(exc.output.stdout)
        print(exc.output.stderr)
        return False
    return _prompt_for_completion(exercise, output.stdout)


def _compile_and_test(exercise: Exercise, interactive: bool, verbose: bool) -> bool:
    try:
        with _spinner(f"Testing {exercise}..."):
            with exercise.compile() as compiled:
                output = compiled.run()
    except CompileError as exc:
        _report_compile_failure(exercise, exc.output)
        return False
    except RunError as exc:
        warn(f"Testing of {exercise} failed! Please try again. Here's the output:")
        print(exc.output.stdout)
        return False

    if verbose:
        print(output.stdout)
    return _prompt_for_completion(exercise) if interactive else True


def verify(
    exercises: Iterable[Exercise],
    progress: tuple[int, int] | None = None,
    verbose: bool = False,
) -> None:
    """Check the exercises in order; raise ExerciseFailed at the first one not done."""
    if progress is None:
        exercises = list(exercises)
        progress = (0, len(exercises))
    done, total = progress
    _show_progress(done, total, f"({0.0:.1f} %)")

    for exercise in exercises:
        if exercise.mode is Mode.TEST:
            passed = _compile_and_test(exercise, interactive=True, verbose=verbose)
        elif exercise.mode is Mode.COMPILE:
            passed = _compile_and_run_interactively(exercise)
        else:
            passed = _compile_only(exercise)
        if not passed:
            raise ExerciseFailed(exercise)
        done += 1
        _show_progress(done, total, f"({done / total * 100:.1f} %)")


def test(exercise: Exercise, verbose: bool = False) -> None:
    """Compile and run the exercise's test harness; raise ExerciseFailed on failure."""
    if not _compile_and_test(exercise, interactive=False, verbose=verbose):
        raise ExerciseFailed(exercise)