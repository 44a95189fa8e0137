# rustlings

A runner for small Rust exercises. Each exercise is a `.rs` file listed in an
`info.toml` file. The runner compiles it, runs it or its tests, and shows you
where to carry on. You move to the next exercise by removing the
`// I AM NOT DONE` comment from the file you are working on.

You need `rustc` on your `PATH`. The Clippy exercises also need `cargo`, and
`rustlings reset` needs `git`.

## Installation

```
pip install .
```

## Usage

Run every command from the directory that holds `info.toml`; elsewhere the
command stops with exit code 1.

```
rustlings                  # welcome text and first steps
rustlings watch            # verify exercises in order and re-check on every save
rustlings verify           # verify all exercises in the recommended order
rustlings run <name>       # compile and run (or test) one exercise
rustlings run next         # run the first exercise that is not done yet
rustlings hint <name>      # print the hint for an exercise
rustlings reset <name>     # undo your changes with "git stash -- <file>"
rustlings list             # show every exercise and its status
rustlings lsp              # write rust-project.json for rust-analyzer
rustlings -v               # print the version
```

Global switch: `--nocapture` prints the output of test exercises.

Options for `list`:

- `-p`, `--paths`: print only the paths of the exercises
- `-n`, `--names`: print only the names of the exercises
- `-f`, `--filter <patterns>`: show exercises whose name or path contains one of
  the comma-separated patterns
- `-u`, `--unsolved`: show only exercises not yet solved
- `-s`, `--solved`: show only exercises already solved

The listing ends with a progress line giving the number and percentage of
exercises done.

In watch mode you can type:

- `hint`: print the current exercise's hint
- `clear`: clear the screen
- `quit`: leave watch mode
- `help`: list these commands

Set the environment variable `NO_EMOJI` to get plain-text status markers.

## The `info.toml` file

```toml
[[exercises]]
name = "intro1"
path = "exercises/intro/intro1.rs"
mode = "compile"
hint = "No hints this time ;)"
```

`mode` is one of:

- `compile`: build the file as a program and run it
- `test`: build and run it as a test harness
- `clippy`: lint it with Clippy, with warnings treated as errors

## Using it as a library

```python
from rustlings.exercise import load_exercises
from rustlings.verify import verify, ExerciseFailed

exercises = load_exercises("info.toml")
try:
    verify(exercises, (0, len(exercises)), False)
except ExerciseFailed as failure:
    print("stuck on", failure.exercise.name)
```

- `rustlings.exercise`: `Exercise`, `Mode`, `load_exercises`; `Exercise.state()`
  returns the lines around the pending marker, `Exercise.compile()` raises
  `CompileError`, and `CompiledExercise.run()` raises `RunError`.
- `rustlings.verify`: `verify` and `test`, raising `ExerciseFailed`.
- `rustlings.run`: `run` and `reset`, raising `RunFailed`.
- `rustlings.project`: `RustAnalyzerProject`, which builds `rust-project.json`.
- `rustlings.cli`: `main`, `find_exercise`, `list_exercises`, `watch`.

`rustlings.solutions` holds worked Python answers to a number of the
exercises: `quizzes`, `basics` (conditions, strings, lists, options),
`messages` (message processing and a cons list), `errors`, `hashmaps`, `cow`,
`iterators`, `structs` and `traits`.

## What it does not do

- It ships no exercises and no `info.toml`; point it at a directory that has
  them.
- `rustlings.solutions` has no answers for the type-conversion exercises.

## Running the tests

```
pip install .[test]
pytest
```