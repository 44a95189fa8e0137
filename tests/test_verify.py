import subprocess

import pytest

from rustlings.exercise import Exercise, Mode
from rustlings.verify import ExerciseFailed, test, verify


class FakeToolchain:
    def __init__(self, compile_rc=0, run_rc=0, stdout=b"", stderr=b""):
        self.compile_rc = compile_rc
        self.run_rc = run_rc
        self.stdout = stdout
        self.stderr = stderr
        self.calls = []

    def __call__(self, args, **kwargs):
        self.calls.append([str(a) for a in args])
        if args[0] in ("rustc", "cargo"):
            return subprocess.CompletedProcess(args, self.compile_rc, b"", b"compiler says no")
        return subprocess.CompletedProcess(args, self.run_rc, self.stdout, self.stderr)

    def binary_runs(self):
        return [c for c in self.calls if c[0] not in ("rustc", "cargo")]


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("NO_EMOJI", raising=False)
    return tmp_path


@pytest.fixture
def toolchain(monkeypatch):
    def install(**kwargs):
        fake = FakeToolchain(**kwargs)
        monkeypatch.setattr(subprocess, "run", fake)
        return fake

    return install


def make_exercise(root, name, mode, pending=False):
    lines = ["// fake_exercise", ""]
    if pending:
        lines += ["// I AM NOT DONE", ""]
    lines += ["fn main() {", "", "}"]
    path = root / f"{name}.rs"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return Exercise(name=name, path=path, mode=mode, hint="")


def test_verify_all_done_passes(workdir, toolchain, capsys):
    fake = toolchain()
    first = make_exercise(workdir, "one", Mode.COMPILE)
    second = make_exercise(workdir, "two", Mode.TEST)
    verify([first, second], (0, 2), False)
    assert len(fake.binary_runs()) == 2
    assert "2/2" in capsys.readouterr().err


def test_verify_stops_at_pending_exercise(workdir, toolchain, capsys):
    fake = toolchain()
    pending = make_exercise(workdir, "pending", Mode.COMPILE, pending=True)
    done = make_exercise(workdir, "done", Mode.COMPILE)
    with pytest.raises(ExerciseFailed) as excinfo:
        verify([pending, done], (0, 2), False)
    assert excinfo.value.exercise is pending
    assert not any(str(done.path) in call for call in fake.calls)
    out = capsys.readouterr().out
    assert "Successfully ran" in out
    assert "I AM NOT DONE" in out


def test_verify_reports_compile_failure(workdir, toolchain, capsys):
    fake = toolchain(compile_rc=1)
    exercise = make_exercise(workdir, "broken", Mode.COMPILE)
    with pytest.raises(ExerciseFailed):
        verify([exercise], (0, 1), False)
    assert fake.binary_runs() == []
    out = capsys.readouterr().out
    assert "Compiling of" in out
    assert "compiler says no" in out


def test_verify_reports_failing_tests(workdir, toolchain, capsys):
    toolchain(run_rc=101, stdout=b"assertion failed")
    exercise = make_exercise(workdir, "failing", Mode.TEST)
    with pytest.raises(ExerciseFailed):
        verify([exercise], (0, 1), False)
    out = capsys.readouterr().out
    assert "Testing of" in out
    assert "assertion failed" in out


def test_verify_reports_failing_binary(workdir, toolchain, capsys):
    toolchain(run_rc=1, stderr=b"panicked at main")
    exercise = make_exercise(workdir, "crashing", Mode.COMPILE)
    with pytest.raises(ExerciseFailed):
        verify([exercise], (0, 1), False)
    out = capsys.readouterr().out
    assert "with errors" in out
    assert "panicked at main" in out


def test_prompt_shows_program_output(workdir, toolchain, capsys):
    toolchain(stdout=b"Hello from main")
    exercise = make_exercise(workdir, "chatty", Mode.COMPILE, pending=True)
    with pytest.raises(ExerciseFailed):
        verify([exercise], (0, 1), False)
    out = capsys.readouterr().out
    assert "Output:" in out
    assert "Hello from main" in out


def test_prompt_without_emoji(workdir, toolchain, capsys, monkeypatch):
    monkeypatch.setenv("NO_EMOJI", "1")
    toolchain()
    exercise = make_exercise(workdir, "plain", Mode.TEST, pending=True)
    with pytest.raises(ExerciseFailed):
        verify([exercise], (0, 1), False)
    assert "~*~ The code is compiling, and the tests pass! ~*~" in capsys.readouterr().out


def test_verify_clippy_writes_manifest(workdir, toolchain):
    (workdir / "exercises" / "clippy").mkdir(parents=True)
    fake = toolchain()
    exercise = make_exercise(workdir, "clippy1", Mode.CLIPPY)
    verify([exercise], (0, 1), False)
    manifest = (workdir / "exercises" / "clippy" / "Cargo.toml").read_text(encoding="utf-8")
    assert 'name = "clippy1"' in manifest
    assert any(call[:2] == ["cargo", "clippy"] for call in fake.calls)


def test_test_does_not_prompt(workdir, toolchain, capsys):
    fake = toolchain()
    exercise = make_exercise(workdir, "pending_test", Mode.TEST, pending=True)
    test(exercise, False)
    assert "--test" in fake.calls[0]
    assert "--show-output" in fake.calls[1]
    assert "I AM NOT DONE" not in capsys.readouterr().out


@pytest.mark.parametrize("verbose", [True, False])
def test_test_verbose_controls_output(workdir, toolchain, capsys, verbose):
    toolchain(stdout=b"THIS TEST TOO SHALL PASS")
    exercise = make_exercise(workdir, "testSuccess", Mode.TEST)
    test(exercise, verbose)
    assert ("THIS TEST TOO SHALL PASS" in capsys.readouterr().out) is verbose


def test_test_failure_raises(workdir, toolchain):
    toolchain(run_rc=101)
    exercise = make_exercise(workdir, "testNotPassed", Mode.TEST)
    with pytest.raises(ExerciseFailed) as excinfo:
        test(exercise, False)
    assert excinfo.value.exercise is exercise