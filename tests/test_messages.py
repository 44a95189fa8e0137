import pytest

from rustlings.solutions.messages import (
    ChangeColor,
    Cons,
    Echo,
    Move,
    Nil,
    Point,
    Quit,
    State,
    create_empty_list,
    create_non_empty_list,
)


def test_match_message_call(capsys):
    state = State(quit=False, position=Point(0, 0), color=(0, 0, 0))
    state.process(ChangeColor(255, 0, 255))
    state.process(Echo("hello world"))
    state.process(Move(Point(10, 15)))
    state.process(Quit())

    assert state.color == (255, 0, 255)
    assert state.position.x == 10
    assert state.position.y == 15
    assert state.quit is True
    assert capsys.readouterr().out == "hello world\n"


def test_unknown_message_is_rejected():
    state = State(color=(0, 0, 0), position=Point(0, 0))
    with pytest.raises(TypeError):
        state.process("jump")


def test_create_empty_list():
    assert create_empty_list() == Nil()


def test_create_non_empty_list():
    non_empty = create_non_empty_list()
    assert non_empty != create_empty_list()
    assert non_empty == Cons(1, Cons(2, Nil()))