"""Solutions to the message-processing and cons-list exercises."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Point:
    """A position on a small grid."""

    x: int
    y: int


@dataclass(frozen=True)
class Quit:
    """Ask the state to quit."""


@dataclass(frozen=True)
class Echo:
    """Print the text."""

    text: str


@dataclass(frozen=True)
class Move:
    """Move to the point."""

    point: Point


@dataclass(frozen=True)
class ChangeColor:
    """Change to the given colour."""

    red: int
    green: int
    blue: int


Message = Quit | Echo | Move | ChangeColor


@dataclass
class State:
    """Colour, position and quit flag updated by messages."""

    color: tuple[int, int, int]
    position: Point
    quit: bool = False

    def process(self, message: Message) -> None:
        """Apply one message to the state."""
        match message:
            case ChangeColor(red=red, green=green, blue=blue):
                self.color = (red, green, blue)
            case Echo(text=text):
                print(text)
            case Move(point=point):
                self.position = point
            case Quit():
                self.quit = True
            case _:
                raise TypeError(f"unknown message: {message!r}")


@dataclass(frozen=True)
class Nil:
    """The end of a cons list."""


@dataclass(frozen=True)
class Cons:
    """A value followed by the rest of the list."""

    value: int
    rest: Cons | Nil


def create_empty_list() -> Nil:
    return Nil()


def create_non_empty_list() -> Cons:
    return Cons(1, Cons(2, Nil()))