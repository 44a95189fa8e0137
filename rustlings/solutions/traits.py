"""Solutions to the trait exercises: appending "Bar", shared licensing info and combined behaviour."""

from __future__ import annotations

from dataclasses import dataclass
from functools import singledispatch
from typing import Any


@singledispatch
def append_bar(value: Any) -> Any:
    """Append "Bar" to a string, or the element "Bar" to a list."""
    raise TypeError(f"cannot append Bar to {type(value).__name__}")


@append_bar.register
def _(value: str) -> str:
    return value + "Bar"


@append_bar.register
def _(value: list) -> list:
    return [*value, "Bar"]


class Licensed:
    """Anything that carries licensing information."""

    def licensing_info(self) -> str:
        return "Some information"


@dataclass
class SomeSoftware(Licensed):
    """Software versioned by a number."""

    version_number: int = 1


@dataclass
class OtherSoftware(Licensed):
    """Software versioned by a string."""

    version_number: str = "v2.0.0"


def compare_license_types(software: Licensed, software_two: Licensed) -> bool:
    """True when both carry the same licensing information."""
    return software.licensing_info() == software_two.licensing_info()


class _SomeTrait:
    def some_function(self) -> bool:
        return True


class _OtherTrait:
    def other_function(self) -> bool:
        return True


class SomeStruct(_SomeTrait, _OtherTrait):
    """Has both behaviours."""


class OtherStruct(_SomeTrait, _OtherTrait):
    """Has both behaviours."""


def some_func(item: Any) -> bool:
    """True when the item supports both behaviours and both report success."""
    return item.some_function() and item.other_function()