"""Runner that compiles, tests and watches small Rust exercises, with worked Python answers."""

__version__ = "5.3.0"