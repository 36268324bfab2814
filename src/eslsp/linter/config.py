"""Static linter configuration passed into the run controller."""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence
from pathlib import Path

__all__ = [
    "DEFAULT_EXECUTABLE",
    "LinterConfig",
    "normalize_extra_args",
]

DEFAULT_EXECUTABLE = "eslint"


def normalize_extra_args(extra_args: str | Sequence[str] | None) -> tuple[str, ...]:
    """
    Normalize user-supplied extra arguments.

    A single string is kept as one argument; a sequence is kept as-is.
    """
    if extra_args is None:
        return ()
    if isinstance(extra_args, str):
        return (extra_args,)
    return tuple(extra_args)


@dataclasses.dataclass(frozen=True)
class LinterConfig:
    """Configuration for invoking the external linter."""

    executable: str = DEFAULT_EXECUTABLE
    extra_args: tuple[str, ...] = ()
    project_root: Path | None = None
    encoding: str = "utf-8"
    show_rule_name: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "extra_args", normalize_extra_args(self.extra_args))
