from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ParsedArgs:
    verbose: bool | None = None
    input: str | None = None
    output: str | None = None
    config: str | None = None
    unknown: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "verbose": self.verbose,
            "input": self.input,
            "output": self.output,
            "config": self.config,
            "unknown": list(self.unknown),
        }


@dataclass(frozen=True)
class AppConfig:
    # input/output are parsed on the command line but are not part of the app config.
    verbose: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"verbose": bool(self.verbose)}
