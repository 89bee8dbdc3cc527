from __future__ import annotations

from typing import Callable, Protocol

from src.domain.models import AppConfig


class ApplicationPort(Protocol):
    async def execute(self) -> None: ...


ApplicationFactory = Callable[[AppConfig], ApplicationPort]
