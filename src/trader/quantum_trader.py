from __future__ import annotations

from src.domain.models import AppConfig


class QuantumTrader:
    """
    The application the command line runs.

    Construction only stores the configuration; all work happens in `execute()`.
    """

    def __init__(self, config: AppConfig | None = None):
        self.config = config or AppConfig()

    @property
    def verbose(self) -> bool:
        return bool(self.config.verbose)

    async def execute(self) -> None:
        return None
