"""
Command-line bootstrap: argv -> ParsedArgs -> AppConfig -> one application run.

The only failure that is intercepted is a failure of the run itself (or of loading
configuration, which happens before the run). Both end in the process controller:
error text on stderr and exit status 1. A successful run writes nothing and exits 0.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Sequence

import yaml

from src.cli.args import parse_args
from src.cli.process import ProcessController
from src.cli.state import RunEvent, RunState, RunStateMachine
from src.domain.models import AppConfig, ParsedArgs
from src.ports.application import ApplicationFactory, ApplicationPort
from src.utils.config_loader import load_config
from src.utils.logging_setup import configure_logging

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0

ConfigLoader = Callable[[str | None], dict[str, Any]]


def _default_factory(config: AppConfig) -> ApplicationPort:
    from src.trader.quantum_trader import QuantumTrader

    return QuantumTrader(config)


def build_app_config(parsed: ParsedArgs, settings: dict[str, Any] | None = None) -> AppConfig:
    """CLI value wins; otherwise the config file / environment; otherwise False."""
    if parsed.verbose is not None:
        verbose = bool(parsed.verbose)
    else:
        verbose = bool(((settings or {}).get("app") or {}).get("verbose", False))
    return AppConfig(verbose=verbose)


class Bootstrapper:
    def __init__(
        self,
        app_factory: ApplicationFactory | None = None,
        process: ProcessController | None = None,
        config_loader: ConfigLoader | None = None,
    ):
        self.app_factory = app_factory or _default_factory
        self.process = process or ProcessController()
        self.config_loader = config_loader or load_config
        self.machine = RunStateMachine()
        self.app: ApplicationPort | None = None

    async def _execute(self, app: ApplicationPort) -> BaseException | None:
        try:
            await app.execute()
        except Exception as e:
            self.machine.transition(RunEvent.FAIL)
            logger.debug("Application run failed: %s: %s", type(e).__name__, e)
            return e
        self.machine.transition(RunEvent.SUCCEED)
        return None

    def run(self, argv: Sequence[str] | None = None) -> int:
        parsed = parse_args(argv)
        configure_logging(verbose=bool(parsed.verbose))

        try:
            settings = self.config_loader(parsed.config)
        except (OSError, ValueError, yaml.YAMLError) as e:
            self.machine.transition(RunEvent.FAIL)
            self.process.fail(e)

        config = build_app_config(parsed, settings)
        configure_logging(
            verbose=config.verbose,
            level=str((settings.get("logging") or {}).get("level", "INFO")),
        )
        if parsed.unknown:
            logger.warning("Ignoring unrecognised arguments: %s", " ".join(parsed.unknown))
        logger.debug("Parsed arguments: %s", parsed.to_dict())

        self.app = self.app_factory(config)

        error = asyncio.run(self._execute(self.app))
        if self.machine.state is RunState.FAILED and error is not None:
            self.process.fail(error)
        return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> None:
    Bootstrapper().run(argv)
