from __future__ import annotations

import sys
from typing import NoReturn, TextIO

EXIT_FAILURE = 1


def describe_error(err: BaseException) -> str:
    name = type(err).__name__
    text = str(err)
    return f"{name}: {text}" if text else name


class ProcessController:
    """
    Owns the process-wide side effects of a failed run: the stderr diagnostic and the exit status.

    Injected into the bootstrapper so tests can observe a failure without ending the test process.
    """

    def __init__(self, stream: TextIO | None = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolve lazily so redirected/captured stderr is honoured.
        return self._stream if self._stream is not None else sys.stderr

    def fail(self, err: BaseException) -> NoReturn:
        print(describe_error(err), file=self.stream)
        self.stream.flush()
        raise SystemExit(EXIT_FAILURE)
