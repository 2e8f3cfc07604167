"""Where: src/appstage/platform/process.py
What: Spawn a child process, stream its output into the logger, wait with a timeout.
Why: Keep process plumbing out of the publish use case so it stays testable.
"""

from __future__ import annotations

import contextvars
import logging
import os
import subprocess
import threading
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO

from appstage.platform.logging import logger as default_logger

# Grandchild processes (e.g. build server nodes) can keep the pipes open after
# the child exits, so readers are only waited on for a bounded time.
_READER_JOIN_SECONDS: float = 5.0


@dataclass(slots=True)
class ProcessOutcome:
    """Result of waiting on a child process.

    ``exit_code`` is ``None`` when the timeout elapsed; the process is then
    left running and still reachable through ``process``.
    """

    command: list[str]
    process: subprocess.Popen[str]
    exit_code: int | None
    stdout: list[str] = field(default_factory=list)
    stderr: list[str] = field(default_factory=list)

    @property
    def timed_out(self) -> bool:
        return self.exit_code is None


def _drain(
    stream: IO[str],
    sink: list[str],
    level: int,
    prefix: str,
    log: logging.Logger,
) -> None:
    with stream:
        for line in stream:
            text = line.rstrip("\r\n")
            sink.append(text)
            log.log(level, "[%s] %s", prefix, text)


def _start_reader(
    stream: IO[str],
    sink: list[str],
    level: int,
    prefix: str,
    log: logging.Logger,
    name: str,
) -> threading.Thread:
    # Each reader runs in a copy of the caller's context so log scopes carry over.
    context = contextvars.copy_context()
    reader = threading.Thread(
        target=context.run,
        args=(_drain, stream, sink, level, prefix, log),
        name=name,
        daemon=True,
    )
    reader.start()
    return reader


def run_and_capture(
    command: Sequence[str],
    *,
    cwd: Path,
    timeout: float,
    env: Mapping[str, str] | None = None,
    log_prefix: str,
    log: logging.Logger | None = None,
) -> ProcessOutcome:
    """Run ``command`` in ``cwd`` and block until it exits or ``timeout`` elapses.

    Standard output is logged at info level, standard error at warning level.
    ``env`` entries are layered over the current environment.

    Raises:
        OSError: The executable could not be started.
    """
    log = log or default_logger
    process_env = dict(os.environ)
    if env:
        process_env.update(env)

    argv = list(command)
    process = subprocess.Popen(
        argv,
        cwd=str(cwd),
        env=process_env,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        encoding="utf-8",
        errors="replace",
    )
    assert process.stdout is not None and process.stderr is not None

    outcome = ProcessOutcome(command=argv, process=process, exit_code=None)
    readers = [
        _start_reader(
            process.stdout, outcome.stdout, logging.INFO, log_prefix, log, f"{log_prefix}-stdout"
        ),
        _start_reader(
            process.stderr, outcome.stderr, logging.WARNING, log_prefix, log, f"{log_prefix}-stderr"
        ),
    ]

    try:
        outcome.exit_code = process.wait(timeout=timeout)
    except subprocess.TimeoutExpired:
        return outcome

    for reader in readers:
        reader.join(timeout=_READER_JOIN_SECONDS)
    return outcome


__all__ = ["ProcessOutcome", "run_and_capture"]
