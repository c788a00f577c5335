"""
Line-oriented terminal I/O.

The CLI adapter reads one key per line and redraws the whole screen after
every step. `IOInterface` is the seam that lets tests replace the console
with a scripted one, and `AsyncIOInterfaceWrapper` moves the blocking
`input` call off the event loop.
"""

from __future__ import annotations

import asyncio
import logging
import os
import queue
import threading
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class IOInterface(ABC):
    """A place to write screens to and read key lines from."""

    @abstractmethod
    def output(self, message: str) -> None:
        """Write a block of text."""

    @abstractmethod
    def input(self, prompt: str) -> str:
        """
        Read one line without its newline.

        Raises EOFError once input is exhausted.
        """

    def clear(self) -> None:
        """Wipe the screen before a full redraw. No-op by default."""


class TestIOInterface(IOInterface):
    """
    Scripted terminal for tests.

    Input lines are replayed in order; EOFError is raised once they run
    out, as a closed stdin would. Everything written and every prompt shown
    is recorded.
    """

    __test__ = False

    def __init__(self, lines: list[str] | None = None):
        self.input_responses: list[str] = list(lines or [])
        self.sent_messages: list[str] = []
        self.prompts: list[str] = []
        self.clear_count = 0

    def add_input(self, line: str) -> None:
        self.input_responses.append(line)

    def output(self, message: str) -> None:
        self.sent_messages.append(message)

    def input(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.input_responses:
            raise EOFError("scripted input exhausted")
        return self.input_responses.pop(0)

    def clear(self) -> None:
        self.clear_count += 1


class ConsoleIOInterface(IOInterface):
    """The real terminal: stdout, stdin and the platform clear command."""

    def output(self, message: str) -> None:
        print(message, flush=True)

    def input(self, prompt: str) -> str:
        return input(prompt)

    def clear(self) -> None:
        os.system("cls" if os.name == "nt" else "clear")


class AsyncIOInterfaceWrapper:
    """
    Awaitable view of an `IOInterface`.

    Calls run one at a time on a single daemon worker thread, so the event
    loop keeps running dealer pauses while the terminal waits for a key, and
    reads and writes reach the terminal in the order they were issued. The
    thread is a daemon: a read still blocked in `input()` when the game
    exits does not keep the process alive.
    """

    def __init__(self, io_interface: IOInterface):
        self.io_interface = io_interface
        self._calls: queue.Queue = queue.Queue()
        self._worker: threading.Thread | None = None

    def _ensure_worker(self) -> None:
        if self._worker is None:
            self._worker = threading.Thread(
                target=self._work, name="termjack-io", daemon=True
            )
            self._worker.start()

    def _work(self) -> None:
        while True:
            call = self._calls.get()
            if call is None:
                return
            loop, future, func, args = call
            if future.cancelled():
                continue
            try:
                result = func(*args)
            except Exception as exc:
                self._resolve(loop, future, exc, failed=True)
            else:
                self._resolve(loop, future, result, failed=False)

    @staticmethod
    def _resolve(loop, future, value, failed: bool) -> None:
        def settle():
            if future.done():
                return
            if failed:
                future.set_exception(value)
            else:
                future.set_result(value)

        try:
            loop.call_soon_threadsafe(settle)
        except RuntimeError:
            logger.debug("Event loop closed before terminal call %r returned", value)

    async def _call(self, func, *args):
        loop = asyncio.get_running_loop()
        future = loop.create_future()
        self._ensure_worker()
        self._calls.put((loop, future, func, args))
        return await future

    async def output(self, message: str) -> None:
        await self._call(self.io_interface.output, message)

    async def input(self, prompt: str) -> str:
        return await self._call(self.io_interface.input, prompt)

    @property
    def worker(self) -> threading.Thread | None:
        return self._worker

    def close(self) -> None:
        """Stop the worker once its current call returns; queued calls are dropped."""
        while True:
            try:
                self._calls.get_nowait()
            except queue.Empty:
                break
        self._calls.put(None)
