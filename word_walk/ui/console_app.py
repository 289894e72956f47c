"""Line-oriented terminal front end for the playback controller."""

from __future__ import annotations

import asyncio
import logging
import sys
import threading
from typing import Callable

from ..application.errors import UnsupportedCapability
from ..application.playback_controller import PlaybackController
from ..application.ui_hooks import PlaybackHooks
from ..domain.session import PlaybackSnapshot
from .common import COMMAND_HELP, group_list_text, render_entry_card

logger = logging.getLogger(__name__)

QUIT_COMMANDS = {"quit", "exit", "q"}


class ConsoleApp:
    """Reads commands from a line source and renders snapshots as they change."""

    def __init__(
        self,
        controller: PlaybackController,
        *,
        write: Callable[[str], None] | None = None,
        read_line: Callable[[], str] | None = None,
    ) -> None:
        self.controller = controller
        self._write = write or print
        self._read_line = read_line or sys.stdin.readline
        self._last_card: str | None = None
        self._commands: dict[str, Callable[[], None]] = {
            "play": controller.play,
            "pause": controller.pause,
            "resume": controller.resume,
            "stop": controller.stop,
            "restart": controller.restart,
            "start-over": controller.restart,
            "next": controller.seek_next,
            "n": controller.seek_next,
            "prev": controller.seek_prev,
            "p": controller.seek_prev,
        }
        controller.set_hooks(PlaybackHooks(on_change=self.render))

    def render(self, snapshot: PlaybackSnapshot, *, force: bool = False) -> None:
        card = render_entry_card(snapshot)
        if card == self._last_card and not force:
            return
        self._last_card = card
        self._write(card)

    def handle_command(self, line: str) -> bool:
        """Dispatch one command line; returns False when the session should end."""
        parts = line.strip().split()
        if not parts:
            return True
        name, args = parts[0].lower(), parts[1:]
        if name in QUIT_COMMANDS:
            return False
        try:
            self._dispatch(name, args)
        except UnsupportedCapability as exc:
            self._write(f"Error: {exc}")
        except ValueError as exc:
            self._write(f"Error: {exc}")
        return True

    def _dispatch(self, name: str, args: list[str]) -> None:
        controller = self.controller
        command = self._commands.get(name)
        if command is not None:
            command()
            return
        if name == "group":
            controller.set_group(self._parse_group_id(args))
        elif name == "groups":
            self._write(group_list_text(controller.catalog, controller.snapshot().group_id))
        elif name == "rate":
            controller.set_rate(self._single_arg(name, args))
        elif name == "mode":
            controller.set_mode(self._single_arg(name, args))
        elif name == "status":
            self.render(controller.snapshot(), force=True)
        elif name == "help":
            self._write(COMMAND_HELP)
        else:
            self._write(f"Unknown command: {name}. Type 'help' for a list of commands.")

    @staticmethod
    def _single_arg(name: str, args: list[str]) -> str:
        if len(args) != 1:
            raise ValueError(f"Usage: {name} <value>")
        return args[0]

    @classmethod
    def _parse_group_id(cls, args: list[str]) -> int:
        raw = cls._single_arg("group", args)
        try:
            return int(raw)
        except ValueError:
            raise ValueError(f"Group id must be an integer, got {raw!r}") from None

    async def run(self) -> None:
        loop = asyncio.get_running_loop()
        lines: asyncio.Queue[str] = asyncio.Queue()
        # Daemon thread: a blocked readline must not hold up interpreter exit.
        reader = threading.Thread(
            target=self._pump_lines,
            args=(loop, lines),
            name="word-walk-stdin",
            daemon=True,
        )
        self._write(COMMAND_HELP)
        self.render(self.controller.snapshot(), force=True)
        reader.start()
        try:
            while True:
                line = await lines.get()
                if not line:
                    logger.debug("Input closed; leaving console")
                    break
                if not self.handle_command(line):
                    break
        finally:
            await self.controller.aclose()

    def _pump_lines(self, loop: asyncio.AbstractEventLoop, lines: asyncio.Queue[str]) -> None:
        while True:
            try:
                line = self._read_line()
            except Exception:
                logger.exception("Reading console input failed")
                line = ""
            try:
                loop.call_soon_threadsafe(lines.put_nowait, line)
            except RuntimeError:
                # Event loop already closed.
                return
            if not line:
                return
