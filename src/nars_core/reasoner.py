"""Reasoner: a memory driven by a clock and fed with Narsese text."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

from nars_core.config import Config
from nars_core.entity.sentence import Task
from nars_core.exceptions import InvalidInputError
from nars_core.language.parser import parse_task
from nars_core.protocol.types import RuleEngine
from nars_core.storage.memory import Memory

logger = logging.getLogger(__name__)

RESET_MARK = "*"
COMMENT_MARK = "/"

OutputChannel = Callable[[str], None]


class Reasoner:
    """One independent reasoning system.

    Each ``tick`` runs one work cycle. Reports produced by the memory are
    drained at the tick boundary and passed to every output channel.
    """

    def __init__(self, config: Config | None = None, rules: RuleEngine | None = None) -> None:
        self.config = config or Config()
        self.memory = Memory(self.config, rules)
        self.time = 0
        self._channels: list[OutputChannel] = []

    def add_output_channel(self, channel: OutputChannel) -> None:
        self._channels.append(channel)

    def remove_output_channel(self, channel: OutputChannel) -> None:
        self._channels.remove(channel)

    def input_text(self, line: str) -> Task | None:
        """Handle one line of input.

        A sentence is parsed and handed to memory, a bare integer runs that
        many cycles, ``*`` resets and ``/`` starts a comment. Malformed
        sentences are logged and skipped.
        """
        text = line.strip()
        if not text or text.startswith(COMMENT_MARK):
            return None
        if text == RESET_MARK:
            self.reset()
            return None
        if text.isdigit():
            self.cycle(int(text))
            return None
        try:
            task = parse_task(text, self.memory, self.time)
        except InvalidInputError as exc:
            logger.warning("Rejected input %r: %s", text, exc)
            return None
        if task is not None:
            self.memory.input_task(task)
        return task

    def input_lines(self, lines: Iterable[str]) -> list[Task]:
        tasks = []
        for line in lines:
            task = self.input_text(line)
            if task is not None:
                tasks.append(task)
        return tasks

    def tick(self) -> list[str]:
        self.time += 1
        self.memory.work_cycle(self.time)
        return self.flush()

    def cycle(self, steps: int = 1) -> list[str]:
        reports: list[str] = []
        for _ in range(steps):
            reports.extend(self.tick())
        return reports

    def flush(self) -> list[str]:
        """Deliver pending reports to the output channels."""
        reports = self.memory.drain_reports()
        for report in reports:
            for channel in self._channels:
                channel(report)
        return reports

    def reset(self) -> None:
        logger.info("Reset at time %d", self.time)
        self.time = 0
        self.memory.reset()

    def status(self) -> dict[str, Any]:
        return {
            "time": self.time,
            "concepts": len(self.memory.concepts),
            "novel_tasks": len(self.memory.novel_tasks),
            "new_tasks": len(self.memory.new_tasks),
        }
