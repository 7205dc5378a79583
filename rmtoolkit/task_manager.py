"""Task status reporting and start/stop control through callbacks."""

from __future__ import annotations

import enum
from typing import Callable


class TaskStatus(enum.IntEnum):
    RUNNING = 1
    IDLE = 2
    ERROR = 3


class TaskCmd(enum.IntEnum):
    START = 1
    STOP = 2


class TaskManager:
    """Answers status queries and control commands for a task."""

    def __init__(
        self,
        get_task_status: Callable[[], TaskStatus],
        control_task: Callable[[TaskCmd], bool],
    ) -> None:
        self._get_task_status = get_task_status
        self._control_task = control_task

    def get_task_status(self) -> TaskStatus:
        return TaskStatus(self._get_task_status())

    def control_task(self, cmd: int) -> bool:
        """Apply a command; an unknown command code is refused with False."""
        try:
            command = TaskCmd(cmd)
        except ValueError:
            return False
        return bool(self._control_task(command))