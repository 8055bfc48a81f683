"""Undoable restyle commands for drawn geometry."""
from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator


@dataclass
class Command:
    """Change one property of one target via ``set_<name>``."""

    target: Any
    property_name: str
    old_value: Any
    new_value: Any

    def _set(self, value: Any) -> None:
        getattr(self.target, f"set_{self.property_name}")(value)

    def execute(self) -> None:
        self._set(self.new_value)

    def undo(self) -> None:
        self._set(self.old_value)

    @classmethod
    def capture(cls, target: Any, property_name: str, new_value: Any) -> Command:
        """Build a command whose old value is read from *target* now."""
        return cls(target, property_name,
                   getattr(target, property_name), new_value)


@dataclass
class BatchCommand:
    """One restyle: the property changes it fans out to, as a single step."""

    commands: list[Command] = field(default_factory=list)
    description: str = ""

    def __len__(self) -> int:
        return len(self.commands)

    def execute(self) -> None:
        for cmd in self.commands:
            cmd.execute()

    def undo(self) -> None:
        for cmd in reversed(self.commands):
            cmd.undo()


class CommandStack:
    """Undo/redo history shared by the plots of one call.

    Restyles made inside :meth:`transaction` are folded into a single
    step, so a change applied to every plot of a call undoes at once.
    """

    def __init__(self, max_depth: int = 100,
                 on_change: Callable[[], None] | None = None):
        self._undo_stack: list[BatchCommand] = []
        self._redo_stack: list[BatchCommand] = []
        self._max_depth = max_depth
        self._on_change = on_change
        self._open: BatchCommand | None = None

    @property
    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    @property
    def history(self) -> list[BatchCommand]:
        return list(self._undo_stack)

    def _push(self, cmd: BatchCommand) -> None:
        self._undo_stack.append(cmd)
        del self._undo_stack[:-self._max_depth]
        self._redo_stack.clear()
        if self._on_change:
            self._on_change()

    def execute(self, cmd: BatchCommand) -> None:
        cmd.execute()
        if self._open is not None:
            self._open.commands.extend(cmd.commands)
        else:
            self._push(cmd)

    @contextmanager
    def transaction(self, description: str) -> Iterator[BatchCommand]:
        """Collect every restyle executed in the block into one step.

        If the block raises, the changes already made are reverted and
        nothing is recorded. Nested transactions join the outer one.
        """
        if self._open is not None:
            yield self._open
            return
        self._open = batch = BatchCommand([], description)
        try:
            yield batch
        except Exception:
            batch.undo()
            raise
        finally:
            self._open = None
        if batch.commands:
            self._push(batch)

    def undo(self) -> bool:
        if not self._undo_stack:
            return False
        cmd = self._undo_stack.pop()
        cmd.undo()
        self._redo_stack.append(cmd)
        if self._on_change:
            self._on_change()
        return True

    def redo(self) -> bool:
        if not self._redo_stack:
            return False
        cmd = self._redo_stack.pop()
        cmd.execute()
        self._undo_stack.append(cmd)
        if self._on_change:
            self._on_change()
        return True
