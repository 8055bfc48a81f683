"""Base class for composed per-group plots."""
from __future__ import annotations

import abc
from typing import Any

from .._commands import BatchCommand, Command, CommandStack
from .._geometry import GeometryDescriptor, Primitive
from .._renderer import AxesRenderer


class ComposedPlot(abc.ABC):
    """One group's plot: a set of primitives plus style properties that
    fan out to them."""

    def __init__(self, label: str, position: float,
                 stack: CommandStack | None = None):
        self.label = label
        self.position = float(position)
        self._stack = stack
        self._renderer: AxesRenderer | None = None

    @abc.abstractmethod
    def parts(self) -> list[Primitive]:
        """Primitives in drawing order."""

    def geometry(self) -> GeometryDescriptor:
        return GeometryDescriptor(self.label, self.position, self.parts())

    def draw(self, renderer: AxesRenderer) -> list[Any]:
        self._renderer = renderer
        return renderer.draw(self.geometry())

    @property
    def rendered(self) -> bool:
        return self._renderer is not None

    @property
    def stack(self) -> CommandStack | None:
        return self._stack

    def set_options(self, options) -> None:
        self.options = options

    # -- helpers -----------------------------------------------------------

    def _restyle(self, description: str,
                 changes: list[tuple[Primitive | None, str, Any]]) -> None:
        """Apply ``(primitive, property, value)`` changes as one undo step.

        Missing primitives (``None``) are skipped.
        """
        cmds = [Command.capture(target, prop, value)
                for target, prop, value in changes if target is not None]
        if not cmds:
            return
        self._execute_and_redraw(BatchCommand(cmds, description))

    def _execute_and_redraw(self, cmd: BatchCommand) -> None:
        if self._stack is not None:
            self._stack.execute(cmd)
        else:
            cmd.execute()
        if self._renderer is not None:
            self._renderer.redraw()
