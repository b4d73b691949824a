"""
Scope environment for the Lox interpreter.

The environment is a stack of frames. Frame 0 is the global scope and is never
removed; blocks and ``for`` loops push a frame on entry and pop it on exit, in
strict LIFO order. Each frame maps a name to a ``VariableState``, which tells
apart a variable that was declared without an initializer from one that holds a
value. Reading the former is a distinct runtime error from reading a name that
was never declared.

Example:
    >>> env = Environment()
    >>> env.define("x", Value.number(1))
    >>> with env.scope():
    ...     env.define("x", Value.number(2))
    ...     env.get("x")
    Value(number, 2.0)
    >>> env.get("x")
    Value(number, 1.0)
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from lox.lox_errors import (
    ScopePopError,
    UndefinedVariableError,
    UninitializedVariableError,
)
from lox.lox_values import Value

logger = logging.getLogger("lox.environment")
logger.addHandler(logging.NullHandler())


class VariableState:
    """Either uninitialized (``value is None``) or initialized with a Value."""

    __slots__ = ("value",)

    def __init__(self, value: Value | None = None) -> None:
        self.value = value

    @property
    def initialized(self) -> bool:
        return self.value is not None

    def __repr__(self) -> str:
        if self.value is None:
            return "VariableState(uninitialized)"
        return f"VariableState({self.value!r})"


class Environment:
    """A stack of variable frames, innermost last.

    Attributes:
        frames (list[dict[str, VariableState]]): Frame 0 is the global scope.
    """

    def __init__(self) -> None:
        self.frames: list[dict[str, VariableState]] = [{}]

    @property
    def depth(self) -> int:
        return len(self.frames)

    def push(self) -> None:
        self.frames.append({})
        logger.debug("push scope -> depth %d", self.depth)

    def pop(self) -> None:
        """Pop the innermost frame.

        Raises:
            ScopePopError: If only the global frame is left.
        """
        if len(self.frames) <= 1:
            raise ScopePopError()
        self.frames.pop()
        logger.debug("pop scope -> depth %d", self.depth)

    def unwind_to(self, depth: int) -> None:
        """Drop every frame above ``depth``; the global frame always stays."""
        del self.frames[max(depth, 1):]
        logger.debug("unwind scopes -> depth %d", self.depth)

    @contextmanager
    def scope(self) -> Iterator["Environment"]:
        """Push a frame for the duration of a ``with`` block, popping it on every exit path."""
        self.push()
        try:
            yield self
        finally:
            self.pop()

    def define(self, name: str, value: Value | None = None) -> None:
        """Bind ``name`` in the innermost frame; ``None`` leaves it uninitialized."""
        self.frames[-1][name] = VariableState(value)

    def lookup(self, name: str) -> VariableState | None:
        for frame in reversed(self.frames):
            if name in frame:
                return frame[name]
        return None

    def is_defined(self, name: str) -> bool:
        return self.lookup(name) is not None

    def get(self, name: str) -> Value:
        """
        Read ``name``, searching from the innermost frame outwards.

        Raises:
            UndefinedVariableError: If no frame binds the name.
            UninitializedVariableError: If the nearest binding has no value yet.
        """
        state = self.lookup(name)
        if state is None:
            raise UndefinedVariableError(name)
        if state.value is None:
            raise UninitializedVariableError(name)
        return state.value

    def assign(self, name: str, value: Value) -> None:
        """
        Overwrite the nearest existing binding of ``name``.

        Raises:
            UndefinedVariableError: If no frame binds the name.
        """
        state = self.lookup(name)
        if state is None:
            raise UndefinedVariableError(name)
        state.value = value

    def snapshot(self) -> list[dict[str, Value | None]]:
        """Plain copies of every frame, outermost first; uninitialized names map to None."""
        return [
            {name: state.value for name, state in frame.items()}
            for frame in self.frames
        ]


__all__ = ["Environment", "VariableState"]
