"""Run callbacks in reverse order when a scope ends."""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Tuple


class ScopeDefer:
    """Context manager that runs deferred callbacks last-in, first-out."""

    def __init__(self) -> None:
        self._callbacks: List[Tuple[Callable[..., Any], tuple]] = []

    def defer(self, callback: Callable[..., Any], *args: Any) -> None:
        """Schedule ``callback(*args)`` for when the scope exits."""
        self._callbacks.append((callback, args))

    def __enter__(self) -> "ScopeDefer":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        error: Optional[BaseException] = None
        while self._callbacks:
            callback, args = self._callbacks.pop()
            try:
                callback(*args)
            except BaseException as raised:  # noqa: BLE001 - re-raised below
                if error is None:
                    error = raised
        if error is not None:
            raise error
        return False