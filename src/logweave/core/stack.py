"""Stack capture with wrapper-frame trimming."""

from __future__ import annotations

import traceback


class StackOffset:
    """Number of wrapper frames to drop from the next captured stack.

    Emit methods call increment() before delegating to their add_* method
    and reset() once they finish, so the emit frame itself never shows up
    in the trace and the count never carries over to an unrelated call.
    """

    def __init__(self) -> None:
        self._value = 0

    @property
    def value(self) -> int:
        return self._value

    def increment(self) -> None:
        self._value += 1

    def reset(self) -> None:
        self._value = 0


def capture_stack(skip: int = 0) -> str:
    """Render the caller's stack, outermost frame first.

    Drops this function's frame, the frame that called it, and ``skip``
    further frames above that.
    """
    frames = traceback.extract_stack()
    trimmed = frames[: max(0, len(frames) - (2 + skip))]
    return "".join(traceback.format_list(trimmed))
