"""Interactive single-choice prompt for terminal front ends."""
from __future__ import annotations

import sys
from typing import Callable, Optional, Sequence, TextIO, TypeVar

T = TypeVar("T")


def prompt_choice(
    items: Sequence[T],
    *,
    title: str = "Select a workspace folder to open in Fork",
    label: Callable[[T], str] = lambda item: getattr(item, "label", str(item)),
    detail: Callable[[T], str] = lambda item: getattr(item, "detail", ""),
    input_fn: Optional[Callable[[str], str]] = None,
    stream: Optional[TextIO] = None,
) -> Optional[T]:
    """Print a numbered list and return the picked item.

    An empty answer, end of input, or anything that is not a listed number
    cancels and returns None.
    """
    out = stream or sys.stderr
    read = input_fn or input
    print(title, file=out)
    for idx, item in enumerate(items, start=1):
        extra = detail(item)
        line = f"  {idx}) {label(item)}"
        if extra:
            line = f"{line}  {extra}"
        print(line, file=out)

    print(f"Choice [1-{len(items)}]: ", end="", file=out, flush=True)
    try:
        raw = read("").strip()
    except (EOFError, KeyboardInterrupt):
        return None

    if not raw.isdigit():
        return None
    index = int(raw)
    if 1 <= index <= len(items):
        return items[index - 1]
    return None


__all__ = ["prompt_choice"]
