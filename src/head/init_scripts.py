"""Deferred page-initialization scripts."""

from collections import deque
from collections.abc import Iterable

from src.head.constants import INIT_FUNCTION


_READY_GATE = (
    "};if(window.$){$(function(){" + INIT_FUNCTION + "()})}"
    "else if(document.readyState==='complete'){" + INIT_FUNCTION + "()}"
    "else{document.addEventListener('DOMContentLoaded', " + INIT_FUNCTION + ")}})();"
)


class InitScriptQueue:
    """FIFO of script fragments collected while the page renders.

    Fragments are kept as given. Duplicates are preserved, unlike
    stylesheet and script references.
    """

    def __init__(self, scripts: Iterable[str] = ()) -> None:
        self._scripts: deque[str] = deque(scripts)

    def add(self, script: str) -> None:
        """Append a fragment.

        Args:
            script: Script text, without a trailing separator.
        """
        self._scripts.append(script)

    def drain(self) -> list[str]:
        """Remove and return all fragments in insertion order."""
        drained = list(self._scripts)
        self._scripts.clear()
        return drained

    def __len__(self) -> int:
        return len(self._scripts)

    def __bool__(self) -> bool:
        return bool(self._scripts)


def build_init_script(queue: InitScriptQueue, move_to_bottom: bool) -> str | None:
    """Consume the queue into the body of one inline script.

    In the default mode the fragments run inside ``pfInit``, which is
    started by jQuery's ready callback when jQuery is present, right away
    when the document is complete, and on DOMContentLoaded otherwise. When
    scripts are moved to the bottom of the body no gating is needed.

    Args:
        queue: Fragments to emit; drained by this call.
        move_to_bottom: Whether the script tag is placed after the body.

    Returns:
        Script text, or None when the queue is empty.
    """
    scripts = queue.drain()
    if not scripts:
        return None

    body = "".join(f"{script};" for script in scripts)
    if move_to_bottom:
        return body
    return "(function(){const " + INIT_FUNCTION + "=() => {" + body + _READY_GATE
