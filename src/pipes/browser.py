"""Live-reload broadcaster.

Listeners (a dev server, a websocket hub, a test) subscribe and are told about
every file piped through `stream()`, so stylesheets can be swapped in place
without reloading the page.
"""

from __future__ import annotations

from typing import Callable, Iterator

from ..orchestrator.logging import get_logger
from ..orchestrator.stream import AssetFile, Transform


Listener = Callable[[AssetFile], None]


class Browser:
    def __init__(self):
        self.listeners: list[Listener] = []
        self.logger = get_logger("pipes.browser")

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self.listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self.listeners:
                self.listeners.remove(listener)

        return unsubscribe

    def notify(self, f: AssetFile) -> None:
        self.logger.info("Reload %s (%d client(s))", f.relative, len(self.listeners))
        for listener in list(self.listeners):
            listener(f)

    def stream(self) -> Transform:
        def _stream(files: Iterator[AssetFile]) -> Iterator[AssetFile]:
            for f in files:
                self.notify(f)
                yield f

        return _stream
