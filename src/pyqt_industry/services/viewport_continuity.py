"""Capture and replay scroll offsets across the reload that follows every mutation."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional, Sequence

logger = logging.getLogger(__name__)

Scheduler = Callable[[int, Callable[[], None]], None]


def run_now(delay_ms: int, callback: Callable[[], None]) -> None:
    """Scheduler that ignores the delay."""
    callback()


class ScrollSurfaceABC(ABC):
    """Anything with a vertical scroll offset."""

    @abstractmethod
    def scroll_offset(self) -> int:
        """Current vertical offset in pixels."""

    @abstractmethod
    def set_scroll_offset(self, offset: int) -> None:
        """Move to ``offset``; implementations clamp to their range."""


class ViewportContinuity:
    """Window and per-pane scroll bookkeeping.

    Lifecycle: ``capture()`` before a mutating call arms a pending restore;
    ``restore()`` after the reloaded forest has been rendered replays the
    offsets twice (see ``HierarchyEditorConfig``); ``discard()`` disarms it
    when the mutation failed.
    """

    def __init__(
        self,
        *,
        scheduler: Scheduler = run_now,
        window_delays_ms: Sequence[int] = (50, 200),
        pane_delays_ms: Sequence[int] = (100, 300),
    ) -> None:
        self._scheduler = scheduler
        self._window_delays_ms = tuple(window_delays_ms)
        self._pane_delays_ms = tuple(pane_delays_ms)
        self._window_surface: Optional[ScrollSurfaceABC] = None
        self._pane_surfaces: Dict[int, ScrollSurfaceABC] = {}
        self._window_offset = 0
        self._pane_offsets: Dict[int, int] = {}
        self._restore_pending = False
        self._generation = 0

    @property
    def restore_pending(self) -> bool:
        return self._restore_pending

    @property
    def saved_window_offset(self) -> int:
        return self._window_offset

    def saved_pane_offsets(self) -> Dict[int, int]:
        return dict(self._pane_offsets)

    def set_window_surface(self, surface: Optional[ScrollSurfaceABC]) -> None:
        self._window_surface = surface

    def register_pane(self, root_id: int, surface: ScrollSurfaceABC) -> None:
        self._pane_surfaces[root_id] = surface

    def unregister_pane(self, root_id: int) -> None:
        self._pane_surfaces.pop(root_id, None)

    def registered_panes(self) -> list:
        return list(self._pane_surfaces)

    def capture(self) -> None:
        if self._window_surface is not None:
            self._window_offset = self._window_surface.scroll_offset()
        for root_id, surface in self._pane_surfaces.items():
            self._pane_offsets[root_id] = surface.scroll_offset()
        self._restore_pending = True
        logger.debug(
            "Captured window offset %s and pane offsets %s",
            self._window_offset,
            self._pane_offsets,
        )

    def discard(self) -> None:
        self._restore_pending = False
        self._generation += 1

    def forget_pane(self, root_id: int) -> None:
        self._pane_offsets.pop(root_id, None)
        self._pane_surfaces.pop(root_id, None)

    def forget_all(self) -> None:
        self._pane_offsets.clear()
        self._pane_surfaces.clear()

    def restore(self) -> None:
        """Replay saved offsets in two best-effort attempts."""
        if not self._restore_pending:
            return
        self._generation += 1
        generation = self._generation

        first_window, second_window = self._window_delays_ms
        first_pane, second_pane = self._pane_delays_ms
        self._scheduler(first_window, lambda: self._restore_window(generation, final=False))
        self._scheduler(first_pane, lambda: self._restore_panes(generation, only_drifted=False))
        self._scheduler(second_window, lambda: self._restore_window(generation, final=True))
        self._scheduler(second_pane, lambda: self._restore_panes(generation, only_drifted=True))

    def _restore_window(self, generation: int, *, final: bool) -> None:
        if generation != self._generation:
            return
        surface = self._window_surface
        if surface is not None and (not final or surface.scroll_offset() != self._window_offset):
            surface.set_scroll_offset(self._window_offset)
        if final:
            self._restore_pending = False

    def _restore_panes(self, generation: int, *, only_drifted: bool) -> None:
        if generation != self._generation:
            return
        for root_id, offset in list(self._pane_offsets.items()):
            surface = self._pane_surfaces.get(root_id)
            if surface is None:
                logger.debug("Dropping saved offset for unmounted pane %s", root_id)
                del self._pane_offsets[root_id]
                continue
            if offset <= 0:
                continue
            if only_drifted and surface.scroll_offset() == offset:
                continue
            surface.set_scroll_offset(offset)
