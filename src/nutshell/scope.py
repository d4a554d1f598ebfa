"""Section scoping used by the query operations."""

from __future__ import annotations


class SectionTracker:
    """Tracks whether the scan is inside the section a query targets.

    An empty *target* means root scope: root keys are only reachable
    before the first header, so any header ends root scope for good.
    A named target becomes active on every header equal to it and
    inactive on any other header, so duplicate headers reopen matching.
    """

    def __init__(self, target: str = "") -> None:
        self.target = target
        self.current: str | None = None
        self.active = not target
        self.left = False  # was inside target, then saw another header

    @property
    def is_root(self) -> bool:
        return not self.target

    def enter(self, name: str) -> None:
        """Update state for a section header named *name*."""
        self.current = name
        if self.is_root:
            self.active = False
            return
        if name == self.target:
            self.active = True
        else:
            if self.active:
                self.left = True
            self.active = False

    def __repr__(self) -> str:
        state = f"InSection({self.current!r})" if self.current else "Root"
        return f"SectionTracker(target={self.target!r}, state={state}, active={self.active})"
