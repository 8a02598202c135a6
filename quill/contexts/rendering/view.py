"""
UI view state.

Which screen is showing and whether an export is running. This is the only
UI state the export pipeline depends on, and it is handed to the pipeline
explicitly rather than read from a global.
"""

from enum import Enum
from typing import Callable, List

ViewListener = Callable[["View", "View"], None]


class View(str, Enum):
    HOME = "home"
    EDITOR = "editor"
    # The only view that holds the full rendered document
    PREVIEW = "preview"


class ViewState:
    """
    Current view plus the export busy flag.

    Listeners are called with (old_view, new_view) on every actual change.
    """

    def __init__(self, view: View = View.EDITOR):
        self._view = View(view)
        self.is_downloading = False
        self._listeners: List[ViewListener] = []

    @property
    def view(self) -> View:
        return self._view

    def subscribe(self, listener: ViewListener) -> None:
        self._listeners.append(listener)

    def switch_to(self, view: View) -> None:
        view = View(view)
        if view == self._view:
            return
        old, self._view = self._view, view
        for listener in list(self._listeners):
            listener(old, view)
