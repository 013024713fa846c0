"""Result pane state, backend wiring and background persistence."""

from workbench.autosave import Debouncer, EditorAutosave
from workbench.fetch import FetchCoordinator
from workbench.settings import WorkbenchSettings, load_settings
from workbench.state import ResultController, ResultMode, ResultView, WorkbenchState

__all__ = [
    "Debouncer",
    "EditorAutosave",
    "FetchCoordinator",
    "ResultController",
    "ResultMode",
    "ResultView",
    "WorkbenchSettings",
    "WorkbenchState",
    "load_settings",
]
