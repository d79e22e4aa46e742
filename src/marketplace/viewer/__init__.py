"""AR viewer factory.

Provides get_viewer() / set_viewer() so the deployment can plug in the
adapter that actually opens the AR application; RecordingViewer is the
default.
"""

from marketplace.viewer.fake_adapter import RecordingViewer
from marketplace.viewer.port import ARViewer

_current_viewer: ARViewer | None = None


def get_viewer() -> ARViewer:
    """Return the current viewer. Defaults to RecordingViewer."""
    global _current_viewer
    if _current_viewer is None:
        _current_viewer = RecordingViewer()
    return _current_viewer


def set_viewer(viewer: ARViewer) -> None:
    global _current_viewer
    _current_viewer = viewer


def reset_viewer() -> None:
    """Reset to the default viewer."""
    global _current_viewer
    _current_viewer = None
