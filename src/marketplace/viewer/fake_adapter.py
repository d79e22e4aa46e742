"""In-memory AR viewer that records launch requests instead of opening an app."""

import structlog

from marketplace.viewer.port import ARViewer, LaunchRequest

logger = structlog.get_logger(__name__)


class RecordingViewer(ARViewer):
    def __init__(self) -> None:
        self.requests: list[LaunchRequest] = []

    def launch(self, request: LaunchRequest) -> None:
        self.requests.append(request)
        logger.debug("AR launch recorded", url=request.url)

    @property
    def last_request(self) -> LaunchRequest | None:
        return self.requests[-1] if self.requests else None
