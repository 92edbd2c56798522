"""Upload and stream relay handlers."""

from docrelay.relay.stream import StreamRelay
from docrelay.relay.upload import UploadRelay

__all__ = ["StreamRelay", "UploadRelay"]
