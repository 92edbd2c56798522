"""Upload relay that stores files in Telegram and re-serves them inline."""

__version__ = "0.1.0"

from docrelay.config import RelaySettings
from docrelay.errors import RelayError
from docrelay.relay import StreamRelay, UploadRelay

__all__ = [
    "RelayError",
    "RelaySettings",
    "StreamRelay",
    "UploadRelay",
    "__version__",
]
