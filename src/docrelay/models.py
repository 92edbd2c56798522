"""Response envelope and provider payload models."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel

from docrelay.errors import UpstreamError


class RelayResponse(BaseModel):
    """Uniform JSON envelope returned by both relays."""

    success: bool
    message: str | None = None
    file_id: str | None = None
    filename: str | None = None
    url: str | None = None

    def to_content(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class StoredFileKind(StrEnum):
    DOCUMENT = "document"
    PHOTO = "photo"


class StoredFileRef(BaseModel):
    """Reference selected from a successful `sendDocument` result."""

    kind: StoredFileKind
    file_id: str


class StoredFileMetadata(BaseModel):
    """`getFile` resolution result, valid for one stream request."""

    file_id: str
    file_path: str
    file_unique_id: str | None = None
    file_size: int | None = None


def select_stored_file(result: object) -> StoredFileRef:
    """Pick the canonical reference out of a `sendDocument` result.

    A `document` entry wins. Otherwise the provider classified the upload as an
    image and returned a size ladder under `photo`; the last (largest) size is
    the reference.
    """
    match result:
        case {"document": {"file_id": str(file_id)}}:
            return StoredFileRef(kind=StoredFileKind.DOCUMENT, file_id=file_id)
        case {"photo": [*_, {"file_id": str(file_id)}]}:
            return StoredFileRef(kind=StoredFileKind.PHOTO, file_id=file_id)
        case _:
            raise UpstreamError("Telegram API Error: response contains no document or photo")
