"""Tests for response envelope and stored-file selection."""

from __future__ import annotations

import pytest

from docrelay.errors import UpstreamError
from docrelay.models import RelayResponse, StoredFileKind, select_stored_file


class TestSelectStoredFile:
    """Selection policy: document first, else the largest photo."""

    def test_document_is_preferred(self) -> None:
        """A document result wins even when photos are present."""
        # Given: A result carrying both shapes
        result = {
            "document": {"file_id": "doc"},
            "photo": [{"file_id": "small"}, {"file_id": "large"}],
        }

        # When: Selecting
        stored = select_stored_file(result)

        # Then: The document is chosen
        assert stored.kind == StoredFileKind.DOCUMENT
        assert stored.file_id == "doc"

    def test_last_photo_is_chosen(self) -> None:
        """The last entry of the size ladder is the reference, not the first."""
        # Given: Three photo sizes
        result = {"photo": [{"file_id": "a"}, {"file_id": "b"}, {"file_id": "c"}]}

        # When: Selecting
        stored = select_stored_file(result)

        # Then: `c` is chosen
        assert stored.kind == StoredFileKind.PHOTO
        assert stored.file_id == "c"

    def test_single_photo(self) -> None:
        """A one-element ladder resolves to that element."""
        assert select_stored_file({"photo": [{"file_id": "only"}]}).file_id == "only"

    @pytest.mark.parametrize(
        "result",
        [None, {}, {"photo": []}, {"video": {"file_id": "v"}}, {"document": {}}],
    )
    def test_unrecognized_results_are_upstream_errors(self, result: object) -> None:
        """Results without a document or photo are provider errors."""
        with pytest.raises(UpstreamError, match="no document or photo"):
            select_stored_file(result)


def test_relay_response_omits_absent_fields() -> None:
    """Failure envelopes serialize only success and message."""
    # When: Serializing a failure
    content = RelayResponse(success=False, message="Endpoint not found.").to_content()

    # Then: Unset optional fields are omitted
    assert content == {"success": False, "message": "Endpoint not found."}
