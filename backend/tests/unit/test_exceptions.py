"""
Unit tests for custom exception classes.

Tests exception initialization and error messages.
"""

import pytest
from domain.exceptions import (
    ConfigurationError,
    DeleteNotConfirmedError,
    EntryNotFoundError,
    IngestionError,
    InvalidVideoLinkError,
    LLMServiceError,
    ResponseParseError,
    StoreUnavailableError,
)
from fastapi import status


class TestEntryExceptions:
    """Tests for entry-related exceptions."""

    @pytest.mark.unit
    def test_entry_not_found_error(self):
        """Test EntryNotFoundError exception."""
        error = EntryNotFoundError(123)

        assert error.status_code == status.HTTP_404_NOT_FOUND
        assert error.entry_id == 123
        assert "123" in error.detail
        assert "not found" in error.detail

    @pytest.mark.unit
    def test_delete_not_confirmed_error(self):
        error = DeleteNotConfirmedError(7)

        assert error.status_code == status.HTTP_400_BAD_REQUEST
        assert "confirm=true" in error.detail

    @pytest.mark.unit
    def test_invalid_video_link_error(self):
        error = InvalidVideoLinkError("https://vimeo.com/1")

        assert error.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert error.link == "https://vimeo.com/1"


class TestServiceExceptions:
    """Tests for language model and store exceptions."""

    @pytest.mark.unit
    def test_llm_service_error_defaults(self):
        error = LLMServiceError()

        assert error.status_code == status.HTTP_502_BAD_GATEWAY
        assert error.detail == "Language model request failed"

    @pytest.mark.unit
    def test_response_parse_error(self):
        error = ResponseParseError("bad shape")

        assert error.status_code == status.HTTP_502_BAD_GATEWAY
        assert error.detail == "bad shape"

    @pytest.mark.unit
    def test_store_unavailable_error(self):
        assert StoreUnavailableError().status_code == status.HTTP_503_SERVICE_UNAVAILABLE

    @pytest.mark.unit
    def test_ingestion_error_wraps_http_cause(self):
        """Test the stage and the cause's detail appear in the message."""
        cause = LLMServiceError("model timed out")
        error = IngestionError("content", cause)

        assert error.stage == "content"
        assert error.cause is cause
        assert error.detail == "Ingestion failed during 'content': model timed out"

    @pytest.mark.unit
    def test_ingestion_error_wraps_plain_cause(self):
        error = IngestionError("persist", RuntimeError("disk full"))

        assert "disk full" in error.detail


class TestConfigurationError:
    @pytest.mark.unit
    def test_configuration_error(self):
        """Test ConfigurationError is a ValueError with a prefixed message."""
        error = ConfigurationError("JWT_SECRET is not set")

        assert isinstance(error, ValueError)
        assert str(error) == "Configuration error: JWT_SECRET is not set"
