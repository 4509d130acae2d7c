"""Tests for the verification email sender."""

from unittest.mock import MagicMock, patch

import httpx
import pytest

from src.config import Settings
from src.errors import UpstreamError
from src.services.email import VERIFICATION_SUBJECT, EmailService


@pytest.fixture(autouse=True)
def sent_emails():
    """Use the real sender in this module."""
    yield None


@pytest.fixture
def email_service():
    return EmailService(
        Settings(
            email_api_key="re_test_key",
            email_api_url="https://email.example.com/emails",
            frontend_url="https://app.example.com",
        )
    )


def test_verification_url(email_service):
    assert (
        email_service.verification_url("abc123")
        == "https://app.example.com/verify-email?token=abc123"
    )


def test_send_verification_email(email_service):
    response = MagicMock()
    with patch("src.services.email.httpx.post", return_value=response) as mock_post:
        email_service.send_verification_email("sam@example.com", "Sam", "abc123")

    mock_post.assert_called_once()
    args, kwargs = mock_post.call_args
    assert args[0] == "https://email.example.com/emails"
    assert kwargs["headers"]["Authorization"] == "Bearer re_test_key"
    payload = kwargs["json"]
    assert payload["to"] == ["sam@example.com"]
    assert payload["subject"] == VERIFICATION_SUBJECT
    assert "Hi Sam" in payload["html"]
    assert "https://app.example.com/verify-email?token=abc123" in payload["html"]
    response.raise_for_status.assert_called_once()


def test_send_failure_raises_upstream_error(email_service):
    with patch(
        "src.services.email.httpx.post",
        side_effect=httpx.ConnectError("connection refused"),
    ):
        with pytest.raises(UpstreamError) as exc_info:
            email_service.send_verification_email("sam@example.com", "Sam", "abc123")

    assert exc_info.value.status_code == 500
    assert exc_info.value.detail == "Could not send verification email"


def test_without_api_key_only_logs(caplog):
    service = EmailService(Settings(email_api_key=None))
    with patch("src.services.email.httpx.post") as mock_post:
        service.send_verification_email("sam@example.com", "Sam", "abc123")

    mock_post.assert_not_called()
    assert "verify-email?token=abc123" in caplog.text
