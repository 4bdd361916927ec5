"""Tests for the Resend email client and HTML templates."""

import pytest
import requests
from unittest.mock import patch, MagicMock

from focuslist.integrations.email_client import ResendEmailClient, EmailDeliveryError, default_sender
from focuslist.integrations.email_templates import (
    welcome_email_html,
    todo_reminder_email_html,
    weekly_summary_email_html,
)
from focuslist.models.factory import new_todo


class TestResendEmailClient:
    def test_requires_api_key(self, monkeypatch):
        monkeypatch.delenv("RESEND_API_KEY", raising=False)
        with pytest.raises(ValueError):
            ResendEmailClient()

    def test_send_posts_payload(self):
        client = ResendEmailClient(api_key="test-key")
        mock_response = MagicMock()
        mock_response.json.return_value = {"id": "email-1"}

        with patch("focuslist.integrations.email_client.requests.post", return_value=mock_response) as post:
            message_id = client.send_email(from_=default_sender(), to="a@example.com", subject="Hi", html="<p>x</p>")

        assert message_id == "email-1"
        kwargs = post.call_args.kwargs
        assert kwargs["json"] == {
            "from": default_sender(),
            "to": ["a@example.com"],
            "subject": "Hi",
            "html": "<p>x</p>",
        }
        assert kwargs["headers"]["Authorization"] == "Bearer test-key"

    def test_non_json_success_body_still_delivers(self):
        client = ResendEmailClient(api_key="test-key")
        mock_response = MagicMock()
        mock_response.json.side_effect = ValueError("Expecting value")

        with patch("focuslist.integrations.email_client.requests.post", return_value=mock_response):
            message_id = client.send_email(from_="x", to="a@example.com", subject="Hi", html="")

        assert message_id == ""

    def test_http_error_becomes_delivery_error(self):
        client = ResendEmailClient(api_key="test-key")
        mock_response = MagicMock()
        mock_response.raise_for_status.side_effect = requests.HTTPError("422 Unprocessable")

        with patch("focuslist.integrations.email_client.requests.post", return_value=mock_response):
            with pytest.raises(EmailDeliveryError):
                client.send_email(from_="x", to="a@example.com", subject="Hi", html="")


class TestTemplates:
    def test_welcome_escapes_name(self):
        html = welcome_email_html("<b>Eve</b>")
        assert "Hi &lt;b&gt;Eve&lt;/b&gt;" in html

    def test_welcome_without_name(self):
        assert "<p>Hello,</p>" in welcome_email_html(None)

    def test_reminder_marks_priority(self):
        todos = [new_todo("u", "ship it", priority="high"), new_todo("u", "someday", priority="low")]
        html = todo_reminder_email_html(2, todos)
        assert "[high] ship it" in html
        assert "[low]" not in html
        assert "more..." not in html

    def test_reminder_singular(self):
        assert "You have 1 active todo<" in todo_reminder_email_html(1, [new_todo("u", "one")])

    def test_weekly_summary_numbers(self):
        html = weekly_summary_email_html(4, 3, 5)
        assert '<div class="stat-value">4</div><div class="stat-label">Created</div>' in html
