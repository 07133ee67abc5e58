"""
Unit tests for ConsoleConfirmationSender adapter.

Tests verify the console sender implements ConfirmationSender protocol
and logs confirmation details in the correct format.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

import pytest

from src.adapters.smtp.console import ConsoleConfirmationSender
from src.domain.ports import ConfirmationSender

LINK = "http://api.test/auth/confirm-email/abc.def.ghi"


class TestConsoleSenderProtocol:
    """Tests for ConfirmationSender protocol compliance."""

    def test_implements_confirmation_sender_protocol(self) -> None:
        sender = ConsoleConfirmationSender()
        assert callable(sender.send_confirmation)

        def accepts_sender(s: ConfirmationSender) -> None:
            pass

        accepts_sender(sender)

    def test_no_explicit_inheritance(self) -> None:
        """ConsoleConfirmationSender uses structural subtyping, not inheritance."""
        assert ConsoleConfirmationSender.__bases__ == (object,)


class TestSendConfirmation:
    """Tests for send_confirmation method."""

    def test_logs_at_info(self, caplog: pytest.LogCaptureFixture) -> None:
        sender = ConsoleConfirmationSender()

        with caplog.at_level(logging.INFO):
            sender.send_confirmation("Ada", LINK, "12345678", "ada@example.com")

        assert len(caplog.records) == 1
        assert caplog.records[0].levelno == logging.INFO

    def test_log_format(self, caplog: pytest.LogCaptureFixture) -> None:
        sender = ConsoleConfirmationSender()

        with caplog.at_level(logging.INFO):
            sender.send_confirmation("Ada", LINK, "12345678", "ada@example.com")

        assert "[CONFIRMATION]" in caplog.text
        assert "To: ada@example.com" in caplog.text
        assert "Name: Ada" in caplog.text
        assert f"Link: {LINK}" in caplog.text
        assert "Code: 12345678" in caplog.text

    def test_returns_none(self) -> None:
        sender = ConsoleConfirmationSender()
        assert sender.send_confirmation("Ada", LINK, "12345678", "ada@example.com") is None


class TestThreadSafety:
    """Tests for thread-safe logging."""

    def test_concurrent_calls_all_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        sender = ConsoleConfirmationSender()

        with caplog.at_level(logging.INFO), ThreadPoolExecutor(max_workers=5) as executor:
            futures = [
                executor.submit(
                    sender.send_confirmation,
                    f"user{i}",
                    LINK,
                    str(10_000_000 + i),
                    f"user{i}@example.com",
                )
                for i in range(10)
            ]
            for f in futures:
                f.result()

        assert len(caplog.records) == 10
        for record in caplog.records:
            assert "[CONFIRMATION]" in record.message
            assert "Code:" in record.message
