"""
Console email sender adapter - Implements ConfirmationSender protocol.

This module provides a console-based implementation of the domain's
confirmation sender port, logging confirmation details for development.
"""

import logging

logger = logging.getLogger(__name__)


class ConsoleConfirmationSender:
    """
    Implements ConfirmationSender protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For demo/development purposes - prints confirmation links to the log.
    """

    def send_confirmation(
        self,
        recipient_name: str,
        verification_link: str,
        confirmation_code: str,
        recipient_email: str,
    ) -> None:
        """
        Log the confirmation message (simulates email delivery).

        Logged at INFO level to be visible in docker-compose logs.
        """
        logger.info(
            "[CONFIRMATION] To: %s Name: %s Link: %s Code: %s",
            recipient_email,
            recipient_name,
            verification_link,
            confirmation_code,
        )
