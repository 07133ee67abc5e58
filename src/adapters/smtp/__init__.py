"""Email adapters - Confirmation message delivery."""

from .console import ConsoleConfirmationSender
from .sender import SmtpConfirmationSender

__all__ = ["ConsoleConfirmationSender", "SmtpConfirmationSender"]
