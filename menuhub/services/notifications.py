from __future__ import annotations

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class CodeSender(ABC):
    """Delivers one-time login codes to a phone number or an email address."""

    @abstractmethod
    def send_sms_code(self, phone_number: str, code: str) -> None:
        ...

    @abstractmethod
    def send_email_code(self, email: str, code: str) -> None:
        ...


class LoggingCodeSender(CodeSender):
    """Stand-in for an SMS/email gateway: the code only goes to the log."""

    def send_sms_code(self, phone_number: str, code: str) -> None:
        logger.info("Verification code for %s: %s", phone_number, code, extra={"channel": "sms"})

    def send_email_code(self, email: str, code: str) -> None:
        logger.info("Verification code for %s: %s", email, code, extra={"channel": "email"})
