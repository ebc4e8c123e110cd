"""
Console verification sender adapter - Implements VerificationSender protocol.

Real email/SMS delivery is an external collaborator that is not part of
this service. This adapter logs the code instead so the flow can be
exercised end to end.
"""

import logging

from onboard.domain.ports import Channel

logger = logging.getLogger(__name__)


class ConsoleVerificationSender:
    """
    Implements VerificationSender protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def send_verification_code(self, channel: Channel, address: str, code: str) -> None:
        """
        Log verification code to console (simulates email/SMS delivery).

        Args:
            channel: EMAIL or SMS
            address: Recipient email address or phone number
            code: One-time verification code
        """
        label = "Email" if channel == Channel.EMAIL else "SMS"
        logger.info("[VERIFICATION] %s: %s Code: %s", label, address, code)
