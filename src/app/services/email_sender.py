from abc import ABC, abstractmethod


class IEmailSender(ABC):
    """Outbound email interface - application layer"""

    @abstractmethod
    async def send_password_reset(self, to_email: str, reset_link: str) -> None:
        """Send the password reset link. May raise on delivery failure."""
        pass

    @abstractmethod
    async def send_account_deleted(self, to_email: str) -> None:
        """Confirm that an account and its data were deleted"""
        pass
