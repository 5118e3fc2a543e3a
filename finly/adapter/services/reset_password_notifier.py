import logging

from finly.app.services.reset_password_notifier import IResetPasswordNotifier

logger = logging.getLogger(__name__)


class LoggingResetPasswordNotifier(IResetPasswordNotifier):
    """Writes reset links to the log instead of delivering them"""

    async def send_reset_link(self, email: str, link: str) -> None:
        logger.info(f"Password reset link for {email}: {link}")
