from abc import ABC, abstractmethod


class IResetPasswordNotifier(ABC):
    """Delivers password reset links to users"""

    @abstractmethod
    async def send_reset_link(self, email: str, link: str) -> None:
        pass
