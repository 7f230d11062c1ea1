from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from apps.common import get_logger

logger = get_logger(__name__).bind(component="storefront", layer="notifications")

SUCCESS = "success"
ERROR = "error"


class Notifier(Protocol):
    def success(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...

    def redirect(self, path: str) -> None:
        ...


@dataclass(frozen=True)
class Notification:
    kind: str
    message: str


@dataclass
class MessageLog:
    """Records toasts and redirects in the order they were raised."""

    notifications: List[Notification] = field(default_factory=list)
    redirects: List[str] = field(default_factory=list)

    def success(self, message: str) -> None:
        logger.debug("Success toast", text=message)
        self.notifications.append(Notification(SUCCESS, message))

    def error(self, message: str) -> None:
        logger.debug("Error toast", text=message)
        self.notifications.append(Notification(ERROR, message))

    def redirect(self, path: str) -> None:
        logger.debug("Redirect", path=path)
        self.redirects.append(path)

    @property
    def messages(self) -> List[str]:
        return [n.message for n in self.notifications]

    @property
    def errors(self) -> List[str]:
        return [n.message for n in self.notifications if n.kind == ERROR]

    @property
    def successes(self) -> List[str]:
        return [n.message for n in self.notifications if n.kind == SUCCESS]

    @property
    def last(self) -> Optional[Notification]:
        return self.notifications[-1] if self.notifications else None

    def clear(self) -> None:
        self.notifications.clear()
        self.redirects.clear()
