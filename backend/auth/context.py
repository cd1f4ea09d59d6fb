# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""
Request context handed to the authentication protocols.

The protocols never touch the FastAPI ``Request``.  A router builds a
:class:`RequestContext` holding the submitted parameters, the authenticated
user (if any) and a flash sink, calls the protocol, then reads the flash
messages back out to put them in the response.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, Optional

from core.i18n import translate as _default_translate


@dataclass
class FlashMessage:
    type: str       # "error", "warning", "info", "success"
    message: str


class FlashMessages:
    """Write-only (for the protocols) queue of one-shot user notifications."""

    def __init__(self):
        self._messages: List[FlashMessage] = []

    def add(self, severity: str, message: str) -> None:
        self._messages.append(FlashMessage(type=severity, message=message))

    def peek(self, severity: Optional[str] = None) -> List[str]:
        """Message texts currently queued, optionally filtered by severity."""
        return [m.message for m in self._messages if severity is None or m.type == severity]

    def consume(self) -> List[FlashMessage]:
        """Return every queued message and empty the queue."""
        messages, self._messages = self._messages, []
        return messages

    def __len__(self) -> int:
        return len(self._messages)


@dataclass
class RequestContext:
    params: Mapping[str, Any] = field(default_factory=dict)
    user: Any = None
    flash: FlashMessages = field(default_factory=FlashMessages)
    translate: Callable[[str], str] = _default_translate

    def param(self, name: str, default=None):
        """Submitted value for *name*; blank strings count as absent."""
        value = self.params.get(name, default)
        if isinstance(value, str) and not value.strip():
            return default
        return value

    def flash_message(self, severity: str, key: str) -> None:
        """Queue the localised text for message id *key*."""
        self.flash.add(severity, self.translate(key))
