"""Outbound UI collaborators: toasts and container signals.

The editor never renders anything itself.  It tells a ``Notifier`` what
to show and a ``ContainerSignals`` when the hosting screen should go
away.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class ToastVariant(Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class ToastMode(Enum):
    DISMISSIBLE = "dismissible"  # auto-dismissed after a few seconds
    STICKY = "sticky"  # stays until the user closes it


@dataclass(frozen=True)
class Toast:
    title: str
    message: str
    variant: ToastVariant = ToastVariant.INFO
    mode: ToastMode = ToastMode.DISMISSIBLE


class Notifier(ABC):

    @abstractmethod
    def notify(self, toast: Toast) -> None:
        """Show *toast* to the user."""


class ContainerSignals(ABC):

    @abstractmethod
    def cancel(self) -> None:
        """The editor is done; nothing further should happen."""

    @abstractmethod
    def close(self) -> None:
        """Dismiss the screen hosting the editor."""
