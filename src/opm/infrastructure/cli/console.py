"""Terminal implementations of the editor's UI collaborators."""

from __future__ import annotations

import logging

import click

from opm.application.notifications import ContainerSignals, Notifier, Toast, ToastVariant

logger = logging.getLogger(__name__)

_COLOURS = {
    ToastVariant.SUCCESS: "green",
    ToastVariant.INFO: None,
    ToastVariant.WARNING: "yellow",
    ToastVariant.ERROR: "red",
}


class EchoNotifier(Notifier):
    """Prints toasts; warnings and errors go to stderr."""

    def notify(self, toast: Toast) -> None:
        is_problem = toast.variant in (ToastVariant.WARNING, ToastVariant.ERROR)
        click.secho(
            f"{toast.title}: {toast.message}",
            fg=_COLOURS[toast.variant],
            err=is_problem,
        )


class ConsoleSignals(ContainerSignals):
    """A command is a one-shot screen, so the signals are only recorded."""

    def __init__(self) -> None:
        self.cancelled = False
        self.closed = False

    def cancel(self) -> None:
        logger.debug("Editor signalled cancel")
        self.cancelled = True

    def close(self) -> None:
        logger.debug("Editor signalled close")
        self.closed = True
