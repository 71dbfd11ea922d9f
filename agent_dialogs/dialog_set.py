# agent_dialogs/dialog_set.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Registry of dialog definitions addressed by ID."""

import hashlib
import logging
from typing import Optional

from .dialog import Dialog, DialogDependencies
from .errors import DialogConfigurationError, Errors, generate_exception

logger = logging.getLogger(__name__)


class DialogSet:
    """Collection of dialog definitions, looked up by ID.

    Thread-safe: No. Sets are built once at startup and then only read.
    """

    def __init__(self):
        self._dialogs: dict[str, Dialog] = {}
        self._version: Optional[str] = None

    def add(self, dialog: Dialog) -> "DialogSet":
        """Add a dialog and its dependencies.

        Re-adding the same instance is a no-op. A different dialog with a
        taken ID is renamed with the first free numeric suffix, starting at 2.

        Raises:
            DialogConfigurationError: If dialog is not a Dialog.
        """
        if not isinstance(dialog, Dialog):
            raise generate_exception(DialogConfigurationError, Errors.INVALID_DIALOG_BEING_ADDED)

        self._version = None

        if dialog.id in self._dialogs:
            if self._dialogs[dialog.id] is dialog:
                return self

            next_suffix = 2
            while f"{dialog.id}{next_suffix}" in self._dialogs:
                next_suffix += 1
            renamed = f"{dialog.id}{next_suffix}"
            logger.debug(f"Dialog id '{dialog.id}' already taken, renaming to '{renamed}'")
            dialog.id = renamed

        self._dialogs[dialog.id] = dialog

        if isinstance(dialog, DialogDependencies):
            for child in dialog.get_dependencies():
                self.add(child)

        return self

    def find(self, dialog_id: str) -> Optional[Dialog]:
        return self._dialogs.get(dialog_id)

    def get_dialogs(self) -> list[Dialog]:
        return list(self._dialogs.values())

    def get_version(self) -> str:
        """Hash of the member dialogs' versions, cached until the next add."""
        if self._version is None:
            versions = "".join(
                f"|{v}" for v in (d.get_version() for d in self._dialogs.values()) if v
            )
            self._version = hashlib.sha256(versions.encode("utf-8")).hexdigest()
        return self._version

    def __contains__(self, dialog_id: str) -> bool:
        return dialog_id in self._dialogs

    def __len__(self) -> int:
        return len(self._dialogs)
