"""The single edit a composition rule decides on."""

from __future__ import annotations

from dataclasses import dataclass

from mongol_ime.host import HostConnection


@dataclass(frozen=True, slots=True)
class EditAction:
    """Delete ``delete_before`` characters, then insert ``insert``."""

    insert: str = ""
    delete_before: int = 0
    rule: str = "default"

    def __post_init__(self) -> None:
        if self.delete_before < 0:
            raise ValueError("delete_before cannot be negative")

    @property
    def is_noop(self) -> bool:
        return not self.insert and not self.delete_before

    def apply(self, connection: HostConnection) -> None:
        """Apply as one host batch so listeners never see the delete alone."""

        if self.is_noop:
            return
        with connection.batch_edit():
            connection.delete_chars_before_cursor(self.delete_before)
            connection.commit_text(self.insert)


__all__ = ["EditAction"]
