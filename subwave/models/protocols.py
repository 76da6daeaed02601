"""Collaborator interfaces the waveform engine drives.

The host application supplies the subtitle document and the media player;
`SubtitleDocument` and `QtMediaPlayerAdapter` are the bundled implementations.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Callable, Protocol


class DocumentModel(Protocol):
    spacing_ms: int

    def set_start_ms(self, ms: int) -> None:
        """Set the current entry's start time."""

    def set_stop_ms(self, ms: int) -> None:
        """Set the current entry's stop time."""

    def adjust_start_ms(self, delta_ms: int) -> None:
        """Move the current entry's start time by *delta_ms*."""

    def adjust_stop_ms(self, delta_ms: int) -> None:
        """Move the current entry's stop time by *delta_ms*."""

    def current_entry_start_ms(self) -> int | None: ...

    def current_entry_stop_ms(self) -> int | None: ...

    def go_previous(self) -> bool:
        """Make the previous entry current. False if there is none."""

    def go_next(self) -> bool:
        """Make the next entry current. False if there is none."""

    def select_at_ms(self, ms: int) -> bool:
        """Make the entry playing at *ms* current. True if the cursor moved."""

    def preserve_cursor(self) -> AbstractContextManager[None]:
        """Context manager restoring the current entry on exit."""

    def notify_times_adjusted(self) -> None:
        """Fire the 'times adjusted' event."""

    def add_times_adjusted_listener(self, callback: Callable[[], None]) -> None: ...

    def remove_times_adjusted_listener(self, callback: Callable[[], None]) -> None: ...


class MediaPlayer(Protocol):
    def jump(self, ms: int) -> None: ...

    def pause(self) -> None: ...

    def unpause(self) -> None: ...

    def is_looping_current_entry(self) -> bool: ...

    def set_looping(self, enabled: bool) -> None: ...

    def is_syncing_position(self) -> bool: ...

    def set_syncing(self, enabled: bool) -> None: ...

    def media_path(self) -> str | None: ...
