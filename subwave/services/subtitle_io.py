"""Load and save subtitle tracks in SRT format."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator

from subwave.models.subtitle import SubtitleSegment, SubtitleTrack
from subwave.utils.time_utils import ms_to_srt_time, srt_time_to_ms

logger = logging.getLogger(__name__)

_TIMING_LINE = re.compile(
    r"^\s*(?P<start>\d{1,2}:\d{2}:\d{2}[,.]\d{3})\s*-->\s*(?P<end>\d{1,2}:\d{2}:\d{2}[,.]\d{3})"
)
_BLANK_LINES = re.compile(r"\n\s*\n")


def _parse_block(block: str) -> SubtitleSegment | None:
    # The index line is optional; the timing line is whichever line matches.
    lines = block.splitlines()
    for i, line in enumerate(lines[:2]):
        m = _TIMING_LINE.match(line)
        if m:
            text = "\n".join(lines[i + 1:]).strip()
            return SubtitleSegment(srt_time_to_ms(m["start"]), srt_time_to_ms(m["end"]), text)
    return None


def import_srt(path: Path) -> SubtitleTrack:
    """Read an SRT file into a SubtitleTrack, skipping blocks without timing."""
    content = path.read_text(encoding="utf-8-sig").replace("\r\n", "\n")
    track = SubtitleTrack(media_path="")
    skipped = 0
    for block in _BLANK_LINES.split(content.strip()):
        segment = _parse_block(block.strip())
        if segment is None:
            skipped += 1
            continue
        track.add_segment(segment)
    if skipped:
        logger.warning(f"Skipped {skipped} malformed block(s) in {path}")
    return track


def _srt_blocks(track: SubtitleTrack) -> Iterator[str]:
    for number, seg in enumerate(track, start=1):
        yield f"{number}\n{ms_to_srt_time(seg.start_ms)} --> {ms_to_srt_time(seg.end_ms)}\n{seg.text}\n"


def export_srt(track: SubtitleTrack, output_path: Path) -> None:
    """Write *track* as SRT, numbering entries from 1 in track order."""
    output_path.write_text("\n".join(_srt_blocks(track)), encoding="utf-8")
