"""
Frame-accurate trimming of timeline clips.

``trim_clip_by_frames`` mirrors the ExtendScript procedure shipped in
``premiere/scripts/trimClipByFrames.jsx``: it works on any object graph that
exposes the host's project shape (sequences, video/audio tracks, clips with
in/out points in seconds). The dataclasses below provide that shape for
in-process evaluation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

# Frame rate assumed when a sequence does not report its timebase
FALLBACK_FRAME_RATE = 24.0

DIRECTIONS = ("in", "out")
TRACK_TYPES = ("video", "audio")


@dataclass
class HostTime:
    """A point in media time, in seconds."""
    seconds: float = 0.0


@dataclass
class HostClip:
    node_id: str
    in_point: HostTime = field(default_factory=HostTime)
    out_point: HostTime = field(default_factory=HostTime)
    project_item_id: Optional[str] = None

    def matches(self, clip_id: str) -> bool:
        """A clip is addressed by its own node id or its project item's."""
        return self.node_id == clip_id or (
            self.project_item_id is not None and self.project_item_id == clip_id
        )


@dataclass
class HostTrack:
    clips: list[HostClip] = field(default_factory=list)


@dataclass
class HostSequence:
    name: str = ""
    timebase: Optional[float] = None
    video_tracks: list[HostTrack] = field(default_factory=list)
    audio_tracks: list[HostTrack] = field(default_factory=list)

    @property
    def frame_rate(self) -> float:
        return self.timebase or FALLBACK_FRAME_RATE

    def tracks(self, track_type: str) -> list[HostTrack]:
        return self.audio_tracks if track_type == "audio" else self.video_tracks


@dataclass
class HostProject:
    sequences: list[HostSequence] = field(default_factory=list)


def find_clip(sequence: HostSequence, clip_id: str, track_type: str) -> Optional[HostClip]:
    """Return the first clip matching ``clip_id`` across all tracks of a type."""
    for track in sequence.tracks(track_type):
        for clip in track.clips:
            if clip.matches(str(clip_id)):
                return clip
    return None


def trim_clip_by_frames(
    project: HostProject,
    sequence_id: int,
    clip_id: str,
    frames_delta: int,
    direction: str,
    track_type: str,
) -> dict[str, Any]:
    """Move a clip's in- or out-point by ``frames_delta`` frames.

    The delta is converted to seconds with the sequence frame rate. Missing
    sequences and clips are reported in the result rather than raised.

    Returns:
        ``{"success": True}`` or ``{"success": False, "error": ...}``.
    """
    if direction not in DIRECTIONS:
        return {"success": False, "error": f"Invalid direction: {direction}"}
    if track_type not in TRACK_TYPES:
        return {"success": False, "error": f"Invalid track type: {track_type}"}

    try:
        index = int(sequence_id)
    except (TypeError, ValueError):
        return {"success": False, "error": "Sequence not found"}
    if index < 0 or index >= len(project.sequences):
        return {"success": False, "error": "Sequence not found"}
    sequence = project.sequences[index]

    clip = find_clip(sequence, clip_id, track_type)
    if clip is None:
        return {"success": False, "error": "Clip not found"}

    seconds_delta = frames_delta / sequence.frame_rate
    if direction == "in":
        clip.in_point.seconds += seconds_delta
    else:
        clip.out_point.seconds += seconds_delta
    return {"success": True}
