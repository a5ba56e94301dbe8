"""
Text rendering for control-plane payloads.

Each ``format_*`` function takes the parsed JSON of one endpoint and returns
the markdown block shown to the caller. Missing fields fall back to
``"Unknown"`` (or zero for counts) so a sparse payload never raises.
"""

from __future__ import annotations

from typing import Any

UNKNOWN = "Unknown"

# Display caps for long lists
MAX_TIMELINE_CLIPS = 20
MAX_MEDIA_ITEMS = 15

RENDER_STATUS_GLYPHS = {
    "queued": "⏳",
    "rendering": "🔄",
    "complete": "✅",
    "error": "❌",
}
UNKNOWN_STATUS_GLYPH = "❓"


# ============================================================================
# HELPERS
# ============================================================================

def _get(data: dict, key: str, default: Any = UNKNOWN) -> Any:
    """Return ``data[key]`` unless it is missing or null."""
    value = data.get(key) if isinstance(data, dict) else None
    return default if value is None else value


def _list(data: dict, key: str) -> list:
    value = data.get(key) if isinstance(data, dict) else None
    return value if isinstance(value, list) else []


def _records(data: dict, key: str) -> list[dict]:
    """Like ``_list``, keeping only JSON objects."""
    return [item for item in _list(data, key) if isinstance(item, dict)]


def format_resolution(resolution: Any) -> str:
    """Render ``{"width": w, "height": h}`` as ``WxH``."""
    if isinstance(resolution, dict) and resolution.get("width") and resolution.get("height"):
        return f"{resolution['width']}x{resolution['height']}"
    if isinstance(resolution, str) and resolution:
        return resolution
    return UNKNOWN


def status_glyph(status: Any) -> str:
    return RENDER_STATUS_GLYPHS.get(status, UNKNOWN_STATUS_GLYPH)


def truncate(items: list, limit: int) -> tuple[list, bool]:
    """Return the first ``limit`` items and whether anything was dropped."""
    return items[:limit], len(items) > limit


def _count_label(total: Any, noun: str, shown: int, truncated: bool) -> str:
    label = f"{total} {noun}"
    if truncated:
        label += f", showing first {shown}"
    return label


def _file_name(path: Any) -> str:
    if not path:
        return UNKNOWN
    return str(path).replace("\\", "/").rsplit("/", 1)[-1]


def _flag(value: Any, on: str, off: str = "") -> str:
    return on if value else off


def _join_parts(*parts: str) -> str:
    """Join non-empty fragments with single spaces."""
    return " ".join(p for p in parts if p)


# ============================================================================
# PROJECT / SEQUENCES
# ============================================================================

def format_project_info(data: dict) -> str:
    return f"""**Current Premiere Pro Project Information:**

📽️ **Project**: {_get(data, 'projectName', 'Unknown Project')}
🎬 **Sequences**: {_get(data, 'sequences', 0)}
🎥 **Clips**: {_get(data, 'clips', 0)}
📁 **Bins**: {_get(data, 'bins', 0)}
🛤️ **Tracks**: {_get(data, 'tracks', 0)}
⏱️ **Duration**: {_get(data, 'duration')}

*Retrieved from active Premiere Pro instance*"""


def format_active_sequence(data: dict) -> str:
    tracks = _get(data, "track_count", {})
    return (
        "🎬 **Active Sequence Details**\n\n"
        f"**Name:** {_get(data, 'sequence_name')}\n"
        f"**Duration:** {_get(data, 'duration')}\n"
        f"**Frame Rate:** {_get(data, 'frame_rate')} fps\n"
        f"**Resolution:** {format_resolution(data.get('resolution'))}\n"
        f"**Audio Sample Rate:** {_get(data, 'audio_sample_rate')} Hz\n"
        f"**Timecode Start:** {_get(data, 'timecode_start')}\n"
        f"**Playhead Position:** {_get(data, 'playhead_position')}\n"
        f"**Video Tracks:** {_get(tracks, 'video_tracks', 0)}\n"
        f"**Audio Tracks:** {_get(tracks, 'audio_tracks', 0)}"
    )


def format_sequence_list(data: dict) -> str:
    sequences = _records(data, "sequences")
    lines = []
    for seq in sequences:
        line = (
            f"• **{_get(seq, 'name')}** ({_get(seq, 'duration')}) - "
            f"{format_resolution(seq.get('resolution'))} @ {_get(seq, 'frame_rate')}fps - "
            f"{_get(seq, 'clip_count', 0)} clips"
        )
        lines.append(_join_parts(line, _flag(seq.get("is_active"), "✅ ACTIVE")))
    body = "\n".join(lines) if lines else "No sequences in project."
    total = _get(data, "total_sequences", len(sequences))
    return (
        f"🎬 **All Sequences ({total})**\n\n{body}\n\n"
        f"**Active Sequence:** {_get(data, 'active_sequence', 'None')}"
    )


def _track_head(track: dict, label: str, detail: str) -> str:
    head = f"  • {label}: {_get(track, 'track_name')}"
    return f"{head} ({detail})" if detail else head


def _video_track_line(track: dict, label: str, detail: str = "") -> str:
    return _join_parts(
        _track_head(track, label, detail),
        _flag(track.get("is_locked"), "🔒"),
        _flag(track.get("is_visible"), "👁️", "🙈"),
    )


def _audio_track_line(track: dict, label: str, detail: str = "") -> str:
    return _join_parts(
        _track_head(track, label, detail),
        _flag(track.get("is_locked"), "🔒"),
        _flag(track.get("is_muted"), "🔇", "🔊"),
        _flag(track.get("is_solo"), "🎯"),
    )


def _bullets(lines: list[str]) -> str:
    return "\n".join(lines) if lines else "  (none)"


def format_sequence_details(data: dict) -> str:
    settings = _get(data, "settings", {})
    tracks = _get(data, "tracks", {})

    video = [
        _video_track_line(track, f"Track {_get(track, 'track_number', '?')}",
                          f"{_get(track, 'clip_count', 0)} clips")
        for track in _records(tracks, "video_tracks")
    ]
    audio = [
        _audio_track_line(track, f"Track {_get(track, 'track_number', '?')}",
                          f"{_get(track, 'clip_count', 0)} clips")
        for track in _records(tracks, "audio_tracks")
    ]

    effects = _list(data, "effects_applied")
    return (
        f"🎬 **Sequence Details: {_get(data, 'sequence_name')}**\n\n"
        "**Settings:**\n"
        f"• Resolution: {format_resolution(settings.get('resolution') if isinstance(settings, dict) else None)}\n"
        f"• Frame Rate: {_get(settings, 'frame_rate')} fps\n"
        f"• Audio: {_get(settings, 'audio_sample_rate')} Hz\n\n"
        f"**Video Tracks:**\n{_bullets(video)}\n\n"
        f"**Audio Tracks:**\n{_bullets(audio)}\n\n"
        f"**Applied Effects:** {', '.join(str(e) for e in effects) if effects else 'None'}\n"
        f"**Markers:** {len(_list(data, 'markers'))}"
    )


def format_timeline_structure(data: dict) -> str:
    video = []
    for track in _records(data, "video_tracks"):
        line = _video_track_line(track, f"V{_get(track, 'track_index', '?')}")
        video.append(f"{line} ({_get(track, 'blend_mode')})")
    audio = []
    for track in _records(data, "audio_tracks"):
        line = _audio_track_line(track, f"A{_get(track, 'track_index', '?')}")
        audio.append(
            f"{line} (Vol: {_get(track, 'volume')}dB, Pan: {_get(track, 'pan')})"
        )
    return (
        f"🎬 **Timeline Structure: {_get(data, 'sequence_name')}**\n\n"
        f"**Video Tracks:**\n{_bullets(video)}\n\n"
        f"**Audio Tracks:**\n{_bullets(audio)}"
    )


# ============================================================================
# CLIPS / MEDIA / BINS
# ============================================================================

def format_timeline_clips(data: dict) -> str:
    clips = _records(data, "clips")
    shown, truncated = truncate(clips, MAX_TIMELINE_CLIPS)
    total = _get(data, "total_clips", len(clips))
    entries = []
    for clip in shown:
        effects = _list(clip, "effects")
        speed = f"  ⚡ {_get(clip, 'speed', 100)}%"
        if effects:
            speed += f" | Effects: {', '.join(str(e) for e in effects)}"
        entries.append(
            f"• **{_get(clip, 'clip_name')}** ({_get(clip, 'track_type', '')}{_get(clip, 'track_number', '')})\n"
            f"  📍 {_get(clip, 'timeline_in')} → {_get(clip, 'timeline_out')} ({_get(clip, 'duration')})\n"
            f"  📁 {_file_name(clip.get('source_file_path'))}\n"
            f"{speed}"
        )
    body = "\n\n".join(entries) if entries else "No clips on the timeline."
    return (
        f"🎬 **Timeline Clips ({_count_label(total, 'total', len(shown), truncated)})**"
        f"\n\n{body}"
    )


def format_project_media(data: dict) -> str:
    items = _records(data, "media_items")
    shown, truncated = truncate(items, MAX_MEDIA_ITEMS)
    total = _get(data, "total_media_count", len(items))
    entries = []
    for media in shown:
        entries.append(
            f"• **{_get(media, 'file_name')}** ({_get(media, 'duration')})\n"
            f"  📐 {format_resolution(media.get('resolution'))} @ {_get(media, 'frame_rate')}fps\n"
            f"  💾 {_get(media, 'file_size_mb')}MB | 🎵 {_get(media, 'audio_channels', 0)}ch"
            f" @ {_get(media, 'audio_sample_rate')}Hz\n"
            f"  📁 {_get(media, 'bin_location')} | Used: {_get(media, 'usage_count', 0)}x "
            f"{_flag(media.get('is_offline'), '❌ OFFLINE', '✅')}"
        )
    body = "\n\n".join(entries) if entries else "No media in project."
    return (
        f"📁 **Project Media ({_count_label(total, 'items', len(shown), truncated)})**"
        f"\n\n{body}\n\n"
        f"**Total Duration:** {_get(data, 'total_duration')}\n"
        f"**Offline Media:** {_get(data, 'offline_media_count', 0)} items"
    )


def format_project_bins(data: dict) -> str:
    bins = _records(data, "bins")
    lines = []
    for b in bins:
        indent = "  " if b.get("parent_bin") else ""
        sub_bins = _list(b, "sub_bins")
        line = _join_parts(
            f"{indent}📁 **{_get(b, 'bin_name')}** - {_get(b, 'media_count', 0)} items",
            _flag(b.get("color_label"), f"🏷️ {b.get('color_label')}"),
        )
        lines.append(line)
        for sub in sub_bins:
            name = _get(sub, "bin_name") if isinstance(sub, dict) else sub
            lines.append(f"{indent}  • {name}")
    body = "\n".join(lines) if lines else "No bins in project."
    total = _get(data, "total_bins", len(bins))
    return f"📁 **Project Bins ({total} total)**\n\n{body}"


# ============================================================================
# PLAYBACK / SELECTION
# ============================================================================

def format_playhead(data: dict) -> str:
    status = "▶️ Playing" if data.get("is_playing") else "⏸️ Paused"
    return (
        "⏱️ **Playhead Info**\n\n"
        f"**Sequence:** {_get(data, 'sequence_name')}\n"
        f"**Timecode:** {_get(data, 'timecode')}\n"
        f"**Frame:** {_get(data, 'frame_number')}\n"
        f"**Progress:** {_get(data, 'percentage_complete', 0)}%\n"
        f"**Status:** {status}\n"
        f"**Speed:** {_get(data, 'playback_speed', 1)}x"
    )


def format_selection(data: dict) -> str:
    selection_type = _get(data, "selection_type", "none")
    if selection_type == "none":
        return "🎯 **Selection Info**\n\nNo clips or time range currently selected."
    clips = [
        f"• **{_get(c, 'clip_name')}** ({_get(c, 'track_type', '')}{_get(c, 'track_number', '')})"
        for c in _records(data, "selected_clips")
    ]
    return (
        "🎯 **Selection Info**\n\n"
        f"**Type:** {selection_type}\n"
        f"**Selected Clips:**\n{chr(10).join(clips) if clips else '(none)'}\n\n"
        f"**Time Range:** {_get(data, 'selection_in')} → {_get(data, 'selection_out')}\n"
        f"**Duration:** {_get(data, 'selection_duration')}"
    )


# ============================================================================
# EXPORT / RENDER
# ============================================================================

def format_export_presets(data: dict) -> str:
    entries = [
        f"• **{_get(p, 'preset_name')}** ({_get(p, 'format')})\n"
        f"  📐 {format_resolution(p.get('resolution'))} @ {_get(p, 'frame_rate')}fps\n"
        f"  📊 Video: {_get(p, 'bitrate')} | Audio: {_get(p, 'audio_codec')} @ {_get(p, 'audio_bitrate')}"
        for p in _records(data, "presets")
    ]
    body = "\n\n".join(entries) if entries else "No export presets available."
    return f"🎥 **Export Presets**\n\n{body}"


def format_render_queue(data: dict) -> str:
    items = _records(data, "queue_items")
    total = _get(data, "total_queue_items", len(items))
    if not total:
        return "🎬 **Render Queue**\n\nNo items in render queue."
    entries = [
        f"{status_glyph(item.get('status'))} **{_get(item, 'sequence_name')}**\n"
        f"  📁 {_get(item, 'output_path')}\n"
        f"  ⚙️ {_get(item, 'preset')} | Progress: {_get(item, 'progress_percentage', 0)}%\n"
        f"  ⏱️ ETA: {_get(item, 'estimated_time_remaining')}"
        for item in items
    ]
    return f"🎬 **Render Queue ({total} items)**\n\n" + "\n\n".join(entries)


def format_sequence_created(data: dict, requested: dict) -> str:
    """Render a create-sequence answer, reporting requested values the server omitted."""
    resolution = data.get("resolution") or {
        "width": requested.get("width"),
        "height": requested.get("height"),
    }
    return (
        "✅ **Sequence Created Successfully**\n\n"
        f"**Name:** {_get(data, 'sequence_name', requested.get('name', UNKNOWN))}\n"
        f"**Resolution:** {format_resolution(resolution)}\n"
        f"**Frame Rate:** {_get(data, 'frame_rate', requested.get('framerate', UNKNOWN))} fps\n"
        f"**Created:** {_get(data, 'created_timestamp')}"
    )


def format_export_result(data: dict) -> str:
    status = _get(data, "status")
    if status == "queued":
        return (
            "🎬 **Export Queued Successfully**\n\n"
            f"**Output Path:** {_get(data, 'output_path')}\n"
            f"**Preset:** {_get(data, 'preset_name')}\n"
            f"**Sequence:** {_get(data, 'sequence_name')}\n"
            f"**Queue Position:** {_get(data, 'queue_position')}\n"
            f"**Estimated Duration:** {_get(data, 'estimated_duration')}"
        )
    return (
        "✅ **Export Started Successfully**\n\n"
        f"**Output Path:** {_get(data, 'output_path')}\n"
        f"**Preset:** {_get(data, 'preset_name')}\n"
        f"**Sequence:** {_get(data, 'sequence_name')}\n"
        f"**Status:** {status}"
    )
