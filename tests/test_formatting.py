"""Tests for premiere.formatting — payload rendering, truncation and defaults."""

from premiere.formatting import (
    MAX_MEDIA_ITEMS,
    MAX_TIMELINE_CLIPS,
    UNKNOWN_STATUS_GLYPH,
    format_active_sequence,
    format_export_presets,
    format_export_result,
    format_playhead,
    format_project_bins,
    format_project_info,
    format_project_media,
    format_render_queue,
    format_resolution,
    format_selection,
    format_sequence_created,
    format_sequence_details,
    format_sequence_list,
    format_timeline_clips,
    format_timeline_structure,
    status_glyph,
    truncate,
)


def _clip(i):
    return {
        "clip_name": f"Clip {i:02d}",
        "track_type": "V",
        "track_number": 1,
        "timeline_in": "00:00:00:00",
        "timeline_out": "00:00:01:00",
        "duration": "00:00:01:00",
        "source_file_path": f"C:\\Footage\\shot_{i:02d}.mov",
        "speed": 100,
        "effects": [],
    }


def _media(i):
    return {"file_name": f"media_{i:02d}.mov", "resolution": {"width": 3840, "height": 2160}}


class TestHelpers:
    def test_resolution_dict(self):
        assert format_resolution({"width": 1920, "height": 1080}) == "1920x1080"

    def test_resolution_string_passthrough(self):
        assert format_resolution("1280x720") == "1280x720"

    def test_resolution_missing(self):
        assert format_resolution(None) == "Unknown"
        assert format_resolution({"width": 1920}) == "Unknown"

    def test_truncate(self):
        assert truncate([1, 2, 3], 2) == ([1, 2], True)
        assert truncate([1, 2], 2) == ([1, 2], False)

    def test_status_glyphs_are_distinct(self):
        glyphs = {status_glyph(s) for s in ("queued", "rendering", "complete", "error")}
        assert len(glyphs) == 4
        assert UNKNOWN_STATUS_GLYPH not in glyphs

    def test_unknown_status(self):
        assert status_glyph("paused") == UNKNOWN_STATUS_GLYPH
        assert status_glyph(None) == UNKNOWN_STATUS_GLYPH


class TestProjectInfo:
    def test_fields(self):
        text = format_project_info({"projectName": "Doc", "sequences": 3, "clips": 40, "duration": "00:10:00:00"})
        assert "**Project**: Doc" in text
        assert "**Sequences**: 3" in text
        assert "**Clips**: 40" in text

    def test_defaults(self):
        text = format_project_info({})
        assert "Unknown Project" in text
        assert "**Duration**: Unknown" in text
        assert "**Bins**: 0" in text


class TestActiveSequence:
    def test_full_payload(self):
        text = format_active_sequence({
            "sequence_name": "Main Edit",
            "frame_rate": 25,
            "resolution": {"width": 1920, "height": 1080},
            "track_count": {"video_tracks": 3, "audio_tracks": 4},
        })
        assert "**Name:** Main Edit" in text
        assert "**Resolution:** 1920x1080" in text
        assert "**Video Tracks:** 3" in text
        assert "**Audio Tracks:** 4" in text

    def test_sparse_payload_does_not_raise(self):
        text = format_active_sequence({})
        assert "**Name:** Unknown" in text
        assert "**Resolution:** Unknown" in text


class TestSequenceList:
    def test_marks_active(self):
        text = format_sequence_list({
            "total_sequences": 2,
            "active_sequence": "B",
            "sequences": [
                {"name": "A", "duration": "1:00", "resolution": "1920x1080", "frame_rate": 24, "clip_count": 5},
                {"name": "B", "duration": "2:00", "resolution": "1920x1080", "frame_rate": 24, "clip_count": 7,
                 "is_active": True},
            ],
        })
        lines = text.splitlines()
        a_line = next(line for line in lines if "**A**" in line)
        b_line = next(line for line in lines if "**B**" in line)
        assert "ACTIVE" not in a_line
        assert "ACTIVE" in b_line
        assert "All Sequences (2)" in text

    def test_empty(self):
        assert "No sequences" in format_sequence_list({"sequences": []})


class TestSequenceDetails:
    def test_nested_tracks_are_indented_bullets(self):
        text = format_sequence_details({
            "sequence_name": "Main",
            "settings": {"resolution": {"width": 1920, "height": 1080}, "frame_rate": 24, "audio_sample_rate": 48000},
            "tracks": {
                "video_tracks": [{"track_number": 1, "track_name": "Video 1", "clip_count": 4, "is_visible": True}],
                "audio_tracks": [{"track_number": 1, "track_name": "Audio 1", "clip_count": 2, "is_muted": True}],
            },
            "effects_applied": ["Lumetri Color"],
            "markers": [{}, {}],
        })
        assert "  • Track 1: Video 1 (4 clips)" in text
        assert "  • Track 1: Audio 1 (2 clips)" in text
        assert "🔇" in text
        assert "**Applied Effects:** Lumetri Color" in text
        assert "**Markers:** 2" in text

    def test_missing_tracks(self):
        text = format_sequence_details({"sequence_name": "Empty"})
        assert "(none)" in text
        assert "**Applied Effects:** None" in text


class TestTimelineStructure:
    def test_track_labels(self):
        text = format_timeline_structure({
            "sequence_name": "Main",
            "video_tracks": [{"track_index": 1, "track_name": "V1", "blend_mode": "Normal"}],
            "audio_tracks": [{"track_index": 2, "track_name": "Dialog", "volume": -3, "pan": 0}],
        })
        assert "V1: V1" in text
        assert "(Normal)" in text
        assert "A2: Dialog" in text
        assert "Vol: -3dB" in text


class TestTimelineClips:
    def test_truncates_to_twenty(self):
        clips = [_clip(i) for i in range(25)]
        text = format_timeline_clips({"total_clips": 25, "clips": clips})
        assert text.count("• **Clip") == MAX_TIMELINE_CLIPS
        assert "showing first 20" in text
        assert "Clip 19" in text
        assert "Clip 20" not in text

    def test_short_list_shown_in_full(self):
        clips = [_clip(i) for i in range(10)]
        text = format_timeline_clips({"total_clips": 10, "clips": clips})
        assert text.count("• **Clip") == 10
        assert "showing first" not in text

    def test_source_file_name_only(self):
        text = format_timeline_clips({"clips": [_clip(3)]})
        assert "shot_03.mov" in text
        assert "Footage" not in text

    def test_effects_listed(self):
        clip = dict(_clip(1), effects=["Warp Stabilizer", "Crop"])
        text = format_timeline_clips({"clips": [clip]})
        assert "Effects: Warp Stabilizer, Crop" in text


class TestProjectMedia:
    def test_truncates_to_fifteen(self):
        items = [_media(i) for i in range(18)]
        text = format_project_media({"total_media_count": 18, "media_items": items})
        assert text.count("• **media_") == MAX_MEDIA_ITEMS
        assert "showing first 15" in text

    def test_no_indicator_at_cap(self):
        items = [_media(i) for i in range(15)]
        text = format_project_media({"total_media_count": 15, "media_items": items})
        assert "showing first" not in text

    def test_offline_flag(self):
        text = format_project_media({"media_items": [dict(_media(1), is_offline=True)]})
        assert "OFFLINE" in text


class TestProjectBins:
    def test_sub_bins_rendered_as_sub_list(self):
        text = format_project_bins({
            "total_bins": 2,
            "bins": [
                {"bin_name": "Footage", "media_count": 12, "sub_bins": [{"bin_name": "A-Cam"}, "B-Cam"],
                 "color_label": "Violet"},
            ],
        })
        assert "📁 **Footage** - 12 items" in text
        assert "  • A-Cam" in text
        assert "  • B-Cam" in text
        assert "🏷️ Violet" in text

    def test_child_bin_indented(self):
        text = format_project_bins({"bins": [{"bin_name": "Child", "parent_bin": "Root", "media_count": 1}]})
        assert "  📁 **Child**" in text


class TestPlayheadAndSelection:
    def test_playing(self):
        assert "Playing" in format_playhead({"is_playing": True})
        assert "Paused" in format_playhead({"is_playing": False})

    def test_no_selection(self):
        text = format_selection({"selection_type": "none"})
        assert "No clips or time range currently selected." in text

    def test_selected_clips(self):
        text = format_selection({
            "selection_type": "clips",
            "selected_clips": [{"clip_name": "Interview", "track_type": "V", "track_number": 2}],
            "selection_in": "00:00:01:00",
            "selection_out": "00:00:05:00",
        })
        assert "• **Interview** (V2)" in text
        assert "00:00:01:00 → 00:00:05:00" in text


class TestRenderQueue:
    def test_empty_queue(self):
        assert "No items in render queue." in format_render_queue({"total_queue_items": 0, "queue_items": []})

    def test_status_glyphs(self):
        text = format_render_queue({
            "total_queue_items": 2,
            "queue_items": [
                {"sequence_name": "A", "status": "rendering", "progress_percentage": 40},
                {"sequence_name": "B", "status": "mystery"},
            ],
        })
        assert "🔄 **A**" in text
        assert f"{UNKNOWN_STATUS_GLYPH} **B**" in text
        assert "Progress: 40%" in text


class TestCommandResults:
    def test_sequence_created_uses_requested_values_when_missing(self):
        requested = {"name": "Test", "width": 1920, "height": 1080, "framerate": 23.976}
        text = format_sequence_created({"created_timestamp": "now"}, requested)
        assert "**Name:** Test" in text
        assert "**Resolution:** 1920x1080" in text
        assert "**Frame Rate:** 23.976 fps" in text

    def test_export_queued(self):
        text = format_export_result({"status": "queued", "queue_position": 3, "estimated_duration": "5m"})
        assert "Export Queued Successfully" in text
        assert "**Queue Position:** 3" in text

    def test_export_started(self):
        text = format_export_result({"status": "exporting", "output_path": "/tmp/out.mp4"})
        assert "Export Started Successfully" in text
        assert "**Status:** exporting" in text


class TestNonObjectEntries:
    def test_sequence_list_skips_strings(self):
        text = format_sequence_list({"sequences": ["Main"]})
        assert "No sequences" in text

    def test_clips_skip_non_objects(self):
        text = format_timeline_clips({"clips": ["x", 3, _clip(1)]})
        assert text.count("• **Clip") == 1

    def test_media_bins_presets_skip_non_objects(self):
        assert "No media in project." in format_project_media({"media_items": ["a.mov"]})
        assert "No bins in project." in format_project_bins({"bins": [None]})
        assert "No export presets available." in format_export_presets({"presets": ["H.264"]})

    def test_nested_tracks_skip_non_objects(self):
        text = format_sequence_details({"tracks": {"video_tracks": ["V1"], "audio_tracks": [1]}})
        assert "(none)" in text
        assert "(none)" in format_timeline_structure({"video_tracks": [False]})
