from __future__ import annotations

from lyric_compiler import LyricSettings, compile_lyric_commands, compile_lyric_timeline, lyric_key_line
from merge_logger import ProblematicLyricsLine, RecordingLogger
from subtitle_store import SubtitleEntry


def _render(commands) -> list:
    return [str(command) for command in commands]


def test_each_entry_shows_then_resets() -> None:
    logger = RecordingLogger()
    entries = [SubtitleEntry(100, 200, "one"), SubtitleEntry(300, 400, "two")]

    commands = compile_lyric_commands(entries, LyricSettings(pv_id=1), logger)

    assert _render(commands) == [
        "TIME(100);",
        "LYRIC(1, -1);",
        "TIME(200);",
        "LYRIC(0, -1);",
        "TIME(300);",
        "LYRIC(2, -1);",
        "TIME(400);",
        "LYRIC(0, -1);",
    ]


def test_back_to_back_entries_drop_the_reset() -> None:
    logger = RecordingLogger()
    entries = [SubtitleEntry(100, 200, "one"), SubtitleEntry(200, 300, "two")]

    commands = compile_lyric_commands(entries, LyricSettings(pv_id=1), logger)

    assert _render(commands) == [
        "TIME(100);",
        "LYRIC(1, -1);",
        "TIME(200);",
        "LYRIC(2, -1);",
        "TIME(300);",
        "LYRIC(0, -1);",
    ]


def test_first_entry_at_zero_has_nothing_to_drop() -> None:
    commands = compile_lyric_commands([SubtitleEntry(0, 50, "x")], LyricSettings(pv_id=1), RecordingLogger())
    assert _render(commands) == ["TIME(0);", "LYRIC(1, -1);", "TIME(50);", "LYRIC(0, -1);"]


def test_no_trailing_end() -> None:
    timeline = compile_lyric_timeline([SubtitleEntry(10, 20, "x")], LyricSettings(pv_id=1), RecordingLogger())
    assert timeline.commands[-1].name == "LYRIC"
    assert timeline.remove_targets is False


def test_key_lines() -> None:
    assert lyric_key_line(LyricSettings(pv_id=7), 3, "  hello  ") == "pv_007.lyric.003=hello"
    assert lyric_key_line(LyricSettings(pv_id=812, english=True), 12, "hi") == "pv_812.lyric_en.012=hi"

    logger = RecordingLogger()
    compile_lyric_commands(
        [SubtitleEntry(0, 1, "a"), SubtitleEntry(2, 3, "b")],
        LyricSettings(pv_id=5, english=True),
        logger,
    )
    assert logger.lyrics == ["pv_005.lyric_en.001=a", "pv_005.lyric_en.002=b"]


def test_long_lines_are_reported_by_byte_length() -> None:
    logger = RecordingLogger()
    # 'pv_001.lyric.001=' is 17 bytes; each kana is 3 bytes in UTF-8.
    entries = [SubtitleEntry(0, 10, "short"), SubtitleEntry(20, 30, "あいう")]

    commands = compile_lyric_commands(entries, LyricSettings(pv_id=1, max_line_length=24), logger)

    assert logger.problematic_lyrics_lines == [ProblematicLyricsLine(index=2, expected=24, actual=26)]
    assert len(commands) == 8
