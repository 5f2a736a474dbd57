"""Tests for subtitle models."""

import pytest
from subtitle_toolbox.models import SrtBlock, SubtitleFormat


class TestSrtBlock:

    def test_timecode_property(self):
        block = SrtBlock(1, 1000, 3500, ["Test"])
        assert block.timecode == "00:00:01,000 --> 00:00:03,500"

    def test_text(self):
        block = SrtBlock(1, 1000, 3500, ["one", "two"])
        assert block.text == "one\ntwo"

    def test_to_srt(self):
        block = SrtBlock(4, 1000, 3500, ["Hello"])
        assert block.to_srt() == "4\n00:00:01,000 --> 00:00:03,500\nHello"
        assert block.to_srt(1).startswith("1\n")


class TestSubtitleFormat:

    @pytest.mark.parametrize("value, expected", [
        ("srt", SubtitleFormat.SRT),
        (" LRC ", SubtitleFormat.LRC),
        (SubtitleFormat.VTT, SubtitleFormat.VTT),
        ("ass", None),
    ])
    def test_coerce(self, value, expected):
        assert SubtitleFormat.coerce(value) is expected

    def test_extension(self):
        assert SubtitleFormat.LRC.extension == ".lrc"
