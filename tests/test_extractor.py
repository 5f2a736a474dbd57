"""Tests for bilingual language extraction."""

import pytest

from subtitle_toolbox.classifier import Language
from subtitle_toolbox.exceptions import UnsupportedFileTypeError, UnsupportedLanguageError
from subtitle_toolbox.extractor import (
    choose_lines_for_keep,
    extract,
    extract_from_lrc,
    extract_from_srt,
)


BILINGUAL_SRT = """1
00:00:01,000 --> 00:00:02,000
こんにちは
你好

2
00:00:03,000 --> 00:00:04,000
Hello

3
00:00:05,000 --> 00:00:06,000
ありがとう
谢谢你
"""

BILINGUAL_LRC = "[00:02.5]ありがとう\n[00:01.00]こんにちは\n[00:01.00]你好\n[00:02.50]谢谢你"


class TestChooseLinesForKeep:

    def test_keep_chinese(self):
        assert choose_lines_for_keep(["こんにちは", "你好"], Language.ZH) == ["你好"]

    def test_keep_chinese_never_guesses(self):
        assert choose_lines_for_keep(["こんにちは", "Hello"], "ZH") == []
        assert choose_lines_for_keep(["東京", "大阪"], "ZH") == []

    def test_keep_japanese_direct(self):
        assert choose_lines_for_keep(["こんにちは", "你好"], "JA") == ["こんにちは"]

    def test_two_line_pair_fallback(self):
        # 東京 has no kana, but its partner is clearly Chinese
        assert choose_lines_for_keep(["東京", "你好"], "JA") == ["東京"]
        assert choose_lines_for_keep(["你好", "東京"], "JA") == ["東京"]

    def test_multi_line_fallback_keeps_non_chinese(self):
        assert choose_lines_for_keep(["東京", "大阪", "你好"], "JA") == ["東京", "大阪"]

    def test_no_signal_returns_empty(self):
        assert choose_lines_for_keep(["Hello", "World"], "JA") == []
        assert choose_lines_for_keep(["東京", "Hello"], "JA") == []


class TestExtractFromSrt:

    def test_keep_chinese_reindexes(self):
        assert extract_from_srt(BILINGUAL_SRT, "ZH") == (
            "1\n00:00:01,000 --> 00:00:02,000\n你好\n\n"
            "2\n00:00:05,000 --> 00:00:06,000\n谢谢你"
        )

    def test_keep_japanese(self):
        assert extract_from_srt(BILINGUAL_SRT, "JA") == (
            "1\n00:00:01,000 --> 00:00:02,000\nこんにちは\n\n"
            "2\n00:00:05,000 --> 00:00:06,000\nありがとう"
        )

    def test_timing_line_kept_verbatim(self):
        content = "7\n00:00:01,000-->00:00:02,000 X1:0\n你好"
        assert extract_from_srt(content, "ZH") == "1\n00:00:01,000-->00:00:02,000 X1:0\n你好"

    def test_malformed_blocks_skipped(self):
        content = "not a block\n\n1\n00:00:01,000 --> 00:00:02,000\n你好"
        assert extract_from_srt(content, "ZH") == "1\n00:00:01,000 --> 00:00:02,000\n你好"

    def test_block_without_index(self):
        content = "00:00:01,000 --> 00:00:02,000\nこんにちは\n你好"
        assert extract_from_srt(content, "JA") == "1\n00:00:01,000 --> 00:00:02,000\nこんにちは"

    def test_block_without_text_skipped(self):
        content = (
            "1\n00:00:01,000 --> 00:00:02,000\n\n"
            "2\n00:00:03,000 --> 00:00:04,000\n你好"
        )
        assert extract_from_srt(content, "ZH") == "1\n00:00:03,000 --> 00:00:04,000\n你好"

    def test_idempotent(self):
        once = extract_from_srt(BILINGUAL_SRT, "ZH")
        assert extract_from_srt(once, "ZH") == once

    def test_empty(self):
        assert extract_from_srt("", "ZH") == ""


class TestExtractFromLrc:

    def test_keep_chinese(self):
        assert extract_from_lrc(BILINGUAL_LRC, "ZH") == "[00:01.00]你好\n[00:02.5]谢谢你"

    def test_keep_japanese(self):
        assert extract_from_lrc(BILINGUAL_LRC, "JA") == "[00:01.00]こんにちは\n[00:02.5]ありがとう"

    def test_one_line_per_timestamp(self):
        assert extract_from_lrc("[00:01.00]你好\n[00:01.00]我们走吧", "ZH") == "[00:01.00]你好"

    def test_raw_tag_from_empty_line(self):
        assert extract_from_lrc("[00:01.0]\n[00:01.00]你好", "ZH") == "[00:01.0]你好"

    def test_idempotent(self):
        once = extract_from_lrc(BILINGUAL_LRC, "ZH")
        assert extract_from_lrc(once, "ZH") == once


class TestExtract:

    def test_keeps_file_name(self):
        result = extract("movie.srt", BILINGUAL_SRT, "SRT", "JA")
        assert result.output_file_name == "movie.srt"
        assert "こんにちは" in result.output_content

    def test_lrc(self):
        result = extract("song.lrc", BILINGUAL_LRC, "lrc", "zh")
        assert result.output_file_name == "song.lrc"
        assert result.output_content == "[00:01.00]你好\n[00:02.5]谢谢你"

    def test_pairing_fallback_in_srt(self):
        content = "1\n00:00:01,000 --> 00:00:02,000\n東京\n你好"
        result = extract("a.srt", content, "SRT", "JA")
        assert result.output_content == "1\n00:00:01,000 --> 00:00:02,000\n東京"

    def test_empty_extraction_is_not_an_error(self):
        content = "1\n00:00:01,000 --> 00:00:02,000\nHello\nWorld"
        assert extract("a.srt", content, "SRT", "ZH").output_content == ""

    def test_unsupported_file_type(self):
        with pytest.raises(UnsupportedFileTypeError, match="VTT"):
            extract("a.vtt", "", "VTT", "ZH")

    def test_unsupported_language(self):
        with pytest.raises(UnsupportedLanguageError):
            extract("a.srt", "", "SRT", "EN")
        with pytest.raises(UnsupportedLanguageError):
            extract("a.srt", "", "SRT", "UNKNOWN")
