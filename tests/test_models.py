"""
Tests for records, initials, timestamp formatting and blob decoding
"""
import datetime as dt
import json

from models import (
    DEFAULT_COLOR,
    PALETTE,
    Group,
    Note,
    decode_groups,
    decode_notes,
    encode_records,
    format_created_date,
    format_created_time,
    get_initials,
    normalize_color,
)


class TestInitials:
    """Tests for the group avatar label"""

    def test_single_word_takes_first_two_characters(self):
        assert get_initials("Work") == "WO"

    def test_two_words_take_first_letter_of_each(self):
        assert get_initials("my notes") == "MN"

    def test_only_first_two_words_count(self):
        assert get_initials("Cuvette Web Dev Batch") == "CW"

    def test_extra_whitespace_is_ignored(self):
        assert get_initials("  java   script ") == "JS"

    def test_single_character_name(self):
        assert get_initials("x") == "X"

    def test_empty_and_blank_names(self):
        assert get_initials("") == ""
        assert get_initials("   ") == ""
        assert get_initials(None) == ""


class TestTimestampFormatting:
    """Tests for createdDate / createdTime display strings"""

    def test_date_is_day_short_month_year(self):
        assert format_created_date(dt.datetime(2024, 6, 5, 9, 0)) == "5 Jun 2024"
        assert format_created_date(dt.datetime(2023, 12, 25, 9, 0)) == "25 Dec 2023"

    def test_afternoon_time(self):
        assert format_created_time(dt.datetime(2024, 6, 5, 17, 7)) == "05:07 PM"

    def test_morning_time(self):
        assert format_created_time(dt.datetime(2024, 6, 5, 9, 45)) == "09:45 AM"

    def test_midnight_and_noon(self):
        assert format_created_time(dt.datetime(2024, 6, 5, 0, 0)) == "12:00 AM"
        assert format_created_time(dt.datetime(2024, 6, 5, 12, 30)) == "12:30 PM"


class TestPalette:
    """Tests for colour normalization"""

    def test_palette_has_six_swatches(self):
        assert PALETTE == ("#B38BFA", "#FF79F2", "#43E6FC", "#F19576", "#0047FF", "#6691FF")
        assert DEFAULT_COLOR == "#B38BFA"

    def test_lowercase_swatch_maps_to_palette_spelling(self):
        assert normalize_color("#b38bfa") == "#B38BFA"

    def test_unknown_values_are_rejected(self):
        assert normalize_color("#000000") is None
        assert normalize_color("") is None
        assert normalize_color(None) is None


class TestBlobDecoding:
    """Tests for reading groups/notes blobs"""

    def test_absent_blob_is_empty(self):
        assert decode_groups(None) == []
        assert decode_notes(None) == []

    def test_encoded_groups_decode_to_equal_records(self):
        groups = [Group("1", "Work", "#B38BFA", "WO"), Group("2", "My Trip", "#0047FF", "MT")]
        assert decode_groups(encode_records(groups)) == groups

    def test_note_blob_uses_camel_case_fields(self):
        note = Note("n1", "g1", "line one\nline two", "5 Jun 2024", "05:07 PM")
        data = json.loads(encode_records([note]))
        assert data == [
            {
                "id": "n1",
                "groupId": "g1",
                "content": "line one\nline two",
                "createdDate": "5 Jun 2024",
                "createdTime": "05:07 PM",
            }
        ]

    def test_invalid_json_fails_closed(self):
        assert decode_groups("{not json") == []
        assert decode_notes("[{") == []

    def test_non_list_blob_fails_closed(self):
        assert decode_groups(json.dumps({"id": 1})) == []

    def test_record_missing_fields_fails_closed(self):
        assert decode_notes(json.dumps([{"id": 1, "content": "no group"}])) == []

    def test_missing_initials_are_derived(self):
        groups = decode_groups(json.dumps([{"id": 1717600000000, "name": "Java Script", "color": "#43E6FC"}]))
        assert groups == [Group("1717600000000", "Java Script", "#43E6FC", "JS")]

    def test_first_release_date_time_fields_are_read(self):
        blob = json.dumps([{"id": 5, "groupId": 7, "content": "hi", "date": "1 Jan 2024", "time": "10:00 AM"}])
        assert decode_notes(blob) == [Note("5", "7", "hi", "1 Jan 2024", "10:00 AM")]

    def test_deeply_nested_blob_fails_closed(self):
        blob = "[" * 200000 + "]" * 200000
        assert decode_groups(blob) == []
        assert decode_notes(blob) == []

    def test_loaded_names_are_trimmed(self):
        groups = decode_groups(json.dumps([{"id": 1, "name": "  Work ", "color": "#B38BFA"}]))
        assert groups == [Group("1", "Work", "#B38BFA", "WO")]
