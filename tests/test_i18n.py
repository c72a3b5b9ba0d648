"""Tests for translations and locale labels."""

from datetime import date

from solarsync.i18n import clock_hhmm, date_label, month_label, t

DAY = date(2025, 10, 27)  # a Monday


class TestTranslate:
    def test_english(self):
        assert t("card_uv", "en") == "UV Index"

    def test_korean(self):
        assert t("btn_save", "ko") == "저장하기"

    def test_unknown_language_falls_back_to_english(self):
        assert t("btn_save", "fr") == "Save"

    def test_unknown_key_returns_key(self):
        assert t("no_such_key", "en") == "no_such_key"

    def test_placeholders(self):
        assert t("card_next", "en").format(name="Sunset") == "Next: Sunset"


class TestLabels:
    def test_date_label(self):
        assert date_label(DAY, "en") == "Monday, Oct 27"
        assert date_label(DAY, "ko") == "10월 27일 월요일"

    def test_month_label(self):
        assert month_label(DAY, "en") == "October 2025"
        assert month_label(DAY, "ko") == "2025년 10월"

    def test_clock_hhmm(self):
        assert clock_hhmm(390) == "06:30"
        assert clock_hhmm(1110) == "18:30"
        assert clock_hhmm(0) == "00:00"
