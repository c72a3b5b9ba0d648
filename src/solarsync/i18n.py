"""Simple two-language (en/ko) translation helper and locale-formatted labels."""

from datetime import date

_STRINGS: dict[str, dict[str, str]] = {
    "page_title": {
        "ko": "솔라 싱크",
        "en": "Solar Sync",
    },
    "label_date": {
        "ko": "날짜",
        "en": "Date",
    },
    "label_forecast_file": {
        "ko": "예보 파일 (Open-Meteo JSON)",
        "en": "Forecast file (Open-Meteo JSON)",
    },
    "label_simulate": {
        "ko": "시간 시뮬레이션",
        "en": "Simulate time",
    },
    "label_timeline": {
        "ko": "일출 → 일몰",
        "en": "Sunrise → Sunset",
    },
    "badge_current": {
        "ko": "현재 시각",
        "en": "Current Time",
    },
    "badge_simulating": {
        "ko": "시뮬레이션",
        "en": "Simulating",
    },
    "card_uv": {
        "ko": "자외선 지수",
        "en": "UV Index",
    },
    "card_vitamin_d": {
        "ko": "비타민 D",
        "en": "Vitamin D",
    },
    "card_next": {
        "ko": "다음: {name}",
        "en": "Next: {name}",
    },
    "card_tip": {
        "ko": "생체리듬 팁",
        "en": "Circadian Tip",
    },
    "status_active": {
        "ko": "활성",
        "en": "Active",
    },
    "status_inactive": {
        "ko": "비활성",
        "en": "Inactive",
    },
    "section_forecast": {
        "ko": "7일 일출·일몰",
        "en": "7-Day Sunrise & Sunset",
    },
    "section_settings": {
        "ko": "설정",
        "en": "Settings",
    },
    "section_insights": {
        "ko": "오늘의 인사이트",
        "en": "Daily Insights",
    },
    "label_skin_type": {
        "ko": "피부 타입",
        "en": "Skin Type",
    },
    "label_chronotype": {
        "ko": "크로노타입",
        "en": "Chronotype",
    },
    "label_precise": {
        "ko": "정확한 위치 사용 (GPS)",
        "en": "Precise Location (GPS)",
    },
    "label_location_name": {
        "ko": "위치 이름",
        "en": "Location name",
    },
    "label_lat": {
        "ko": "위도",
        "en": "Latitude",
    },
    "label_lng": {
        "ko": "경도",
        "en": "Longitude",
    },
    "btn_save": {
        "ko": "저장하기",
        "en": "Save",
    },
    "saved_toast": {
        "ko": "설정을 저장했어요",
        "en": "Settings saved",
    },
    "day_length": {
        "ko": "낮 길이 {length}",
        "en": "Day length {length}",
    },
    "placeholder": {
        "ko": "예보 데이터가 없어 기본값(06:30-18:30)으로 표시하고 있어요",
        "en": "No forecast loaded. Showing the default 06:30-18:30 day",
    },
    "error_forecast": {
        "ko": "예보 파일을 읽을 수 없어요. ({error})",
        "en": "Could not read the forecast file. ({error})",
    },
    "error_config": {
        "ko": "설정 오류: {error}",
        "en": "Configuration error: {error}",
    },
}

_WEEKDAYS = {
    "en": ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"),
    "ko": ("월요일", "화요일", "수요일", "목요일", "금요일", "토요일", "일요일"),
}
_MONTHS_EN = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key


def date_label(day: date, lang: str) -> str:
    """Header date, e.g. "Monday, Oct 27" / "10월 27일 월요일"."""
    weekday = _WEEKDAYS.get(lang, _WEEKDAYS["en"])[day.weekday()]
    if lang == "ko":
        return f"{day.month}월 {day.day}일 {weekday}"
    return f"{weekday}, {_MONTHS_EN[day.month - 1][:3]} {day.day}"


def month_label(day: date, lang: str) -> str:
    """Calendar heading, e.g. "October 2025" / "2025년 10월"."""
    if lang == "ko":
        return f"{day.year}년 {day.month}월"
    return f"{_MONTHS_EN[day.month - 1]} {day.year}"


def clock_hhmm(minutes: int) -> str:
    """24-hour "HH:MM" label for a minute of the day (arc end labels)."""
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"
