"""Solar Sync — Streamlit dashboard for the sun's position between sunrise and sunset."""

import html
import json

import streamlit as st
from dotenv import load_dotenv
from streamlit_js_eval import get_geolocation, streamlit_js_eval

load_dotenv()

from solarsync.compute import uv_bar_percent  # noqa: E402
from solarsync.config import (  # noqa: E402
    CHRONOTYPES,
    SKIN_TYPES,
    ConfigError,
    forecast_path,
    local_now,
    preferences_from_env,
    resolve_location,
    save_preferences,
)
from solarsync.forecast import (  # noqa: E402
    ForecastError,
    forecast_days,
    load_forecast,
    parse_forecast,
    selectable_dates,
)
from solarsync.i18n import clock_hhmm, date_label, month_label, t  # noqa: E402
from solarsync.insights import DID_YOU_KNOW, INSIGHTS  # noqa: E402
from solarsync.models import Forecast, Location, WidgetBounds  # noqa: E402
from solarsync.renderers.svg_arc import render_arc_svg  # noqa: E402
from solarsync.timeline import PointerHub, TimelineSession  # noqa: E402

_ARC_WIDTH_PX = 340
_ARC_BOUNDS = WidgetBounds(left=0, top=0, width=_ARC_WIDTH_PX, height=_ARC_WIDTH_PX / 2)

# --- Language detection (browser-first via streamlit-js-eval) ---
# navigator.language is read once and cached in session_state.
# On the first run the JS call returns None; the rerun triggered by
# streamlit_js_eval fills it in.
if "lang" not in st.session_state:
    _browser_lang: str | None = streamlit_js_eval(
        js_expressions="navigator.language", key="_lang_detect", height=0
    )
    if _browser_lang is not None:
        st.session_state.lang = "ko" if _browser_lang.lower().startswith("ko") else "en"

_lang: str = st.session_state.get("lang", "en")

st.set_page_config(
    page_title=t("page_title", _lang),
    page_icon="☀",
    layout="centered",
    initial_sidebar_state="collapsed",
)

# --- Session state initialization ---
if "error_msg" not in st.session_state:
    st.session_state.error_msg = None
if "prefs" not in st.session_state:
    try:
        st.session_state.prefs = preferences_from_env()
    except ConfigError as e:
        st.error(t("error_config", _lang).format(error=html.escape(str(e))))
        st.stop()
if "forecast" not in st.session_state:
    st.session_state.forecast = Forecast(daily=None, hourly=None)
    _path = forecast_path()
    if _path:
        try:
            st.session_state.forecast = load_forecast(_path)
        except ForecastError as e:
            st.session_state.error_msg = t("error_forecast", _lang).format(
                error=html.escape(str(e))
            )

st.markdown(
    """
    <style>
    html, body, [data-testid="stAppViewContainer"], [data-testid="stMain"] {
        background: linear-gradient(to bottom, #231e10, #15120a) !important;
        color: #ffffff;
    }
    [data-testid="stHeader"], [data-testid="stToolbar"] { display: none !important; }
    .ss-card {
        background: rgba(45,38,22,0.4);
        border: 1px solid rgba(255,255,255,0.05);
        border-radius: 16px;
        padding: 1rem 1.2rem;
        margin-bottom: 0.6rem;
    }
    .ss-muted { color: rgba(255,255,255,0.5); font-size: 0.8rem; }
    .ss-badge {
        display: inline-block; padding: 0.1rem 0.7rem; border-radius: 999px;
        border: 1px solid rgba(244,192,37,0.3); color: #f4c025;
        font-size: 0.65rem; font-weight: 700; text-transform: uppercase;
    }
    .ss-badge.on { background: #f4c025; color: #000000; }
    .ss-uvbar { background: rgba(255,255,255,0.1); height: 6px; border-radius: 999px; overflow: hidden; }
    .ss-uvbar > div {
        height: 100%; border-radius: 999px;
        background: linear-gradient(to right, #4ade80, #facc15, #ef4444);
    }
    </style>
    """,
    unsafe_allow_html=True,
)

# --- Forecast upload: parsed before the wall clock reads its timezone ---
uploaded = st.file_uploader(t("label_forecast_file", _lang), type=["json"])
if uploaded is not None:
    try:
        st.session_state.forecast = parse_forecast(json.load(uploaded))
        st.session_state.error_msg = None
    except (ForecastError, ValueError) as e:
        st.session_state.error_msg = t("error_forecast", _lang).format(
            error=html.escape(str(e))
        )

# --- Location: GPS when allowed, else saved, else default ---
_gps: tuple[float, float] | None = None
if st.session_state.prefs.use_precise_location:
    _geo = get_geolocation()
    if isinstance(_geo, dict) and "coords" in _geo:
        _gps = (_geo["coords"]["latitude"], _geo["coords"]["longitude"])
location: Location = resolve_location(st.session_state.prefs, _gps)
forecast: Forecast = st.session_state.forecast

try:
    _now = local_now(location, tz_name=forecast.timezone)
except ConfigError as e:
    st.error(t("error_config", _lang).format(error=html.escape(str(e))))
    st.stop()
wall_clock = _now.hour * 60 + _now.minute

if "timeline" not in st.session_state:
    st.session_state.timeline = TimelineSession(_now.date())
timeline: TimelineSession = st.session_state.timeline

# --- Inputs: date, simulation ---
_dates = selectable_dates(_now.date())
if timeline.selected_date not in _dates:
    timeline.selected_date = _dates[0]
timeline.selected_date = st.selectbox(
    t("label_date", _lang),
    options=_dates,
    index=_dates.index(timeline.selected_date),
    format_func=lambda d: date_label(d, _lang),
)

col_toggle, col_slider = st.columns([1, 3])
with col_toggle:
    simulate = st.toggle(t("label_simulate", _lang), value=False)
with col_slider:
    slider_value = st.slider(
        t("label_timeline", _lang),
        min_value=0.0,
        max_value=1.0,
        value=0.5,
        step=0.01,
        disabled=not simulate,
    )

# --- Derived state: the slider stands in for an arc drag ---
# Nothing dispatches on this hub; move_to() is the only input.
if simulate:
    with timeline.drag(PointerHub(), _ARC_BOUNDS) as gesture:
        gesture.move_to(slider_value)
        state = gesture.derive(forecast.daily, forecast.hourly, wall_clock)
else:
    state = timeline.derive(forecast.daily, forecast.hourly, wall_clock)

if st.session_state.error_msg:
    st.error(st.session_state.error_msg)
elif forecast.daily is None:
    st.info(t("placeholder", _lang))

# --- Header ---
col_place, col_weather = st.columns([3, 2])
with col_place:
    st.markdown(
        f"<h3 style='margin-bottom:0'>{html.escape(location.name)}</h3>"
        f"<div class='ss-muted'>{date_label(timeline.selected_date, _lang).upper()}</div>",
        unsafe_allow_html=True,
    )
with col_weather:
    st.markdown(
        f"<div style='text-align:right'><span style='font-size:1.6rem'>{state.temperature}°</span> "
        f"<span style='color:{state.weather_display.color}'>{state.weather_display.icon}</span>"
        f"<div class='ss-muted'>{state.weather_display.description.upper()}</div></div>",
        unsafe_allow_html=True,
    )

# --- Solar arc ---
_badge = "badge_simulating" if state.simulating else "badge_current"
st.markdown(
    f"<div style='text-align:center'>{render_arc_svg(state, width=_ARC_WIDTH_PX)}"
    f"<div><span class='ss-badge{' on' if state.simulating else ''}'>{t(_badge, _lang)}</span></div>"
    f"<div style='font-size:3rem;font-weight:900'>{state.time_label}"
    f"<span style='font-size:1.2rem;color:rgba(255,255,255,0.5)'> {state.period}</span></div>"
    f"<h3 style='margin:0'>{state.phase.title}</h3>"
    f"<div class='ss-muted'>{state.phase.subtitle}</div></div>",
    unsafe_allow_html=True,
)

# --- Stats ---
col_uv, col_vitd = st.columns(2)
with col_uv:
    st.markdown(
        f"<div class='ss-card'><div class='ss-muted'>{t('card_uv', _lang).upper()}</div>"
        f"<div style='font-size:1.8rem;font-weight:700'>{state.uv.label}</div>"
        f"<div class='ss-muted'>{state.uv.level}</div>"
        f"<div class='ss-uvbar'><div style='width:{uv_bar_percent(state.uv.value):.0f}%'></div></div></div>",
        unsafe_allow_html=True,
    )
with col_vitd:
    _status = "status_active" if state.vitamin_d.active else "status_inactive"
    st.markdown(
        f"<div class='ss-card'><div class='ss-muted'>{t('card_vitamin_d', _lang).upper()}</div>"
        f"<div style='font-size:1.5rem;font-weight:700'>{state.vitamin_d.value}</div>"
        f"<div class='ss-muted'>{state.vitamin_d.subtitle}</div>"
        f"<div style='color:{'#f4c025' if state.vitamin_d.active else 'rgba(255,255,255,0.3)'}'>"
        f"{t(_status, _lang)}</div></div>",
        unsafe_allow_html=True,
    )

st.markdown(
    f"<div class='ss-card'><div class='ss-muted'>"
    f"{t('card_next', _lang).format(name=state.next_event.name).upper()}</div>"
    f"<span style='font-size:1.8rem;font-weight:700'>{state.next_event.remaining}</span> "
    f"<span class='ss-muted'>{state.next_event.subtitle}</span></div>"
    f"<div class='ss-card' style='background:#342d18;border-color:#493f22'>"
    f"<b>{t('card_tip', _lang)}</b><div class='ss-muted'>{state.tip}</div></div>",
    unsafe_allow_html=True,
)

# --- 7-day overview ---
with st.expander(t("section_forecast", _lang)):
    st.caption(month_label(timeline.selected_date, _lang))
    for row in forecast_days(forecast.daily):
        hours, mins = divmod(row.day_length_minutes, 60)
        st.markdown(
            f"**{date_label(row.day, _lang)}** · ☀ {clock_hhmm(row.sunrise_minutes)}"
            f" → {clock_hhmm(row.sunset_minutes)} · "
            + t("day_length", _lang).format(length=f"{hours}h {mins}m")
        )

# --- Settings (explicit save) ---
with st.expander(t("section_settings", _lang)):
    prefs = st.session_state.prefs
    saved = prefs.saved_location
    with st.form("settings"):
        skin_type = st.selectbox(
            t("label_skin_type", _lang),
            options=list(SKIN_TYPES),
            index=list(SKIN_TYPES).index(prefs.skin_type),
            format_func=lambda k: f"{k} · {SKIN_TYPES[k]}",
        )
        chronotype = st.selectbox(
            t("label_chronotype", _lang),
            options=list(CHRONOTYPES),
            index=list(CHRONOTYPES).index(prefs.chronotype),
            format_func=lambda k: CHRONOTYPES[k][0],
        )
        use_precise = st.toggle(t("label_precise", _lang), value=prefs.use_precise_location)
        loc_name = st.text_input(
            t("label_location_name", _lang), value=saved.name if saved else ""
        )
        col_lat, col_lng = st.columns(2)
        with col_lat:
            loc_lat = st.number_input(
                t("label_lat", _lang), -90.0, 90.0, value=saved.lat if saved else 0.0
            )
        with col_lng:
            loc_lng = st.number_input(
                t("label_lng", _lang), -180.0, 180.0, value=saved.lng if saved else 0.0
            )
        if st.form_submit_button(t("btn_save", _lang)):
            st.session_state.prefs = save_preferences(
                prefs,
                skin_type=skin_type,
                chronotype=chronotype,
                use_precise_location=use_precise,
                saved_location=(
                    Location(name=loc_name, lat=loc_lat, lng=loc_lng) if loc_name else None
                ),
            )
            st.toast(t("saved_toast", _lang))
            st.rerun()

# --- Insights ---
with st.expander(t("section_insights", _lang)):
    for item in INSIGHTS:
        st.markdown(
            f"<div class='ss-card'><div style='color:{item.color};font-size:0.7rem;"
            f"font-weight:700'>{item.category.upper()}</div>"
            f"<b>{item.title}</b><div class='ss-muted'>{item.content}</div></div>",
            unsafe_allow_html=True,
        )
    st.caption(DID_YOU_KNOW)
