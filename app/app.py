# Project: weather-quicklook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
app.py — Streamlit Weather QuickLook page with Apple-inspired dark UI.

Run with: streamlit run app/app.py
Requires: pip install -e ".[ui]"
"""

import sys
from pathlib import Path

# Ensure the src/ package is importable when running from the project root
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import streamlit as st
import plotly.graph_objects as go

from weather_quicklook.config import load_config
from weather_quicklook.controller import Controller, State
from weather_quicklook.geolocation import geolocator_from_config
from weather_quicklook.utils import c_to_f
from weather_quicklook.weather import parse_daily


# ─────────────────────────────────────────────────────────────
# Page config — must be first Streamlit call
# ─────────────────────────────────────────────────────────────

st.set_page_config(
    page_title="Weather QuickLook",
    page_icon="🌤",
    layout="centered",
    initial_sidebar_state="collapsed",
)


# ─────────────────────────────────────────────────────────────
# CSS injection
# ─────────────────────────────────────────────────────────────

CUSTOM_CSS = """
<style>
  #MainMenu, footer, header { visibility: hidden; }
  .block-container { padding-top: 2rem; padding-bottom: 4rem; max-width: 860px; }

  html, body, [class*="css"] {
    font-family: -apple-system, BlinkMacSystemFont, "SF Pro Display",
                 "SF Pro Text", "Segoe UI", Roboto, sans-serif;
    background-color: #0a0a0a;
    color: #f5f5f7;
  }

  .stTextInput > div > div > input {
    background: #1c1c1e !important;
    border: 1px solid #3a3a3c !important;
    border-radius: 980px !important;
    color: #f5f5f7 !important;
    font-size: 1.1rem !important;
    padding: 0.75rem 1.25rem !important;
  }

  .stButton > button {
    background: #0a84ff !important;
    color: #ffffff !important;
    border: none !important;
    border-radius: 980px !important;
    font-weight: 600 !important;
  }

  .wa-card {
    background: #1c1c1e;
    border: 1px solid #2c2c2e;
    border-radius: 16px;
    padding: 24px 28px;
    margin: 1rem 0 1.5rem;
    display: flex;
    align-items: center;
    gap: 20px;
  }
  .current-emoji { font-size: 3.5rem; }
  .current-meta { flex: 1; }
  .current-title { font-size: 1.3rem; font-weight: 600; }
  .current-subtitle { color: #8e8e93; margin-top: 0.25rem; }
  .current-temp { font-size: 3.5rem; font-weight: 700; letter-spacing: -0.04em; }

  .forecast-grid {
    display: grid;
    grid-template-columns: repeat(auto-fit, minmax(100px, 1fr));
    gap: 10px;
  }
  .forecast-day {
    background: #1c1c1e;
    border: 1px solid #2c2c2e;
    border-radius: 12px;
    padding: 12px;
    text-align: center;
  }
  .day-name { color: #8e8e93; font-weight: 600; }
  .day-emoji { font-size: 1.8rem; margin: 6px 0; }
  .temp-range { font-variant-numeric: tabular-nums; }
  .precip { color: #636366; font-size: 0.85rem; }

  .placeholder {
    color: #8e8e93;
    text-align: center;
    padding: 2rem 0;
  }

  .wa-footer {
    text-align: center;
    color: #48484a;
    font-size: 0.8rem;
    padding: 3rem 0 1rem;
  }
</style>
"""

st.markdown(CUSTOM_CSS, unsafe_allow_html=True)

PLOTLY_LAYOUT = dict(
    paper_bgcolor="rgba(0,0,0,0)",
    plot_bgcolor="rgba(0,0,0,0)",
    font=dict(family="-apple-system, BlinkMacSystemFont, 'SF Pro Display', sans-serif",
              color="#8e8e93", size=12),
    margin=dict(l=8, r=8, t=32, b=8),
    legend=dict(bgcolor="rgba(0,0,0,0)", font=dict(color="#8e8e93")),
    xaxis=dict(showgrid=False, zeroline=False, tickfont=dict(color="#636366")),
    yaxis=dict(gridcolor="#2c2c2e", zeroline=False, tickfont=dict(color="#636366")),
)


# ─────────────────────────────────────────────────────────────
# Session state initialisation
# ─────────────────────────────────────────────────────────────

if "controller" not in st.session_state:
    config = load_config()
    controller = Controller(
        geolocator=geolocator_from_config(config),
        timeout=config["http"]["timeout"] or None,
        log_path=Path(config["log"]["path"]),
    )
    controller.session.use_fahrenheit = config["units"]["fahrenheit"]
    st.session_state.controller = controller

controller: Controller = st.session_state.controller


def on_unit_change() -> None:
    controller.set_unit(st.session_state.use_fahrenheit)


# ─────────────────────────────────────────────────────────────
# SECTION 1: Search, location and unit toggle
# ─────────────────────────────────────────────────────────────

st.markdown("## 🌤 Weather QuickLook")

with st.form("search-form", border=False):
    city = st.text_input(
        label="city",
        placeholder="Search a city",
        label_visibility="collapsed",
    )
    submitted = st.form_submit_button("Search")

if submitted:
    with st.spinner("Loading…"):
        controller.search(city)

btn_col, toggle_col = st.columns([1, 1])
with btn_col:
    if st.button("📍 Use my location"):
        with st.spinner("Getting your location…"):
            controller.locate()
with toggle_col:
    st.toggle(
        "°F",
        value=controller.session.use_fahrenheit,
        key="use_fahrenheit",
        on_change=on_unit_change,
    )


# ─────────────────────────────────────────────────────────────
# SECTION 2: Current conditions + 7-day forecast
# ─────────────────────────────────────────────────────────────

display = controller.display

if display.state is State.ERROR:
    st.markdown(f'<div class="placeholder">{display.message}</div>', unsafe_allow_html=True)
elif display.state is State.SUCCESS:
    view = display.view
    cur = view.current
    st.markdown(
        f"""
        <div class="wa-card">
          <div class="current-emoji">{cur.icon}</div>
          <div class="current-meta">
            <div class="current-title">{cur.place_label}</div>
            <div class="current-subtitle">{cur.condition} • {cur.subtitle}</div>
          </div>
          <div class="current-temp">{cur.temperature}</div>
        </div>
        """,
        unsafe_allow_html=True,
    )

    items = "".join(
        f"""
        <div class="forecast-day">
          <div class="day-name">{d.weekday}</div>
          <div class="day-emoji" title="{d.condition}">{d.icon}</div>
          <div class="temp-range">{d.temp_min} • {d.temp_max}</div>
          <div class="precip">{d.precipitation}</div>
        </div>
        """
        for d in view.days
    )
    st.markdown(f'<div class="forecast-grid">{items}</div>', unsafe_allow_html=True)

    # ── Temperature range chart
    last = controller.session.last_data
    if last is not None and len(view.days) > 1:
        days = parse_daily(last.data)
        # None (a gap in the model data) becomes a break in the line
        convert = (lambda c: None if c is None else c_to_f(c)) if view.fahrenheit else (lambda c: c)
        unit = "°F" if view.fahrenheit else "°C"
        labels = [d.weekday for d in view.days]

        fig_temp = go.Figure()
        fig_temp.add_trace(go.Scatter(
            x=labels, y=[convert(d.temp_max) for d in days],
            name="Max",
            mode="lines",
            line=dict(color="#0a84ff", width=2),
            fill="tonexty",
            fillcolor="rgba(10,132,255,0.08)",
        ))
        fig_temp.add_trace(go.Scatter(
            x=labels, y=[convert(d.temp_min) for d in days],
            name="Min",
            mode="lines",
            line=dict(color="#0a84ff", width=1, dash="dot"),
        ))
        fig_temp.update_layout(
            **PLOTLY_LAYOUT,
            title=dict(text=f"Temperature Range ({unit})", font=dict(color="#8e8e93", size=13)),
            height=280,
        )
        st.plotly_chart(fig_temp, use_container_width=True, config={"displayModeBar": False})
else:
    st.markdown(
        '<div class="placeholder">Search for a city or use your location.</div>',
        unsafe_allow_html=True,
    )


# ─────────────────────────────────────────────────────────────
# Footer
# ─────────────────────────────────────────────────────────────

st.markdown(
    '<div class="wa-footer">'
    'Powered by <a href="https://open-meteo.com" style="color:#0a84ff;text-decoration:none;">Open-Meteo</a>'
    ' &nbsp;·&nbsp; No API key required'
    '</div>',
    unsafe_allow_html=True,
)
