import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import date, datetime

import streamlit as st
import pandas as pd
import plotly.express as px

from cuphabit.catalog import CUP_CATEGORIES, cups_in_category, load_catalog, safe_cup
from cuphabit.config import get_settings
from cuphabit.domain import BUBBLE, COFFEE, OTHER
from cuphabit.filters import DAY, MONTH, VIEW_MODES, WEEK
from cuphabit.log import configure_logging
from cuphabit.policy import first_weekday_offset, month_calendar
from cuphabit.services import HabitService, ReportService
from cuphabit.storage import JsonFileStorage
from cuphabit.validation import parse_budget_input, validate_drink_input

settings = get_settings()
configure_logging(settings.log_level, settings.log_json)

st.set_page_config(page_title="Cup Habit", layout="wide")

catalog = load_catalog(str(settings.catalog_path))
service = HabitService.from_storage(JsonFileStorage(settings.storage_path), catalog)
reports = ReportService()

TYPE_LABELS = {COFFEE: "☕ Coffee", BUBBLE: "🧋 Bubble tea", OTHER: "🥤 Other"}

# every rerun is a fresh read; the day marker only tells us to reset day views
if service.drinks.check_new_day_and_reset():
    st.session_state.pop("selected_day", None)

if "overview_month" not in st.session_state:
    st.session_state.overview_month = date.today().replace(day=1)


def logs_to_df(logs):
    rows = [
        {
            "date": log.date,
            "type": TYPE_LABELS.get(log.type, log.type),
            "name": log.label or "-",
            "amount": log.amount,
        }
        for log in logs
    ]
    return pd.DataFrame(rows, columns=["date", "type", "name", "amount"])


def add_drink_form(key: str, default_date=None):
    with st.form(key, clear_on_submit=True):
        drink_type = st.radio(
            "Drink",
            options=list(TYPE_LABELS),
            format_func=lambda t: TYPE_LABELS[t],
            horizontal=True,
        )
        price = st.text_input("Price")
        name = st.text_input("Drink name (optional)")
        day = st.date_input("Date", value=default_date or date.today())
        submitted = st.form_submit_button("Add")

    if not submitted:
        return
    result = validate_drink_input(drink_type, price, name, day.isoformat())
    if result.is_left():
        st.error(result.get_error()["message"])
        return
    added = service.add_drink(result.get_or_else(None))
    st.toast(f"You've got {added.coins_awarded} coins!", icon="🪙")


st.sidebar.markdown("### 🪙 Coins")
st.sidebar.metric("Balance", f"{service.coins.get_coins():,}")

menu = st.sidebar.radio("Menu", ["🏠 Home", "📅 Overview", "🛍 Store"])

if menu == "🏠 Home":
    snapshot = service.home_snapshot()
    current = safe_cup(catalog, snapshot.current_cup).map(lambda c: c.name).get_or_else("Classic White")

    k1, k2, k3 = st.columns(3)
    with k1:
        st.metric("Cups today", len(snapshot.today_logs))
    with k2:
        st.metric("Coins", f"{snapshot.coins:,}")
    with k3:
        st.metric("Current cup", current)

    st.header("💰 Monthly budget")
    progress = snapshot.progress
    if progress.budget is not None:
        st.progress(progress.percent / 100, text=f"{progress.spent:.2f} / {progress.budget:.2f}")
        st.caption(f"Remaining: {progress.remaining:.2f}")
    else:
        st.caption(f"Spent this month: {progress.spent:.2f} / —")

    with st.expander("Set budget"):
        budget_text = st.text_input(
            "Monthly budget (empty or 0 clears it)",
            value=f"{progress.budget:.2f}" if progress.budget else "",
        )
        if st.button("Save budget"):
            service.set_budget(parse_budget_input(budget_text))
            st.rerun()

    st.header("➕ Add a drink")
    add_drink_form("home_add")

    st.header("🧾 Today")
    if snapshot.today_logs:
        st.table(logs_to_df(snapshot.today_logs))
    else:
        st.info("No drinks logged today.")

    owned = service.selectable_cups()
    if len(owned) > 1:
        st.header("🥤 Choose your cup")
        ids = [c.id for c in owned]
        chosen = st.selectbox(
            "Cup",
            options=ids,
            index=ids.index(snapshot.current_cup) if snapshot.current_cup in ids else 0,
            format_func=lambda cid: next(c.name for c in owned if c.id == cid),
        )
        if chosen != snapshot.current_cup and service.select_cup(chosen):
            st.rerun()

elif menu == "📅 Overview":
    st.title("📅 Overview")

    mode = st.radio("View", VIEW_MODES, index=VIEW_MODES.index(MONTH), horizontal=True, format_func=str.capitalize)

    prev_col, title_col, next_col = st.columns([1, 4, 1])
    ref = st.session_state.overview_month
    with prev_col:
        if st.button("◀"):
            y, m = (ref.year - 1, 12) if ref.month == 1 else (ref.year, ref.month - 1)
            st.session_state.overview_month = date(y, m, 1)
            st.rerun()
    with next_col:
        if st.button("▶"):
            y, m = (ref.year + 1, 1) if ref.month == 12 else (ref.year, ref.month + 1)
            st.session_state.overview_month = date(y, m, 1)
            st.rerun()
    with title_col:
        st.subheader(ref.strftime("%B %Y"))

    logs = service.drinks.get_logs()

    days = month_calendar(logs, ref.year, ref.month)
    cells = [""] * first_weekday_offset(ref.year, ref.month)
    for d in days:
        marks = ("☕" if d.has_coffee else "") + ("🧋" if d.has_bubble else "") + ("🥤" if d.has_other else "")
        cells.append(f"{int(d.date[8:])} {marks}".strip())
    cells += [""] * (-len(cells) % 7)
    grid = pd.DataFrame(
        [cells[i:i + 7] for i in range(0, len(cells), 7)],
        columns=["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"],
    )
    st.table(grid)

    report = reports.window_report(mode, logs, datetime.now(), ref)
    result = report["result"]
    title = {DAY: "Today", WEEK: "This Week", MONTH: "This Month"}.get(mode, "This Year")
    st.header(title)

    k1, k2, k3 = st.columns(3)
    with k1:
        st.metric("Cups", result["total_cups"])
    with k2:
        st.metric("Spent", f"{result['total_spent']:.2f}")
    with k3:
        st.metric("Avg / cup", f"{result['avg_per_cup']:.2f}")

    if result["top_categories"]:
        df_cat = pd.DataFrame(
            [{"Type": TYPE_LABELS[t], "Cups": n} for t, n in result["top_categories"]]
        )
        fig = px.bar(df_cat, x="Type", y="Cups", title="Top drinks", template="plotly_white")
        st.plotly_chart(fig, use_container_width=True)

        for drink_type, names in result["top_names"].items():
            if names:
                st.markdown(f"**{TYPE_LABELS[drink_type]}**: " + ", ".join(f"{n} ×{c}" for n, c in names))
    else:
        st.info("No drinks in this period.")

    with st.expander("Log a drink for another day"):
        add_drink_form("overview_add", default_date=ref)

elif menu == "🛍 Store":
    st.title("🛍 Cup Store")
    balance = service.coins.get_coins()
    owned = service.cups.get_owned_cups()

    category = st.radio("Category", CUP_CATEGORIES, horizontal=True, format_func=str.capitalize)
    cols = st.columns(3)
    for idx, cup in enumerate(cups_in_category(catalog, category)):
        with cols[idx % 3]:
            st.markdown(f"**{cup.name}**")
            st.color_picker("Color", cup.color, key=f"color_{cup.id}", disabled=True, label_visibility="collapsed")
            if cup.id in owned:
                st.button("Owned", key=f"buy_{cup.id}", disabled=True)
            elif st.button(f"🪙 {cup.price:,}", key=f"buy_{cup.id}", disabled=balance < cup.price):
                if service.purchase_cup(cup.id):
                    st.rerun()
                else:
                    st.error("Not enough coins.")

    st.caption("💡 Collect coins by logging your drinks and staying within your budget")
