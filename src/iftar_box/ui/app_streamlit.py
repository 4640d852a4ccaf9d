"""
Streamlit UI for the Iftar Box order wizard.

Features:
- Four-step wizard: Configure Box, Add-Ons, Your Info, Review
- Live price summary in the sidebar on every change
- Checkout hand-off through the same query string the web checkout reads
- Price list tab with CSV export
"""
import streamlit as st
import pandas as pd
import sys
from dataclasses import replace
from pathlib import Path

# Add src to path for imports
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from iftar_box.engine import (
    BoxSize,
    BoxTheme,
    BourekOption,
    CustomerInfo,
    DeliveryMethod,
    HmissOption,
    compute_prices,
    fmt_money,
)
from iftar_box.engine.pricing_tables import INCLUDED
from iftar_box.codec import checkout_to_search_params
from iftar_box.config.settings import get_settings
from iftar_box.data.build_price_list import price_list_frame
from iftar_box.policy.campaign import (
    RAMADAN_END,
    RAMADAN_START,
    delivery_dates,
    is_full_campaign,
    max_start_date,
)
from iftar_box.policy.customer_validation import validate_customer
from iftar_box.services.checkout_service import build_checkout_summary
from iftar_box.services import wizard_service as wizard


st.set_page_config(
    page_title="Build Your Iftar Box",
    layout="wide",
    initial_sidebar_state="expanded"
)


@st.cache_resource
def get_settings_cached():
    """Get cached settings."""
    return get_settings()


settings = get_settings_cached()

if 'order' not in st.session_state:
    st.session_state.order = wizard.default_order()
if 'customer' not in st.session_state:
    st.session_state.customer = wizard.default_customer()
if 'delivery' not in st.session_state:
    st.session_state.delivery = DeliveryMethod.PICKUP
if 'step' not in st.session_state:
    st.session_state.step = 0
if 'checkout_query' not in st.session_state:
    st.session_state.checkout_query = None


def money(amount) -> str:
    return fmt_money(amount, settings.currency)


# ============================================================================
# SIDEBAR: Live Price Summary
# ============================================================================
with st.sidebar:
    st.header("🧾 Your Box")
    order = st.session_state.order
    prices = compute_prices(order, st.session_state.delivery)

    with st.container(border=True):
        st.markdown(f"**{wizard.plan_label(order)}**")
        st.caption(f"{wizard.BOX_LABELS[order.box_size]} · {wizard.THEME_LABELS[order.box_theme]}")
        m1, m2 = st.columns(2)
        m1.metric("Per day", money(prices.daily_total))
        m2.metric("Total", money(prices.grand_total))
        if prices.savings > 0:
            st.markdown(f":green[**You save {money(prices.savings)}**]")

    with st.expander("🔍 Price Details"):
        for t in prices.trace:
            if t.value:
                st.caption(f"**{t.step}**: {t.description} = `{t.value}`")
            else:
                st.caption(f"**{t.step}**: {t.description}")


# ============================================================================
# MAIN CONTENT: TABBED INTERFACE
# ============================================================================
st.title("Build Your Iftar Box")
st.caption(f"Ramadan {RAMADAN_START} → {RAMADAN_END} | Configure your meal in 4 easy steps")

tab1, tab2 = st.tabs(["🌙 Order Wizard", "📚 Price List"])


with tab1:
    step = st.session_state.step
    st.progress((step + 1) / len(wizard.STEPS), text=f"Step {step + 1} of {len(wizard.STEPS)}: {wizard.STEPS[step]}")
    order = st.session_state.order

    # ------------------------------------------------------------------
    # STEP 1: Configure Box
    # ------------------------------------------------------------------
    if step == 0:
        sizes = list(BoxSize)
        size = st.radio(
            "Box size",
            sizes,
            index=sizes.index(order.box_size),
            format_func=lambda s: wizard.BOX_LABELS[s],
            horizontal=True,
        )
        themes = list(BoxTheme)
        theme = st.radio(
            "Theme",
            themes,
            index=themes.index(order.box_theme),
            format_func=lambda t: wizard.THEME_LABELS[t],
            horizontal=True,
        )
        st.caption("Included: " + ", ".join(INCLUDED[size]))

        labels = [label for label, _, _ in wizard.PLAN_OPTIONS]
        plan_idx = st.radio(
            "Order type",
            range(len(labels)),
            index=wizard.active_plan_index(order),
            format_func=lambda i: labels[i],
            horizontal=True,
        )
        _, plan_type, plan_duration = wizard.PLAN_OPTIONS[plan_idx]
        updated = order
        if plan_idx != wizard.active_plan_index(order):
            updated = wizard.select_plan(order, plan_type, plan_duration)
        updated = replace(updated, box_size=size, box_theme=theme)

        if is_full_campaign(updated):
            st.info(f"All 30 nights of Ramadan, from {RAMADAN_START}")
        else:
            start = st.date_input(
                "Start date",
                value=pd.Timestamp(updated.start_date).date() if updated.start_date else None,
                min_value=pd.Timestamp(RAMADAN_START).date(),
                max_value=pd.Timestamp(max_start_date(updated)).date(),
            )
            if start is not None:
                updated = wizard.set_start_date(updated, start.isoformat())
            dates = delivery_dates(updated)
            if dates:
                st.caption(f"Delivery: {dates[0]} → {dates[-1]}")

        if updated != st.session_state.order:
            st.session_state.order = updated
            st.rerun()

    # ------------------------------------------------------------------
    # STEP 2: Add-Ons
    # ------------------------------------------------------------------
    elif step == 1:
        bourek = st.select_slider(
            "Extra boureks",
            options=list(BourekOption),
            value=order.bourek_option,
            format_func=lambda b: "None" if b == BourekOption.NONE else f"{int(b)} pcs",
        )
        hmiss = st.radio(
            "Hmiss",
            list(HmissOption),
            index=list(HmissOption).index(order.hmiss_option),
            format_func=lambda h: h.value.title(),
            horizontal=True,
        )
        salad = st.number_input("Extra salads", min_value=0, max_value=4, value=order.salad_extra, step=1)

        updated = replace(wizard.set_salad_extra(order, salad), bourek_option=bourek, hmiss_option=hmiss)
        if updated != st.session_state.order:
            st.session_state.order = updated
            st.rerun()

    # ------------------------------------------------------------------
    # STEP 3: Your Info
    # ------------------------------------------------------------------
    elif step == 2:
        info = st.session_state.customer
        methods = list(DeliveryMethod)
        delivery = st.radio(
            "Delivery",
            methods,
            index=methods.index(st.session_state.delivery),
            format_func=lambda m: "Pickup (Free)" if m == DeliveryMethod.PICKUP else "Home delivery",
            horizontal=True,
        )
        c1, c2 = st.columns(2)
        first_name = c1.text_input("First name", value=info.first_name)
        last_name = c2.text_input("Last name", value=info.last_name)
        phone = c1.text_input("Phone number (WhatsApp)", value=info.phone)
        email = c2.text_input("Email address", value=info.email)
        address = city = postal_code = ""
        if delivery == DeliveryMethod.DELIVERY:
            address = st.text_input("Street address", value=info.address)
            c3, c4 = st.columns(2)
            city = c3.text_input("City", value=info.city)
            postal_code = c4.text_input("Postal code", value=info.postal_code)
        notes = st.text_area("Notes", value=info.notes)

        st.session_state.customer = CustomerInfo(
            first_name=first_name, last_name=last_name, phone=phone, email=email,
            address=address, city=city, postal_code=postal_code, notes=notes,
        )
        if delivery != st.session_state.delivery:
            st.session_state.delivery = delivery
            st.rerun()

    # ------------------------------------------------------------------
    # STEP 4: Review
    # ------------------------------------------------------------------
    else:
        prices = compute_prices(order, st.session_state.delivery)
        line_df = pd.DataFrame([{
            'Item': line.description,
            'Qty': line.quantity,
            'Per Day': money(line.daily_price),
        } for line in prices.lines])
        st.dataframe(line_df, use_container_width=True, hide_index=True)
        if prices.days > 1:
            st.caption(f"{money(prices.daily_total)} / day × {prices.days} days")
        if prices.delivery_fee > 0:
            st.caption(f"+ {money(prices.delivery_fee)} delivery")
        st.metric("Total to pay", money(prices.grand_total))

        errors = validate_customer(st.session_state.customer, st.session_state.delivery)
        for message in errors.values():
            st.warning(message)

        if st.button("✅ Confirm & Continue to Checkout", type="primary", disabled=bool(errors)):
            st.session_state.checkout_query = checkout_to_search_params(
                order, st.session_state.customer, st.session_state.delivery
            )

        if st.session_state.checkout_query:
            summary = build_checkout_summary(st.session_state.checkout_query, settings)
            st.divider()
            st.subheader("Checkout")
            st.code(settings.checkout_url(st.session_state.checkout_query), language=None)
            st.markdown(f"**{summary.plan_label}** for {summary.customer.full_name}")
            for warning in summary.warnings:
                st.warning(warning)
            st.button(f"💳 {summary.pay_label}", disabled=not summary.ready)

    st.divider()
    nav1, nav2 = st.columns(2)
    with nav1:
        if st.button("← Back", disabled=step == 0, use_container_width=True):
            st.session_state.step = wizard.previous_step(step)
            st.rerun()
    with nav2:
        if st.button("Continue →", type="primary", disabled=step == len(wizard.STEPS) - 1, use_container_width=True):
            st.session_state.step = wizard.next_step(step)
            st.rerun()


# ============================================================================
# TAB 2: PRICE LIST
# ============================================================================
with tab2:
    st.subheader("📚 Price List (per day)")
    prices_df = price_list_frame()
    st.dataframe(prices_df, use_container_width=True, hide_index=True)
    st.download_button(
        "📥 CSV",
        data=prices_df.to_csv(index=False),
        file_name="iftar_box_price_list.csv",
        mime="text/csv",
    )
