"""
Streamlit Frontend for MoneyMap

The page a user keeps open to log expenses and watch the month's
spending.

DESIGN PRINCIPLES:
1. Every widget action calls exactly one controller method
2. After any action the page reruns and redraws from controller.view
3. Messages are short toasts, never blocking dialogs
4. Deleting everything needs an explicit confirmation

The controller lives in session state, so each browser session gets a
fresh filter (current month, all categories) while the data file on
disk is shared.
"""

import calendar
from datetime import date

import streamlit as st

from moneymap.models.expense import ALL_CATEGORIES, Notification, Theme
from moneymap.controller import ExpenseTrackerController, create_app_components
from moneymap.rendering import today_label


# Page configuration
st.set_page_config(
    page_title="MoneyMap",
    page_icon="💸",
    layout="wide",
    initial_sidebar_state="expanded",
)

THEME_CSS = {
    Theme.DARK: """
<style>
    .stApp { background-color: #020617; color: #e5e7eb; }
    .summary-accent { color: #22c55e; font-weight: bold; }
    .summary-danger { color: #f87171; font-weight: bold; }
    .limit-banner { padding: 12px; border-radius: 10px; background-color: #0f172a; }
    .limit-banner.warning { background-color: #450a0a; border-left: 5px solid #dc2626; }
    .big-number { font-size: 2em; font-weight: bold; }
</style>
""",
    Theme.LIGHT: """
<style>
    .stApp { background-color: #f3f4f6; color: #111827; }
    .summary-accent { color: #15803d; font-weight: bold; }
    .summary-danger { color: #b91c1c; font-weight: bold; }
    .limit-banner { padding: 12px; border-radius: 10px; background-color: #e5e7eb; }
    .limit-banner.warning { background-color: #fee2e2; border-left: 5px solid #dc2626; }
    .big-number { font-size: 2em; font-weight: bold; }
</style>
""",
}


def get_controller() -> ExpenseTrackerController:
    """Get or create this session's controller."""
    if "controller" not in st.session_state:
        try:
            st.session_state.controller = create_app_components(use_storage=True)
        except Exception as e:
            st.error(f"Failed to open storage, running in memory only: {e}")
            controller = create_app_components(use_storage=False)
            controller.audit_logger.log_error(
                error_type=type(e).__name__,
                error_message=str(e),
                details={"fallback": "in_memory"},
            )
            st.session_state.controller = controller
    return st.session_state.controller


def notify(notification: Notification | None) -> None:
    """Queue a toast for the next run (the page reruns after actions)."""
    if notification is not None:
        st.session_state.pending_notification = notification


def show_pending_notification() -> None:
    notification = st.session_state.pop("pending_notification", None)
    if notification is not None:
        st.toast(notification.message, icon="⚠️" if notification.is_danger else "✅")


def main():
    """Main application entry point."""
    controller = get_controller()
    view = controller.view

    st.markdown(THEME_CSS[view.theme], unsafe_allow_html=True)
    show_pending_notification()

    render_sidebar(controller)

    st.title("💸 MoneyMap")
    st.caption(today_label(controller.today()))

    render_summary(controller)
    st.markdown("---")
    render_expense_form(controller)
    st.markdown("---")
    render_charts(controller)
    st.markdown("---")
    render_transactions(controller)


def render_sidebar(controller: ExpenseTrackerController):
    """Filters, budget prompts, export, theme and clear-all."""
    view = controller.view
    st.sidebar.title("💸 MoneyMap")

    theme_label = "☀️ Light mode" if view.theme is Theme.LIGHT else "🌙 Dark mode"
    if st.sidebar.button(f"{theme_label} · switch"):
        controller.toggle_theme()
        st.rerun()

    # Month filter
    st.sidebar.markdown("### Month")
    month, year = controller.filters.period(controller.today())
    current_year = controller.today().year
    years = sorted(set(range(current_year - 5, current_year + 2)) | {year})
    col1, col2 = st.sidebar.columns(2)
    with col1:
        picked_month = st.selectbox(
            "Month",
            options=list(range(12)),
            index=month,
            format_func=lambda m: calendar.month_name[m + 1],
        )
    with col2:
        picked_year = st.selectbox("Year", options=years, index=years.index(year))
    if (picked_month, picked_year) != (month, year):
        controller.set_month_filter(f"{picked_year}-{picked_month + 1:02d}")
        st.rerun()

    # Category filter
    options = [ALL_CATEGORIES] + view.category_options
    selected = controller.filters.selected_category
    picked_category = st.sidebar.selectbox(
        "Category",
        options=options,
        index=options.index(selected) if selected in options else 0,
        format_func=lambda c: "All" if c == ALL_CATEGORIES else c,
    )
    if picked_category != selected:
        controller.set_category_filter(picked_category)
        st.rerun()

    st.sidebar.markdown("---")
    st.sidebar.markdown("### Budget")
    symbol = controller.settings.currency_symbol

    with st.sidebar.form("limit_form"):
        current = controller.budget.monthly_limit
        limit_raw = st.text_input(
            f"Monthly spending limit in {symbol}",
            value="" if current is None else str(current),
            help="Leave empty to remove the limit",
        )
        if st.form_submit_button("Set limit"):
            notify(controller.set_monthly_limit(limit_raw))
            st.rerun()

    with st.sidebar.form("income_form"):
        current = controller.budget.monthly_income
        income_raw = st.text_input(
            f"Monthly income / budget in {symbol}",
            value="" if current is None else str(current),
            help="Used for the balance card. Leave empty to remove.",
        )
        if st.form_submit_button("Set income"):
            notify(controller.set_monthly_income(income_raw))
            st.rerun()

    st.sidebar.markdown("---")
    st.sidebar.markdown("### Data")

    filename, payload = controller.build_export()
    st.sidebar.download_button(
        "⬇️ Export JSON",
        data=payload,
        file_name=filename,
        mime="application/json",
        on_click=controller.record_export,
    )

    confirmed = st.sidebar.checkbox(
        "Yes, clear all expenses. This cannot be undone.",
        key="confirm_clear",
    )
    st.sidebar.button(
        "🗑️ Clear all",
        key="clear_all",
        disabled=not confirmed,
        on_click=clear_all_expenses,
        args=(controller,),
    )


def clear_all_expenses(controller: ExpenseTrackerController) -> None:
    """Clear-all button callback; every clear needs a fresh confirmation."""
    confirmed = st.session_state.get("confirm_clear", False)
    st.session_state["confirm_clear"] = False
    notify(controller.clear_all(lambda: confirmed))


def render_summary(controller: ExpenseTrackerController):
    """Totals, limit banner and balance card."""
    view = controller.view
    summary = view.summary

    st.subheader(summary.month_label)
    col1, col2, col3 = st.columns(3)
    col1.metric("Today", summary.today_total)
    col2.metric("This month", summary.month_total)
    col3.metric("Overall", summary.overall_total)
    st.caption(summary.entries_label)

    col1, col2 = st.columns(2)
    with col1:
        banner = view.limit_banner
        css = "limit-banner warning" if banner.is_over else "limit-banner"
        st.markdown(
            f'<div class="{css}"><strong>Monthly limit:</strong> {banner.text}</div>',
            unsafe_allow_html=True,
        )
    with col2:
        card = view.balance_card
        if card.is_negative is None:
            css = ""
        else:
            css = "summary-danger" if card.is_negative else "summary-accent"
        st.markdown(
            f'<div>Balance: <span class="big-number {css}">{card.balance_text}</span></div>'
            f"<div>{card.income_text} · {card.spent_text}</div>",
            unsafe_allow_html=True,
        )


def render_expense_form(controller: ExpenseTrackerController):
    """The add-expense form."""
    st.markdown("### Add expense")
    categories = list(dict.fromkeys(
        controller.settings.categories_list + controller.view.category_options
    ))

    with st.form("expense_form", clear_on_submit=True):
        col1, col2, col3 = st.columns(3)
        with col1:
            amount = st.text_input(f"Amount ({controller.settings.currency_symbol})")
        with col2:
            expense_date = st.date_input("Date", value=controller.today())
        with col3:
            category = st.selectbox("Category", options=[""] + categories)
        note = st.text_input("Note (optional)")

        if st.form_submit_button("➕ Add expense", type="primary"):
            notify(controller.submit_expense(
                amount=amount,
                expense_date=expense_date if isinstance(expense_date, date) else None,
                category=category,
                note=note,
            ))
            st.rerun()


def render_charts(controller: ExpenseTrackerController):
    """Daily bar chart, category doughnut and category breakdown."""
    view = controller.view
    renderer = controller.renderer

    col1, col2 = st.columns([3, 2])
    with col1:
        st.markdown(f"### Daily spending {view.category_filter_label}")
        st.plotly_chart(renderer.daily_chart, use_container_width=True)
    with col2:
        st.markdown(f"### By category {view.category_filter_label}")
        st.plotly_chart(renderer.category_chart, use_container_width=True)

        if view.category_list.empty_message:
            st.info(view.category_list.empty_message)
        for row in view.category_list.rows:
            st.markdown(f"● **{row.category}** · {row.amount_text} · {row.percent}%")


def render_transactions(controller: ExpenseTrackerController):
    """Sorted transactions with a delete button per row."""
    st.markdown("### Transactions")
    table = controller.view.transactions

    if table.empty_message:
        st.info(table.empty_message)
        return

    header = st.columns([2, 2, 4, 2, 1])
    for col, title in zip(header, ["Date", "Category", "Note", "Amount", ""]):
        col.markdown(f"**{title}**")

    for row in table.rows:
        cols = st.columns([2, 2, 4, 2, 1])
        cols[0].write(row.date)
        cols[1].write(row.category)
        cols[2].write(row.note)
        cols[3].write(row.amount_text)
        if cols[4].button("Delete", key=f"delete_{row.id}"):
            notify(controller.delete_expense(row.id))
            st.rerun()


if __name__ == "__main__":
    main()
