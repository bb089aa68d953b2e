"""
Streamlit Frontend for Finance Tracker

The UI shell: it collects raw input, hands it to the TrackerSession and
paints the DashboardView it gets back. No business rules live here;
every value typed by the user is validated again by the core.

Run with:
    streamlit run app/main.py
"""

import streamlit as st

from finance_tracker.audit import configure_logging
from finance_tracker.config import get_settings
from finance_tracker.errors import NotFoundError, StorageError, ValidationError
from finance_tracker.formatting import format_currency, format_date, format_survival_days
from finance_tracker.models.expense import DEFAULT_CATEGORY, DashboardView
from finance_tracker.session import TrackerSession
from finance_tracker.storage import create_persistence


CATEGORY_SUGGESTIONS = [
    DEFAULT_CATEGORY,
    "Food",
    "Transport",
    "Shopping",
    "Bills",
    "Entertainment",
    "Health",
]


settings = get_settings()

# Page configuration
st.set_page_config(
    page_title=settings.app.page_title,
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="expanded",
)


def get_session() -> TrackerSession:
    """Get or open the tracker session for this browser session."""
    if "tracker" not in st.session_state:
        configure_logging(settings.app.log_level)
        persistence = create_persistence(settings.storage)
        st.session_state.tracker = TrackerSession.open(persistence)
    return st.session_state.tracker


def main():
    """Main application entry point."""
    session = get_session()

    st.sidebar.title("💰 " + settings.app.page_title)
    st.sidebar.markdown("---")
    render_balance_form(session)
    st.sidebar.markdown("---")
    render_expense_form(session)
    st.sidebar.markdown("---")
    render_reset(session)

    view = session.view()
    render_summary(view)
    st.markdown("---")

    col1, col2 = st.columns([2, 1])
    with col1:
        render_expense_table(session, view)
    with col2:
        render_category_breakdown(view)


def render_balance_form(session: TrackerSession):
    """Balance and savings; setting them restarts the averaging period."""
    st.sidebar.subheader("Balance")
    with st.sidebar.form("balance_form", clear_on_submit=True):
        balance = st.text_input("Total balance", placeholder="e.g. 1000")
        savings = st.text_input("Savings to keep aside", placeholder="e.g. 200")
        submitted = st.form_submit_button("Set balance")

    if submitted:
        try:
            session.set_balance(balance, savings)
            st.sidebar.success("Balance updated")
        except ValidationError as e:
            st.sidebar.error(f"Please enter a valid {e.field.replace('_', ' ')}: {e.message}")
        except StorageError as e:
            st.sidebar.error(f"Could not save: {e}")


def render_expense_form(session: TrackerSession):
    st.sidebar.subheader("Add expense")
    with st.sidebar.form("expense_form", clear_on_submit=True):
        amount = st.text_input("Amount", placeholder="e.g. 12.50")
        category = st.selectbox("Category", options=CATEGORY_SUGGESTIONS)
        submitted = st.form_submit_button("Add expense")

    if submitted:
        try:
            record = session.add_expense(amount, category)
            st.sidebar.success(f"Added {format_currency(record.amount)} for {record.category}")
        except ValidationError as e:
            st.sidebar.error(f"Please enter a valid expense amount: {e.message}")
        except StorageError as e:
            st.sidebar.error(f"Could not save: {e}")


def render_reset(session: TrackerSession):
    confirm = st.sidebar.checkbox("I want to delete all data")
    if st.sidebar.button("Reset tracker", disabled=not confirm):
        try:
            session.reset()
            st.rerun()
        except StorageError as e:
            st.sidebar.error(f"Could not reset: {e}")


def render_summary(view: DashboardView):
    metrics = view.metrics

    row1 = st.columns(3)
    row1[0].metric("Total balance", format_currency(metrics.total_balance))
    row1[1].metric("Savings", format_currency(metrics.total_savings))
    row1[2].metric("Total expense", format_currency(metrics.total_expense))

    row2 = st.columns(3)
    row2[0].metric("Available", format_currency(metrics.available_balance))
    row2[1].metric(
        "Average per day",
        format_currency(metrics.avg_daily_expense),
        help=f"Over {metrics.elapsed_days} day(s) since the balance was set",
    )
    row2[2].metric("Survival days", format_survival_days(metrics))

    if metrics.overspent:
        st.error("You have spent more than your available balance.")


def render_expense_table(session: TrackerSession, view: DashboardView):
    st.subheader("Expenses")

    if not view.groups:
        st.info("No expenses yet. Add one from the sidebar.")
        return

    header = st.columns([2, 2, 2, 2, 3])
    for col, title in zip(header, ["Date", "Day total", "Category", "Amount", ""]):
        col.markdown(f"**{title}**")

    for group in view.groups:
        marker = "🔴 " if group.over_budget else ""
        for index, record in enumerate(group.records):
            cols = st.columns([2, 2, 2, 2, 3])
            if index == 0:
                cols[0].write(marker + format_date(group.date))
                cols[1].write(format_currency(group.subtotal))
            cols[2].write(record.category)
            cols[3].write(format_currency(record.amount))
            with cols[4]:
                render_row_actions(session, record.id, record.amount)


def render_row_actions(session: TrackerSession, expense_id: int, amount: float):
    with st.popover("Edit / Delete"):
        new_amount = st.text_input("New amount", value=f"{amount:.2f}", key=f"amount_{expense_id}")
        if st.button("Save", key=f"save_{expense_id}"):
            try:
                session.update_expense_amount(expense_id, new_amount)
                st.rerun()
            except ValidationError as e:
                st.error(f"Please enter a valid amount: {e.message}")
            except NotFoundError:
                st.warning("That expense no longer exists.")
            except StorageError as e:
                st.error(f"Could not save: {e}")

        if st.button("Delete", key=f"delete_{expense_id}", type="primary"):
            try:
                session.remove_expense(expense_id)
                st.rerun()
            except StorageError as e:
                st.error(f"Could not save: {e}")


def render_category_breakdown(view: DashboardView):
    st.subheader("By category")

    if not view.categories:
        st.caption("No data")
        return

    for item in view.categories:
        st.progress(
            item.share / 100,
            text=f"{item.category}: {format_currency(item.total)} ({item.share:.1f}%)",
        )


if __name__ == "__main__":
    main()
