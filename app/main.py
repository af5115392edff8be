"""
Streamlit Frontend for the Expense Tracker

This is the presentation layer: it calls the store operations and the
aggregation functions and renders what they return. No expense logic
lives here.

DESIGN PRINCIPLES:
1. Simple, clear interface
2. Every store error is shown to the user, never swallowed
3. Visual feedback for all operations
"""

from datetime import date

import streamlit as st

from expense_tracker.audit import configure_logging
from expense_tracker.charts import comparison_figure
from expense_tracker.config import get_settings
from expense_tracker.models.expense import ExpenseCategory, Granularity, PeriodSummary
from expense_tracker.queries import summarize
from expense_tracker.services.storage import StorageError
from expense_tracker.store import (
    ExpenseStore,
    NotFoundError,
    ValidationError,
    create_store,
)


# Page configuration
st.set_page_config(
    page_title="Expense Tracker",
    page_icon="💸",
    layout="wide",
)

TIME_FRAME_LABELS = {
    Granularity.DAY: "the selected day",
    Granularity.MONTH: "the selected month",
    Granularity.YEAR: "the selected year",
}

ANCHOR_FORMATS = {
    Granularity.DAY: "%B %d, %Y",
    Granularity.MONTH: "%B %Y",
    Granularity.YEAR: "%Y",
}


@st.cache_resource
def get_components():
    """Get or create the store and audit logger (cached)."""
    configure_logging(get_settings().app.log_level)
    return create_store(use_file_storage=True)


def flash(message: str) -> None:
    """Queue a success message to show after the next rerun."""
    st.session_state.flash = message


def main():
    """Main application entry point."""
    store, audit_logger = get_components()
    settings = get_settings().app

    st.title("💸 Expense Tracker")

    if st.session_state.get("flash"):
        st.success(st.session_state.pop("flash"))

    col1, col2 = st.columns(2)
    with col1:
        render_add_form(store)
    with col2:
        granularity, anchor = render_time_frame(settings.default_granularity)

    summary = summarize(store.records, granularity, anchor)

    render_filtered_list(store, summary)
    render_summary(summary)
    render_chart(summary)
    render_reset(store)

    with st.sidebar:
        st.header("Recent activity")
        for event in audit_logger.recent_events(limit=10):
            st.caption(f"{event.timestamp:%H:%M:%S} · {event.description}")


def render_add_form(store: ExpenseStore):
    """Render the add-expense form."""
    st.subheader("Add New Expense")

    with st.form("add_expense", clear_on_submit=True):
        amount = st.number_input("Amount", min_value=0.0, step=0.01, format="%.2f")
        category = st.selectbox(
            "Category",
            options=[c.value for c in ExpenseCategory],
            index=None,
            placeholder="Select a category",
        )
        submitted = st.form_submit_button("Create Expense", type="primary")

    if submitted:
        try:
            store.create(amount, category)
        except ValidationError as e:
            st.error(str(e))
        except StorageError as e:
            st.error(f"Expense created but could not be saved: {e}")
        else:
            flash("Expense created successfully!")
            st.rerun()


def render_time_frame(default: Granularity) -> tuple[Granularity, date]:
    """Render the time frame and date selectors."""
    st.subheader("Time Frame")

    options = list(Granularity)
    granularity = st.selectbox(
        "Time Frame",
        options=options,
        index=options.index(default),
        format_func=lambda g: g.value.capitalize(),
    )
    anchor = st.date_input(
        "Select Date",
        value=date.today(),
        min_value=date(1990, 1, 1),
        max_value=date.today(),
    )
    return granularity, anchor


def render_filtered_list(store: ExpenseStore, summary: PeriodSummary):
    """Render the expenses in the current window with edit/delete controls."""
    label = TIME_FRAME_LABELS[summary.granularity]
    st.subheader(f"Expenses for {label}: {summary.anchor.strftime(ANCHOR_FORMATS[summary.granularity])}")

    if not summary.records:
        st.info("No expenses in this period.")
        return

    for record in summary.records:
        col1, col2, col3, col4 = st.columns([3, 2, 1, 1])
        col1.markdown(f"**{record.category.value}**  \n{record.date:%b %d, %Y %H:%M}")
        new_amount = col2.number_input(
            "Amount",
            value=float(record.amount),
            min_value=0.0,
            step=0.01,
            format="%.2f",
            key=f"amount_{record.id}",
            label_visibility="collapsed",
        )
        if col3.button("Save", key=f"save_{record.id}"):
            try:
                store.update_amount(record.id, new_amount)
            except (ValidationError, NotFoundError) as e:
                st.error(str(e))
            except StorageError as e:
                st.error(f"Updated but could not be saved: {e}")
            else:
                flash("Expense updated successfully!")
                st.rerun()
        if col4.button("Delete", key=f"delete_{record.id}"):
            try:
                store.delete(record.id)
            except NotFoundError as e:
                st.error(str(e))
            except StorageError as e:
                st.error(f"Deleted but could not be saved: {e}")
            else:
                flash("Expense deleted successfully!")
                st.rerun()


def render_summary(summary: PeriodSummary):
    """Render the total for the window."""
    st.subheader("Expense Summary")
    st.metric(
        label="Total",
        value=f"{summary.total:,.2f}",
        delta=f"{summary.change:,.2f} vs previous period",
        delta_color="inverse",
    )


def render_chart(summary: PeriodSummary):
    """Render current vs previous period daily totals."""
    st.subheader("Expense Comparison Chart")

    if not summary.series:
        st.caption("Nothing to compare yet.")
        return

    st.plotly_chart(comparison_figure(summary.series), use_container_width=True)


def render_reset(store: ExpenseStore):
    """Render the reset button with an explicit confirmation step."""
    if st.button("Reset All Data"):
        st.session_state.confirm_reset = True

    if st.session_state.get("confirm_reset"):
        st.warning("This deletes every expense. Are you sure?")
        col1, col2 = st.columns(2)
        if col1.button("Yes, delete everything", type="primary"):
            st.session_state.confirm_reset = False
            try:
                store.reset_all()
            except StorageError as e:
                st.error(f"Data cleared but storage could not be updated: {e}")
            else:
                flash("All data has been reset!")
                st.rerun()
        if col2.button("Cancel"):
            st.session_state.confirm_reset = False
            st.rerun()


if __name__ == "__main__":
    main()
