"""
Streamlit page for the cost of living comparison.
Computes net take-home pay for a household and solves for the salary that
keeps the same take-home pay in another city.
"""
import streamlit as st
import pandas as pd

from charts import create_comparison_bar_chart, create_take_home_breakdown_chart
from config_utils import (
    get_default_profile, get_housing_override, load_ui_config, save_ui_config, set_housing_override,
)
from cost_of_living import COST_OF_LIVING_2024, Category
from io_utils import (
    create_profile_download_json, export_comparison_csv, parse_profile_upload_json, validate_profile_json,
)
from relocation import compare_breakdowns, compare_expenses, solve_required_salary
from take_home import AgeBracket, ExpenseItem, HouseholdProfile, compute_net_take_home, validate_profile
from tax import FilingStatus
from tax_utils import TAX_TABLES_2024, city_label


def available_cities():
    """Cities present in both the tax tables and the cost of living table"""
    return [c for c in COST_OF_LIVING_2024.cities if c in TAX_TABLES_2024.city_states]


def initialize_session_state():
    if 'col_profile' not in st.session_state:
        st.session_state.col_profile = get_default_profile()
    if 'ui_config' not in st.session_state:
        st.session_state.ui_config = load_ui_config()


def profile_from_sidebar(profile):
    cities = available_cities()
    with st.sidebar:
        st.header("🏠 Household")
        city = st.selectbox("Current city", cities, index=cities.index(profile.city),
                            format_func=city_label)
        statuses = list(FilingStatus)
        filing_status = st.selectbox("Filing status", statuses,
                                     index=statuses.index(profile.filing_status),
                                     format_func=lambda s: s.value)
        ages = list(AgeBracket)
        age = st.selectbox("Age", ages, index=ages.index(profile.age), format_func=lambda a: a.value)

        st.header("💰 Income & Savings")
        salary = st.number_input("Salary ($)", min_value=0.0, value=float(profile.salary), step=1_000.0)
        four_oh_one_k = st.slider("401(k) contribution (% of salary)", 0.0, 100.0,
                                  float(profile.four_oh_one_k * 100), step=0.5) / 100
        hsa = st.number_input("HSA contribution ($/yr)", min_value=0.0,
                              value=float(profile.hsa_contribution), step=100.0)
        roth = st.number_input("Roth IRA contribution ($/yr)", min_value=0.0,
                               value=float(profile.roth_ira_contribution), step=100.0)
        after_tax = st.number_input("After tax investments ($/yr)", min_value=0.0,
                                    value=float(profile.after_tax_investments), step=100.0)

    st.subheader("🧾 Monthly Expenses")
    edited = st.data_editor(
        pd.DataFrame([{'name': e.name, 'category': e.category.value, 'amount': e.amount}
                      for e in profile.expenses]),
        num_rows="dynamic",
        column_config={
            'category': st.column_config.SelectboxColumn(
                "Category", options=[c.value for c in Category], required=True),
            'amount': st.column_config.NumberColumn("Amount ($/month)", min_value=0.0, format="$%.0f"),
        },
        key="col_expenses_editor",
    )
    expenses = [ExpenseItem(row['name'], row['category'], float(row['amount']))
                for row in edited.to_dict('records')
                if row.get('name') and row.get('category') and pd.notna(row.get('amount'))]

    return HouseholdProfile(
        city=city,
        filing_status=filing_status,
        age=age,
        salary=salary,
        four_oh_one_k=four_oh_one_k,
        hsa_contribution=hsa,
        roth_ira_contribution=roth,
        after_tax_investments=after_tax,
        expenses=expenses,
    )


def render_profile_io(profile):
    with st.sidebar:
        st.header("💾 Save / Load")
        st.download_button("Download profile JSON", create_profile_download_json(profile),
                           file_name="household_profile.json", mime="application/json")
        uploaded = st.file_uploader("Load profile JSON", type="json")
        if uploaded is not None:
            json_string = uploaded.getvalue().decode('utf-8')
            is_valid, error = validate_profile_json(json_string)
            if is_valid:
                st.session_state.col_profile = parse_profile_upload_json(json_string)
                st.success("Profile loaded")
            else:
                st.error(error)


def main():
    st.title("🏙️ Cost of Living Comparison")
    initialize_session_state()

    profile = profile_from_sidebar(st.session_state.col_profile)
    st.session_state.col_profile = profile
    render_profile_io(profile)

    for issue in validate_profile(profile):
        st.warning(issue)

    breakdown = compute_net_take_home(profile)
    col1, col2, col3 = st.columns(3)
    col1.metric("Net take-home", f"${breakdown.net_take_home:,.0f}")
    col2.metric("Total tax", f"${breakdown.total_tax:,.0f}")
    col3.metric("Savings rate", f"{breakdown.savings_rate:.1%}")
    st.plotly_chart(create_take_home_breakdown_chart(breakdown), use_container_width=True)

    st.markdown("---")
    st.subheader("🚚 Moving Somewhere Else?")
    destinations = [c for c in available_cities() if c != profile.city]
    dest_city = st.selectbox("Destination city", destinations, format_func=city_label)

    config = st.session_state.ui_config
    saved_override = get_housing_override(config, dest_city)
    use_override = st.checkbox("Use my own monthly housing cost", value=saved_override is not None)
    housing_override = None
    if use_override:
        housing_override = st.number_input("Monthly housing cost ($)", min_value=0.0,
                                           value=saved_override or 0.0, step=50.0)
    if housing_override != saved_override:
        config = set_housing_override(config, dest_city, housing_override)
        save_ui_config(config)
        st.session_state.ui_config = config

    result = solve_required_salary(profile, dest_city, housing_override=housing_override)
    if not result.converged:
        st.error(result.message)
        return

    change = result.salary_change
    st.metric(f"Salary needed in {city_label(dest_city)}", f"${result.salary:,.0f}",
              delta=f"{change:+,.0f}")
    if result.message:
        st.info(result.message)

    local, remote = city_label(profile.city), city_label(dest_city)
    tax_rows = compare_breakdowns(result.source_breakdown, result.breakdown)
    expense_rows = compare_expenses(profile, result.profile)

    tab1, tab2 = st.tabs(["Taxes & Contributions", "Expenses"])
    with tab1:
        st.plotly_chart(create_comparison_bar_chart(tax_rows, local, remote,
                                                    title="Taxes and Contributions"),
                        use_container_width=True)
        st.download_button("Download CSV", export_comparison_csv(tax_rows),
                           file_name="tax_comparison.csv", mime="text/csv", key="tax_csv")
    with tab2:
        st.plotly_chart(create_comparison_bar_chart(expense_rows, local, remote,
                                                    title="Monthly Expenses",
                                                    yaxis_title="Monthly Amount ($)"),
                        use_container_width=True)
        st.download_button("Download CSV", export_comparison_csv(expense_rows),
                           file_name="expense_comparison.csv", mime="text/csv", key="expense_csv")


main()
