"""
Streamlit page for the Coast FIRE calculator.
"""
import streamlit as st

from charts import create_coast_fire_chart
from coast_fire import CoastFireParams, CoastFireProjector
from config_utils import get_default_coast_fire_params
from io_utils import export_coast_fire_csv, format_currency
from social_security import MAX_DELAY_AGE, MIN_CLAIM_AGE


def params_from_sidebar() -> CoastFireParams:
    defaults = get_default_coast_fire_params()
    with st.sidebar:
        st.header("🎂 Ages")
        current_age = st.number_input("Current age", min_value=16, max_value=100, value=defaults.current_age)
        retirement_age = st.number_input("Retirement age", min_value=int(current_age), max_value=100,
                                         value=max(defaults.retirement_age, int(current_age)))

        st.header("💰 Savings")
        current_invested = st.number_input("Currently invested ($)", min_value=0.0,
                                           value=float(defaults.current_invested), step=1_000.0)
        monthly_contribution = st.number_input("Monthly contribution ($)", min_value=0.0,
                                               value=float(defaults.monthly_contribution), step=50.0)
        annual_return = st.slider("Real annual return (%)", 0.0, 15.0,
                                  defaults.annual_return * 100, step=0.1) / 100

        st.header("🏖️ Retirement")
        retirement_spend = st.number_input("Annual spending in retirement ($)", min_value=0.0,
                                           value=float(defaults.retirement_spend), step=1_000.0)
        safe_withdraw_rate = st.slider("Safe withdrawal rate (%)", 1.0, 10.0,
                                       defaults.safe_withdraw_rate * 100, step=0.1) / 100

        st.header("🏛️ Social Security")
        include_social_security = st.checkbox("Offset spending with Social Security",
                                              value=defaults.include_social_security)
        annual_income = 0.0
        claim_age = None
        if include_social_security:
            annual_income = st.number_input("Annual income ($)", min_value=0.0, value=75_000.0, step=1_000.0)
            claim_age = st.slider("Claim age", MIN_CLAIM_AGE, MAX_DELAY_AGE, 67)

    return CoastFireParams(
        current_age=int(current_age),
        retirement_age=int(retirement_age),
        retirement_spend=retirement_spend,
        current_invested=current_invested,
        monthly_contribution=monthly_contribution,
        annual_return=annual_return,
        safe_withdraw_rate=safe_withdraw_rate,
        include_social_security=include_social_security,
        annual_income=annual_income,
        claim_age=claim_age,
    )


def main():
    st.title("🏖️ Coast FIRE")
    params = params_from_sidebar()

    try:
        projection = CoastFireProjector(params).project()
    except ValueError as e:
        st.error(str(e))
        return

    if projection.is_coast_fire:
        st.success("Already Coast FIRE! 🎉")
    elif projection.coast_fire_age is not None:
        st.info(f"Coast FIRE at age {projection.coast_fire_age}")
    else:
        st.warning("Contributions at this rate do not reach the target by retirement")

    col1, col2, col3 = st.columns(3)
    col1.metric("Target at retirement", format_currency(projection.target_at_retirement))
    col2.metric("Coast FIRE age", projection.coast_fire_age or "N/A")
    col3.metric("FIRE age", projection.fire_age or "N/A")

    st.plotly_chart(create_coast_fire_chart(projection), use_container_width=True)
    st.download_button("Download trajectory CSV", export_coast_fire_csv(projection),
                       file_name="coast_fire.csv", mime="text/csv")


main()
