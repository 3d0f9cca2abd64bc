"""
Streamlit page for the Monte Carlo safe withdrawal rate simulation.
Draws a constant withdrawal from a stock/bond portfolio and shows how the
balance evolves across trials.
"""
import streamlit as st
import pandas as pd

from charts import (
    create_drawdown_aggregates_chart, create_drawdown_paths_chart,
    create_solvency_over_time, create_terminal_balance_distribution,
)
from config_utils import get_default_drawdown_params
from io_utils import (
    export_drawdown_aggregates_csv, export_drawdown_paths_csv, format_currency, funds_from_records,
)
from simulation import MAX_SIMULATIONS, DrawdownParams, DrawdownSimulator, calculate_summary_stats


def params_from_sidebar() -> DrawdownParams:
    defaults = get_default_drawdown_params()
    with st.sidebar:
        st.header("💼 Portfolio")
        initial_investment = st.number_input("Initial investment ($)", min_value=0.0,
                                             value=float(defaults.initial_investment), step=10_000.0)
        withdraw_rate = st.slider("Withdrawal rate (%)", 0.0, 15.0,
                                  defaults.withdraw_rate * 100, step=0.1) / 100
        inflation = st.slider("Inflation (%)", 0.0, 10.0, defaults.inflation * 100, step=0.1) / 100

        st.header("📈 Funds")
        funds = st.data_editor(
            pd.DataFrame([{'name': f.name, 'mean': f.mean, 'std': f.std, 'weight': f.weight}
                          for f in defaults.portfolio]),
            num_rows="dynamic",
            key="mc_funds_editor",
        )
        portfolio = funds_from_records(funds.to_dict('records'))

        st.header("🎲 Simulation")
        years = st.number_input("Years", min_value=1, max_value=100, value=defaults.years)
        num_sims = st.number_input("Simulations", min_value=1, max_value=MAX_SIMULATIONS,
                                   value=defaults.num_sims)
        seed = st.number_input("Random seed (0 for random)", min_value=0, value=0)

    return DrawdownParams(
        years=int(years),
        num_sims=int(num_sims),
        initial_investment=initial_investment,
        withdraw_rate=withdraw_rate,
        inflation=inflation,
        portfolio=portfolio,
        random_seed=int(seed) or None,
    )


def main():
    st.title("📊 Safe Withdrawal Rate")
    params = params_from_sidebar()

    total_weight = sum(f.weight for f in params.portfolio)
    if params.portfolio and abs(total_weight - 1.0) > 1e-4:
        st.warning(f"Fund weights sum to {total_weight:.0%}, not 100%")

    try:
        results = DrawdownSimulator(params).run_simulation()
    except ValueError as e:
        st.error(str(e))
        return

    summary = calculate_summary_stats(results)
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Annual withdrawal", format_currency(params.withdrawal))
    col2.metric("Success rate", f"{summary['success_rate']:.1%}")
    col3.metric("Median final balance", format_currency(summary['median']))
    col4.metric("10th percentile final balance", format_currency(summary['p10']))

    tab1, tab2, tab3, tab4 = st.tabs(["Aggregates", "Sample Paths", "Final Balances", "Solvency"])
    with tab1:
        st.plotly_chart(create_drawdown_aggregates_chart(results), use_container_width=True)
    with tab2:
        st.plotly_chart(create_drawdown_paths_chart(results, seed=params.random_seed), use_container_width=True)
    with tab3:
        st.plotly_chart(create_terminal_balance_distribution(results), use_container_width=True)
    with tab4:
        st.plotly_chart(create_solvency_over_time(results), use_container_width=True)

    st.subheader("📥 Export")
    col1, col2 = st.columns(2)
    col1.download_button("Download aggregates CSV", export_drawdown_aggregates_csv(results),
                         file_name="drawdown_aggregates.csv", mime="text/csv")
    col2.download_button("Download all paths CSV", export_drawdown_paths_csv(results),
                         file_name="drawdown_paths.csv", mime="text/csv")


main()
