"""
Household Finance Toolkit - Main Application Entry Point

A Streamlit multipage application featuring:
- Cost of living comparison with an equal-take-home salary solver
- Monte Carlo safe withdrawal rate simulation
- Coast FIRE projection with optional Social Security offset
"""

import streamlit as st


def start_page():
    """Start page content"""
    st.title("🏦 Household Finance Toolkit")

    st.markdown("""
    ### Plan a move, a withdrawal rate, or an early retirement

    Use the sidebar to switch between calculators, or choose a starting point below.
    """)

    col1, col2, col3 = st.columns(3)

    with col1:
        st.markdown("### 🏙️ Cost of Living")
        st.markdown("""
        - Federal, state and city income tax
        - 401(k), HSA and Roth IRA limits
        - Salary needed to keep the same take-home pay after moving
        """)
        if st.button("Compare Cities", type="primary"):
            st.switch_page("pages/cost_of_living.py")

    with col2:
        st.markdown("### 📊 Safe Withdrawal Rate")
        st.markdown("""
        - Monte Carlo drawdown of a stock/bond portfolio
        - Constant withdrawal with inflation
        - Mean, median and 10th percentile balances
        """)
        if st.button("Run Simulation", type="secondary"):
            st.switch_page("pages/monte_carlo.py")

    with col3:
        st.markdown("### 🏖️ Coast FIRE")
        st.markdown("""
        - Growth with and without contributions
        - Coast FIRE and FIRE ages
        - Optional Social Security estimate
        """)
        if st.button("Project Coast FIRE", type="secondary"):
            st.switch_page("pages/coast_fire.py")

    st.markdown("---")
    st.markdown("""
    <div style='text-align: center; color: #666; font-size: 14px;'>
        <p>🏦 Household Finance Toolkit | Built with Streamlit | Educational Use</p>
    </div>
    """, unsafe_allow_html=True)


st.set_page_config(
    page_title="Household Finance Toolkit",
    page_icon="🏦",
    layout="wide",
    initial_sidebar_state="expanded"
)

pages = [
    st.Page(start_page, title="Start", icon="🏠"),
    st.Page("pages/cost_of_living.py", title="Cost of Living", icon="🏙️"),
    st.Page("pages/monte_carlo.py", title="Safe Withdrawal Rate", icon="📊"),
    st.Page("pages/coast_fire.py", title="Coast FIRE", icon="🏖️"),
]

pg = st.navigation(pages)
pg.run()
