"""
Plotly chart builders for the household finance calculators.
Creates interactive charts for drawdown paths, Coast FIRE trajectories and
local vs remote cost of living comparisons.
"""
import plotly.graph_objects as go
import numpy as np
from scipy import stats
from typing import Dict, List, Optional

from coast_fire import CoastFireProjection
from simulation import DrawdownResults
from take_home import NetTakeHomeBreakdown


def create_drawdown_paths_chart(results: DrawdownResults,
                                num_samples: int = 50,
                                seed: Optional[int] = None,
                                title: str = "Monte Carlo Drawdown Paths") -> go.Figure:
    """
    Create chart showing sample individual drawdown paths with the per-year aggregates.

    Args:
        results: DrawdownResults from a simulation run
        num_samples: Number of sample paths to display
        seed: Seed for choosing which paths to display
        title: Chart title

    Returns:
        Plotly figure
    """
    n_sims = len(results.runs)
    rng = np.random.default_rng(seed)
    sample_indices = rng.choice(n_sims, min(num_samples, n_sims), replace=False)

    fig = go.Figure()

    # Bankrupt paths end early and are drawn in red
    for idx in sorted(sample_indices):
        run = results.runs[idx]
        fig.add_trace(go.Scatter(
            x=results.years[:len(run.balances)],
            y=run.balances,
            mode='lines',
            line=dict(color='red' if run.bankrupt else 'blue', width=1),
            opacity=0.3,
            showlegend=False,
            hovertemplate=f"<b>Path {idx}</b><br>" +
                         "<b>Year:</b> %{x}<br>" +
                         "<b>Balance:</b> $%{y:,.0f}<br>" +
                         "<extra></extra>"
        ))

    fig.add_trace(go.Scatter(
        x=results.years, y=results.median,
        mode='lines', line=dict(color='black', width=2),
        name='Median (solvent)',
        hovertemplate="<b>Median</b><br>" +
                     "<b>Year:</b> %{x}<br>" +
                     "<b>Balance:</b> $%{y:,.0f}<br>" +
                     "<extra></extra>"
    ))

    fig.update_layout(
        title=f"{title} ({len(sample_indices)} of {n_sims} Paths)",
        xaxis_title="Year",
        yaxis_title="Portfolio Value ($)",
        template="plotly_white",
        hovermode="x unified",
        legend=dict(x=0.02, y=0.98)
    )

    return fig


def create_drawdown_aggregates_chart(results: DrawdownResults,
                                     title: str = "Portfolio Balance Across Solvent Trials") -> go.Figure:
    """Mean, median and 10th percentile balance per year, with the P10-median band filled"""
    fig = go.Figure()

    fig.add_trace(go.Scatter(
        x=results.years, y=results.median,
        mode='lines',
        line=dict(color='darkblue', width=3),
        name='Median',
        hovertemplate="<b>Year:</b> %{x}<br>" +
                     "<b>Median:</b> $%{y:,.0f}<br>" +
                     "<extra></extra>"
    ))

    fig.add_trace(go.Scatter(
        x=results.years, y=results.tenth,
        fill='tonexty',
        mode='lines',
        line=dict(color='lightblue'),
        fillcolor='rgba(173,216,230,0.3)',
        name='10th Percentile',
        hovertemplate="<b>Year:</b> %{x}<br>" +
                     "<b>P10:</b> $%{y:,.0f}<br>" +
                     "<extra></extra>"
    ))

    fig.add_trace(go.Scatter(
        x=results.years, y=results.mean,
        mode='lines',
        line=dict(color='green', width=2, dash='dash'),
        name='Mean',
        hovertemplate="<b>Year:</b> %{x}<br>" +
                     "<b>Mean:</b> $%{y:,.0f}<br>" +
                     "<extra></extra>"
    ))

    stats_text = (
        f"Bankrupt: {results.bankrupt_count} of {len(results.runs)} "
        f"({results.bankrupt_rate:.1%})"
    )
    fig.update_layout(
        title=dict(text=f"{title}<br><sub>{stats_text}</sub>", x=0.5, xanchor='center'),
        xaxis_title="Year",
        yaxis_title="Portfolio Value ($)",
        template="plotly_white",
        hovermode="x unified",
        legend=dict(x=0.02, y=0.98)
    )

    return fig


def create_terminal_balance_distribution(results: DrawdownResults,
                                         title: str = "Terminal Balance Distribution") -> go.Figure:
    """
    Histogram of final-year balances for trials that stayed solvent.

    A density curve is overlaid when there are enough distinct values.
    """
    terminal = np.array([run.balances[-1] for run in results.runs if not run.bankrupt])

    fig = go.Figure()
    fig.add_trace(go.Histogram(
        x=terminal,
        nbinsx=min(100, max(10, int(np.sqrt(len(terminal)) * 2))),
        name="Terminal Balance",
        marker=dict(color='lightblue', line=dict(color='darkblue', width=0.5), opacity=0.8),
        hovertemplate="<b>Balance:</b> $%{x:,.0f}<br>" +
                     "<b>Simulations:</b> %{y}<br>" +
                     "<extra></extra>"
    ))

    if len(terminal) > 1 and np.var(terminal) > 0:
        try:
            kde = stats.gaussian_kde(terminal)
        except np.linalg.LinAlgError:
            kde = None
        if kde is not None:
            x_range = np.linspace(terminal.min(), terminal.max(), 300)
            fig.add_trace(go.Scatter(
                x=x_range,
                y=kde(x_range),
                mode='lines',
                name='Density Curve',
                line=dict(color='darkred', width=3),
                yaxis='y2',
                hoverinfo='skip'
            ))

    fig.update_layout(
        title=f"{title} ({len(terminal)} of {len(results.runs)} Trials Solvent)",
        xaxis_title="Terminal Balance ($)",
        yaxis_title="Number of Simulations",
        yaxis2=dict(title="Density", overlaying="y", side="right", showgrid=False),
        template="plotly_white",
        legend=dict(x=0.02, y=0.98),
    )

    return fig


def create_solvency_over_time(results: DrawdownResults,
                              title: str = "Probability of Staying Solvent") -> go.Figure:
    """Fraction of trials still solvent at each year"""
    solvent_pct = results.solvent_counts / max(len(results.runs), 1) * 100

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=results.years, y=solvent_pct,
        mode='lines+markers',
        line=dict(color='darkgreen', width=3),
        name='Solvent',
        hovertemplate="<b>Year:</b> %{x}<br>" +
                     "<b>Solvent:</b> %{y:.1f}%<br>" +
                     "<extra></extra>"
    ))

    fig.update_layout(
        title=title,
        xaxis_title="Year",
        yaxis_title="Solvent Trials (%)",
        yaxis=dict(range=[0, 105]),
        template="plotly_white",
        hovermode="x unified",
    )

    return fig


def create_coast_fire_chart(projection: CoastFireProjection,
                            title: str = "Coast FIRE Projection") -> go.Figure:
    """
    Coast, with-contributions, coast-from-X and target lines by age.

    Vertical markers show the Coast FIRE age and the FIRE age when they exist.
    """
    ages = [p.age for p in projection.points]

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=ages, y=[p.target for p in projection.points],
        mode='lines', line=dict(color='red', width=2, dash='dash'),
        name='Target',
        hovertemplate="<b>Age:</b> %{x}<br><b>Target:</b> $%{y:,.0f}<extra></extra>"
    ))
    fig.add_trace(go.Scatter(
        x=ages, y=[p.coast_value for p in projection.points],
        mode='lines', line=dict(color='orange', width=2),
        name='Current Investments (Coast)',
        hovertemplate="<b>Age:</b> %{x}<br><b>Coast:</b> $%{y:,.0f}<extra></extra>"
    ))
    fig.add_trace(go.Scatter(
        x=ages, y=[p.with_contributions for p in projection.points],
        mode='lines', line=dict(color='darkblue', width=3),
        name='With Contributions',
        hovertemplate="<b>Age:</b> %{x}<br><b>With contributions:</b> $%{y:,.0f}<extra></extra>"
    ))

    if projection.coast_fire_age is not None:
        fig.add_trace(go.Scatter(
            x=ages, y=[p.coast_from for p in projection.points],
            mode='lines', line=dict(color='green', width=2, dash='dot'),
            name=f'Coast from {projection.coast_fire_age}',
            hovertemplate="<b>Age:</b> %{x}<br><b>Coast from stop age:</b> $%{y:,.0f}<extra></extra>"
        ))
        fig.add_vline(x=projection.coast_fire_age, line_dash="dot", line_color="green",
                      annotation=dict(text=f"Coast FIRE: {projection.coast_fire_age}"))

    if projection.fire_age is not None:
        fig.add_vline(x=projection.fire_age, line_dash="dot", line_color="purple",
                      annotation=dict(text=f"FIRE: {projection.fire_age}", yanchor="bottom"))

    subtitle = "Already Coast FIRE!" if projection.is_coast_fire else (
        f"Target at retirement: ${projection.target_at_retirement:,.0f}")
    fig.update_layout(
        title=dict(text=f"{title}<br><sub>{subtitle}</sub>", x=0.5, xanchor='center'),
        xaxis_title="Age",
        yaxis_title="Portfolio Value ($)",
        template="plotly_white",
        hovermode="x unified",
        legend=dict(x=0.02, y=0.98)
    )

    return fig


def create_comparison_bar_chart(rows: List[Dict[str, float]],
                                local_label: str,
                                remote_label: str,
                                title: str = "Local vs Remote",
                                yaxis_title: str = "Annual Amount ($)") -> go.Figure:
    """
    Grouped bars for comparison rows with 'name', 'local' and 'remote' keys.

    Used for both the tax/contribution rows and the monthly expense rows.
    """
    names = [row['name'] for row in rows]

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=names, y=[row['local'] for row in rows],
        name=local_label, marker_color='steelblue',
        hovertemplate="<b>%{x}</b><br>" + local_label + ": $%{y:,.0f}<extra></extra>"
    ))
    fig.add_trace(go.Bar(
        x=names, y=[row['remote'] for row in rows],
        name=remote_label, marker_color='darkorange',
        hovertemplate="<b>%{x}</b><br>" + remote_label + ": $%{y:,.0f}<extra></extra>"
    ))

    fig.update_layout(
        title=title,
        barmode='group',
        yaxis_title=yaxis_title,
        template="plotly_white",
        legend=dict(x=0.02, y=0.98)
    )

    return fig


def create_take_home_breakdown_chart(breakdown: NetTakeHomeBreakdown,
                                     title: str = "Where Your Salary Goes") -> go.Figure:
    """Horizontal bars splitting gross pay into taxes, investments, expenses and take-home"""
    components = [
        ("Federal tax", breakdown.federal_tax, 'indianred'),
        ("State tax", breakdown.state_tax, 'indianred'),
        ("City tax", breakdown.city_tax, 'indianred'),
        ("Social Security", breakdown.social_security, 'salmon'),
        ("Medicare", breakdown.medicare, 'salmon'),
        ("401(k)", breakdown.four_oh_one_k, 'seagreen'),
        ("HSA", breakdown.hsa, 'seagreen'),
        ("Roth IRA", breakdown.roth_ira, 'seagreen'),
        ("After tax investments", breakdown.after_tax_investments, 'seagreen'),
        ("Expenses", breakdown.expenses, 'slategray'),
        ("Net take-home", breakdown.net_take_home, 'darkblue'),
    ]

    fig = go.Figure(go.Bar(
        x=[value for _, value, _ in components],
        y=[name for name, _, _ in components],
        orientation='h',
        marker_color=[color for _, _, color in components],
        hovertemplate="<b>%{y}</b><br>$%{x:,.0f}<extra></extra>"
    ))

    fig.update_layout(
        title=f"{title} (${breakdown.pre_tax_income:,.0f} Gross)",
        xaxis_title="Annual Amount ($)",
        yaxis=dict(autorange="reversed"),
        template="plotly_white",
        showlegend=False,
    )

    return fig
