import pandas as pd
import streamlit as st
import plotly.express as px

from constants import AWARDS, DIVISIONS, BRAND_PRIMARY
from leaderboard import leaderboard_frame
from models import PerfectScoreAward, Standings
from awards import MULTIPLE_COMPS
from search import search_climbers, search_teams

TEAM_COLUMNS = {"team_name": "Team", "total_points": "Total Points", "total_attempts": "Total Attempts"}
CLIMBER_COLUMNS = {
    "climber_name": "Climber",
    "team_name": "Team",
    "division": "Division",
    "total_points": "Total Points",
    "total_attempts": "Total Attempts",
}
DIVISION_COLUMNS = {k: v for k, v in CLIMBER_COLUMNS.items() if k != "division"}


def _show_table(df: pd.DataFrame, empty_msg: str):
    if df.empty:
        st.info(empty_msg)
        return
    # Rank is a plain column, so clicking another header re-sorts rows without renumbering
    st.dataframe(df, width="stretch", hide_index=True)


def award_detail(key: str, award) -> str:
    if award is None:
        return "--"
    if key == "most_attempts_team":
        return f"{award.attempts} attempts"
    if key in ("most_attempts_boulder", "least_attempts_boulder"):
        return f"Boulder {award.boulder_id} in Comp {award.comp_id}: {award.attempts} attempts"
    if key == "try_hard_award":
        return f"{award.attempts} attempts, {award.tops} tops"
    if key == "flash_master":
        return f"{award.flashes} flashes ({award.attempts} total attempts)"
    if key == "efficiency_king":
        return f"{award.ratio_display} points per attempt"
    if key == "perfect_score":
        return perfect_score_detail(award)
    if key == "zone_hero":
        detail = f"{award.zones} zones without tops"
        if award.attempts:
            detail += f" ({award.attempts} total attempts)"
        return detail
    return ""


def perfect_score_detail(award: PerfectScoreAward) -> str:
    if award.comp_id == MULTIPLE_COMPS:
        text = f"Tied across comps ({award.attempts} attempts each)"
    else:
        text = f"Comp {award.comp_id}: {award.boulders}/{award.boulders} topped"
        if award.attempts:
            text += f" ({award.attempts} attempts)"
    if award.other_comps_count > 0:
        text += f" • +{award.other_comps_count} others"
    return text


def render_fun_stats(standings: Standings):
    keys = list(AWARDS.keys())
    for start in range(0, len(keys), 4):
        cols = st.columns(4)
        for col, key in zip(cols, keys[start:start + 4]):
            title, blurb = AWARDS[key]
            award = getattr(standings.fun_stats, key)
            with col:
                st.markdown(f"**{title}**")
                if award is None:
                    st.metric(label=blurb, value="--")
                else:
                    label = f"{blurb} (tie)" if award.is_tie else blurb
                    st.metric(label=label, value=award.winner)
                    st.caption(award_detail(key, award))


def render_search(standings: Standings, results):
    query = st.text_input("Search teams or climbers", key="search_query").strip()
    if not query:
        return

    teams = search_teams(query, standings)
    climbers = search_climbers(query, standings, results)
    if not teams and not climbers:
        st.info(f'No teams or climbers found matching "{query}"')
        return

    if teams:
        st.markdown(f"#### Teams ({len(teams)} match{'es' if len(teams) > 1 else ''})")
        for t in teams:
            st.markdown(f"**{t['team_name']}**: {t['total_points']} points, {t['total_attempts']} attempts")
            if t["members"]:
                members = pd.DataFrame(t["members"]).rename(columns={
                    "climber_name": "Climber", "division": "Division",
                    "total_points": "Points", "total_attempts": "Attempts",
                })
                st.dataframe(members, width="stretch", hide_index=True)

    if climbers:
        st.markdown(f"#### Climbers ({len(climbers)} match{'es' if len(climbers) > 1 else ''})")
        for c in climbers:
            st.markdown(
                f"**{c['climber_name']}**: {c['team_name']} | {c['division']} | "
                f"{c['total_points']} points, {c['total_attempts']} attempts"
            )
            if c["results"]:
                rows = pd.DataFrame(c["results"])
                rows["zone_completed"] = rows["zone_completed"].map(lambda v: "✓" if v else "✗")
                rows["top_completed"] = rows["top_completed"].map(lambda v: "✓" if v else "✗")
                rows = rows.rename(columns={
                    "comp_id": "Comp", "comp_date": "Date", "boulder_id": "Boulder",
                    "zone_completed": "Zone", "top_completed": "Top",
                    "points": "Points", "attempts": "Attempts",
                })
                st.dataframe(rows, width="stretch", hide_index=True)


# standings arrive already filtered; results are the raw rows used by search
def render_ui(standings: Standings, results):
    tab_boards, tab_divisions, tab_fun, tab_search = st.tabs(["Leaderboards", "Divisions", "Fun Stats", "Search"])

    with tab_boards:
        st.subheader("Team Leaderboard")
        team_df = leaderboard_frame(list(standings.team_stats.values()), "team_name", TEAM_COLUMNS)
        _show_table(team_df, "No teams found in the roster.")

        if not team_df.empty:
            chart_df = team_df.sort_values("Total Points", ascending=True)
            fig = px.bar(
                chart_df,
                x="Team",
                y="Total Points",
                color_discrete_sequence=[BRAND_PRIMARY],
                hover_data=["Rank", "Total Attempts"],
                title="Team points",
                height=400
            )
            fig.update_layout(xaxis_title="", yaxis_title="Points")
            st.plotly_chart(fig, width="stretch")

        st.subheader("Individual Leaderboard")
        climber_df = leaderboard_frame(list(standings.climber_stats.values()), "climber_name", CLIMBER_COLUMNS)
        _show_table(climber_df, "No climbers found in the roster.")

    with tab_divisions:
        for name in DIVISIONS:
            st.subheader(f"{name} Division")
            div_df = leaderboard_frame(standings.division_stats.get(name, []), "climber_name", DIVISION_COLUMNS)
            _show_table(div_df, f"No climbers in the {name} division.")

    with tab_fun:
        st.subheader("Fun Stats")
        with st.expander("What do these awards mean?"):
            for title, blurb in AWARDS.values():
                st.write(f"**{title}**: {blurb}")
        render_fun_stats(standings)

    with tab_search:
        st.subheader("Search")
        st.caption("Partial names work; case does not matter.")
        render_search(standings, results)
