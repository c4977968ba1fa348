BRAND_PRIMARY = "#1F4E79"   # Chalk Blue

ALL_COMPS = "all"

DIVISIONS = ["Beginner", "Intermediate", "Advanced"]

TEAMS_COLUMNS = ["team_id", "team_name", "climber_id", "climber_name", "division"]
RESULTS_COLUMNS = [
    "comp_id", "comp_date", "boulder_id", "climber_id",
    "attempts_to_zone", "attempts_to_top", "zone_completed", "top_completed",
]

ZONE_POINTS = 50
TOP_POINTS = 50

# ratios closer than this are the same ratio
EFFICIENCY_TOLERANCE = 0.001

TIE_JOINER = " & "

# Awards shown on the dashboard, in display order
AWARDS = {
    "most_attempts_team": ("Most Attempts (Team)", "Team that put in the most attempts"),
    "most_attempts_boulder": ("Most Attempts (Boulder)", "Boulder that took the most attempts"),
    "least_attempts_boulder": ("Least Attempts (Boulder)", "Boulder that went down the quickest"),
    "try_hard_award": ("Try Hard Award", "Most attempts among climbers with at least one top"),
    "flash_master": ("Flash Master", "Most boulders topped on the first attempt"),
    "efficiency_king": ("Efficiency King", "Best points per attempt"),
    "perfect_score": ("Perfect Score", "Topped every boulder in a competition"),
    "zone_hero": ("Zone Hero", "Most zones without tops"),
}
