"""Tests for CSV parsing, typed row conversion and loading."""

import logging

import pytest

from constants import RESULTS_COLUMNS, TEAMS_COLUMNS
from utils import (
    CsvFormatError, DataLoadError, MissingColumnError,
    build_results, build_roster, load_all_data, parse_count, parse_csv_text, parse_flag,
)

TEAMS_CSV = """team_id,team_name,climber_id,climber_name,division
T1,Alpha,C1,Amy,Beginner
T1,Alpha,C2,Zed,Advanced
"""

RESULTS_CSV = """comp_id,comp_date,boulder_id,climber_id,attempts_to_zone,attempts_to_top,zone_completed,top_completed
1,2025-01-10,b1,C1,1,1,1,1
1,2025-01-10,b2,C2,3,,1,0
"""


class TestParseCsv:
    def test_rows_keyed_by_header(self):
        rows = parse_csv_text(TEAMS_CSV, TEAMS_COLUMNS)
        assert len(rows) == 2
        assert rows[0] == {
            "team_id": "T1", "team_name": "Alpha", "climber_id": "C1",
            "climber_name": "Amy", "division": "Beginner",
        }

    def test_trims_whitespace(self):
        text = " team_id , team_name ,climber_id,climber_name,division\n T1 ,  Alpha  ,C1, Amy ,Beginner \n"
        rows = parse_csv_text(text, TEAMS_COLUMNS)
        assert rows[0]["team_id"] == "T1"
        assert rows[0]["team_name"] == "Alpha"
        assert rows[0]["climber_name"] == "Amy"
        assert rows[0]["division"] == "Beginner"

    def test_quoted_field_with_comma(self):
        text = 'team_id,team_name,climber_id,climber_name,division\nT1,"Crimp, Inc.",C1,"Smith, Amy",Beginner\n'
        rows = parse_csv_text(text, TEAMS_COLUMNS)
        assert rows[0]["team_name"] == "Crimp, Inc."
        assert rows[0]["climber_name"] == "Smith, Amy"

    def test_escaped_quotes(self):
        text = 'team_id,team_name,climber_id,climber_name,division\nT1,"The ""Dyno"" Crew",C1,Amy,Beginner\n'
        rows = parse_csv_text(text, TEAMS_COLUMNS)
        assert rows[0]["team_name"] == 'The "Dyno" Crew'

    def test_blank_lines_skipped(self):
        text = TEAMS_CSV.replace("\nT1,Alpha,C2", "\n\n\nT1,Alpha,C2")
        assert len(parse_csv_text(text, TEAMS_COLUMNS)) == 2

    def test_header_only(self):
        assert parse_csv_text("team_id,team_name,climber_id,climber_name,division\n", TEAMS_COLUMNS) == []

    def test_extra_columns_are_kept(self):
        text = "team_id,team_name,climber_id,climber_name,division,notes\nT1,Alpha,C1,Amy,Beginner,hi\n"
        assert parse_csv_text(text, TEAMS_COLUMNS)[0]["notes"] == "hi"

    def test_rows_with_wrong_column_count_skipped(self, caplog):
        text = (
            "team_id,team_name,climber_id,climber_name,division\n"
            "T1,Alpha,C1,Amy,Beginner\n"
            "T1,Alpha,C2,Zed\n"
            "T1,Alpha,C3,Bo,Beginner,extra\n"
        )
        with caplog.at_level(logging.WARNING):
            rows = parse_csv_text(text, TEAMS_COLUMNS)
        assert [r["climber_id"] for r in rows] == ["C1"]
        assert caplog.text.count("Skipping row") == 2

    def test_unquoted_comma_does_not_shift_values(self, caplog):
        text = (
            "team_id,team_name,climber_id,climber_name,division\n"
            "T1,Crimp, Inc,C1,Amy,Beginner\n"
            "T2,Slopers,C2,Zed,Advanced\n"
        )
        with caplog.at_level(logging.WARNING):
            rows = parse_csv_text(text, TEAMS_COLUMNS)
        assert [r["climber_id"] for r in rows] == ["C2"]
        assert "Row has 6 columns but expected 5. Skipping row." in caplog.text

    @pytest.mark.parametrize("text", ["", "   ", "\n\n"])
    def test_empty(self, text):
        with pytest.raises(CsvFormatError, match="Empty CSV file"):
            parse_csv_text(text, TEAMS_COLUMNS)

    def test_missing_columns_listed(self):
        text = "team_id,team_name,climber_id\nT1,Alpha,C1\n"
        with pytest.raises(MissingColumnError) as exc:
            parse_csv_text(text, TEAMS_COLUMNS)
        assert exc.value.missing == ["climber_name", "division"]
        assert "climber_name, division" in str(exc.value)

    def test_missing_column_is_a_load_error(self):
        with pytest.raises(DataLoadError):
            parse_csv_text("a,b\n1,2\n", RESULTS_COLUMNS)


class TestParseFlag:
    @pytest.mark.parametrize("value", [1, "1", " 1 ", "1.0", 1.0, True])
    def test_true(self, value):
        assert parse_flag(value) is True

    @pytest.mark.parametrize("value", [0, "0", "", None, "true", "yes", 2, "2", False, "nan"])
    def test_false(self, value):
        assert parse_flag(value) is False


class TestParseCount:
    @pytest.mark.parametrize("value, expected", [
        ("3", 3), (4, 4), (" 7 ", 7), ("2.9", 2),
        ("", 0), (None, 0), ("abc", 0), ("-2", 0), ("nan", 0), ("inf", 0),
    ])
    def test_values(self, value, expected):
        assert parse_count(value) == expected


class TestBuildRows:
    def test_roster(self):
        roster = build_roster(parse_csv_text(TEAMS_CSV, TEAMS_COLUMNS))
        assert [r.climber_id for r in roster] == ["C1", "C2"]
        assert roster[1].division == "Advanced"

    def test_results_typed(self):
        results = build_results(parse_csv_text(RESULTS_CSV, RESULTS_COLUMNS))
        first, second = results
        assert first.attempts_to_zone == 1 and first.attempts_to_top == 1
        assert first.zone_completed is True and first.top_completed is True
        assert first.is_flash
        # blank attempts_to_top defaults to 0
        assert second.attempts_to_top == 0
        assert second.attempts == 3
        assert second.top_completed is False

    def test_results_missing_keys_default(self):
        results = build_results([{"comp_id": "1", "climber_id": "C1", "attempts_to_zone": "x"}])
        assert results[0].attempts == 0
        assert results[0].zone_completed is False
        assert results[0].boulder_id == ""

    def test_empty(self):
        assert build_roster([]) == []
        assert build_results([]) == []


class TestLoadAllData:
    def test_loads_both_files(self, tmp_path, caplog):
        teams = tmp_path / "teams.csv"
        results = tmp_path / "results.csv"
        teams.write_text(TEAMS_CSV)
        results.write_text(RESULTS_CSV)

        with caplog.at_level(logging.INFO):
            roster, rows = load_all_data(str(teams), str(results))
        assert len(roster) == 2
        assert len(rows) == 2
        assert "Loaded 2 roster rows and 2 result rows" in caplog.text

    def test_missing_file(self, tmp_path):
        teams = tmp_path / "teams.csv"
        teams.write_text(TEAMS_CSV)
        with pytest.raises(DataLoadError, match="Unable to load"):
            load_all_data(str(teams), str(tmp_path / "nope.csv"))

    def test_missing_column_names_dataset(self, tmp_path):
        teams = tmp_path / "teams.csv"
        results = tmp_path / "results.csv"
        teams.write_text("team_id,team_name\nT1,Alpha\n")
        results.write_text(RESULTS_CSV)
        with pytest.raises(MissingColumnError, match="Error parsing teams data"):
            load_all_data(str(teams), str(results))
