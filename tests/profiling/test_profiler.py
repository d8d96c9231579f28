"""Tests for column and table profiling."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from colprof.core.models.base import ColumnType, ProfileWarning
from colprof.profiling.models import ColumnProfile, NumericStats
from colprof.profiling.profiler import profile_column, profile_table, summarize_profiles


class TestProfileColumn:
    """Tests for profiling one column."""

    def test_numeric_column(self):
        profile = profile_column([1, 2, 3, 4, 5, 6, 7, 8, 9, 100], "x")

        assert profile.type is ColumnType.NUMERIC
        assert not profile.is_type_locked
        stats = profile.numeric_stats
        assert (stats.q1, stats.median, stats.q3) == (3, 6, 8)
        assert stats.outlier_count == 1
        assert profile.stats is stats
        assert profile.warnings == ()

    def test_boolean_column(self):
        profile = profile_column(["true", "false", "true", "true"], "active")

        assert profile.type is ColumnType.BOOLEAN
        assert profile.boolean_stats.true_count == 3
        assert profile.boolean_stats.false_count == 1

    def test_datetime_column(self):
        profile = profile_column(["2023-01-01", "2023-02-15", "2023-03-30"], "date")

        assert profile.type is ColumnType.DATETIME
        assert profile.datetime_stats.min_date == datetime(2023, 1, 1, tzinfo=UTC)
        assert profile.datetime_stats.max_date == datetime(2023, 3, 30, tzinfo=UTC)

    def test_identifier_column(self):
        profile = profile_column(["AB1001", "AB1002", "AB1003"], "record_id")

        assert profile.type is ColumnType.ID_UNIQUE
        assert profile.id_unique_stats.is_unique
        assert profile.id_unique_stats.duplicate_count == 0
        assert ProfileWarning.DUPLICATE_IDS not in profile.warnings

    def test_all_null_column(self):
        profile = profile_column([None, None, "", None], "empty")

        assert profile.type is ColumnType.TEXT
        assert profile.total_count == 4
        assert profile.null_count == 4
        assert profile.null_percent == 100.0
        assert profile.unique_count == 0
        assert profile.unique_percent == 0.0
        assert profile.stats is None
        assert profile.text_stats is None
        assert profile.warnings == (ProfileWarning.HIGH_MISSING_VALUES,)

    def test_no_values(self):
        profile = profile_column([], "empty")
        assert profile.total_count == 0
        assert profile.null_percent == 0.0
        assert profile.warnings == ()

    def test_counts(self):
        profile = profile_column(["a1", None, "a1", "b2", ""], "code")

        assert profile.total_count == 5
        assert profile.null_count == 2
        assert profile.non_null_count == 3
        assert profile.null_percent == 40.0
        assert profile.unique_count == 2
        assert profile.unique_percent == pytest.approx(200 / 3)

    def test_sample_values(self):
        profile = profile_column(list(range(20)) * 2, "n")
        assert profile.sample_values == tuple(range(10))

    def test_sample_values_keep_raw_form(self):
        profile = profile_column([1, 1.0, "x", None, "x"], "mixed")
        assert profile.sample_values == (1, "x")

    def test_out_of_range_offset_does_not_raise(self):
        profile = profile_column(["2024-01-01T00:00:00+25:00", "2024-01-02"], "created_at")

        assert profile.type is ColumnType.DATETIME
        assert profile.datetime_stats.invalid_count == 1


DIRTY_COLUMNS = [
    [],
    [None, "", None],
    [1, None, "1", True, "", "yes", 1.0, "n/a"],
    ["true", "false", None, "maybe", "TRUE", " ", "0"],
    [True, False, None, True, "", 0, 1],
    ["red", "blue", None, "red", "", "blue", "red"],
    [float("nan"), 3, None, "3", "2024-01-15", "x" * 80],
    [f"v{i % 7}" if i % 5 else None for i in range(60)],
]


class TestProfileInvariants:
    """Properties that hold for any column."""

    @pytest.mark.parametrize("values", DIRTY_COLUMNS)
    def test_null_accounting(self, values):
        profile = profile_column(values, "col")
        nulls = sum(1 for value in values if value is None or value == "")

        assert profile.total_count == len(values)
        assert profile.null_count == nulls
        assert profile.null_count + profile.non_null_count == len(values)
        assert profile.unique_count <= profile.non_null_count

    @pytest.mark.parametrize("values", DIRTY_COLUMNS)
    def test_boolean_totals(self, values):
        profile = profile_column(values, "col", type_override=ColumnType.BOOLEAN)
        stats = profile.boolean_stats
        if profile.non_null_count == 0:
            assert stats is None
            return

        assert stats.true_count + stats.false_count <= profile.non_null_count
        if stats.true_count + stats.false_count:
            assert stats.true_percent + stats.false_percent == pytest.approx(100.0)

    @pytest.mark.parametrize("values", DIRTY_COLUMNS)
    def test_stats_match_type(self, values):
        profile = profile_column(values, "col")
        populated = [
            name
            for name in (
                "numeric_stats",
                "categorical_stats",
                "boolean_stats",
                "datetime_stats",
                "text_stats",
                "id_unique_stats",
            )
            if getattr(profile, name) is not None
        ]
        assert len(populated) <= 1
        if populated:
            assert profile.stats is getattr(profile, populated[0])


class TestTypeOverride:
    """Tests for manual type overrides."""

    def test_override_skips_classification(self):
        profile = profile_column(
            ["A", "B", "A", "C", "A", "B"], "group", type_override=ColumnType.CATEGORICAL
        )

        assert profile.type is ColumnType.CATEGORICAL
        assert profile.is_type_locked
        assert profile.categorical_stats.classes == 3
        top = profile.categorical_stats.top_categories[0]
        assert (top.value, top.count, top.percent) == ("A", 3, 50.0)

    @pytest.mark.parametrize("column_type", list(ColumnType))
    def test_every_type_is_accepted(self, column_type):
        profile = profile_column(["1", "0", "1"], "col", type_override=column_type.value)
        assert profile.type is column_type
        assert profile.is_type_locked

    def test_constant_has_no_stats(self):
        profile = profile_column([7, 7, 7], "k", type_override="constant")
        assert profile.stats is None

    def test_unusable_values_leave_stats_empty(self):
        profile = profile_column(["xyz", "qqq"], "amount", type_override="numeric")
        assert profile.type is ColumnType.NUMERIC
        assert profile.numeric_stats is None

    def test_unknown_override(self):
        with pytest.raises(ValueError):
            profile_column([1], "x", type_override="currency")


class TestWarnings:
    """Tests for data quality warnings."""

    def test_high_missing_values(self):
        profile = profile_column([1, None, None, 2], "x")
        assert ProfileWarning.HIGH_MISSING_VALUES in profile.warnings

    def test_missing_at_threshold(self):
        """Exactly 30% missing is not flagged."""
        profile = profile_column([1, 2, 3, 4, 5, 6, 7, None, None, None], "x")
        assert profile.null_percent == 30.0
        assert ProfileWarning.HIGH_MISSING_VALUES not in profile.warnings

    def test_high_cardinality(self):
        values = [f"cat{i}" for i in range(60)] * 3
        profile = profile_column(values, "category")

        assert profile.type is ColumnType.CATEGORICAL
        assert profile.warnings == (ProfileWarning.HIGH_CARDINALITY,)

    def test_duplicate_ids(self):
        profile = profile_column(["a", "b", "a"], "ref", type_override="id_unique")
        assert profile.id_unique_stats.duplicate_count == 1
        assert profile.warnings == (ProfileWarning.DUPLICATE_IDS,)


class TestColumnProfileModel:
    """Tests for the profile model itself."""

    def test_frozen(self):
        profile = profile_column([1, 2, 3], "x")
        with pytest.raises(ValidationError):
            profile.name = "y"

    def test_mismatched_stats_block(self):
        with pytest.raises(ValidationError):
            ColumnProfile(
                name="x",
                type=ColumnType.TEXT,
                total_count=1,
                null_count=0,
                null_percent=0.0,
                unique_count=1,
                unique_percent=100.0,
                numeric_stats=NumericStats(
                    min=1,
                    max=1,
                    mean=1,
                    median=1,
                    std=0,
                    q1=1,
                    q3=1,
                    outlier_count=0,
                    outlier_percent=0,
                ),
            )

    def test_camel_case_dump(self):
        data = profile_column([1, 2, 3], "x").model_dump(by_alias=True)

        assert data["type"] == ColumnType.NUMERIC
        assert data["isTypeLocked"] is False
        assert data["nullCount"] == 0
        assert data["numericStats"]["outlierCount"] == 0
        assert data["categoricalStats"] is None

    def test_fresh_profile_per_call(self):
        first = profile_column([1, 2, 3], "x")
        second = profile_column([1, 2, 3], "x")
        assert first == second
        assert first is not second


class TestProfileTable:
    """Tests for profiling a row-oriented dataset."""

    @pytest.fixture
    def rows(self):
        return [
            {"__rowId": 1, "amount": 10, "city": "Paris", "zip": "75001"},
            {"__rowId": 2, "amount": 20, "city": "Lyon", "zip": "69001"},
            {"__rowId": 3, "amount": 30, "zip": "75001"},
        ]

    def test_profiles_columns_in_order(self, rows):
        profiles = profile_table(rows)
        assert [p.name for p in profiles] == ["amount", "city", "zip"]

    def test_missing_key_counts_as_null(self, rows):
        city = profile_table(rows)[1]
        assert city.total_count == 3
        assert city.null_count == 1

    def test_overrides(self, rows):
        profiles = profile_table(rows, type_overrides={"zip": "categorical"})
        zip_profile = profiles[2]

        assert profiles[0].type is ColumnType.NUMERIC
        assert zip_profile.type is ColumnType.CATEGORICAL
        assert zip_profile.is_type_locked
        assert not profiles[0].is_type_locked

    def test_explicit_columns(self, rows):
        profiles = profile_table(rows, column_names=["zip", "__rowId", "country"])

        assert [p.name for p in profiles] == ["zip", "country"]
        assert profiles[1].null_count == 3

    def test_no_rows(self):
        assert profile_table([]) == []


class TestSummarizeProfiles:
    """Tests for dataset-level summaries."""

    def test_summary(self):
        rows = 100
        profiles = [
            profile_column(list(range(rows)), "n"),
            profile_column(["north", "south"] * 49 + [None, None], "region"),
            profile_column([f"cat{i % 25}" for i in range(rows)], "wide"),
        ]

        summary = summarize_profiles(profiles, row_count=rows)

        assert summary.column_count == 3
        assert summary.row_count == rows
        assert summary.type_counts[ColumnType.NUMERIC] == 1
        assert summary.type_counts[ColumnType.CONSTANT] == 0
        assert set(summary.type_counts) == set(ColumnType)
        assert summary.columns_with_missing == 1
        assert summary.columns_with_duplicates == 2
        assert summary.high_cardinality_columns == 1

    def test_missing_cells_percent(self):
        profiles = [profile_column([1, None], "a"), profile_column([None, None], "b")]
        summary = summarize_profiles(profiles, row_count=2)
        assert summary.missing_cells_percent == 75.0

    def test_empty(self):
        summary = summarize_profiles([], row_count=0)
        assert summary.column_count == 0
        assert summary.missing_cells_percent == 0.0
