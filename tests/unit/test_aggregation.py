"""
Tests for per-subject history summaries

Covers:
1. overall_average / has_data - empty history vs. real zero
2. attribute_averages - sparse averaging, rounding
3. rank_attributes - top/bottom 3, tie order, tactical inclusion
4. seed_averages - all-history means rounded to 0.5, neutral default
5. evolution_series - ordered by session date, not insertion
"""

import pytest

from evaluation.aggregation import (
    attribute_averages,
    evolution_series,
    has_data,
    overall_average,
    rank_attributes,
    seed_averages,
    summarize,
)
from evaluation import config as e_cfg
from evaluation.formulas import mean, round_decimals


class TestOverallAverage:
    def test_empty_history(self):
        assert overall_average([]) == 0.0
        assert has_data([]) is False

    def test_real_zero_has_data(self, make_record):
        records = [make_record(technical={"a": 0}, physical={"b": 0})]
        assert overall_average(records) == 0.0
        assert has_data(records) is True

    def test_mean_of_record_totals(self, make_record):
        records = [
            make_record(technical={"a": 8}, physical={"b": 6}),
            make_record(technical={"a": 4}, physical={"b": 2}, tactical={"c": 3}),
        ]
        assert overall_average(records) == pytest.approx((7.0 + 3.0) / 2)


class TestAttributeAverages:
    def test_sparse_keys_are_not_diluted(self, make_record):
        records = [
            make_record(technical={"passing": 8}),
            make_record(technical={"passing": 4, "shooting": 6}),
        ]
        assert attribute_averages(records, "technical") == {"passing": 6.0, "shooting": 6.0}

    def test_rounds_to_one_decimal(self, make_record):
        records = [make_record(technical={"a": v}) for v in (7, 7, 8)]
        assert attribute_averages(records, "technical") == {"a": 7.3}

    def test_dense_history_matches_plain_mean(self, make_record):
        rows = [{"a": 6, "b": 9}, {"a": 8, "b": 4}, {"a": 7, "b": 6}]
        records = [make_record(technical=row) for row in rows]
        expected = {k: round_decimals(mean([row[k] for row in rows]), 1) for k in ("a", "b")}
        assert attribute_averages(records, "technical") == expected
        assert expected == {"a": 7.0, "b": 6.3}

    def test_legacy_records_skip_tactical(self, make_record):
        records = [
            make_record(technical={"a": 5}),
            make_record(technical={"a": 5}, tactical={"def_cover": 9}),
        ]
        assert attribute_averages(records, "tactical") == {"def_cover": 9.0}

    def test_empty(self):
        assert attribute_averages([], "physical") == {}


class TestRankAttributes:
    def test_none_without_records(self):
        assert rank_attributes([]) is None

    def test_best_and_worst(self, make_record):
        records = [make_record(
            technical={"t1": 9, "t2": 3, "t3": 6},
            physical={"p1": 8, "p2": 1, "p3": 5},
        )]
        ranking = rank_attributes(records)
        assert [a["key"] for a in ranking["best"]] == ["t1", "p1", "t3"]
        assert [a["key"] for a in ranking["worst"]] == ["p2", "t2", "p3"]
        assert ranking["best"][0]["group_type"] == "technical"

    def test_ties_keep_first_seen_order(self, make_record):
        records = [make_record(technical={"x": 5, "y": 5}, physical={"z": 5, "w": 5})]
        ranking = rank_attributes(records)
        assert [a["key"] for a in ranking["best"]] == ["x", "y", "z"]
        assert [a["key"] for a in ranking["worst"]] == ["x", "y", "z"]

    def test_tactical_excluded_without_tactical_group(self, make_record):
        records = [make_record(technical={"a": 4}, physical={"b": 5})]
        groups = {a["group_type"] for a in rank_attributes(records)["best"]}
        assert "tactical" not in groups

    def test_tactical_included_when_present(self, make_record):
        records = [
            make_record(technical={"a": 4}, physical={"b": 5}),
            make_record(technical={"a": 4}, physical={"b": 5}, tactical={"att_movement": 10}),
        ]
        best = rank_attributes(records)["best"]
        assert best[0]["key"] == "att_movement"
        assert best[0]["label"] == e_cfg.attribute_label("att_movement")

    def test_unknown_key_label_falls_back(self, make_record):
        records = [make_record(technical={"legacy_key": 7})]
        assert rank_attributes(records)["best"][0]["label"]


class TestSeedAverages:
    def test_defaults_without_history(self):
        seeds = seed_averages([])
        assert set(seeds["technical"]) == set(e_cfg.TECHNICAL_ATTRIBUTES)
        assert set(seeds["physical"]) == set(e_cfg.PHYSICAL_ATTRIBUTES)
        assert set(seeds["tactical"]) == set(e_cfg.TACTICAL_ATTRIBUTES)
        assert all(v == 5.0 for group in seeds.values() for v in group.values())

    def test_historical_mean_rounded_to_half(self, make_record):
        key = next(iter(e_cfg.TECHNICAL_ATTRIBUTES))
        records = [make_record(technical={key: 7}), make_record(technical={key: 8}), make_record(technical={key: 8})]
        # mean 7.67 -> 7.5
        assert seed_averages(records)["technical"][key] == 7.5

    def test_half_rounds_up(self, make_record):
        key = next(iter(e_cfg.PHYSICAL_ATTRIBUTES))
        records = [make_record(physical={key: 6}), make_record(physical={key: 6.5})]
        # mean 6.25 -> 6.5
        assert seed_averages(records)["physical"][key] == 6.5

    def test_legacy_keys_are_kept(self, make_record):
        records = [make_record(technical={"old_key": 3})]
        assert seed_averages(records)["technical"]["old_key"] == 3.0


class TestEvolution:
    def test_sorted_by_session_date(self, make_record):
        records = [
            make_record(technical={"a": 6}, session_date="2024-03-10"),
            make_record(technical={"a": 4}, session_date="2024-01-05"),
            make_record(technical={"a": 8}, session_date="2024-02-20"),
        ]
        series = evolution_series(records)
        assert [p["date"] for p in series] == ["2024-01-05", "2024-02-20", "2024-03-10"]
        assert [p["date_label"] for p in series] == ["05/01", "20/02", "10/03"]
        assert [p["score"] for p in series] == [4.0, 8.0, 6.0]

    def test_empty(self):
        assert evolution_series([]) == []


class TestSummarize:
    def test_empty_history_bundle(self):
        out = summarize([])
        assert out["has_data"] is False
        assert out["overall_average"] == 0.0
        assert out["ranking"] is None
        assert out["evolution"] == []
