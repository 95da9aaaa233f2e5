"""Tests for CSV snapshots of experiments."""
import pytest
from src.abtesting.snapshot import SNAPSHOT_COLUMNS, experiments_to_frame, read_snapshot, write_snapshot


def test_frame_one_row_per_variant(seeded_store):
    df = experiments_to_frame(seeded_store.list_experiments())
    assert list(df.columns) == SNAPSHOT_COLUMNS
    assert len(df) == 5
    demo = df[df["experiment_id"] == "exp_demo_1"]
    assert list(demo["variant_position"]) == [0, 1]
    assert demo["conversion_rate"].iloc[0] == pytest.approx(127 / 1250 * 100)


def test_frame_marks_winner(seeded_store):
    seeded_store.calculate_results("exp_demo_1")
    df = experiments_to_frame(seeded_store.list_experiments())
    winners = df[df["is_winner"]]
    assert list(winners["variant_id"]) == ["var_green"]


def test_write_and_read(seeded_store, tmp_path):
    path = tmp_path / "nested" / "snapshot.csv"
    n = write_snapshot(seeded_store.list_experiments(), str(path))
    assert n == 5
    df = read_snapshot(str(path))
    assert len(df) == 5
    assert df["visitors"].sum() == 1250 + 1243


def test_read_missing(tmp_path):
    df = read_snapshot(str(tmp_path / "none.csv"))
    assert df.empty
    assert list(df.columns) == SNAPSHOT_COLUMNS
