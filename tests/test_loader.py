"""
Tests for daily-report discovery and reading.
"""

from __future__ import annotations

import os

import pytest

from epitrack.loader import (
    IngestionError,
    iter_snapshots,
    list_snapshot_files,
    load_daily_reports,
    read_snapshot,
)

HEADER = "Province/State,Country/Region,Last Update,Confirmed,Deaths,Recovered\n"


@pytest.fixture()
def reports_dir(tmp_path):
    d = tmp_path / "daily_reports"
    d.mkdir()
    (d / "01-23-2020.csv").write_text(HEADER + ",Japan,x,2,,\n", encoding="utf-8")
    (d / "01-22-2020.csv").write_text(HEADER + ",Japan,x,1,,\n,Thailand,x,2,,\n", encoding="utf-8")
    (d / "notes.txt").write_text("not a report", encoding="utf-8")
    (d / "old").mkdir()
    return d


class TestDiscovery:
    def test_sorted_csv_files_only(self, reports_dir) -> None:
        files = list_snapshot_files(str(reports_dir))
        assert [os.path.basename(f) for f in files] == ["01-22-2020.csv", "01-23-2020.csv"]

    def test_missing_folder_is_fatal(self, tmp_path) -> None:
        with pytest.raises(IngestionError):
            list_snapshot_files(str(tmp_path / "nope"))

    def test_empty_folder_is_fatal(self, tmp_path) -> None:
        with pytest.raises(IngestionError):
            list_snapshot_files(str(tmp_path))


class TestReading:
    def test_read_snapshot_strips_bom(self, tmp_path) -> None:
        p = tmp_path / "01-22-2020.csv"
        p.write_bytes(("\ufeff" + HEADER + ",Japan,x,1,,\n").encode("utf-8"))
        lines = read_snapshot(str(p))
        assert lines[0].startswith("Province/State")
        assert lines[1] == ",Japan,x,1,,"

    def test_unreadable_file_is_fatal(self, tmp_path) -> None:
        with pytest.raises(IngestionError):
            read_snapshot(str(tmp_path / "03-01-2020.csv"))

    def test_iter_snapshots_labels(self, reports_dir) -> None:
        pairs = list(iter_snapshots(list_snapshot_files(str(reports_dir))))
        assert [d for d, _ in pairs] == ["01-22-2020", "01-23-2020"]

    def test_undated_csv_is_fatal(self, reports_dir) -> None:
        (reports_dir / "README.csv").write_text("about these files\n", encoding="utf-8")
        files = list_snapshot_files(str(reports_dir))
        with pytest.raises(IngestionError, match="README.csv"):
            list(iter_snapshots(files))


class TestLoadDailyReports:
    def test_builds_finalized_store(self, reports_dir) -> None:
        store = load_daily_reports(str(reports_dir))
        assert store.dates == ["01-22-2020", "01-23-2020"]
        assert store.current_date == "01-23-2020"
        assert store.region_names() == ["Japan", "Thailand"]
        assert [s.total_confirmed for s in store.samples] == [3, 2]
        with pytest.raises(RuntimeError):
            store.ingest_day("01-24-2020", HEADER)

    def test_undated_csv_stops_the_load(self, reports_dir) -> None:
        (reports_dir / "README.csv").write_text("about these files\n", encoding="utf-8")
        with pytest.raises(IngestionError):
            load_daily_reports(str(reports_dir))
