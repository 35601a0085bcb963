# -*- coding: utf-8 -*-
"""Tests for the report exporter."""

import csv

import orjson
import pytest

from lambda_em.constants import REPORT_COLUMNS
from lambda_em.enums import ReportFormat
from lambda_em.export import CsvReportSink
from lambda_em.export import JsonReportSink
from lambda_em.export import ReportRow
from lambda_em.export import build_banner
from lambda_em.export import build_report
from lambda_em.export import export_project
from lambda_em.export import flatten
from lambda_em.export import report_filename
from lambda_em.export import report_sink
from lambda_em.models import Project


class _ListSink:
    def __init__(self):
        self.reports = []

    def write_report(self, report):
        self.reports.append(report)


class TestFlatten:
    """Tests for flatten."""

    def test_row_count(self, common_params, make_project):
        """Test a complete project yields stations x 7 rows."""
        project = make_project(common_params, n_stations=3)
        assert len(flatten(project)) == 21

    def test_empty_project(self, common_params):
        """Test a project without station yields no row."""
        assert flatten(Project(name="Empty", common=common_params)) == []

    def test_order(self, common_params, make_project, all_frequencies):
        """Test rows follow station order, then stored measurement order."""
        rows = flatten(make_project(common_params, n_stations=2))

        assert [row.station for row in rows] == [301] * 7 + [302] * 7
        assert [row.measurement.frequency for row in rows[:7]] == list(
            all_frequencies
        )

    def test_station_order(self, common_params, make_station):
        """Test stations are emitted by ascending number, not insertion order."""
        project = Project(name="Line A", common=common_params)
        project.stations[303] = make_station(303, common_params)
        project.stations[301] = make_station(301, common_params)
        project.stations[401] = make_station(401, common_params)
        project.stations[302] = make_station(302, common_params)

        assert [row.station for row in flatten(project)][::7] == [301, 302, 303, 401]


class TestReportRow:
    """Tests for ReportRow formatting."""

    def test_cells(self, common_params, make_station, gps):
        """Test every cell is formatted with its fixed precision."""
        measurement = make_station(302, common_params, gps)[0]
        cells = ReportRow(station=302, measurement=measurement).cells()

        assert len(cells) == len(REPORT_COLUMNS)
        assert cells[:5] == ("302", "813", "45.123457", "-73.987654", "10.00")
        assert cells[5] == f"{measurement.calculated_depth:.3f}"
        assert cells[5] == "-35.282"
        assert cells[6:8] == ("1.00", "50.00")
        assert cells[8] == f"{measurement.calculated_conductivity:.3f}"
        assert cells[9] == f"{measurement.calculated_resistivity:.3f}"
        assert cells[10:] == ("2025-03-14", "09:26:53")

    def test_no_gps(self, common_params, make_station):
        """Test coordinates print as zeros without GPS."""
        measurement = make_station(301, common_params)[0]
        cells = ReportRow(station=301, measurement=measurement).cells()
        assert cells[2:4] == ("0.000000", "0.000000")

    def test_as_dict(self, common_params, make_station):
        """Test as_dict is keyed by the header text."""
        measurement = make_station(301, common_params)[-1]
        row = ReportRow(station=301, measurement=measurement).as_dict()

        assert list(row) == list(REPORT_COLUMNS)
        assert row["Station"] == "301"
        assert row["Frequency (Hz)"] == "102"
        assert row["Distance (m)"] == "0.00"


class TestBuildReport:
    """Tests for the report banner and table."""

    def test_banner(self, common_params, gps):
        """Test the banner lists the project parameters."""
        project = Project(name="Line A", common=common_params, gps=gps)
        assert build_banner(project) == [
            ("Project", "Line A"),
            ("Transect", "3"),
            ("Interstation (m)", "10"),
            ("Avg Resistivity (Ω·m)", "100"),
            ("Intercoil (m)", "10"),
            ("GPS", "45.123457, -73.987654"),
        ]

    def test_banner_without_gps(self, common_params):
        """Test the GPS line is omitted when no fix was cached."""
        banner = build_banner(Project(name="Line A", common=common_params))
        assert [label for label, _ in banner][-1] == "Intercoil (m)"

    def test_table(self, common_params, make_project):
        """Test the table starts with the fixed header."""
        report = build_report(make_project(common_params, n_stations=1))
        table = report.table()

        assert table[0] == REPORT_COLUMNS
        assert len(table) == 8
        assert table[1][0] == "301"

    def test_export_project(self, common_params, make_project):
        """Test export_project hands the report to the sink."""
        sink = _ListSink()
        report = export_project(make_project(common_params), sink)
        assert sink.reports == [report]
        assert len(report.rows) == 14


class TestReportFilename:
    """Tests for report_filename."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Line A", "Line_A_data.csv"),
            ("North   grid 2", "North_grid_2_data.csv"),
            (" Lac\tSaint-Jean ", "Lac_Saint-Jean_data.csv"),
        ],
    )
    def test_csv(self, common_params, name, expected):
        """Test whitespace runs become underscores."""
        project = Project(name=name, common=common_params)
        assert report_filename(project) == expected

    def test_json(self, common_params):
        """Test the extension follows the report format."""
        project = Project(name="Line A", common=common_params)
        assert report_filename(project, ReportFormat.JSON) == "Line_A_data.json"
        assert report_filename(project, "csv") == "Line_A_data.csv"


class TestCsvReportSink:
    """Tests for the CSV sink."""

    def test_write(self, tmp_path, common_params, make_project, gps):
        """Test banner, blank line, header and rows are written."""
        project = make_project(common_params, n_stations=2, gps=gps)
        path = tmp_path / "Line_A_data.csv"

        report = export_project(project, CsvReportSink(path))

        with path.open(encoding="utf-8", newline="") as f:
            lines = list(csv.reader(f))

        banner_size = len(report.banner)
        assert lines[:banner_size] == [list(item) for item in report.banner]
        assert lines[banner_size] == []
        assert lines[banner_size + 1] == list(REPORT_COLUMNS)
        assert len(lines) == banner_size + 2 + 14
        assert lines[-1][:2] == ["302", "102"]


class TestJsonReportSink:
    """Tests for the JSON sink."""

    def test_write(self, tmp_path, common_params, make_project, gps):
        """Test banner, columns and rows keyed by column name."""
        project = make_project(common_params, n_stations=2, gps=gps)
        path = tmp_path / "Line_A_data.json"

        report = export_project(project, JsonReportSink(path))
        data = orjson.loads(path.read_bytes())

        assert data["banner"] == dict(report.banner)
        assert data["banner"]["GPS"] == "45.123457, -73.987654"
        assert data["columns"] == list(REPORT_COLUMNS)
        assert len(data["rows"]) == 14
        assert data["rows"][0] == report.rows[0].as_dict()
        assert data["rows"][-1]["Station"] == "302"
        assert data["rows"][-1]["Frequency (Hz)"] == "102"

    @pytest.mark.parametrize(
        ("report_format", "cls"),
        [
            (ReportFormat.CSV, CsvReportSink),
            ("json", JsonReportSink),
        ],
    )
    def test_report_sink(self, tmp_path, report_format, cls):
        """Test the sink is chosen from the report format."""
        sink = report_sink(tmp_path / "report", report_format)
        assert isinstance(sink, cls)
        assert sink.path == tmp_path / "report"
