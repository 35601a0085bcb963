# -*- coding: utf-8 -*-
"""Report exporter: flattens a project into spreadsheet rows.

A report is made of a banner (project name and survey parameters) followed
by a table with one row per measurement, in the fixed column order of
:data:`~lambda_em.constants.REPORT_COLUMNS`. Stations are emitted in
ascending station number and measurements in their stored order.

Number formatting is a presentation concern only; stored values keep full
precision.
"""

from __future__ import annotations

import csv
import logging
import re
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import Protocol

import orjson

from lambda_em.constants import COORDINATE_PRECISION
from lambda_em.constants import DERIVED_PRECISION
from lambda_em.constants import DISTANCE_PRECISION
from lambda_em.constants import READING_PRECISION
from lambda_em.constants import REPORT_COLUMNS
from lambda_em.constants import REPORT_ENCODING
from lambda_em.constants import REPORT_FILENAME_SUFFIX
from lambda_em.enums import ReportFormat
from lambda_em.models import Project
from lambda_em.models import StationMeasurement

logger = logging.getLogger(__name__)


def _fixed(value: float, precision: int) -> str:
    return f"{value:.{precision}f}"


@dataclass(frozen=True)
class ReportRow:
    """One measurement of one station, ready for a tabular sink."""

    station: int
    measurement: StationMeasurement

    def cells(self) -> tuple[str, ...]:
        """Formatted cells, in :data:`REPORT_COLUMNS` order."""
        m = self.measurement
        return (
            str(self.station),
            str(int(m.frequency)),
            _fixed(m.latitude, COORDINATE_PRECISION),
            _fixed(m.longitude, COORDINATE_PRECISION),
            _fixed(m.distance, DISTANCE_PRECISION),
            _fixed(m.calculated_depth, DERIVED_PRECISION),
            _fixed(m.tx_current, READING_PRECISION),
            _fixed(m.rx_voltage, READING_PRECISION),
            _fixed(m.calculated_conductivity, DERIVED_PRECISION),
            _fixed(m.calculated_resistivity, DERIVED_PRECISION),
            m.date,
            m.time,
        )

    def as_dict(self) -> dict[str, str]:
        return dict(zip(REPORT_COLUMNS, self.cells(), strict=True))


@dataclass
class ProjectReport:
    """Banner, header and rows of an exported project."""

    banner: list[tuple[str, str]]
    rows: list[ReportRow] = field(default_factory=list)
    header: tuple[str, ...] = REPORT_COLUMNS

    def table(self) -> list[tuple[str, ...]]:
        """Header followed by every formatted row."""
        return [self.header, *(row.cells() for row in self.rows)]


def flatten(project: Project) -> list[ReportRow]:
    """Flatten a project into one row per measurement.

    Stations are sorted by number, whatever order the collection was stored
    in. A fully completed project yields ``stations × 7`` rows.
    """
    return [
        ReportRow(station=station, measurement=measurement)
        for station, measurements in sorted(project.stations.items())
        for measurement in measurements
    ]


def build_banner(project: Project) -> list[tuple[str, str]]:
    """Project-level summary printed above the measurement table."""
    common = project.common
    banner = [
        ("Project", project.name),
        ("Transect", str(common.transcat_number)),
        ("Interstation (m)", f"{common.interstation:g}"),
        ("Avg Resistivity (Ω·m)", f"{common.average_resistivity:g}"),
        ("Intercoil (m)", f"{common.intercoil:g}"),
    ]
    if project.gps is not None:
        banner.append(
            (
                "GPS",
                f"{_fixed(project.gps.latitude, COORDINATE_PRECISION)}, "
                f"{_fixed(project.gps.longitude, COORDINATE_PRECISION)}",
            )
        )
    return banner


def build_report(project: Project) -> ProjectReport:
    return ProjectReport(banner=build_banner(project), rows=flatten(project))


def report_filename(
    project: Project,
    report_format: ReportFormat | str = ReportFormat.CSV,
) -> str:
    """File name for a project report, e.g. ``Line_A_data.csv``."""
    report_format = ReportFormat(report_format)
    stem = re.sub(r"\s+", "_", project.name.strip())
    return f"{stem}{REPORT_FILENAME_SUFFIX}{report_format.extension}"


class TabularSink(Protocol):
    """Destination accepting a formatted report."""

    def write_report(self, report: ProjectReport) -> None: ...


class CsvReportSink:
    """Write a report as CSV: banner lines, a blank line, then the table."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def write_report(self, report: ProjectReport) -> None:
        with self.path.open(mode="w", encoding=REPORT_ENCODING, newline="") as f:
            writer = csv.writer(f)
            writer.writerows(report.banner)
            writer.writerow([])
            writer.writerows(report.table())

        logger.info("Exported %s rows to `%s`", len(report.rows), self.path)


class JsonReportSink:
    """Write a report as JSON: the banner, the column names and the rows.

    Rows are objects keyed by column name, with the same formatted values
    as the CSV report.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def write_report(self, report: ProjectReport) -> None:
        data = {
            "banner": dict(report.banner),
            "columns": list(report.header),
            "rows": [row.as_dict() for row in report.rows],
        }
        self.path.write_bytes(orjson.dumps(data, option=orjson.OPT_INDENT_2))

        logger.info("Exported %s rows to `%s`", len(report.rows), self.path)


REPORT_SINKS: dict[ReportFormat, type[CsvReportSink | JsonReportSink]] = {
    ReportFormat.CSV: CsvReportSink,
    ReportFormat.JSON: JsonReportSink,
}


def report_sink(path: Path, report_format: ReportFormat | str) -> TabularSink:
    """Sink writing ``report_format`` to ``path``."""
    return REPORT_SINKS[ReportFormat(report_format)](path)


def export_project(project: Project, sink: TabularSink) -> ProjectReport:
    """Build the report of ``project`` and hand it to ``sink``."""
    report = build_report(project)
    sink.write_report(report)
    return report
