# -*- coding: utf-8 -*-
"""Lambda EM survey library.

Converts raw electromagnetic ground-conductivity readings into apparent
conductivity, resistivity and exploration depth, aggregates them into
stations and projects, persists projects and exports them as tabular reports.

Usage:
    from lambda_em import FileKeyValueStore, Frequency, SurveySession, SurveyStore

    store = SurveyStore(FileKeyValueStore("~/.lambda_em/store"))
    session = SurveySession.create(
        store,
        "Line A",
        {"transcat": 3, "interstation": 10, "averageResistivity": 100,
         "intercoil": 10},
    )
    for freq in Frequency.ordered():
        session.record(freq, tx_current=1.0, rx_voltage=50.0)
    session.complete_station()      # station 301, persisted
"""

__version__ = "0.1.0"

# Constants
from lambda_em.constants import FREQUENCIES_HZ
from lambda_em.constants import REPORT_COLUMNS

# Enums
from lambda_em.enums import Frequency
from lambda_em.enums import ReportFormat

# Errors
from lambda_em.errors import AcquisitionFailure
from lambda_em.errors import ConfigurationError
from lambda_em.errors import CorruptStoreError
from lambda_em.errors import IncompleteStationError
from lambda_em.errors import IndexOutOfRangeError
from lambda_em.errors import LambdaEMError
from lambda_em.errors import MeasurementValidationError
from lambda_em.errors import NonFiniteResultError
from lambda_em.errors import ProjectNotFoundError
from lambda_em.errors import StoreError
from lambda_em.errors import TransectOverflowError
from lambda_em.errors import ValidationError

# Formulas
from lambda_em.formulas import FormulaResult
from lambda_em.formulas import compute

# Models
from lambda_em.models import CommonParams
from lambda_em.models import GPSLocation
from lambda_em.models import Project
from lambda_em.models import RawReading
from lambda_em.models import StationMeasurement

# Survey
from lambda_em.acquisition import FixedGPSProvider
from lambda_em.acquisition import HttpInstrument
from lambda_em.export import CsvReportSink
from lambda_em.export import JsonReportSink
from lambda_em.export import ProjectReport
from lambda_em.export import ReportRow
from lambda_em.export import build_report
from lambda_em.export import flatten
from lambda_em.project import ProjectAggregator
from lambda_em.project import next_station_from_existing
from lambda_em.project import starting_station
from lambda_em.session import SurveySession
from lambda_em.station import StationAccumulator
from lambda_em.store import FileKeyValueStore
from lambda_em.store import MemoryKeyValueStore
from lambda_em.store import SurveyStore

__all__ = [
    "FREQUENCIES_HZ",
    "REPORT_COLUMNS",
    "AcquisitionFailure",
    "CommonParams",
    "ConfigurationError",
    "CorruptStoreError",
    "CsvReportSink",
    "FileKeyValueStore",
    "FixedGPSProvider",
    "FormulaResult",
    "Frequency",
    "GPSLocation",
    "HttpInstrument",
    "IncompleteStationError",
    "IndexOutOfRangeError",
    "JsonReportSink",
    "LambdaEMError",
    "MeasurementValidationError",
    "MemoryKeyValueStore",
    "NonFiniteResultError",
    "Project",
    "ProjectAggregator",
    "ProjectNotFoundError",
    "ProjectReport",
    "RawReading",
    "ReportFormat",
    "ReportRow",
    "StationAccumulator",
    "StationMeasurement",
    "StoreError",
    "SurveySession",
    "SurveyStore",
    "TransectOverflowError",
    "ValidationError",
    "build_report",
    "compute",
    "flatten",
    "next_station_from_existing",
    "starting_station",
]
