"""Statistics over normalized elements and report export."""

from ifcstruct.analytics.exporter import ReportExporter
from ifcstruct.analytics.statistics import StatisticsAggregator

__all__ = ["ReportExporter", "StatisticsAggregator"]
