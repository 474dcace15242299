from .summary import Summary, EMPTY_SUMMARY, decode_summary, summary_from_row
from .chart import (
    VEGA_SCHEMA,
    ChartData,
    ChartSpec,
    FieldEncoding,
    LineChartSpec,
    LineEncoding,
    MarkConfig,
    PieChartSpec,
    PieEncoding,
    SortSpec,
)

__all__ = [
    # Summary
    "Summary",
    "EMPTY_SUMMARY",
    "decode_summary",
    "summary_from_row",
    # Chart spec
    "VEGA_SCHEMA",
    "ChartData",
    "ChartSpec",
    "FieldEncoding",
    "LineChartSpec",
    "LineEncoding",
    "MarkConfig",
    "PieChartSpec",
    "PieEncoding",
    "SortSpec",
]
