"""
Chart generators - Convierten summaries del store en specs Vega-Lite

Each generator borrows a prepared cursor, reads the rows it needs and
returns the chart document as compact JSON text. Cursors are never closed
here; the store owns them.
"""
import sqlite3
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Mapping

from ..errors import SummaryDecodeError, SummaryTimeError
from ..schemas.chart import (
    ChartData,
    FieldEncoding,
    LineChartSpec,
    LineEncoding,
    PieChartSpec,
    PieEncoding,
    SortSpec,
)
from ..schemas.summary import EMPTY_SUMMARY, Summary, decode_summary, summary_from_row
from ..utils.logger import get_logger

logger = get_logger("generators")

ALL_VERSIONS = "all"


# ============== HELPERS ==============

def parse_summary_data(cursor: sqlite3.Cursor) -> Summary:
    """Summary of the first row of the cursor; empty when there is no usable row"""
    summary = summary_from_row(cursor.fetchone())
    if summary is None:
        logger.debug("No summary row, building empty chart")
        return EMPTY_SUMMARY
    return summary


def row_date(value: Any) -> str:
    """Capture time of a row as a UTC calendar date (YYYY-MM-DD)"""
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        return value.isoformat()
    else:
        try:
            dt = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError as e:
            raise SummaryTimeError(f"Invalid summary time: {value!r}") from e
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt.date().isoformat()


def _pie_spec(
    title: str,
    description: str,
    values: List[Dict[str, Any]],
    dimension: str,
    legend_title: str,
) -> str:
    spec = PieChartSpec(
        title=title,
        description=description,
        data=ChartData(values=values),
        encoding=PieEncoding(
            theta=FieldEncoding(field="c", type="quantitative", stack="normalize", title="Percentage"),
            color=FieldEncoding(
                field=dimension,
                type="nominal",
                sort=SortSpec(field="c", order="descending"),
                title=legend_title,
            ),
            order=FieldEncoding(field="c", type="quantitative", sort="descending", title="Count"),
        ),
    )
    return spec.to_json()


def _count_values(counts: Mapping[str, int], dimension: str) -> List[Dict[str, Any]]:
    return [{dimension: name, "c": count} for name, count in counts.items()]


# ============== PIE CHARTS ==============

def os_pie(cursor: sqlite3.Cursor) -> str:
    summary = parse_summary_data(cursor)
    values = _count_values(summary.os, "os")
    logger.debug("os_pie built", {"values": len(values)})
    return _pie_spec(
        "Operating Systems",
        "Distribution of operating systems used by clients",
        values,
        "os",
        "Operating System",
    )


def music_fs_pie(cursor: sqlite3.Cursor) -> str:
    summary = parse_summary_data(cursor)
    values = _count_values(summary.music_fs, "fs")
    logger.debug("music_fs_pie built", {"values": len(values)})
    return _pie_spec(
        "Music File Systems",
        "Distribution of file systems used for music files",
        values,
        "fs",
        "File System (music)",
    )


def data_fs_pie(cursor: sqlite3.Cursor) -> str:
    summary = parse_summary_data(cursor)
    values = _count_values(summary.data_fs, "fs")
    logger.debug("data_fs_pie built", {"values": len(values)})
    return _pie_spec(
        "Data File Systems",
        "Distribution of file systems used for data files",
        values,
        "fs",
        "File System (data)",
    )


def player_type_pie(cursor: sqlite3.Cursor) -> str:
    """Legend labels carry the count too ("<name>: <count>")"""
    summary = parse_summary_data(cursor)
    values = [
        {"pt": f"{name}: {count}", "c": count}
        for name, count in summary.player_types.items()
    ]
    logger.debug("player_type_pie built", {"values": len(values)})
    return _pie_spec(
        "Player Types",
        "Distribution of clients used",
        values,
        "pt",
        "Client",
    )


# ============== TIME SERIES ==============

def num_instance_line(cursor: sqlite3.Cursor) -> str:
    """
    Instances per version over time.

    Every row adds one record per version plus an "all" record with the
    row's total. The leading empty record is expected by the renderer.
    """
    values: List[Dict[str, Any]] = [{}]
    rows = 0
    for row in cursor:
        d = row_date(row["time"])
        data = row["data"]
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise SummaryDecodeError(f"Summary payload for {d} is not bytes")
        s = decode_summary(bytes(data))

        for version, count in s.versions.items():
            values.append({"v": version, "n": count, "d": d})
        total: Dict[str, Any] = {"v": ALL_VERSIONS}
        if s.num_instances is not None:
            total["n"] = s.num_instances
        total["d"] = d
        values.append(total)
        rows += 1

    logger.debug("num_instance_line built", {"rows": rows, "values": len(values)})

    spec = LineChartSpec(
        title="Number of Instances Over Time",
        description="Number of instances of the server over time, by version",
        data=ChartData(values=values),
        encoding=LineEncoding(
            color=FieldEncoding(
                field="v",
                type="nominal",
                sort=SortSpec(field="n", op="sum", order="descending"),
                title="Version",
            ),
            x=FieldEncoding(field="d", type="temporal", time_unit="yearmonthdate", title="Date"),
            y=FieldEncoding(field="n", type="quantitative", title="Number of Instances"),
        ),
    )
    return spec.to_json()
