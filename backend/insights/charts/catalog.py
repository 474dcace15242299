"""
Chart Catalog - Graficos disponibles y la query que necesita cada uno

Cada grafico define:
- title / description: lo que muestra el listado de /api/charts
- source: "latest" (un solo summary) o "range" (historico entre fechas)
- builder: el generador que arma la spec Vega-Lite

Uso:
    from insights.charts.catalog import ChartType, build_chart
    spec_json = build_chart(ChartType.OS_PIE, store)
"""
import sqlite3
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Callable, Dict, List, Literal, Optional

from ..db.summary_store import SummaryStore
from .generators import data_fs_pie, music_fs_pie, num_instance_line, os_pie, player_type_pie


class ChartType(str, Enum):
    """Graficos soportados"""
    OS_PIE = "os"
    MUSIC_FS_PIE = "music_fs"
    DATA_FS_PIE = "data_fs"
    PLAYER_TYPE_PIE = "player_types"
    NUM_INSTANCE_LINE = "num_instances"


@dataclass(frozen=True)
class ChartDefinition:
    """Definicion de un grafico del catalogo"""
    type: ChartType
    title: str
    description: str
    source: Literal["latest", "range"]
    builder: Callable[[sqlite3.Cursor], str]


# ============== CATALOGO DE GRAFICOS ==============

CHART_CATALOG: Dict[ChartType, ChartDefinition] = {
    ChartType.OS_PIE: ChartDefinition(
        type=ChartType.OS_PIE,
        title="Operating Systems",
        description="Distribution of operating systems used by clients",
        source="latest",
        builder=os_pie,
    ),
    ChartType.MUSIC_FS_PIE: ChartDefinition(
        type=ChartType.MUSIC_FS_PIE,
        title="Music File Systems",
        description="Distribution of file systems used for music files",
        source="latest",
        builder=music_fs_pie,
    ),
    ChartType.DATA_FS_PIE: ChartDefinition(
        type=ChartType.DATA_FS_PIE,
        title="Data File Systems",
        description="Distribution of file systems used for data files",
        source="latest",
        builder=data_fs_pie,
    ),
    ChartType.PLAYER_TYPE_PIE: ChartDefinition(
        type=ChartType.PLAYER_TYPE_PIE,
        title="Player Types",
        description="Distribution of clients used",
        source="latest",
        builder=player_type_pie,
    ),
    ChartType.NUM_INSTANCE_LINE: ChartDefinition(
        type=ChartType.NUM_INSTANCE_LINE,
        title="Number of Instances Over Time",
        description="Number of instances of the server over time, by version",
        source="range",
        builder=num_instance_line,
    ),
}


# ============== FUNCIONES DE UTILIDAD ==============

def get_chart_definition(chart_id: str) -> ChartDefinition:
    """
    Obtiene la definicion de un grafico por su id.

    Raises:
        KeyError: id desconocido
    """
    try:
        return CHART_CATALOG[ChartType(chart_id)]
    except ValueError:
        raise KeyError(chart_id) from None


def list_charts() -> List[Dict[str, str]]:
    """Resumen serializable del catalogo"""
    return [
        {
            "id": d.type.value,
            "title": d.title,
            "description": d.description,
            "source": d.source,
        }
        for d in CHART_CATALOG.values()
    ]


def resolve_range(
    date_from: Optional[date],
    date_to: Optional[date],
    default_days: int,
    today: Optional[date] = None,
) -> tuple[date, date]:
    """Completa el rango de fechas; por defecto los ultimos `default_days` dias"""
    end = date_to or today or date.today()
    start = date_from or end - timedelta(days=default_days)
    return start, end


def build_chart(
    chart_id: str,
    store: SummaryStore,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    default_days: int = 365,
) -> str:
    """
    Prepara la query adecuada y ejecuta el generador del grafico.

    Args:
        chart_id: id del catalogo (ej: "os", "num_instances")
        store: store abierto
        date_from / date_to: rango para graficos historicos (ignorado en el resto)
        default_days: ventana cuando no se pasan fechas

    Returns:
        Spec Vega-Lite serializada
    """
    chart_def = get_chart_definition(chart_id)
    if chart_def.source == "range":
        start, end = resolve_range(date_from, date_to, default_days)
        cursor = store.between(start, end)
    else:
        cursor = store.latest()
    return chart_def.builder(cursor)


__all__ = [
    "ChartType",
    "ChartDefinition",
    "CHART_CATALOG",
    "get_chart_definition",
    "list_charts",
    "resolve_range",
    "build_chart",
]
