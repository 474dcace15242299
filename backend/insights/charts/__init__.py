"""
Charts module - Generadores Vega-Lite y catalogo de graficos

Uso:
    from insights.charts import (
        os_pie,
        num_instance_line,
        build_chart,
        list_charts
    )
"""
from .generators import (
    data_fs_pie,
    music_fs_pie,
    num_instance_line,
    os_pie,
    player_type_pie,
)
from .catalog import (
    ChartType,
    ChartDefinition,
    CHART_CATALOG,
    build_chart,
    get_chart_definition,
    list_charts,
    resolve_range,
)

__all__ = [
    "data_fs_pie",
    "music_fs_pie",
    "num_instance_line",
    "os_pie",
    "player_type_pie",
    "ChartType",
    "ChartDefinition",
    "CHART_CATALOG",
    "build_chart",
    "get_chart_definition",
    "list_charts",
    "resolve_range",
]
