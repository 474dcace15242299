"""
Chart Spec schemas - Define la estructura del JSON Vega-Lite que renderiza el frontend

Field order in each model is the key order of the serialized document.
"""
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


VEGA_SCHEMA = "https://vega.github.io/schema/vega-lite/v5.json"

SortOrder = Literal["ascending", "descending"]


class _SpecModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class SortSpec(_SpecModel):
    """Sort a nominal channel by another field"""
    field: str = Field(..., description="Campo usado para ordenar")
    op: Optional[Literal["sum", "mean", "count"]] = Field(None, description="Agregacion aplicada antes de ordenar")
    order: SortOrder = Field("descending")


class MarkConfig(_SpecModel):
    """Configuracion de la marca (arc, line)"""
    type: Literal["arc", "line"] = Field(...)
    tooltip: bool = Field(True)
    point: Optional[bool] = Field(None, description="Dibuja puntos sobre la linea")


class FieldEncoding(_SpecModel):
    """Binding of one data field to a visual channel"""
    field: str = Field(...)
    type: Literal["quantitative", "nominal", "temporal", "ordinal"] = Field(...)
    stack: Optional[Literal["normalize", "zero", "center"]] = Field(None)
    sort: Optional[Union[SortSpec, SortOrder]] = Field(None)
    time_unit: Optional[str] = Field(None, alias="timeUnit")
    title: Optional[str] = Field(None)


class PieEncoding(_SpecModel):
    theta: FieldEncoding
    color: FieldEncoding
    order: FieldEncoding


class LineEncoding(_SpecModel):
    color: FieldEncoding
    x: FieldEncoding
    y: FieldEncoding


class ChartData(_SpecModel):
    """Valores inline del grafico"""
    values: List[Dict[str, Any]] = Field(default_factory=list)


class ChartSpec(_SpecModel):
    """Fields shared by every chart document"""
    schema_url: str = Field(VEGA_SCHEMA, alias="$schema")
    title: str = Field(..., description="Titulo del grafico")
    description: str = Field(..., description="Descripcion del grafico")
    data: ChartData = Field(default_factory=ChartData)

    def to_json(self) -> str:
        """Serialize to compact JSON text"""
        return self.model_dump_json(by_alias=True, exclude_none=True)


class PieChartSpec(ChartSpec):
    """Donut/pie chart: arc mark with normalized theta"""
    mark: MarkConfig = Field(default_factory=lambda: MarkConfig(type="arc", tooltip=True))
    encoding: PieEncoding


class LineChartSpec(ChartSpec):
    """Line chart with fixed canvas size"""
    height: int = Field(500)
    width: int = Field(1000)
    mark: MarkConfig = Field(default_factory=lambda: MarkConfig(type="line", tooltip=True, point=True))
    encoding: LineEncoding
