"""
Summary schema - Snapshot pre-agregado de uso guardado como JSON en el store
"""
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationError, field_validator

from ..errors import SummaryDecodeError


class Summary(BaseModel):
    """Usage snapshot decoded from a stored `data` blob"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    os: Dict[str, StrictInt] = Field(default_factory=dict, description="OS name -> count")
    music_fs: Dict[str, StrictInt] = Field(default_factory=dict, alias="musicFS", description="Music folder file system -> count")
    data_fs: Dict[str, StrictInt] = Field(default_factory=dict, alias="dataFS", description="Data folder file system -> count")
    player_types: Dict[str, StrictInt] = Field(default_factory=dict, alias="playerTypes", description="Client/player -> count")
    versions: Dict[str, StrictInt] = Field(default_factory=dict, description="Server version -> count")
    num_instances: Optional[StrictInt] = Field(None, alias="numInstances", description="Total instances")

    @field_validator("os", "music_fs", "data_fs", "player_types", "versions", mode="before")
    @classmethod
    def null_as_empty(cls, v):
        """A null mapping counts as absent"""
        return {} if v is None else v


EMPTY_SUMMARY = Summary()


def decode_summary(data: bytes) -> Summary:
    """
    Decode a UTF-8 JSON payload into a Summary.

    Raises:
        SummaryDecodeError: payload is not valid UTF-8 JSON or has the wrong shape
    """
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise SummaryDecodeError(f"Summary payload is not UTF-8: {e.reason}") from e
    try:
        return Summary.model_validate_json(text)
    except ValidationError as e:
        raise SummaryDecodeError(f"Invalid summary payload: {e.error_count()} error(s)") from e


def summary_from_row(row) -> Optional[Summary]:
    """Summary of a single fetched row, or None when there is nothing to decode"""
    if row is None:
        return None
    data = row["data"]
    if not isinstance(data, (bytes, bytearray, memoryview)):
        return None
    return decode_summary(bytes(data))
