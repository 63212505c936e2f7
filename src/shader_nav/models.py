from pydantic import BaseModel, ConfigDict, Field


class Position(BaseModel):
    """Zero-based line/character pair, as used by editor protocols."""

    model_config = ConfigDict(frozen=True)

    line: int = Field(ge=0)
    character: int = Field(ge=0)


class Range(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: Position
    end: Position


class Location(BaseModel):
    model_config = ConfigDict(frozen=True)

    uri: str
    range: Range


class NodeInfo(BaseModel):
    """Summary of the syntax node found under a cursor."""

    kind: str
    text: str
    parent_kind: str | None = None
    range: Range
    definition_strategy: str | None = None
    reference_strategy: str | None = None
