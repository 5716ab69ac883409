"""Pydantic schemas for completion suggestions.

A suggestion is a tagged variant: the ``type`` literal selects the model,
so a Column suggestion can never be mistaken for a Table one downstream.
The editor reads ``insertText``; ``$0`` in it marks where the caret goes.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

CURSOR_PLACEHOLDER = "$0"


class _SuggestionBase(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    value: str
    label: str
    description: str = ""
    insert_text: str = Field(alias="insertText")


class KeywordSuggestion(_SuggestionBase):
    type: Literal["keyword"] = "keyword"


class FunctionSuggestion(_SuggestionBase):
    type: Literal["function"] = "function"


class TableSuggestion(_SuggestionBase):
    type: Literal["table"] = "table"


class ColumnSuggestion(_SuggestionBase):
    type: Literal["column"] = "column"


class TimeRangeSuggestion(_SuggestionBase):
    type: Literal["timerange"] = "timerange"


Suggestion = Annotated[
    KeywordSuggestion
    | FunctionSuggestion
    | TableSuggestion
    | ColumnSuggestion
    | TimeRangeSuggestion,
    Field(discriminator="type"),
]


class SuggestionRequest(BaseModel):
    """Body for POST /workspaces/{id}/suggestions.

    cursor_position is accepted for editor compatibility; context is always
    taken from the trailing tokens of the last line.
    """

    text: str = ""
    cursor_position: int | None = None


class SuggestionListResponse(BaseModel):
    items: list[Suggestion]
