"""Pydantic schemas for query template endpoints."""

from pydantic import BaseModel


class TemplateResponse(BaseModel):
    name: str
    template: str
    description: str


class TemplateListResponse(BaseModel):
    items: list[TemplateResponse]
