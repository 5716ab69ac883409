"""Query template endpoints.

List and get the built-in example queries.
"""

from fastapi import APIRouter, HTTPException, status

from kql_intellisense.schemas.template import TemplateListResponse, TemplateResponse
from kql_intellisense.services.template_registry import (
    get_query_template,
    get_query_templates,
)

router = APIRouter()


@router.get("", response_model=TemplateListResponse)
async def list_templates():
    """List all query templates in declaration order."""
    return TemplateListResponse(
        items=[
            TemplateResponse(
                name=t.name,
                template=t.template,
                description=t.description,
            )
            for t in get_query_templates()
        ]
    )


@router.get("/{name}", response_model=TemplateResponse)
async def get_template_detail(name: str):
    """Get a single template by name."""
    template = get_query_template(name)
    if not template:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Template not found"
        )
    return TemplateResponse(
        name=template.name,
        template=template.template,
        description=template.description,
    )
