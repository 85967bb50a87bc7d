from typing import Annotated

from fastapi import Depends, Query

from guardpost.application.pagination import PageRequest
from guardpost.infrastructure.config.settings import Settings
from guardpost.presentation.api.dependencies import get_app_settings


def page_request(
    settings: Annotated[Settings, Depends(get_app_settings)],
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int | None, Query(ge=1)] = None,
) -> PageRequest:
    """page/limit query parameters, limit clamped to the configured maximum"""
    size = min(limit or settings.default_page_size, settings.max_page_size)
    return PageRequest(page=page, limit=size)
