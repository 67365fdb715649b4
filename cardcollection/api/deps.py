"""
Request-scoped dependencies.

The store, service and settings live on ``app.state``; they are built once
by ``create_app`` and handed to route handlers from there.
"""

from typing import Annotated

from fastapi import Depends, Request

from cardcollection.config import Settings
from cardcollection.services.card_service import CardService


def get_settings(request: Request) -> Settings:
    settings: Settings = request.app.state.settings
    return settings


def get_card_service(request: Request) -> CardService:
    service: CardService = request.app.state.card_service
    return service


SettingsDep = Annotated[Settings, Depends(get_settings)]
CardServiceDep = Annotated[CardService, Depends(get_card_service)]
