from dataclasses import dataclass

from fastapi import Request

from drivegate.config import Settings
from drivegate.services.drive import DriveService


@dataclass(frozen=True)
class GatewayContext:
    """Process-wide state built once at startup and handed to every handler."""

    settings: Settings
    drive: DriveService


def build_context(settings: Settings) -> GatewayContext:
    return GatewayContext(settings=settings, drive=DriveService.from_settings(settings))


def get_context(request: Request) -> GatewayContext:
    return request.app.state.context
