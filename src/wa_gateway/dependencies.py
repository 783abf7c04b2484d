"""FastAPI dependencies shared by the routers."""

from fastapi import Depends, Request

from .models.config import APIConfig
from .services.session import ClientSession
from .services.whatsapp import WhatsAppService


def get_config(request: Request) -> APIConfig:
    """Get API configuration."""
    return request.app.state.config


def get_session(request: Request) -> ClientSession:
    """Get the process-wide client session."""
    return request.app.state.session


def get_whatsapp_service(
    session: ClientSession = Depends(get_session),
    config: APIConfig = Depends(get_config)
) -> WhatsAppService:
    """Get a service bound to the client; fails with 503 until the client is ready."""
    return WhatsAppService(session.require_client(), config)
