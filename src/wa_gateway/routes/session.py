"""Health, client session status and initialization endpoints."""

import logging
from datetime import datetime
from fastapi import APIRouter, Depends

from .. import __version__
from ..dependencies import get_session
from ..models.responses import HealthResponse, InitializeResponse, StatusResponse
from ..services.session import ClientSession

logger = logging.getLogger(__name__)

router = APIRouter(tags=["session"])


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Liveness of the HTTP server; does not depend on the client."""
    return HealthResponse(status="healthy", version=__version__)


@router.get("/status", response_model=StatusResponse)
async def get_status(session: ClientSession = Depends(get_session)):
    """
    Report whether the WhatsApp client is ready to serve requests.

    While the client waits to be paired, the latest QR code and pairing code
    are included so the session can be linked without access to the logs.
    """
    return StatusResponse(
        ready=session.ready,
        initializing=session.initializing,
        timestamp=datetime.now(),
        qr=session.last_qr,
        pairing_code=session.pairing_code
    )


@router.post("/initialize", response_model=InitializeResponse)
async def initialize(session: ClientSession = Depends(get_session)):
    """Start the WhatsApp client unless it is already running."""
    message = session.start()
    logger.info(message)
    return InitializeResponse(message=message)
