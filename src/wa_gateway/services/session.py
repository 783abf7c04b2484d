"""Owner of the long-lived WhatsApp client and its readiness flag."""

import asyncio
import functools
import logging
from typing import Any, Callable, Optional

from wa_client import ClientEvent, WhatsAppClient, load_client_factory
from wa_client.loader import ClientFactory, ClientFactoryError

from ..errors import ClientNotReadyError, ClientSetupError
from ..models.config import APIConfig

logger = logging.getLogger(__name__)


class ClientSession:
    """
    Holds the client handle and tracks whether it can serve requests.

    The readiness flag is raised by the client's ``ready`` event and lowered by
    ``auth_failure`` and ``disconnected``. Requests other than status and
    initialization are only served while it is raised.
    """

    def __init__(self, config: APIConfig, client_factory: Optional[ClientFactory] = None):
        self.config = config
        self._client_factory = client_factory
        self.client: Optional[WhatsAppClient] = None
        self.ready = False
        self.last_qr: Optional[str] = None
        self.pairing_code: Optional[str] = None
        self._init_task: Optional[asyncio.Task] = None

    @property
    def initializing(self) -> bool:
        return self._init_task is not None and not self._init_task.done()

    def start(self) -> str:
        """
        Build a client and start its initialization in the background.

        Returns the status message reported to the caller. Must be called
        from within the running event loop.
        """
        if self.ready:
            return "Client already initialized"
        if self.initializing:
            return "Client initialization in progress"

        factory = self._client_factory
        try:
            if factory is None:
                factory = load_client_factory(self.config.client_factory)
            client = factory(self.config.client_options())
        except ClientFactoryError as e:
            raise ClientSetupError(str(e)) from e
        except Exception as e:
            raise ClientSetupError(f"Failed to create WhatsApp client: {e}") from e

        previous, self.client = self.client, client
        self.ready = False
        self.last_qr = None
        self.pairing_code = None
        self._register_handlers(client)
        self._init_task = asyncio.create_task(self._initialize(client, previous))
        return "Client initialization started"

    def require_client(self) -> WhatsAppClient:
        """Return the client handle, or raise if it cannot serve requests."""
        if not self.ready or self.client is None:
            raise ClientNotReadyError()
        return self.client

    async def close(self) -> None:
        """Cancel a pending initialization and shut the browser session down."""
        if self.initializing:
            self._init_task.cancel()
            try:
                await self._init_task
            except asyncio.CancelledError:
                pass
        self._init_task = None
        self.ready = False

        if self.client is not None:
            await self._destroy(self.client)
            self.client = None

    async def _initialize(self, client: WhatsAppClient, previous: Optional[WhatsAppClient]) -> None:
        if previous is not None:
            await self._destroy(previous)
        try:
            await client.initialize()
        except Exception:
            logger.exception("WhatsApp client initialization failed")
            if client is self.client:
                self.ready = False

    async def _destroy(self, client: WhatsAppClient) -> None:
        try:
            await client.destroy()
        except Exception as e:
            logger.warning(f"Error while destroying WhatsApp client: {e}")

    def _register_handlers(self, client: WhatsAppClient) -> None:
        client.on(ClientEvent.LOADING_SCREEN.value, self._bind(client, self._on_loading_screen))
        client.on(ClientEvent.QR.value, self._bind(client, self._on_qr))
        client.on(ClientEvent.CODE.value, self._bind(client, self._on_code))
        client.on(ClientEvent.AUTHENTICATED.value, self._bind(client, self._on_authenticated))
        client.on(ClientEvent.AUTH_FAILURE.value, self._bind(client, self._on_auth_failure))
        client.on(ClientEvent.READY.value, self._bind(client, self._on_ready))
        client.on(ClientEvent.MESSAGE.value, self._bind(client, self._on_message))
        client.on(ClientEvent.DISCONNECTED.value, self._bind(client, self._on_disconnected))

    def _bind(self, client: WhatsAppClient, handler: Callable[..., Any]) -> Callable[..., Any]:
        """
        Pass ``client`` to ``handler`` as its first argument.

        Events from a client that has since been replaced are dropped, so a
        stale client cannot change the state of the current one.
        """

        @functools.wraps(handler)
        def dispatch(*args):
            if client is not self.client:
                logger.debug(f"Ignoring {handler.__name__} from a replaced client")
                return None
            return handler(client, *args)

        return dispatch

    # Lifecycle event handlers

    def _on_loading_screen(self, client: WhatsAppClient, percent, message) -> None:
        logger.info(f"Loading screen {percent}% {message}")

    def _on_qr(self, client: WhatsAppClient, qr: str) -> None:
        self.last_qr = qr
        logger.info(f"QR received: {qr}")

    def _on_code(self, client: WhatsAppClient, code: str) -> None:
        self.pairing_code = code
        logger.info(f"Pairing code: {code}")

    def _on_authenticated(self, client: WhatsAppClient, *args) -> None:
        logger.info("Authenticated")

    def _on_auth_failure(self, client: WhatsAppClient, message) -> None:
        logger.error(f"Authentication failure: {message}")
        self.ready = False

    async def _on_ready(self, client: WhatsAppClient, *args) -> None:
        self.ready = True
        self.last_qr = None
        self.pairing_code = None
        logger.info("WhatsApp client ready")
        try:
            version = await client.get_wweb_version()
        except Exception as e:
            logger.warning(f"Could not read WWebVersion: {e}")
            return
        logger.info(f"WWebVersion = {version}")

    def _on_message(self, client: WhatsAppClient, message) -> None:
        logger.debug(f"Message received: {message}")

    def _on_disconnected(self, client: WhatsAppClient, reason) -> None:
        logger.warning(f"Client was logged out: {reason}")
        self.ready = False
