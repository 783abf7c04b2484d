"""
Contract between the REST gateway and the WhatsApp Web automation library.

The gateway never talks to WhatsApp itself. It drives a client object built by
a library adapter (configured as a ``module:attribute`` factory path) and only
relies on the methods, attributes and content types declared here.
"""

from .client import ClientEvent, ClientOptions, WhatsAppClient
from .content import Buttons, ListMessage, Location, MessageMedia, Poll
from .ids import serialized_id, to_chat_id, to_chat_ids
from .loader import ClientFactoryError, load_client_factory

__all__ = [
    "Buttons",
    "ClientEvent",
    "ClientFactoryError",
    "ClientOptions",
    "ListMessage",
    "Location",
    "MessageMedia",
    "Poll",
    "WhatsAppClient",
    "load_client_factory",
    "serialized_id",
    "to_chat_id",
    "to_chat_ids",
]
