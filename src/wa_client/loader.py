"""Resolve the client factory named in configuration."""

import importlib
from typing import Callable

from .client import ClientOptions, WhatsAppClient

ClientFactory = Callable[[ClientOptions], WhatsAppClient]


class ClientFactoryError(Exception):
    """The configured client factory could not be loaded."""


def load_client_factory(path: str) -> ClientFactory:
    """
    Import a factory given as ``package.module:attribute``.

    The attribute may be a class or a function; it is called with a
    ``ClientOptions`` and must return a ``WhatsAppClient``.
    """
    if not path:
        raise ClientFactoryError("No client factory configured (set WA_CLIENT_FACTORY)")

    module_name, sep, attr_path = path.partition(":")
    if not sep or not module_name or not attr_path:
        raise ClientFactoryError(
            f"Invalid client factory path '{path}', expected 'package.module:attribute'"
        )

    try:
        target = importlib.import_module(module_name)
    except ImportError as e:
        raise ClientFactoryError(f"Cannot import client module '{module_name}': {e}") from e

    for attr in attr_path.split("."):
        try:
            target = getattr(target, attr)
        except AttributeError as e:
            raise ClientFactoryError(
                f"Module '{module_name}' has no attribute '{attr_path}'"
            ) from e

    if not callable(target):
        raise ClientFactoryError(f"Client factory '{path}' is not callable")

    return target
