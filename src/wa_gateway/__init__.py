"""
HTTP API for a WhatsApp Web session.

This module provides a FastAPI-based REST API that wraps a long-lived
WhatsApp Web automation client, enabling messaging, chat and group
management over plain HTTP.
"""

__version__ = "1.0.0"
