"""Outgoing message content handed to the client's ``send_message``."""

import base64
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Location:
    """A map pin with optional place details."""
    latitude: float
    longitude: float
    name: Optional[str] = None
    address: Optional[str] = None
    url: Optional[str] = None


@dataclass
class Poll:
    """A poll with a question and selectable options."""
    question: str
    options: List[str]
    allow_multiple_answers: bool = False
    message_secret: Optional[List[int]] = None


@dataclass
class Buttons:
    """Interactive reply buttons."""
    body: str
    buttons: List[Dict[str, Any]]
    title: Optional[str] = None
    footer: Optional[str] = None


@dataclass
class ListMessage:
    """Interactive list, opened by a button, grouping rows into sections."""
    body: str
    button_text: str
    sections: List[Dict[str, Any]]
    title: Optional[str] = None
    footer: Optional[str] = None


@dataclass
class MessageMedia:
    """Media attachment; ``data`` is base64 encoded."""
    mimetype: str
    data: str
    filename: Optional[str] = None
    filesize: Optional[int] = field(default=None, repr=False)

    @classmethod
    def from_bytes(
        cls,
        content: bytes,
        mimetype: str,
        filename: Optional[str] = None
    ) -> "MessageMedia":
        """Build a media attachment from raw file bytes."""
        return cls(
            mimetype=mimetype,
            data=base64.b64encode(content).decode("ascii"),
            filename=filename,
            filesize=len(content)
        )
