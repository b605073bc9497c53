from typing import Protocol


class TransportError(Exception):
    """Raised when the card link fails or cannot be opened."""


class Transport(Protocol):
    """One contactless session: one request frame in, one response frame out."""

    def connect(self) -> None: ...

    def transceive(self, frame: bytes) -> bytes: ...

    def close(self) -> None: ...
