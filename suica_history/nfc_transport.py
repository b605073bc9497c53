import logging

from nfc.clf import CommunicationError
from nfc.tag import Tag
from nfc.tag.tt3_sony import FelicaStandard

from .decoder import decode
from .models import CardSnapshot
from .settings import resolve_exchange_timeout
from .transport import TransportError

log = logging.getLogger(__name__)


class NfcTagTransport:
    """Exchange raw FeliCa frames with a tag activated by nfcpy."""

    def __init__(self, tag: Tag, *, timeout: float | None = None) -> None:
        self.tag = tag
        self.timeout = timeout if timeout is not None else resolve_exchange_timeout()
        self._connected = False

    @property
    def idm(self) -> bytes:
        return bytes(self.tag.idm)

    def connect(self) -> None:
        if not isinstance(self.tag, FelicaStandard):
            raise TransportError(f"not a FeliCa Standard tag: {self.tag!r}")
        self._connected = True

    def transceive(self, frame: bytes) -> bytes:
        if not self._connected:
            raise TransportError("session is not open")
        try:
            response = self.tag.clf.exchange(frame, self.timeout)
        except CommunicationError as exc:
            raise TransportError(str(exc) or type(exc).__name__) from exc
        if response is None:
            raise TransportError("no response from card")
        return bytes(response)

    def close(self) -> None:
        if self._connected:
            log.debug("closing session for %s", self.idm.hex().upper())
        self._connected = False


def read_tag(
    tag: Tag,
    *,
    read_limit: int | None = None,
    strict: bool = False,
    timeout: float | None = None,
) -> CardSnapshot:
    """Decode the history of a tag handed over by ``ContactlessFrontend``."""
    transport = NfcTagTransport(tag, timeout=timeout)
    return decode(transport.idm, transport, read_limit=read_limit, strict=strict)
