import logging
from collections.abc import Sequence

from .block import (
    decode_balance,
    decode_category,
    decode_date,
    decode_process_label,
)
from .command import build_read_command
from .models import CardSnapshot, ReadStop, Transaction
from .response import extract_block
from .settings import resolve_read_limit
from .transport import Transport, TransportError
from .utils import IDM_SIZE, MAX_HISTORY_BLOCKS, format_date

log = logging.getLogger(__name__)


class DecodeError(Exception):
    """Base class for failures to obtain a card snapshot."""


class UnsupportedCardError(DecodeError):
    """The transport could not open a FeliCa session with the card."""


class NoDataError(DecodeError):
    """The card answered but no history block could be read."""


class TransportFaultError(DecodeError):
    """The card link failed while reading history blocks."""


def _read_blocks(
    idm: bytes, transport: Transport, read_limit: int
) -> tuple[list[bytes], ReadStop, TransportError | None]:
    blocks: list[bytes] = []
    for block_index in range(read_limit):
        command = build_read_command(idm, block_index)
        log.debug(">> %s", command.hex())
        try:
            response = transport.transceive(command)
        except TransportError as exc:
            log.warning("transceive failed at block %d: %s", block_index, exc)
            return blocks, ReadStop.TRANSPORT_FAULT, exc
        log.debug("<< %s", bytes(response).hex())

        block = extract_block(response)
        if block is None:
            log.debug("end of history log after %d blocks", len(blocks))
            return blocks, ReadStop.END_OF_LOG, None
        blocks.append(block)

    return blocks, ReadStop.READ_LIMIT, None


def _close_session(transport: Transport) -> TransportError | None:
    try:
        transport.close()
    except TransportError as exc:
        log.warning("closing card session failed: %s", exc)
        return exc
    return None


def _make_transaction(block: bytes, amount: int) -> Transaction:
    return Transaction(
        date=decode_date(block),
        category=decode_category(block),
        amount=amount,
        balance_after=decode_balance(block),
    )


def build_snapshot(
    blocks: Sequence[bytes], read_stop: ReadStop = ReadStop.END_OF_LOG
) -> CardSnapshot:
    """Turn newest-first history blocks into a balance and transaction list.

    The card only stores the balance left after each transaction, so each
    amount is the difference with the next older block. The oldest block has
    nothing to compare against and gets an amount of 0.
    """
    if not blocks:
        raise NoDataError("no history blocks to decode")

    balances = [decode_balance(block) for block in blocks]
    history = [
        _make_transaction(block, balances[index] - balances[index + 1])
        for index, block in enumerate(blocks[:-1])
    ]
    history.append(_make_transaction(blocks[-1], 0))

    for index, (block, transaction) in enumerate(zip(blocks, history)):
        log.debug(
            "[%02d] %s %s (%s) amount=%d balance=%d",
            index,
            format_date(*transaction.date),
            transaction.category.value,
            decode_process_label(block),
            transaction.amount,
            transaction.balance_after,
        )

    return CardSnapshot(
        balance=balances[0], history=tuple(history), read_stop=read_stop
    )


def decode(
    idm: bytes,
    transport: Transport,
    *,
    read_limit: int | None = None,
    strict: bool = False,
) -> CardSnapshot:
    """Read the history log of a card and decode it into a snapshot.

    Blocks are requested newest first until ``read_limit`` is reached or the
    card stops returning valid blocks. A transport failure also ends the read;
    by default the blocks read so far are still decoded and the snapshot's
    ``read_stop`` is ``ReadStop.TRANSPORT_FAULT``. With ``strict`` set, any
    transport failure raises ``TransportFaultError`` instead, including one
    raised while closing the session.
    """
    idm = bytes(idm)
    if len(idm) != IDM_SIZE:
        raise ValueError("idm must be 8 bytes.")
    if read_limit is None:
        read_limit = resolve_read_limit()
    if not 1 <= read_limit <= MAX_HISTORY_BLOCKS:
        raise ValueError(f"read_limit must be between 1 and {MAX_HISTORY_BLOCKS}.")

    try:
        transport.connect()
    except TransportError as exc:
        raise UnsupportedCardError(f"cannot open card session: {exc}") from exc

    try:
        blocks, read_stop, fault = _read_blocks(idm, transport, read_limit)
    finally:
        close_fault = _close_session(transport)

    log.info("read %d history blocks (%s)", len(blocks), read_stop.value)

    if fault is not None and (strict or not blocks):
        raise TransportFaultError(
            f"card link failed after {len(blocks)} blocks: {fault}"
        ) from fault
    if not blocks:
        raise NoDataError("card returned no history blocks")
    if close_fault is not None and strict:
        raise TransportFaultError(
            f"card session did not close cleanly: {close_fault}"
        ) from close_fault

    return build_snapshot(blocks, read_stop)
