import logging

from .utils import DATA_BLOCK_SIZE

log = logging.getLogger(__name__)

# length, response code, IDm (8 bytes), status flag 1, status flag 2, block count
STATUS_FLAG1_OFFSET = 10
STATUS_FLAG2_OFFSET = 11
BLOCK_DATA_OFFSET = 13
MIN_RESPONSE_LENGTH = 13


def status_flags(response: bytes) -> tuple[int, int] | None:
    if len(response) <= STATUS_FLAG2_OFFSET:
        return None
    return response[STATUS_FLAG1_OFFSET], response[STATUS_FLAG2_OFFSET]


def extract_block(response: bytes) -> bytes | None:
    """Return the 16-byte block carried by a single-block read response.

    ``None`` means the card has no more blocks to give (short response or a
    non-zero status flag). It is the normal end of the circular log, not an
    error.
    """
    if len(response) < MIN_RESPONSE_LENGTH:
        log.debug("response too short: %d bytes", len(response))
        return None

    status_flag1, status_flag2 = status_flags(response)
    if status_flag1 != 0x00 or status_flag2 != 0x00:
        log.debug(
            "card returned status 0x%04X", (status_flag1 << 8) | status_flag2
        )
        return None

    block = response[BLOCK_DATA_OFFSET : BLOCK_DATA_OFFSET + DATA_BLOCK_SIZE]
    if len(block) < DATA_BLOCK_SIZE:
        log.warning(
            "block data truncated: %d of %d bytes", len(block), DATA_BLOCK_SIZE
        )
        return None
    return bytes(block)
