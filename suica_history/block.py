from .models import TransactionCategory
from .utils import DATA_BLOCK_SIZE, int_to_date, process_type_to_str

PURCHASE_PROCESS_TYPES: frozenset[int] = frozenset({70, 73, 74, 75, 198, 203})
TOP_UP_PROCESS_TYPES: frozenset[int] = frozenset({2})

CATEGORY_BY_PROCESS_TYPE: dict[int, TransactionCategory] = {
    **{value: TransactionCategory.PURCHASE for value in PURCHASE_PROCESS_TYPES},
    **{value: TransactionCategory.TOP_UP for value in TOP_UP_PROCESS_TYPES},
}

PROCESS_TYPE_OFFSET = 1
DATE_OFFSET = 4
BALANCE_OFFSET = 10


def _check_block(block: bytes) -> None:
    if len(block) != DATA_BLOCK_SIZE:
        raise ValueError(f"block must be {DATA_BLOCK_SIZE} bytes, got {len(block)}.")


def decode_balance(block: bytes) -> int:
    """Remaining balance in yen, stored little-endian."""
    _check_block(block)
    low = block[BALANCE_OFFSET]
    high = block[BALANCE_OFFSET + 1]
    return low | (high << 8)


def _packed_date(block: bytes) -> int:
    # The date word is read high byte first, unlike the balance.
    _check_block(block)
    return block[DATE_OFFSET + 1] | (block[DATE_OFFSET] << 8)


def decode_date(block: bytes) -> tuple[int, int]:
    _, month, day = int_to_date(_packed_date(block))
    return month, day


def decode_full_date(block: bytes) -> tuple[int, int, int]:
    year, month, day = int_to_date(_packed_date(block))
    return 2000 + year, month, day


def decode_category(block: bytes) -> TransactionCategory:
    _check_block(block)
    return CATEGORY_BY_PROCESS_TYPE.get(
        block[PROCESS_TYPE_OFFSET], TransactionCategory.TRANSIT
    )


def decode_process_label(block: bytes) -> str:
    _check_block(block)
    return process_type_to_str(block[PROCESS_TYPE_OFFSET])
