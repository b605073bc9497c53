SERVICE_CODE_HISTORY = 0x090F
READ_WITHOUT_ENCRYPTION = 0x06
DATA_BLOCK_SIZE = 16
IDM_SIZE = 8
MAX_HISTORY_BLOCKS = 12

PROCESS_TYPES: dict[int, str] = {
    0x01: "fare gate exit",
    0x02: "SF top-up",
    0x03: "ticket purchase",
    0x04: "fare adjustment",
    0x05: "entry adjustment",
    0x06: "ticket window exit",
    0x07: "new issue",
    0x08: "deduction",
    0x0D: "bus (flat fare)",
    0x0F: "bus",
    0x11: "reissue",
    0x13: "fare exit",
    0x14: "auto top-up",
    0x1F: "bus top-up",
    0x46: "retail purchase",
    0x48: "point top-up",
    0x49: "retail deposit",
    0x4A: "retail purchase cancel",
    0x4B: "entry and retail",
    0xC6: "retail purchase (cash)",
    0xCB: "entry and retail (cash)",
}


def _lookup_by_mapping(mapping: dict[int, str], value: int, unknown_label: str) -> str:
    return mapping.get(value, f"unknown {unknown_label} (0x{value:02X})")


def process_type_to_str(process_type: int) -> str:
    return _lookup_by_mapping(PROCESS_TYPES, process_type, "process type")


def int_to_date(value: int) -> tuple[int, int, int]:
    year = value >> 9
    month = (value >> 5) & 0x0F
    day = value & 0x1F
    return year, month, day


def format_date(month: int, day: int) -> str:
    return f"{month:02}/{day:02}"


def idm_bytes_to_str(idm: bytes) -> str:
    """Convert an 8-byte IDm to its upper-case hex form."""

    if len(idm) != IDM_SIZE:
        raise ValueError("idm must be 8 bytes.")
    return bytes(idm).hex().upper()
