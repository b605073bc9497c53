from .utils import IDM_SIZE, READ_WITHOUT_ENCRYPTION, SERVICE_CODE_HISTORY

SERVICE_COUNT = 1
BLOCK_COUNT = 1
BLOCK_ACCESS_MODE = 0x80


def build_read_command(idm: bytes, block_index: int) -> bytes:
    """Build a Read Without Encryption frame for one history block.

    The frame carries its own total length in the first byte, as expected by
    FeliCa readers.
    """
    if len(idm) != IDM_SIZE:
        raise ValueError("idm must be 8 bytes.")
    if not 0 <= block_index < 256:
        raise ValueError("block_index must be between 0 and 255.")

    encoded = bytearray()
    encoded.append(0x00)
    encoded.append(READ_WITHOUT_ENCRYPTION)
    encoded.extend(idm)
    encoded.append(SERVICE_COUNT)
    encoded.append(SERVICE_CODE_HISTORY & 0xFF)
    encoded.append((SERVICE_CODE_HISTORY >> 8) & 0xFF)
    encoded.append(BLOCK_COUNT)
    encoded.append(BLOCK_ACCESS_MODE)
    encoded.append(block_index & 0xFF)
    encoded[0] = len(encoded)
    return bytes(encoded)
