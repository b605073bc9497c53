import pytest

from suica_history.command import build_read_command


def test_layout(idm):
    command = build_read_command(idm, 3)

    assert command == (
        bytes([16, 0x06]) + idm + bytes([0x01, 0x0F, 0x09, 0x01, 0x80, 0x03])
    )


@pytest.mark.parametrize("block_index", [0, 1, 11, 255])
def test_length_prefix(idm, block_index):
    command = build_read_command(idm, block_index)

    assert len(command) == 16
    assert command[0] == len(command)
    assert command[-1] == block_index


def test_accepts_bytearray_idm(idm):
    assert build_read_command(bytearray(idm), 0)[2:10] == idm


def test_rejects_bad_idm():
    with pytest.raises(ValueError):
        build_read_command(b"\x01\x02\x03", 0)


@pytest.mark.parametrize("block_index", [-1, 256])
def test_rejects_bad_block_index(idm, block_index):
    with pytest.raises(ValueError):
        build_read_command(idm, block_index)
