import dataclasses

import pytest

from suica_history.models import CardSnapshot, ReadStop, Transaction, TransactionCategory
from suica_history.utils import format_date, idm_bytes_to_str


def test_transaction_str():
    transaction = Transaction((4, 1), TransactionCategory.TRANSIT, -170, 830)

    assert str(transaction) == "04/01 transit -170 -> 830"
    assert (transaction.month, transaction.day) == (4, 1)


def test_snapshot_is_immutable():
    snapshot = CardSnapshot(balance=0, history=())

    with pytest.raises(dataclasses.FrozenInstanceError):
        snapshot.balance = 1
    assert snapshot.read_stop is ReadStop.END_OF_LOG
    assert not snapshot.is_partial


def test_format_date():
    assert format_date(1, 2) == "01/02"


def test_idm_bytes_to_str(idm):
    assert idm_bytes_to_str(idm) == "0123456789ABCDEF"
    with pytest.raises(ValueError):
        idm_bytes_to_str(b"\x01")
