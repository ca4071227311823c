from typing import Optional

from .errors import InvariantViolation
from .genesis import GenesisDescriptor, GenesisHeader
from .utils import keccak256, to_hex

# keccak256(rlp("")), the root of an empty trie
EMPTY_ROOT_HASH = keccak256(b"\x80")
# keccak256(rlp([]))
EMPTY_UNCLE_HASH = keccak256(b"\xc0")

EMPTY_TXS_HASH = EMPTY_ROOT_HASH
EMPTY_RECEIPTS_HASH = EMPTY_ROOT_HASH
EMPTY_WITHDRAWALS_HASH = EMPTY_ROOT_HASH


def _require(field: str, actual: Optional[bytes], expected: bytes, what: str) -> None:
    if actual != expected:
        raise InvariantViolation(
            f"genesis-header based genesis must have no {what}: "
            f"{field} is {to_hex(actual)}, expected {to_hex(expected)}"
        )


def check_header(header: GenesisHeader) -> None:
    _require("transactionsRoot", header.transactions_root, EMPTY_TXS_HASH, "transactions")
    _require("receiptsRoot", header.receipts_root, EMPTY_RECEIPTS_HASH, "receipts")
    _require("sha3Uncles", header.uncle_hash, EMPTY_UNCLE_HASH, "uncle hashes")
    if header.withdrawals_root is not None:
        _require("withdrawalsRoot", header.withdrawals_root, EMPTY_WITHDRAWALS_HASH, "withdrawals")


def project_header(header: GenesisHeader) -> GenesisDescriptor:
    """Build a descriptor that commits to the genesis state by root only."""
    check_header(header)
    return GenesisDescriptor(
        nonce=header.nonce,
        timestamp=header.timestamp,
        extra_data=header.extra_data,
        gas_limit=header.gas_limit,
        difficulty=header.difficulty,
        mix_hash=header.mix_hash,
        coinbase=header.coinbase,
        number=header.number,
        gas_used=header.gas_used,
        parent_hash=header.parent_hash,
        base_fee=header.base_fee,
        excess_blob_gas=header.excess_blob_gas,
        blob_gas_used=header.blob_gas_used,
        alloc={},
        state_hash=header.state_root,
    )
