from dataclasses import dataclass, field
from typing import Dict, Optional

from .utils import (
    ADDRESS_LEN,
    HASH_LEN,
    parse_address,
    parse_bytes,
    parse_fixed,
    parse_hash,
    parse_quantity,
)

ZERO_HASH = b"\x00" * HASH_LEN
ZERO_ADDRESS = b"\x00" * ADDRESS_LEN


@dataclass
class GenesisAccount:
    """Compact account: code is referenced by hash, zero balance is implied."""

    nonce: int = 0
    code_hash: Optional[bytes] = None
    storage: Dict[bytes, bytes] = field(default_factory=dict)
    balance: int = 0


@dataclass
class GenesisDescriptor:
    nonce: int = 0
    timestamp: int = 0
    extra_data: bytes = b""
    gas_limit: int = 0
    difficulty: Optional[int] = None
    mix_hash: bytes = ZERO_HASH
    coinbase: bytes = ZERO_ADDRESS
    number: int = 0
    gas_used: int = 0
    parent_hash: bytes = ZERO_HASH
    base_fee: Optional[int] = None
    excess_blob_gas: Optional[int] = None
    blob_gas_used: Optional[int] = None
    alloc: Dict[bytes, GenesisAccount] = field(default_factory=dict)
    # only set for header-only genesis definitions
    state_hash: Optional[bytes] = None

    @property
    def header_only(self) -> bool:
        return self.state_hash is not None


@dataclass
class SourceAccount:
    code: bytes = b""
    storage: Dict[bytes, bytes] = field(default_factory=dict)
    balance: int = 0
    nonce: int = 0

    @staticmethod
    def from_dict(data: dict) -> "SourceAccount":
        if not isinstance(data, dict):
            raise ValueError("account must be a JSON object")
        storage: Dict[bytes, bytes] = {}
        for key, value in (data.get("storage") or {}).items():
            storage[parse_hash(key)] = parse_hash(value)
        return SourceAccount(
            code=parse_bytes(data.get("code") or ""),
            storage=storage,
            balance=parse_quantity(data.get("balance")),
            nonce=parse_quantity(data.get("nonce")),
        )


@dataclass
class SourceGenesis:
    """A full genesis dump in geth's JSON layout, allocation included."""

    nonce: int = 0
    timestamp: int = 0
    extra_data: bytes = b""
    gas_limit: int = 0
    difficulty: Optional[int] = None
    mix_hash: bytes = ZERO_HASH
    coinbase: bytes = ZERO_ADDRESS
    number: int = 0
    gas_used: int = 0
    parent_hash: bytes = ZERO_HASH
    base_fee: Optional[int] = None
    excess_blob_gas: Optional[int] = None
    blob_gas_used: Optional[int] = None
    alloc: Dict[bytes, SourceAccount] = field(default_factory=dict)
    config: Optional[dict] = None
    state_hash: Optional[bytes] = None

    @staticmethod
    def from_dict(data: dict) -> "SourceGenesis":
        if not isinstance(data, dict):
            raise ValueError("genesis must be a JSON object")
        if "alloc" not in data:
            raise KeyError("alloc")
        alloc: Dict[bytes, SourceAccount] = {}
        for addr, account in (data["alloc"] or {}).items():
            try:
                alloc[parse_address(addr)] = SourceAccount.from_dict(account)
            except (KeyError, ValueError) as exc:
                raise ValueError(f"alloc[{addr}]: {exc}") from exc
        state_hash = data.get("stateHash")
        return SourceGenesis(
            nonce=parse_quantity(data.get("nonce")),
            timestamp=parse_quantity(data.get("timestamp")),
            extra_data=parse_bytes(data.get("extraData") or ""),
            gas_limit=parse_quantity(data.get("gasLimit")),
            difficulty=parse_quantity(data.get("difficulty"), default=None),
            mix_hash=parse_hash(data.get("mixHash") or "0x"),
            coinbase=parse_fixed(data.get("coinbase") or "0x", ADDRESS_LEN),
            number=parse_quantity(data.get("number")),
            gas_used=parse_quantity(data.get("gasUsed")),
            parent_hash=parse_hash(data.get("parentHash") or "0x"),
            base_fee=parse_quantity(data.get("baseFeePerGas"), default=None),
            excess_blob_gas=parse_quantity(data.get("excessBlobGas"), default=None),
            blob_gas_used=parse_quantity(data.get("blobGasUsed"), default=None),
            alloc=alloc,
            config=data.get("config"),
            state_hash=parse_hash(state_hash) if state_hash else None,
        )


@dataclass
class GenesisHeader:
    """Block header at genesis, as published when the allocation is withheld."""

    state_root: bytes
    transactions_root: bytes
    receipts_root: bytes
    uncle_hash: bytes
    parent_hash: bytes = ZERO_HASH
    coinbase: bytes = ZERO_ADDRESS
    difficulty: Optional[int] = None
    number: int = 0
    gas_limit: int = 0
    gas_used: int = 0
    timestamp: int = 0
    extra_data: bytes = b""
    mix_hash: bytes = ZERO_HASH
    nonce: int = 0
    base_fee: Optional[int] = None
    withdrawals_root: Optional[bytes] = None
    blob_gas_used: Optional[int] = None
    excess_blob_gas: Optional[int] = None

    @staticmethod
    def from_dict(data: dict) -> "GenesisHeader":
        if not isinstance(data, dict):
            raise ValueError("header must be a JSON object")
        withdrawals_root = data.get("withdrawalsRoot")
        return GenesisHeader(
            state_root=parse_hash(data["stateRoot"]),
            transactions_root=parse_hash(data["transactionsRoot"]),
            receipts_root=parse_hash(data["receiptsRoot"]),
            uncle_hash=parse_hash(data["sha3Uncles"]),
            parent_hash=parse_hash(data.get("parentHash") or "0x"),
            coinbase=parse_fixed(data.get("miner") or "0x", ADDRESS_LEN),
            difficulty=parse_quantity(data.get("difficulty"), default=None),
            number=parse_quantity(data.get("number")),
            gas_limit=parse_quantity(data.get("gasLimit")),
            gas_used=parse_quantity(data.get("gasUsed")),
            timestamp=parse_quantity(data.get("timestamp")),
            extra_data=parse_bytes(data.get("extraData") or ""),
            mix_hash=parse_hash(data.get("mixHash") or "0x"),
            # 8-byte block nonce, hex encoded
            nonce=int.from_bytes(parse_fixed(data.get("nonce") or "0x", 8), "big"),
            base_fee=parse_quantity(data.get("baseFeePerGas"), default=None),
            withdrawals_root=parse_hash(withdrawals_root) if withdrawals_root else None,
            blob_gas_used=parse_quantity(data.get("blobGasUsed"), default=None),
            excess_blob_gas=parse_quantity(data.get("excessBlobGas"), default=None),
        )
