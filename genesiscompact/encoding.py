"""Canonical JSON encoding of genesis descriptors.

Mappings keyed by fixed-width binary values (addresses, storage slots) are
always emitted in lexicographic order of the raw key bytes, so the same
logical descriptor encodes to the same bytes no matter how it was built.
"""

import base64
import json
from typing import Callable, Dict, List, Mapping, Tuple, TypeVar

from .genesis import GenesisAccount, GenesisDescriptor
from .utils import (
    ADDRESS_LEN,
    HASH_LEN,
    hex_quantity,
    json_dumps,
    parse_address,
    parse_fixed,
    parse_hash,
    parse_quantity,
    to_hex,
)

V = TypeVar("V")


def sorted_items(mapping: Mapping[bytes, V]) -> List[Tuple[bytes, V]]:
    return sorted(mapping.items(), key=lambda item: item[0])


def encode_mapping(mapping: Mapping[bytes, V], encode_value: Callable[[V], object]) -> Dict[str, object]:
    # dicts keep insertion order, and json.dumps must not re-sort hex keys
    return {to_hex(key): encode_value(value) for key, value in sorted_items(mapping)}


def _optional_quantity(value):
    return None if value is None else hex_quantity(value)


def account_to_dict(account: GenesisAccount) -> dict:
    out: dict = {}
    if account.code_hash is not None:
        out["codeHash"] = to_hex(account.code_hash)
    if account.storage:
        out["storage"] = encode_mapping(account.storage, to_hex)
    if account.balance != 0:
        out["balance"] = hex_quantity(account.balance)
    out["nonce"] = account.nonce
    return out


def descriptor_to_dict(descriptor: GenesisDescriptor) -> dict:
    out = {
        "nonce": descriptor.nonce,
        "timestamp": descriptor.timestamp,
        "extraData": base64.b64encode(descriptor.extra_data).decode("ascii"),
        "gasLimit": descriptor.gas_limit,
        "difficulty": _optional_quantity(descriptor.difficulty),
        "mixHash": to_hex(descriptor.mix_hash),
        "coinbase": to_hex(descriptor.coinbase),
        "number": descriptor.number,
        "gasUsed": descriptor.gas_used,
        "parentHash": to_hex(descriptor.parent_hash),
        "baseFeePerGas": _optional_quantity(descriptor.base_fee),
        "excessBlobGas": descriptor.excess_blob_gas,
        "blobGasUsed": descriptor.blob_gas_used,
        "alloc": encode_mapping(descriptor.alloc, account_to_dict),
    }
    if descriptor.state_hash is not None:
        out["stateHash"] = to_hex(descriptor.state_hash)
    return out


def encode_descriptor(descriptor: GenesisDescriptor) -> bytes:
    return (json_dumps(descriptor_to_dict(descriptor)) + "\n").encode()


def account_from_dict(data: dict) -> GenesisAccount:
    if not isinstance(data, dict):
        raise ValueError("account must be a JSON object")
    code_hash = data.get("codeHash")
    storage = {parse_hash(k): parse_hash(v) for k, v in (data.get("storage") or {}).items()}
    return GenesisAccount(
        nonce=parse_quantity(data.get("nonce")),
        code_hash=parse_hash(code_hash) if code_hash else None,
        storage=storage,
        balance=parse_quantity(data.get("balance")),
    )


def descriptor_from_dict(data: dict) -> GenesisDescriptor:
    if not isinstance(data, dict):
        raise ValueError("descriptor must be a JSON object")
    raw_alloc = data.get("alloc") or {}
    if not isinstance(raw_alloc, dict):
        raise ValueError("alloc must be a JSON object")
    alloc = {parse_address(addr): account_from_dict(account) for addr, account in raw_alloc.items()}
    state_hash = data.get("stateHash")
    return GenesisDescriptor(
        nonce=parse_quantity(data.get("nonce")),
        timestamp=parse_quantity(data.get("timestamp")),
        extra_data=base64.b64decode(data.get("extraData") or ""),
        gas_limit=parse_quantity(data.get("gasLimit")),
        difficulty=parse_quantity(data.get("difficulty"), default=None),
        mix_hash=parse_fixed(data.get("mixHash") or "0x", HASH_LEN),
        coinbase=parse_fixed(data.get("coinbase") or "0x", ADDRESS_LEN),
        number=parse_quantity(data.get("number")),
        gas_used=parse_quantity(data.get("gasUsed")),
        parent_hash=parse_fixed(data.get("parentHash") or "0x", HASH_LEN),
        base_fee=parse_quantity(data.get("baseFeePerGas"), default=None),
        excess_blob_gas=parse_quantity(data.get("excessBlobGas"), default=None),
        blob_gas_used=parse_quantity(data.get("blobGasUsed"), default=None),
        alloc=alloc,
        state_hash=parse_hash(state_hash) if state_hash else None,
    )


def decode_descriptor(raw: bytes) -> GenesisDescriptor:
    return descriptor_from_dict(json.loads(raw.decode()))
