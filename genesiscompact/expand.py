"""Rebuild a full genesis from a compact descriptor and the bytecode store."""

from typing import List

from .codestore import CodeStore
from .encoding import encode_mapping, sorted_items
from .errors import StoreIOError
from .genesis import GenesisDescriptor, SourceAccount, SourceGenesis
from .utils import hex_quantity, to_hex


def expand_descriptor(descriptor: GenesisDescriptor, store: CodeStore, verify: bool = True) -> SourceGenesis:
    alloc = {}
    for addr, account in sorted_items(descriptor.alloc):
        code = b""
        if account.code_hash is not None:
            code = store.get(account.code_hash, verify=verify)
        alloc[addr] = SourceAccount(
            code=code,
            storage=dict(account.storage),
            balance=account.balance,
            nonce=account.nonce,
        )
    return SourceGenesis(
        nonce=descriptor.nonce,
        timestamp=descriptor.timestamp,
        extra_data=descriptor.extra_data,
        gas_limit=descriptor.gas_limit,
        difficulty=descriptor.difficulty,
        mix_hash=descriptor.mix_hash,
        coinbase=descriptor.coinbase,
        number=descriptor.number,
        gas_used=descriptor.gas_used,
        parent_hash=descriptor.parent_hash,
        base_fee=descriptor.base_fee,
        excess_blob_gas=descriptor.excess_blob_gas,
        blob_gas_used=descriptor.blob_gas_used,
        alloc=alloc,
        state_hash=descriptor.state_hash,
    )


def _account_json(account: SourceAccount) -> dict:
    out: dict = {}
    if account.code:
        out["code"] = to_hex(account.code)
    if account.storage:
        out["storage"] = encode_mapping(account.storage, to_hex)
    out["balance"] = hex_quantity(account.balance)
    if account.nonce:
        out["nonce"] = hex_quantity(account.nonce)
    return out


def genesis_to_json(genesis: SourceGenesis) -> dict:
    """Render a genesis in geth's JSON layout (quantities as 0x-hex)."""
    out: dict = {}
    if genesis.config is not None:
        out["config"] = genesis.config
    out.update({
        "nonce": hex_quantity(genesis.nonce),
        "timestamp": hex_quantity(genesis.timestamp),
        "extraData": to_hex(genesis.extra_data),
        "gasLimit": hex_quantity(genesis.gas_limit),
        "difficulty": hex_quantity(genesis.difficulty or 0),
        "mixHash": to_hex(genesis.mix_hash),
        "coinbase": to_hex(genesis.coinbase),
        "alloc": encode_mapping(genesis.alloc, _account_json),
        "number": hex_quantity(genesis.number),
        "gasUsed": hex_quantity(genesis.gas_used),
        "parentHash": to_hex(genesis.parent_hash),
        "baseFeePerGas": None if genesis.base_fee is None else hex_quantity(genesis.base_fee),
        "excessBlobGas": None if genesis.excess_blob_gas is None else hex_quantity(genesis.excess_blob_gas),
        "blobGasUsed": None if genesis.blob_gas_used is None else hex_quantity(genesis.blob_gas_used),
    })
    if genesis.state_hash is not None:
        out["stateHash"] = to_hex(genesis.state_hash)
    return out


def check_bytecodes(descriptor: GenesisDescriptor, store: CodeStore) -> List[str]:
    """Return the code hashes referenced by ``descriptor`` that are missing or corrupt."""
    seen = set()
    bad: List[str] = []
    for _, account in sorted_items(descriptor.alloc):
        code_hash = account.code_hash
        if code_hash is None or code_hash in seen:
            continue
        seen.add(code_hash)
        try:
            store.get(code_hash, verify=True)
        except StoreIOError:
            bad.append(to_hex(code_hash))
    return bad
