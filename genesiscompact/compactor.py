from .codestore import CodeStore
from .encoding import sorted_items
from .genesis import GenesisAccount, GenesisDescriptor, SourceAccount, SourceGenesis


def compact_account(account: SourceAccount, store: CodeStore) -> GenesisAccount:
    out = GenesisAccount(nonce=account.nonce)
    if len(account.code) > 0:
        out.code_hash = store.put(account.code)
    if account.balance != 0:
        out.balance = account.balance
    if len(account.storage) > 0:
        out.storage = dict(account.storage)
    return out


def compact_genesis(genesis: SourceGenesis, store: CodeStore) -> GenesisDescriptor:
    """Replace every account's bytecode by its hash, storing the code in ``store``.

    The returned descriptor never contains bytecode. Accounts are visited in
    address order so blobs are created in the same order on every run.
    """
    out = GenesisDescriptor(
        nonce=genesis.nonce,
        timestamp=genesis.timestamp,
        extra_data=genesis.extra_data,
        gas_limit=genesis.gas_limit,
        difficulty=genesis.difficulty,
        mix_hash=genesis.mix_hash,
        coinbase=genesis.coinbase,
        number=genesis.number,
        gas_used=genesis.gas_used,
        parent_hash=genesis.parent_hash,
        base_fee=genesis.base_fee,
        excess_blob_gas=genesis.excess_blob_gas,
        blob_gas_used=genesis.blob_gas_used,
    )
    for addr, account in sorted_items(genesis.alloc):
        out.alloc[addr] = compact_account(account, store)
    return out
