import json

import pytest

from genesiscompact.codestore import CodeStore
from genesiscompact.projector import EMPTY_ROOT_HASH, EMPTY_UNCLE_HASH
from genesiscompact.utils import to_hex

CONTRACT_ADDR = "0x4200000000000000000000000000000000000016"
EOA_ADDR = "0x00000000000000000000000000000000000000aa"
PROXY_A = "0x4200000000000000000000000000000000000007"
PROXY_B = "0x4200000000000000000000000000000000000010"
STATE_ROOT = "0x" + "ab" * 32


@pytest.fixture
def genesis_dict():
    return {
        "config": {"chainId": 10},
        "nonce": "0x0",
        "timestamp": "0x6490fdd2",
        "extraData": "0x42",
        "gasLimit": "0x1c9c380",
        "difficulty": "0x0",
        "mixHash": "0x" + "00" * 32,
        "coinbase": "0x4200000000000000000000000000000000000011",
        "number": "0x0",
        "gasUsed": "0x0",
        "parentHash": "0x" + "00" * 32,
        "baseFeePerGas": "0x3b9aca00",
        "alloc": {
            CONTRACT_ADDR: {
                "code": "0x600160015500",
                "balance": "0x0",
                "nonce": "0x1",
            },
            EOA_ADDR: {"balance": "0xde0b6b3a7640000"},
            PROXY_B: {
                "code": "0x6080604052",
                "storage": {"0x01": "0x02", "0x00": "0xff"},
                "balance": "0x0",
            },
            PROXY_A: {"code": "0x6080604052", "balance": "0x0"},
        },
    }


@pytest.fixture
def header_dict():
    return {
        "parentHash": "0x" + "00" * 32,
        "sha3Uncles": to_hex(EMPTY_UNCLE_HASH),
        "miner": "0x4200000000000000000000000000000000000011",
        "stateRoot": STATE_ROOT,
        "transactionsRoot": to_hex(EMPTY_ROOT_HASH),
        "receiptsRoot": to_hex(EMPTY_ROOT_HASH),
        "logsBloom": "0x" + "00" * 256,
        "difficulty": "0x1",
        "number": "0x0",
        "gasLimit": "0xe4e1c0",
        "gasUsed": "0x0",
        "timestamp": "0x6159af19",
        "extraData": "0x",
        "mixHash": "0x" + "00" * 32,
        "nonce": "0x0000000000000000",
        "baseFeePerGas": "0x3b9aca00",
    }


@pytest.fixture
def write_json(tmp_path):
    def _write(name, data):
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def store(tmp_path):
    return CodeStore(str(tmp_path / "bytecodes"), out=None)
