import gzip
import json
import random

import pytest

from genesiscompact.errors import InputError
from genesiscompact.loader import load_genesis, load_header
from genesiscompact.writer import read_descriptor


def random_value(depth=2):
    choice = random.random()
    if depth <= 0 or choice < 0.3:
        return random.choice([0, -1, "0x", "0xzz", "12", None, True, "0x" + "ab" * 40, [], {}])
    if choice < 0.6:
        return [random_value(depth - 1) for _ in range(random.randint(0, 3))]
    return {
        random.choice(["code", "balance", "nonce", "storage", "0x01", "stateRoot"]): random_value(depth - 1)
        for _ in range(random.randint(1, 4))
    }


@pytest.mark.parametrize("seed", range(40))
def test_fuzz_inputs_fail_cleanly(seed, write_json):
    random.seed(seed)
    genesis = {
        "gasLimit": random_value(0),
        "alloc": {
            random.choice(["0x" + "11" * 20, "0x12", "zz"]): random_value(2)
            for _ in range(random.randint(0, 3))
        },
    }
    try:
        load_genesis(write_json("g.json", genesis))
    except InputError:
        pass

    header = {k: random_value(1) for k in ("stateRoot", "transactionsRoot", "receiptsRoot", "sha3Uncles", "nonce")}
    try:
        load_header(write_json("h.json", header))
    except InputError:
        pass


@pytest.mark.parametrize("seed", range(40))
def test_fuzz_descriptors_fail_cleanly(seed, tmp_path):
    random.seed(seed)
    descriptor = {
        random.choice(["alloc", "extraData", "mixHash", "stateHash", "nonce"]): random_value(2)
        for _ in range(random.randint(1, 4))
    }
    if random.random() < 0.5:
        descriptor["alloc"] = {
            random.choice(["0x" + "11" * 20, "0x12", "zz"]): random_value(2)
            for _ in range(random.randint(0, 3))
        }
    path = tmp_path / "d.json.gz"
    path.write_bytes(gzip.compress(json.dumps(descriptor).encode()))
    try:
        read_descriptor(str(path))
    except InputError:
        pass
