import os

import pytest

from genesiscompact.config import CompressConfig
from genesiscompact.errors import ConfigurationError, InputError, InvariantViolation
from genesiscompact.pipeline import compress_genesis
from genesiscompact.utils import parse_hash
from genesiscompact.writer import read_descriptor

from conftest import STATE_ROOT


def _cfg(tmp_path, **kwargs):
    base = dict(superchain_target="sepolia", chain_short_name="awesome", output_root=str(tmp_path / "out"))
    base.update(kwargs)
    return CompressConfig(**base)


def test_full_genesis_run(tmp_path, genesis_dict, write_json, capsys):
    cfg = _cfg(tmp_path, genesis_path=write_json("genesis.json", genesis_dict))
    path = compress_genesis(cfg)

    assert path == os.path.join(str(tmp_path / "out"), "superchain", "extra", "genesis", "sepolia", "awesome.json.gz")
    desc = read_descriptor(path)
    assert len(desc.alloc) == 4
    assert desc.state_hash is None
    assert len(os.listdir(cfg.bytecodes_dir)) == 2

    printed = capsys.readouterr().out
    assert f"using output bytecodes dir: {cfg.bytecodes_dir}" in printed
    assert "2 new bytecodes, 1 already stored" in printed


def test_rerun_is_byte_identical(tmp_path, genesis_dict, write_json):
    cfg = _cfg(tmp_path, genesis_path=write_json("genesis.json", genesis_dict))
    path = compress_genesis(cfg, out=None)
    with open(path, "rb") as f:
        first = f.read()
    genesis_dict["alloc"] = dict(reversed(list(genesis_dict["alloc"].items())))
    cfg.genesis_path = write_json("genesis2.json", genesis_dict)
    compress_genesis(cfg, out=None)
    with open(path, "rb") as f:
        assert f.read() == first


def test_header_only_run(tmp_path, header_dict, write_json):
    cfg = _cfg(tmp_path, genesis_header_path=write_json("header.json", header_dict))
    desc = read_descriptor(compress_genesis(cfg, out=None))
    assert desc.alloc == {}
    assert desc.state_hash == parse_hash(STATE_ROOT)
    assert not os.path.exists(cfg.bytecodes_dir)


def test_header_only_rejection_writes_nothing(tmp_path, header_dict, write_json):
    header_dict["transactionsRoot"] = "0x" + "11" * 32
    cfg = _cfg(tmp_path, genesis_header_path=write_json("header.json", header_dict))
    with pytest.raises(InvariantViolation):
        compress_genesis(cfg, out=None)
    assert not os.path.exists(cfg.descriptor_path)


@pytest.mark.parametrize(
    "kwargs,match",
    [
        (dict(superchain_target=None, genesis_path="g.json"), "superchain-target"),
        (dict(chain_short_name="", genesis_path="g.json"), "chain-short-name"),
        (dict(genesis_path="g.json", genesis_header_path="h.json"), "mutually exclusive"),
        (dict(), "one of"),
    ],
)
def test_configuration_errors(tmp_path, kwargs, match):
    cfg = _cfg(tmp_path, **kwargs)
    with pytest.raises(ConfigurationError, match=match):
        compress_genesis(cfg, out=None)
    assert not os.path.exists(str(tmp_path / "out"))


def test_missing_input(tmp_path):
    cfg = _cfg(tmp_path, genesis_path=str(tmp_path / "nope.json"))
    with pytest.raises(InputError, match="nope.json"):
        compress_genesis(cfg, out=None)
    assert not os.path.exists(str(tmp_path / "out"))


def test_config_from_env(tmp_path, monkeypatch):
    monkeypatch.setenv("SCR_SUPERCHAIN_TARGET", "mainnet")
    monkeypatch.setenv("SCR_CHAIN_SHORT_NAME", "op")
    monkeypatch.setenv("SCR_L2_GENESIS_HEADER", "header.json")
    monkeypatch.setenv("SCR_OUTPUT_ROOT", str(tmp_path))
    cfg = CompressConfig.from_env(chain_short_name="base", genesis_path=None)
    cfg.validate()
    assert cfg.superchain_target == "mainnet"
    assert cfg.chain_short_name == "base"
    assert cfg.header_only
    assert cfg.descriptor_path.endswith(os.path.join("genesis", "mainnet", "base.json.gz"))
