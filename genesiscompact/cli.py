import argparse
import json
import os

from .codestore import CodeStore
from .config import CompressConfig
from .errors import CompactionError, ConfigurationError
from .expand import check_bytecodes, expand_descriptor, genesis_to_json
from .pipeline import compress_genesis
from .writer import read_descriptor


def cmd_compress_genesis(args: argparse.Namespace) -> None:
    cfg = CompressConfig.from_env(
        superchain_target=args.superchain_target,
        chain_short_name=args.chain_short_name,
        genesis_path=args.l2_genesis,
        genesis_header_path=args.l2_genesis_header,
        output_root=args.output_root,
    )
    path = compress_genesis(cfg)
    print("Genesis written:", path)


def _bytecodes_dir(args: argparse.Namespace) -> str:
    if args.bytecodes_dir:
        return args.bytecodes_dir
    cfg = CompressConfig.from_env(output_root=args.output_root)
    return cfg.bytecodes_dir


def _existing_store(args: argparse.Namespace) -> CodeStore:
    bytecodes_dir = _bytecodes_dir(args)
    if not os.path.isdir(bytecodes_dir):
        raise ConfigurationError(f"bytecodes dir does not exist: {bytecodes_dir}")
    return CodeStore(bytecodes_dir, out=None)


def cmd_expand_genesis(args: argparse.Namespace) -> None:
    descriptor = read_descriptor(args.descriptor)
    store = _existing_store(args)
    genesis = expand_descriptor(descriptor, store, verify=not args.no_verify)
    data = genesis_to_json(genesis)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
            f.write("\n")
        print("Genesis expanded:", args.output)
    else:
        print(json.dumps(data, indent=2))


def cmd_check_bytecodes(args: argparse.Namespace) -> None:
    descriptor = read_descriptor(args.descriptor)
    store = _existing_store(args)
    bad = check_bytecodes(descriptor, store)
    for code_hash in bad:
        print("missing or corrupt bytecode:", code_hash)
    if bad:
        raise SystemExit(f"{len(bad)} bytecode(s) failed verification")
    print("All bytecodes present")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="genesiscompact")
    p.add_argument("--output-root", help="directory holding superchain/extra (env SCR_OUTPUT_ROOT)")
    sub = p.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("compress-genesis", help="write a gzipped genesis descriptor and its bytecodes")
    s.add_argument("--l2-genesis", help="path to genesis.json with full allocation (env SCR_GENESIS)")
    s.add_argument(
        "--l2-genesis-header",
        help="path to the genesis block header, when the state is not published (env SCR_L2_GENESIS_HEADER)",
    )
    s.add_argument("--superchain-target", help="superchain this chain belongs to (env SCR_SUPERCHAIN_TARGET)")
    s.add_argument("--chain-short-name", help="short name of the chain (env SCR_CHAIN_SHORT_NAME)")
    s.set_defaults(func=cmd_compress_genesis)

    s = sub.add_parser("expand-genesis", help="rebuild a full genesis.json from a descriptor")
    s.add_argument("--descriptor", required=True)
    s.add_argument("--bytecodes-dir")
    s.add_argument("--output")
    s.add_argument("--no-verify", action="store_true", help="skip re-hashing bytecodes")
    s.set_defaults(func=cmd_expand_genesis)

    s = sub.add_parser("check-bytecodes", help="verify every referenced bytecode is stored intact")
    s.add_argument("--descriptor", required=True)
    s.add_argument("--bytecodes-dir")
    s.set_defaults(func=cmd_check_bytecodes)

    return p


def main(argv=None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.func(args)
    except CompactionError as exc:
        raise SystemExit(f"{type(exc).__name__}: {exc}") from exc


if __name__ == "__main__":
    main()
