from typing import Callable, Optional

from .codestore import CodeStore
from .compactor import compact_genesis
from .config import CompressConfig
from .genesis import GenesisDescriptor
from .loader import load_genesis, load_header
from .projector import project_header
from .writer import write_descriptor


def build_descriptor(cfg: CompressConfig, out: Optional[Callable[[str], None]] = print) -> GenesisDescriptor:
    if cfg.header_only:
        # Without published state only the header chain can be verified from
        # genesis; the state itself has to be synced from a later block.
        header = load_header(cfg.genesis_header_path)
        return project_header(header)

    genesis = load_genesis(cfg.genesis_path)
    if out:
        out(f"using output bytecodes dir: {cfg.bytecodes_dir}")
    store = CodeStore(cfg.bytecodes_dir, out=out)
    descriptor = compact_genesis(genesis, store)
    if out:
        out(
            f"compacted {len(descriptor.alloc)} accounts: "
            f"{store.written} new bytecodes, {store.reused} already stored"
        )
    return descriptor


def compress_genesis(cfg: CompressConfig, out: Optional[Callable[[str], None]] = print) -> str:
    """Run one compaction and return the path of the written descriptor."""
    cfg.validate()
    descriptor = build_descriptor(cfg, out=out)
    path = cfg.descriptor_path
    write_descriptor(path, descriptor, out=out)
    return path
