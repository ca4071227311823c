import gzip
import os
import zlib
from typing import Callable, Optional

from .codestore import write_atomic
from .encoding import decode_descriptor, encode_descriptor
from .errors import InputError, StoreIOError
from .genesis import GenesisDescriptor


def compress_descriptor(descriptor: GenesisDescriptor) -> bytes:
    # mtime=0 keeps the gzip header free of timestamps so output is reproducible
    return gzip.compress(encode_descriptor(descriptor), compresslevel=9, mtime=0)


def write_descriptor(
    path: str,
    descriptor: GenesisDescriptor,
    out: Optional[Callable[[str], None]] = print,
) -> None:
    if out:
        out(f"using output gzip filepath: {path}")
    try:
        blob = compress_descriptor(descriptor)
    except (zlib.error, ValueError) as exc:
        raise StoreIOError(f"failed to compress descriptor for {path}: {exc}") from exc
    try:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        write_atomic(path, blob)
    except OSError as exc:
        raise StoreIOError(f"failed to write descriptor {path}: {exc}") from exc


def read_descriptor(path: str) -> GenesisDescriptor:
    try:
        with gzip.open(path, "rb") as f:
            raw = f.read()
    except (OSError, EOFError, zlib.error) as exc:
        raise InputError(f"failed to read descriptor {path}: {exc}") from exc
    try:
        return decode_descriptor(raw)
    except (KeyError, ValueError, TypeError, AttributeError) as exc:
        raise InputError(f"failed to decode descriptor {path}: {exc}") from exc
