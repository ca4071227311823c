import gzip
import os
import tempfile
import zlib
from typing import Callable, Optional

from .errors import StoreIOError
from .utils import keccak256, to_hex

BYTECODE_SUFFIX = ".bin.gz"


def _default_mode() -> int:
    # mkstemp creates 0600 files; published artifacts get the usual umask-filtered mode
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_atomic(path: str, data: bytes) -> None:
    """Write ``data`` to a temp file next to ``path`` and rename it into place."""
    directory = os.path.dirname(path) or "."
    fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".tmp-", suffix=".part")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.chmod(tmp_path, _default_mode())
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


class CodeStore:
    """Append-only directory of gzipped bytecode blobs named by keccak-256 hash.

    The directory is shared between runs and chains. A blob is written the
    first time its hash is seen and never touched again; an existing file
    name is taken as proof the content is already stored.
    """

    def __init__(self, directory: str, out: Optional[Callable[[str], None]] = print):
        try:
            os.makedirs(directory, exist_ok=True)
        except OSError as exc:
            raise StoreIOError(f"failed to make bytecodes dir {directory}: {exc}") from exc
        self.directory = directory
        self.out = out
        self.written = 0
        self.reused = 0

    def path_for(self, code_hash: bytes) -> str:
        return os.path.join(self.directory, to_hex(code_hash) + BYTECODE_SUFFIX)

    def has(self, code_hash: bytes) -> bool:
        path = self.path_for(code_hash)
        try:
            os.stat(path)
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise StoreIOError(
                f"failed to check for pre-existing bytecode {to_hex(code_hash)} at {path}: {exc}"
            ) from exc
        return True

    def put(self, code: bytes) -> bytes:
        code_hash = keccak256(code)
        if self.has(code_hash):
            self.reused += 1
            return code_hash
        path = self.path_for(code_hash)
        try:
            blob = gzip.compress(code, compresslevel=9, mtime=0)
        except (zlib.error, ValueError) as exc:
            raise StoreIOError(f"failed to compress bytecode {to_hex(code_hash)}: {exc}") from exc
        try:
            write_atomic(path, blob)
        except OSError as exc:
            raise StoreIOError(f"failed to write bytecode {to_hex(code_hash)} to {path}: {exc}") from exc
        self.written += 1
        if self.out:
            self.out(f"created new bytecodes file: {os.path.basename(path)}")
        return code_hash

    def get(self, code_hash: bytes, verify: bool = False) -> bytes:
        path = self.path_for(code_hash)
        try:
            with gzip.open(path, "rb") as f:
                code = f.read()
        except (OSError, EOFError, zlib.error) as exc:
            raise StoreIOError(f"failed to read bytecode {to_hex(code_hash)} from {path}: {exc}") from exc
        if verify and keccak256(code) != code_hash:
            raise StoreIOError(
                f"bytecode {to_hex(code_hash)} at {path} hashes to {to_hex(keccak256(code))}"
            )
        return code
