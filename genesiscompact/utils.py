import json
from typing import Any, Optional, Union

from eth_hash.auto import keccak

HASH_LEN = 32
ADDRESS_LEN = 20


def keccak256(data: bytes) -> bytes:
    return keccak(data)


def json_dumps(obj: Any) -> str:
    return json.dumps(obj, separators=(",", ":"))


def to_hex(data: bytes) -> str:
    return "0x" + data.hex()


def hex_quantity(value: int) -> str:
    return hex(value)


def strip_0x(text: str) -> str:
    if text[:2] in ("0x", "0X"):
        return text[2:]
    return text


def parse_bytes(text: str) -> bytes:
    raw = strip_0x(text)
    if len(raw) % 2 == 1:
        raw = "0" + raw
    return bytes.fromhex(raw)


def parse_fixed(text: str, size: int) -> bytes:
    """Decode hex into exactly ``size`` bytes, left-padding short values."""
    data = parse_bytes(text)
    if len(data) > size:
        raise ValueError(f"hex value longer than {size} bytes: {text}")
    return data.rjust(size, b"\x00")


def parse_hash(text: str) -> bytes:
    return parse_fixed(text, HASH_LEN)


def parse_address(text: str) -> bytes:
    data = parse_bytes(text)
    if len(data) != ADDRESS_LEN:
        raise ValueError(f"address must be {ADDRESS_LEN} bytes: {text}")
    return data


def parse_quantity(value: Union[int, str, None], default: Optional[int] = 0) -> Optional[int]:
    """Accept a JSON number, a 0x-hex string or a decimal string."""
    if value is None:
        return default
    if isinstance(value, bool):
        raise ValueError(f"invalid quantity: {value!r}")
    if isinstance(value, int):
        out = value
    elif isinstance(value, str):
        text = value.strip()
        if text[:2] in ("0x", "0X"):
            out = int(text[2:] or "0", 16)
        else:
            out = int(text, 10)
    else:
        raise ValueError(f"invalid quantity: {value!r}")
    if out < 0:
        raise ValueError(f"negative quantity: {value!r}")
    return out
