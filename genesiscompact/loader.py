import json
from typing import Any

from .errors import InputError
from .genesis import GenesisHeader, SourceGenesis


def load_json(path: str) -> Any:
    if not path:
        raise InputError("no input path given")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as exc:
        raise InputError(f"failed to open {path}: {exc}") from exc
    except ValueError as exc:
        raise InputError(f"failed to decode JSON in {path}: {exc}") from exc


def load_genesis(path: str) -> SourceGenesis:
    data = load_json(path)
    try:
        return SourceGenesis.from_dict(data)
    except KeyError as exc:
        raise InputError(f"genesis {path} is missing field {exc}") from exc
    except (ValueError, TypeError, AttributeError) as exc:
        raise InputError(f"genesis {path} failed to load: {exc}") from exc


def load_header(path: str) -> GenesisHeader:
    data = load_json(path)
    try:
        return GenesisHeader.from_dict(data)
    except KeyError as exc:
        raise InputError(f"genesis-header {path} is missing field {exc}") from exc
    except (ValueError, TypeError, AttributeError) as exc:
        raise InputError(f"genesis-header {path} failed to load: {exc}") from exc
