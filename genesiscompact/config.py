import os
from dataclasses import dataclass
from typing import Optional

from .errors import ConfigurationError

ENV_PREFIX = "SCR"

ENV_GENESIS = f"{ENV_PREFIX}_GENESIS"
ENV_L2_GENESIS_HEADER = f"{ENV_PREFIX}_L2_GENESIS_HEADER"
ENV_SUPERCHAIN_TARGET = f"{ENV_PREFIX}_SUPERCHAIN_TARGET"
ENV_CHAIN_SHORT_NAME = f"{ENV_PREFIX}_CHAIN_SHORT_NAME"
ENV_OUTPUT_ROOT = f"{ENV_PREFIX}_OUTPUT_ROOT"


def _env(name: str) -> Optional[str]:
    value = os.getenv(name, "").strip()
    return value or None


@dataclass
class CompressConfig:
    superchain_target: Optional[str] = None
    chain_short_name: Optional[str] = None
    genesis_path: Optional[str] = None
    genesis_header_path: Optional[str] = None
    output_root: str = "."

    @staticmethod
    def from_env(**overrides) -> "CompressConfig":
        """Build a config from ``SCR_*`` variables; non-empty overrides win."""
        cfg = CompressConfig(
            superchain_target=_env(ENV_SUPERCHAIN_TARGET),
            chain_short_name=_env(ENV_CHAIN_SHORT_NAME),
            genesis_path=_env(ENV_GENESIS),
            genesis_header_path=_env(ENV_L2_GENESIS_HEADER),
            output_root=_env(ENV_OUTPUT_ROOT) or os.getcwd(),
        )
        for key, value in overrides.items():
            if not hasattr(cfg, key):
                raise ConfigurationError(f"unknown option: {key}")
            if value:
                setattr(cfg, key, value)
        return cfg

    @property
    def header_only(self) -> bool:
        return not self.genesis_path

    def validate(self) -> None:
        if not self.superchain_target:
            raise ConfigurationError("missing required flag: superchain-target")
        if not self.chain_short_name:
            raise ConfigurationError("missing required flag: chain-short-name")
        if self.genesis_path and self.genesis_header_path:
            raise ConfigurationError("l2-genesis and l2-genesis-header are mutually exclusive")
        if not self.genesis_path and not self.genesis_header_path:
            raise ConfigurationError("one of l2-genesis or l2-genesis-header is required")

    @property
    def extra_dir(self) -> str:
        return os.path.join(self.output_root, "superchain", "extra")

    @property
    def bytecodes_dir(self) -> str:
        return os.path.join(self.extra_dir, "bytecodes")

    @property
    def descriptor_path(self) -> str:
        return os.path.join(
            self.extra_dir, "genesis", self.superchain_target, f"{self.chain_short_name}.json.gz"
        )
