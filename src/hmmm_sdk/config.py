"""
HMMM SDK - Configuration
========================

Toolchain settings: file suffixes, memory size, and report length.
Configuration can come from:
- Default values (defined here)
- Environment variables

Environment variables (all optional):
    HMMM_SOURCE_SUFFIX: Suffix of assembly source files (default: .hmmm)
    HMMM_BINARY_SUFFIX: Suffix of compiled files (default: .hb)
    HMMM_MEMORY_SIZE: Instruction memory slots (default: 256)
    HMMM_PREVIEW_LINES: Instructions shown in the compile report (default: 10)
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from hmmm_sdk.cpu.program import MEMORY_SIZE

logger = logging.getLogger(__name__)


@dataclass
class ToolchainConfig:
    """
    Configuration for assembling and decoding HMMM programs.

    Attributes:
        source_suffix: Suffix that marks assembly source input/output
        binary_suffix: Suffix that marks compiled binary input/output
        memory_size: Number of instruction slots in the machine image
        preview_lines: Instructions listed in the compile report before
            skipping to the last one
    """

    source_suffix: str = ".hmmm"
    binary_suffix: str = ".hb"
    memory_size: int = MEMORY_SIZE
    preview_lines: int = 10

    @classmethod
    def from_env(cls) -> "ToolchainConfig":
        """
        Create ToolchainConfig from environment variables.

        Invalid numeric values are ignored with a warning.
        """
        config = cls()

        if suffix := os.environ.get("HMMM_SOURCE_SUFFIX"):
            config.source_suffix = suffix

        if suffix := os.environ.get("HMMM_BINARY_SUFFIX"):
            config.binary_suffix = suffix

        if memory_size := os.environ.get("HMMM_MEMORY_SIZE"):
            try:
                config.memory_size = int(memory_size)
            except ValueError:
                logger.warning(f"Ignoring invalid HMMM_MEMORY_SIZE={memory_size!r}")

        if preview_lines := os.environ.get("HMMM_PREVIEW_LINES"):
            try:
                config.preview_lines = int(preview_lines)
            except ValueError:
                logger.warning(f"Ignoring invalid HMMM_PREVIEW_LINES={preview_lines!r}")

        return config

    def is_source(self, filename: str) -> bool:
        """True if the file name carries the assembly source suffix."""
        return str(filename).endswith(self.source_suffix)

    def is_binary(self, filename: str) -> bool:
        """True if the file name carries the compiled binary suffix."""
        return str(filename).endswith(self.binary_suffix)


# ═══════════════════════════════════════════════════════════════════════════════
# DEFAULT CONFIGURATION INSTANCE
# ═══════════════════════════════════════════════════════════════════════════════

_default_config: Optional[ToolchainConfig] = None


def get_default_config() -> ToolchainConfig:
    """
    Get the default configuration.

    Created from environment variables on first access; can be replaced
    with set_default_config().
    """
    global _default_config
    if _default_config is None:
        _default_config = ToolchainConfig.from_env()
    return _default_config


def set_default_config(config: Optional[ToolchainConfig]) -> None:
    """Set (or with None, reset) the default configuration."""
    global _default_config
    _default_config = config
