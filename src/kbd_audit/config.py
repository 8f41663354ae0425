"""Settings for dumping change-set documents."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from kbd_audit.runtime.telemetry import ENV_PREFIX

DEBUG_DUMP_SYSTEM_ENV = f"{ENV_PREFIX}DEBUG_DUMP_SYSTEM_BINDINGS"
OUTPUT_DIR_ENV = f"{ENV_PREFIX}OUTPUT_DIR"


@dataclass(frozen=True, slots=True)
class DumpConfig:
    """Values captured once per dump session."""

    debug_dump_system: bool = False
    output_dir: Optional[Path] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DumpConfig":
        env = os.environ if environ is None else environ
        # Only the exact string "true" turns the system dump on.
        debug = env.get(DEBUG_DUMP_SYSTEM_ENV, "false") == "true"
        output_dir = env.get(OUTPUT_DIR_ENV) or None
        return cls(
            debug_dump_system=debug,
            output_dir=Path(output_dir) if output_dir else None,
        )


__all__ = ["DumpConfig", "DEBUG_DUMP_SYSTEM_ENV", "OUTPUT_DIR_ENV"]
