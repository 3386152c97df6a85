from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DotStyleConfig:
    indent: int = 2  # spaces per nesting level in printed output
    encoding: str = "utf-8"
    log_level: str = "WARNING"
