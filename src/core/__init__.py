"""
Core layer: 공통 인프라.

역할:
- 로깅 설정, scan log
- ID, 해시
"""

from .hashing import compute_hash, hash_target
from .ids import generate_scan_id
from .logging import complete_scan_log, configure_logging, create_scan_log, emit_scan_log

__all__ = [
    # ids
    "generate_scan_id",
    # hashing
    "compute_hash",
    "hash_target",
    # logging
    "configure_logging",
    "create_scan_log",
    "complete_scan_log",
    "emit_scan_log",
]
