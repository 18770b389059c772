"""Shared utilities and helpers."""
from shared.diagnostics import (
    estimate_heightfield_memory_mb,
    get_memory_info,
    log_memory_usage,
)

__all__ = [
    'estimate_heightfield_memory_mb',
    'get_memory_info',
    'log_memory_usage',
]
