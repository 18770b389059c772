"""
Diagnostic utilities.

Memory usage logging around heightfield allocation.
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np
import psutil

from shared.constants import HEIGHT_DTYPE

logger = logging.getLogger(__name__)

_MB = 1024 * 1024


def get_memory_info() -> dict[str, Any]:
    """Get process and system memory usage in MB."""
    try:
        process = psutil.Process()
        memory_info = process.memory_info()
        system_memory = psutil.virtual_memory()

        return {
            'process_rss_mb': round(memory_info.rss / _MB, 2),
            'process_vms_mb': round(memory_info.vms / _MB, 2),
            'system_total_mb': round(system_memory.total / _MB, 2),
            'system_available_mb': round(system_memory.available / _MB, 2),
            'system_used_percent': system_memory.percent,
        }
    except psutil.Error as e:
        return {'error': f'Failed to get memory info: {e}'}


def log_memory_usage(context: str = '') -> None:
    """Quick memory usage logging."""
    memory_info = get_memory_info()
    context_label = f' ({context})' if context else ''
    logger.info(
        'Memory usage%s: RSS=%sMB, Available=%sMB',
        context_label,
        memory_info.get('process_rss_mb', 'N/A'),
        memory_info.get('system_available_mb', 'N/A'),
    )


def estimate_heightfield_memory_mb(columns: int, rows: int) -> float:
    """Size of a heightfield buffer in MB."""
    itemsize = np.dtype(HEIGHT_DTYPE).itemsize
    return columns * rows * itemsize / _MB
