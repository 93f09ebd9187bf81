"""
Backup module for probackup.

This module handles the core backup functionality including:
- External tool checks
- Archive naming and source sizing
- The tar | pv | gzip stream pipeline
- Interrupt handling and execution orchestration
"""

from .executor import BackupExecutor, execute_backup
from .dependencies import check_dependencies, DependencyError
from .compression import generate_archive_filename, get_directory_size, CompressionError
from .pipeline import Stage, StreamPipeline, PipelineResult, PipelineError
from .interrupts import interrupt_guard, BackupInterrupted

__all__ = [
    'BackupExecutor',
    'execute_backup',
    'check_dependencies',
    'DependencyError',
    'generate_archive_filename',
    'get_directory_size',
    'CompressionError',
    'Stage',
    'StreamPipeline',
    'PipelineResult',
    'PipelineError',
    'interrupt_guard',
    'BackupInterrupted',
]
