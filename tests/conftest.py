"""
Shared pytest fixtures for probackup tests.

This module provides fixtures for:
- Source trees and backup directories
- Configuration and BackupContext
- Pipeline stage substitutes that avoid needing pv
- Fixed clocks for deterministic archive names
"""

import shutil
from datetime import datetime
from unittest.mock import patch

import pytest

from probackup.backup.pipeline import Stage
from probackup.config import BackupContext, ProductionConfig


requires_tar_gzip = pytest.mark.skipif(
    shutil.which('tar') is None or shutil.which('gzip') is None,
    reason="tar and gzip are required"
)

requires_all_tools = pytest.mark.skipif(
    any(shutil.which(tool) is None for tool in ProductionConfig.REQUIRED_TOOLS),
    reason="tar, pv and gzip are required"
)


@pytest.fixture
def temp_files(tmp_path):
    """
    Create a source tree.

    Creates:
    - test_file1.txt
    - test_file2.log
    - nested/test_file3.txt
    - nested/deeper/data.bin
    """
    source = tmp_path / 'source'
    source.mkdir()

    (source / 'test_file1.txt').write_text('Test content 1')
    (source / 'test_file2.log').write_text('Test log content')

    nested_dir = source / 'nested'
    nested_dir.mkdir()
    (nested_dir / 'test_file3.txt').write_text('Nested test content')

    deeper_dir = nested_dir / 'deeper'
    deeper_dir.mkdir()
    (deeper_dir / 'data.bin').write_bytes(bytes(range(256)) * 64)

    return source


@pytest.fixture
def backup_dir(tmp_path):
    """Backup destination that does not exist yet."""
    return tmp_path / 'backups'


@pytest.fixture
def settings():
    return ProductionConfig


@pytest.fixture
def context(temp_files, backup_dir, settings):
    return BackupContext(str(temp_files), str(backup_dir), settings)


@pytest.fixture
def fixed_clock():
    """Clock pinned to 2024-01-15 12:00:00."""
    return lambda: datetime(2024, 1, 15, 12, 0, 0)


@pytest.fixture
def tools_available():
    """Pretend tar, pv and gzip are all on PATH."""
    with patch('probackup.backup.dependencies.shutil.which', side_effect=lambda tool: f'/usr/bin/{tool}'):
        yield


@pytest.fixture
def meter_passthrough(tools_available):
    """
    Replace the pv stage with cat so the real tar/gzip pipeline runs
    without pv being installed.
    """
    def build(source_dir, total_size):
        return [
            Stage('tar', ['tar', '-cf', '-', '-C', source_dir, '.']),
            Stage('pv', ['cat']),
            Stage('gzip', ['gzip']),
        ]

    with patch('probackup.backup.executor.build_backup_stages', side_effect=build) as mock_build:
        yield mock_build


@pytest.fixture
def failing_stages(tools_available):
    """Pipeline whose first stage writes some bytes and then fails."""
    def build(source_dir, total_size):
        return [
            Stage('tar', ['sh', '-c', 'printf partial; exit 2']),
            Stage('pv', ['cat']),
            Stage('gzip', ['cat']),
        ]

    with patch('probackup.backup.executor.build_backup_stages', side_effect=build) as mock_build:
        yield mock_build


def read_log(backup_dir):
    return (backup_dir / 'backup.log').read_text()


def list_archives(backup_dir):
    return sorted(p.name for p in backup_dir.glob('backup-*.tar.gz'))
