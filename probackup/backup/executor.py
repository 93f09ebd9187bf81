"""
Backup executor - orchestrates the complete backup workflow.

Workflow:
1. Check required tools (tar, pv, gzip)
2. Validate the source directory
3. Pick a timestamped archive filename
4. Stream tar | pv | gzip into the backup directory
5. Keep the archive on success, remove it on failure or interrupt
"""

import os
from datetime import datetime
from typing import Callable, Optional

from probackup import SUCCESS, run_logger
from probackup.config import BackupContext
from probackup.utils.console import print_blank_line, print_separator
from .compression import (
    build_backup_stages, format_size, generate_archive_filename,
    get_archive_size, get_directory_size, CompressionError
)
from .dependencies import check_dependencies, DependencyError
from .interrupts import interrupt_guard, BackupInterrupted
from .pipeline import StreamPipeline, PipelineError, PipelineResult


EXIT_SUCCESS = 0
EXIT_FAILURE = 1


class BackupExecutor:
    """
    Orchestrates the complete backup workflow for one source directory.
    """

    def __init__(self, context: BackupContext, logger, clock: Callable[[], datetime] = datetime.now):
        """
        Initialize backup executor.

        Args:
            context: Resolved source/backup directories and settings
            logger: Run logger (see probackup.run_logger)
            clock: Source of the archive timestamp
        """
        self.context = context
        self.logger = logger
        self.clock = clock
        self.archive_filename = None
        self.destination_file = None
        self.result: Optional[PipelineResult] = None

    def execute(self) -> int:
        """
        Execute the backup.

        Returns:
            Process exit status: 0 on success, 1 on any failure
        """
        print_separator()
        self.logger.info("Starting Professional Backup Script", extra={'style': 'bold yellow'})
        print_separator()

        try:
            check_dependencies(self.context.settings.REQUIRED_TOOLS, self.logger)
        except DependencyError:
            return EXIT_FAILURE

        self.logger.info(f"Source Directory: {self.context.source_dir}", extra={'style': 'default'})
        self.logger.info(f"Backup Location:  {self.context.backup_dir}", extra={'style': 'default'})

        if not os.path.isdir(self.context.source_dir):
            self.logger.error(f"Source directory '{self.context.source_dir}' does not exist.")
            print_separator()
            return EXIT_FAILURE

        self.archive_filename = generate_archive_filename(self.clock(), self.context.settings)
        self.destination_file = self.context.destination_path(self.archive_filename)

        self.logger.info(f"Backup Filename:  {self.archive_filename}", extra={'style': 'default'})
        print_blank_line()

        try:
            with interrupt_guard():
                self.result = self._run_pipeline()
        except (KeyboardInterrupt, BackupInterrupted) as e:
            signal_name = getattr(e, 'signal_name', 'SIGINT')
            print_blank_line()
            self.logger.error(f"Backup interrupted by {signal_name}.")
            return self._fail()
        except (PipelineError, CompressionError) as e:
            print_blank_line()
            self.logger.error(str(e))
            self.logger.error("Backup failed! An error occurred during the process.")
            return self._fail()

        print_blank_line()

        if not self.result.succeeded:
            for stage in self.result.failed_stages:
                self.logger.error(f"Stage '{stage.name}' exited with status {stage.returncode}")
            self.logger.error("Backup failed! An error occurred during the process.")
            return self._fail()

        self.logger.log(SUCCESS, "Backup completed successfully!")
        self.logger.info(f"File saved to: {self.destination_file}", extra={'style': 'green'})
        try:
            archive_size = get_archive_size(self.destination_file)
            self.logger.info(f"Archive size: {format_size(archive_size)}", extra={'style': 'green'})
        except CompressionError as e:
            self.logger.warning(str(e))

        print_separator()
        return EXIT_SUCCESS

    def _run_pipeline(self) -> PipelineResult:
        """Size the source tree, then stream it through tar | pv | gzip."""
        self.logger.info("Archiving files... (Press CTRL+C to cancel)")

        total_size = get_directory_size(self.context.source_dir)
        self.logger.debug(f"Total source size: {total_size} bytes ({format_size(total_size)})")

        stages = build_backup_stages(self.context.source_dir, total_size)
        pipeline = StreamPipeline(stages, self.destination_file)
        return pipeline.run()

    def _fail(self) -> int:
        self._cleanup()
        print_separator()
        return EXIT_FAILURE

    def _cleanup(self):
        """Remove the incomplete archive, if one was started."""
        if self.destination_file and os.path.isfile(self.destination_file):
            try:
                os.remove(self.destination_file)
                self.logger.warning(f"Cleaned up incomplete backup file: {self.destination_file}")
            except OSError as e:
                self.logger.warning(f"Failed to remove incomplete backup file {self.destination_file}: {e}")


def execute_backup(context: BackupContext, clock: Callable[[], datetime] = datetime.now) -> int:
    """
    Run one backup for a resolved context.

    Creates the backup directory, opens the run log and executes the
    workflow.

    Returns:
        Process exit status
    """
    with run_logger(context) as logger:
        executor = BackupExecutor(context, logger, clock=clock)
        return executor.execute()
