"""
Command-line entry point.

    probackup -s <SOURCE_DIR> -b <BACKUP_DIR>
"""

import sys

import click

from probackup.backup.executor import execute_backup, EXIT_FAILURE
from probackup.config import BackupContext, get_config
from probackup.utils.console import console


PROG_NAME = 'probackup'


def print_usage(prog_name: str = PROG_NAME):
    console.print(f"[bold]Usage:[/bold] {prog_name} -s <SOURCE_DIR> -b <BACKUP_DIR>", highlight=False)
    console.print("  -s: The source directory to back up.", markup=False, highlight=False)
    console.print("  -b: The directory to store backups in.", markup=False, highlight=False)
    console.print("  -h: Display this help message", markup=False, highlight=False)


@click.command(add_help_option=False)
@click.option('-s', 'source_dir', metavar='SOURCE_DIR', help='The source directory to back up.')
@click.option('-b', 'backup_dir', metavar='BACKUP_DIR', help='The directory to store backups in.')
@click.option('-h', 'show_help', is_flag=True, help='Display this help message.')
def backup(source_dir, backup_dir, show_help):
    """Archive SOURCE_DIR into a timestamped .tar.gz inside BACKUP_DIR."""
    if show_help:
        print_usage()
        return EXIT_FAILURE

    settings = get_config()
    if source_dir is None:
        source_dir = settings.DEFAULT_SOURCE_DIR

    context = BackupContext(
        source_dir=source_dir,
        backup_dir=backup_dir or settings.DEFAULT_BACKUP_DIR,
        settings=settings
    )
    return execute_backup(context)


def main(argv=None) -> int:
    """
    Parse argv and run a backup.

    Returns:
        Exit status (0 on success, 1 otherwise, including -h and usage errors)
    """
    try:
        return backup.main(args=argv, prog_name=PROG_NAME, standalone_mode=False)
    except click.UsageError as e:
        click.echo(f"Error: {e.format_message()}", err=True)
        print_usage()
        return EXIT_FAILURE
    except click.Abort:
        return EXIT_FAILURE


def run():
    """Console script entry point."""
    sys.exit(main())


if __name__ == '__main__':
    run()
