"""
Checks for the external command-line tools the backup pipeline relies on.
"""

import shutil
from typing import Iterable, List


class DependencyError(Exception):
    """Raised when one or more required tools are not installed."""

    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        super().__init__(f"Missing required tools: {', '.join(self.missing)}")


def find_missing_tools(tools: Iterable[str]) -> List[str]:
    """
    Return every tool that cannot be found on PATH.

    Args:
        tools: Command names to look up

    Returns:
        Missing command names, in the order given
    """
    return [tool for tool in tools if shutil.which(tool) is None]


def check_dependencies(tools: Iterable[str], logger) -> None:
    """
    Verify that all required tools are available.

    Each missing tool is logged separately before failing, so the operator
    can install everything in one go.

    Raises:
        DependencyError: If at least one tool is missing
    """
    logger.info("Checking for required tools...")

    missing = find_missing_tools(tools)
    for tool in missing:
        logger.error(f"Required command '{tool}' is not installed. Please install it to continue.")

    if missing:
        raise DependencyError(missing)
