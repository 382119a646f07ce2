import logging
import shutil
from typing import Iterable

from testing_farm_survey.domain.exceptions import MissingDependencyException

logger = logging.getLogger(__name__)

def check_dependencies(commands: Iterable[str]) -> None:
    """
    Verifies every command is resolvable on PATH. An empty list passes trivially,
    which is the default since HTTP and JSON handling need no external tools.

    Raises:
        MissingDependencyException: listing all missing commands, not only the first.
    """
    logger.info("Checking dependencies...")
    missing = [cmd for cmd in commands if shutil.which(cmd) is None]

    if missing:
        raise MissingDependencyException(missing)
    logger.info("Dependencies OK")
