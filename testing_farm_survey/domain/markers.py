from typing import Iterable

from testing_farm_survey.domain.models import FileTreeEntry

# fmf metadata (plans, tests, main.fmf) is what Testing Farm reads
FMF_MARKER = ".fmf"

def has_marker(entries: Iterable[FileTreeEntry], marker: str = FMF_MARKER) -> bool:
    """
    Returns True if any entry name ends with the marker, or is the bare marker itself.
    The match is case-sensitive and files and directories are treated alike.
    """
    return any(entry.name == marker or entry.name.endswith(marker) for entry in entries)
