from typing import Any, Dict
from testing_farm_survey.domain.models import RepositoryDescriptor, FileTreeEntry

class GitLabTranslator:
    """
    Anti-corruption layer that translates raw GitLab REST JSON objects into domain models.
    """

    @staticmethod
    def to_descriptor(raw_project: Dict[str, Any]) -> RepositoryDescriptor:
        """
        Transforms a project object from the group projects listing into a RepositoryDescriptor.

        Args:
            raw_project (Dict[str, Any]): The raw JSON object from the `simple=true` listing.

        Returns:
            RepositoryDescriptor: The domain model instance representing the project.
        """
        if raw_project.get('id') is None:
            raise ValueError("id is required to build RepositoryDescriptor.")

        return RepositoryDescriptor(
            name=raw_project.get('name', ''),
            id=raw_project['id'],
            web_url=raw_project.get('web_url', ''),
        )

    @staticmethod
    def to_tree_entry(raw_entry: Dict[str, Any]) -> FileTreeEntry:
        """Transforms one repository tree item. Raises ValueError when it has no name."""
        if not isinstance(raw_entry, dict) or not isinstance(raw_entry.get('name'), str):
            raise ValueError("name is required to build FileTreeEntry.")

        return FileTreeEntry(
            name=raw_entry['name'],
            path=raw_entry.get('path') or '',
            type=raw_entry.get('type') or '',
        )
