from typing import List

class SurveyException(Exception):
    """Base exception for all survey-related errors. Any of these aborts the run."""
    pass

class MissingDependencyException(SurveyException):
    """Raised when required command-line tools cannot be found on PATH."""
    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        super().__init__(f"Missing required dependencies: {' '.join(self.missing)}")

class GitLabRequestException(SurveyException):
    """Raised when a request to the GitLab API fails at the network level."""
    def __init__(self, url: str, reason: str):
        self.url = url
        super().__init__(f"Request to {url} failed: {reason}")

class GroupNotFoundException(SurveyException):
    """Raised when the group lookup response does not carry a usable id."""
    def __init__(self, group_path: str, body: str):
        self.group_path = group_path
        self.body = body
        super().__init__(f"Could not get group ID for {group_path}. Response: {body}")

class InvalidResponseException(SurveyException):
    """Raised when the GitLab API returns a body that is not the expected JSON."""
    def __init__(self, url: str, body: str):
        self.url = url
        self.body = body
        super().__init__(f"Invalid JSON response from {url}. Response: {body}")

class EmptyGroupException(SurveyException):
    """Raised when a group lists no projects at all."""
    def __init__(self, group_id: int):
        self.group_id = group_id
        super().__init__(
            f"No projects found in group {group_id}. "
            "This might be a permission issue or the group doesn't exist."
        )
