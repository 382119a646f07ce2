import aiohttp
import asyncio
import json
import logging
from typing import Any, Dict, List, Tuple
from urllib.parse import quote

from testing_farm_survey.domain.exceptions import (
    GitLabRequestException,
    GroupNotFoundException,
    InvalidResponseException,
)

logger = logging.getLogger(__name__)

DEFAULT_GITLAB_URL = "https://gitlab.com"
DEFAULT_PAGE_SIZE = 100

class GitLabRESTClient:
    """
    Anonymous client for the GitLab REST API (v4).
    Only publicly visible groups and projects are reachable.
    """

    def __init__(self, base_url: str = DEFAULT_GITLAB_URL):
        self.headers = {
            "Accept": "application/json",
            "User-Agent": "testing-farm-survey",
        }
        self.api_url = f"{base_url.rstrip('/')}/api/v4"

    async def _get_json(
        self,
        session: aiohttp.ClientSession,
        url: str,
        params: Dict[str, Any] = None,
    ) -> Tuple[Any, str]:
        """
        Issues a single GET and decodes the body.

        Returns:
            Tuple of (decoded JSON, raw body text).

        Raises:
            GitLabRequestException: the request could not be completed.
            InvalidResponseException: the body is not well-formed JSON.
        """
        try:
            async with session.get(url, params=params, headers=self.headers) as response:
                body = await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise GitLabRequestException(url, str(e) or type(e).__name__) from e

        try:
            return json.loads(body), body
        except ValueError as e:
            raise InvalidResponseException(url, body) from e

    async def fetch_group_id(self, session: aiohttp.ClientSession, group_path: str) -> int:
        """
        Resolves a slash-separated group path to the numeric group id.

        Raises:
            GroupNotFoundException: the response has no usable `id`.
        """
        encoded_path = quote(group_path, safe="")
        logger.info(f"Getting group ID for {group_path} (encoded path: {encoded_path})...")

        url = f"{self.api_url}/groups/{encoded_path}"
        try:
            data, body = await self._get_json(session, url)
        except InvalidResponseException as e:
            raise GroupNotFoundException(group_path, e.body) from e

        group_id = data.get('id') if isinstance(data, dict) else None
        if group_id is None or group_id == "":
            raise GroupNotFoundException(group_path, body)

        return int(group_id)

    async def fetch_projects_page(
        self,
        session: aiohttp.ClientSession,
        group_id: int,
        page: int,
        per_page: int = DEFAULT_PAGE_SIZE,
    ) -> List[Dict[str, Any]]:
        """
        Fetches one page of non-archived projects in simplified form.
        An empty list means there are no more pages.
        """
        url = f"{self.api_url}/groups/{group_id}/projects"
        params = {
            "page": page,
            "per_page": per_page,
            "simple": "true",
            "archived": "false",
        }
        data, body = await self._get_json(session, url, params)

        if not isinstance(data, list):
            raise InvalidResponseException(url, body)
        return data

    async def fetch_repository_tree(
        self,
        session: aiohttp.ClientSession,
        project_id: int,
        per_page: int = DEFAULT_PAGE_SIZE,
    ) -> List[Dict[str, Any]]:
        """
        Fetches the recursive file tree of a project. Only the first page is
        requested, so trees larger than `per_page` entries are truncated.
        """
        url = f"{self.api_url}/projects/{project_id}/repository/tree"
        params = {"recursive": "true", "per_page": per_page}
        data, body = await self._get_json(session, url, params)

        if not isinstance(data, list):
            raise InvalidResponseException(url, body)
        return data
