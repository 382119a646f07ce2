import asyncio
import logging
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional
import aiohttp

from testing_farm_survey.infrastructure.gitlab_client import GitLabRESTClient, DEFAULT_PAGE_SIZE
from testing_farm_survey.infrastructure.acl import GitLabTranslator
from testing_farm_survey.infrastructure.report_store import JsonReportRepository
from testing_farm_survey.domain.exceptions import EmptyGroupException, SurveyException
from testing_farm_survey.domain.markers import FMF_MARKER, has_marker
from testing_farm_survey.domain.models import AnalysisResult, RepositoryDescriptor

logger = logging.getLogger(__name__)

INTER_REQUEST_DELAY = 0.1  # Seconds between requests, courtesy towards the public API
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
BANNER = "=" * 60
SEPARATOR = "-" * 40
POSITIVE_VERDICT = "✓ Uses Testing Farm"
NEGATIVE_VERDICT = "✗ No Testing Farm usage detected"


class SurveyService:
    """
    Service that walks every project of a GitLab group and reports which
    ones carry fmf metadata, i.e. are tested through Testing Farm.

    All requests are issued one after another over a single session, with
    `request_delay` seconds of sleep between consecutive calls.
    """

    def __init__(
            self,
            gitlab_client: GitLabRESTClient,
            report_repository: JsonReportRepository,
            group_path: str,
            marker: str = FMF_MARKER,
            request_delay: float = INTER_REQUEST_DELAY,
            page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self.gitlab_client = gitlab_client
        self.report_repository = report_repository
        self.group_path = group_path
        self.marker = marker
        self.request_delay = request_delay
        self.page_size = page_size

    @staticmethod
    def percentage(part: int, total: int) -> float:
        """Share of `part` in `total`, in percent, rounded half up to one decimal place."""
        share = Decimal(part * 100) / Decimal(total)
        return float(share.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))

    async def run(self) -> Optional[AnalysisResult]:
        """Runs the whole survey: group lookup, enumeration, detection and reporting."""
        logger.info("Starting package analysis...")

        async with aiohttp.ClientSession() as session:
            group_id = await self.resolve_group_id(session)
            projects = await self.fetch_all_projects(session, group_id)
            return await self.analyze_packages(session, projects)

    async def resolve_group_id(self, session) -> int:
        group_id = await self.gitlab_client.fetch_group_id(session, self.group_path)
        logger.info(f"Found group ID: {group_id}")
        return group_id

    async def fetch_all_projects(self, session, group_id: int) -> List[RepositoryDescriptor]:
        """
        Pages through the group's project listing until an empty page comes back.

        Raises:
            EmptyGroupException: if the group lists no projects at all.
        """
        logger.info("Fetching all projects...")
        projects: List[RepositoryDescriptor] = []
        page = 1

        while True:
            raw_projects = await self.gitlab_client.fetch_projects_page(
                session, group_id, page, self.page_size
            )
            if not raw_projects:
                break

            projects.extend(GitLabTranslator.to_descriptor(raw) for raw in raw_projects)
            logger.info(f"Fetched {len(raw_projects)} projects from page {page}")

            page += 1
            await asyncio.sleep(self.request_delay)

        logger.info(f"Total projects found: {len(projects)}")
        if not projects:
            raise EmptyGroupException(group_id)
        return projects

    async def uses_testing_farm(self, session, project: RepositoryDescriptor) -> bool:
        """
        Checks the first page of the project's recursive tree for the marker.
        A tree that cannot be fetched or parsed counts as "not using Testing Farm".
        """
        try:
            raw_entries = await self.gitlab_client.fetch_repository_tree(
                session, project.id, self.page_size
            )
            entries = [GitLabTranslator.to_tree_entry(raw) for raw in raw_entries]
        except (SurveyException, ValueError) as e:
            logger.warning(f"Could not inspect file tree of {project.name}: {e}")
            return False

        return has_marker(entries, self.marker)

    async def analyze_packages(
        self, session, projects: List[RepositoryDescriptor],
    ) -> Optional[AnalysisResult]:
        """
        Runs the marker check on every project in order, then reports and
        persists the outcome. Returns None, writing nothing, when there are no projects.
        """
        total = len(projects)
        if total == 0:
            logger.info("No projects to analyze")
            return None

        logger.info(f"Analyzing {total} packages for Testing Farm usage...")
        logger.info("=" * 42)

        matches: List[RepositoryDescriptor] = []
        for current, project in enumerate(projects, start=1):
            logger.debug(f"[{current}/{total}] Analyzing {project.name}...")
            if await self.uses_testing_farm(session, project):
                verdict = POSITIVE_VERDICT
                matches.append(project)
            else:
                verdict = NEGATIVE_VERDICT

            logger.info(f"[{current}/{total}] Analyzing {project.name}... {verdict}")
            await asyncio.sleep(self.request_delay)

        result = AnalysisResult(
            total_packages=total,
            testing_farm_packages=matches,
            analysis_date=datetime.now().strftime(DATE_FORMAT),
        )
        self.report_results(result)
        return result

    def report_results(self, result: AnalysisResult) -> None:
        """Logs the summary block and writes the JSON artifact."""
        total = result.total_packages
        matches = result.testing_farm_packages

        logger.info(BANNER)
        logger.info("ANALYSIS RESULTS")
        logger.info(BANNER)
        logger.info(f"Total packages analyzed: {total}")
        logger.info(f"Packages using Testing Farm: {len(matches)}")
        if total > 0:
            logger.info(f"Percentage: {self.percentage(len(matches), total):.1f}%")

        if matches:
            logger.info("Packages using Testing Farm:")
            logger.info(SEPARATOR)
            for project in matches:
                logger.info(f"• {project.name}")
                logger.info(f"  URL: {project.web_url}")

        output_path = self.report_repository.save(result)
        logger.info(f"Results saved to {output_path}")
