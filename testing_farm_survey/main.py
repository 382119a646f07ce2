import asyncio
import os
import sys
import logging
from dotenv import load_dotenv

from testing_farm_survey.infrastructure.gitlab_client import GitLabRESTClient, DEFAULT_GITLAB_URL
from testing_farm_survey.infrastructure.report_store import JsonReportRepository
from testing_farm_survey.infrastructure.dependencies import check_dependencies
from testing_farm_survey.application.survey_service import SurveyService, INTER_REQUEST_DELAY
from testing_farm_survey.domain.exceptions import SurveyException

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)
logger = logging.getLogger(__name__)

DEFAULT_GROUP_PATH = "redhat/centos-stream/rpms"
DEFAULT_OUTPUT_FILE = "testing_farm_packages.json"

async def main():
    # Load environment variables from .env file
    load_dotenv()

    gitlab_url = os.getenv("GITLAB_URL", DEFAULT_GITLAB_URL)
    group_path = os.getenv("GROUP_PATH", DEFAULT_GROUP_PATH)
    output_file = os.getenv("OUTPUT_FILE", DEFAULT_OUTPUT_FILE)
    required_commands = [
        cmd.strip() for cmd in os.getenv("REQUIRED_COMMANDS", "").split(",") if cmd.strip()
    ]

    try:
        request_delay = float(os.getenv("REQUEST_DELAY", INTER_REQUEST_DELAY))
    except ValueError:
        logger.error("REQUEST_DELAY must be a number of seconds.")
        sys.exit(1)

    logger.info("CentOS Stream RPM Package Testing Farm Analysis")
    logger.info("=" * 47)

    survey_service = SurveyService(
        gitlab_client=GitLabRESTClient(base_url=gitlab_url),
        report_repository=JsonReportRepository(output_path=output_file),
        group_path=group_path,
        request_delay=request_delay,
    )

    try:
        # Nothing touches the network before the tooling check passes
        check_dependencies(required_commands)
        await survey_service.run()
    except SurveyException as e:
        logger.error(f"Error: {e}")
        sys.exit(1)
    except Exception as e:
        logger.exception(f"An unexpected error occurred: {e}")
        sys.exit(1)

def run():
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Analysis interrupted by user. Exiting.")
        sys.exit(130)

if __name__ == "__main__":
    run()
