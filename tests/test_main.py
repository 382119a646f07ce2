import os
import unittest
from unittest.mock import AsyncMock, patch

import aiohttp

from testing_farm_survey import main as main_module
from testing_farm_survey.application.survey_service import SurveyService
from testing_farm_survey.infrastructure.gitlab_client import GitLabRESTClient


class TestMain(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        dotenv_patcher = patch("testing_farm_survey.main.load_dotenv")
        dotenv_patcher.start()
        self.addCleanup(dotenv_patcher.stop)

        env_patcher = patch.dict(os.environ, {"REQUEST_DELAY": "0"}, clear=True)
        env_patcher.start()
        self.addCleanup(env_patcher.stop)

    async def test_null_group_id_exits_before_enumeration(self) -> None:
        with patch.object(
            GitLabRESTClient, "_get_json", new_callable=AsyncMock, return_value=({"id": None}, '{"id": null}')
        ), patch.object(SurveyService, "fetch_all_projects", new_callable=AsyncMock) as fetch_all:
            with self.assertRaises(SystemExit) as ctx:
                await main_module.main()

        self.assertEqual(ctx.exception.code, 1)
        fetch_all.assert_not_awaited()

    async def test_network_failure_during_enumeration_exits(self) -> None:
        with patch.object(
            GitLabRESTClient, "fetch_group_id", new_callable=AsyncMock, return_value=42
        ), patch.object(
            aiohttp.ClientSession, "get", side_effect=aiohttp.ClientConnectionError("connection reset")
        ) as get, patch.object(
            GitLabRESTClient, "fetch_repository_tree", new_callable=AsyncMock
        ) as fetch_tree:
            with self.assertRaises(SystemExit) as ctx:
                await main_module.main()

        self.assertEqual(ctx.exception.code, 1)
        self.assertEqual(get.call_count, 1)
        self.assertIn("/groups/42/projects", get.call_args.args[0])
        fetch_tree.assert_not_awaited()

    async def test_missing_dependency_exits_before_network(self) -> None:
        os.environ["REQUIRED_COMMANDS"] = "curl, jq"

        with patch(
            "testing_farm_survey.infrastructure.dependencies.shutil.which", return_value=None
        ), patch.object(SurveyService, "run", new_callable=AsyncMock) as run:
            with self.assertRaises(SystemExit) as ctx:
                await main_module.main()

        self.assertEqual(ctx.exception.code, 1)
        run.assert_not_awaited()

    async def test_invalid_delay_exits(self) -> None:
        os.environ["REQUEST_DELAY"] = "soon"

        with patch.object(SurveyService, "run", new_callable=AsyncMock) as run:
            with self.assertRaises(SystemExit) as ctx:
                await main_module.main()

        self.assertEqual(ctx.exception.code, 1)
        run.assert_not_awaited()

    async def test_successful_run_uses_environment(self) -> None:
        os.environ.update({
            "GITLAB_URL": "https://gitlab.example.com",
            "GROUP_PATH": "fedora/rpms",
            "OUTPUT_FILE": "out.json",
        })

        with patch.object(SurveyService, "run", new_callable=AsyncMock) as run, \
                patch("testing_farm_survey.main.SurveyService", wraps=SurveyService) as service_cls:
            await main_module.main()

        run.assert_awaited_once()
        kwargs = service_cls.call_args.kwargs
        self.assertEqual(kwargs["group_path"], "fedora/rpms")
        self.assertEqual(kwargs["request_delay"], 0.0)
        self.assertEqual(kwargs["gitlab_client"].api_url, "https://gitlab.example.com/api/v4")
        self.assertEqual(str(kwargs["report_repository"].output_path), "out.json")
