"""
Scenario lifecycle: launch a browser, open a traced context and page before
each scenario, and after it capture a screenshot on failure, save the trace
and close page, context and browser in that order.
"""

import logging
from pathlib import Path
from typing import Any, Dict

from ..core.config import RunnerConfig
from ..utils.helpers import artifact_stem, ensure_directory_exists
from .world import ScenarioWorld

logger = logging.getLogger(__name__)


class ScenarioHooks:
    """Browser setup/teardown around every scenario"""

    def __init__(self, config: RunnerConfig):
        self.config = config
        self.output_dir = Path(config.output_dir)

    def launch_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {
            'headless': self.config.headless,
            'slow_mo': self.config.slow_mo,
        }
        if self.config.browser == 'chromium':
            options['args'] = ['--start-maximized']
        return options

    def context_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {'viewport': dict(self.config.viewport)}
        if self.config.video:
            options['record_video_dir'] = str(ensure_directory_exists(self.output_dir / "videos"))
        return options

    async def before_all(self, base_url: str):
        logger.info("=== Test Execution Started ===")
        logger.info(f"Browser: {self.config.browser}")
        logger.info(f"Headless: {self.config.headless}")
        logger.info(f"Base URL: {base_url}")

    async def after_all(self):
        logger.info("=== Test Execution Completed ===")

    async def before_scenario(self, world: ScenarioWorld):
        """
        Open browser, context (with tracing) and page for the scenario.

        Each resource is registered for closing as soon as it exists, so
        after_scenario releases whatever was opened even if setup fails
        half way.
        """
        logger.info(f"Starting scenario: {world.scenario_name}")

        browser_type = getattr(world.playwright, self.config.browser)
        world.browser = await browser_type.launch(**self.launch_options())
        world.exit_stack.push_async_callback(world.browser.close)

        world.context = await world.browser.new_context(**self.context_options())
        world.exit_stack.push_async_callback(world.context.close)
        world.context.set_default_timeout(self.config.action_timeout)

        await world.context.tracing.start(screenshots=True, snapshots=True)
        world.tracing_started = True

        world.page = await world.context.new_page()
        world.exit_stack.push_async_callback(world.page.close)

    async def after_scenario(self, world: ScenarioWorld, status: str) -> Dict[str, str]:
        """
        Tear the scenario down.

        Returns the artifact paths produced ('screenshot', 'trace').
        Closing always happens, whatever fails before it.
        """
        logger.info(f"Scenario: {world.scenario_name} - Status: {status}")
        stem = artifact_stem(world.scenario_name)
        artifacts: Dict[str, str] = {}

        try:
            if status == 'failed':
                logger.error(f"Scenario failed: {world.scenario_name}")
                if world.page is not None:
                    artifacts.update(await self._capture_failure(world, stem))

            if world.tracing_started:
                trace_path = ensure_directory_exists(self.output_dir / "traces") / f"{stem}.zip"
                await world.context.tracing.stop(path=str(trace_path))
                world.tracing_started = False
                artifacts['trace'] = str(trace_path)
        finally:
            await world.exit_stack.aclose()

        return artifacts

    async def _capture_failure(self, world: ScenarioWorld, stem: str) -> Dict[str, str]:
        path = ensure_directory_exists(self.output_dir / "screenshots") / f"{stem}.png"
        try:
            await world.page.screenshot(path=str(path), full_page=True)
        except Exception as e:
            # The trace still has the final state
            logger.error(f"Could not capture failure screenshot for {world.scenario_name}: {e}")
            return {}
        world.attachments.append(str(path))
        return {'screenshot': str(path)}
