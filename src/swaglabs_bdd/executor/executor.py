import asyncio
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from playwright.async_api import async_playwright
from behave.parser import parse_feature, ParserError
from behave.model import Feature, Scenario, Step
from behave.tag_expression import make_tag_expression

from ..core.config import RunnerConfig
from ..core.exceptions import ConfigurationError, ExecutionError, StepDefinitionError, StepTimeoutError
from ..data.test_data import get_url
from .hooks import ScenarioHooks
from .report_collector import ReportCollector
from .step_definitions import StepDefinitionRegistry
from .world import ScenarioWorld

logger = logging.getLogger(__name__)

REPORT_FORMATS = ('html', 'json', 'junit')


class TestExecutor:
    """
    Executes BDD feature files using Playwright

    Every selected scenario gets its own World (browser, context, page);
    up to ``config.parallel`` scenarios run at once on one event loop.
    """

    __test__ = False  # not a pytest test class

    def __init__(
            self,
            config: Optional[RunnerConfig] = None,
            registry: Optional[StepDefinitionRegistry] = None,
            hooks: Optional[ScenarioHooks] = None,
            on_scenario_finished: Optional[Callable[[Dict[str, Any]], None]] = None
    ):
        self.config = config or RunnerConfig.resolve()
        self.config.validate()

        self.env_config = self.config.load_environment_config()
        self.base_url = self._resolve_base_url()

        if registry is None:
            from ..steps import register_all_steps
            registry = StepDefinitionRegistry()
            register_all_steps(registry)
        self.step_registry = registry

        self.hooks = hooks or ScenarioHooks(self.config)
        self.report_collector = ReportCollector(self.config.output_dir)
        self.on_scenario_finished = on_scenario_finished

        self.status = "ready"

    def _resolve_base_url(self) -> str:
        """BASE_URL / --base-url, then the environment file, then test data"""
        if self.config.base_url:
            return self.config.base_url
        if self.env_config.get('base_url'):
            return self.env_config['base_url']
        return get_url('base')

    def list_all_steps(self) -> Dict[str, List[Dict[str, str]]]:
        """Registered step definitions grouped by keyword"""
        grouped: Dict[str, List[Dict[str, str]]] = {}
        for defn in self.step_registry.list_definitions():
            grouped.setdefault(defn['keyword'].upper(), []).append(defn)
        return grouped

    def load_features(self, paths: Iterable[Union[str, Path]]) -> List[Tuple[Path, Feature]]:
        """Parse the given feature files; directories are searched recursively"""
        feature_files: List[Path] = []
        for path in paths:
            path = Path(path)
            if path.is_dir():
                feature_files.extend(sorted(path.glob('**/*.feature')))
            elif path.exists():
                feature_files.append(path)
            else:
                raise ExecutionError(f"Feature file not found: {path}")

        features = []
        for feature_path in feature_files:
            with open(feature_path, 'r', encoding='utf-8') as f:
                feature_content = f.read()
            try:
                feature = parse_feature(feature_content, filename=str(feature_path))
            except ParserError as e:
                raise ExecutionError(f"Could not parse {feature_path}: {e}") from e
            if feature is None:
                logger.warning(f"Skipping empty feature file: {feature_path}")
                continue
            features.append((feature_path, feature))

        logger.info(f"Loaded {len(features)} feature file(s)")
        return features

    @staticmethod
    def matches_tags(tags: Iterable[str], expression: Optional[str]) -> bool:
        """
        Check scenario tags against a tag expression.

        Both the boolean syntax ('@smoke and not (@wip or @external)') and
        the legacy one ('@smoke,@regression ~@wip') are accepted. An empty
        expression selects all.
        """
        if not expression:
            return True

        # Match whether or not the expression spells the '@'
        names = set()
        for tag in tags:
            name = str(tag).lstrip('@')
            names.update((name, '@' + name))
        return make_tag_expression(expression).check(names)

    async def run(self, paths: Optional[Iterable[Union[str, Path]]] = None) -> Dict[str, Any]:
        """Run every selected scenario and return the collected results"""
        features = self.load_features(paths or [self.config.features_dir])

        results: Dict[str, Any] = {
            'features': [],
            'summary': {'total': 0, 'passed': 0, 'failed': 0, 'skipped': 0},
            'start_time': datetime.now().isoformat()
        }

        jobs: List[Tuple[Dict[str, Any], Feature, Scenario]] = []
        for feature_path, feature in features:
            feature_result = {
                'feature': feature.name,
                'file': str(feature_path),
                'tags': [str(tag) for tag in feature.tags],
                'scenarios': [],
                'status': 'passed'
            }
            results['features'].append(feature_result)

            for scenario in feature.walk_scenarios():
                if self.matches_tags(scenario.effective_tags, self.config.tags):
                    jobs.append((feature_result, feature, scenario))
                else:
                    results['summary']['skipped'] += 1

        await self.hooks.before_all(self.base_url)
        try:
            if jobs:
                semaphore = asyncio.Semaphore(self.config.parallel)

                async with async_playwright() as playwright:
                    async def run_one(feature: Feature, scenario: Scenario) -> Dict[str, Any]:
                        async with semaphore:
                            return await self._execute_scenario(playwright, feature, scenario)

                    scenario_results = await asyncio.gather(
                        *(run_one(feature, scenario) for _, feature, scenario in jobs)
                    )

                for (feature_result, _, _), scenario_result in zip(jobs, scenario_results):
                    feature_result['scenarios'].append(scenario_result)
                    results['summary']['total'] += 1
                    if scenario_result['status'] == 'passed':
                        results['summary']['passed'] += 1
                    else:
                        results['summary']['failed'] += 1
                        feature_result['status'] = 'failed'
        finally:
            await self.hooks.after_all()

        results['end_time'] = datetime.now().isoformat()
        return results

    async def execute_feature(self, feature_path: Union[str, Path]) -> Dict[str, Any]:
        """Execute a single feature file"""
        return await self.run([feature_path])

    def _background_steps(self, feature: Feature) -> List[Step]:
        if feature.background:
            return list(feature.background.steps)
        return []

    async def _execute_scenario(self, playwright, feature: Feature, scenario: Scenario) -> Dict[str, Any]:
        """Execute a single scenario in its own World"""
        result: Dict[str, Any] = {
            'name': scenario.name,
            'tags': [str(tag) for tag in scenario.effective_tags],
            'steps': [],
            'status': 'passed',
            'start_time': datetime.now().isoformat()
        }

        world = ScenarioWorld(
            config=self.config,
            base_url=self.base_url,
            playwright=playwright,
            scenario_name=scenario.name,
            env_config=self.env_config
        )
        steps = self._background_steps(feature) + list(scenario.steps)

        try:
            try:
                await self.hooks.before_scenario(world)
            except Exception as e:
                logger.error(f"Setup failed for scenario '{scenario.name}': {e}")
                result['status'] = 'failed'
                result['error'] = f"Scenario setup failed: {e}"

            for step in steps:
                if result['status'] != 'passed':
                    result['steps'].append(self._skipped_step(step))
                    continue

                step_result = await self._execute_step(world, step)
                result['steps'].append(step_result)
                if step_result['status'] != 'passed':
                    result['status'] = 'failed'
                    result['error'] = step_result['error']
        finally:
            try:
                result.update(await self.hooks.after_scenario(world, result['status']))
            except Exception as e:
                logger.error(f"Teardown failed for scenario '{scenario.name}': {e}")
                result['status'] = 'failed'
                result.setdefault('error', f"Scenario teardown failed: {e}")
            result['end_time'] = datetime.now().isoformat()

        if self.on_scenario_finished:
            self.on_scenario_finished(result)
        return result

    def _skipped_step(self, step: Step) -> Dict[str, Any]:
        return {'keyword': step.keyword, 'name': step.name, 'status': 'skipped'}

    async def _execute_step(self, world: ScenarioWorld, step: Step) -> Dict[str, Any]:
        """Execute a single step under the global step timeout"""
        step_result: Dict[str, Any] = {
            'keyword': step.keyword,
            'name': step.name,
            'status': 'passed',
            'start_time': datetime.now().isoformat()
        }

        world.current_step = step
        try:
            step_def = self.step_registry.find_step_definition(step.step_type, step.name)
            if not step_def:
                raise StepDefinitionError(f"Undefined step: {step.keyword} {step.name}")

            try:
                await asyncio.wait_for(
                    step_def.execute(world, step.name),
                    timeout=self.config.step_timeout / 1000
                )
            except asyncio.TimeoutError:
                raise StepTimeoutError(
                    f"Step timed out after {self.config.step_timeout}ms: {step.keyword} {step.name}",
                    timeout_ms=self.config.step_timeout
                )

        except StepDefinitionError as e:
            step_result['status'] = 'undefined'
            step_result['error'] = str(e)
            logger.error(str(e))

        except Exception as e:
            step_result['status'] = 'failed'
            step_result['error'] = str(e) or e.__class__.__name__
            logger.error(f"Step failed: {step.keyword} {step.name}: {step_result['error']}")

        step_result['end_time'] = datetime.now().isoformat()
        return step_result

    def execute(self, paths: Optional[Iterable[Union[str, Path]]] = None) -> Dict[str, Any]:
        """
        Run features and write the configured reports

        Args:
            paths: Feature files or directories (default: config.features_dir)

        Returns:
            Execution results
        """
        results = asyncio.run(self.run(paths))
        self.write_reports(results)
        return results

    def write_reports(self, results: Dict[str, Any]) -> List[str]:
        """Write one report per configured 'kind[:path]' format"""
        written = []
        for fmt in self.config.formats:
            kind, _, path = fmt.partition(':')
            if kind == 'progress':
                continue
            if kind not in REPORT_FORMATS:
                logger.warning(f"Unknown report format ignored: {fmt}")
                continue
            written.append(self.report_collector.generate_report(results, kind, path or None))
        return written

    def validate(self) -> bool:
        """Validate executor configuration"""
        try:
            self.config.validate()
        except ConfigurationError as e:
            logger.error(str(e))
            return False
        return True
