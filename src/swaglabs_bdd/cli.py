import logging
from pathlib import Path

import click
import yaml
from dotenv import load_dotenv

from . import __version__
from .core import ConfigManager, RunnerConfig, SwagLabsBDDError
from .executor import TestExecutor
from .reports import generate_report

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


@click.group()
@click.option('--config', '-c', type=click.Path(), help='Configuration file path')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--log-file', type=click.Path(), help='Also write logs to this file')
@click.pass_context
def cli(ctx, config, verbose, log_file):
    """Swag Labs BDD - browser tests for the SauceDemo store"""
    # Setup logging
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT
    )
    if log_file:
        handler = logging.FileHandler(log_file)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(handler)

    # BROWSER, HEADLESS, BASE_URL ... may come from a .env file
    load_dotenv()

    # Load configuration
    config_path = Path(config) if config else None
    ctx.obj = ConfigManager(config_path)


@cli.command()
def version():
    """Show version information"""
    click.echo(f"Swag Labs BDD v{__version__}")


@cli.command()
@click.argument('paths', nargs=-1, type=click.Path())
@click.option('-p', '--profile', default='default', help='Named run profile')
@click.option('-t', '--tags', help='Tag expression, e.g. "@smoke and not @wip"')
@click.option('-b', '--browser', type=click.Choice(['chromium', 'firefox', 'webkit']),
              help='Browser to use')
@click.option('--headless/--headed', default=None, help='Run in headless mode')
@click.option('--parallel', type=int, help='Number of scenarios run at once')
@click.option('-e', '--env', help='Environment name (config/environments/<env>.yaml)')
@click.option('--base-url', help='Base URL of the store')
@click.pass_obj
def run(config_manager, paths, profile, tags, browser, headless, parallel, env, base_url):
    """
    Execute feature files

    Examples:
        swaglabs-bdd run
        swaglabs-bdd run features/login.feature --headless
        swaglabs-bdd run -p firefox -t @smoke
    """
    try:
        config = RunnerConfig.resolve(
            config_manager,
            profile=profile,
            tags=tags,
            browser=browser,
            headless=headless,
            parallel=parallel,
            environment=env,
            base_url=base_url
        )
        show_progress = 'progress' in config.formats

        def on_scenario_finished(result):
            if show_progress:
                click.echo('.' if result['status'] == 'passed' else 'F', nl=False)

        executor = TestExecutor(config, on_scenario_finished=on_scenario_finished)
        results = executor.execute(list(paths) or None)

    except SwagLabsBDDError as e:
        click.echo(f"Error executing tests: {e}", err=True)
        raise SystemExit(1)

    # Display summary
    summary = results.get('summary', {})
    click.echo("\n\nTest Execution Summary:")
    click.echo(f"  Scenarios: {summary.get('total', 0)}")
    click.echo(f"  Passed: {summary.get('passed', 0)}")
    click.echo(f"  Failed: {summary.get('failed', 0)}")
    if summary.get('skipped'):
        click.echo(f"  Not selected: {summary['skipped']}")

    # Display failed scenarios
    if summary.get('failed', 0) > 0:
        click.echo("\nFailed Scenarios:")
        for feature in results.get('features', []):
            if feature['status'] != 'failed':
                continue
            click.echo(f"\n  Feature: {feature['feature']}")
            for scenario in feature.get('scenarios', []):
                if scenario['status'] == 'failed':
                    click.echo(f"    - {scenario['name']}")
                    if scenario.get('error'):
                        click.echo(f"      Error: {scenario['error']}")
                    if scenario.get('screenshot'):
                        click.echo(f"      Screenshot: {scenario['screenshot']}")
                    if scenario.get('trace'):
                        click.echo(f"      Trace: {scenario['trace']}")

    raise SystemExit(0 if summary.get('failed', 0) == 0 else 1)


@cli.command()
@click.option('--json-dir', default='test-results', type=click.Path(), help='Directory with JSON run reports')
@click.option('--output', '-o', type=click.Path(), help='Output directory (default: <json-dir>/html-report)')
@click.pass_obj
def report(config_manager, json_dir, output):
    """Build the consolidated HTML report"""
    index_path = generate_report(
        json_dir,
        output,
        project=config_manager.get('report.project', 'Playwright BDD Framework'),
        release=config_manager.get('report.release', '1.0.0')
    )
    click.echo("HTML Report generated successfully!")
    click.echo(f"Report location: {index_path}")


@cli.command('set-config')
@click.argument('key')
@click.argument('value')
@click.pass_obj
def set_config(config_manager, key, value):
    """
    Store a setting in the configuration file

    Examples:
        swaglabs-bdd set-config runner.step_timeout 90000
        swaglabs-bdd set-config report.release 2.0.0
    """
    # Typed like YAML: numbers and booleans keep their type
    config_manager.set(key, yaml.safe_load(value))
    try:
        config_manager.save()
    except SwagLabsBDDError as e:
        click.echo(f"Error saving configuration: {e}", err=True)
        raise SystemExit(1)
    click.echo(f"Saved {key} to {config_manager.config_path}")


@cli.command()
@click.pass_obj
def steps(config_manager):
    """List all available step definitions"""
    try:
        executor = TestExecutor(RunnerConfig.resolve(config_manager))
    except SwagLabsBDDError as e:
        click.echo(f"Error loading step definitions: {e}", err=True)
        raise SystemExit(1)

    click.echo("Available Step Definitions:")
    click.echo("=" * 60)

    grouped = executor.list_all_steps()
    for keyword in ['GIVEN', 'WHEN', 'THEN', 'STEP']:
        if keyword in grouped:
            click.echo(f"\n{keyword} Steps ({len(grouped[keyword])}):")
            click.echo("-" * 40)
            for defn in grouped[keyword]:
                click.echo(f"  {defn['pattern']}")
                if defn.get('description'):
                    click.echo(f"    {defn['description']}")

    click.echo("\nNote: steps match regardless of the Given/When/Then keyword used")


@cli.command()
@click.option('-p', '--profile', default='default', help='Named run profile')
@click.pass_obj
def validate(config_manager, profile):
    """Validate run configuration"""
    try:
        config = RunnerConfig.resolve(config_manager, profile=profile)
        executor = TestExecutor(config)
    except SwagLabsBDDError as e:
        click.echo(f"✗ Configuration validation failed: {e}", err=True)
        raise SystemExit(1)

    click.echo("✓ Configuration is valid")
    click.echo(f"  Profile: {config.profile}")
    click.echo(f"  Browser: {config.browser} ({'headless' if config.headless else 'headed'})")
    click.echo(f"  Parallel: {config.parallel}")
    click.echo(f"  Environment: {config.environment}")
    click.echo(f"  Base URL: {executor.base_url}")
    click.echo(f"  Step definitions: {len(executor.step_registry.definitions)}")


@cli.command()
@click.argument('feature_file', type=click.Path(exists=True))
@click.pass_obj
def preview(config_manager, feature_file):
    """Preview feature file execution plan"""
    try:
        executor = TestExecutor(RunnerConfig.resolve(config_manager))
        features = executor.load_features([feature_file])
    except SwagLabsBDDError as e:
        click.echo(f"Error previewing {feature_file}: {e}", err=True)
        raise SystemExit(1)

    for _, feature in features:
        click.echo(f"Feature: {feature.name}")

        if feature.background:
            click.echo("\n  Background:")
            for step in feature.background.steps:
                click.echo(f"    {step.keyword} {step.name}")

        total = 0
        for scenario in feature.walk_scenarios():
            total += 1
            click.echo(f"\n  Scenario: {scenario.name}")
            if scenario.effective_tags:
                click.echo(f"    Tags: {' '.join('@' + tag for tag in scenario.effective_tags)}")

            for step in scenario.steps:
                marker = '' if executor.step_registry.find_step_definition(step.step_type, step.name) else '  (undefined)'
                click.echo(f"    {step.keyword} {step.name}{marker}")
                if step.table:
                    click.echo(f"      | {' | '.join(step.table.headings)} |")
                    for row in step.table.rows:
                        click.echo(f"      | {' | '.join(row.cells)} |")

        click.echo(f"\nTotal scenarios: {total}")


def main():
    """Main entry point"""
    cli()


if __name__ == "__main__":
    main()
