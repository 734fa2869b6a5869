"""
Consolidated HTML report.

Reads every JSON run report in a directory (as written by the runner's
``json`` format) and renders one ``html-report/index.html`` with run
metadata and a per-feature breakdown.
"""

import json
import logging
import os
import platform
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from jinja2 import Template

from ..utils.helpers import ensure_directory_exists

logger = logging.getLogger(__name__)

REPORT_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <title>{{ title }}</title>
    <style>
        body { font-family: Arial, sans-serif; margin: 20px; background-color: #f5f5f5; }
        .header { background-color: #333; color: white; padding: 20px; border-radius: 5px; }
        .panels { display: flex; gap: 20px; margin: 20px 0; }
        .panel { background: white; padding: 15px 20px; border-radius: 5px; flex: 1; }
        .panel td { padding: 2px 10px 2px 0; }
        table.features { width: 100%; background: white; border-collapse: collapse; }
        table.features th, table.features td { padding: 8px; border-bottom: 1px solid #eee; text-align: left; }
        .passed { color: #28a745; }
        .failed { color: #dc3545; }
    </style>
</head>
<body>
    <div class="header">
        <h1>{{ title }}</h1>
        <p>{{ totals.scenarios }} scenarios: {{ totals.passed }} passed, {{ totals.failed }} failed</p>
    </div>

    <div class="panels">
        <div class="panel">
            <h3>Metadata</h3>
            <table>
                <tr><td>Browser</td><td>{{ metadata.browser.name }} {{ metadata.browser.version }}</td></tr>
                <tr><td>Device</td><td>{{ metadata.device }}</td></tr>
                <tr><td>Platform</td><td>{{ metadata.platform.name }} {{ metadata.platform.version }}</td></tr>
            </table>
        </div>
        <div class="panel">
            <h3>Run Info</h3>
            <table>
                {% for item in custom_data %}
                <tr><td>{{ item.label }}</td><td>{{ item.value }}</td></tr>
                {% endfor %}
            </table>
        </div>
    </div>

    <table class="features">
        <tr><th>Feature</th><th>Status</th><th>Passed</th><th>Failed</th><th>Total</th></tr>
        {% for feature in features %}
        <tr>
            <td>{{ feature.feature }}</td>
            <td class="{{ feature.status }}">{{ feature.status|upper }}</td>
            <td>{{ feature.passed }}</td>
            <td>{{ feature.failed }}</td>
            <td>{{ feature.total }}</td>
        </tr>
        {% endfor %}
    </table>
</body>
</html>
"""


def build_metadata(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    environ = os.environ if environ is None else environ
    return {
        'browser': {'name': environ.get('BROWSER') or 'chromium', 'version': 'latest'},
        'device': 'Local Machine',
        'platform': {'name': sys.platform, 'version': platform.python_version()},
    }


def build_custom_data(project: str, release: str,
                      environ: Optional[Mapping[str, str]] = None) -> List[Dict[str, str]]:
    environ = os.environ if environ is None else environ
    return [
        {'label': 'Project', 'value': project},
        {'label': 'Release', 'value': release},
        {'label': 'Execution Date', 'value': datetime.now().strftime('%Y-%m-%d %H:%M:%S')},
        {'label': 'Environment', 'value': environ.get('ENV') or 'QA'},
    ]


def load_json_reports(json_dir: Union[str, Path]) -> List[Dict[str, Any]]:
    """Run reports found in json_dir; unreadable files are logged and skipped"""
    reports = []
    for path in sorted(Path(json_dir).glob('*.json')):
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Skipping unreadable report {path}: {e}")
            continue
        if not isinstance(data, dict) or 'features' not in data:
            logger.warning(f"Skipping {path}: not a run report")
            continue
        reports.append(data)
    return reports


def summarize_features(reports: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    features = []
    for report in reports:
        for feature in report.get('features', []):
            scenarios = feature.get('scenarios', [])
            passed = sum(1 for s in scenarios if s.get('status') == 'passed')
            features.append({
                'feature': feature.get('feature', ''),
                'status': feature.get('status', 'passed'),
                'passed': passed,
                'failed': len(scenarios) - passed,
                'total': len(scenarios),
            })
    return features


def generate_report(
        json_dir: Union[str, Path] = "test-results",
        report_path: Optional[Union[str, Path]] = None,
        project: str = "Playwright BDD Framework",
        release: str = "1.0.0",
        environ: Optional[Mapping[str, str]] = None
) -> Path:
    """
    Render the consolidated report.

    Args:
        json_dir: Directory holding JSON run reports
        report_path: Output directory (default: <json_dir>/html-report)
        project: 'Project' label value
        release: 'Release' label value
        environ: Environment used for BROWSER / ENV (default: os.environ)

    Returns:
        Path of the written index.html
    """
    json_dir = ensure_directory_exists(json_dir)
    output_dir = ensure_directory_exists(report_path or json_dir / 'html-report')

    reports = load_json_reports(json_dir)
    if not reports:
        logger.warning(f"No JSON reports found in {json_dir}")

    features = summarize_features(reports)
    totals = {
        'scenarios': sum(f['total'] for f in features),
        'passed': sum(f['passed'] for f in features),
        'failed': sum(f['failed'] for f in features),
    }

    html = Template(REPORT_TEMPLATE).render(
        title='Test Execution Report',
        metadata=build_metadata(environ),
        custom_data=build_custom_data(project, release, environ),
        features=features,
        totals=totals
    )

    index_path = output_dir / 'index.html'
    with open(index_path, 'w', encoding='utf-8') as f:
        f.write(html)

    logger.info(f"HTML report generated: {index_path}")
    return index_path
