import json
from pathlib import Path
from datetime import datetime
from typing import Dict, Any, Optional
import logging
from jinja2 import Template

logger = logging.getLogger(__name__)

HTML_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <title>Test Execution Report - {{ timestamp }}</title>
    <style>
        body { font-family: Arial, sans-serif; margin: 20px; background-color: #f5f5f5; }
        .header { background-color: #333; color: white; padding: 20px; border-radius: 5px; }
        .summary { display: flex; gap: 20px; margin: 20px 0 30px 0; }
        .card { background: white; padding: 20px; border-radius: 5px; flex: 1; text-align: center; }
        .card .number { font-size: 36px; font-weight: bold; }
        .passed { color: #28a745; }
        .failed { color: #dc3545; }
        .skipped, .undefined { color: #ffc107; }
        .feature { background: white; margin-bottom: 20px; border-radius: 5px; }
        .feature h2 { margin: 0; padding: 15px 20px; border-bottom: 1px solid #dee2e6; }
        .scenario { padding: 15px 20px; border-bottom: 1px solid #eee; }
        .step { margin-left: 20px; font-family: monospace; font-size: 14px; }
        .error { background-color: #f8d7da; color: #721c24; padding: 10px; margin: 10px 0 10px 20px; }
        .tag { background-color: #e9ecef; padding: 2px 6px; border-radius: 3px; font-size: 11px; }
    </style>
</head>
<body>
    <div class="header">
        <h1>Test Execution Report</h1>
        <p>Generated: {{ timestamp }} | Duration: {{ duration }}</p>
    </div>

    <div class="summary">
        <div class="card"><h3>Scenarios</h3><div class="number">{{ summary.total }}</div></div>
        <div class="card"><h3>Passed</h3><div class="number passed">{{ summary.passed }}</div></div>
        <div class="card"><h3>Failed</h3><div class="number failed">{{ summary.failed }}</div></div>
        <div class="card"><h3>Pass Rate</h3><div class="number">{{ pass_rate }}%</div></div>
    </div>

    {% for feature in features %}
    <div class="feature">
        <h2 class="{{ feature.status }}">{{ feature.feature }} <small>{{ feature.file }}</small></h2>
        {% for scenario in feature.scenarios %}
        <div class="scenario">
            <strong>{{ scenario.name }}</strong>
            <span class="{{ scenario.status }}">{{ scenario.status|upper }}</span>
            {% for tag in scenario.tags %}<span class="tag">@{{ tag }}</span> {% endfor %}
            {% for step in scenario.steps %}
            <div class="step {{ step.status }}">[{{ step.status }}] {{ step.keyword }} {{ step.name }}</div>
            {% if step.error %}<div class="error">{{ step.error }}</div>{% endif %}
            {% endfor %}
            {% if scenario.screenshot %}<div><a href="{{ scenario.screenshot }}">screenshot</a></div>{% endif %}
            {% if scenario.trace %}<div><a href="{{ scenario.trace }}">trace</a></div>{% endif %}
        </div>
        {% endfor %}
    </div>
    {% endfor %}
</body>
</html>
"""

JUNIT_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<testsuites name="Swag Labs BDD" time="{{ duration }}" tests="{{ total_tests }}" failures="{{ failures }}">
    {% for feature in features %}
    <testsuite name="{{ feature.feature|e }}" tests="{{ feature.scenarios|length }}" failures="{{ feature.failures }}" time="{{ feature.duration }}">
        {% for scenario in feature.scenarios %}
        <testcase classname="{{ feature.feature|replace(' ', '_')|e }}" name="{{ scenario.name|e }}" time="{{ scenario.duration }}">
            {% if scenario.status == 'failed' %}
            <failure message="{{ scenario.error|default('Test failed')|e }}">
                {% for step in scenario.steps %}{% if step.status in ('failed', 'undefined') %}
                {{ step.keyword|e }} {{ step.name|e }}
                Error: {{ step.error|e }}
                {% endif %}{% endfor %}
            </failure>
            {% endif %}
        </testcase>
        {% endfor %}
    </testsuite>
    {% endfor %}
</testsuites>
"""


def _seconds_between(start: Optional[str], end: Optional[str]) -> float:
    if not start or not end:
        return 0
    return (datetime.fromisoformat(end) - datetime.fromisoformat(start)).total_seconds()


class ReportCollector:
    """Writes run results as HTML, JSON or JUnit XML"""

    default_names = {
        'html': 'cucumber-report.html',
        'json': 'cucumber-report.json',
        'junit': 'cucumber-report.xml',
    }

    def __init__(self, output_dir: str = "test-results"):
        self.output_dir = Path(output_dir)

    def generate_report(self, results: Dict[str, Any], format: str = "html",
                        path: Optional[str] = None) -> str:
        """
        Generate test report in specified format

        Args:
            results: Test execution results
            format: Report format (html, json, junit)
            path: Output file; defaults to <output_dir>/cucumber-report.<ext>

        Returns:
            Path to generated report
        """
        if format not in self.default_names:
            raise ValueError(f"Unsupported report format: {format}")

        report_path = Path(path) if path else self.output_dir / self.default_names[format]
        report_path.parent.mkdir(parents=True, exist_ok=True)

        if format == "html":
            content = self._render_html(results)
        elif format == "json":
            content = json.dumps(results, indent=2)
        else:
            content = self._render_junit(results)

        with open(report_path, 'w', encoding='utf-8') as f:
            f.write(content)

        logger.info(f"{format.upper()} report generated: {report_path}")
        return str(report_path)

    def _render_html(self, results: Dict[str, Any]) -> str:
        summary = results.get('summary', {})
        total = summary.get('total', 0)
        passed = summary.get('passed', 0)
        pass_rate = round((passed / total * 100) if total > 0 else 0, 1)

        return Template(HTML_TEMPLATE).render(
            timestamp=datetime.now().strftime('%Y-%m-%d %H:%M:%S'),
            duration=f"{_seconds_between(results.get('start_time'), results.get('end_time')):.1f}s",
            summary=summary,
            pass_rate=pass_rate,
            features=results.get('features', [])
        )

    def _render_junit(self, results: Dict[str, Any]) -> str:
        features = []
        for feature in results.get('features', []):
            scenarios = [
                {**scenario, 'duration': _seconds_between(scenario.get('start_time'), scenario.get('end_time'))}
                for scenario in feature.get('scenarios', [])
            ]
            features.append({
                **feature,
                'scenarios': scenarios,
                'failures': sum(1 for s in scenarios if s.get('status') == 'failed'),
                'duration': sum(s['duration'] for s in scenarios),
            })

        return Template(JUNIT_TEMPLATE).render(
            duration=_seconds_between(results.get('start_time'), results.get('end_time')),
            total_tests=sum(len(f['scenarios']) for f in features),
            failures=sum(f['failures'] for f in features),
            features=features
        )
