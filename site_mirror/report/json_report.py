# site_mirror/report/json_report.py

"""
JSON report of a SiteMirror run.

Serializes a CrawlSummary together with the run's root and output directory.
"""
import json
from pathlib import Path

from site_mirror.config import MirrorConfig
from site_mirror.crawler.models import CrawlSummary


def render_json(summary: CrawlSummary, config: MirrorConfig, output_path: Path | str) -> Path:
    """
    Write the run report to *output_path* as JSON.

    :param summary: CrawlSummary returned by the crawler
    :param config: configuration the run was started with
    :param output_path: path to the JSON file
    :return: Path of the written file

    Example:
    ```python
    from site_mirror.report.json_report import render_json
    report_path = render_json(summary, cfg, 'reports/mirror.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    data = {
        'root_url': config.root,
        'output_dir': str(config.output_dir),
        'url_list_only': config.url_list_only,
        **summary.as_dict(),
    }

    with output.open('w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return output
