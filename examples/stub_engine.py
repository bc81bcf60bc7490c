#!/usr/bin/env python3
"""
Deterministic stand-in for the Lighthouse CLI.

Accepts the same arguments lighthouse-batch passes to the real engine and
writes a report whose scores are derived from the URL, so repeated runs
produce identical output. URLs containing "fail" exit with status 1.

Usage:
    lighthouse-batch --engine "python examples/stub_engine.py" -s example.com
"""

import hashlib
import json
import sys
from pathlib import Path

JSON_EXT = ".report.json"
CATEGORIES = ["performance", "accessibility", "best-practices", "seo"]


def parse_args(argv):
    url = None
    outputs = []
    output_path = None
    index = 0
    while index < len(argv):
        arg = argv[index]
        if arg == "--output":
            outputs.append(argv[index + 1])
            index += 2
            continue
        if arg == "--output-path":
            output_path = argv[index + 1]
            index += 2
            continue
        if not arg.startswith("--") and url is None:
            url = arg
        index += 1
    return url, outputs, output_path


def build_report(url):
    digest = hashlib.sha1(url.encode("utf-8")).digest()
    categories = {
        name: {"id": name, "title": name.title(), "score": round(0.5 + digest[i] / 510, 2)}
        for i, name in enumerate(CATEGORIES)
    }
    timings = {
        "first-contentful-paint": 800 + digest[4] * 10,
        "largest-contentful-paint": 1500 + digest[5] * 10,
        "total-blocking-time": digest[6],
        "speed-index": 1200 + digest[7] * 10,
        "cumulative-layout-shift": digest[8] / 1000,
    }
    audits = {
        audit_id: {"id": audit_id, "displayValue": str(value), "numericValue": value}
        for audit_id, value in timings.items()
    }
    return {"lighthouseVersion": "stub", "requestedUrl": url, "categories": categories, "audits": audits}


def main(argv):
    url, outputs, output_path = parse_args(argv)
    if not url or not output_path:
        print("usage: stub_engine.py <url> --output json --output-path <path>", file=sys.stderr)
        return 2
    if "fail" in url:
        print(f"Runtime error encountered: unable to load {url}", file=sys.stderr)
        return 1

    report = json.dumps(build_report(url), indent=2, sort_keys=True)
    if len(outputs) > 1:
        base = Path(output_path)
        base.with_name(base.name + JSON_EXT).write_text(report, encoding="utf-8")
        for extension in outputs:
            if extension != "json":
                target = base.with_name(f"{base.name}.report.{extension}")
                target.write_text(f"stub {extension} report for {url}\n", encoding="utf-8")
    else:
        Path(output_path).write_text(report, encoding="utf-8")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
