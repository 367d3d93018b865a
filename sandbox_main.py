#!/usr/bin/env python3
"""
Sandbox entrypoint for string-check.
Reads a scan request from stdin JSON, scans the directory, outputs JSON to stdout.
"""

import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from pydantic import ValidationError

from string_check.errors import StringCheckError
from string_check.models import ScanRequest
from string_check.service import run_scan


def main() -> int:
    try:
        input_data = json.load(sys.stdin)
    except json.JSONDecodeError as e:
        print(json.dumps({"error": f"Invalid JSON input: {e}"}))
        return 1

    try:
        request = ScanRequest.model_validate(input_data)
    except ValidationError as e:
        print(
            json.dumps(
                {
                    "error": f"Invalid input: {e.errors()[0]['msg']}",
                    "example": {
                        "path": "./dist",
                        "risk_urls": ["http://bad.example/x"],
                        "replace": False,
                        "dry_run": False,
                    },
                }
            )
        )
        return 1

    try:
        response = run_scan(request)
    except StringCheckError as e:
        print(json.dumps({"error": str(e)}))
        return 1

    print(json.dumps(response.model_dump(mode="json")))
    return 0


if __name__ == "__main__":
    sys.exit(main())
