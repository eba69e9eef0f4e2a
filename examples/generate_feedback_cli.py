from __future__ import annotations

import json
import sys

from dotenv import load_dotenv

from appraisal_feedback.feedback import generate_feedback
from appraisal_feedback.models import AppraisalData
from appraisal_feedback.utils.logger import setup_logger


def main():
    if len(sys.argv) != 2:
        print("usage: python examples/generate_feedback_cli.py <appraisal.json>")
        print("  e.g. python examples/generate_feedback_cli.py examples/sample_appraisal.json")
        sys.exit(2)

    load_dotenv(".env", override=False)
    setup_logger(level="INFO")

    with open(sys.argv[1], encoding="utf-8") as fh:
        data = AppraisalData.model_validate(json.load(fh))

    result = generate_feedback(data)
    print(f"[source={result.source} provider={result.provider or '-'}]\n")
    print(result.feedback)


if __name__ == "__main__":
    main()
