"""
Plan a step scaling policy from a JSON configuration file.
"""

from __future__ import annotations

import argparse
import json
import sys

from pydantic import ValidationError

from app.schemas.step_scaling import StepScalingPlanRequest
from app.services.step_scaling_service import get_step_scaling_plan_service
from scaling.errors import ScalingConfigError


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Render the alarms and adjustments of a step scaling policy.")
    parser.add_argument(
        "--config",
        dest="config",
        required=True,
        help="Path to a JSON file shaped like the /step-scaling/plan request body.",
    )
    parser.add_argument("--indent", dest="indent", type=int, default=2, help="JSON indentation.")
    args = parser.parse_args(argv)

    with open(args.config, "r", encoding="utf-8") as f:
        raw = json.load(f)

    try:
        request = StepScalingPlanRequest.model_validate(raw)
        plan = get_step_scaling_plan_service().plan(request)
    except ValidationError as exc:
        print(json.dumps({"code": "invalid_request", "message": str(exc)}), file=sys.stderr)
        return 2
    except ScalingConfigError as exc:
        print(json.dumps(exc.to_dict()), file=sys.stderr)
        return 2

    print(json.dumps(plan.model_dump(mode="json"), indent=args.indent))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
