from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from .config import EstimatorConfig, load_config
from .errors import DivisionUndefined, EstimatorError, InvalidLoadInput
from .finance import estimate_from_bill, project_for_product
from .plant import size_from_profile

logger = logging.getLogger(__name__)


def load_appliances(path: str | None) -> List[Dict[str, Any]]:
    """Read appliance rows from a JSON list or an object with an "appliances" key."""
    if not path:
        return []
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Appliance JSON not found: {path}")
    data = json.loads(p.read_text())
    if isinstance(data, dict):
        data = data.get("appliances", [])
    if not isinstance(data, list):
        raise InvalidLoadInput("Appliance JSON must be a list of rows")
    return data


def _write_output(path: str | None, payload: Dict[str, Any]) -> None:
    if path:
        Path(path).write_text(json.dumps(payload, indent=2))
        logger.info("Wrote %s", path)


def _cmd_size(args: argparse.Namespace, config: EstimatorConfig) -> int:
    rows = load_appliances(args.loads)
    report = size_from_profile(
        rows,
        args.monthly_units,
        config.sizing,
        panel_wattage=args.panel_wattage,
    )
    _write_output(args.output, report.model_dump())

    rec = report.recommendation
    print(f"Appliance load: {report.load.daily_energy_kwh:.2f} kWh/day ({report.load.appliance_count} rows)")
    if report.bill_daily_kwh is not None:
        print(f"Billed usage: {report.bill_daily_kwh:.2f} kWh/day")
    print(f"Sizing target: {rec.target_daily_kwh:.2f} kWh/day")
    print(f"Required plant: {rec.required_plant_kw:.1f} kW, recommended: {rec.recommended_plant_kw} kW")
    print(f"Panels: {rec.panel_count} x {rec.panel_wattage} W")
    print(f"Roof area: {rec.roof_area_sqft:.0f} sqft")
    print(f"Inverter: {rec.inverter_class}")
    return 0


def _cmd_quick(args: argparse.Namespace, config: EstimatorConfig) -> int:
    est = estimate_from_bill(args.bill, config.heuristics)
    _write_output(args.output, est.model_dump())
    print(f"Annual savings: Rs {est.annual_savings:,.0f}")
    print(f"CO2 offset: {est.carbon_offset_kg_per_year:,.0f} kg/yr")
    return 0


def _cmd_project(args: argparse.Namespace, config: EstimatorConfig) -> int:
    try:
        proj = project_for_product(args.bill, args.price, args.max_savings, config.heuristics)
    except DivisionUndefined as e:
        print("Payback: not calculable", file=sys.stderr)
        logger.debug("Projection undefined: %s", e)
        return 1
    _write_output(args.output, proj.model_dump())
    note = " (capped at system rating)" if proj.capped_by_product else ""
    print(f"Monthly savings: Rs {proj.monthly_savings:,.0f}{note}")
    print(f"Payback: {proj.payback_years:.1f} years")
    print(f"{proj.lifetime_years}-year savings: Rs {proj.lifetime_savings:,.0f}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Rooftop solar sizing and savings estimator.")
    parser.add_argument("--config", "-c", help="Path to estimator config JSON (defaults apply if omitted).")
    parser.add_argument("--output", "-o", help="Path to write the result as JSON.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging.")
    sub = parser.add_subparsers(dest="command", required=True)

    size = sub.add_parser("size", help="Size a plant from appliance loads and/or billed units.")
    size.add_argument("--loads", "-l", help="Path to appliance load JSON.")
    size.add_argument("--monthly-units", type=float, help="Monthly units from the electricity bill (kWh).")
    size.add_argument("--panel-wattage", type=int, help="Panel wattage (W); overrides the config default.")
    size.set_defaults(handler=_cmd_size)

    quick = sub.add_parser("quick", help="Quick savings estimate from a monthly bill.")
    quick.add_argument("--bill", type=float, required=True, help="Monthly electricity bill (Rs).")
    quick.set_defaults(handler=_cmd_quick)

    project = sub.add_parser("project", help="Payback projection for a specific system.")
    project.add_argument("--bill", type=float, required=True, help="Monthly electricity bill (Rs).")
    project.add_argument("--price", type=float, required=True, help="System price (Rs).")
    project.add_argument("--max-savings", type=float, required=True, help="System's rated monthly savings (Rs).")
    project.set_defaults(handler=_cmd_project)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 2
    except ValidationError as e:
        print("Config validation error:", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    try:
        return args.handler(args, config)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        print(f"Input error: {e}", file=sys.stderr)
        return 2
    except EstimatorError as e:
        print(f"Input error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
