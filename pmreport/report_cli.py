from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path

from .config import load_config
from .report.pdf_assets import AssetLoader
from .report.pdf_builder import generate_maintenance_report, report_data_from_record


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Generate a projector maintenance PDF report from a JSON record"
    )
    parser.add_argument(
        "input", type=Path, help="Input JSON file (service record or report data)"
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output PDF path (default: <input_stem>_report.pdf)",
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to config YAML")
    parser.add_argument(
        "--model-json",
        type=Path,
        default=None,
        help="Optional path to write the mapped report model as JSON",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    if not args.input.exists():
        print(f"Error: input file not found: {args.input}", file=sys.stderr)
        return 1
    try:
        record = json.loads(args.input.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        print(f"Error: input file contains invalid JSON: {exc}", file=sys.stderr)
        return 1
    if not isinstance(record, dict):
        print("Error: input JSON must be an object", file=sys.stderr)
        return 1

    try:
        config = load_config(args.config)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    data = report_data_from_record(record, images_base_url=config.report.images_base_url)
    loader = AssetLoader.from_config(config.report)

    out_pdf = args.output or args.input.with_name(f"{args.input.stem}_report.pdf")
    out_pdf.parent.mkdir(parents=True, exist_ok=True)
    try:
        out_pdf.write_bytes(generate_maintenance_report(data, loader=loader))
    except Exception as exc:
        print(f"Error: PDF generation failed: {exc}", file=sys.stderr)
        return 1
    print(f"wrote report: {out_pdf}")

    if args.model_json is not None:
        args.model_json.parent.mkdir(parents=True, exist_ok=True)
        args.model_json.write_text(
            json.dumps(dataclasses.asdict(data), indent=2), encoding="utf-8"
        )
        print(f"wrote report model: {args.model_json}")
    return 0


def main_entry() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    main_entry()
