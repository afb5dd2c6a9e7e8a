#!/usr/bin/env python3
"""
Analyze stock data JSON files from the command line.

Usage:
    python -m stock_agent.cli input.json [-o output.json] [--mock]
    python -m stock_agent.cli a.json b.json c.json -o batch.json
"""
import argparse
import asyncio
import logging
import sys
from typing import Any

from stock_agent.agents.graph import degraded_report
from stock_agent.config import Settings, settings, validate_settings
from stock_agent.exceptions import AnalysisFailedError, ConfigurationError
from stock_agent.services.analysis_service import AnalysisService
from stock_agent.utils.file_handler import read_json_file, read_json_files, write_json_file

logger = logging.getLogger(__name__)


def _print_report_summary(report: dict[str, Any], output_file: str):
    metadata = report.get("metadata") or {}
    print("\n" + "=" * 60)
    print("ANALYSIS SUMMARY")
    print("=" * 60)
    print(f"Stock: {metadata.get('stockName', 'N/A')} ({metadata.get('stockSymbol', 'N/A')})")
    print(f"Overall Score: {report.get('overallScore')}/100")
    print(f"Recommendation: {report.get('recommendation')}")
    print(f"\nFull report saved to: {output_file}")
    print("=" * 60 + "\n")


def _print_batch_summary(results: list[dict[str, Any]], output_file: str):
    success = sum(1 for r in results if r["success"])
    print("\n" + "=" * 60)
    print(f"BATCH SUMMARY: {success}/{len(results)} successful")
    print("=" * 60)
    for idx, result in enumerate(results, 1):
        mark = "✓" if result["success"] else "✗"
        detail = result["data"].get("recommendation") if result["success"] else result["error"]
        print(f"{idx}. {mark} {result['symbol']}: {detail}")
    print(f"\nResults saved to: {output_file}")
    print("=" * 60 + "\n")


async def run(input_files: list[str], output_file: str, config: Settings) -> int:
    service = AnalysisService.from_settings(config)

    if len(input_files) == 1:
        data = read_json_file(input_files[0])

        if isinstance(data, list):
            results = await service.analyze_batch(data)
            write_json_file(output_file, results)
            _print_batch_summary(results, output_file)
            return 0 if all(r["success"] for r in results) else 1

        try:
            report = await service.analyze(data)
        except AnalysisFailedError as e:
            write_json_file(output_file, degraded_report(e.errors))
            print("\nAnalysis failed:\n  " + "\n  ".join(e.errors))
            return 1

        write_json_file(output_file, report)
        _print_report_summary(report, output_file)
        return 0

    # several files: unreadable ones keep their slot in the results
    loaded = read_json_files(input_files)
    readable = [item["data"] for item in loaded if item["success"]]
    analyzed = iter(await service.analyze_batch(readable))

    results = []
    for item in loaded:
        if item["success"]:
            results.append(next(analyzed))
        else:
            results.append({"success": False, "error": item["error"], "symbol": "Unknown"})

    write_json_file(output_file, results)
    _print_batch_summary(results, output_file)
    return 0 if all(r["success"] for r in results) else 1


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="AI stock analysis report generator")
    parser.add_argument("inputs", nargs="+", help="Input JSON file(s); a JSON list runs a batch")
    parser.add_argument("-o", "--output", default="output.json", help="Output JSON file")
    parser.add_argument("--mock", action="store_true", help="Use the offline mock model")
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default from settings)",
    )
    args = parser.parse_args(argv)

    config = settings
    if args.mock:
        config = config.model_copy(update={"mock_mode": True})

    try:
        logging.basicConfig(
            level=(args.log_level or config.log_level).upper(),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
        validate_settings(config)
        return asyncio.run(run(args.inputs, args.output, config))
    except ConfigurationError as e:
        print(f"\n❌ {e}")
        return 1
    except (OSError, ValueError) as e:
        logger.error(f"Analysis run failed: {e}")
        print(f"\n❌ Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
