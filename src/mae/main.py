#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from mae.config import Settings
from mae.logging_setup import setup_logging
from mae.pipeline import run_analysis

log = logging.getLogger("mae")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="mae",
        description="Request a music analysis and save its artifacts to disk",
    )
    p.add_argument("music_url", nargs="?", default=None, help="Music source URL (default: MAE_MUSIC_URL or built-in sample)")
    p.add_argument("--out-dir", default=None, help="Output directory (default: MAE_OUTPUT_DIR or analysis_results)")
    p.add_argument("--api-url", default=None, help="Prediction endpoint (default: MAE_API_URL)")
    p.add_argument("--no-visualize", dest="visualize", action="store_false", default=None)
    p.add_argument("--no-sonify", dest="sonify", action="store_false", default=None)
    p.add_argument("--workers", type=int, default=None, help="Artifact writer threads (1 = sequential)")
    p.add_argument("--timeout", type=float, default=None, help="Read timeout in seconds")
    p.add_argument("--env", default=".env", help="dotenv file to load")
    p.add_argument("--log-level", default="INFO")
    p.add_argument("--log-dir", default=None, help="Also write mae.log into this directory")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    load_dotenv(args.env)
    setup_logging(level=args.log_level, log_dir=Path(args.log_dir) if args.log_dir else None)

    try:
        settings = Settings.from_env().with_overrides(
            api_url=args.api_url,
            output_dir=args.out_dir,
            visualize=args.visualize,
            sonify=args.sonify,
            workers=args.workers,
            read_timeout=args.timeout,
        )
        music_url = args.music_url or settings.music_url

        log.info("--- Starting Music Analysis Processor ---")
        run_analysis(music_url, settings)
        log.info("--- Processor Finished ---")
    except Exception:
        log.exception("An unhandled error occurred in main execution")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
