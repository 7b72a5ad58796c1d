#!/usr/bin/env python3
"""Webpage segmentation worker.

Fetches a page that has no feed of its own, segments it into labeled groups of
article links and prints the JSON payload the feed builder consumes.

Usage:
    python segment_page_worker.py https://example.gov.cn/zwgk/ --mode auto
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv

from infostream.extraction.fetch import FetchError
from infostream.segmentation.config import SegmentationConfig
from infostream.segmentation.orchestrator import MODES, PageSegmenter


logger = logging.getLogger("segment_page_worker")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Segment a webpage into groups of article links.")
    parser.add_argument("url", help="absolute http(s) URL of the page")
    parser.add_argument("--mode", choices=MODES, default="auto")
    parser.add_argument("--no-render", action="store_true", help="skip the headless-browser fallback")
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    segmenter = PageSegmenter(SegmentationConfig.from_env(), render_fallback=not args.no_render)
    try:
        result = segmenter.segment(args.url, args.mode)
    except FetchError as e:
        logger.error("fetch failed: %s", e)
        print(json.dumps({"error": "fetch_failed", "kind": e.kind, "status": e.status}, ensure_ascii=False))
        return 2

    print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    logger.info("[segment] groups=%d total_before_cap=%d fallback=%s", len(result.groups), result.total_groups_before_cap, result.used_fallback)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
