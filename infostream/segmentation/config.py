"""Tunable thresholds for page segmentation.

Defaults are empirically tuned. Any field can be overridden from the
environment as SEGMENT_<FIELD_NAME>, e.g. SEGMENT_RENDER_TIMEOUT_MS=8000.
Site policies are read from SEGMENT_SITE_POLICIES as a JSON list of objects.
"""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional, Tuple

from dotenv import load_dotenv

from infostream.extraction.fetch import DEFAULT_USER_AGENT
from infostream.segmentation.filters import SitePolicy


logger = logging.getLogger(__name__)

ENV_PREFIX = "SEGMENT_"


@dataclass(frozen=True)
class SegmentationConfig:
    # heading segmenter
    heading_min_len: int = 2
    heading_max_len: int = 30
    sibling_walk_limit: int = 25
    heading_link_min_len: int = 4
    heading_link_max_len: int = 100
    heading_link_cap: int = 30

    # cluster segmenter
    cluster_link_min_len: int = 3
    cluster_weight_density: float = 0.3
    cluster_weight_same_host: float = 0.2
    cluster_weight_date: float = 0.3
    cluster_weight_title: float = 0.2
    cluster_min_score: float = 0.1
    cluster_min_size: int = 3
    cluster_cap: int = 10
    title_like_min_len: int = 10
    title_like_max_len: int = 100
    cluster_label_max_len: int = 50

    # path-pattern segmenter
    pattern_link_min_len: int = 3
    pattern_min_size: int = 3
    pattern_cap: int = 8
    pattern_member_cap: int = 50

    # output
    max_groups: int = 15
    max_articles: int = 50
    min_group_size: int = 2

    # fetch / render
    fetch_connect_timeout: float = 5.0
    fetch_read_timeout: float = 20.0
    fetch_max_bytes: int = 5_000_000
    render_timeout_ms: int = 5000
    render_settle_ms: int = 1000
    user_agent: str = DEFAULT_USER_AGENT
    max_workers: int = 3

    site_policies: Tuple[SitePolicy, ...] = ()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SegmentationConfig":
        if environ is None:
            load_dotenv()
            environ = os.environ
        overrides: Dict[str, Any] = {}
        for f in fields(cls):
            raw = environ.get(ENV_PREFIX + f.name.upper())
            if raw is None or not raw.strip():
                continue
            if f.name == "site_policies":
                policies = _parse_policies(raw)
                if policies is not None:
                    overrides[f.name] = policies
                continue
            value = _coerce(f.type, raw.strip())
            if value is None:
                logger.warning("ignoring invalid %s%s=%r", ENV_PREFIX, f.name.upper(), raw)
                continue
            overrides[f.name] = value
        return replace(cls(), **overrides)


def _coerce(type_name: Any, raw: str) -> Any:
    # annotations are strings under `from __future__ import annotations`
    type_name = getattr(type_name, "__name__", type_name)
    try:
        if type_name == "int":
            return int(raw)
        if type_name == "float":
            return float(raw)
    except ValueError:
        return None
    return raw


def _parse_policies(raw: str) -> Optional[Tuple[SitePolicy, ...]]:
    try:
        items = json.loads(raw)
        return tuple(SitePolicy.from_dict(it) for it in items)
    except (ValueError, TypeError, KeyError, re.error) as e:
        logger.warning("ignoring invalid %sSITE_POLICIES: %s", ENV_PREFIX, e)
        return None
