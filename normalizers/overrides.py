import json
import logging
import os
from typing import Any, Dict

from normalizers.models import OverrideSet

logger = logging.getLogger(__name__)

DEFAULT_OVERRIDES_FILE = os.path.join("data", "overrides.json")


def parse_overrides(data: Dict[str, Any]) -> OverrideSet:
    return OverrideSet.model_validate(data)


def load_overrides(path: str = DEFAULT_OVERRIDES_FILE) -> OverrideSet:
    """
    Read a versioned override file:
    {"name": "...", "version": "...", "records": [{"name": "...", "born": 1946}]}
    """
    with open(path, "r", encoding="utf-8") as f:
        overrides = parse_overrides(json.load(f))

    logger.info("Loaded %d override records (%s %s)", len(overrides.records), overrides.name, overrides.version)
    return overrides
