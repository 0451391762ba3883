import os
import json
import logging
import copy
from typing import Dict, Any

logger = logging.getLogger(__name__)

_SAMPLE_DATA_PATH = os.path.join(os.path.dirname(__file__), "sample_data.json")


def load_sample_data(path: str = _SAMPLE_DATA_PATH) -> Dict[str, Any]:
    """
    Load, validate, and return a deep copy of the static sample dataset.

    The demo backend serves this dataset as-is; it has no database of its own.

    Returns:
        Dict[str, Any]: {"articles": [...], "providers": [...]}
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

        required_keys = ["articles", "providers"]
        for key in required_keys:
            if key not in data:
                raise ValueError(f"Sample data missing required key: {key}")

        return copy.deepcopy(data)

    except (OSError, ValueError) as e:
        logger.error(f"CRITICAL: Failed to load sample data: {e}")
        raise RuntimeError(f"Could not load sample data: {e}") from e
