"""Rating weight configuration system.

Externalised, configurable weights for the composite opportunity rating.
"""

import json
import yaml
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, field_validator


class RatingWeights(BaseModel):
    """Configurable weights for the three rating factors.

    All weights must sum to 1.0 so the composite stays on a 0-100 scale.
    """

    match: float = 0.40
    value: float = 0.30
    ease: float = 0.30
    version: str = "1.0"

    model_config = {"frozen": True}

    @field_validator('match', 'value', 'ease')
    @classmethod
    def weight_range(cls, v: float) -> float:
        """Ensure weights are between 0 and 1."""
        if not 0 <= v <= 1:
            raise ValueError(f"Weight must be between 0 and 1, got {v}")
        return v

    def model_post_init(self, __context) -> None:
        """Validate that weights sum to 1.0."""
        total = self.match + self.value + self.ease

        if abs(total - 1.0) > 0.001:
            raise ValueError(
                f"Weights must sum to 1.0, got {total:.3f}. "
                f"(M:{self.match}, V:{self.value}, E:{self.ease})"
            )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "match": self.match,
            "value": self.value,
            "ease": self.ease,
            "version": self.version
        }


# Match 40%, value 30%, ease 30%
DEFAULT_WEIGHTS = RatingWeights(
    match=0.40,
    value=0.30,
    ease=0.30,
    version="1.0"
)


JSON_SUFFIXES = (".json",)
YAML_SUFFIXES = (".yaml", ".yml")


def _weights_format(path: Path) -> str:
    """'json' or 'yaml', from the file extension."""
    suffix = path.suffix.lower()
    if suffix in JSON_SUFFIXES:
        return "json"
    if suffix in YAML_SUFFIXES:
        return "yaml"
    raise ValueError(f"Unsupported file format: {path.suffix}. Use .json, .yaml, or .yml")


def load_weights(filepath: Optional[str] = None) -> RatingWeights:
    """Load rating weights from a JSON or YAML file.

    ``weights_file`` in ``MatchingSettings`` points here; without a path the
    defaults are returned.

    Raises:
        FileNotFoundError: If filepath provided but doesn't exist
        ValueError: If the format is unsupported, the file holds no mapping,
            or the weights are invalid
    """

    if not filepath:
        return DEFAULT_WEIGHTS

    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Weights file not found: {filepath}")

    fmt = _weights_format(path)
    with open(path, "r") as f:
        data = json.load(f) if fmt == "json" else yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Weights file {filepath} must contain a mapping of weights")

    return RatingWeights(**data)


def save_weights(weights: RatingWeights, filepath: str) -> None:
    """Write weights as JSON or YAML, chosen by the file extension."""

    path = Path(filepath)
    fmt = _weights_format(path)
    with open(path, "w") as f:
        if fmt == "json":
            json.dump(weights.to_dict(), f, indent=2)
        else:
            yaml.safe_dump(weights.to_dict(), f, default_flow_style=False)
