"""Text transformations applied to a transcript before extraction.

Transformations are looked up in an explicit registry keyed by the
closed ``TransformationKind`` enum, so an unknown name is rejected when
the request is validated rather than silently skipped.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from collections.abc import Mapping
from collections.abc import Sequence
from enum import Enum
from types import MappingProxyType

from pydantic import BaseModel
from pydantic import Field
from pydantic import field_validator

logger = logging.getLogger(__name__)

DEFAULT_MAX_LENGTH = 500

_PUNCTUATION_RE = re.compile(r"[!?\.;]")


class TransformationKind(str, Enum):
    """Known transcript transformations."""

    remove_punctuation = "remove_punctuation"
    trim_end = "trim_end"


class TransformationSpec(BaseModel):
    """One transformation step requested by a caller."""

    name: TransformationKind = Field(description="Transformation to apply.")
    parameters: dict[str, str] = Field(
        default_factory=dict,
        description="String parameters, e.g. {'max_length': '500'} for trim_end.",
    )

    @field_validator("parameters", mode="before")
    @classmethod
    def stringify_integers(cls, value: object) -> object:
        # JSON callers send {"max_length": 100}; booleans stay invalid.
        if not isinstance(value, Mapping):
            return value
        return {
            key: str(item) if isinstance(item, int) and not isinstance(item, bool) else item
            for key, item in value.items()
        }


def remove_punctuation(text: str, parameters: Mapping[str, str]) -> str:
    del parameters
    logger.debug("Removing punctuation from input")
    return _PUNCTUATION_RE.sub("", text)


def trim_end(text: str, parameters: Mapping[str, str]) -> str:
    raw = parameters.get("max_length", str(DEFAULT_MAX_LENGTH))
    try:
        max_length = int(raw)
    except ValueError as exc:
        raise ValueError(f"trim_end max_length must be an integer, got {raw!r}") from exc
    if max_length < 0:
        raise ValueError("trim_end max_length must be >= 0")
    logger.debug("Trimming input to at most %d characters", max_length)
    return text[:max_length]


TRANSFORMATIONS: Mapping[TransformationKind, Callable[[str, Mapping[str, str]], str]] = (
    MappingProxyType(
        {
            TransformationKind.remove_punctuation: remove_punctuation,
            TransformationKind.trim_end: trim_end,
        }
    )
)


def default_transformations(max_length: int = DEFAULT_MAX_LENGTH) -> list[TransformationSpec]:
    """Chain applied to assisted extraction when a request names none."""
    return [
        TransformationSpec(name=TransformationKind.remove_punctuation),
        TransformationSpec(
            name=TransformationKind.trim_end,
            parameters={"max_length": str(max_length)},
        ),
    ]


def apply_transformations(text: str, specs: Sequence[TransformationSpec]) -> str:
    """Apply *specs* to *text* in order."""
    for spec in specs:
        text = TRANSFORMATIONS[spec.name](text, spec.parameters)
    return text
