"""
Version encoder.

Turns a free-form version string into a single comparable integer. The
encoding only looks at the first four runs of decimal digits, so
"1.2.3-RC1" ranks as (1, 2, 3, 1) and pre-release qualifiers carry no
special meaning. Components above 999 are clamped, which keeps one oversized
component from spilling into the more significant ones at the cost of
ordering such versions incorrectly among themselves.
"""

import re
from typing import Optional, Tuple

from userlib_cleaner.core.settings import (
    VERSION_COMPONENTS,
    VERSION_COMPONENT_MAX,
    VERSION_WEIGHTS,
)

_DIGIT_RUN = re.compile(r"[0-9]+")


def version_components(version_raw: Optional[str]) -> Tuple[int, ...]:
    """
    Return the padded, clamped numeric components of a version string.

    Args:
        version_raw: Version text, may be empty or None

    Returns:
        Tuple of exactly four integers in [0, 999]
    """
    runs = _DIGIT_RUN.findall(version_raw or "")
    components = [min(int(run), VERSION_COMPONENT_MAX) for run in runs[:VERSION_COMPONENTS]]
    components.extend([0] * (VERSION_COMPONENTS - len(components)))
    return tuple(components)


def encode_version(version_raw: Optional[str]) -> int:
    """
    Encode a version string as an integer rank.

    Versions without digits encode to 0.
    """
    return sum(
        component * weight
        for component, weight in zip(version_components(version_raw), VERSION_WEIGHTS)
    )
