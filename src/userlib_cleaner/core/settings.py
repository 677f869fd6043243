"""
Project-wide constants that are unlikely to change at runtime.
"""

VERSION_COMPONENTS = 4  # Only the first four numeric groups are compared
VERSION_COMPONENT_MAX = 999
VERSION_WEIGHTS = (1_000_000_000, 1_000_000, 1_000, 1)

MODE_AUTO = "auto"
MODE_STRICT = "strict"

EVICTED_MARKER = "Evicted "
EVICTED_BY = " by "

LOG_FORMAT = "%(levelname)s %(name)s - %(message)s"
