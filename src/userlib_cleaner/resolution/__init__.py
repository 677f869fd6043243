"""
Resolvers that choose one archive per identity.
"""

from userlib_cleaner.resolution.resolvers import (
    EvictionLogResolver,
    Resolver,
    VersionRankResolver,
    build_resolver,
    group_by_identity,
    parse_eviction_log,
)

__all__ = [
    "EvictionLogResolver",
    "Resolver",
    "VersionRankResolver",
    "build_resolver",
    "group_by_identity",
    "parse_eviction_log",
]
