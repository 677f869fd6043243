"""
Tests for the version-rank and eviction-log resolvers.
"""

import itertools

import pytest

from userlib_cleaner.resolution import (
    EvictionLogResolver,
    VersionRankResolver,
    build_resolver,
    group_by_identity,
    parse_eviction_log,
)
from userlib_cleaner.schemas import ArtifactRecord, ExtractionMode


def record(path: str, identity: str = "org.junit", version: str = "") -> ArtifactRecord:
    return ArtifactRecord(source_path=path, identity=identity, version_raw=version)


@pytest.fixture
def junit_records():
    return [
        record("/userlib/junit-4.10.jar", version="4.10"),
        record("/userlib/junit.jar", version="4.11"),
        record("/userlib/junit-4.11.jar", version="4.11"),
    ]


def test_canonically_named_file_wins_rank_tie(junit_records):
    survivors = VersionRankResolver().resolve(junit_records)

    assert survivors["org.junit"].file_name == "junit-4.11.jar"


def test_survivor_independent_of_input_order(junit_records):
    for permutation in itertools.permutations(junit_records):
        survivors = VersionRankResolver().resolve(list(permutation))
        assert survivors["org.junit"].file_name == "junit-4.11.jar"


def test_higher_rank_beats_canonical_name():
    records = [
        record("/userlib/junit-4.10.jar", version="4.10"),
        record("/userlib/junit-latest.jar", version="4.12"),
    ]

    survivors = VersionRankResolver().resolve(records)

    assert survivors["org.junit"].file_name == "junit-latest.jar"


def test_full_tie_keeps_earliest_record():
    records = [
        record("/userlib/a.jar", version="1.0"),
        record("/userlib/b.jar", version="1.0"),
    ]

    survivors = VersionRankResolver().resolve(records)

    assert survivors["org.junit"].source_path == "/userlib/a.jar"


def test_empty_version_is_never_canonical():
    records = [
        record("/userlib/lib.jar"),
        record("/userlib/lib-copy.jar"),
    ]

    assert not records[0].is_canonically_named
    assert VersionRankResolver().resolve(records)["org.junit"].source_path == "/userlib/lib.jar"


def test_resolution_is_idempotent(junit_records):
    resolver = VersionRankResolver()

    assert resolver.resolve(junit_records) == resolver.resolve(junit_records)


def test_every_identity_gets_a_survivor():
    records = [
        record("/userlib/junit-4.11.jar", version="4.11"),
        record("/userlib/guava-31.1.jar", identity="com.google.guava", version="31.1"),
        record("/userlib/orphan.jar", identity="/userlib/orphan.jar"),
    ]

    survivors = VersionRankResolver().resolve(records)

    assert set(survivors) == {"org.junit", "com.google.guava", "/userlib/orphan.jar"}


def test_group_by_identity_keeps_scan_order(junit_records):
    groups = group_by_identity(junit_records + [record("/userlib/x.jar", identity="x")])

    assert list(groups) == ["org.junit", "x"]
    assert [r.file_name for r in groups["org.junit"]] == ["junit-4.10.jar", "junit.jar", "junit-4.11.jar"]


def test_parse_eviction_log():
    text = "\n".join([
        "Resolving dependencies...",
        "Evicted /a/b/old-1.0.jar by newer-2.0.jar",
        "  Evicted C:\\libs\\legacy-0.9.jar by legacy-1.0.jar",
        "Evicted something without a replacement",
        "Kept /a/b/newer-2.0.jar",
    ])

    assert parse_eviction_log(text) == {"old-1.0.jar", "legacy-0.9.jar"}


def test_eviction_log_overrules_version_rank():
    records = [
        record("/a/b/old-1.0.jar", identity="com.example", version="3.0"),
        record("/a/b/newer-2.0.jar", identity="com.example", version="2.0"),
    ]
    resolver = EvictionLogResolver(parse_eviction_log("Evicted /a/b/old-1.0.jar by newer-2.0.jar"))

    survivors = resolver.resolve(records)

    assert survivors["com.example"].file_name == "newer-2.0.jar"


def test_eviction_log_keeps_first_remaining_record():
    records = [
        record("/lib/x-1.0.jar", identity="x", version="1.0"),
        record("/lib/x-2.0.jar", identity="x", version="2.0"),
    ]

    survivors = EvictionLogResolver([]).resolve(records)

    assert survivors["x"].file_name == "x-1.0.jar"


def test_fully_evicted_identity_has_no_survivor():
    records = [record("/lib/x-1.0.jar", identity="x", version="1.0")]

    assert EvictionLogResolver(["x-1.0.jar"]).resolve(records) == {}


def test_eviction_log_from_file(tmp_path):
    log = tmp_path / "build.log"
    log.write_text("Evicted /cache/old-1.0.jar by new-2.0.jar\n", encoding="utf-8")

    resolver = EvictionLogResolver.from_log_file(str(log))

    assert resolver.evicted_names == frozenset({"old-1.0.jar"})


def test_missing_eviction_log_is_fatal(tmp_path):
    with pytest.raises(FileNotFoundError):
        EvictionLogResolver.from_log_file(str(tmp_path / "missing.log"))


def test_build_resolver(tmp_path):
    log = tmp_path / "evictions.txt"
    log.write_text("", encoding="utf-8")

    auto = build_resolver("auto")
    strict = build_resolver("strict")

    assert isinstance(auto, VersionRankResolver)
    assert auto.extraction_mode == ExtractionMode.AUTO
    assert strict.extraction_mode == ExtractionMode.STRICT
    assert isinstance(build_resolver(str(log)), EvictionLogResolver)
    assert build_resolver(str(log)).extraction_mode == ExtractionMode.AUTO
