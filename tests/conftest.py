"""
Shared fixtures: build small library archives on disk.
"""

import logging
import zipfile
from pathlib import Path
from typing import Dict, Union

import pytest

from userlib_cleaner.core.config import Settings


def _write_jar(path: Path, entries: Dict[str, Union[str, bytes]]) -> Path:
    """Write a ZIP archive with the given entry name -> content mapping."""
    with zipfile.ZipFile(path, 'w') as zipf:
        for name, content in entries.items():
            zipf.writestr(name, content)
    return path


def _manifest(**headers: str) -> str:
    """Build manifest text; underscores in keyword names become hyphens."""
    lines = ["Manifest-Version: 1.0"]
    lines.extend(f"{key.replace('_', '-')}: {value}" for key, value in headers.items())
    return "\r\n".join(lines) + "\r\n"


def _pom_properties(group_id: str, artifact_id: str, version: str) -> str:
    return (
        "#Generated by Maven\n"
        f"groupId={group_id}\n"
        f"artifactId={artifact_id}\n"
        f"version={version}\n"
    )


@pytest.fixture
def manifest_text():
    """manifest_text(Bundle_SymbolicName="org.junit") -> manifest file content."""
    return _manifest


@pytest.fixture
def pom_text():
    """pom_text(group_id, artifact_id, version) -> pom.properties content."""
    return _pom_properties


@pytest.fixture
def jar_writer():
    """jar_writer(path, entries) writes an archive at an explicit path."""
    return _write_jar


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def make_jar(tmp_path):
    """Factory fixture: make_jar("lib-1.0.jar", {...}) -> absolute path string."""
    def _make_jar(name: str, entries: Dict[str, Union[str, bytes]] = None) -> str:
        return str(_write_jar(tmp_path / name, entries or {}).resolve())
    return _make_jar


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop stream handlers installed by CLI runs so they don't outlive the captured streams."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
