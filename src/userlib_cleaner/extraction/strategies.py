"""
Identity extraction strategies.

Each strategy is a plain function that takes an ExtractionContext and returns
ExtractedMetadata (or None when it has nothing to say about the archive). The
extractor runs them in order and the first result carrying a non-empty
identity wins.
"""

import logging
import os
import re
import zipfile
import zlib
from typing import Callable, Dict, List, Optional, Tuple

from userlib_cleaner.core.config import Settings
from userlib_cleaner.core.utils import strip_extension
from userlib_cleaner.schemas.records import ExtractedMetadata, ExtractionMode

logger = logging.getLogger(__name__)

# Manifest headers in priority order
IDENTITY_KEYS = ("Bundle-SymbolicName", "Extension-Name", "Automatic-Module-Name")
TITLE_KEYS = ("Bundle-Name", "Implementation-Title")
VERSION_KEYS = ("Bundle-Version", "Implementation-Version")
VENDOR_KEYS = ("Bundle-Vendor", "Implementation-Vendor")
LICENSE_KEYS = ("Bundle-License",)


class ExtractionContext:
    """What a strategy may look at for one archive."""

    def __init__(self, archive, source_path: str, settings: Settings):
        """
        Args:
            archive: Object exposing entry_names() and read_text(name),
                     normally an ArchiveAccessor
            source_path: Absolute path of the archive
            settings: Extraction settings
        """
        self.archive = archive
        self.source_path = source_path
        self.file_name = os.path.basename(source_path)
        self.settings = settings

    def entry_names(self) -> List[str]:
        return self.archive.entry_names()

    def read_text(self, name: str) -> Optional[str]:
        """
        Read an entry as text. Missing entries give None; so do entries
        that can't be decoded, after a warning.
        """
        try:
            return self.archive.read_text(name)
        except (UnicodeDecodeError, zipfile.BadZipFile, zlib.error, EOFError, NotImplementedError) as e:
            logger.warning(f"Skipping unreadable entry {name} in {self.file_name}: {e}")
            return None


Strategy = Callable[[ExtractionContext], Optional[ExtractedMetadata]]


def parse_manifest(text: str) -> Dict[str, str]:
    """
    Parse manifest text into a header dict, keeping the first value of
    repeated headers.

    Lines starting with a single space continue the previous line, as
    manifests wrap long values at 72 bytes.
    """
    lines: List[str] = []
    for line in text.splitlines():
        if line.startswith(" ") and lines:
            lines[-1] += line[1:]
        else:
            lines.append(line)

    headers: Dict[str, str] = {}
    for line in lines:
        line = line.strip()
        if ": " not in line:
            continue
        key, value = line.split(": ", 1)
        key = key.strip()
        if key and key not in headers:
            headers[key] = value.strip()
    return headers


def parse_properties(text: str) -> Dict[str, str]:
    """Parse key=value lines, skipping blanks and comments."""
    props: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line[0] in "#!" or "=" not in line:
            continue
        key, value = line.split("=", 1)
        props[key.strip()] = value.strip()
    return props


def split_file_name(file_name: str) -> Optional[Tuple[str, str]]:
    """
    Split "name-parts-1.0.jar" into ("name-parts", "1.0").

    Returns None when the name has no hyphen.
    """
    segments = file_name.split("-")
    if len(segments) < 2:
        return None
    return "-".join(segments[:-1]), strip_extension(segments[-1])


def _first_value(headers: Dict[str, str], keys: Tuple[str, ...]) -> str:
    for key in keys:
        value = headers.get(key, "")
        if value:
            return value
    return ""


def manifest_strategy(context: ExtractionContext) -> Optional[ExtractedMetadata]:
    """Identity and version from META-INF/MANIFEST.MF headers."""
    text = context.read_text(context.settings.manifest_entry)
    if text is None:
        return None

    headers = parse_manifest(text)

    identity = ""
    for key in IDENTITY_KEYS:
        value = headers.get(key, "")
        if key == "Bundle-SymbolicName":
            # Drop OSGi directives such as ";singleton:=true"
            value = value.split(";")[0].strip()
        if value:
            identity = value
            break

    title = _first_value(headers, TITLE_KEYS)

    if not identity:
        for key in TITLE_KEYS:
            value = headers.get(key, "")
            if not value or "${" in value:
                continue
            if context.settings.is_generic_title(value):
                logger.debug(f"Ignoring generic title '{value}' in {context.file_name}")
                continue
            identity = value
            break

    version = ""
    for key, value in headers.items():
        if key in VERSION_KEYS and value:
            version = value
            break

    return ExtractedMetadata(
        strategy="manifest",
        identity=identity,
        version=version,
        display_name=title or None,
        vendor=_first_value(headers, VENDOR_KEYS) or None,
        license=_first_value(headers, LICENSE_KEYS) or None,
    )


def _pick_descriptor(candidates: List[str], file_name: str) -> str:
    # Shaded archives carry descriptors of everything they bundle
    stem = strip_extension(file_name)
    for name in candidates:
        artifact_id = name.split("/")[-2]
        if stem == artifact_id or stem.startswith(artifact_id + "-"):
            return name
    return candidates[0]


def descriptor_strategy(context: ExtractionContext) -> Optional[ExtractedMetadata]:
    """Identity and version from a META-INF/maven/.../pom.properties entry."""
    pattern = re.compile(context.settings.descriptor_pattern)
    candidates = [name for name in context.entry_names() if pattern.match(name)]
    if not candidates:
        return None

    text = context.read_text(_pick_descriptor(candidates, context.file_name))
    if text is None:
        return None

    props = parse_properties(text)
    group_id = props.get("groupId", "")
    artifact_id = props.get("artifactId", "")
    identity = f"{group_id}.{artifact_id}" if group_id and artifact_id else ""

    return ExtractedMetadata(
        strategy="descriptor",
        identity=identity,
        version=props.get("version", ""),
    )


def classpath_strategy(context: ExtractionContext) -> Optional[ExtractedMetadata]:
    """Synthesize an identity from the package of the first recognized class file."""
    roots = set(context.settings.namespace_roots)
    depth = context.settings.namespace_depth

    for name in context.entry_names():
        if not name.endswith(".class"):
            continue
        directories = name.split("/")[:-1]
        if not directories or directories[0] not in roots:
            continue

        parts = split_file_name(context.file_name)
        return ExtractedMetadata(
            strategy="classpath",
            identity=".".join(directories[:depth]),
            version=parts[1] if parts else "",
        )
    return None


def filename_strategy(context: ExtractionContext) -> Optional[ExtractedMetadata]:
    """Identity and version from the "name-version.jar" file naming convention."""
    parts = split_file_name(context.file_name)
    if parts is None or not parts[0]:
        return None

    raw_name, version = parts
    return ExtractedMetadata(
        strategy="filename",
        identity=context.settings.local_namespace + raw_name.lower(),
        version=version,
    )


STRICT_STRATEGIES: Tuple[Strategy, ...] = (manifest_strategy, descriptor_strategy)
AUTO_STRATEGIES: Tuple[Strategy, ...] = STRICT_STRATEGIES + (classpath_strategy, filename_strategy)


def strategies_for(mode: ExtractionMode) -> Tuple[Strategy, ...]:
    if mode == ExtractionMode.STRICT:
        return STRICT_STRATEGIES
    return AUTO_STRATEGIES
