"""
Credential resolution for EdgeGrid API clients

Credentials are read from AKAMAI_* environment variables and/or an edgerc
file. Each source yields a possibly-partial mapping of credential fields;
the mappings are merged left to right and validated once at the end.
"""

import logging
import os
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from ..exceptions import ConfigurationError, ErrorCodes
from .types import CREDENTIAL_FIELDS, EdgeGridCredentials, missing_fields

logger = logging.getLogger(__name__)

DEFAULT_SECTION = "default"
DEFAULT_EDGERC_PATH = "~/.edgerc"
ENVIRONMENT_PREFIX = "AKAMAI"

PathLike = Union[str, Path]


def normalize_section(section: Optional[str]) -> str:
    """
    Normalize a section name, falling back to the default section.

    Args:
        section: Section name supplied by the caller (may be None or blank)

    Returns:
        str: Section name to use
    """
    if section is None or not section.strip():
        return DEFAULT_SECTION
    return section


def environment_variable_name(section: Optional[str], field_name: str) -> str:
    """
    Build the environment variable name for a credential field.

    The default section maps to AKAMAI_<FIELD>; any other section maps to
    AKAMAI_<SECTION>_<FIELD>.

    Args:
        section: Section name
        field_name: Credential field, e.g. 'host' or 'CLIENT_TOKEN'

    Returns:
        str: Environment variable name
    """
    section = normalize_section(section)
    field_part = field_name.upper()
    if section == DEFAULT_SECTION:
        return f"{ENVIRONMENT_PREFIX}_{field_part}"
    return f"{ENVIRONMENT_PREFIX}_{section.upper()}_{field_part}"


def credentials_from_environment(
    section: Optional[str] = DEFAULT_SECTION,
    environ: Optional[Mapping[str, str]] = None
) -> Dict[str, str]:
    """
    Read credential fields from environment variables.

    Missing variables are reported as empty strings.

    Args:
        section: Section name used to derive the variable names
        environ: Environment mapping (defaults to os.environ)

    Returns:
        dict: Field name to value for every credential field
    """
    if environ is None:
        environ = os.environ

    values = {}
    for name in CREDENTIAL_FIELDS:
        values[name] = environ.get(environment_variable_name(section, name), "")
    return values


def expand_user_path(path: PathLike) -> Path:
    """Expand a leading ~ to the current user's home directory."""
    return Path(path).expanduser()


def parse_edgerc(text: str, section: Optional[str] = DEFAULT_SECTION) -> Dict[str, str]:
    """
    Parse one section of edgerc file content.

    The section starts at the line beginning with "[section]" and ends at the
    next line beginning with "[". Keys are case-insensitive and unknown keys
    are ignored.

    Args:
        text: Complete edgerc file content
        section: Section to extract

    Returns:
        dict: Credential fields found in the section

    Raises:
        ConfigurationError: If the section is not present
    """
    section = normalize_section(section)
    header = f"[{section}]"
    lines = text.splitlines()

    start = None
    for index, line in enumerate(lines):
        if line.strip().startswith(header):
            start = index + 1
            break

    if start is None:
        raise ConfigurationError(
            f"Section '{section}' not found in edgerc file",
            ErrorCodes.SECTION_NOT_FOUND,
            {"section": section}
        )

    values = {}
    for line in lines[start:]:
        stripped = line.strip()
        if stripped.startswith('['):
            break
        # Comments and lines without an assignment
        if not stripped or stripped.startswith((';', '#')) or '=' not in stripped:
            continue

        key, value = stripped.split('=', 1)
        key = key.strip().lower()
        if key in CREDENTIAL_FIELDS:
            values[key] = value.strip()

    logger.debug(f"Parsed edgerc section '{section}' with keys: {sorted(values)}")
    return values


def read_edgerc(path: PathLike, section: Optional[str] = DEFAULT_SECTION) -> Dict[str, str]:
    """
    Read one section of an edgerc file.

    Args:
        path: Path to the edgerc file; a leading ~ is expanded
        section: Section to extract

    Returns:
        dict: Credential fields found in the section

    Raises:
        ConfigurationError: If the file cannot be read or lacks the section
    """
    expanded = expand_user_path(path)
    try:
        text = expanded.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Unable to read edgerc file {expanded}: {e}")
        raise ConfigurationError(
            f"Unable to read edgerc file: {expanded}",
            ErrorCodes.EDGERC_UNREADABLE,
            {"path": str(expanded)}
        ) from e

    return parse_edgerc(text, section)


def merge_credential_values(*sources: Mapping[str, str]) -> Dict[str, str]:
    """
    Merge partial credential mappings left to right.

    Later non-empty values replace earlier ones; empty values never clear a
    populated field.
    """
    merged = {name: "" for name in CREDENTIAL_FIELDS}
    for source in sources:
        for name in CREDENTIAL_FIELDS:
            value = source.get(name)
            if value:
                merged[name] = value
    return merged


def resolve_credentials(
    edgerc_path: Optional[PathLike] = None,
    section: Optional[str] = DEFAULT_SECTION,
    environ: Optional[Mapping[str, str]] = None
) -> EdgeGridCredentials:
    """
    Resolve EdgeGrid credentials.

    Without an explicit edgerc_path, AKAMAI_* environment variables are read
    first and ~/.edgerc is consulted only when a required field is still
    empty. With an explicit edgerc_path, only that file is read.

    Args:
        edgerc_path: Optional path to an edgerc file
        section: Section name (defaults to "default")
        environ: Environment mapping (defaults to os.environ)

    Returns:
        EdgeGridCredentials: Fully populated credentials

    Raises:
        ConfigurationError: If any required field remains unresolved
    """
    section = normalize_section(section)
    explicit_path = edgerc_path is not None and str(edgerc_path) != ""

    sources = []
    if not explicit_path:
        env_values = credentials_from_environment(section, environ)
        sources.append(env_values)
        if not missing_fields(env_values):
            logger.debug(f"Resolved credentials for section '{section}' from environment")
            return _build_credentials(merge_credential_values(*sources), section)

    path = edgerc_path if explicit_path else DEFAULT_EDGERC_PATH
    sources.append(read_edgerc(path, section))
    logger.debug(f"Resolved credentials for section '{section}' from edgerc file {path}")

    return _build_credentials(merge_credential_values(*sources), section)


def _build_credentials(values: Dict[str, str], section: str) -> EdgeGridCredentials:
    missing = missing_fields(values)
    if missing:
        raise ConfigurationError(
            "Failed to find credentials from environment variables or edgerc file",
            ErrorCodes.MISSING_CREDENTIALS,
            {"section": section, "missing_fields": list(missing)}
        )
    return EdgeGridCredentials(**values)
