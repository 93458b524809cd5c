"""Input validation for the orasid.pipeline module and the runbook parameters.

Host names, SIDs and homes end up inside shell command lines and
regular expressions, so they are checked against narrow patterns before any
step is built.
"""

from __future__ import annotations

import re

from orasid.pipeline.exceptions import PipelineConfigError

# ============================================================================
# Constants - Hard Limits
# ============================================================================

#: Maximum step name length.
MAX_STEP_NAME_LENGTH = 64

#: Step names are upper case labels, e.g. ``STOP_DB``.
STEP_NAME_PATTERN = re.compile(r"^[A-Z][A-Z0-9_]*$")

#: Maximum number of steps in a single pipeline.
MAX_PIPELINE_STEPS = 64

#: Oracle SIDs: a letter, then letters, digits or ``_`` (no shell metacharacters).
SID_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")

#: Maximum SID length accepted by ``nid`` on Unix.
MAX_SID_LENGTH = 12

#: One RFC 1123 host name label.
_HOST_LABEL = r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"

#: Dotted host name made of RFC 1123 labels.
HOSTNAME_PATTERN = re.compile(rf"^{_HOST_LABEL}(?:\.{_HOST_LABEL})*$")

#: Maximum host name length.
MAX_HOSTNAME_LENGTH = 253

#: Absolute path without whitespace or shell metacharacters.
HOME_PATTERN = re.compile(r"^/[A-Za-z0-9_.+/-]*$")

#: Maximum Oracle/Grid home length.
MAX_HOME_LENGTH = 512

# ============================================================================
# Validation Functions
# ============================================================================


def validate_step_name(name: str) -> str:
    """Validate and return a step name.

    Args:
        name: Step name to validate.

    Returns:
        The validated step name (unchanged).

    Raises:
        PipelineConfigError: If name is invalid.

    Examples:
        >>> validate_step_name("STOP_DB")
        'STOP_DB'
        >>> validate_step_name("stop-db")
        Traceback (most recent call last):
            ...
        orasid.pipeline.exceptions.PipelineConfigError: Step name must start with an upper case letter and contain only upper case letters, digits or underscores: 'stop-db'
    """
    if not name:
        raise PipelineConfigError("Step name cannot be empty")
    if len(name) > MAX_STEP_NAME_LENGTH:
        raise PipelineConfigError(f"Step name too long (max {MAX_STEP_NAME_LENGTH} chars)")
    if not STEP_NAME_PATTERN.match(name):
        raise PipelineConfigError(
            "Step name must start with an upper case letter and contain only upper case letters, "
            f"digits or underscores: {name!r}"
        )
    return name


def validate_pipeline_steps(step_count: int) -> None:
    """Validate the number of steps in a pipeline.

    Args:
        step_count: Number of steps.

    Raises:
        PipelineConfigError: If the pipeline is empty or too long.
    """
    if step_count == 0:
        raise PipelineConfigError("Pipeline must have at least one step")
    if step_count > MAX_PIPELINE_STEPS:
        raise PipelineConfigError(f"Too many steps (max {MAX_PIPELINE_STEPS})")


def validate_sid(sid: str) -> str:
    """Validate an Oracle SID.

    Examples:
        >>> validate_sid("ORCL")
        'ORCL'
    """
    if not sid:
        raise PipelineConfigError("SID cannot be empty")
    if len(sid) > MAX_SID_LENGTH:
        raise PipelineConfigError(f"SID too long (max {MAX_SID_LENGTH} chars): {sid!r}")
    if not SID_PATTERN.match(sid):
        raise PipelineConfigError(f"Invalid SID {sid!r}")
    return sid


def validate_hostname(hostname: str) -> str:
    """Validate a host name (short or fully qualified).

    Examples:
        >>> validate_hostname("db01.example.com")
        'db01.example.com'
    """
    if not hostname:
        raise PipelineConfigError("Host name cannot be empty")
    if len(hostname) > MAX_HOSTNAME_LENGTH:
        raise PipelineConfigError(f"Host name too long (max {MAX_HOSTNAME_LENGTH} chars)")
    if not HOSTNAME_PATTERN.match(hostname):
        raise PipelineConfigError(f"Invalid host name {hostname!r}")
    return hostname


def validate_home(path: str) -> str:
    """Validate an Oracle or Grid home path.

    Examples:
        >>> validate_home("/u01/app/oracle/product/11.2.0/dbhome_1")
        '/u01/app/oracle/product/11.2.0/dbhome_1'
    """
    if not path:
        raise PipelineConfigError("Home path cannot be empty")
    if len(path) > MAX_HOME_LENGTH:
        raise PipelineConfigError(f"Home path too long (max {MAX_HOME_LENGTH} chars)")
    if not HOME_PATTERN.match(path):
        raise PipelineConfigError(f"Home must be an absolute path without spaces or shell characters: {path!r}")
    return path.rstrip("/") or "/"


__all__ = [
    "HOME_PATTERN",
    "HOSTNAME_PATTERN",
    "MAX_HOME_LENGTH",
    "MAX_HOSTNAME_LENGTH",
    "MAX_PIPELINE_STEPS",
    "MAX_SID_LENGTH",
    "MAX_STEP_NAME_LENGTH",
    "SID_PATTERN",
    "STEP_NAME_PATTERN",
    "validate_home",
    "validate_hostname",
    "validate_pipeline_steps",
    "validate_sid",
    "validate_step_name",
]
