"""Runtime configuration model for gtfs-rdf.

This module owns environment variable parsing, YAML profile loading
and validation. Other modules consume a typed config object instead
of raw env reads or CLI namespaces.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
import os
from pathlib import Path
from typing import Mapping, cast

from core.constants import (
    DEFAULT_INPUT_DIR,
    DEFAULT_OUTPUT_FORMAT,
    PROFILE_KEYS,
    SUPPORTED_OUTPUT_FORMATS,
)
from core.errors import GtfsRdfConfigError, GtfsRdfDependencyError


@dataclass(frozen=True)
class ConversionConfig:
    """Validated conversion configuration.

    Attributes:
        base_uri: Base URI for minted instance URIs, without trailing slash.
        input_dir: Directory holding the GTFS ``*.txt`` tables.
        license_uri: Optional license link for the dataset descriptor.
        source_uri: Optional source link for the dataset descriptor.
        split_size: Source rows per output batch; 0 disables batching.
        output_format: Output encoding identifier.
    """

    base_uri: str
    input_dir: Path = DEFAULT_INPUT_DIR
    license_uri: str | None = None
    source_uri: str | None = None
    split_size: int = 0
    output_format: str = DEFAULT_OUTPUT_FORMAT

    @classmethod
    def from_env(cls) -> "ConversionConfig":
        """Build config from process environment variables.

        The result is not validated; callers merge overrides first and
        then call :meth:`validate`.
        """
        split_value = os.getenv("GTFS_RDF_SPLIT_SIZE", "0")
        return cls(
            base_uri=os.getenv("GTFS_RDF_BASE_URI", ""),
            input_dir=Path(os.getenv("GTFS_RDF_INPUT_DIR", str(DEFAULT_INPUT_DIR))),
            license_uri=os.getenv("GTFS_RDF_LICENSE") or None,
            source_uri=os.getenv("GTFS_RDF_SOURCE") or None,
            split_size=_parse_split_size(split_value, "GTFS_RDF_SPLIT_SIZE"),
            output_format=os.getenv("GTFS_RDF_OUTPUT", DEFAULT_OUTPUT_FORMAT),
        )

    def with_overrides(self, overrides: Mapping[str, object]) -> "ConversionConfig":
        """Return a copy with non-empty override values applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        if "input_dir" in changes:
            changes["input_dir"] = Path(str(changes["input_dir"]))
        return replace(self, **changes)

    def validate(self) -> "ConversionConfig":
        """Check config invariants and return self.

        Raises:
            GtfsRdfConfigError: If any value is invalid.
        """
        if not self.base_uri:
            raise GtfsRdfConfigError(
                "A base URI is required. Pass --base or set GTFS_RDF_BASE_URI, "
                "for example http://myrdf.us/mta/mnr."
            )
        if self.base_uri.endswith("/"):
            raise GtfsRdfConfigError(
                f"Invalid base URI '{self.base_uri}': it must not end with '/'. "
                "URIs are built by appending path segments starting with '/'."
            )
        if self.split_size < 0:
            raise GtfsRdfConfigError(
                f"Invalid split size {self.split_size}: expected value >= 0. "
                "Use 0 to disable batching."
            )
        if self.output_format not in SUPPORTED_OUTPUT_FORMATS:
            raise GtfsRdfConfigError(
                f"Unsupported output '{self.output_format}'. "
                f"Supported outputs: {', '.join(SUPPORTED_OUTPUT_FORMATS)}."
            )
        return self


def load_profile(profile_path: str) -> dict[str, object]:
    """Load a YAML conversion profile as config overrides.

    Args:
        profile_path: File path to the YAML profile.

    Returns:
        Mapping of ``ConversionConfig`` field names to values.

    Raises:
        GtfsRdfDependencyError: If PyYAML is unavailable.
        GtfsRdfConfigError: If the file is missing, malformed or has unknown keys.
    """
    payload = _load_yaml_payload(profile_path)
    if not isinstance(payload, Mapping):
        raise GtfsRdfConfigError(
            f"Invalid profile {profile_path}: expected a mapping at the document root."
        )
    unknown_keys = sorted(str(key) for key in payload if key not in PROFILE_KEYS)
    if unknown_keys:
        raise GtfsRdfConfigError(
            f"Unsupported profile keys in {profile_path}: {', '.join(unknown_keys)}. "
            f"Allowed keys: {', '.join(PROFILE_KEYS)}."
        )
    overrides: dict[str, object] = {}
    if "base" in payload:
        overrides["base_uri"] = _expect_string(payload["base"], "base")
    if "input_dir" in payload:
        overrides["input_dir"] = _expect_string(payload["input_dir"], "input_dir")
    if "license" in payload:
        overrides["license_uri"] = _expect_string(payload["license"], "license")
    if "source" in payload:
        overrides["source_uri"] = _expect_string(payload["source"], "source")
    if "split_size" in payload:
        overrides["split_size"] = _parse_split_size(str(payload["split_size"]), "split_size")
    if "output" in payload:
        overrides["output_format"] = _expect_string(payload["output"], "output")
    return overrides


def _load_yaml_payload(profile_path: str) -> object:
    try:
        import yaml  # type: ignore[import-untyped]
    except ImportError as error:  # pragma: no cover - dependency failure
        raise GtfsRdfDependencyError(
            "YAML profile support requires PyYAML. Install with 'pip install pyyaml'."
        ) from error
    profile_file = Path(profile_path).expanduser().resolve()
    if not profile_file.exists():
        raise GtfsRdfConfigError(
            f"Profile file does not exist at {profile_file}. Provide a valid YAML file path."
        )
    try:
        payload = cast(object, yaml.safe_load(profile_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise GtfsRdfConfigError(
            f"Failed to read profile at {profile_file}: {error}. Check file permissions."
        ) from error
    except yaml.YAMLError as error:
        raise GtfsRdfConfigError(
            f"Failed to parse YAML profile at {profile_file}: {error}. Fix YAML syntax and retry."
        ) from error
    if payload is None:
        raise GtfsRdfConfigError(f"Profile at {profile_file} is empty. Define at least 'base'.")
    return payload


def _expect_string(value: object, key: str) -> str:
    if not isinstance(value, str):
        raise GtfsRdfConfigError(
            f"Invalid profile value for '{key}': expected string, got {type(value).__name__}."
        )
    return value


def _parse_split_size(raw_value: str, source_name: str) -> int:
    """Parse a split size value.

    Args:
        raw_value: Raw string from environment or profile.
        source_name: Name of the setting for error messages.

    Returns:
        Parsed integer split size.

    Raises:
        GtfsRdfConfigError: If value cannot be parsed into int.
    """
    try:
        return int(raw_value)
    except ValueError as error:
        raise GtfsRdfConfigError(
            f"Invalid {source_name} value: expected integer, got '{raw_value}'. "
            f"Set {source_name} to a numeric value."
        ) from error
