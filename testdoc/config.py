"""Configuration loading for testdoc (.testdoc.yml)."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Pattern, Sequence, Tuple

import yaml

from .models import PresentationSettings

CONFIG_FILENAME = ".testdoc.yml"
DEFAULT_PRECISION = 1
VALID_PRECISIONS = (1, 2)


class ConfigError(RuntimeError):
    """Raised when configuration cannot be parsed or is invalid."""


def compile_patterns(
    patterns: Iterable[str], *, kind: str, ignore_case: bool = False
) -> Tuple[Pattern[str], ...]:
    """Compile regexes up front so a bad pattern fails before any filtering."""
    flags = re.IGNORECASE if ignore_case else 0
    compiled: List[Pattern[str]] = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern, flags))
        except re.error as exc:
            raise ConfigError(f"Invalid {kind} pattern {pattern!r}: {exc}") from exc
    return tuple(compiled)


def validate_precision(value: int) -> int:
    if value not in VALID_PRECISIONS:
        allowed = ", ".join(str(item) for item in VALID_PRECISIONS)
        raise ConfigError(f"Percentage precision must be one of {allowed}, got {value!r}")
    return value


@dataclass(frozen=True)
class FilterConfig:
    """Compiled include/exclude patterns for method names and tags.

    Name patterns ignore case so `.*should.*` selects `userShouldLogin`;
    tag patterns are case-sensitive.
    """

    include_methods: Tuple[Pattern[str], ...] = ()
    exclude_methods: Tuple[Pattern[str], ...] = ()
    include_tags: Tuple[Pattern[str], ...] = ()
    exclude_tags: Tuple[Pattern[str], ...] = ()

    @classmethod
    def build(
        cls,
        *,
        include_methods: Sequence[str] = (),
        exclude_methods: Sequence[str] = (),
        include_tags: Sequence[str] = (),
        exclude_tags: Sequence[str] = (),
    ) -> "FilterConfig":
        return cls(
            include_methods=compile_patterns(include_methods, kind="include-method", ignore_case=True),
            exclude_methods=compile_patterns(exclude_methods, kind="exclude-method", ignore_case=True),
            include_tags=compile_patterns(include_tags, kind="include-tag"),
            exclude_tags=compile_patterns(exclude_tags, kind="exclude-tag"),
        )

    @property
    def is_empty(self) -> bool:
        return not (
            self.include_methods or self.exclude_methods or self.include_tags or self.exclude_tags
        )

    def with_include_method(self, pattern: str) -> "FilterConfig":
        added = compile_patterns([pattern], kind="include-method", ignore_case=True)
        return replace(self, include_methods=self.include_methods + added)

    def with_exclude_method(self, pattern: str) -> "FilterConfig":
        added = compile_patterns([pattern], kind="exclude-method", ignore_case=True)
        return replace(self, exclude_methods=self.exclude_methods + added)

    def with_include_tag(self, pattern: str) -> "FilterConfig":
        added = compile_patterns([pattern], kind="include-tag")
        return replace(self, include_tags=self.include_tags + added)

    def with_exclude_tag(self, pattern: str) -> "FilterConfig":
        added = compile_patterns([pattern], kind="exclude-tag")
        return replace(self, exclude_tags=self.exclude_tags + added)

    def merged(self, other: "FilterConfig") -> "FilterConfig":
        return FilterConfig(
            include_methods=self.include_methods + other.include_methods,
            exclude_methods=self.exclude_methods + other.exclude_methods,
            include_tags=self.include_tags + other.include_tags,
            exclude_tags=self.exclude_tags + other.exclude_tags,
        )


@dataclass(frozen=True)
class NarrativeConfig:
    """Ordered literal substitutions applied to every generated description."""

    replacements: Tuple[Tuple[str, str], ...] = ()

    def with_replacement(self, pattern: str, replacement: str) -> "NarrativeConfig":
        if not pattern:
            raise ConfigError("Replacement pattern must not be empty")
        return replace(self, replacements=self.replacements + ((pattern, replacement),))


@dataclass(frozen=True)
class TestDocConfig:
    """Represents the settings defined in .testdoc.yml."""

    __test__ = False  # keep pytest from collecting this as a test class

    narrative: NarrativeConfig = field(default_factory=NarrativeConfig)
    filters: FilterConfig = field(default_factory=FilterConfig)
    presentation: PresentationSettings = field(default_factory=PresentationSettings)
    percentage_precision: int = DEFAULT_PRECISION


def load_config(config_path: Path) -> TestDocConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    if not config_file.exists():
        return TestDocConfig()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")
    return config_from_mapping(data)


def config_from_mapping(data: Dict[str, Any]) -> TestDocConfig:
    report = _as_dict(data.get("report"))
    defaults = PresentationSettings()
    presentation = PresentationSettings(
        title=_as_str(report.get("title")) or defaults.title,
        header=_as_str(report.get("header")),
        dark_mode=bool(_as_bool(report.get("dark_mode"))),
        display_tags_chart=bool(_as_bool(report.get("display_tags_chart"))),
    )

    precision_value = report.get("percentage_precision")
    precision = DEFAULT_PRECISION
    if precision_value is not None:
        parsed = _as_int(precision_value)
        if parsed is None:
            raise ConfigError(f"percentage_precision must be an integer, got {precision_value!r}")
        precision = validate_precision(parsed)

    narrative = NarrativeConfig()
    narrative_data = _as_dict(data.get("narrative"))
    raw_replacements = narrative_data.get("replacements") or []
    if not isinstance(raw_replacements, list):
        raise ConfigError("narrative.replacements must be a list")
    for entry in raw_replacements:
        entry_map = _as_dict(entry)
        pattern = _as_str(entry_map.get("pattern"))
        if pattern is None:
            raise ConfigError("Each narrative replacement needs a 'pattern'")
        narrative = narrative.with_replacement(pattern, _as_str(entry_map.get("replacement")) or "")

    filter_data = _as_dict(data.get("filters"))
    filters = FilterConfig.build(
        include_methods=_as_str_list(filter_data.get("include_methods")),
        exclude_methods=_as_str_list(filter_data.get("exclude_methods")),
        include_tags=_as_str_list(filter_data.get("include_tags")),
        exclude_tags=_as_str_list(filter_data.get("exclude_tags")),
    )

    return TestDocConfig(
        narrative=narrative,
        filters=filters,
        presentation=presentation,
        percentage_precision=precision,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigError(f"{path.name} is not valid UTF-8: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
