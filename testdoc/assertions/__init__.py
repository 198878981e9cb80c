"""Assertion detectors and the line-to-prose translator."""

from __future__ import annotations

from importlib import metadata
from typing import Callable, Iterable, List, Optional, Sequence, Set

from .base import AssertionDetector
from .keyword import KeywordAssertionDetector

_ENTRY_POINT_GROUP = "testdoc.detectors"

_BUILTIN_FACTORIES: dict[str, Callable[[], AssertionDetector]] = {
    "keyword": KeywordAssertionDetector,
}

_DEFAULT_DETECTORS: tuple[AssertionDetector, ...] = (KeywordAssertionDetector(),)


def translate_assertion(
    line: str, detectors: Optional[Sequence[AssertionDetector]] = None
) -> str:
    """Return prose for an assertion line, or an empty string when unrecognised."""
    stripped = line.strip()
    for detector in detectors if detectors is not None else _DEFAULT_DETECTORS:
        fragment = detector.detect(stripped)
        if fragment is not None:
            return fragment.sentence
    return ""


def discover_detectors(enabled: Sequence[str] | None = None) -> List[AssertionDetector]:
    """Return instantiated detectors, built-ins first, honoring optional enabled names."""

    enabled_set: Set[str] | None = None
    if enabled is not None:
        enabled_set = {name.lower() for name in enabled}

    detectors: List[AssertionDetector] = []
    seen: Set[str] = set()

    def _add(name: str, factory: Callable[[], AssertionDetector]) -> None:
        key = name.lower()
        if enabled_set is not None and key not in enabled_set:
            return
        if key in seen:
            return
        instance = factory()
        if not isinstance(instance, AssertionDetector):
            raise TypeError(f"Detector factory for '{name}' did not return an AssertionDetector")
        detectors.append(instance)
        seen.add(key)
        if enabled_set is not None:
            enabled_set.discard(key)

    for name, factory in _BUILTIN_FACTORIES.items():
        _add(name, factory)

    for entry in _iter_entry_points():
        try:
            loaded = entry.load()
        except Exception as exc:
            raise RuntimeError(f"Failed to load detector entry point '{entry.name}': {exc}") from exc

        def _factory(obj: object = loaded) -> AssertionDetector:
            return _coerce_detector(obj)

        _add(entry.name, _factory)

    if enabled_set:
        missing = ", ".join(sorted(enabled_set))
        raise ValueError(f"Unknown detectors requested: {missing}")

    return detectors


def _coerce_detector(obj: object) -> AssertionDetector:
    if isinstance(obj, AssertionDetector):
        return obj
    if isinstance(obj, type) and issubclass(obj, AssertionDetector):
        return obj()
    if callable(obj):
        instance = obj()
        if isinstance(instance, AssertionDetector):
            return instance
    raise TypeError("Detector entry point must be an AssertionDetector subclass or factory")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points().select(group=_ENTRY_POINT_GROUP)


__all__ = [
    "AssertionDetector",
    "KeywordAssertionDetector",
    "discover_detectors",
    "translate_assertion",
]
