"""Narrative documentation and usage statistics for test methods."""

from .assembler import DocumentAssembler
from .assertions import translate_assertion
from .config import ConfigError, FilterConfig, NarrativeConfig, TestDocConfig, load_config
from .models import ClassRecord, DocumentModel, MethodRecord, PresentationSettings
from .narrative import NarrativeComposer
from .naming import decompose_name

__all__ = [
    "ClassRecord",
    "ConfigError",
    "DocumentAssembler",
    "DocumentModel",
    "FilterConfig",
    "MethodRecord",
    "NarrativeComposer",
    "NarrativeConfig",
    "PresentationSettings",
    "TestDocConfig",
    "decompose_name",
    "load_config",
    "translate_assertion",
]
