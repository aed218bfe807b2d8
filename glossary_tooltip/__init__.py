"""
Glossary Tooltip
Annotates glossary terms in text with interactive tooltip markup
"""

from .core.annotator import TermAnnotator, annotate
from .core.config import AnnotatorConfig, GlossaryTooltipConfig
from .core.formatter import FieldItem, GlossaryTooltipFormatter
from .core.toggle import TooltipToggle
from .core.vocabulary import (
    GlossaryTerm,
    Vocabulary,
    VocabularyError,
    load_vocabulary,
    parse_vocabulary,
    vocabulary_from_data,
)

__version__ = "1.0.0"

__all__ = [
    "AnnotatorConfig",
    "FieldItem",
    "GlossaryTerm",
    "GlossaryTooltipConfig",
    "GlossaryTooltipFormatter",
    "TermAnnotator",
    "TooltipToggle",
    "Vocabulary",
    "VocabularyError",
    "annotate",
    "load_vocabulary",
    "parse_vocabulary",
    "vocabulary_from_data",
]
