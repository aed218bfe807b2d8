"""
Glossary Tooltip Field Formatter
Renders text field items with glossary tooltips for the display layer
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from .annotator import TermAnnotator
from .config import AnnotatorConfig
from .vocabulary import Vocabulary, VocabularyError, load_vocabulary

logger = logging.getLogger(__name__)

FORMATTER_ID = "glossary_tooltip"
FIELD_TYPES = ("text", "text_long", "text_with_summary")
LIBRARY = "glossary_tooltip/glossary_tooltip"
CACHE_TAG = "taxonomy_term_list:glossary"

VocabularyLoader = Callable[[], Vocabulary]


@dataclass
class FieldItem:
    """One value of a text field"""

    value: str
    langcode: str = "und"


class GlossaryTooltipFormatter:
    """
    Formats text fields, annotating glossary terms with tooltips

    The vocabulary is reloaded on every view so edits to the glossary show
    up on the next render. When loading fails, items render unannotated.
    """

    def __init__(self, vocabulary_loader: Union[VocabularyLoader, str],
                 config: Optional[AnnotatorConfig] = None):
        """
        Initialize formatter

        Args:
            vocabulary_loader: Callable returning a Vocabulary, or a vocabulary file path
            config: Annotator settings
        """
        if isinstance(vocabulary_loader, str):
            path = vocabulary_loader
            template = (config or AnnotatorConfig()).detail_url_template
            vocabulary_loader = lambda: load_vocabulary(path, template)  # noqa: E731

        self.vocabulary_loader = vocabulary_loader
        self.annotator = TermAnnotator(config)

    @staticmethod
    def is_applicable(field_type: str) -> bool:
        return field_type in FIELD_TYPES

    def load_vocabulary(self) -> Optional[Vocabulary]:
        """Vocabulary for this render, or None when the source failed"""
        try:
            return self.vocabulary_loader()
        except (VocabularyError, OSError) as e:
            logger.error(f"Glossary vocabulary unavailable, rendering plain text: {e}")
            return None
        except Exception:
            # Storage backends raise their own exception types
            logger.exception("Glossary vocabulary loader failed, rendering plain text")
            return None

    def view_elements(self, items: Iterable[Union[FieldItem, str]],
                      langcode: Optional[str] = None) -> Dict[str, Any]:
        """
        Build render elements for field items

        Args:
            items: Field items (plain strings are accepted)
            langcode: Fallback language for plain string items

        Returns:
            Dict with one element per delta under "items", plus the client
            library to attach and the cache tags to invalidate on
        """
        vocabulary = self.load_vocabulary()

        elements: List[Dict[str, Any]] = []
        for item in items:
            if isinstance(item, str):
                item = FieldItem(value=item, langcode=langcode or "und")

            text = item.value
            if vocabulary is not None:
                text = self.annotator.annotate(vocabulary, text)

            elements.append({
                'type': 'processed_text',
                'text': text,
                'format': 'full_html',
                'langcode': item.langcode,
            })

        return {
            'items': elements,
            'attached': {'library': [LIBRARY]},
            'cache': {'tags': [CACHE_TAG]},
        }
