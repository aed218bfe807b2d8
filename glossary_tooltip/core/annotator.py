"""
Glossary Tooltip Term Annotator
Wraps glossary term occurrences in text with tooltip markup
"""

import logging
import re
from functools import lru_cache
from typing import Dict, List, Optional, Tuple

from .config import AnnotatorConfig
from .vocabulary import GlossaryTerm, Vocabulary

logger = logging.getLogger(__name__)

# Markup markers shared with the client behaviour and stylesheet
LABEL_CLASS = "glossary-tooltip-link"
DESCRIPTION_CLASS = "glossary-tooltip-description"
HIDDEN_CLASS = "hidden"
READ_MORE_CLASS = "read-more"


@lru_cache(maxsize=64)
def _build_pattern(names: Tuple[str, ...]) -> re.Pattern:
    """Build one alternation that prefers the longest name at any position"""
    # sorted() is stable, so equal lengths keep vocabulary order
    sorted_names = sorted(names, key=len, reverse=True)
    return re.compile('|'.join(re.escape(name) for name in sorted_names))


class TermAnnotator:
    """
    Annotates glossary term names in text with tooltip markup
    """

    def __init__(self, config: Optional[AnnotatorConfig] = None):
        """
        Initialize term annotator

        Args:
            config: Rendering and substitution settings
        """
        self.config = config or AnnotatorConfig()

    def truncate_description(self, term: GlossaryTerm,
                             max_description_length: Optional[int] = None) -> str:
        """
        Description text for a tooltip

        Length is counted in characters. Over-long descriptions are cut,
        followed by an ellipsis and a "Read more" link when the term has
        a detail url.
        """
        limit = self._resolve_limit(max_description_length)
        description = term.description or ""

        if len(description) <= limit:
            return description

        truncated = description[:limit] + "..."
        if term.detail_url:
            truncated += (
                f' <a class="{READ_MORE_CLASS}" target="_blank" href="{term.detail_url}">'
                f'{self.config.read_more_label}</a>'
            )
        return truncated

    def render_tooltip(self, term: GlossaryTerm,
                       max_description_length: Optional[int] = None) -> str:
        """Label element immediately followed by its hidden description"""
        label = f'<a class="{LABEL_CLASS}">{term.name}</a>'
        description = self.truncate_description(term, max_description_length)
        wrapper = f'<span class="{DESCRIPTION_CLASS} {HIDDEN_CLASS}">{description}</span>'
        return label + wrapper

    def build_replacements(self, vocabulary: Vocabulary,
                           max_description_length: Optional[int] = None
                           ) -> Tuple[List[str], List[str]]:
        """
        Parallel lists of term names and their tooltip markup

        Both lists follow vocabulary order.
        """
        names = []
        replacements = []
        for term in vocabulary:
            names.append(term.name)
            replacements.append(self.render_tooltip(term, max_description_length))
        return names, replacements

    def annotate(self, vocabulary: Vocabulary, text: str,
                 max_description_length: Optional[int] = None) -> str:
        """
        Replace every term name occurrence in text with tooltip markup

        Args:
            vocabulary: Terms to look for
            text: Input text or markup
            max_description_length: Overrides the configured limit

        Returns:
            Annotated text
        """
        if not vocabulary or not text:
            return text

        names, replacements = self.build_replacements(vocabulary, max_description_length)
        logger.debug(f"Annotating text of length {len(text)} with {len(names)} terms")

        if self.config.legacy_ordered_replace:
            result, _ = self._annotate_ordered(text, names, replacements)
            return result

        lookup = dict(zip(names, replacements))
        pattern = _build_pattern(tuple(names))
        return pattern.sub(lambda match: lookup[match.group(0)], text)

    def _annotate_ordered(self, text: str, names: List[str],
                          replacements: List[str]) -> Tuple[str, Dict[str, int]]:
        """
        Ordered multi-pass replace

        Each name is replaced everywhere before the next one is considered,
        so a later name also matches inside markup inserted for an earlier one.
        """
        result = text
        counts: Dict[str, int] = {}
        for name, replacement in zip(names, replacements):
            occurrences = result.count(name)
            if occurrences:
                counts[name] = occurrences
                result = result.replace(name, replacement)
        return result, counts

    def find_terms(self, vocabulary: Vocabulary, text: str,
                   max_description_length: Optional[int] = None
                   ) -> List[Tuple[GlossaryTerm, int]]:
        """
        Terms annotate() inserts a tooltip for, with their counts

        The single pass reports terms in order of first occurrence. Ordered
        replace reports them in vocabulary order and also counts matches
        inside markup inserted for earlier terms, one per inserted label.
        """
        if not vocabulary or not text:
            return []

        counts: Dict[str, int] = {}
        if self.config.legacy_ordered_replace:
            names, replacements = self.build_replacements(vocabulary, max_description_length)
            _, counts = self._annotate_ordered(text, names, replacements)
        else:
            for match in _build_pattern(tuple(vocabulary.names)).finditer(text):
                name = match.group(0)
                counts[name] = counts.get(name, 0) + 1

        return [(vocabulary.get(name), count) for name, count in counts.items()]

    def _resolve_limit(self, max_description_length: Optional[int]) -> int:
        limit = self.config.max_description_length if max_description_length is None \
            else max_description_length
        if limit < 0:
            raise ValueError(f"max_description_length must be >= 0, got {limit}")
        return limit


def annotate(vocabulary: Vocabulary, text: str, max_description_length: int = 100) -> str:
    """Annotate text with the default single-pass matcher"""
    return TermAnnotator().annotate(vocabulary, text, max_description_length)
