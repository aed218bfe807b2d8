"""
Glossary Tooltip Vocabulary
Ordered glossary terms and the loaders that build them
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Union

import yaml

logger = logging.getLogger(__name__)

DEFAULT_DETAIL_URL_TEMPLATE = "/taxonomy/term/{term_id}"

# Small built-in vocabulary used by the CLI self-test
SAMPLE_VOCABULARY_YAML = """
- name: Orbit
  description: "A curved path of an object around a star, planet, or moon, shaped by gravity."
  id: 1
- name: Gravity
  description: "The force by which a planet or other body draws objects toward its center."
  id: 2
- name: Escape velocity
  description: "The minimum speed needed for a free, non-propelled object to escape from the gravitational influence of a massive body without further propulsion."
  id: 3
"""


class VocabularyError(ValueError):
    """Raised when a vocabulary source cannot be read or has the wrong shape"""


@dataclass(frozen=True)
class GlossaryTerm:
    """A single glossary entry"""

    name: str
    description: str = ""
    detail_url: Optional[str] = None
    term_id: Optional[Union[str, int]] = None

    def __post_init__(self):
        # Null descriptions degrade to an empty description wrapper
        if self.description is None:
            object.__setattr__(self, "description", "")


class Vocabulary:
    """
    Ordered, name-unique sequence of glossary terms

    Order is load order. It decides substitution precedence in legacy mode.
    """

    def __init__(self, terms: Iterable[GlossaryTerm] = ()):
        self._terms: List[GlossaryTerm] = []
        self._by_name: Dict[str, GlossaryTerm] = {}

        for term in terms:
            if not term.name:
                logger.warning("Dropping glossary term with an empty name")
                continue
            if term.name in self._by_name:
                logger.warning(f"Duplicate glossary term '{term.name}', keeping the first one")
                continue
            self._terms.append(term)
            self._by_name[term.name] = term

    def __iter__(self) -> Iterator[GlossaryTerm]:
        return iter(self._terms)

    def __len__(self) -> int:
        return len(self._terms)

    def __bool__(self) -> bool:
        return bool(self._terms)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __repr__(self) -> str:
        return f"Vocabulary({len(self._terms)} terms)"

    @property
    def names(self) -> List[str]:
        return [term.name for term in self._terms]

    def get(self, name: str) -> Optional[GlossaryTerm]:
        """Exact, case-sensitive lookup"""
        return self._by_name.get(name)

    def search(self, query: str) -> List[GlossaryTerm]:
        """
        Search for terms containing query string

        Args:
            query: Search query (case-insensitive)

        Returns:
            Matching terms, best matches first
        """
        query_lower = query.lower()
        results = [
            term for term in self._terms
            if query_lower in term.name.lower() or query_lower in term.description.lower()
        ]

        def sort_key(term):
            name_lower = term.name.lower()
            if name_lower == query_lower:
                return (0, len(term.name))
            elif name_lower.startswith(query_lower):
                return (1, len(term.name))
            elif query_lower in name_lower:
                return (2, len(term.name))
            else:
                return (3, len(term.name))

        results.sort(key=sort_key)
        return results

    def to_records(self) -> List[Dict[str, Any]]:
        records = []
        for term in self._terms:
            record: Dict[str, Any] = {'name': term.name, 'description': term.description}
            if term.detail_url:
                record['url'] = term.detail_url
            if term.term_id is not None:
                record['id'] = term.term_id
            records.append(record)
        return records

    def export(self, format: str = "json") -> str:
        """
        Export vocabulary in different formats

        Args:
            format: Export format ("json", "yaml", "csv", "html")

        Returns:
            Formatted vocabulary string
        """
        if format == "json":
            return json.dumps(self.to_records(), indent=2, ensure_ascii=False)

        elif format == "yaml":
            return yaml.dump(self.to_records(), default_flow_style=False,
                             allow_unicode=True, sort_keys=False)

        elif format == "csv":
            lines = ["name,description,url"]
            for term in self._terms:
                cells = []
                for value in (term.name, term.description, term.detail_url or ""):
                    value = value.replace('"', '""')
                    if ',' in value or '"' in value or '\n' in value:
                        value = f'"{value}"'
                    cells.append(value)
                lines.append(",".join(cells))
            return "\n".join(lines)

        elif format == "html":
            html = "<dl>\n"
            for term in self._terms:
                html += f"  <dt><strong>{term.name}</strong></dt>\n"
                html += f"  <dd>{term.description}</dd>\n"
            html += "</dl>"
            return html

        else:
            raise ValueError(f"Unknown format: {format}")


def _term_from_record(record: Any, position: int,
                      detail_url_template: str) -> GlossaryTerm:
    if not isinstance(record, Mapping):
        raise VocabularyError(f"Vocabulary entry {position} is not a mapping: {record!r}")

    name = record.get('name')
    if name is None or str(name) == "":
        raise VocabularyError(f"Vocabulary entry {position} has no name")

    description = record.get('description')
    term_id = record.get('id', record.get('term_id'))
    detail_url = record.get('url') or record.get('detail_url')
    if not detail_url and term_id is not None:
        detail_url = detail_url_template.format(term_id=term_id)

    return GlossaryTerm(
        name=str(name),
        description="" if description is None else str(description),
        detail_url=detail_url,
        term_id=term_id,
    )


def vocabulary_from_data(data: Any,
                         detail_url_template: str = DEFAULT_DETAIL_URL_TEMPLATE) -> Vocabulary:
    """
    Build a vocabulary from parsed data

    Accepts a list of records ({name, description, url|detail_url, id}),
    a ``name: description`` mapping, or None for an empty vocabulary.
    """
    if data is None:
        return Vocabulary()

    if isinstance(data, Vocabulary):
        return data

    if isinstance(data, Mapping):
        # Mapping values may be plain descriptions or records without a name
        terms = []
        for position, (name, value) in enumerate(data.items()):
            if isinstance(value, Mapping):
                record = dict(value)
                record.setdefault('name', name)
            else:
                record = {'name': name, 'description': value}
            terms.append(_term_from_record(record, position, detail_url_template))
        return Vocabulary(terms)

    if isinstance(data, (list, tuple)):
        return Vocabulary(
            _term_from_record(record, position, detail_url_template)
            for position, record in enumerate(data)
        )

    raise VocabularyError(f"Unsupported vocabulary data of type {type(data).__name__}")


def parse_vocabulary(content: str,
                     detail_url_template: str = DEFAULT_DETAIL_URL_TEMPLATE) -> Vocabulary:
    """Parse YAML (or JSON, which YAML accepts) vocabulary text"""
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise VocabularyError(f"Malformed vocabulary: {e}")
    return vocabulary_from_data(data, detail_url_template)


def load_vocabulary(path: Union[str, Path],
                    detail_url_template: str = DEFAULT_DETAIL_URL_TEMPLATE) -> Vocabulary:
    """
    Load a vocabulary file

    Args:
        path: YAML or JSON file
        detail_url_template: Used for terms with an id but no url

    Returns:
        Vocabulary in file order
    """
    path = Path(path)
    try:
        content = path.read_text(encoding='utf-8')
    except OSError as e:
        raise VocabularyError(f"Could not read vocabulary {path}: {e}")

    vocabulary = parse_vocabulary(content, detail_url_template)
    logger.info(f"Loaded vocabulary with {len(vocabulary)} terms from {path}")
    return vocabulary


def sample_vocabulary() -> Vocabulary:
    return parse_vocabulary(SAMPLE_VOCABULARY_YAML)

