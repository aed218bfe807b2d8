"""
Glossary Tooltip Toggle
Click/keyboard visibility toggling for tooltip descriptions, on parsed markup.
Mirrors static/glossary_tooltip.js so the behaviour can be exercised server-side.
"""

import logging
from typing import Dict, List, Optional

from bs4 import BeautifulSoup, Tag

from .annotator import HIDDEN_CLASS, LABEL_CLASS

logger = logging.getLogger(__name__)

ACTIVATION_KEYS = ("Enter", " ")
BOUND_ATTRIBUTE = "data-glossary-tooltip-bound"


class TooltipToggle:
    """
    Binds tooltip labels per rendered region and flips description visibility

    Regions are tracked by id; attaching a region twice binds nothing.
    """

    def __init__(self):
        self._regions: Dict[str, BeautifulSoup] = {}

    def is_attached(self, region_id: str) -> bool:
        return region_id in self._regions

    def attach(self, region_id: str, markup: str) -> int:
        """
        Initialize a rendered region

        Args:
            region_id: Identifier of the region
            markup: Annotated markup of the region

        Returns:
            Number of labels newly bound. Already attached regions and labels
            carrying the bound marker are skipped.
        """
        if region_id in self._regions:
            logger.debug(f"Region '{region_id}' already attached")
            return 0

        soup = BeautifulSoup(markup, 'html.parser')
        bound = 0
        for label in soup.select(f'.{LABEL_CLASS}'):
            if label.has_attr(BOUND_ATTRIBUTE):
                continue
            label[BOUND_ATTRIBUTE] = ''
            label['role'] = 'button'
            label['tabindex'] = '0'
            description = label.find_next_sibling()
            if description is not None:
                label['aria-expanded'] = 'false' if self.is_hidden(description) else 'true'
            bound += 1

        self._regions[region_id] = soup
        return bound

    def detach(self, region_id: str):
        self._regions.pop(region_id, None)

    def labels(self, region_id: str) -> List[Tag]:
        if region_id not in self._regions:
            raise KeyError(f"Region '{region_id}' is not attached")
        return self._regions[region_id].select(f'.{LABEL_CLASS}')

    def render(self, region_id: str) -> str:
        if region_id not in self._regions:
            raise KeyError(f"Region '{region_id}' is not attached")
        return str(self._regions[region_id])

    @staticmethod
    def is_hidden(element: Tag) -> bool:
        return HIDDEN_CLASS in (element.get('class') or [])

    def activate(self, label: Tag) -> Optional[bool]:
        """
        Toggle the description following a label

        Returns:
            True if the description is now visible, False if hidden,
            None when the label has no sibling element
        """
        description = label.find_next_sibling()
        if description is None:
            return None

        classes = list(description.get('class') or [])
        if HIDDEN_CLASS in classes:
            classes.remove(HIDDEN_CLASS)
        else:
            classes.append(HIDDEN_CLASS)
        description['class'] = classes

        visible = HIDDEN_CLASS not in classes
        label['aria-expanded'] = 'true' if visible else 'false'
        return visible

    def handle_keydown(self, label: Tag, key: str) -> Optional[bool]:
        """Enter and space activate the label; other keys are ignored"""
        if key not in ACTIVATION_KEYS:
            return None
        return self.activate(label)
