"""Toggle filter.

Removes elements marked ``data-toggleable="flag"`` when the input data
sets ``flag`` to boolean ``false``. Runs before any binding.
"""

import logging
from typing import Any

from bs4 import BeautifulSoup, Tag

from bindery.interfaces.template import TOGGLE_ATTR
from bindery.strategies.template_engine.context import get_property

logger = logging.getLogger(__name__)


class ToggleFilter:
    """Drops toggled-off elements and their subtrees from a document."""

    def apply(self, document: BeautifulSoup | Tag, flags: Any) -> int:
        """Remove every element whose toggle flag is ``False`` in ``flags``.

        Absent keys, ``True`` and non-boolean values keep the element.

        Args:
            document: The working copy to filter in place.
            flags: Root input data; only its top-level fields are consulted.

        Returns:
            Number of elements removed.
        """
        removed = 0
        for element in document.find_all(attrs={TOGGLE_ATTR: True}):
            # Already gone with an enclosing toggled-off element.
            if element.decomposed:
                continue
            flag = element.get(TOGGLE_ATTR)
            if get_property(flags, flag) is False:
                logger.debug(f"Removing <{element.name}> toggled off by '{flag}'")
                element.decompose()
                removed += 1

        if removed:
            logger.info(f"Toggle filter removed {removed} element(s)")
        return removed

    def flag_names(self, document: BeautifulSoup | Tag) -> list[str]:
        """Return toggle flag names in document order, without duplicates."""
        names: list[str] = []
        for element in document.find_all(attrs={TOGGLE_ATTR: True}):
            flag = element.get(TOGGLE_ATTR)
            if flag and flag not in names:
                names.append(flag)
        return names
