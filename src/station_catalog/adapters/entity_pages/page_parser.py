"""Extraction of enrichment facts from entity pages using selectolax."""

from selectolax.parser import HTMLParser

from station_catalog.domain.models import EnrichmentResult
from station_catalog.domain.ports.entity_page_source import EntityPageParser

DEFAULT_TITLE_SELECTOR = "h1"
DEFAULT_ADDRESS_SELECTOR = "address"


def _node_text(tree: HTMLParser, selector: str) -> str | None:
    """Return the stripped text of the first node matching selector, if non-blank."""
    node = tree.css_first(selector)
    if node is None:
        return None
    text = " ".join(node.text(separator=" ").split())
    return text or None


class SelectorEntityPageParser(EntityPageParser):
    """Finds the title and address nodes of a page with fixed CSS selectors."""

    def __init__(
        self,
        title_selector: str = DEFAULT_TITLE_SELECTOR,
        address_selector: str = DEFAULT_ADDRESS_SELECTOR,
    ) -> None:
        self._title_selector = title_selector
        self._address_selector = address_selector

    def parse(self, entity_id: int, page: str) -> EnrichmentResult | None:
        """Extract title and address.

        Returns:
            The result, or None unless both nodes are present with text.
        """
        tree = HTMLParser(page)
        title = _node_text(tree, self._title_selector)
        if title is None:
            return None
        address = _node_text(tree, self._address_selector)
        if address is None:
            return None
        return EnrichmentResult(id=entity_id, title=title, address=address)
