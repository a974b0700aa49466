"""
Infrastructure adapter: lxml → IHistoricalDataInterpreter.

All lxml details (parser configuration, element walking, XPath evaluation) are
confined here; the rest of the codebase only sees ParseOutcome trees and
plain date strings.

Conversion rules for parse_structure():
  - the root element is the single key of the result;
  - attributes and child elements of an element share one set of field names,
    and a child element replaces an attribute of the same name;
  - repeated same-named children become a SequenceNode in document order;
  - an element with neither attributes nor children becomes its text;
  - text mixed with attributes or children is kept under TEXT_KEY.

Internal DTD entities are expanded; external ones are never loaded.

extract_latest_change_date() picks the last price_change in document order.
It does not compare dates: a later element with an older date still wins.
"""

from typing import Optional

from loguru import logger
from lxml import etree

from catalog.domain.entities.historical_data import (
    HistoricalNode,
    ObjectNode,
    ParseFailure,
    ParseOutcome,
    ScalarNode,
    SequenceNode,
    Structured,
)
from catalog.domain.ports.historical_data_port import IHistoricalDataInterpreter

LATEST_PRICE_CHANGE_DATE_XPATH = "(//history/price_change)[last()]/@date"
TEXT_KEY = "_"

# Lone surrogates cannot be encoded for the parser; they are malformed input too.
MALFORMED_INPUT_ERRORS = (etree.XMLSyntaxError, UnicodeEncodeError)


class LxmlHistoricalDataInterpreter(IHistoricalDataInterpreter):
    """Parses stored historical XML with lxml. Holds no state between calls."""

    def parse_structure(self, text: Optional[str]) -> ParseOutcome:
        if _is_blank(text):
            return Structured(ObjectNode())
        try:
            root = self._parse(text)
        except MALFORMED_INPUT_ERRORS as exc:
            logger.warning("Could not parse historical data XML: {}", exc)
            return ParseFailure(raw=text, message=_diagnostic(exc))
        return Structured(ObjectNode({_qualified_name(root, root.tag): self._to_node(root)}))

    def extract_latest_change_date(self, text: Optional[str]) -> Optional[str]:
        if _is_blank(text):
            return None
        try:
            root = self._parse(text)
        except MALFORMED_INPUT_ERRORS as exc:
            logger.warning("Skipping XPath lookup on malformed historical data: {}", exc)
            return None

        matches = root.xpath(LATEST_PRICE_CHANGE_DATE_XPATH)
        if not matches:
            logger.debug("No match for {!r} in historical data", LATEST_PRICE_CHANGE_DATE_XPATH)
            return None
        return str(matches[-1])

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _parse(text: str) -> etree._Element:
        # A fresh parser per call: nothing is shared between concurrent requests.
        parser = etree.XMLParser(resolve_entities="internal", no_network=True)
        return etree.fromstring(text.encode("utf-8"), parser)

    def _to_node(self, element: etree._Element) -> HistoricalNode:
        children = [child for child in element if isinstance(child.tag, str)]
        own_text = _own_text(element)

        if not children and not element.attrib:
            return ScalarNode(own_text)

        fields: dict[str, HistoricalNode] = {
            _qualified_name(element, key): ScalarNode(value)
            for key, value in element.attrib.items()
        }
        if own_text.strip():
            fields[TEXT_KEY] = ScalarNode(own_text)

        grouped: dict[str, list[HistoricalNode]] = {}
        for child in children:
            grouped.setdefault(_qualified_name(child, child.tag), []).append(self._to_node(child))
        for name, nodes in grouped.items():
            fields[name] = nodes[0] if len(nodes) == 1 else SequenceNode(tuple(nodes))

        return ObjectNode(fields)


def _is_blank(text: Optional[str]) -> bool:
    return not text or not text.strip()


def _diagnostic(exc: Exception) -> str:
    return str(exc) or type(exc).__name__


def _own_text(element: etree._Element) -> str:
    """Text directly inside *element*, including text that follows comments or children."""
    parts = [element.text or ""]
    parts.extend(child.tail or "" for child in element)
    return "".join(parts)


def _qualified_name(element: etree._Element, tag: str) -> str:
    """Render a Clark-notation name as ``prefix:local`` using *element*'s namespace map."""
    qname = etree.QName(tag)
    if qname.namespace is None:
        return qname.localname
    prefix = next(
        (p for p, uri in element.nsmap.items() if p and uri == qname.namespace),
        None,
    )
    return f"{prefix}:{qname.localname}" if prefix else qname.localname
