"""
Tests for LxmlHistoricalDataInterpreter.

Covers the structural parse (shape rules, malformed input) and the XPath
extraction of the latest price-change date, including its document-order
selection.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest
from loguru import logger

from catalog.domain.entities.historical_data import (
    ObjectNode,
    ParseFailure,
    ScalarNode,
    SequenceNode,
    Structured,
)
from catalog.infrastructure.historical_data.lxml_interpreter import LxmlHistoricalDataInterpreter
from conftest import OUT_OF_ORDER_HISTORY_XML, PRICE_HISTORY_XML, UNBALANCED_HISTORY_XML


class TestParseStructure:
    @pytest.mark.parametrize("text", [None, "", "   \n\t"])
    def test_empty_input_is_empty_structure(self, interpreter, text):
        outcome = interpreter.parse_structure(text)

        assert outcome == Structured(ObjectNode())
        assert outcome.is_failure is False
        assert outcome.to_primitive() == {}

    def test_single_leaf_is_scalar_under_root_name(self, interpreter):
        outcome = interpreter.parse_structure("<a>5</a>")

        assert outcome == Structured(ObjectNode({"a": ScalarNode("5")}))
        assert outcome.to_primitive() == {"a": "5"}

    def test_empty_leaf_is_empty_string(self, interpreter):
        assert interpreter.parse_structure("<a/>").to_primitive() == {"a": ""}

    def test_attributes_are_merged_into_element(self, interpreter):
        outcome = interpreter.parse_structure(PRICE_HISTORY_XML)

        assert outcome.to_primitive() == {
            "history": {
                "price_change": [
                    {"date": "2024-01-01", "price": "10"},
                    {"date": "2024-03-05", "price": "12"},
                ]
            }
        }

    def test_repeated_siblings_become_ordered_sequence(self, interpreter):
        outcome = interpreter.parse_structure("<item><note>first</note><note>second</note></item>")

        assert outcome == Structured(
            ObjectNode(
                {
                    "item": ObjectNode(
                        {"note": SequenceNode((ScalarNode("first"), ScalarNode("second")))}
                    )
                }
            )
        )
        assert outcome.to_primitive() == {"item": {"note": ["first", "second"]}}

    def test_single_child_is_not_wrapped_in_sequence(self, interpreter):
        outcome = interpreter.parse_structure("<item><note>only</note></item>")

        assert outcome.to_primitive() == {"item": {"note": "only"}}

    def test_child_element_wins_over_attribute_with_same_name(self, interpreter):
        outcome = interpreter.parse_structure('<product price="1"><price>2</price></product>')

        assert outcome.to_primitive() == {"product": {"price": "2"}}

    def test_text_next_to_attributes_is_kept_under_underscore(self, interpreter):
        outcome = interpreter.parse_structure('<note lang="en">restocked</note>')

        assert outcome.to_primitive() == {"note": {"lang": "en", "_": "restocked"}}

    def test_formatting_whitespace_is_ignored(self, interpreter):
        text = """
            <history>
                <price_change date="2024-01-01" price="10"/>
            </history>
        """

        outcome = interpreter.parse_structure(text)

        assert outcome.to_primitive() == {
            "history": {"price_change": {"date": "2024-01-01", "price": "10"}}
        }

    def test_comments_are_skipped(self, interpreter):
        outcome = interpreter.parse_structure("<a><!-- imported -->5</a>")

        assert outcome.to_primitive() == {"a": "5"}

    def test_predefined_entities_are_decoded(self, interpreter):
        outcome = interpreter.parse_structure("<a>Fish &amp; Chips</a>")

        assert outcome.to_primitive() == {"a": "Fish & Chips"}

    def test_internal_dtd_entities_are_expanded(self, interpreter):
        outcome = interpreter.parse_structure('<!DOCTYPE a [<!ENTITY e "x">]><a>&e;</a>')

        assert outcome.to_primitive() == {"a": "x"}

    def test_xml_declaration_is_accepted(self, interpreter):
        outcome = interpreter.parse_structure('<?xml version="1.0" encoding="UTF-8"?><a>5</a>')

        assert outcome.to_primitive() == {"a": "5"}

    def test_prefixed_names_keep_their_prefix(self, interpreter):
        outcome = interpreter.parse_structure(
            '<h:history xmlns:h="urn:catalog"><h:note>x</h:note></h:history>'
        )

        assert outcome.to_primitive() == {"h:history": {"h:note": "x"}}

    def test_parse_is_idempotent(self, interpreter):
        assert interpreter.parse_structure(PRICE_HISTORY_XML) == interpreter.parse_structure(
            PRICE_HISTORY_XML
        )

    def test_attribute_order_does_not_affect_equality(self, interpreter):
        first = interpreter.parse_structure('<r x="1" y="2"/>')
        second = interpreter.parse_structure('<r y="2" x="1"/>')

        assert first == second

    def test_unbalanced_tag_returns_failure_with_raw_text(self, interpreter):
        outcome = interpreter.parse_structure(UNBALANCED_HISTORY_XML)

        assert isinstance(outcome, ParseFailure)
        assert outcome.is_failure is True
        assert outcome.raw == UNBALANCED_HISTORY_XML
        assert outcome.message
        assert outcome.to_primitive() == {"raw": UNBALANCED_HISTORY_XML, "error": outcome.message}

    @pytest.mark.parametrize(
        "text",
        [
            "<a>&nbsp;</a>",
            "not xml at all",
            "<a></b>",
            "<a>1</a><b>2</b>",
            "<a>\ud800</a>",
        ],
    )
    def test_malformed_input_never_raises(self, interpreter, text):
        outcome = interpreter.parse_structure(text)

        assert isinstance(outcome, ParseFailure)
        assert outcome.raw == text

    def test_malformed_input_logs_a_warning(self, interpreter):
        messages: list[str] = []
        handler_id = logger.add(messages.append, level="WARNING", format="{message}")
        try:
            interpreter.parse_structure(UNBALANCED_HISTORY_XML)
        finally:
            logger.remove(handler_id)

        assert len(messages) == 1
        assert "Could not parse historical data XML" in messages[0]

    def test_input_text_is_not_modified(self, interpreter):
        text = "  <a>5</a>  "

        interpreter.parse_structure(text)
        interpreter.extract_latest_change_date(text)

        assert text == "  <a>5</a>  "


class TestExtractLatestChangeDate:
    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_empty_input_is_absent(self, interpreter, text):
        assert interpreter.extract_latest_change_date(text) is None

    def test_returns_last_price_change_date(self, interpreter):
        assert interpreter.extract_latest_change_date(PRICE_HISTORY_XML) == "2024-03-05"

    def test_selection_is_by_document_order_not_by_date(self, interpreter):
        assert interpreter.extract_latest_change_date(OUT_OF_ORDER_HISTORY_XML) == "2024-01-01"

    def test_returns_plain_str(self, interpreter):
        result = interpreter.extract_latest_change_date(PRICE_HISTORY_XML)

        assert type(result) is str

    def test_malformed_input_is_absent(self, interpreter):
        assert interpreter.extract_latest_change_date(UNBALANCED_HISTORY_XML) is None

    def test_unencodable_text_is_absent(self, interpreter):
        text = '<history><price_change date="2024-01-01"/>\ud800</history>'

        assert interpreter.extract_latest_change_date(text) is None

    def test_last_price_change_across_all_history_elements_wins(self, interpreter):
        text = (
            "<product>"
            '<history><price_change date="A"/><price_change date="B"/></history>'
            '<history><price_change date="C"/></history>'
            "</product>"
        )

        assert interpreter.extract_latest_change_date(text) == "C"

    def test_history_nested_below_root_is_found(self, interpreter):
        text = (
            "<product><history>"
            '<price_change date="2023-12-31"/>'
            '<price_change date="2024-02-02"/>'
            "</history></product>"
        )

        assert interpreter.extract_latest_change_date(text) == "2024-02-02"

    def test_price_change_outside_history_is_ignored(self, interpreter):
        text = '<prices><price_change date="2024-01-01"/></prices>'

        assert interpreter.extract_latest_change_date(text) is None

    def test_last_element_without_date_is_absent(self, interpreter):
        text = '<history><price_change date="2024-01-01"/><price_change price="3"/></history>'

        assert interpreter.extract_latest_change_date(text) is None

    def test_other_history_children_do_not_count(self, interpreter):
        text = (
            "<history>"
            '<price_change date="2024-01-01"/>'
            '<stock_change date="2024-06-01"/>'
            "</history>"
        )

        assert interpreter.extract_latest_change_date(text) == "2024-01-01"


def test_concurrent_calls_are_independent():
    interpreter = LxmlHistoricalDataInterpreter()
    inputs = [PRICE_HISTORY_XML, OUT_OF_ORDER_HISTORY_XML, UNBALANCED_HISTORY_XML] * 20

    with ThreadPoolExecutor(max_workers=8) as pool:
        dates = list(pool.map(interpreter.extract_latest_change_date, inputs))
        outcomes = list(pool.map(interpreter.parse_structure, inputs))

    assert dates == ["2024-03-05", "2024-01-01", None] * 20
    assert outcomes[0::3] == [interpreter.parse_structure(PRICE_HISTORY_XML)] * 20
    assert all(isinstance(o, ParseFailure) for o in outcomes[2::3])
