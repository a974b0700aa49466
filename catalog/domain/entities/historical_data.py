"""
Domain entities for interpreted historical data.
Zero external dependencies: pure Python dataclasses only.

A stored historical record is free-form XML text. Interpreting it yields a
generic tree made of three node shapes:

  - ScalarNode:   text content of a leaf element.
  - ObjectNode:   attributes and child elements of an element, keyed by name.
  - SequenceNode: repeated same-named children, in document order.

The structural parse is returned as a ParseOutcome: either Structured (the
tree) or ParseFailure (the raw text plus a parser diagnostic). Failure is a
normal return value, not an exception.
"""

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class ScalarNode:
    text: str

    def to_primitive(self) -> str:
        return self.text


@dataclass(frozen=True)
class ObjectNode:
    fields: dict[str, "HistoricalNode"] = field(default_factory=dict)

    def to_primitive(self) -> dict[str, Any]:
        return {name: node.to_primitive() for name, node in self.fields.items()}


@dataclass(frozen=True)
class SequenceNode:
    items: tuple["HistoricalNode", ...] = ()

    def to_primitive(self) -> list[Any]:
        return [node.to_primitive() for node in self.items]


HistoricalNode = Union[ScalarNode, ObjectNode, SequenceNode]


@dataclass(frozen=True)
class Structured:
    """Successful parse. *value* is empty when there was no data at all."""

    value: ObjectNode

    @property
    def is_failure(self) -> bool:
        return False

    def to_primitive(self) -> dict[str, Any]:
        return self.value.to_primitive()


@dataclass(frozen=True)
class ParseFailure:
    """The text was not well-formed XML."""

    raw: str
    message: str

    @property
    def is_failure(self) -> bool:
        return True

    def to_primitive(self) -> dict[str, Any]:
        return {"raw": self.raw, "error": self.message}


ParseOutcome = Union[Structured, ParseFailure]
