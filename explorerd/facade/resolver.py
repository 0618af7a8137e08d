"""
Element search: decide which kind of element an opaque ElementID denotes.

Siacoin outputs, siafund outputs and file contracts share one identifier
space, so the only way to learn the kind is to look the ID up. Kinds are
tried in a fixed order (siacoin, siafund, contract) and the first hit wins.
An ID that none of the lookups know is a normal "none" result, not an error.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Union

from explorerd.capabilities.interfaces import Explorer
from explorerd.explorer_logging import get_logger
from explorerd.types import FileContractElement, SiacoinElement, SiafundElement

logger = get_logger(__name__)

Element = Union[SiacoinElement, SiafundElement, FileContractElement]


class ElementKind(str, enum.Enum):
    SIACOIN = "siacoin"
    SIAFUND = "siafund"
    CONTRACT = "contract"
    NONE = "none"


@dataclass(frozen=True)
class SearchResult:
    """Tagged result: kind plus the element for that kind (None for NONE)."""

    kind: ElementKind
    element: Element | None = None

    def __post_init__(self) -> None:
        if (self.kind is ElementKind.NONE) != (self.element is None):
            raise ValueError(f"search result of kind {self.kind.value} with element {self.element!r}")

    @classmethod
    def none(cls) -> "SearchResult":
        return cls(kind=ElementKind.NONE)

    @property
    def found(self) -> bool:
        return self.kind is not ElementKind.NONE


def _lookups(explorer: Explorer) -> list[tuple[ElementKind, Callable[[str], Element]]]:
    # Order is observable: an ID known to two kinds resolves to the first.
    return [
        (ElementKind.SIACOIN, explorer.siacoin_element),
        (ElementKind.SIAFUND, explorer.siafund_element),
        (ElementKind.CONTRACT, explorer.file_contract_element),
    ]


def resolve_element(explorer: Explorer, id: str) -> SearchResult:
    """Return the first kind whose lookup succeeds for id, or SearchResult.none()."""
    for kind, lookup in _lookups(explorer):
        try:
            element = lookup(id)
        except Exception as e:
            logger.debug("element_search_miss", element_id=id, kind=kind.value, error=str(e))
            continue
        return SearchResult(kind=kind, element=element)
    logger.debug("element_search_not_found", element_id=id)
    return SearchResult.none()
