"""
Dynamic attribute providers.

A host value can take over attribute resolution by subclassing
DynamicAttributeProvider. When it reports that it can provide an attribute,
its ``get_dynamic_attribute`` result is used directly: mapping/sequence
indexing, accessor methods and the member cache are skipped.

Example:
    class Totals(DynamicAttributeProvider):
        def __init__(self, rows):
            self.rows = rows

        def can_provide_dynamic_attribute(self, attribute_name):
            return attribute_name == "total"

        def get_dynamic_attribute(self, attribute_name, args):
            return sum(self.rows)

    # {{ totals.total }} -> sum of rows
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any


class DynamicAttributeProvider(ABC):
    """Base class for values that resolve their own attributes."""

    @abstractmethod
    def can_provide_dynamic_attribute(self, attribute_name: Any) -> bool:
        """
        Check whether this value provides the attribute.

        Args:
            attribute_name: Raw attribute value from the template (usually a
                str, but an integer for ``value[0]`` style access)

        Returns:
            True if ``get_dynamic_attribute`` should be used
        """
        pass

    @abstractmethod
    def get_dynamic_attribute(self, attribute_name: Any, args: Sequence[Any]) -> Any:
        """
        Produce the attribute value.

        Args:
            attribute_name: Raw attribute value from the template
            args: Evaluated call arguments (empty for plain access)

        Returns:
            Attribute value (None is a valid result)
        """
        pass


__all__ = ["DynamicAttributeProvider"]
