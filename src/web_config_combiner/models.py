"""Core data structure for hierarchical configuration trees.

A configuration tree is built from :class:`ConfigNode` objects. Every node has
a name, an optional scalar value, and two ordered lists of further nodes:
``attributes`` (XML attributes, for instance) and ``children`` (nested
elements). Names are not unique; a node may hold several children or several
attributes with the same name.

Typical construction (simplified)::

        from web_config_combiner.models import ConfigNode

        port = ConfigNode("port", value="8080")
        server = ConfigNode(
                "server",
                attributes=[ConfigNode("name", value="primary")],
                children=[port],
        )

        # Flatten tree for inspection
        names = [n.name for n in server.iter_nodes()]
        # Serialize for API response
        payload = server.to_dict()

Design notes:
        * Readers build a tree once and hand it out; consumers such as the
            combiners treat it as read-only and never modify the lists.
        * ``None`` passed for ``attributes`` or ``children`` is normalised to an
            empty list. A ``None`` assigned later is still read as empty by the
            accessors and by the combiners.
        * ``to_dict`` produces the payload served by the configuration router in
            :mod:`web_config_combiner.web`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass
class ConfigNode:
    """A named node of a configuration tree.

    Attributes:
        name: Node name (element or attribute name for XML sources).
        value: Optional scalar value; its type is opaque to the library.
        attributes: Ordered attribute nodes. Attribute nodes are plain
            ``ConfigNode`` instances, normally without children.
        children: Ordered child nodes.

    Example:
        >>> node = ConfigNode("database", attributes=[ConfigNode("id", value="main")])
        >>> node.get_attribute_count("id")
        1
        >>> len(node.children)
        0
    """

    name: str
    value: Optional[Any] = None
    attributes: List["ConfigNode"] = field(default_factory=list)
    children: List["ConfigNode"] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.attributes is None:
            self.attributes = []
        if self.children is None:
            self.children = []

    def get_children(self, name: Optional[str] = None) -> List["ConfigNode"]:
        """Return the children, optionally only those called ``name``."""
        if name is None:
            return list(self.children or [])
        return [child for child in self.children or [] if child.name == name]

    def get_attributes(self, name: Optional[str] = None) -> List["ConfigNode"]:
        """Return the attribute nodes, optionally only those called ``name``."""
        if name is None:
            return list(self.attributes or [])
        return [attr for attr in self.attributes or [] if attr.name == name]

    def get_child_count(self, name: Optional[str] = None) -> int:
        return len(self.get_children(name))

    def get_attribute_count(self, name: Optional[str] = None) -> int:
        return len(self.get_attributes(name))

    def iter_nodes(self) -> "List[ConfigNode]":
        """Return a depth-first list of this node and all descendant children.

        Attribute nodes are not included.

        Example:
            >>> parent = ConfigNode("a", children=[ConfigNode("b")])
            >>> [n.name for n in parent.iter_nodes()]
            ['a', 'b']
        """
        nodes: List[ConfigNode] = [self]
        for child in self.children or []:
            nodes.extend(child.iter_nodes())
        return nodes

    def to_dict(self) -> dict:
        """Convert the node (recursively) into a JSON-serializable dictionary.

        Values are passed through unchanged, so the result is only JSON-safe
        when the stored values are.
        """
        return {
            "name": self.name,
            "value": self.value,
            "attributes": [
                {"name": attr.name, "value": attr.value} for attr in self.attributes or []
            ],
            "children": [child.to_dict() for child in self.children or []],
        }
