"""Combine two configuration trees into one.

A combiner takes two :class:`~web_config_combiner.models.ConfigNode` trees and
builds a new tree representing both. The input trees are only read; result
nodes are freshly allocated, while children that take no part in a merge are
referenced as-is from the inputs.

Example:
    from web_config_combiner.combiner import MergeCombiner
    from web_config_combiner.xml_reader import XMLConfigurationReader

    reader = XMLConfigurationReader()
    defaults = reader.read("defaults.xml")
    overrides = reader.read("site.xml")

    combiner = MergeCombiner()
    combiner.add_list_node("mapping")
    tree = combiner.combine(overrides, defaults)

List nodes:
    Some child names are expected to repeat without anything that tells the
    occurrences apart (``<mapping>`` entries of a routing table, for
    example). Registering such a name with :meth:`NodeCombiner.add_list_node`
    changes how :class:`MergeCombiner` treats ambiguous matches for it; see
    :meth:`MergeCombiner.can_combine`.
"""

from __future__ import annotations

import logging
from typing import FrozenSet, List, Optional, Set

from .models import ConfigNode

logger = logging.getLogger(__name__)


class NodeCombiner:
    """Base class for tree combiners holding the list node registry."""

    def __init__(self) -> None:
        self._list_nodes: Set[str] = set()

    def add_list_node(self, name: str) -> None:
        """Register ``name`` as a child name that is expected to repeat."""
        self._list_nodes.add(name)

    @property
    def list_nodes(self) -> FrozenSet[str]:
        return frozenset(self._list_nodes)

    def is_list_node(self, node: ConfigNode) -> bool:
        return node.name in self._list_nodes

    def combine(self, node1: ConfigNode, node2: ConfigNode) -> ConfigNode:
        raise NotImplementedError


class MergeCombiner(NodeCombiner):
    """Merge two trees, letting the first one win on conflicts.

    The result root carries ``node1``'s name and value. Attributes of
    ``node1`` are copied and extended by those attributes of ``node2`` whose
    name does not occur on ``node1``. Each child of ``node1`` is merged
    recursively with its unique counterpart in ``node2`` (see
    :meth:`can_combine`) or kept unchanged when there is none. Children of
    ``node2`` that were neither merged nor discarded are appended at the end in
    their original order.

    Example:
        >>> a = ConfigNode("cfg", children=[ConfigNode("x", attributes=[ConfigNode("a", value="1")])])
        >>> b = ConfigNode("cfg", children=[ConfigNode("x", attributes=[ConfigNode("a", value="1")]),
        ...                                 ConfigNode("y")])
        >>> [c.name for c in MergeCombiner().combine(a, b).children]
        ['x', 'y']
    """

    def combine(self, node1: ConfigNode, node2: ConfigNode) -> ConfigNode:
        result = self._combine(node1, node2)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Combined tree:\n%s", format_tree(result))
        return result

    def _combine(self, node1: ConfigNode, node2: ConfigNode) -> ConfigNode:
        result = ConfigNode(node1.name, value=node1.value)
        self.add_attributes(result, node1, node2)

        children2 = list(node2.children or [])
        for child1 in node1.children or []:
            child2 = self.can_combine(node1, node2, child1, children2)
            if child2 is not None:
                result.children.append(self._combine(child1, child2))
                _remove_node(children2, child2)
            else:
                result.children.append(child1)

        result.children.extend(children2)
        return result

    def add_attributes(
        self, result: ConfigNode, node1: ConfigNode, node2: ConfigNode
    ) -> None:
        """Copy ``node1``'s attributes and the ones ``node1`` does not define."""
        result.attributes.extend(node1.attributes or [])
        for attr in node2.attributes or []:
            if node1.get_attribute_count(attr.name) == 0:
                result.attributes.append(attr)

    def can_combine(
        self,
        node1: ConfigNode,
        node2: ConfigNode,
        child: ConfigNode,
        children2: List[ConfigNode],
    ) -> Optional[ConfigNode]:
        """Find the child of ``node2`` that ``child`` should be merged with.

        Candidates are all children of ``node2`` named like ``child``. A
        candidate is rejected if one of ``child``'s attributes occurs exactly
        once on it with a different value; missing or repeated attributes do
        not reject.

        Args:
            node1: Parent of ``child``.
            node2: Node whose children are searched.
            child: Child of ``node1`` looking for a partner.
            children2: Children of ``node2`` still waiting to be appended to
                the result. Modified in place when matches are ambiguous.

        Returns:
            The single surviving candidate, or ``None``. With more than one
            survivor and ``child`` not being a list node, all survivors are
            removed from ``children2`` and therefore do not show up in the
            result at all. List nodes leave ``children2`` untouched.
        """
        candidates = []
        for node in node2.get_children(child.name):
            if self._attributes_match(child, node):
                candidates.append(node)

        if len(candidates) == 1:
            return candidates[0]
        if len(candidates) > 1 and not self.is_list_node(child):
            logger.debug(
                "Discarding %d ambiguous matches for '%s'", len(candidates), child.name
            )
            for node in candidates:
                _remove_node(children2, node)
        return None

    @staticmethod
    def _attributes_match(child: ConfigNode, candidate: ConfigNode) -> bool:
        for attr1 in child.attributes or []:
            others = candidate.get_attributes(attr1.name)
            if len(others) == 1 and attr1.value != others[0].value:
                return False
        return True


def _remove_node(nodes: List[ConfigNode], node: ConfigNode) -> None:
    # ConfigNode compares by value; only the very same object must go.
    for index, candidate in enumerate(nodes):
        if candidate is node:
            del nodes[index]
            return


def format_tree(node: ConfigNode, indent: int = 0) -> str:
    """Render a tree as indented text, one node per line."""
    attrs = " ".join(f"{a.name}={a.value!r}" for a in node.attributes or [])
    line = "  " * indent + node.name
    if attrs:
        line += f" [{attrs}]"
    if node.value is not None:
        line += f" = {node.value!r}"
    lines = [line]
    for child in node.children or []:
        lines.append(format_tree(child, indent + 1))
    return "\n".join(lines)
