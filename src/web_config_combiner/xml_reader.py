"""Read XML documents into :class:`ConfigNode` trees.

Each element becomes a node named after its tag. XML attributes become
attribute nodes in document order and the element's text becomes the node
value (``None`` for elements without text). Parsing goes through
:mod:`xml.sax` so that an entity resolver can take over loading of external
DTDs and entities.

Typical usage:
        from web_config_combiner.xml_reader import XMLConfigurationReader, combine_documents

        root = XMLConfigurationReader().read("config.xml")
        print(root.name, [child.name for child in root.children])

        # Merge a site specific file over shipped defaults
        merged = combine_documents("site.xml", "defaults.xml", list_nodes=["mapping"])

Notes:
* External entities are only loaded when a resolver is supplied. Without one,
    references to entities declared in an external DTD are skipped.
* Namespace processing is off; prefixed names are kept verbatim (``ns:item``).
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import IO, Iterable, List, Optional, Union
from xml.sax import SAXParseException, make_parser
from xml.sax.handler import ContentHandler, EntityResolver, feature_external_ges

from .combiner import MergeCombiner
from .exceptions import ConfigurationError
from .models import ConfigNode
from .settings import ReaderSettings

logger = logging.getLogger(__name__)

XMLSource = Union[str, Path, bytes, IO[bytes]]


class _TreeBuilder(ContentHandler):
    """SAX handler assembling a :class:`ConfigNode` tree."""

    def __init__(self, trim_values: bool) -> None:
        super().__init__()
        self.trim_values = trim_values
        self.root: Optional[ConfigNode] = None
        self._stack: List[ConfigNode] = []
        self._text: List[List[str]] = []

    def startElement(self, name, attrs):
        node = ConfigNode(
            name,
            attributes=[ConfigNode(key, value=attrs.getValue(key)) for key in attrs.getNames()],
        )
        if self._stack:
            self._stack[-1].children.append(node)
        else:
            self.root = node
        self._stack.append(node)
        self._text.append([])

    def characters(self, content):
        if self._text:
            self._text[-1].append(content)

    def endElement(self, name):
        node = self._stack.pop()
        text = "".join(self._text.pop())
        if self.trim_values:
            text = text.strip()
        node.value = text or None


class XMLConfigurationReader:
    """Parse XML configuration documents.

    Args:
        entity_resolver: Optional SAX entity resolver, usually a
            :class:`~web_config_combiner.resolver.DefaultEntityResolver`.
            Supplying one enables loading of external entities.
        settings: Reader settings; only ``trim_values`` is relevant here.
    """

    def __init__(
        self,
        entity_resolver: Optional[EntityResolver] = None,
        settings: Optional[ReaderSettings] = None,
    ) -> None:
        self.entity_resolver = entity_resolver
        self.settings = settings or ReaderSettings()

    def read(self, source: XMLSource) -> ConfigNode:
        """Parse ``source`` and return the root node.

        Args:
            source: File path, binary file object or raw document bytes.

        Returns:
            Root :class:`ConfigNode` of the document.

        Raises:
            ConfigurationError: If the document is not well-formed.
            EntityResolutionError: If the resolver cannot load a registered
                entity.
        """
        if isinstance(source, bytes):
            source = io.BytesIO(source)
        elif isinstance(source, Path):
            source = str(source)

        builder = _TreeBuilder(self.settings.trim_values)
        parser = make_parser()
        parser.setContentHandler(builder)
        if self.entity_resolver is not None:
            parser.setFeature(feature_external_ges, True)
            parser.setEntityResolver(self.entity_resolver)

        try:
            parser.parse(source)
        except SAXParseException as e:
            raise ConfigurationError(f"Cannot parse XML configuration: {e}") from e

        if builder.root is None:
            raise ConfigurationError("XML configuration has no root element")
        logger.debug(f"Read configuration tree rooted at '{builder.root.name}'")
        return builder.root

    def read_string(self, text: str) -> ConfigNode:
        return self.read(text.encode("utf-8"))


def combine_documents(
    first: XMLSource,
    second: XMLSource,
    list_nodes: Iterable[str] = (),
    entity_resolver: Optional[EntityResolver] = None,
    settings: Optional[ReaderSettings] = None,
) -> ConfigNode:
    """Read two documents and merge them with :class:`MergeCombiner`.

    Args:
        first: Document whose values and attributes take precedence.
        second: Document supplying everything ``first`` does not define.
        list_nodes: Child names to register as list nodes on the combiner.
        entity_resolver: Optional resolver used for both documents.
        settings: Reader settings used for both documents.

    Returns:
        Root of the combined tree.
    """
    reader = XMLConfigurationReader(entity_resolver=entity_resolver, settings=settings)
    combiner = MergeCombiner()
    for name in list_nodes:
        combiner.add_list_node(name)
    return combiner.combine(reader.read(first), reader.read(second))
