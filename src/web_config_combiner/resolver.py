"""Redirect external XML entities to locally registered resources.

XML configuration files often declare a DTD by public identifier, e.g.
``<!DOCTYPE config PUBLIC "-//Example//DTD Config 1.0//EN" "http://...">``.
Fetching the DTD from its system URL at parse time is slow and fails offline.
:class:`DefaultEntityResolver` keeps a registry of public identifiers mapped
to URLs (typically ``file:`` URLs of copies shipped with the application) and
serves entities from there.

Example:
        from pathlib import Path
        from web_config_combiner.resolver import DefaultEntityResolver
        from web_config_combiner.xml_reader import XMLConfigurationReader

        resolver = DefaultEntityResolver()
        resolver.register_entity_id(
                "-//Example//DTD Config 1.0//EN", Path("dtd/config-1.0.dtd")
        )
        tree = XMLConfigurationReader(entity_resolver=resolver).read("config.xml")

Notes:
* Entities are read with ``urllib.request`` on every resolution and the
    connection is closed before parsing continues; nothing is
    cached between calls.
* The registry is a plain dict and is not locked. Register everything before
    sharing the resolver between threads.
"""

from __future__ import annotations

import io
import logging
import urllib.request
from pathlib import Path
from typing import Dict, Optional, Union
from xml.sax.handler import EntityResolver
from xml.sax.xmlreader import InputSource

from .exceptions import EntityResolutionError

logger = logging.getLogger(__name__)

EntityURL = Union[str, Path]


class DefaultEntityResolver(EntityResolver):
    """SAX entity resolver backed by a public identifier registry."""

    def __init__(self) -> None:
        self._registered_entities: Dict[str, str] = {}

    @property
    def registered_entities(self) -> Dict[str, str]:
        """Live mapping of public identifiers to entity URLs."""
        return self._registered_entities

    def register_entity_id(self, public_id: Optional[str], entity_url: EntityURL) -> None:
        """Map ``public_id`` to ``entity_url``, replacing earlier registrations.

        Args:
            public_id: Public identifier as used in DOCTYPE/ENTITY declarations.
            entity_url: URL string or local path of the entity's content.
                Paths are converted to absolute ``file:`` URLs.

        Raises:
            ValueError: If ``public_id`` is ``None``. The registry is unchanged.
        """
        if public_id is None:
            raise ValueError("Public ID must not be None")
        if isinstance(entity_url, Path):
            entity_url = entity_url.resolve().as_uri()
        self._registered_entities[public_id] = entity_url

    def resolve_entity(
        self, public_id: Optional[str], system_id: Optional[str]
    ) -> Optional[InputSource]:
        """Open the registered resource for ``public_id``.

        Args:
            public_id: Public identifier of the entity (may be ``None``).
            system_id: System identifier from the document; not used for the
                lookup.

        Returns:
            An :class:`~xml.sax.xmlreader.InputSource` reading from the
            registered URL, with that URL as its system id. ``None`` when the
            public id is not registered, meaning the caller should fall back
            to its default resolution.

        Raises:
            EntityResolutionError: If the registered URL cannot be opened.
        """
        entity_url = None
        if public_id is not None:
            entity_url = self._registered_entities.get(public_id)
        if entity_url is None:
            return None

        # expat never closes entity byte streams, so the content is buffered.
        try:
            with urllib.request.urlopen(entity_url) as response:
                content = response.read()
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to open entity {public_id!r} at {entity_url}: {e}")
            raise EntityResolutionError(
                f"Cannot resolve entity {public_id!r} from {entity_url}", e
            ) from e

        logger.debug(f"Resolved entity {public_id!r} to {entity_url}")
        source = InputSource(entity_url)
        source.setByteStream(io.BytesIO(content))
        return source

    def resolveEntity(self, publicId, systemId):
        # SAX hook: returning the system id tells the parser to load it itself.
        source = self.resolve_entity(publicId, systemId)
        if source is None:
            return systemId
        return source
