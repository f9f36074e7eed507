"""Web Config Combiner
====================

Configuration access for web applications: uniform read-only views over
named start-up parameters, XML configuration documents read into trees, and
a rule based merge of two configuration trees.

Key capabilities
----------------
- Represent hierarchical configuration as :class:`~web_config_combiner.models.ConfigNode` trees.
- Merge two trees with :class:`~web_config_combiner.combiner.MergeCombiner`
  (first tree wins, unmatched children of the second are appended).
- Read-only key/value access with list splitting via
  :class:`~web_config_combiner.sources.InitParameterConfiguration`.
- Offline DTD/entity loading through
  :class:`~web_config_combiner.resolver.DefaultEntityResolver`.
- FastAPI router exposing configuration values and trees.

Minimal quick start
-------------------
>>> from web_config_combiner import ConfigNode, MergeCombiner
>>> a = ConfigNode("cfg", value="site")
>>> b = ConfigNode("cfg", value="defaults", children=[ConfigNode("port", value="80")])
>>> merged = MergeCombiner().combine(a, b)
>>> merged.value, [c.name for c in merged.children]
('site', ['port'])

Public surface
--------------
Only a curated subset is exported at the package level; the FastAPI
integration lives in :mod:`web_config_combiner.web` and is imported
explicitly.
"""

__version__ = "0.1.0"

from .combiner import MergeCombiner, NodeCombiner
from .exceptions import ConfigurationError, EntityResolutionError, UnsupportedOperationError
from .models import ConfigNode
from .resolver import DefaultEntityResolver
from .settings import ReaderSettings
from .sources import InitParameterConfiguration, MappingParameterSource
from .xml_reader import XMLConfigurationReader, combine_documents

__all__ = [
    "ConfigNode",
    "NodeCombiner",
    "MergeCombiner",
    "InitParameterConfiguration",
    "MappingParameterSource",
    "DefaultEntityResolver",
    "XMLConfigurationReader",
    "combine_documents",
    "ReaderSettings",
    "ConfigurationError",
    "EntityResolutionError",
    "UnsupportedOperationError",
]
