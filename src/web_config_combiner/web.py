"""FastAPI integration for read-only configuration access.

Two pieces are provided:

* :class:`AppParameterSource` turns the init parameters stored on an
  application (``app.state.init_parameters``) into a parameter source for
  :class:`~web_config_combiner.sources.InitParameterConfiguration`.
* :func:`create_config_router` exposes a configuration (and optionally a
  combined configuration tree) over HTTP.

Example::

    from fastapi import FastAPI
    from web_config_combiner.sources import InitParameterConfiguration
    from web_config_combiner.web import AppParameterSource, create_config_router
    from web_config_combiner.xml_reader import combine_documents

    app = FastAPI()
    app.state.init_parameters = {"locales": "en, fr", "theme": "dark"}

    config = InitParameterConfiguration(AppParameterSource(app))
    tree = combine_documents("site.xml", "defaults.xml")
    app.include_router(create_config_router(config, tree))

Endpoints::

    GET /config/keys               All parameter names
    GET /config/properties/{key}   One property (list for multi-valued ones)
    GET /config/tree               Combined configuration tree

No endpoint modifies anything; the underlying configuration is read-only.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Union

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from .models import ConfigNode
from .sources import InitParameterConfiguration


class AppParameterSource:
    """Parameter source reading ``app.state.init_parameters``.

    The mapping is looked up on every access, so parameters assigned after
    construction are visible. A missing mapping behaves like an empty one.
    """

    def __init__(self, app: Any) -> None:
        self.app = app

    def _parameters(self) -> Dict[str, str]:
        return getattr(self.app.state, "init_parameters", None) or {}

    def parameter_names(self) -> Iterable[str]:
        return list(self._parameters())

    def get_parameter(self, name: str) -> Optional[str]:
        return self._parameters().get(name)


class KeysResponse(BaseModel):
    keys: List[str]


class PropertyResponse(BaseModel):
    key: str
    value: Union[str, List[str]]


def create_config_router(
    configuration: InitParameterConfiguration,
    tree: Optional[ConfigNode] = None,
    prefix: str = "/config",
) -> APIRouter:
    """Build a router serving ``configuration`` and ``tree`` under ``prefix``.

    Args:
        configuration: Key/value configuration answering the property routes.
        tree: Optional configuration tree for ``GET {prefix}/tree``.
        prefix: URL prefix for all routes.

    Returns:
        An :class:`~fastapi.APIRouter` ready for ``app.include_router``.
    """
    router = APIRouter(prefix=prefix, tags=["configuration"])

    @router.get("/keys", response_model=KeysResponse)
    def keys() -> KeysResponse:
        return KeysResponse(keys=list(configuration.get_keys()))

    @router.get("/properties/{key}", response_model=PropertyResponse)
    def get_property(key: str) -> PropertyResponse:
        value = configuration.get_property(key)
        if value is None:
            raise HTTPException(status_code=404, detail=f"Property '{key}' not found")
        return PropertyResponse(key=key, value=value)

    @router.get("/tree")
    def get_tree() -> Dict[str, Any]:
        if tree is None:
            raise HTTPException(status_code=404, detail="No configuration tree loaded")
        return {"node": tree.to_dict()}

    return router
