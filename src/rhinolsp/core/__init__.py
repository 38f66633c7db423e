"""
Core data layer: manifest models, catalog loading, configuration and errors.
"""

from rhinolsp.core.catalog import Catalog, load_catalog
from rhinolsp.core.config import CompletionSettings, ProjectConfig, find_config, load_config
from rhinolsp.core.errors import (
    CatalogError,
    ConfigError,
    MalformedManifestError,
    RhinoLspError,
    UnresolvedContextError,
)
from rhinolsp.core.manifest import (
    ActionManifest,
    Annotation,
    AssertionMethod,
    ElementAttribute,
    Locator,
    Operator,
    index_manifests,
    literal_from_key,
)

__all__ = [
    "ActionManifest",
    "Annotation",
    "AssertionMethod",
    "Catalog",
    "CatalogError",
    "CompletionSettings",
    "ConfigError",
    "ElementAttribute",
    "Locator",
    "MalformedManifestError",
    "Operator",
    "ProjectConfig",
    "RhinoLspError",
    "UnresolvedContextError",
    "find_config",
    "index_manifests",
    "literal_from_key",
    "load_catalog",
    "load_config",
]
