from .datasources import DatasourceConfig, DatasourceFileConfig
from .manager import get_datasource, load_datasources, resolve_object, resolve_reference

__all__ = [
    "DatasourceConfig",
    "DatasourceFileConfig",
    "get_datasource",
    "load_datasources",
    "resolve_object",
    "resolve_reference",
]
