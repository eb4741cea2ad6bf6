from .api_client import ApiError, MovieListClient
from .app import ClientApplication
from .catalog import CatalogClient, CatalogConfig, CatalogError, CatalogResponse
from .state import AppState, Store, reducer

__all__ = [
    "ApiError", "MovieListClient", "ClientApplication",
    "CatalogClient", "CatalogConfig", "CatalogError", "CatalogResponse",
    "AppState", "Store", "reducer",
]
