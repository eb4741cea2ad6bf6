import requests
import logging
from dataclasses import dataclass
from typing import Dict, Optional

from movielist.core.config import Settings
from movielist.core.enums import CatalogSort

logger = logging.getLogger(__name__)

POSTER_BASE_URL = "https://image.tmdb.org/t/p"

@dataclass
class CatalogConfig:
    """Configuration for the external movie catalog"""
    api_key: str
    base_url: str = "https://api.themoviedb.org/3"
    language: str = "en-US"
    timeout: int = 30

    @classmethod
    def from_settings(cls, settings: Settings) -> "CatalogConfig":
        return cls(
            api_key=settings.CATALOG_API_KEY or "",
            base_url=settings.CATALOG_BASE_URL,
            language=settings.CATALOG_LANGUAGE,
            timeout=settings.CATALOG_TIMEOUT,
        )

class CatalogResponse:
    """Response wrapper for catalog calls"""
    def __init__(self, data: Dict, status_code: int, success: bool):
        self.data = data
        self.status_code = status_code
        self.success = success

class CatalogError(Exception):
    """Raised when the catalog cannot be reached"""
    def __init__(self, message: str, status_code: int = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

class CatalogClient:
    """Read-only client for the catalog's discover, search and detail endpoints"""
    
    def __init__(self, config: CatalogConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update({
            "accept": "application/json"
        })
    
    def make_request(self, endpoint: str, params: Dict = None) -> CatalogResponse:
        """Make HTTP request to the catalog API"""
        url = f"{self.config.base_url.rstrip('/')}/{endpoint.lstrip('/')}"
        params = dict(params or {})
        params['api_key'] = self.config.api_key
        if self.config.language:
            params['language'] = self.config.language
        
        try:
            logger.info(f"Making request to: {url}")
            response = self.session.get(url, params=params, timeout=self.config.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Request exception: {str(e)}")
            raise CatalogError(f"Request failed: {str(e)}")
        
        if response.status_code == 200:
            return CatalogResponse(response.json(), response.status_code, True)
        logger.error(f"API request failed: {response.status_code} - {response.text}")
        return CatalogResponse({}, response.status_code, False)
    
    def discover(self, min_rating: float = 0, sort_by: str = CatalogSort.POPULARITY_DESC.value, page: int = 1) -> CatalogResponse:
        """Browse movies filtered by minimum rating and sorted by sort_by"""
        params = {
            "sort_by": CatalogSort(sort_by).value,
            "page": page,
            "include_adult": "false",
        }
        if min_rating:
            params["vote_average.gte"] = min_rating
        return self.make_request("discover/movie", params)
    
    def search(self, query: str, page: int = 1) -> CatalogResponse:
        """Search movies by title"""
        return self.make_request("search/movie", {"query": query, "page": page, "include_adult": "false"})
    
    def details(self, movie_id: int) -> CatalogResponse:
        """Get movie details by catalog id"""
        return self.make_request(f"movie/{movie_id}")

    @staticmethod
    def poster_url(poster_path: Optional[str], size: str = "w500") -> Optional[str]:
        if not poster_path:
            return None
        return f"{POSTER_BASE_URL}/{size}/{poster_path.lstrip('/')}"
