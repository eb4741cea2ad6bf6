import logging
from typing import Any, Callable, Dict, Optional

from movielist.core.config import Settings, get_settings
from movielist.core.enums import CatalogSort, ListType, Page
from movielist.client.api_client import ApiError, MovieListClient
from movielist.client.catalog import CatalogClient, CatalogConfig, CatalogError
from movielist.client.state import (
    AppState, CatalogLoaded, EntryRemoved, EntrySaved, ErrorCleared, ErrorRaised, LoggedIn,
    MovieLoaded, Navigate, ProfileLoaded, SearchChanged, SearchParams,
    SessionCleared, Store
)

logger = logging.getLogger(__name__)

class ClientApplication:
    """Drives the four client views from user actions"""
    
    def __init__(self, api: MovieListClient, catalog: CatalogClient, store: Optional[Store] = None):
        self.api = api
        self.catalog = catalog
        self.store = store or Store()
    
    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "ClientApplication":
        settings = settings or get_settings()
        return cls(
            api=MovieListClient(settings.API_BASE_URL),
            catalog=CatalogClient(CatalogConfig.from_settings(settings)),
        )
    
    @property
    def state(self) -> AppState:
        return self.store.state
    
    def _call_api(self, fn: Callable[[], Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        """Run a backend call; auth failures drop the session, other failures become state.error"""
        try:
            return fn()
        except ApiError as e:
            if e.is_auth_failure and self.state.is_authenticated:
                logger.warning(f"Session rejected by server ({e.status_code}), resetting")
                self.reset_session()
            else:
                self.store.dispatch(ErrorRaised(e.message))
            return None
    
    def reset_session(self) -> None:
        self.api.logout()
        self.store.dispatch(SessionCleared())
    
    # Navigation
    
    def navigate(self, page: Page, movie_id: Optional[int] = None) -> AppState:
        state = self.store.dispatch(Navigate(Page(page), movie_id))
        if state.page == Page.MOVIE_DETAILS and movie_id is not None:
            self.load_movie(movie_id)
        elif state.page == Page.PROFILE:
            self.load_profile()
        return self.state
    
    # Catalog
    
    def browse(self, search: Optional[SearchParams] = None) -> AppState:
        """Search by title when a query is set, otherwise discover by rating and sort key"""
        if search is not None:
            self.store.dispatch(SearchChanged(search))
        params = self.state.search
        if params.sort_by not in {sort.value for sort in CatalogSort}:
            self.store.dispatch(ErrorRaised(f"Unknown sort order: {params.sort_by}"))
            return self.state
        try:
            if params.query:
                response = self.catalog.search(params.query, params.page)
            else:
                response = self.catalog.discover(params.min_rating, params.sort_by, params.page)
        except CatalogError as e:
            self.store.dispatch(ErrorRaised(e.message))
            return self.state
        
        if not response.success:
            self.store.dispatch(ErrorRaised("Failed to load movies"))
            return self.state
        self.store.dispatch(CatalogLoaded(
            results=response.data.get("results", []),
            total_pages=response.data.get("total_pages", 0),
        ))
        return self.state
    
    def load_movie(self, movie_id: int) -> AppState:
        try:
            response = self.catalog.details(movie_id)
        except CatalogError as e:
            self.store.dispatch(ErrorRaised(e.message))
            return self.state
        if response.success:
            self.store.dispatch(MovieLoaded(response.data))
        else:
            self.store.dispatch(ErrorRaised("Movie not found"))
        return self.state
    
    # Session
    
    def register(self, name: str, email: str, password: str) -> AppState:
        """Create an account, then log straight in"""
        if self._call_api(lambda: self.api.register(name, email, password)) is None:
            return self.state
        return self.login(email, password)
    
    def login(self, email: str, password: str) -> AppState:
        body = self._call_api(lambda: self.api.login(email, password))
        if body is None:
            return self.state
        self.store.dispatch(LoggedIn(token=body["token"], user=body["user"]))
        self.load_profile()
        return self.state
    
    def logout(self) -> AppState:
        self.reset_session()
        return self.state
    
    def dismiss_error(self) -> AppState:
        return self.store.dispatch(ErrorCleared())
    
    # Lists
    
    def load_profile(self) -> AppState:
        if not self.state.is_authenticated:
            return self.state
        body = self._call_api(self.api.profile)
        if body is not None:
            user = {key: body[key] for key in ("id", "name", "email")}
            self.store.dispatch(ProfileLoaded(user, body.get("favorites", []), body.get("watchlist", [])))
        return self.state
    
    def save_movie(self, movie_id: int, title: str, poster_path: Optional[str], list_type: ListType) -> AppState:
        if not self.state.is_authenticated:
            return self.store.dispatch(Navigate(Page.AUTH))
        list_type = ListType(list_type)
        entry = self._call_api(lambda: self.api.add_movie(movie_id, title, poster_path, list_type.value))
        if entry is not None:
            self.store.dispatch(EntrySaved(entry))
        return self.state
    
    def remove_movie(self, movie_id: int) -> AppState:
        if not self.state.is_authenticated:
            return self.store.dispatch(Navigate(Page.AUTH))
        if self._call_api(lambda: self.api.remove_movie(movie_id)) is not None:
            self.store.dispatch(EntryRemoved(movie_id))
        return self.state
    
    def toggle(self, movie: Dict[str, Any], list_type: ListType) -> AppState:
        """Remove the movie if it is already in list_type, otherwise save it there"""
        list_type = ListType(list_type)
        if self.state.list_type_of(movie["id"]) == list_type:
            return self.remove_movie(movie["id"])
        return self.save_movie(movie["id"], movie.get("title", ""), movie.get("poster_path"), list_type)
