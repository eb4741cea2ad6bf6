"""Client application state.

All state lives in one immutable ``AppState``. Views never mutate it; they
dispatch actions to a ``Store`` which runs the pure ``reducer`` and notifies
subscribers with the new state.
"""
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional, Tuple

from movielist.core.enums import CatalogSort, ListType, Page

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchParams:
    query: str = ""
    min_rating: float = 0
    sort_by: str = CatalogSort.POPULARITY_DESC.value
    page: int = 1


@dataclass(frozen=True)
class AppState:
    page: Page = Page.HOME
    token: Optional[str] = None
    user: Optional[Dict[str, Any]] = None
    selected_movie_id: Optional[int] = None
    selected_movie: Optional[Dict[str, Any]] = None
    search: SearchParams = field(default_factory=SearchParams)
    results: Tuple[Dict[str, Any], ...] = ()
    total_pages: int = 0
    favorites: Tuple[Dict[str, Any], ...] = ()
    watchlist: Tuple[Dict[str, Any], ...] = ()
    error: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def list_type_of(self, movie_id: int) -> Optional[ListType]:
        """Which list holds movie_id, if any"""
        if any(entry["movie_id"] == movie_id for entry in self.favorites):
            return ListType.FAVORITE
        if any(entry["movie_id"] == movie_id for entry in self.watchlist):
            return ListType.WATCHLIST
        return None


# Actions

@dataclass(frozen=True)
class Navigate:
    page: Page
    movie_id: Optional[int] = None

@dataclass(frozen=True)
class LoggedIn:
    token: str
    user: Dict[str, Any]

@dataclass(frozen=True)
class SessionCleared:
    pass

@dataclass(frozen=True)
class ProfileLoaded:
    user: Dict[str, Any]
    favorites: List[Dict[str, Any]]
    watchlist: List[Dict[str, Any]]

@dataclass(frozen=True)
class SearchChanged:
    search: SearchParams

@dataclass(frozen=True)
class CatalogLoaded:
    results: List[Dict[str, Any]]
    total_pages: int = 0

@dataclass(frozen=True)
class MovieLoaded:
    movie: Dict[str, Any]

@dataclass(frozen=True)
class EntrySaved:
    entry: Dict[str, Any]

@dataclass(frozen=True)
class EntryRemoved:
    movie_id: int

@dataclass(frozen=True)
class ErrorRaised:
    message: str

@dataclass(frozen=True)
class ErrorCleared:
    pass


def _without(entries, movie_id: int) -> Tuple[Dict[str, Any], ...]:
    return tuple(entry for entry in entries if entry["movie_id"] != movie_id)


def reducer(state: AppState, action) -> AppState:
    """Return the state that follows ``action``; never mutates ``state``"""
    if isinstance(action, Navigate):
        page = Page(action.page)
        if page == Page.PROFILE and not state.is_authenticated:
            page = Page.AUTH
        if page == Page.MOVIE_DETAILS:
            return replace(state, page=page, selected_movie_id=action.movie_id, selected_movie=None, error=None)
        return replace(state, page=page, error=None)

    if isinstance(action, LoggedIn):
        return replace(state, token=action.token, user=action.user, page=Page.HOME, error=None)

    if isinstance(action, SessionCleared):
        # same as a fresh page load, nothing from the old session survives
        return AppState()

    if isinstance(action, ProfileLoaded):
        return replace(
            state,
            user=action.user,
            favorites=tuple(action.favorites),
            watchlist=tuple(action.watchlist),
        )

    if isinstance(action, SearchChanged):
        return replace(state, search=action.search)

    if isinstance(action, CatalogLoaded):
        return replace(state, results=tuple(action.results), total_pages=action.total_pages)

    if isinstance(action, MovieLoaded):
        return replace(state, selected_movie=action.movie, selected_movie_id=action.movie.get("id"))

    if isinstance(action, EntrySaved):
        entry = action.entry
        favorites = _without(state.favorites, entry["movie_id"])
        watchlist = _without(state.watchlist, entry["movie_id"])
        if entry["list_type"] == ListType.FAVORITE.value:
            favorites += (entry,)
        else:
            watchlist += (entry,)
        return replace(state, favorites=favorites, watchlist=watchlist, error=None)

    if isinstance(action, EntryRemoved):
        return replace(
            state,
            favorites=_without(state.favorites, action.movie_id),
            watchlist=_without(state.watchlist, action.movie_id),
            error=None,
        )

    if isinstance(action, ErrorRaised):
        return replace(state, error=action.message)

    if isinstance(action, ErrorCleared):
        return replace(state, error=None)

    logger.warning(f"Ignoring unknown action {type(action).__name__}")
    return state


class Store:
    """Single writer for AppState"""

    def __init__(self, initial: Optional[AppState] = None, reduce: Callable = reducer):
        self._state = initial or AppState()
        self._reduce = reduce
        self._listeners: List[Callable[[AppState], None]] = []

    @property
    def state(self) -> AppState:
        return self._state

    def dispatch(self, action) -> AppState:
        self._state = self._reduce(self._state, action)
        for listener in list(self._listeners):
            listener(self._state)
        return self._state

    def subscribe(self, listener: Callable[[AppState], None]) -> Callable[[], None]:
        """Register a listener; returns a function that unsubscribes it"""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
