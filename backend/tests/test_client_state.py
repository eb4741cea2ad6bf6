from movielist.client.state import (
    AppState, CatalogLoaded, EntryRemoved, EntrySaved, ErrorRaised, LoggedIn,
    MovieLoaded, Navigate, ProfileLoaded, SessionCleared, Store, reducer
)
from movielist.core.enums import ListType, Page


def entry(movie_id, list_type):
    return {"id": movie_id * 10, "movie_id": movie_id, "title": f"M{movie_id}", "poster_path": None, "list_type": list_type}


def logged_in_state():
    return reducer(AppState(), LoggedIn(token="t", user={"id": 1, "name": "Ann", "email": "ann@x.com"}))


def test_initial_page_is_home():
    state = AppState()
    assert state.page == Page.HOME
    assert not state.is_authenticated


def test_profile_requires_login():
    assert reducer(AppState(), Navigate(Page.PROFILE)).page == Page.AUTH
    assert reducer(logged_in_state(), Navigate(Page.PROFILE)).page == Page.PROFILE


def test_navigate_to_details_remembers_movie():
    state = reducer(AppState(), Navigate(Page.MOVIE_DETAILS, movie_id=42))
    assert state.page == Page.MOVIE_DETAILS
    assert state.selected_movie_id == 42

    state = reducer(state, MovieLoaded({"id": 42, "title": "X"}))
    assert state.selected_movie["title"] == "X"


def test_reducer_does_not_mutate_previous_state():
    before = AppState()
    after = reducer(before, ErrorRaised("boom"))
    assert before.error is None
    assert after.error == "boom"


def test_session_cleared_resets_everything():
    state = logged_in_state()
    state = reducer(state, ProfileLoaded(state.user, [entry(1, "favorite")], []))
    state = reducer(state, Navigate(Page.PROFILE))

    assert reducer(state, SessionCleared()) == AppState()


def test_entry_saved_moves_between_lists():
    state = reducer(logged_in_state(), ProfileLoaded({"id": 1}, [entry(1, "favorite"), entry(2, "favorite")], []))

    state = reducer(state, EntrySaved(entry(1, "watchlist")))

    assert [e["movie_id"] for e in state.favorites] == [2]
    assert [e["movie_id"] for e in state.watchlist] == [1]
    assert state.list_type_of(1) == ListType.WATCHLIST
    assert state.list_type_of(3) is None


def test_entry_removed_drops_from_both_lists():
    state = reducer(logged_in_state(), ProfileLoaded({"id": 1}, [entry(1, "favorite")], [entry(2, "watchlist")]))
    state = reducer(state, EntryRemoved(2))

    assert state.watchlist == ()
    assert [e["movie_id"] for e in state.favorites] == [1]


def test_catalog_results_are_stored():
    state = reducer(AppState(), CatalogLoaded([{"id": 1}], total_pages=3))
    assert state.results == ({"id": 1},)
    assert state.total_pages == 3


def test_store_notifies_subscribers_until_unsubscribed():
    store = Store()
    seen = []
    unsubscribe = store.subscribe(seen.append)

    store.dispatch(Navigate(Page.AUTH))
    unsubscribe()
    store.dispatch(Navigate(Page.HOME))

    assert [s.page for s in seen] == [Page.AUTH]
    assert store.state.page == Page.HOME
