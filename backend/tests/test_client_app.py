from unittest import mock

import pytest
import requests

from movielist.client.api_client import ApiError, MovieListClient
from movielist.client.app import ClientApplication
from movielist.client.catalog import CatalogClient, CatalogConfig, CatalogError, CatalogResponse
from movielist.client.state import SearchParams
from movielist.core.enums import ListType, Page


class FakeApi:
    """In-memory stand-in for MovieListClient"""

    def __init__(self):
        self.token = None
        self.entries = {}
        self.fail_with = None

    def _check(self):
        if self.fail_with:
            raise self.fail_with

    def register(self, name, email, password):
        self._check()
        return {"id": 1, "name": name, "email": email}

    def login(self, email, password):
        self._check()
        if password != "pw1234":
            raise ApiError("Invalid credentials", 401)
        self.token = "token"
        return {"token": "token", "user": {"id": 1, "name": "Ann", "email": email}}

    def logout(self):
        self.token = None

    def profile(self):
        self._check()
        entries = list(self.entries.values())
        return {
            "id": 1, "name": "Ann", "email": "ann@x.com",
            "favorites": [e for e in entries if e["list_type"] == "favorite"],
            "watchlist": [e for e in entries if e["list_type"] == "watchlist"],
        }

    def add_movie(self, movie_id, title, poster_path, list_type):
        self._check()
        existing = self.entries.get(movie_id)
        row = dict(existing) if existing else {"id": len(self.entries) + 1, "user_id": 1, "movie_id": movie_id, "title": title, "poster_path": poster_path}
        row["list_type"] = list_type
        self.entries[movie_id] = row
        return row

    def remove_movie(self, movie_id):
        self._check()
        if movie_id not in self.entries:
            raise ApiError("Movie not found in any list", 404)
        del self.entries[movie_id]
        return {"message": "Movie removed from list"}


@pytest.fixture
def catalog():
    fake = mock.Mock(spec=CatalogClient)
    fake.discover.return_value = CatalogResponse({"results": [{"id": 42, "title": "X"}], "total_pages": 2}, 200, True)
    fake.search.return_value = CatalogResponse({"results": [{"id": 7, "title": "Seven"}], "total_pages": 1}, 200, True)
    fake.details.return_value = CatalogResponse({"id": 42, "title": "X", "poster_path": "/x.jpg"}, 200, True)
    return fake


@pytest.fixture
def api():
    return FakeApi()


@pytest.fixture
def app(api, catalog):
    return ClientApplication(api, catalog)


def test_login_loads_profile(app, api):
    api.entries[42] = {"id": 1, "movie_id": 42, "title": "X", "poster_path": None, "list_type": "favorite"}

    state = app.login("ann@x.com", "pw1234")

    assert state.is_authenticated
    assert state.page == Page.HOME
    assert [e["movie_id"] for e in state.favorites] == [42]


def test_failed_login_surfaces_server_message(app):
    state = app.login("ann@x.com", "wrong")

    assert not state.is_authenticated
    assert state.error == "Invalid credentials"


def test_register_logs_in(app):
    state = app.register("Ann", "ann@x.com", "pw1234")
    assert state.is_authenticated


def test_toggle_adds_then_removes(app):
    app.login("ann@x.com", "pw1234")
    movie = {"id": 42, "title": "X", "poster_path": "/x.jpg"}

    state = app.toggle(movie, ListType.FAVORITE)
    assert state.list_type_of(42) == ListType.FAVORITE

    state = app.toggle(movie, ListType.WATCHLIST)
    assert state.list_type_of(42) == ListType.WATCHLIST
    assert state.favorites == ()

    state = app.toggle(movie, ListType.WATCHLIST)
    assert state.list_type_of(42) is None


def test_saving_while_logged_out_goes_to_auth(app):
    state = app.save_movie(42, "X", None, "favorite")
    assert state.page == Page.AUTH


@pytest.mark.parametrize("status_code", [401, 403])
def test_auth_failure_resets_session(app, api, status_code):
    app.login("ann@x.com", "pw1234")
    app.navigate(Page.PROFILE)
    api.fail_with = ApiError("Invalid or expired token", status_code)

    state = app.save_movie(42, "X", None, "favorite")

    assert not state.is_authenticated
    assert state.page == Page.HOME
    assert state.favorites == ()
    assert api.token is None


def test_other_errors_are_shown(app, api):
    app.login("ann@x.com", "pw1234")

    state = app.remove_movie(999)

    assert state.is_authenticated
    assert state.error == "Movie not found in any list"


def test_browse_uses_discover_without_query(app, catalog):
    state = app.browse(SearchParams(min_rating=7, sort_by="vote_average.desc", page=2))

    catalog.discover.assert_called_once_with(7, "vote_average.desc", 2)
    assert state.results == ({"id": 42, "title": "X"},)
    assert state.total_pages == 2


def test_browse_uses_search_with_query(app, catalog):
    state = app.browse(SearchParams(query="seven"))

    catalog.search.assert_called_once_with("seven", 1)
    assert state.results[0]["title"] == "Seven"


def test_browse_reports_catalog_outage(app, catalog):
    catalog.discover.side_effect = CatalogError("Request failed: timeout")

    state = app.browse()

    assert state.error == "Request failed: timeout"


def test_browse_rejects_unknown_sort_order(app, catalog):
    state = app.browse(SearchParams(sort_by="bogus"))

    assert state.error == "Unknown sort order: bogus"
    catalog.discover.assert_not_called()


def test_dismiss_error_clears_message(app):
    app.login("ann@x.com", "wrong")
    assert app.state.error == "Invalid credentials"

    state = app.dismiss_error()

    assert state.error is None


def test_navigate_to_details_fetches_movie(app, catalog):
    state = app.navigate(Page.MOVIE_DETAILS, movie_id=42)

    catalog.details.assert_called_once_with(42)
    assert state.selected_movie["title"] == "X"


def _response(status_code, body):
    response = requests.Response()
    response.status_code = status_code
    response._content = body
    response.reason = "Error" if status_code >= 400 else "OK"
    return response


def test_api_client_sends_bearer_token_and_camel_case_body():
    session = mock.Mock(spec=requests.Session)
    session.request.side_effect = [
        _response(200, b'{"token": "abc", "user": {"id": 1, "name": "Ann", "email": "ann@x.com"}}'),
        _response(201, b'{"movie_id": 42, "list_type": "favorite"}'),
    ]
    client = MovieListClient("http://api.test/api/", session=session)

    client.login("ann@x.com", "pw1234")
    client.add_movie(42, "X", None, "favorite")

    method, url = session.request.call_args.args
    kwargs = session.request.call_args.kwargs
    assert (method, url) == ("POST", "http://api.test/api/movies")
    assert kwargs["headers"]["Authorization"] == "Bearer abc"
    assert kwargs["json"] == {"movieId": 42, "title": "X", "posterPath": None, "listType": "favorite"}


def test_api_client_raises_with_server_message():
    session = mock.Mock(spec=requests.Session)
    session.request.return_value = _response(409, b'{"message": "Email already in use"}')
    client = MovieListClient("http://api.test/api", session=session)

    with pytest.raises(ApiError) as exc_info:
        client.register("Ann", "ann@x.com", "pw1234")
    assert exc_info.value.status_code == 409
    assert exc_info.value.message == "Email already in use"
    assert not exc_info.value.is_auth_failure


def test_api_client_wraps_connection_errors():
    session = mock.Mock(spec=requests.Session)
    session.request.side_effect = requests.exceptions.ConnectionError("down")
    client = MovieListClient("http://api.test/api", session=session)

    with pytest.raises(ApiError) as exc_info:
        client.profile()
    assert exc_info.value.status_code == 0


def test_catalog_discover_builds_query():
    session = mock.Mock(spec=requests.Session)
    session.headers = {}
    session.get.return_value = _response(200, b'{"results": []}')
    client = CatalogClient(CatalogConfig(api_key="key"), session=session)

    response = client.discover(min_rating=7.5, sort_by="vote_average.desc", page=3)

    assert response.success
    url = session.get.call_args.args[0]
    params = session.get.call_args.kwargs["params"]
    assert url == "https://api.themoviedb.org/3/discover/movie"
    assert params["vote_average.gte"] == 7.5
    assert params["sort_by"] == "vote_average.desc"
    assert params["page"] == 3
    assert params["api_key"] == "key"


def test_catalog_failure_status_is_unsuccessful():
    session = mock.Mock(spec=requests.Session)
    session.headers = {}
    session.get.return_value = _response(404, b'{"status_message": "not found"}')
    client = CatalogClient(CatalogConfig(api_key="key"), session=session)

    response = client.details(1)

    assert not response.success
    assert response.status_code == 404


def test_poster_url():
    assert CatalogClient.poster_url("/abc.jpg") == "https://image.tmdb.org/t/p/w500/abc.jpg"
    assert CatalogClient.poster_url(None) is None
