from enum import Enum

class ListType(str, Enum):
    """Which list a saved movie belongs to"""
    FAVORITE = "favorite"
    WATCHLIST = "watchlist"

    @classmethod
    def values(cls):
        return [member.value for member in cls]

class Page(str, Enum):
    """Views the client application can show"""
    HOME = "home"
    AUTH = "auth"
    MOVIE_DETAILS = "movieDetails"
    PROFILE = "profile"

class CatalogSort(str, Enum):
    """Sort keys accepted by the catalog discover endpoint"""
    POPULARITY_DESC = "popularity.desc"
    VOTE_AVERAGE_DESC = "vote_average.desc"
    RELEASE_DATE_DESC = "primary_release_date.desc"
    REVENUE_DESC = "revenue.desc"
