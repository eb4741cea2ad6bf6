import logging
from typing import Dict, Optional

import requests

logger = logging.getLogger(__name__)

class ApiError(Exception):
    """Backend answered with an error status, or could not be reached (status 0)"""
    def __init__(self, message: str, status_code: int = 0):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

    @property
    def is_auth_failure(self) -> bool:
        return self.status_code in (401, 403)

class MovieListClient:
    """HTTP client for the movielist backend"""
    
    def __init__(self, base_url: str, session: Optional[requests.Session] = None, timeout: int = 15):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        self.token: Optional[str] = None
    
    def _request(self, method: str, path: str, json: Dict = None, auth: bool = False) -> Dict:
        headers = {"Accept": "application/json"}
        if auth and self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            response = self.session.request(method, url, json=json, headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Backend unreachable: {str(e)}")
            raise ApiError("Unable to reach the server")
        
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not response.ok:
            message = body.get("message") if isinstance(body, dict) else None
            raise ApiError(message or response.reason or "Request failed", response.status_code)
        return body
    
    def register(self, name: str, email: str, password: str) -> Dict:
        return self._request("POST", "auth/register", {"name": name, "email": email, "password": password})
    
    def login(self, email: str, password: str) -> Dict:
        """Log in and keep the returned token for later calls"""
        body = self._request("POST", "auth/login", {"email": email, "password": password})
        self.token = body.get("token")
        return body
    
    def logout(self) -> None:
        self.token = None
    
    def profile(self) -> Dict:
        return self._request("GET", "users/profile", auth=True)
    
    def add_movie(self, movie_id: int, title: str, poster_path: Optional[str], list_type: str) -> Dict:
        payload = {
            "movieId": movie_id,
            "title": title,
            "posterPath": poster_path,
            "listType": list_type,
        }
        return self._request("POST", "movies", payload, auth=True)
    
    def remove_movie(self, movie_id: int) -> Dict:
        return self._request("DELETE", f"movies/{movie_id}", auth=True)
