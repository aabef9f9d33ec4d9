"""
HTTP client for the mini-social API.

Keeps the same session state as the browser client (current user, following
list, selected feed) and always takes that state from server responses
instead of changing it locally first.
"""
import logging
from datetime import datetime
from typing import List, Optional

import requests

from minisocial.errors import ValidationError, error_for_status

logger = logging.getLogger(__name__)

FEED_GLOBAL = "global"
FEED_FOLLOWED = "followed"

GEMINI_URL = (
    "https://generativelanguage.googleapis.com/v1beta/models/"
    "gemini-2.0-flash:generateContent"
)
REWRITE_PROMPT = (
    "Rewrite the following social media post in the chaotic, energetic, and hilariously "
    "absurd style of the cartoon character Gumball Watterson. Exaggerate everything, add "
    "random non-sequiturs, and make it sound like a kid on a massive sugar rush wrote it. "
    "Keep the core idea of the original post, but crank the absurdity to 11. "
    'Original Post: "{text}" Rewritten Post:'
)


class RewriteError(Exception):
    """The text rewrite collaborator is unavailable or returned nothing usable."""

    pass


def format_timestamp(iso_string: str) -> str:
    """'2024-03-05T15:04:00.000Z' -> 'Mar 5, 3:04 PM'."""
    value = datetime.fromisoformat(iso_string.replace("Z", "+00:00"))
    hour = value.hour % 12 or 12
    meridiem = "AM" if value.hour < 12 else "PM"
    return f"{value.strftime('%b')} {value.day}, {hour}:{value.minute:02d} {meridiem}"


class GeminiRewriter:
    """Calls the Gemini generateContent endpoint with a client-held key."""

    def __init__(self, api_key: Optional[str] = None, session=None, timeout: int = 30):
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    @property
    def available(self) -> bool:
        return bool(self.api_key)

    def rewrite(self, text: str) -> str:
        if not self.api_key:
            raise RewriteError("Text rewrite is not available.")
        text = (text or "").strip()
        if not text:
            raise RewriteError("Please write something first!")

        payload = {"contents": [{"role": "user", "parts": [{"text": REWRITE_PROMPT.format(text=text)}]}]}
        try:
            response = self.session.post(
                GEMINI_URL,
                params={"key": self.api_key},
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise RewriteError(f"Rewrite request failed: {e}") from e
        if not response.ok:
            raise RewriteError(f"Gemini API error! Status: {response.status_code}")

        candidates = response.json().get("candidates") or []
        if not candidates:
            raise RewriteError("The AI returned no suggestions.")
        try:
            return candidates[0]["content"]["parts"][0]["text"].strip()
        except (KeyError, IndexError, TypeError) as e:
            raise RewriteError("The AI response could not be read.") from e


class SocialClient:
    """
    Session-level client. ``session`` only needs ``get``/``post`` returning
    objects with ``status_code``, ``ok`` and ``json()``.
    """

    def __init__(self, base_url: str = "http://localhost:5000", session=None,
                 rewriter: Optional[GeminiRewriter] = None, timeout: int = 10):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.rewriter = rewriter or GeminiRewriter()
        self.timeout = timeout
        self.current_user: Optional[str] = None
        self.following: List[str] = []
        self.current_feed = FEED_GLOBAL

    # Transport --------------------------------------------------------

    def _request(self, method: str, path: str, payload: Optional[dict] = None):
        url = f"{self.base_url}/api{path}"
        if method == "GET":
            response = self.session.get(url, timeout=self.timeout)
        else:
            response = self.session.post(url, json=payload or {}, timeout=self.timeout)

        try:
            data = response.json()
        except ValueError:
            data = None
        if not response.ok:
            message = data.get("message") if isinstance(data, dict) else None
            raise error_for_status(response.status_code, message)
        return data

    def _require_login(self) -> str:
        if not self.current_user:
            raise ValidationError("Not logged in.")
        return self.current_user

    # Session ----------------------------------------------------------

    @property
    def rewrite_available(self) -> bool:
        return self.rewriter.available

    def fetch_config(self) -> dict:
        try:
            config = self._request("GET", "/config")
        except Exception as e:
            logger.warning(f"Could not fetch server configuration: {e}")
            self.rewriter.api_key = None
            return {}
        self.rewriter.api_key = config.get("apiKey")
        if not self.rewriter.api_key:
            logger.warning("Text rewrite disabled: API key not set on server.")
        return config

    def register(self, username: str, password: str, email: Optional[str] = None) -> dict:
        payload = {"username": username, "password": password}
        if email:
            payload["email"] = email
        return self._request("POST", "/register", payload)

    def login(self, username: str, password: str) -> dict:
        user = self._request("POST", "/login", {"username": username, "password": password})
        self.resume(user["username"])
        return user

    def resume(self, username: str) -> None:
        """
        Restore a session from a saved username without asking for the
        password again. Only the username survives between runs.
        """
        username = (username or "").strip()
        if not username:
            raise ValidationError("Username is required.")
        self.current_user = username
        self.fetch_config()
        self.refresh_following()

    def logout(self) -> None:
        self.current_user = None
        self.following = []
        self.current_feed = FEED_GLOBAL
        self.rewriter.api_key = None

    def refresh_following(self) -> List[str]:
        username = self._require_login()
        try:
            user = self._request("GET", f"/users/{username}")
            self.following = list(user.get("following") or [])
        except Exception as e:
            logger.error(f"Could not fetch following list for '{username}': {e}")
            self.following = []
        return self.following

    # Password reset ---------------------------------------------------

    def forgot_password(self, email: str) -> str:
        return self._request("POST", "/forgot-password", {"email": email})["message"]

    def reset_password(self, token: str, password: str, confirm_password: str) -> str:
        if password != confirm_password:
            raise ValidationError("Passwords do not match.")
        if not token:
            raise ValidationError("Invalid or missing reset token.")
        return self._request("POST", "/reset-password", {"token": token, "password": password})["message"]

    # Actions ----------------------------------------------------------

    def submit_post(self, text: str, image: Optional[str] = None) -> dict:
        username = self._require_login()
        return self._request("POST", "/posts", {"username": username, "text": text, "image": image})

    def toggle_follow(self, username: str) -> List[str]:
        follower = self._require_login()
        user = self._request("POST", "/follow", {"follower": follower, "userToFollow": username})
        self.following = list(user["following"])
        return self.following

    def toggle_like(self, post_id) -> dict:
        username = self._require_login()
        return self._request("POST", f"/posts/{post_id}/like", {"username": username})

    def rewrite_text(self, text: str) -> str:
        return self.rewriter.rewrite(text)

    # Feed -------------------------------------------------------------

    # Names compare ignoring case, as on the server.
    def _is_current_user(self, username: str) -> bool:
        return bool(self.current_user) and username.lower() == self.current_user.lower()

    def _is_following(self, username: str) -> bool:
        return username.lower() in {name.lower() for name in self.following}

    def switch_feed(self, feed: str) -> None:
        if feed not in (FEED_GLOBAL, FEED_FOLLOWED):
            raise ValueError(f"Unknown feed '{feed}'")
        self.current_feed = feed

    def load_feed(self) -> List[dict]:
        posts = self._request("GET", "/posts")
        if self.current_feed == FEED_FOLLOWED:
            posts = [
                post for post in posts
                if self._is_following(post["username"]) or self._is_current_user(post["username"])
            ]
        return [self.render_post(post) for post in posts]

    def user_posts(self, username: str) -> List[dict]:
        return [self.render_post(post) for post in self._request("GET", f"/posts/user/{username}")]

    def render_post(self, post: dict) -> dict:
        is_own_post = self._is_current_user(post["username"])
        is_following = self._is_following(post["username"])
        if is_own_post:
            follow_label = ""
        else:
            follow_label = "Following" if is_following else "Follow"
        likes = post.get("likes") or []
        return {
            "id": post["id"],
            "username": post["username"],
            "text": post["text"],
            "image": post.get("image"),
            "timestamp": format_timestamp(post["timestamp"]),
            "is_own_post": is_own_post,
            "is_following": is_following,
            "follow_label": follow_label,
            "liked": self.current_user in likes,
            "like_count": len(likes),
        }

    def empty_feed_message(self) -> str:
        if self.current_feed == FEED_FOLLOWED:
            return "Nothing to see here! Follow some people to see their posts."
        return "Nothing to see here! Be the first to post!"
