"""Token CSRF, pipeline de requisições e máquina de sessão."""

from .token_store import TokenStore, get_token_store, reset_token_store
from .token_fetcher import TokenFetcher
from .navigation import Navigator, NavigationCallback
from .request_pipeline import RequestPipeline
from .session_state import SessionState

__all__ = [
    "TokenStore",
    "get_token_store",
    "reset_token_store",
    "TokenFetcher",
    "Navigator",
    "NavigationCallback",
    "RequestPipeline",
    "SessionState",
]
