from .key_store import KeyStore
from .user_store import UserStore

__all__ = ["KeyStore", "UserStore"]
