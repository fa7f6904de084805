from .store import TOKEN_KEY, DotenvSessionStore, MemorySessionStore, SessionStore

__all__ = [
    "TOKEN_KEY",
    "SessionStore",
    "MemorySessionStore",
    "DotenvSessionStore",
]
