from .passlib_hasher import PasslibPasswordHasher, pwd_context

__all__ = ["PasslibPasswordHasher", "pwd_context"]
