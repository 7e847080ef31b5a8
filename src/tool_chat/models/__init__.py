from .message import Message, ROLES

__all__ = ["Message", "ROLES"]
