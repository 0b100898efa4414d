from .identifier import format_user

__all__ = ["format_user"]
