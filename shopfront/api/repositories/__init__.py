from .base import DomainError, unwrap_list

__all__ = ["DomainError", "unwrap_list"]
