from .index import SearchIndex

__all__ = ["SearchIndex"]
