from .page_reader import PageReader

__all__ = ["PageReader"]
