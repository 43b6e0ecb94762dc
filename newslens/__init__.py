"""NewsLens ingestion core.

Fetches top headlines per category, tags each new article with a
keyword-weight political bias verdict and a category, and stores it once per
URL. The scheduler repeats that cycle on a fixed interval.
"""

__all__ = []
