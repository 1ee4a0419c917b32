# ABOUTME: Covers package: cache probing, multi-source lookup, download, and normalization.
# ABOUTME: Exports the resolver and the records that flow through it.

from bookcover.covers.cache import CoverCache, apply_cached_covers, cache_key
from bookcover.covers.http import CoverFetchError, CoverHttpClient, HttpClient
from bookcover.covers.lookup import CoverLookup
from bookcover.covers.resolver import CoverResolver, ResolveResult, ResolveStatus
from bookcover.covers.sources import PREFERENCE_ORDER, CoverCandidates, CoverSource, pick_best
from bookcover.covers.transform import CoverTransformer, TransformError

__all__ = [
    "PREFERENCE_ORDER",
    "CoverCache",
    "CoverCandidates",
    "CoverFetchError",
    "CoverHttpClient",
    "CoverLookup",
    "CoverResolver",
    "CoverSource",
    "CoverTransformer",
    "HttpClient",
    "ResolveResult",
    "ResolveStatus",
    "TransformError",
    "apply_cached_covers",
    "cache_key",
    "pick_best",
]
