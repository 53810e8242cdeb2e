"""
Local-business search engine.

Responsibilities:
- Normalise raw query parameters into a canonical search request.
- Fetch store-filtered candidates, then apply distance and open-now filters.
- Score and rank candidates deterministically and paginate the result.
- Serve autocomplete suggestions, trending and nearby listings.
"""
