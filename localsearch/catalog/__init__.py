"""
Business catalogue collaborators.

Responsibilities:
- Load the canonical business and category datasets into memory.
- Answer store-level queries (equality, range and substring predicates only).
- Resolve category slugs through a TTL-cached directory.
"""
