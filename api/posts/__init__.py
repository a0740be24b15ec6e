"""
Posts feature: keyset-paginated reads and ownership-scoped writes.
"""
