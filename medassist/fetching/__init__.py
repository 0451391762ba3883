"""
Fetching module: cache-first retrieval across ordered remote sources.

Source adapters live in `sources`, the online check in `connectivity` and the
tier-coordination policy in `service`.
"""
