"""
Shared, cross-cutting code for the API.

`core/` holds the small building blocks every feature uses (DB wiring,
settings, logging, the failure-result shape). Feature-specific SQL and
business logic stay in the feature package (e.g. `posts/`).
"""
