"""
Application Layer for the LiftTracker API.

This package contains:
- ports/: Abstract repository, store and cache interfaces
- services/: Application services coordinating repositories and the cache
- exceptions: Error taxonomy mapped to HTTP status codes by the API layer
"""
