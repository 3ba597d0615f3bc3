"""Application services for autorelease."""
