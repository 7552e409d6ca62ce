# app/utils/__init__.py
"""
Utilities package for the Essay Evaluation Backend

- logging: log formatting and request monitoring middleware
- exceptions: error taxonomy rendered by the API error handlers
"""
