"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Named constants (namespaces, column layouts, MIME types)
- exceptions: Custom exception hierarchy
"""
