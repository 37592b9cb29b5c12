"""Pure helpers shared across activities.

- geodesy: Great-circle distance and rectangle tests
- pagination: Page windows over ordered collections
"""
