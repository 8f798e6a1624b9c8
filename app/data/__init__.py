"""
Data access layer.

Design rules:
- Views call ONLY functions in this package.
- Every remote call is wrapped so reads degrade to the module's fallback data.
- The company scope is always passed in explicitly; no env var reads here (config-only).
"""
