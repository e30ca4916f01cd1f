"""
Utility modules for Social Proof Studio.

Cross-cutting concerns:
- Links: Google Maps share link sanity check
"""
