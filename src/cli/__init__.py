"""
Command-line presentation helpers: text rendering and status messages.
"""
