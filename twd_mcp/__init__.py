"""
twd-mcp: generate TWD test code from captured browser recordings.

Turns element descriptors, recorded interactions and captured network
traffic into selector expressions, mock handlers and complete test files.
"""

__version__ = "1.0.0"
