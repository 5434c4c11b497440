"""
Citation recognition package.

This package builds the reporter-driven citation pattern, extracts raw
citations from document text and consolidates pin citations onto the canonical
citations seen earlier in the same document.
"""
