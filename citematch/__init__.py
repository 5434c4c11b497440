"""
CiteMatch: legal citation extraction and pin-cite consolidation.

Scans a directory of court decisions for citations to a known list of
reporters, maps pin citations back to their canonical form and writes two CSV
reports: matched citations with counts, and pin citations that could not be
resolved.
"""

__version__ = "0.1.0"
