"""
Utils module for CiteMatch.

Import directly from the submodules, e.g.
``from citematch.utils.formatting import success_message``.
"""
