# SoulZip
# Realigns soulver output with its input and renders both side by side.

"""
Core invariant: every input line gets exactly one result line.

The calculator drops leading blank/comment lines and collapses trailing
blank results. This package restores the leading lines and refuses to
render anything when the counts still disagree.
"""

__version__ = "0.1.0"
