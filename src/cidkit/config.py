"""
Environment settings for the cidkit command line.

The library functions take their options as arguments; only the CLI
defaults come from here. Values are read once, when this module is first
imported, and a bad value fails the import.

Variables:
    CIDKIT_HEX_CASE: "upper" (default) or "lower", the case `cid-to-hex`
        prints digests in when neither --upper nor --lower is given.
"""

import os

HEX_CASES: tuple[str, ...] = ("upper", "lower")

CIDKIT_HEX_CASE = os.environ.get("CIDKIT_HEX_CASE", HEX_CASES[0]).strip().lower()
"""Default digest case for `cid-to-hex`."""

if CIDKIT_HEX_CASE not in HEX_CASES:
    raise ValueError(
        f"CIDKIT_HEX_CASE must be one of {', '.join(HEX_CASES)}, got {CIDKIT_HEX_CASE!r}"
    )
