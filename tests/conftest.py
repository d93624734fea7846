"""Session-wide test settings."""

import os

from hypothesis import settings

# CLI tests expect the default uppercase digests, whatever the caller's shell sets.
os.environ["CIDKIT_HEX_CASE"] = "upper"

# Codec round trips are fast but the first example pays for imports.
settings.register_profile("cidkit", deadline=None)
settings.load_profile("cidkit")
