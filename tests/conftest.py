"""Root conftest — sets env vars BEFORE any zonesync module is imported.

Settings resolve the config directory and overrides from ZONESYNC_* env
vars, so these must be pinned before pytest discovers any test.
"""

import os
import tempfile

# Force-set (not setdefault) to prevent real env vars from leaking into tests
os.environ["ZONESYNC_DIR"] = tempfile.mkdtemp(prefix="zonesync-test-")
for _key in (
    "ZONESYNC_ORIGIN",
    "ZONESYNC_MEET_PROVIDER",
    "ZONESYNC_DEFAULT_ZONES",
    "ZONESYNC_LOG_LEVEL",
):
    os.environ.pop(_key, None)
