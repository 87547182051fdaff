"""
pytest configuration: pin the runtime to offline providers before the
application modules read their settings.
"""

import os

os.environ["ASR_PROVIDER"] = "mock"
os.environ["ASR_ENABLED"] = "true"
os.environ.setdefault("PIPELINE_STEP_TIMEOUT_SECONDS", "5")
