"""Soul Builder constants shared across the SDK.

These values are referenced by the session store, the flow engine, and the
question-set loader.  Timing constants can be overridden via environment
variables so that deployments can tune expiry without code changes.
"""

import os

# Sessions older than this (measured from creation, not last activity) are
# evicted by the next sweep.
# Overridable via SESSION_EXPIRY_SECONDS env var.
SESSION_EXPIRY_SECONDS = int(os.getenv("SESSION_EXPIRY_SECONDS", str(60 * 60)))

# How often the background sweeper runs.
# Overridable via SESSION_SWEEP_INTERVAL_SECONDS env var.
SWEEP_INTERVAL_SECONDS = int(os.getenv("SESSION_SWEEP_INTERVAL_SECONDS", str(10 * 60)))

# Literal answer that skips an optional question (compared case-insensitively).
SKIP_SENTINEL = "skip"

# Locale used when none is requested explicitly.
DEFAULT_LOCALE = os.getenv("SOUL_BUILDER_LOCALE", "en")

# Locales shipped as ``locales/<locale>.yaml``.
SUPPORTED_LOCALES: set[str] = {"en", "de"}

SERVICE_NAME = "soul-builder"
SERVICE_VERSION = "1.0.0"
