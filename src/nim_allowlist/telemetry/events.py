"""Semantic event constants for structured logging.

All log events should use these constants rather than magic strings.
"""

# Catalogue events
CATALOGUE_LOADED = "catalogue_loaded"

# Document events
DOCUMENT_LOADED = "document_loaded"
DOCUMENT_BACKED_UP = "document_backed_up"
DOCUMENT_WRITTEN = "document_written"

# Merge events
PROVIDER_ENTRY_CREATED = "provider_entry_created"
MODELS_MERGED = "models_merged"

# Run events
PATCH_STARTED = "patch_started"
PATCH_COMPLETED = "patch_completed"
PATCH_FAILED = "patch_failed"
