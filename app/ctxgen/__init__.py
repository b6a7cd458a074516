"""ctxgen - tri-state file selection tree for building context bundles."""

__version__ = "0.1.0"
