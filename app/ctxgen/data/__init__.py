"""Bundled data files for ctxgen."""
