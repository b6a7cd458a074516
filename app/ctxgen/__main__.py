"""Allow running ctxgen with ``python -m ctxgen``."""

from ctxgen.cli.main import app

app()
