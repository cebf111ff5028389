"""Allow running js-optimize with `python -m js_optimize`."""

from js_optimize.main import cli

cli()
