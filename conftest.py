"""Root conftest — runs before any test module imports."""

import os

# CI runners often set FORCE_COLOR=1, which makes Rich inject ANSI escape
# codes into CLI output and breaks plain-text assertions on stdout.
os.environ.pop("FORCE_COLOR", None)
os.environ["NO_COLOR"] = "1"
