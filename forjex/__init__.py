"""
Forjex

Heuristic commit messages and repository sync for local projects.
"""

__version__ = "1.0.0"

# Returned whenever there is nothing to describe or the pipeline fails
FALLBACK_MESSAGE = "Update code"

INITIAL_COMMIT_MESSAGE = "Initial commit from Forjex"
