"""Release automation for GitHub repositories.

Resolves the next semantic version from pull request labels and publishes
releases, release assets and single-file commits through the GitHub REST API.
"""

__version__ = "0.1.0"
