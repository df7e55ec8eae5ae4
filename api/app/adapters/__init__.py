"""Adapters for external sources: GitHubSource."""

from app.adapters.github_source import GitHubSource

__all__ = ["GitHubSource"]
