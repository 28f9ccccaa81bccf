"""Hosting provider detection from the origin remote URL."""

from enum import Enum


class RepositoryProvider(Enum):
    """Where the repository is hosted."""

    UNIDENTIFIED = "unidentified"
    AZURE_DEVOPS = "azure-devops"
    BITBUCKET = "bitbucket"
    GITHUB = "github"
    GITLAB = "gitlab"


# Checked in order, first substring hit wins
_PROVIDER_HOSTS = [
    ("dev.azure.com", RepositoryProvider.AZURE_DEVOPS),
    ("bitbucket.org", RepositoryProvider.BITBUCKET),
    ("github.com", RepositoryProvider.GITHUB),
    ("gitlab.com", RepositoryProvider.GITLAB),
]


def detect_provider(remote_url: str) -> RepositoryProvider:
    """Map a remote URL to its hosting provider.

    Args:
        remote_url: The configured remote URL (https or ssh form).

    Returns:
        The matching RepositoryProvider, or UNIDENTIFIED.
    """
    for host, provider in _PROVIDER_HOSTS:
        if host in remote_url:
            return provider
    return RepositoryProvider.UNIDENTIFIED


def resolve_provider(git) -> RepositoryProvider:
    """Resolve the provider of the repository behind a git client.

    Args:
        git: Object exposing remote_origin_url().

    Returns:
        The RepositoryProvider of the origin remote.
    """
    return detect_provider(git.remote_origin_url() or "")
