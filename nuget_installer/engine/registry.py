# Path: nuget_installer/engine/registry.py
"""
Registry URL Resolver

Builds package download URLs from the registry base path.
Pure string construction - no I/O, no failure mode.
"""

from urllib.parse import quote

from nuget_installer.constants import DEFAULT_REGISTRY_URL

# Characters legal in a path segment that are passed through verbatim
SEGMENT_SAFE_CHARS = "-._~!$&'()*+,;=:@"


def package_url(name: str, version: str, registry_url: str = DEFAULT_REGISTRY_URL) -> str:
    """
    Build the download URL for a package.

    Args:
        name: Package id
        version: Package version
        registry_url: Base path, e.g. https://www.nuget.org/api/v2/package

    Returns:
        '{registry_url}/{name}/{version}'

    Example:
        package_url('Win2D.uwp', '1.25.0')
        # https://www.nuget.org/api/v2/package/Win2D.uwp/1.25.0
    """
    base = registry_url.rstrip('/')
    return (
        f"{base}/{quote(name, safe=SEGMENT_SAFE_CHARS)}"
        f"/{quote(version, safe=SEGMENT_SAFE_CHARS)}"
    )


class RegistryResolver:
    """Resolves dependency records against one registry base path."""

    def __init__(self, registry_url: str = DEFAULT_REGISTRY_URL):
        self.registry_url = registry_url

    def url(self, dependency) -> str:
        return package_url(dependency.name, dependency.version, self.registry_url)


__all__ = ['package_url', 'RegistryResolver', 'SEGMENT_SAFE_CHARS']
