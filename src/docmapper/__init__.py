"""documentation-mapper core package.

Scans repositories for dependency manifests, looks up package descriptions in
public registries, crawls documentation pages and stores the results.
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
]
