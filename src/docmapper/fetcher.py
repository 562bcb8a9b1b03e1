"""Registry description fetcher."""

from __future__ import annotations

from typing import Any

import requests
import structlog

from .models import DependencyRecord, DescriptionResult
from .registries import RegistryError, UnknownEcosystemError, get_registry_handler, new_session


class PackageFetcher:
    """Fetch package descriptions from the registry matching each record.

    Registry failures are converted into a ``failed`` DescriptionResult so the
    caller can keep processing; they are not retried and not cached.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        *,
        logger: Any | None = None,
    ) -> None:
        self._session = session or new_session()
        self._log = logger or structlog.get_logger("docmapper.fetcher")
        self._cache: dict[tuple[str, str, str], DescriptionResult] = {}

    def lookup(self, dependency: DependencyRecord) -> DescriptionResult:
        key = dependency.key
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        try:
            handler = get_registry_handler(dependency.ecosystem)
        except UnknownEcosystemError:
            self._log.warning("fetcher.unsupported_ecosystem", ecosystem=dependency.ecosystem)
            result = DescriptionResult.unsupported(dependency.ecosystem)
            self._cache[key] = result
            return result

        try:
            text = handler.describe(self._session, dependency.name, dependency.version)
        except RegistryError as exc:
            self._log.error(
                "fetcher.failed",
                ecosystem=dependency.ecosystem,
                name=dependency.name,
                version=dependency.version,
                error=str(exc),
            )
            return DescriptionResult.failure(str(exc))

        if text is None:
            result = DescriptionResult.missing(handler.not_listed)
        else:
            result = DescriptionResult.found(text)
        self._cache[key] = result
        return result

    def fetch_description(self, dependency: DependencyRecord) -> str:
        return self.lookup(dependency).text
