"""
JSearch client for external job listings.

Uses the JSearch API (RapidAPI) to find job postings outside the local
database.
"""

import logging

import httpx

from emploirapide.config import Settings
from emploirapide.errors import InvalidCredentialError, RateLimitedError, UpstreamError

logger = logging.getLogger(__name__)


class JSearchClient:
    """Thin wrapper over the JSearch search endpoint.

    Failures are never retried: rate limiting and bad credentials are raised
    as their own errors, anything else as UpstreamError carrying the
    provider's status code.
    """

    def __init__(self, settings: Settings, transport: httpx.BaseTransport | None = None):
        self.settings = settings
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return self.settings.jsearch_enabled

    def search(
        self,
        query: str,
        location: str,
        page: int = 1,
        employment_type: str | None = None,
    ) -> list[dict]:
        """
        Search job postings.

        Args:
            query: Free-text query (e.g., "comptable")
            location: Location appended to the query (e.g., "Abidjan")
            page: Provider page number, starting at 1
            employment_type: Optional contract filter, sent upper-cased

        Returns:
            The provider's raw job records
        """
        params = {
            "query": f"{query} in {location}",
            "page": str(page),
            "num_pages": "1",
            "date_posted": "all",
        }
        if employment_type and employment_type != "all":
            params["employment_types"] = employment_type.upper()

        headers = {
            "X-RapidAPI-Key": self.settings.rapidapi_key,
            "X-RapidAPI-Host": self.settings.jsearch_host,
        }

        logger.info(f"JSearch request: {params}")
        try:
            with httpx.Client(timeout=self.settings.search_timeout, transport=self._transport) as client:
                response = client.get(self.settings.jsearch_url, headers=headers, params=params)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(f"JSearch HTTP error {status}: {e.response.text[:500]}")
            if status == 429:
                raise RateLimitedError() from e
            if status == 401:
                raise InvalidCredentialError() from e
            raise UpstreamError(
                "Erreur lors de la récupération des offres.",
                status_code=status,
                details=_error_details(e.response),
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"JSearch request failed: {e}")
            raise UpstreamError("Erreur lors de la récupération des offres.", details=str(e)) from e

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"JSearch returned a non-JSON body: {e}")
            raise UpstreamError("Réponse invalide du service de recherche.", details=response.text[:500]) from e

        records = (data.get("data") or []) if isinstance(data, dict) else None
        if not isinstance(records, list):
            logger.error(f"JSearch returned an unexpected payload: {str(data)[:500]}")
            raise UpstreamError("Réponse invalide du service de recherche.", details=data)

        logger.info(f"JSearch returned {len(records)} jobs")
        return records


def _error_details(response: httpx.Response):
    try:
        return response.json()
    except ValueError:
        return response.text
