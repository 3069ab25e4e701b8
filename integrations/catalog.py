"""Remote product catalog."""

import logging
from typing import Iterable

from pydantic import ValidationError

from integrations.base import BackendClient
from schemas.errors import NetworkError
from schemas.product import Product

logger = logging.getLogger(__name__)

CATALOG_ENDPOINT = "/packages/read-all"


class CatalogClient:
    """Fetches the products the current user can scaffold from.

    Usage:
        catalog = CatalogClient(BackendClient(auth=AuthHandler()))
        products = sort_catalog(catalog.fetch_catalog())
    """

    def __init__(self, backend: BackendClient):
        self.backend = backend

    def fetch_catalog(self) -> list[Product]:
        """Fetch every product of the catalog.

        Returns:
            Products in the order the backend sent them.

        Raises:
            NetworkError: If the request fails or the payload is malformed.
            AuthorizationError: If the backend rejects the credentials.
        """
        data = self.backend.request("GET", CATALOG_ENDPOINT)

        # Some deployments wrap the list, older ones return it bare
        if isinstance(data, dict):
            data = data.get("items")
        if not isinstance(data, list):
            raise NetworkError("Unexpected catalog response")

        try:
            products = [Product.model_validate(item) for item in data]
        except ValidationError as e:
            raise NetworkError(f"Malformed catalog entry: {e}") from e

        logger.info("Fetched %d catalog products", len(products))
        return products


def sort_catalog(products: Iterable[Product]) -> list[Product]:
    """Order products for display.

    Available products come first; within each group products are sorted
    by title, case-insensitively.
    """
    return sorted(products, key=lambda p: (not p.available, p.product_title.casefold()))
