"""Backend-backed implementation of CatalogGateway."""

from __future__ import annotations

from typing import Any

from storeorder.domain.exceptions import BackendError, ValidationError
from storeorder.domain.model.catalog import VersionCheck
from storeorder.domain.model.product import Product, ProductVariant, StorePrice
from storeorder.domain.repository.catalog_gateway import CatalogGateway
from storeorder.infrastructure.backend.client import BackendClient

CHECK_VERSION_FUNCTION = "check-data-version"


class HttpCatalogGateway(CatalogGateway):

    def __init__(self, client: BackendClient) -> None:
        self._client = client

    # --- CatalogGateway interface ---------------------------------------------

    def check_data_version(self, table_name: str, client_version: int | None) -> VersionCheck:
        body = self._client.invoke_function(
            CHECK_VERSION_FUNCTION,
            {"tableName": table_name, "clientVersion": client_version},
        )
        if not isinstance(body, dict) or "version" not in body:
            raise BackendError("Malformed version check reply", details={"body": body})
        try:
            version = int(body["version"])
        except (TypeError, ValueError) as exc:
            raise BackendError(
                f"Version check returned a bad version: {body['version']!r}",
                details={"body": body},
            ) from exc
        data = body.get("data")
        return VersionCheck(
            needs_update=bool(body.get("needsUpdate")),
            version=version,
            data=self._to_products(data) if data is not None else None,
        )

    def fetch_all_products(self) -> list[Product]:
        rows = self._client.get(
            "/rest/v1/products", params={"select": "*", "order": "name"}
        )
        return self._to_products(rows or [])

    def fetch_variants(self, product_id: str) -> list[ProductVariant]:
        rows = self._client.get(
            "/rest/v1/product_variants",
            params={"select": "*", "product_id": f"eq.{product_id}", "order": "name"},
        )
        try:
            return [ProductVariant.from_row(row) for row in rows or []]
        except (KeyError, TypeError, ValueError, ValidationError) as exc:
            raise BackendError(f"Malformed variant row: {exc}") from exc

    def fetch_store_prices(self, store_id: str) -> list[StorePrice]:
        rows = self._client.get(
            "/rest/v1/store_products",
            params={
                "select": "product_id,variant_id,wholesale_price,retail_price",
                "store_id": f"eq.{store_id}",
            },
        )
        try:
            return [StorePrice.from_row(row) for row in rows or []]
        except (KeyError, TypeError, ValueError, ValidationError) as exc:
            raise BackendError(f"Malformed store price row: {exc}") from exc

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_products(rows: Any) -> list[Product]:
        try:
            return [Product.from_row(row) for row in rows]
        except (KeyError, TypeError, ValueError, ValidationError) as exc:
            raise BackendError(f"Malformed product row: {exc}") from exc
