# storefront/services/catalog_client.py
import requests
from sqlalchemy.orm import Session

from storefront.services.product_service import ProductService
from storefront.utils.retry import http_retry
from storefront.utils.settings import CATALOG_SERVICE_URL
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CatalogClient:
    """Pobiera produkt (nazwa + cena) z zewnetrznego serwisu katalogu po HTTP."""

    def __init__(self, base_url: str | None = None, timeout: int = 2):
        self.base_url = (base_url or CATALOG_SERVICE_URL).rstrip("/")
        self.timeout = timeout

    @http_retry()
    def fetch_product(self, product_id: int) -> dict:
        url = f"{self.base_url}/products/{product_id}"
        logger.info(f"CatalogClient GET {url}")

        resp = requests.get(url, timeout=self.timeout)
        if resp.status_code == 404:
            raise ValueError("Product not found")
        resp.raise_for_status()
        return resp.json()


class LocalCatalog:
    """Ten sam interfejs co CatalogClient, ale czyta katalog z lokalnej bazy."""

    def __init__(self, db: Session):
        self.products = ProductService(db)

    def fetch_product(self, product_id: int) -> dict:
        p = self.products.get_product(product_id)
        return {"id": p.id, "name": p.name, "price": p.price, "stock": p.stock}


def get_catalog(db: Session):
    if CATALOG_SERVICE_URL:
        return CatalogClient()
    return LocalCatalog(db)
