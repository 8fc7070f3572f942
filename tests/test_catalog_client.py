"""Tests for the HTTP catalog client."""
from unittest.mock import MagicMock, patch

import pytest
import requests

from storefront.services.catalog_client import CatalogClient, LocalCatalog, get_catalog


def _response(status=200, payload=None):
    resp = MagicMock()
    resp.status_code = status
    resp.json.return_value = payload or {}
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status} error")
    return resp


def test_fetch_product():
    client = CatalogClient(base_url="http://catalog:8000/")
    payload = {"id": 1, "name": "Mug", "price": "9.50"}
    with patch("storefront.services.catalog_client.requests.get", return_value=_response(200, payload)) as get:
        assert client.fetch_product(1) == payload
    get.assert_called_once_with("http://catalog:8000/products/1", timeout=2)


def test_not_found_is_value_error():
    client = CatalogClient(base_url="http://catalog:8000")
    with patch("storefront.services.catalog_client.requests.get", return_value=_response(404)):
        with pytest.raises(ValueError):
            client.fetch_product(42)


def test_retries_connection_errors():
    client = CatalogClient(base_url="http://catalog:8000")
    ok = _response(200, {"id": 1, "name": "Mug", "price": 9.5})
    with patch("storefront.services.catalog_client.requests.get",
               side_effect=[requests.ConnectionError("down"), ok]) as get, \
         patch("time.sleep"):
        assert client.fetch_product(1)["name"] == "Mug"
    assert get.call_count == 2


def test_server_error_not_retried():
    client = CatalogClient(base_url="http://catalog:8000")
    with patch("storefront.services.catalog_client.requests.get", return_value=_response(500)) as get:
        with pytest.raises(requests.HTTPError):
            client.fetch_product(1)
    assert get.call_count == 1


def test_local_catalog_used_without_url(db):
    assert isinstance(get_catalog(db), LocalCatalog)
