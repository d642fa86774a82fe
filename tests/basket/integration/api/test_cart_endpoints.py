"""Integration tests for cart endpoints."""

from uuid import uuid4

import pytest

pytestmark = pytest.mark.integration


@pytest.fixture
def cart_url(api_v1_prefix) -> str:
    return f"{api_v1_prefix}/cart"


def _lines(body: dict) -> list[tuple[str, int, str, str]]:
    return [
        (i["product_id"], i["quantity"], i["unit_price"], i["subtotal"])
        for i in body["items"]
    ]


class TestCartLifecycle:
    """Create, add, remove and delete through the API."""

    def test_full_scenario(self, test_client, cart_url, auth_headers):
        response = test_client.post(
            cart_url,
            json={"productId": "p1", "quantity": 2, "price": 10},
            headers=auth_headers,
        )
        assert response.status_code == 201
        assert _lines(response.json()) == [("p1", 2, "10.00", "20.00")]
        assert response.json()["total_price"] == "20.00"

        response = test_client.post(
            f"{cart_url}/items",
            json={"productId": "p1", "quantity": 3, "price": 10},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert _lines(response.json()) == [("p1", 5, "10.00", "50.00")]
        assert response.json()["total_price"] == "50.00"

        response = test_client.post(
            f"{cart_url}/items",
            json={"product_id": "p2", "quantity": 1, "unit_price": "5"},
            headers=auth_headers,
        )
        assert _lines(response.json()) == [
            ("p1", 5, "10.00", "50.00"),
            ("p2", 1, "5.00", "5.00"),
        ]
        assert response.json()["total_price"] == "55.00"

        response = test_client.delete(f"{cart_url}/items/p1", headers=auth_headers)
        assert response.status_code == 200
        assert _lines(response.json()) == [("p2", 1, "5.00", "5.00")]
        assert response.json()["total_price"] == "5.00"

        response = test_client.get(cart_url, headers=auth_headers)
        assert response.json()["total_price"] == "5.00"
        assert response.json()["version"] == 4

    def test_delete_cart(self, test_client, cart_url, auth_headers):
        test_client.post(
            cart_url,
            json={"productId": "p1", "quantity": 1, "price": 1},
            headers=auth_headers,
        )

        response = test_client.delete(cart_url, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["items"][0]["product_id"] == "p1"

        response = test_client.get(cart_url, headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["code"] == "CART_NOT_FOUND"

    def test_string_quantity_is_accepted(self, test_client, cart_url, auth_headers):
        response = test_client.post(
            cart_url,
            json={"productId": "p1", "quantity": "3", "price": "1.50"},
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert response.json()["items"][0]["quantity"] == 3
        assert response.json()["total_price"] == "4.50"

    def test_repeat_add_keeps_first_price(self, test_client, cart_url, auth_headers):
        test_client.post(
            cart_url,
            json={"productId": "p1", "quantity": 1, "price": "10.00"},
            headers=auth_headers,
        )

        response = test_client.post(
            f"{cart_url}/items",
            json={"productId": "p1", "quantity": 1, "price": "12.00"},
            headers=auth_headers,
        )

        assert _lines(response.json()) == [("p1", 2, "10.00", "20.00")]

    @pytest.mark.parametrize("path", ["cat/p1", "cat%2Fp1"])
    def test_remove_product_id_containing_slash(
        self,
        test_client,
        cart_url,
        auth_headers,
        path,
    ):
        test_client.post(
            cart_url,
            json={"productId": "cat/p1", "quantity": 1, "price": 1},
            headers=auth_headers,
        )

        response = test_client.delete(
            f"{cart_url}/items/{path}",
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["items"] == []
        assert response.json()["total_price"] == "0.00"


class TestCartErrors:
    """Status codes for the failure cases."""

    def test_cart_requires_token(self, test_client, cart_url):
        response = test_client.get(cart_url)

        assert response.status_code == 401

    def test_get_without_cart_is_not_found(self, test_client, cart_url, auth_headers):
        response = test_client.get(cart_url, headers=auth_headers)

        assert response.status_code == 404

    def test_add_item_without_cart_is_not_found(
        self,
        test_client,
        cart_url,
        auth_headers,
    ):
        response = test_client.post(
            f"{cart_url}/items",
            json={"productId": "p1", "quantity": 1, "price": 1},
            headers=auth_headers,
        )

        assert response.status_code == 404

    def test_second_create_conflicts(self, test_client, cart_url, auth_headers):
        body = {"productId": "p1", "quantity": 1, "price": 1}
        test_client.post(cart_url, json=body, headers=auth_headers)

        response = test_client.post(cart_url, json=body, headers=auth_headers)

        assert response.status_code == 409
        assert response.json()["code"] == "CART_ALREADY_EXISTS"

    def test_remove_absent_product_is_not_found(
        self,
        test_client,
        cart_url,
        auth_headers,
    ):
        test_client.post(
            cart_url,
            json={"productId": "p1", "quantity": 1, "price": 1},
            headers=auth_headers,
        )

        response = test_client.delete(f"{cart_url}/items/p2", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["code"] == "CART_ITEM_NOT_FOUND"

    def test_remove_from_missing_cart_is_not_found(
        self,
        test_client,
        cart_url,
        auth_headers,
    ):
        response = test_client.delete(f"{cart_url}/items/p1", headers=auth_headers)

        assert response.status_code == 404

    @pytest.mark.parametrize("quantity", [0, -2, "abc"])
    def test_invalid_quantity_is_bad_request(
        self,
        test_client,
        cart_url,
        auth_headers,
        quantity,
    ):
        response = test_client.post(
            cart_url,
            json={"productId": "p1", "quantity": quantity, "price": 1},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_QUANTITY"

    @pytest.mark.parametrize("price", ["-1", "0.001"])
    def test_invalid_price_is_bad_request(
        self,
        test_client,
        cart_url,
        auth_headers,
        price,
    ):
        response = test_client.post(
            cart_url,
            json={"productId": "p1", "quantity": 1, "price": price},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_PRICE"

    def test_failed_add_leaves_cart_unchanged(
        self,
        test_client,
        cart_url,
        auth_headers,
    ):
        test_client.post(
            cart_url,
            json={"productId": "p1", "quantity": 2, "price": 10},
            headers=auth_headers,
        )

        test_client.post(
            f"{cart_url}/items",
            json={"productId": "p1", "quantity": -1, "price": 10},
            headers=auth_headers,
        )

        body = test_client.get(cart_url, headers=auth_headers).json()
        assert _lines(body) == [("p1", 2, "10.00", "20.00")]
        assert body["version"] == 1

    @pytest.mark.parametrize("quantity", [10**19, "2147483648"])
    def test_oversized_quantity_is_bad_request(
        self,
        test_client,
        cart_url,
        auth_headers,
        quantity,
    ):
        test_client.post(
            cart_url,
            json={"productId": "p1", "quantity": 1, "price": 1},
            headers=auth_headers,
        )

        response = test_client.post(
            f"{cart_url}/items",
            json={"productId": "p2", "quantity": quantity, "price": 1},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_QUANTITY"

    def test_merge_past_largest_quantity_leaves_cart_unchanged(
        self,
        test_client,
        cart_url,
        auth_headers,
    ):
        test_client.post(
            cart_url,
            json={"productId": "p1", "quantity": 2147483000, "price": 1},
            headers=auth_headers,
        )

        response = test_client.post(
            f"{cart_url}/items",
            json={"productId": "p1", "quantity": 1000, "price": 1},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_QUANTITY"
        body = test_client.get(cart_url, headers=auth_headers).json()
        assert _lines(body) == [("p1", 2147483000, "1.00", "2147483000.00")]
        assert body["version"] == 1

    def test_oversized_price_is_bad_request(self, test_client, cart_url, auth_headers):
        response = test_client.post(
            cart_url,
            json={"productId": "p1", "quantity": 1, "price": "10000000000.00"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_PRICE"


class TestCartIsolation:
    """Each caller only ever sees their own cart."""

    def test_users_have_separate_carts(
        self,
        test_client,
        cart_url,
        auth_headers,
        other_auth_headers,
    ):
        test_client.post(
            cart_url,
            json={"productId": "p1", "quantity": 1, "price": 1},
            headers=auth_headers,
        )

        response = test_client.get(cart_url, headers=other_auth_headers)
        assert response.status_code == 404

        test_client.post(
            cart_url,
            json={"productId": "p9", "quantity": 9, "price": 9},
            headers=other_auth_headers,
        )
        mine = test_client.get(cart_url, headers=auth_headers).json()
        assert [i["product_id"] for i in mine["items"]] == ["p1"]

    def test_admin_only_token_cannot_use_cart(
        self,
        test_client,
        cart_url,
        jwt_service,
    ):
        token = jwt_service.create_access_token(uuid4(), "root", ["admin"])

        response = test_client.get(
            cart_url,
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == 403
