"""
Tests for the read-only reference endpoints.

- /api/countries
- /api/categories, /api/products
- /api/feature-flags (+ admin toggle)
"""


class TestCountries:

    def test_list_countries(self, seeded_client):
        response = seeded_client.get("/api/countries")

        assert response.status_code == 200
        countries = response.get_json()["countries"]
        assert len(countries) == 10
        assert countries[0] == {
            "id": countries[0]["id"],
            "name": "China",
            "baseTariff": 10,
            "reciprocalTariff": 45,
            "effectiveDate": "April 9, 2025",
            "impactLevel": "High",
        }

    def test_trailing_slash(self, seeded_client):
        assert seeded_client.get("/api/countries/").status_code == 200

    def test_empty_table(self, client):
        assert client.get("/api/countries").get_json() == {"countries": []}

    def test_get_country(self, seeded_client):
        response = seeded_client.get("/api/countries/South%20Korea")

        assert response.status_code == 200
        country = response.get_json()["country"]
        assert country["reciprocalTariff"] == 30
        assert country["impactLevel"] == "Medium-High"

    def test_get_country_case_sensitive(self, seeded_client):
        response = seeded_client.get("/api/countries/china")

        assert response.status_code == 404
        assert response.get_json()["message"] == "Country not found"


class TestCatalog:

    def test_list_categories(self, seeded_client):
        categories = seeded_client.get("/api/categories").get_json()["categories"]

        assert [c["name"] for c in categories] == [
            "Electronics",
            "Clothing & Apparel",
            "Toys & Games",
            "Furniture & Home Goods",
            "Food & Beverages",
        ]
        assert categories[0]["primaryCountries"] == ["China", "South Korea", "Japan"]

    def test_get_category(self, seeded_client):
        first = seeded_client.get("/api/categories").get_json()["categories"][0]
        response = seeded_client.get(f"/api/categories/{first['id']}")

        assert response.status_code == 200
        assert response.get_json()["category"]["name"] == "Electronics"

    def test_get_category_not_found(self, seeded_client):
        response = seeded_client.get("/api/categories/9999")

        assert response.status_code == 404
        assert response.get_json()["message"] == "Category not found"

    def test_get_category_invalid_id(self, seeded_client):
        response = seeded_client.get("/api/categories/abc")

        assert response.status_code == 400
        assert response.get_json()["message"] == "Invalid category ID"

    def test_list_products(self, seeded_client):
        products = seeded_client.get("/api/products").get_json()["products"]

        assert len(products) == 12
        smartphones = products[0]
        assert smartphones["name"] == "Smartphones"
        assert smartphones["originCountry"] == "China"
        assert smartphones["currentPrice"] == 899
        assert smartphones["estimatedIncrease"] == 40.5

    def test_products_by_category(self, seeded_client):
        categories = seeded_client.get("/api/categories").get_json()["categories"]
        food = next(c for c in categories if c["name"] == "Food & Beverages")

        response = seeded_client.get(f"/api/products?categoryId={food['id']}")
        names = [p["name"] for p in response.get_json()["products"]]
        assert names == ["Imported Chocolates", "Imported Cheese", "Imported Wines"]

    def test_products_invalid_category(self, seeded_client):
        response = seeded_client.get("/api/products?categoryId=xyz")

        assert response.status_code == 400
        assert response.get_json()["message"] == "Invalid category ID"

    def test_get_product(self, seeded_client):
        first = seeded_client.get("/api/products").get_json()["products"][0]
        response = seeded_client.get(f"/api/products/{first['id']}")
        assert response.get_json()["product"]["name"] == "Smartphones"

    def test_get_product_not_found(self, seeded_client):
        response = seeded_client.get("/api/products/424242")

        assert response.status_code == 404
        assert response.get_json()["message"] == "Product not found"


class TestFeatureFlags:

    def test_list_flags(self, seeded_client):
        flags = seeded_client.get("/api/feature-flags").get_json()["flags"]
        by_name = {f["name"]: f["isEnabled"] for f in flags}

        assert by_name["calculator"] is True
        assert by_name["authentication"] is False
        assert by_name["alternativeProducts"] is False

    def test_get_flag(self, seeded_client):
        response = seeded_client.get("/api/feature-flags/emailAlerts")
        assert response.get_json()["flag"]["isEnabled"] is True

    def test_get_unknown_flag(self, seeded_client):
        response = seeded_client.get("/api/feature-flags/nope")

        assert response.status_code == 404
        assert response.get_json()["message"] == "Feature flag not found"

    def test_toggle_requires_admin(self, seeded_app, logged_in_client):
        response = logged_in_client.patch(
            "/api/admin/feature-flags/authentication", json={"isEnabled": True}
        )

        assert response.status_code == 403
        assert response.get_json() == {
            "error": "Forbidden",
            "message": "This action requires admin permissions",
        }

    def test_toggle_requires_login(self, seeded_client):
        response = seeded_client.patch(
            "/api/admin/feature-flags/authentication", json={"isEnabled": True}
        )
        assert response.status_code == 401

    def test_admin_toggles_flag(self, seeded_app, admin_client):
        from tariffsmart.web.db.models import FeatureFlag

        response = admin_client.patch(
            "/api/admin/feature-flags/authentication", json={"isEnabled": True}
        )

        assert response.status_code == 200
        data = response.get_json()
        assert data["message"] == "Feature flag updated successfully"
        assert data["flag"]["isEnabled"] is True
        with seeded_app.app_context():
            assert FeatureFlag.is_active("authentication")

    def test_toggle_rejects_non_boolean(self, seeded_app, admin_client):
        response = admin_client.patch(
            "/api/admin/feature-flags/authentication", json={"isEnabled": "yes"}
        )
        assert response.status_code == 400

    def test_toggle_unknown_flag(self, seeded_app, admin_client):
        response = admin_client.patch("/api/admin/feature-flags/nope", json={"isEnabled": True})
        assert response.status_code == 404


class TestErrorHandling:

    def test_unknown_route_is_json_404(self, client):
        response = client.get("/api/does-not-exist")

        assert response.status_code == 404
        assert "message" in response.get_json()

    def test_wrong_method_is_405(self, client):
        response = client.get("/api/calculate-tariff-impact")
        assert response.status_code == 405

    def test_nosniff_header(self, client):
        response = client.get("/api/countries")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
