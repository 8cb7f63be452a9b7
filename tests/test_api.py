from seo_paths.crud import crud_category, crud_content, crud_redirect
from tests.conftest import make_category, make_content


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


class TestCategoryEndpoints:
    def test_path_of_nested_category(self, client, category_tree):
        response = client.get("/api/v1/categories/cat-xau/path")

        assert response.status_code == 200
        body = response.json()
        assert body["path"] == "trading-strategies/scalping-m1-m15/xauusd-scalping"
        assert body["segments"] == ["trading-strategies", "scalping-m1-m15", "xauusd-scalping"]
        assert body["url"] == "/category/trading-strategies/scalping-m1-m15/xauusd-scalping"
        assert body["cycle_detected"] is False

    def test_path_of_unknown_category_is_404(self, client, category_tree):
        assert client.get("/api/v1/categories/missing/path").status_code == 404

    def test_breadcrumbs(self, client, category_tree):
        response = client.get("/api/v1/categories/cat-ea/breadcrumbs")

        crumbs = response.json()["breadcrumbs"]
        assert [c["slug"] for c in crumbs] == ["forex-trading", "expert-advisors"]
        assert crumbs[-1]["url"] == "/category/forex-trading/expert-advisors"

    def test_by_path_is_permissive_unless_strict(self, client, category_tree):
        response = client.get("/api/v1/categories/by-path/wrong-parent/xauusd-scalping")
        assert response.status_code == 200
        assert response.json()["id"] == "cat-xau"

        strict = client.get(
            "/api/v1/categories/by-path/wrong-parent/xauusd-scalping", params={"strict": True}
        )
        assert strict.status_code == 404

    def test_by_path_accepts_bare_category_prefix(self, client, category_tree):
        response = client.get(
            "/api/v1/categories/by-path/category/trading-strategies/scalping-m1-m15",
            params={"strict": True},
        )
        assert response.status_code == 200
        assert response.json()["id"] == "cat-scalp"

    def test_by_url_splits_entity_slug(self, client, category_tree):
        response = client.get(
            "/api/v1/categories/by-url",
            params={"url": "/category/forex-trading/expert-advisors/gold-scalper-pro"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["category"]["id"] == "cat-ea"
        assert body["content_slug"] == "gold-scalper-pro"

        missing = client.get("/api/v1/categories/by-url", params={"url": "/category/nowhere"})
        assert missing.status_code == 404

    def test_path_by_slug(self, client, category_tree):
        response = client.get("/api/v1/categories/by-slug/xauusd-scalping/path")
        assert response.json() == {
            "slug": "xauusd-scalping",
            "path": "trading-strategies/scalping-m1-m15/xauusd-scalping",
            "url": "/category/trading-strategies/scalping-m1-m15/xauusd-scalping",
        }
        assert client.get("/api/v1/categories/by-slug/missing/path").status_code == 404

    def test_path_reports_dangling_parent(self, client, db):
        make_category(db, "orphan", "orphan-leaf", parent_id="gone")

        body = client.get("/api/v1/categories/orphan/path").json()

        assert body["path"] == "orphan-leaf"
        assert body["dangling_parent"] is True

    def test_tree_lists_main_categories_with_children(self, client, category_tree):
        tree = client.get("/api/v1/categories/tree").json()["categories"]

        assert [node["slug"] for node in tree] == ["forex-trading", "trading-strategies"]
        assert [child["slug"] for child in tree[0]["children"]] == [
            "expert-advisors", "indicators", "strategies"
        ]

    def test_track_view(self, client, category_tree):
        assert client.post("/api/v1/categories/cat-ea/views").status_code == 204
        assert client.post("/api/v1/categories/missing/views").status_code == 404

        category_tree.expire_all()
        assert crud_category.get(category_tree, "cat-ea").view_count == 1


class TestSlugEndpoint:
    def test_collision_gets_suffix(self, client, db):
        make_content(db, "c1", "gold-scalper-pro", "cat-ea")

        response = client.post(
            "/api/v1/slugs", json={"title": "Gold Scalper PRO", "entity_class": "content"}
        )

        assert response.status_code == 200
        assert response.json() == {"slug": "gold-scalper-pro-1", "entity_class": "content"}

    def test_unknown_entity_class_is_rejected(self, client):
        response = client.post("/api/v1/slugs", json={"title": "x", "entity_class": "broker"})
        assert response.status_code == 422


class TestRedirectEndpoints:
    def test_register_then_resolve(self, client, db):
        payload = {"old_url": "/marketplace/ea-library", "new_url": "/category/forex-trading/expert-advisors"}

        first = client.post("/api/v1/redirects", json=payload)
        second = client.post("/api/v1/redirects", json={**payload, "new_url": "/elsewhere"})

        assert first.json()["created"] is True
        assert second.json()["created"] is False

        resolved = client.get("/api/v1/redirects/resolve", params={"url": "/marketplace/ea-library?page=2"})
        assert resolved.status_code == 200
        assert resolved.json()["location"] == "/category/forex-trading/expert-advisors?page=2"
        assert resolved.json()["status_code"] == 301

    def test_unknown_url_is_404(self, client, db):
        response = client.get("/api/v1/redirects/resolve", params={"url": "/nowhere"})
        assert response.status_code == 404

    def test_invalid_redirect_type_is_400(self, client, db):
        response = client.post(
            "/api/v1/redirects", json={"old_url": "/a", "new_url": "/b", "redirect_type": 307}
        )
        assert response.status_code == 400

    def test_deactivated_redirect_stops_resolving(self, client, db):
        client.post("/api/v1/redirects", json={"old_url": "/a", "new_url": "/b"})
        redirect_id = crud_redirect.get_by_old_url(db, "/a").id

        response = client.post(f"/api/v1/redirects/{redirect_id}/deactivate")

        assert response.json()["is_active"] is False
        assert client.get("/api/v1/redirects/resolve", params={"url": "/a"}).status_code == 404


class TestMigrationEndpoint:
    def test_dry_run_then_real_run(self, client, category_tree):
        make_content(category_tree, "c1", "gold-scalper-pro", "ea-library")

        dry = client.post("/api/v1/migrations/content-categories", params={"dry_run": True}).json()
        assert dry["dry_run"] is True
        assert dry["migrated"] == 1

        real = client.post("/api/v1/migrations/content-categories").json()
        assert real["migrated"] == 1
        assert real["redirects_created"] == 2

        category_tree.expire_all()
        assert crud_content.get(category_tree, "c1").category == "cat-ea"


class TestSitemapEndpoints:
    def test_sitemap_xml(self, client, category_tree):
        make_content(category_tree, "c1", "gold-scalper-pro", "cat-ea")

        response = client.get("/sitemap.xml")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/xml")
        assert "/category/forex-trading/expert-advisors/gold-scalper-pro</loc>" in response.text

    def test_missing_chunk_is_404(self, client, db):
        assert client.get("/sitemap-5.xml").status_code == 404

    def test_logs_start_empty(self, client, db):
        assert client.get("/api/v1/sitemap/logs").json() == {"logs": []}
