import pytest

from growth_diary.pages.routes import APP_PAGES


def test_index_served_without_session(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert 'data-page="index"' in resp.text


def test_index_redirects_logged_in_user(auth_client):
    alice = auth_client()
    resp = alice.get("/", follow_redirects=False)
    assert resp.status_code == 302
    assert resp.headers["location"] == "/dashboard"


@pytest.mark.parametrize("page", APP_PAGES)
def test_app_pages_redirect_to_login(client, page):
    resp = client.get(f"/{page}", follow_redirects=False)
    assert resp.status_code == 302
    assert resp.headers["location"] == "/"


@pytest.mark.parametrize("page", APP_PAGES)
def test_app_pages_served_with_session(auth_client, page):
    alice = auth_client()
    resp = alice.get(f"/{page}")
    assert resp.status_code == 200
    assert f'data-page="{page}"' in resp.text


def test_static_assets(client):
    assert client.get("/static/css/style.css").status_code == 200
