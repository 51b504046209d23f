"""
API Tests
=========

End-to-end flows through the FastAPI app with a temporary data directory.
"""

import pytest
from fastapi.testclient import TestClient

from easyfront.server import app


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("EASYFRONT_DATA_DIR", str(tmp_path / "data"))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def session_id(client):
    response = client.post("/api/canvas/session")
    assert response.status_code == 200
    return response.json()["session_id"]


BUTTON = {
    "type": "button",
    "position": {"x": 20, "y": 20},
    "size": {"width": 120, "height": 40},
    "content": "Bouton",
}


def _add_button(client, session_id) -> str:
    response = client.post(f"/api/element/{session_id}", json=BUTTON)
    assert response.status_code == 200
    return response.json()["element_id"]


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_info_lists_grid_sizes(client):
    assert client.get("/api/info").json()["grid_sizes"] == [10, 20, 30, 50]


def test_new_session_is_empty(client, session_id):
    state = client.get(f"/api/canvas/state/{session_id}").json()
    assert state["elements"] == []
    assert state["selected_id"] is None
    assert state["grid_size"] == 20


def test_unknown_session_is_404(client):
    assert client.get("/api/canvas/state/nope").status_code == 404
    assert client.get("/api/code/nope/css").status_code == 404


def test_css_edit_round_trip(client, session_id):
    element_id = _add_button(client, session_id)

    css = client.get(f"/api/code/{session_id}/css")
    assert css.status_code == 200
    assert css.headers["content-type"].startswith("text/css")
    assert f".element-{element_id} {{" in css.text

    edited = css.text.replace("left: 20px;", "left: 40px;")
    response = client.put(f"/api/code/{session_id}/css", json={"css": edited})
    assert response.status_code == 200
    assert response.json()["updated"] == [element_id]

    element = client.get(f"/api/element/{session_id}/{element_id}").json()
    assert element["position"] == {"x": 40, "y": 20}
    assert element["size"] == {"width": 120, "height": 40}


def test_html_contains_element(client, session_id):
    element_id = _add_button(client, session_id)
    html = client.get(f"/api/code/{session_id}/html")
    assert html.headers["content-type"].startswith("text/html")
    assert f'<button class="element-{element_id}">Bouton</button>' in html.text

    complete = client.get(f"/api/code/{session_id}/complete").text
    assert "<style>" in complete


def test_element_update_and_delete(client, session_id):
    element_id = _add_button(client, session_id)

    response = client.put(f"/api/element/{session_id}/{element_id}", json={"content": "OK"})
    assert response.status_code == 200
    assert client.get(f"/api/element/{session_id}/{element_id}").json()["content"] == "OK"

    assert client.delete(f"/api/element/{session_id}/{element_id}").status_code == 200
    assert client.get(f"/api/element/{session_id}/{element_id}").status_code == 404
    assert client.delete(f"/api/element/{session_id}/{element_id}").status_code == 404


def test_move_and_resize_snap(client, session_id):
    element_id = _add_button(client, session_id)

    moved = client.post(f"/api/element/{session_id}/{element_id}/move", json={"x": -13, "y": 47})
    assert moved.json()["position"] == {"x": 0, "y": 40}

    resized = client.post(f"/api/element/{session_id}/{element_id}/resize", json={"width": 5, "height": 133})
    assert resized.json()["size"] == {"width": 20, "height": 140}


def test_grid_size_validation(client, session_id):
    assert client.put(f"/api/canvas/grid/{session_id}", json={"grid_size": 30}).status_code == 200
    assert client.put(f"/api/canvas/grid/{session_id}", json={"grid_size": 7}).status_code == 422
    assert client.get(f"/api/canvas/state/{session_id}").json()["grid_size"] == 30


def test_selection(client, session_id):
    element_id = _add_button(client, session_id)
    client.put(f"/api/canvas/selection/{session_id}", json={"element_id": element_id})
    assert client.get(f"/api/canvas/state/{session_id}").json()["selected_id"] == element_id

    client.delete(f"/api/element/{session_id}/{element_id}")
    assert client.get(f"/api/canvas/state/{session_id}").json()["selected_id"] is None


def test_builtin_drop(client, session_id):
    response = client.post(f"/api/canvas/drop/{session_id}", json={
        "payload": {"is_built_in": True, "component_type": "div",
                    "default_size": '{"width": 200, "height": 100}'},
        "cursor": {"x": 105, "y": 187},
    })
    assert response.status_code == 200
    assert response.json()["element"]["position"] == {"x": 0, "y": 140}


def test_unknown_widget_drop_is_404(client, session_id):
    response = client.post(f"/api/canvas/drop/{session_id}", json={
        "payload": {"is_built_in": False, "widget_id": "missing"},
        "cursor": {"x": 100, "y": 100},
    })
    assert response.status_code == 404
    assert client.get(f"/api/canvas/state/{session_id}").json()["elements"] == []


def test_widget_import_then_drop(client, session_id):
    created = client.post("/api/widgets", json={
        "name": "Card",
        "html": "<div class='card'>Hello</div>",
        "css": ".card { padding: 8px; }",
    })
    assert created.status_code == 200
    widget = created.json()

    listed = client.get("/api/widgets").json()
    assert [w["id"] for w in listed] == [widget["id"]]

    dropped = client.post(f"/api/canvas/drop/{session_id}", json={
        "payload": {"is_built_in": False, "widget_id": widget["id"]},
        "cursor": {"x": 300, "y": 300},
    })
    assert dropped.status_code == 200
    element_id = dropped.json()["element_id"]

    css = client.get(f"/api/code/{session_id}/css").text
    assert "/* Widget: Card */" in css
    assert ".card { padding: 8px; }" in css
    html = client.get(f"/api/code/{session_id}/html").text
    assert f"<div class=\"element-{element_id}\">" in html
    assert "data-widget" not in html


def test_widget_import_validation(client):
    assert client.post("/api/widgets", json={"name": "", "html": "<b>x</b>"}).status_code == 422
    assert client.post("/api/widgets/file", json={"filename": "x.js", "text": ""}).status_code == 422


def test_widget_file_import(client):
    response = client.post("/api/widgets/file", json={
        "filename": "hero-banner.html",
        "text": "<html><head><style>h1{color:red}</style></head><body><h1>Hi</h1></body></html>",
    })
    assert response.status_code == 200
    widget = response.json()
    assert widget["name"] == "Hero Banner"
    assert widget["html"] == "<h1>Hi</h1>"
    assert widget["css"] == "h1{color:red}"


def test_project_save_list_load(client, session_id):
    element_id = _add_button(client, session_id)

    saved = client.post("/api/projects", json={"session_id": session_id, "name": "Landing"})
    assert saved.status_code == 200
    project_id = saved.json()["project"]["id"]

    projects = client.get("/api/projects").json()
    assert [p["id"] for p in projects] == [project_id]
    assert projects[0]["element_count"] == 1

    client.delete(f"/api/canvas/state/{session_id}")
    assert client.get(f"/api/canvas/state/{session_id}").json()["elements"] == []

    loaded = client.post(f"/api/projects/{project_id}/load/{session_id}")
    assert loaded.status_code == 200
    elements = client.get(f"/api/canvas/state/{session_id}").json()["elements"]
    assert len(elements) == 1
    assert elements[0]["id"] != element_id
    assert elements[0]["content"] == "Bouton"
    assert elements[0]["position"] == {"x": 20, "y": 20}


def test_project_errors(client, session_id):
    assert client.post("/api/projects", json={"session_id": session_id, "name": "  "}).status_code == 422
    assert client.post("/api/projects", json={"session_id": "nope", "name": "P"}).status_code == 404
    assert client.post(f"/api/projects/missing/load/{session_id}").status_code == 404
    assert client.delete("/api/projects/missing").status_code == 404
