import time


def test_chart_keys(client):
    response = client.get("/api/charts")
    assert response.status_code == 200
    assert response.json() == ["histogram", "pie_chart", "parallel_coordinates"]


def test_unknown_chart_key(client):
    response = client.get("/api/charts/scatter")
    assert response.status_code == 404
    payload = response.json()
    assert payload["code"] == "invalid_chart_key"
    assert "histogram" in payload["supported_chart_keys"]


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_page_composes_fragments(client):
    response = client.get("/")
    assert response.status_code == 200
    html = response.text
    assert 'id="attribute-dropdown"' in html
    assert '<option value="gpa" selected>GPA</option>' in html
    assert html.count('class="variable-checkbox"') == 4
    for container in ("container1", "container2", "container3"):
        assert f'id="{container}"' in html
    assert "vega-embed" in html


def test_viewport_is_applied_after_quiet_period(client):
    response = client.post("/api/viewport/histogram", json={"width": 480, "height": 320})
    assert response.status_code == 202
    time.sleep(0.15)
    frame = client.get("/api/charts/histogram").json()
    assert frame["spec"]["width"] == 480
    assert frame["spec"]["height"] == 320


def test_viewport_rejects_bad_size(client):
    response = client.post("/api/viewport/histogram", json={"width": 0, "height": 320})
    assert response.status_code == 422


def test_page_posts_brush_while_dragging(client):
    html = client.get("/").text
    assert 'addEventListener("mousemove"' in html
    assert "const BRUSH_TICK_MS = 50;" in html
    assert "moved ? [start[1], end[1]] : null" in html
