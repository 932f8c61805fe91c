import pytest


@pytest.mark.parametrize("chart_key", ["histogram", "pie_chart", "parallel_coordinates"])
def test_contract_chart_returns_frame(client, chart_key):
    response = client.get(f"/api/charts/{chart_key}")
    assert response.status_code == 200
    body = response.json()
    assert set(body.keys()) == {"chart_key", "generated_at", "spec", "transitions"}
    assert body["chart_key"] == chart_key
    assert body["spec"]["$schema"].startswith("https://vega.github.io/schema/vega-lite/")


def test_contract_state(client):
    response = client.get("/api/state")
    assert response.status_code == 200
    assert set(response.json().keys()) == {
        "selected_attribute",
        "selected_parallel_variables",
        "visibility",
        "viewports",
    }
