from moneyline_coach.errors import APIError, CompletionError, FeedError, StoreError, ValidationError


def test_apierror_to_dict():
    err = APIError("OddsAPI", "TIMEOUT", "Odds API failed", "details")
    data = err.to_dict()
    assert data["source"] == "OddsAPI"
    assert data["code"] == "TIMEOUT"
    assert "details" in data


def test_apierror_omits_empty_details():
    assert "details" not in APIError("KV", "HTTP_500", "boom").to_dict()


def test_subclasses_carry_their_source():
    assert CompletionError("MISSING_KEY", "no key").source == "OpenAI"
    assert StoreError("HTTP_401", "denied").source == "KV"
    assert isinstance(FeedError("SportsDataIO", "HTTP_500", "down"), APIError)
    assert issubclass(ValidationError, ValueError)


def test_unknown_route_is_json_404(client):
    response = client.get("/nope")
    assert response.status_code == 404
    assert "error" in response.get_json()
