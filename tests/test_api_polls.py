import uuid

from votely.models import Poll, Vote


def _error(resp):
    body = resp.get_json()
    assert body["success"] is False
    return body["error"]


def test_create_poll(client, owner, auth_headers):
    resp = client.post(
        "/api/polls",
        json={"question": "Favourite colour?", "options": "Red, Green, Blue"},
        headers=auth_headers(owner),
    )

    assert resp.status_code == 201
    poll = resp.get_json()["poll"]
    assert poll["question"] == "Favourite colour?"
    assert poll["options"] == ["Red", "Green", "Blue"]
    assert poll["created_by"] == str(owner.id)


def test_create_poll_from_form_fields(client, owner, auth_headers):
    resp = client.post(
        "/api/polls",
        data={"question": "Tabs or spaces?", "options": "Tabs,Spaces"},
        headers=auth_headers(owner),
    )
    assert resp.status_code == 201
    assert resp.get_json()["poll"]["options"] == ["Tabs", "Spaces"]


def test_create_poll_requires_login(client):
    resp = client.post("/api/polls", json={"question": "Favourite colour?", "options": "A, B"})

    assert resp.status_code == 401
    assert _error(resp)["code"] == "UNAUTHORIZED"


def test_create_poll_reports_first_violation(client, owner, auth_headers):
    resp = client.post(
        "/api/polls",
        json={"question": "Favourite colour?", "options": "Red"},
        headers=auth_headers(owner),
    )

    assert resp.status_code == 400
    error = _error(resp)
    assert error["code"] == "VALIDATION_ERROR"
    assert error["message"] == "Please provide at least 2 options"
    assert Poll.query.count() == 0


def test_create_poll_missing_fields(client, owner, auth_headers):
    resp = client.post("/api/polls", json={"question": "Favourite colour?"}, headers=auth_headers(owner))

    assert resp.status_code == 400
    error = _error(resp)
    assert error["message"] == "Question and options are required"
    assert error["details"] == {"field": "options"}


def test_get_poll_is_public(client, make_poll):
    poll = make_poll()

    resp = client.get(f"/api/polls/{poll.id}")

    assert resp.status_code == 200
    assert resp.get_json()["poll"]["id"] == str(poll.id)


def test_malformed_id_is_a_validation_error_not_not_found(client):
    resp = client.get("/api/polls/not-a-uuid")

    assert resp.status_code == 400
    assert _error(resp)["message"] == "Invalid poll ID format"


def test_unknown_poll_is_not_found(client):
    resp = client.get(f"/api/polls/{uuid.uuid4()}")

    assert resp.status_code == 404
    assert _error(resp)["message"] == "Poll not found"


def test_update_poll_by_owner(client, make_poll, owner, auth_headers):
    poll = make_poll()

    resp = client.put(
        f"/api/polls/{poll.id}",
        json={"question": "Favourite shade?", "options": ["Light", "Dark"]},
        headers=auth_headers(owner),
    )

    assert resp.status_code == 200
    assert resp.get_json()["poll"]["options"] == ["Light", "Dark"]


def test_update_poll_by_other_user_is_forbidden(client, make_poll, voter, auth_headers):
    poll = make_poll()

    resp = client.put(
        f"/api/polls/{poll.id}",
        json={"question": "Favourite shade?", "options": "Light, Dark"},
        headers=auth_headers(voter),
    )

    assert resp.status_code == 403
    assert _error(resp)["code"] == "FORBIDDEN"


def test_delete_poll_then_stats_are_not_found(client, make_poll, owner, voter, add_vote, auth_headers):
    poll = make_poll()
    poll_id = poll.id
    add_vote(poll, voter, 0)

    resp = client.delete(f"/api/polls/{poll_id}", headers=auth_headers(owner))
    assert resp.status_code == 200
    assert Vote.query.filter_by(poll_id=poll_id).count() == 0

    resp = client.get(f"/api/polls/{poll_id}/votes", headers=auth_headers(owner))
    assert resp.status_code == 404
    assert _error(resp)["message"] == "Poll not found"


def test_delete_poll_by_other_user_is_forbidden(client, make_poll, voter, auth_headers):
    poll = make_poll()

    resp = client.delete(f"/api/polls/{poll.id}", headers=auth_headers(voter))

    assert resp.status_code == 403
    assert Poll.query.count() == 1


def test_list_polls_with_pagination(client, make_poll, voter, add_vote, auth_headers):
    first = make_poll(question="First poll?")
    make_poll(question="Second poll?")
    add_vote(first, voter, 1)

    resp = client.get("/api/polls?page=2&limit=1", headers=auth_headers(voter))

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["total"] == 2
    assert body["page"] == 2
    assert body["limit"] == 1
    assert len(body["polls"]) == 1
    assert body["polls"][0]["id"] == str(first.id)
    assert body["polls"][0]["votes"] == 1
    assert body["polls"][0]["created_by_username"] == "owner"


def test_list_polls_rejects_oversized_page(client, voter, auth_headers):
    resp = client.get("/api/polls?limit=500", headers=auth_headers(voter))

    assert resp.status_code == 400
    assert _error(resp)["details"] == {"field": "limit"}


def test_list_polls_rejects_zero_limit(client, voter, auth_headers):
    resp = client.get("/api/polls?limit=0", headers=auth_headers(voter))

    assert resp.status_code == 400
    assert _error(resp)["details"] == {"field": "limit"}


def test_list_polls_default_limit(client, voter, auth_headers):
    resp = client.get("/api/polls", headers=auth_headers(voter))

    assert resp.status_code == 200
    assert resp.get_json()["limit"] == 10
