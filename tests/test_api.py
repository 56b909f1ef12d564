"""End-to-end API flow over the in-memory database."""

API = "/api/v1"

LONG_ANSWER = (
    "First, a HashMap stores entries in an array of buckets selected by the key hash. "
    "Second, collisions are chained and large chains become balanced trees. "
    "Finally, lookups are constant time on average because the hash spreads keys evenly."
)


def start_session(client, headers, domain="Java") -> dict:
    response = client.post(f"{API}/interview/start", json={"domain": domain}, headers=headers)
    assert response.status_code == 201
    return response.json()


def submit(client, headers, session_id, question_id="java-1", answer=LONG_ANSWER):
    return client.post(
        f"{API}/answer/submit",
        json={
            "sessionId": session_id,
            "questionId": question_id,
            "questionText": "Explain how HashMap works internally.",
            "userAnswer": answer,
            "focusScore": 90,
        },
        headers=headers,
    )


def test_health_needs_no_token(client):
    assert client.get("/health").json()["status"] == "ok"

    response = client.get(f"{API}/health")

    assert response.status_code == 200
    assert response.json()["database"] == "connected"


def test_missing_token_is_rejected(client):
    response = client.get(f"{API}/interview/domains")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


def test_invalid_token_is_rejected(client):
    response = client.get(
        f"{API}/interview/domains",
        headers={"Authorization": "Bearer not-a-token"},
    )

    assert response.status_code == 401
    assert response.headers["X-Request-ID"]


def test_catalog_endpoints(client, auth_headers):
    headers = auth_headers()

    domains = client.get(f"{API}/interview/domains", headers=headers).json()["domains"]
    assert "Java" in domains
    assert "System Design" in domains

    java = client.get(f"{API}/interview", params={"domain": "Java"}, headers=headers).json()
    assert java["domain"] == "Java"
    assert java["totalQuestions"] == len(java["questions"]) == 4
    assert java["questions"][0]["id"] == "java-1"


def test_catalog_requires_known_domain(client, auth_headers):
    headers = auth_headers()

    missing = client.get(f"{API}/interview", headers=headers)
    assert missing.status_code == 400

    unknown = client.get(f"{API}/interview", params={"domain": "Cobol"}, headers=headers)
    assert unknown.status_code == 404
    assert "Java" in unknown.json()["error"]["details"]["available_domains"]


def test_start_snapshots_questions(client, auth_headers):
    session = start_session(client, auth_headers())

    assert session["status"] == "in-progress"
    assert session["totalQuestions"] == 4
    assert session["questions"][0] == {
        "questionId": "java-1",
        "questionText": "Explain the difference between an abstract class and an interface in Java.",
        "category": "OOP",
        "difficulty": "Easy",
    }
    assert session["completedAt"] is None


def test_start_unknown_domain(client, auth_headers):
    response = client.post(f"{API}/interview/start", json={"domain": "Cobol"}, headers=auth_headers())

    assert response.status_code == 404


def test_submit_returns_merged_evaluation(client, auth_headers):
    headers = auth_headers()
    session = start_session(client, headers)

    response = submit(client, headers, session["sessionId"])

    assert response.status_code == 201
    body = response.json()
    assert body["sessionId"] == session["sessionId"]
    assert body["questionId"] == "java-1"
    assert 1 <= body["score"] <= 10
    assert body["focusScore"] == 90
    assert body["fillerAnalysis"]["totalWords"] == len(LONG_ANSWER.split())
    assert body["idealAnswer"]
    assert isinstance(body["lineByLineCorrection"], list)


def test_resubmission_replaces_answer(client, auth_headers):
    headers = auth_headers()
    session = start_session(client, headers)

    first = submit(client, headers, session["sessionId"], answer="Too short.").json()
    second = submit(client, headers, session["sessionId"]).json()

    assert second["responseId"] == first["responseId"]
    assert second["userAnswer"] == LONG_ANSWER

    answers = client.get(f"{API}/answer/{session['sessionId']}", headers=headers).json()
    assert answers["totalAnswers"] == 1
    assert answers["answers"][0]["userAnswer"] == LONG_ANSWER


def test_submit_accepts_numeric_question_id(client, auth_headers):
    headers = auth_headers()
    session = start_session(client, headers)

    response = submit(client, headers, session["sessionId"], question_id=3)

    assert response.status_code == 201
    assert response.json()["questionId"] == "3"


def test_submit_rejects_blank_answer(client, auth_headers):
    headers = auth_headers()
    session = start_session(client, headers)

    response = submit(client, headers, session["sessionId"], answer="   ")

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_submit_to_unknown_session(client, auth_headers):
    response = submit(client, auth_headers(), 9999)

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


def test_other_users_cannot_touch_session(client, auth_headers):
    owner = auth_headers("user-1")
    intruder = auth_headers("user-2")
    session = start_session(client, owner)
    session_id = session["sessionId"]

    assert client.get(f"{API}/interview/{session_id}", headers=intruder).status_code == 403
    assert submit(client, intruder, session_id).status_code == 403
    assert client.get(f"{API}/answer/{session_id}", headers=intruder).status_code == 403
    assert client.get(f"{API}/report/generate/{session_id}", headers=intruder).status_code == 403


def test_report_without_answers(client, auth_headers):
    headers = auth_headers()
    session = start_session(client, headers)

    response = client.get(f"{API}/report/generate/{session['sessionId']}", headers=headers)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "NO_RESPONSES"


def test_report_flow(client, auth_headers):
    headers = auth_headers()
    session = start_session(client, headers)
    session_id = session["sessionId"]
    submit(client, headers, session_id, question_id="java-1")
    submit(client, headers, session_id, question_id="java-2", answer="I am not sure.")

    first = client.get(f"{API}/report/generate/{session_id}", headers=headers)
    assert first.status_code == 200
    report = first.json()
    assert report["sessionId"] == session_id
    assert report["totalQuestions"] == 4
    assert report["strengths"]
    assert report["gaps"]
    assert report["recommendations"]

    again = client.get(f"{API}/report/generate/{session_id}", headers=headers).json()
    assert again == report

    by_id = client.get(f"{API}/report/{report['id']}", headers=headers).json()
    assert by_id["averageScore"] == report["averageScore"]

    completed = client.get(f"{API}/interview/{session_id}", headers=headers).json()
    assert completed["status"] == "completed"
    assert completed["totalScore"] == report["averageScore"]

    assert client.get(f"{API}/report/{report['id']}", headers=auth_headers("user-2")).status_code == 403


def test_user_listings_are_scoped_and_newest_first(client, auth_headers):
    headers = auth_headers("user-1")
    older = start_session(client, headers, "Java")
    newer = start_session(client, headers, "Python")
    start_session(client, auth_headers("user-2"), "QA")

    sessions = client.get(f"{API}/interview/user/all", headers=headers).json()
    assert sessions["totalSessions"] == 2
    assert [s["sessionId"] for s in sessions["data"]] == [newer["sessionId"], older["sessionId"]]

    submit(client, headers, older["sessionId"])
    client.get(f"{API}/report/generate/{older['sessionId']}", headers=headers)

    reports = client.get(f"{API}/report/user/all", headers=headers).json()
    assert reports["totalReports"] == 1
    assert reports["data"][0]["sessionId"] == older["sessionId"]

    assert client.get(f"{API}/report/user/all", headers=auth_headers("user-2")).json()["totalReports"] == 0


def test_unknown_report(client, auth_headers):
    response = client.get(f"{API}/report/12345", headers=auth_headers())

    assert response.status_code == 404
