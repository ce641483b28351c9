from fastapi import status

NEW_JOB = {
    "title": "newjob",
    "salary": 100,
    "equity": 0.5,
    "company_handle": "c2",
}

# ----------------------------------------------------------------- POST /jobs

def test_create_ok_for_admin(client, companies, admin_headers):
    response = client.post("/jobs", json=NEW_JOB, headers=admin_headers)
    assert response.status_code == status.HTTP_201_CREATED
    job = response.json()["job"]
    assert job == {"id": job["id"], **NEW_JOB}

def test_create_not_ok_for_users(client, companies, user_headers):
    response = client.post("/jobs", json=NEW_JOB, headers=user_headers)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"error": {"message": "Unauthorized", "status": 401}}

def test_create_missing_data(client, companies, admin_headers):
    response = client.post("/jobs", json={"title": "new"}, headers=admin_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST

def test_create_invalid_data(client, companies, admin_headers):
    response = client.post("/jobs", json={**NEW_JOB, "title": 1}, headers=admin_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST

def test_create_equity_above_one(client, companies, admin_headers):
    response = client.post("/jobs", json={**NEW_JOB, "equity": 1.5}, headers=admin_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST

def test_create_for_missing_company(client, companies, admin_headers):
    response = client.post("/jobs", json={**NEW_JOB, "company_handle": "none"}, headers=admin_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"]["message"] == "Company doesn't exist: none"

# ------------------------------------------------------------------ GET /jobs

def test_list_for_anon(client, jobs):
    response = client.get("/jobs")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "jobs": [
            {"id": jobs["j1"], "title": "j1", "salary": 100, "equity": 0.5, "company_handle": "c1"},
            {"id": jobs["j2"], "title": "j2", "salary": None, "equity": None, "company_handle": "c2"},
            {"id": jobs["j3"], "title": "j3", "salary": 50, "equity": 0.0, "company_handle": "c3"},
        ]
    }

def test_list_has_equity(client, jobs):
    response = client.get("/jobs", params={"hasEquity": "true"})
    assert [j["title"] for j in response.json()["jobs"]] == ["j1"]

def test_list_has_equity_false_is_no_filter(client, jobs):
    response = client.get("/jobs", params={"hasEquity": "false"})
    assert len(response.json()["jobs"]) == 3

def test_list_title_and_min_salary(client, jobs):
    response = client.get("/jobs", params={"title": "J", "minSalary": 60})
    assert [j["title"] for j in response.json()["jobs"]] == ["j1"]

def test_list_unknown_filter(client, jobs):
    response = client.get("/jobs", params={"hasEquity": "true", "company": "c1"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"]["message"] == "Invalid query variable: company"

def test_list_bad_min_salary(client, jobs):
    response = client.get("/jobs", params={"minSalary": "lots"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "minSalary" in response.json()["error"]["message"]

def test_list_filters_are_documented(client):
    operation = client.get("/openapi.json").json()["paths"]["/jobs"]["get"]
    names = {param["name"] for param in operation["parameters"]}
    assert names == {"title", "minSalary", "hasEquity"}

# -------------------------------------------------------------- GET /jobs/:id

def test_get(client, jobs):
    response = client.get(f"/jobs/{jobs['j2']}")
    assert response.json() == {
        "job": {"id": jobs["j2"], "title": "j2", "salary": None, "equity": None, "company_handle": "c2"}
    }

def test_get_not_found(client, jobs):
    response = client.get("/jobs/10000000")
    assert response.status_code == status.HTTP_404_NOT_FOUND

def test_get_non_integer_id(client, jobs):
    response = client.get("/jobs/abc")
    assert response.status_code == status.HTTP_400_BAD_REQUEST

# ------------------------------------------------------------ PATCH /jobs/:id

def test_update_for_admin(client, jobs, admin_headers):
    response = client.patch(f"/jobs/{jobs['j1']}", json={"title": "updated title"}, headers=admin_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "job": {
            "id": jobs["j1"],
            "title": "updated title",
            "salary": 100,
            "equity": 0.5,
            "company_handle": "c1",
        }
    }

def test_update_not_for_users(client, jobs, user_headers):
    response = client.patch(f"/jobs/{jobs['j1']}", json={"title": "Updated title"}, headers=user_headers)
    assert response.json() == {"error": {"message": "Unauthorized", "status": 401}}

def test_update_not_found(client, jobs, admin_headers):
    response = client.patch("/jobs/10000000", json={"title": "new nope"}, headers=admin_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND

def test_update_id_change_attempt(client, jobs, admin_headers):
    response = client.patch(f"/jobs/{jobs['j1']}", json={"id": 1}, headers=admin_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST

def test_update_company_change_attempt(client, jobs, admin_headers):
    response = client.patch(f"/jobs/{jobs['j1']}", json={"company_handle": "c2"}, headers=admin_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST

def test_update_invalid_data(client, jobs, admin_headers):
    response = client.patch(f"/jobs/{jobs['j1']}", json={"title": 1234}, headers=admin_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST

def test_update_null_salary(client, jobs, admin_headers):
    response = client.patch(f"/jobs/{jobs['j1']}", json={"salary": None}, headers=admin_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["job"]["salary"] is None

# ----------------------------------------------------------- DELETE /jobs/:id

def test_delete_for_admin(client, jobs, admin_headers):
    response = client.delete(f"/jobs/{jobs['j1']}", headers=admin_headers)
    assert response.json() == {"deleted": str(jobs["j1"])}

def test_delete_not_for_users(client, jobs, user_headers):
    response = client.delete(f"/jobs/{jobs['j1']}", headers=user_headers)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED

def test_delete_not_found(client, jobs, admin_headers):
    response = client.delete("/jobs/1000000000", headers=admin_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND
