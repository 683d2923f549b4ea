import pytest

from jobly.exceptions import ErrorKind, JoblyError
from jobly.services import company_service


class TestCompanyService:
    def test_find_all(self, db, job_ids):
        assert [c["handle"] for c in company_service.find_all(db)] == ["c1", "c2", "c3"]

    def test_find_all_filters(self, db, job_ids):
        assert [c["handle"] for c in company_service.find_all(db, name="c2")] == ["c2"]
        assert [c["handle"] for c in company_service.find_all(db, min_employees=2)] == ["c2", "c3"]
        assert [c["handle"] for c in company_service.find_all(db, min_employees=1, max_employees=2)] == ["c1", "c2"]

    def test_find_all_min_greater_than_max(self, db, job_ids):
        with pytest.raises(JoblyError) as exc_info:
            company_service.find_all(db, min_employees=3, max_employees=1)
        assert exc_info.value.kind == ErrorKind.INVALID_INPUT

    def test_get_includes_jobs(self, db, job_ids):
        company = company_service.get(db, "c1")
        assert company["name"] == "C1"
        assert [j["id"] for j in company["jobs"]] == job_ids
        assert company_service.get(db, "c2")["jobs"] == []

    def test_get_not_found(self, db, job_ids):
        with pytest.raises(JoblyError) as exc_info:
            company_service.get(db, "nope")
        assert exc_info.value.kind == ErrorKind.NOT_FOUND

    def test_create_duplicate(self, db, job_ids):
        with pytest.raises(JoblyError) as exc_info:
            company_service.create(db, handle="c1", name="Other", description="d")
        assert exc_info.value.kind == ErrorKind.DUPLICATE_ENTRY

    def test_create_duplicate_name(self, db, job_ids):
        with pytest.raises(JoblyError) as exc_info:
            company_service.create(db, handle="other", name="C1", description="d")
        assert exc_info.value.kind == ErrorKind.DUPLICATE_ENTRY
        assert exc_info.value.message == "Duplicate company name: C1"

    def test_find_all_name_wildcards_are_literal(self, db, job_ids):
        assert company_service.find_all(db, name="%") == []
        assert len(company_service.find_all(db, name="")) == 3


class TestCompaniesRoutes:
    new_company = {
        "handle": "new",
        "name": "New",
        "description": "DescNew",
        "numEmployees": 10,
        "logoUrl": "http://new.img",
    }

    def _auth(self, token):
        return {"Authorization": f"Bearer {token}"}

    def test_create_company(self, client, admin_token):
        r = client.post("/companies", json=self.new_company, headers=self._auth(admin_token))
        assert r.status_code == 201
        assert r.json() == {"company": self.new_company}

    def test_create_company_requires_admin(self, client, u1_token):
        r = client.post("/companies", json=self.new_company, headers=self._auth(u1_token))
        assert r.status_code == 401

    def test_list_companies(self, client):
        r = client.get("/companies", params={"name": "C", "maxEmployees": 2})
        assert r.status_code == 200
        assert [c["handle"] for c in r.json()["companies"]] == ["c1", "c2"]

    def test_get_company(self, client, job_ids):
        r = client.get("/companies/c1")
        assert r.status_code == 200
        data = r.json()["company"]
        assert data["numEmployees"] == 1
        assert data["jobs"][0] == {"id": job_ids[0], "title": "j1", "salary": 100, "equity": "0.1"}

    def test_get_company_not_found(self, client):
        r = client.get("/companies/nope")
        assert r.status_code == 404

