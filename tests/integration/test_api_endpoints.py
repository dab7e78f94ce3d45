"""End-to-end: configure through the environment, seed through the CLI, query over HTTP."""

import pytest
from fastapi.testclient import TestClient

from personapi.api.main import create_app
from personapi.cli.main import main as cli_main

pytestmark = pytest.mark.testclient


@pytest.fixture
def configured_env(tmp_path, monkeypatch):
    db_path = tmp_path / "e2e.db"
    monkeypatch.setenv("PERSONAPI_DB_PATH", str(db_path))
    monkeypatch.setenv("PERSONAPI_RESOURCE_ROOT", "/people")
    monkeypatch.setenv("PERSONAPI_API_VERSION", "v9")
    monkeypatch.setenv("PERSONAPI_MAX_PAGE_SIZE", "3")
    monkeypatch.setenv("PERSONAPI_REQUIRE_LOGIN", "1")

    people = tmp_path / "people.tsv"
    people.write_text("name\tgender\temail\nAlice\tFemale\ta@example.com\nBob\tMale\t\nCara\tfemale\t\n")

    cli_main(["db", "init"])
    cli_main(["db", "import", "--file", str(people)])
    cli_main(["auth", "create-user", "ops", "--role", "admin", "--password", "ops-password"])
    return db_path


def test_env_configured_app_serves_imported_people(configured_env):
    with TestClient(create_app()) as client:
        auth = ("ops", "ops-password")

        listing = client.get("/people/", auth=auth)
        assert listing.status_code == 200
        assert listing.headers["X-PERSON-API-VERSION"] == "v9"
        names = [p["name"] for p in listing.json()["_embedded"]["persons"]]
        assert names == ["Alice", "Bob", "Cara"]

        females = client.get("/people/gender/FEMALE", auth=auth).json()
        assert [p["name"] for p in females["_embedded"]["persons"]] == ["Alice", "Cara"]

        too_big = client.get("/people/page", params={"size": 4}, auth=auth)
        assert too_big.status_code == 400

        page = client.get("/people/page", params={"size": 2, "page": 1}, auth=auth).json()
        assert [p["name"] for p in page["_embedded"]["persons"]] == ["Cara"]
        assert set(page["_links"]) == {"first", "prev", "self", "last"}
