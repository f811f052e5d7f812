import pytest

from cloudant_client import Database

from cloudant_server import CloudantServer
from helpers import DATABASE, PASSWORD, USERNAME


@pytest.fixture(scope="session")
def cloudant_server():
    server = CloudantServer(database=DATABASE, username=USERNAME, password=PASSWORD)
    server.start()
    yield server
    server.stop()


@pytest.fixture
def store(cloudant_server):
    # keep the documents of one test from leaking into the next
    cloudant_server.store.reset()
    return cloudant_server.store


@pytest.fixture
def db(cloudant_server, store):
    with Database(USERNAME, PASSWORD, DATABASE, cloudant_server.url, timeout=5) as database:
        yield database


@pytest.fixture
def movies(store):
    docs = [
        {"_id": "alien", "title": "Alien", "year": 1979, "type": "movie"},
        {"_id": "heat", "title": "Heat", "year": 1995, "type": "movie"},
        {"_id": "arrival", "title": "Arrival", "year": 2016, "type": "movie"},
        {"_id": "dune", "title": "Dune", "year": 1965, "type": "book"},
    ]
    for doc in docs:
        store.insert(doc)
    return docs


@pytest.fixture
def env(monkeypatch, cloudant_server):
    for name, value in {
        "CLOUDANT_HOST": cloudant_server.url,
        "CLOUDANT_DATABASE": DATABASE,
        "CLOUDANT_USERNAME": USERNAME,
        "CLOUDANT_PASSWORD": PASSWORD,
    }.items():
        monkeypatch.setenv(name, value)
    monkeypatch.delenv("CLOUDANT_CONFIG", raising=False)
    monkeypatch.delenv("CLOUDANT_TIMEOUT", raising=False)
