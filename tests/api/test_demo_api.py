"""Demo API 테스트

/, /hi, /hello/{name}, /sleep/{seconds}, /register
"""

import asyncio
import time

from fastapi.testclient import TestClient

from backend.api.main import create_app

GREETING_HEADERS = {"host": "127.0.0.1:3030", "user-agent": "pytest"}


class TestReadme:
    """GET /"""

    def test_readme(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.text == "# Todo Service\n"

    def test_readme_missing(self, tmp_path):
        app = create_app(readme_path=str(tmp_path / "missing.md"))
        with TestClient(app) as client:
            response = client.get("/")

        assert response.status_code == 404
        assert response.json() == {"code": 404, "message": "NOT_FOUND"}


class TestHi:
    """GET /hi"""

    def test_hi_ok(self, client):
        response = client.get("/hi")

        assert response.status_code == 200
        assert response.text == "Hello, World!"
        assert response.headers["content-type"].startswith("text/plain")

    def test_hi_not_found(self, client):
        assert client.get("/ho").status_code == 404

    def test_hi_post(self, client):
        assert client.post("/hi").status_code == 405


class TestHello:
    """GET /hello/{name}"""

    def test_hello(self, client):
        response = client.get("/hello/m1", headers=GREETING_HEADERS)

        assert response.status_code == 200
        assert response.json() == {"name": "m1", "host": "127.0.0.1:3030", "agent": "pytest"}
        assert response.headers["foo"] == "bar"

    def test_hello_host_not_socket_addr(self, client):
        response = client.get("/hello/m1", headers={"user-agent": "pytest"})

        assert response.status_code == 400
        assert response.json() == {"code": 400, "message": "INVALID_HEADER"}


class TestSleep:
    """GET /sleep/{seconds}"""

    def test_sleep_zero(self, client):
        response = client.get("/sleep/0")

        assert response.status_code == 200
        assert response.text == "I waited 0 seconds!"

    def test_sleep_waits(self, client):
        started = time.monotonic()
        response = client.get("/sleep/1")
        elapsed = time.monotonic() - started

        assert response.status_code == 200
        assert response.text == "I waited 1 seconds!"
        assert elapsed >= 1.0

    def test_sleep_does_not_block_others(self, app, store, make_request):
        dispatcher = app.state.dispatcher

        async def scenario():
            sleeper = asyncio.create_task(dispatcher.dispatch(make_request(path="/sleep/1")))
            await asyncio.sleep(0)

            started = time.monotonic()
            hi, todos = await asyncio.gather(
                asyncio.wait_for(dispatcher.dispatch(make_request(path="/hi")), 0.5),
                asyncio.wait_for(store.list(), 0.5),
            )
            elapsed = time.monotonic() - started
            still_sleeping = not sleeper.done()

            return hi, todos, elapsed, still_sleeping, await sleeper

        hi, todos, elapsed, still_sleeping, slept = asyncio.run(scenario())

        assert hi.body == b"Hello, World!"
        assert todos == []
        assert elapsed < 0.5
        assert still_sleeping
        assert slept.body == b"I waited 1 seconds!"

    def test_sleep_out_of_range(self, client):
        started = time.monotonic()
        response = client.get("/sleep/6")
        elapsed = time.monotonic() - started

        assert response.status_code == 404
        assert elapsed < 1.0

    def test_sleep_not_numeric(self, client):
        assert client.get("/sleep/soon").status_code == 404


class TestRegister:
    """POST /register"""

    def test_register(self, client):
        payload = {"name": "Sean", "rate": 2}

        response = client.post("/register", json=payload)

        assert response.status_code == 200
        assert response.json() == payload

    def test_register_malformed(self, client):
        response = client.post("/register", json={"name": "Sean", "rate": -2})

        assert response.status_code == 400
        assert response.json() == {"code": 400, "message": "BAD_REQUEST"}
