import http.client
import threading
import time
from dataclasses import dataclass, field

import pytest

from skygame.edit_server import EditServer
from skygame.reflect import Member, reflect_type


@reflect_type(Member(float, "x", "X"), Member(float, "y", "Y"))
@dataclass
class _Point:
    x: float = 0.0
    y: float = 0.0


@reflect_type(
    Member(float, "value", "Value"),
    Member(_Point, "point", "Point"),
    Member(int, "count", "Count"),
)
@dataclass
class _Root:
    value: float = 0.0
    point: _Point = field(default_factory=_Point)
    count: int = 0


@pytest.fixture
def served():
    target = _Root()
    server = EditServer(port=0)
    server.add_object("Root", target)
    yield server, target
    server.close()


def test_options_returns_cors_headers(served):
    server, _ = served
    response = server.handle("OPTIONS", "/anything")
    assert response.status == 200
    assert ("Access-Control-Allow-Origin", "*") in response.headers
    assert ("Access-Control-Allow-Methods", "POST, PUT, GET") in response.headers


def test_other_methods_are_not_found(served):
    server, _ = served
    response = server.handle("GET", "/object/Root/Value")
    assert response.status == 404
    assert response.body == b"Resource not Found"
    assert response.headers == ()


def test_put_sets_float(served):
    server, target = served
    response = server.handle("PUT", "/object/Root/Value", b"2.5")
    assert response.status == 200
    assert response.body == b"SUCCESS"
    assert target.value == 2.5


def test_put_sets_nested_float(served):
    server, target = served
    response = server.handle("PUT", "/object/Root/Point/Y", b" -3")
    assert response.status == 200
    assert target.point.y == -3.0
    assert target.point.x == 0.0


def test_names_and_method_ignore_case(served):
    server, target = served
    response = server.handle("put", "/OBJECT/root/value", "7")
    assert response.status == 200
    assert target.value == 7.0


def test_backslashes_and_unknown_tokens(served):
    server, target = served
    response = server.handle("PUT", "\\object\\Root\\Bogus\\Value", b"1.25")
    assert response.status == 200
    assert target.value == 1.25


def test_unknown_object_is_error(served):
    server, _ = served
    response = server.handle("PUT", "/object/Missing/Value", b"1")
    assert response.status == 500
    assert response.body == b"Internal Error"


def test_missing_object_name_is_error(served):
    server, _ = served
    assert server.handle("PUT", "/object", b"1").status == 500


def test_non_float_target_is_error(served):
    server, target = served
    assert server.handle("PUT", "/object/Root/Count", b"3").status == 500
    assert server.handle("PUT", "/object/Root/Point", b"3").status == 500
    assert target.count == 0


def test_long_body_is_error(served):
    server, target = served
    response = server.handle("PUT", "/object/Root/Value", b"1" * 300)
    assert response.status == 500
    assert target.value == 0.0


def test_non_numeric_body_sets_zero(served):
    server, target = served
    target.value = 9.0
    assert server.handle("PUT", "/object/Root/Value", b"abc").status == 200
    assert target.value == 0.0


def test_put_outside_object_is_not_found(served):
    server, _ = served
    assert server.handle("PUT", "/other/Root/Value", b"1").status == 404


def test_update_before_start_raises():
    with pytest.raises(RuntimeError):
        EditServer(port=0).update()


def test_live_request_updates_object():
    target = _Root()
    result = {}
    with EditServer(port=0) as server:
        server.add_object("Root", target)
        host, port = server.start()

        def client():
            conn = http.client.HTTPConnection(host, port, timeout=5)
            conn.request("PUT", "/object/Root/Value", body=b"4.5")
            resp = conn.getresponse()
            result["status"] = resp.status
            result["body"] = resp.read()
            conn.close()

        thread = threading.Thread(target=client)
        thread.start()
        deadline = time.monotonic() + 5
        while thread.is_alive() and time.monotonic() < deadline:
            server.update()
            time.sleep(0.01)
        thread.join(1)

    assert result["status"] == 200
    assert result["body"] == b"SUCCESS"
    assert target.value == 4.5