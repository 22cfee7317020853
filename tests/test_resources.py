import json
from urllib.parse import parse_qs

import pytest
import requests

from hcloud_client.exceptions import NotFoundError, TransportError, ValidationError
from hcloud_client.http import StreamFactory
from hcloud_client.resources import ImagesResource, ResourceBase, ServersResource, VolumesResource


def make_response(status_code=200, body=b"{}", content_type="application/json"):
    response = requests.Response()
    response.status_code = status_code
    response._content = body
    if content_type:
        response.headers["Content-Type"] = content_type
    return response


class RecordingTransport:
    def __init__(self, response=None):
        self.calls = []
        self.response = response if response is not None else make_response()

    def _record(self, method, path, headers, body=None):
        self.calls.append({"method": method, "path": path, "headers": headers, "body": body})
        return self.response

    def get(self, path, headers):
        return self._record("GET", path, headers)

    def post(self, path, headers, body):
        return self._record("POST", path, headers, body)

    def put(self, path, headers, body):
        return self._record("PUT", path, headers, body)

    def delete(self, path, headers):
        return self._record("DELETE", path, headers)


def build(resource_cls, response=None):
    transport = RecordingTransport(response)
    return resource_cls(transport, StreamFactory()), transport


def test_get_encodes_identifier_segments():
    servers, transport = build(ServersResource)

    servers.get("web.example com")

    assert transport.calls[0]["path"] == "servers/web%2Eexample%20com"


def test_list_appends_validated_pagination():
    servers, transport = build(
        ServersResource, make_response(body=b'{"servers": [], "meta": {"pagination": {"page": 2}}}')
    )

    payload = servers.list(page=2, per_page=50, label_selector="env=prod")

    assert transport.calls[0]["path"] == "servers?page=2&per_page=50&label_selector=env%3Dprod"
    assert payload["meta"]["pagination"]["page"] == 2


def test_list_without_options_has_no_query():
    servers, transport = build(ServersResource)

    servers.list()

    assert transport.calls[0]["path"] == "servers"


@pytest.mark.parametrize(
    "options",
    [{"per_page": 101}, {"page": 0}, {"bogus": 1}, {"status": "exploded"}, {"name": 5}],
)
def test_invalid_list_options_never_reach_transport(options):
    servers, transport = build(ServersResource)

    with pytest.raises(ValidationError):
        servers.list(**options)

    assert transport.calls == []


def test_list_status_filter_uses_bracket_notation():
    servers, transport = build(ServersResource)

    servers.list(status=["running", "off"])

    assert transport.calls[0]["path"] == "servers?status[]=running&status[]=off"


def test_create_sends_json_body():
    servers, transport = build(ServersResource, make_response(201, b'{"server": {"id": 1}}'))

    result = servers.create({"name": "web", "server_type": "cx22", "image": "ubuntu-24.04"})

    call = transport.calls[0]
    assert call["method"] == "POST"
    assert call["path"] == "servers"
    assert call["headers"]["Content-Type"] == "application/json"
    assert json.loads(call["body"]) == {"name": "web", "server_type": "cx22", "image": "ubuntu-24.04"}
    assert result == {"server": {"id": 1}}


def test_actions_post_without_body():
    servers, transport = build(ServersResource)

    servers.power_on(42)
    servers.shutdown(42)

    assert [call["path"] for call in transport.calls] == [
        "servers/42/actions/poweron",
        "servers/42/actions/shutdown",
    ]
    assert transport.calls[0]["body"] is None
    assert "Content-Type" not in transport.calls[0]["headers"]


def test_list_actions_validates_options():
    servers, transport = build(ServersResource)

    servers.list_actions(42, sort="id:desc", per_page=5)

    assert transport.calls[0]["path"] == "servers/42/actions?sort=id%3Adesc&per_page=5"
    with pytest.raises(ValidationError):
        servers.list_actions(42, label_selector="x")


def test_metrics_builds_query():
    servers, transport = build(ServersResource)

    servers.metrics(7, ["cpu", "disk"], "2024-01-01T00:00:00Z", "2024-01-02T00:00:00Z", step=60)

    path, query = transport.calls[0]["path"].split("?", 1)
    assert path == "servers/7/metrics"
    assert parse_qs(query) == {
        "type": ["cpu,disk"],
        "start": ["2024-01-01T00:00:00Z"],
        "end": ["2024-01-02T00:00:00Z"],
        "step": ["60"],
    }


def test_metrics_rejects_unknown_type():
    servers, transport = build(ServersResource)

    with pytest.raises(ValueError, match="Invalid metric type: memory"):
        servers.metrics(7, "memory", "a", "b")
    assert transport.calls == []


def test_update_uses_put_with_json():
    volumes, transport = build(VolumesResource)

    volumes.update(7, {"name": "data"})

    call = transport.calls[0]
    assert call["method"] == "PUT"
    assert call["path"] == "volumes/7"
    assert call["body"] == b'{"name":"data"}'


def test_volume_attach_payload():
    volumes, transport = build(VolumesResource)

    volumes.attach(7, 42, automount=True)

    assert transport.calls[0]["path"] == "volumes/7/actions/attach"
    assert json.loads(transport.calls[0]["body"]) == {"server": 42, "automount": True}


def test_volume_resize_rejects_non_positive_size():
    volumes, transport = build(VolumesResource)

    with pytest.raises(ValueError, match="Invalid volume size: 0"):
        volumes.resize(7, 0)
    assert transport.calls == []


def test_delete_returns_none_for_no_content():
    volumes, transport = build(VolumesResource, make_response(204, b"", None))

    assert volumes.delete(7) is None
    assert transport.calls[0]["method"] == "DELETE"
    assert transport.calls[0]["path"] == "volumes/7"


def test_images_list_type_filter():
    images, transport = build(ImagesResource)

    images.list(type="snapshot", architecture="arm")

    assert transport.calls[0]["path"] == "images?type=snapshot&architecture=arm"
    with pytest.raises(ValidationError):
        images.list(type="iso")


def test_delete_parameters_go_into_query():
    base, transport = build(ResourceBase)

    base._delete("things/1", {"force": True})

    assert transport.calls[0]["path"] == "things/1?force=1"


def test_post_with_files_sends_multipart(tmp_path):
    class UploadsResource(ResourceBase):
        def upload(self, path):
            return self._post("uploads", {"description": "disk image"}, files={"file": path})

    image = tmp_path / "disk.img"
    image.write_bytes(b"\x00\x01")
    transport = RecordingTransport()

    UploadsResource(transport, StreamFactory()).upload(image)

    call = transport.calls[0]
    assert call["headers"]["Content-Type"].startswith("multipart/form-data; boundary=")
    assert b'filename="disk.img"' in call["body"]
    assert b"disk image" in call["body"]


def test_caller_headers_are_not_mutated():
    base, transport = build(ResourceBase)
    headers = {"X-Request-Id": "abc"}

    base._post("things", {"name": "x"}, headers)

    assert headers == {"X-Request-Id": "abc"}
    assert transport.calls[0]["headers"] == {
        "X-Request-Id": "abc",
        "Content-Type": "application/json",
    }


def test_api_errors_propagate_from_mediator():
    body = b'{"error":{"code":"not_found","message":"server with ID 9 not found"}}'
    servers, _ = build(ServersResource, make_response(404, body))

    with pytest.raises(NotFoundError, match="server with ID 9 not found"):
        servers.get(9)


def test_transport_errors_pass_through_unchanged():
    error = TransportError("connection reset")

    class FailingTransport(RecordingTransport):
        def get(self, path, headers):
            raise error

    servers = ServersResource(FailingTransport(), StreamFactory())

    with pytest.raises(TransportError) as excinfo:
        servers.list()

    assert excinfo.value is error


def test_server_path_helper():
    base, _ = build(ResourceBase)

    assert base._server_path("1.2", "actions/reboot") == "servers/1%2E2/actions/reboot"
