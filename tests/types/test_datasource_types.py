"""Tests for datasource request and descriptor types."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from devservices_oracle.types.datasource import DatasourceStartRequest, LaunchMode, RunningDatasourceDescriptor


class _RecordingCloseable:
    def __init__(self):
        self.calls = 0

    def close(self) -> None:
        self.calls += 1


def test_request_defaults():
    request = DatasourceStartRequest()

    assert request.username is None
    assert request.password is None
    assert request.datasource_name is None
    assert request.image_name is None
    assert request.container_properties == {}
    assert request.additional_jdbc_url_properties == {}
    assert request.fixed_exposed_port is None
    assert request.launch_mode is LaunchMode.DEV
    assert request.startup_timeout is None


def test_request_is_immutable():
    request = DatasourceStartRequest(username="scott")

    with pytest.raises(ValidationError):
        request.username = "other"


@pytest.mark.parametrize("port", [0, -1, 65536])
def test_request_rejects_out_of_range_port(port):
    with pytest.raises(ValidationError):
        DatasourceStartRequest(fixed_exposed_port=port)


def test_request_parses_launch_mode_and_timeout():
    request = DatasourceStartRequest.model_validate({"launch_mode": "test", "startup_timeout": 90})

    assert request.launch_mode is LaunchMode.TEST
    assert request.startup_timeout == timedelta(seconds=90)


def test_descriptor_close_delegates_to_shutdown_handle():
    handle = _RecordingCloseable()
    descriptor = RunningDatasourceDescriptor(
        container_id="abc",
        jdbc_url="jdbc:oracle:thin:@localhost:1521/quarkusdb",
        username="quarkus",
        password="quarkus",
        shutdown=handle,
    )

    with descriptor:
        pass

    assert handle.calls == 1


def test_descriptor_requires_closeable_handle():
    with pytest.raises(ValidationError):
        RunningDatasourceDescriptor(
            container_id="abc",
            jdbc_url="jdbc:oracle:thin:@localhost:1521/quarkusdb",
            username="quarkus",
            password="quarkus",
            shutdown=object(),
        )


def test_descriptor_dump_excludes_shutdown_handle():
    descriptor = RunningDatasourceDescriptor(
        container_id="abc",
        jdbc_url="jdbc:oracle:thin:@localhost:1521/quarkusdb",
        username="quarkus",
        password="quarkus",
        shutdown=_RecordingCloseable(),
    )

    assert descriptor.model_dump() == {
        "container_id": "abc",
        "jdbc_url": "jdbc:oracle:thin:@localhost:1521/quarkusdb",
        "username": "quarkus",
        "password": "quarkus",
    }
