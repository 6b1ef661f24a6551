from unittest import mock

import grpc
import pytest

from tksctl.errors import ConfigurationError, LcmConnectionError, LcmRpcError
from tksctl.modules import cluster_lcm
from tksctl.modules.request import build_create_request


class FailedCall(grpc.RpcError):
    def __init__(self, code, details):
        self._code = code
        self._details = details

    def code(self):
        return self._code

    def details(self):
        return self._details


def test_create_cluster_sends_request(lcm_server):
    request = build_create_request(["demo"], region="ap-northeast-2", num_of_az=2)

    response = cluster_lcm.create_cluster(lcm_server.address, request, deadline=5)

    assert response.code == 200
    assert response.id == "C00000001"
    received = lcm_server.requests[0]
    assert received.name == "demo"
    assert received.template_name == "aws-reference"
    assert received.conf.region == "ap-northeast-2"
    assert received.conf.num_of_az == 2
    assert received.conf.machine_replicas == 3


def test_remote_error_is_returned_as_rpc_error(lcm_server):
    lcm_server.error = (grpc.StatusCode.INVALID_ARGUMENT, "unknown template")
    request = build_create_request(["demo"], template="missing")

    with pytest.raises(LcmRpcError) as excinfo:
        cluster_lcm.create_cluster(lcm_server.address, request, deadline=5)

    assert excinfo.value.code == "INVALID_ARGUMENT"
    assert excinfo.value.details == "unknown template"


def test_unreachable_server_is_connection_error(unreachable_address):
    request = build_create_request(["demo"])
    with pytest.raises(LcmConnectionError, match="Could not connect to LCM server"):
        cluster_lcm.create_cluster(unreachable_address, request, connect_timeout=0.5)


def test_empty_address_fails_before_connecting():
    with mock.patch.object(cluster_lcm.grpc, "insecure_channel") as insecure_channel:
        with pytest.raises(ConfigurationError):
            cluster_lcm.ClusterLcmClient("")
    insecure_channel.assert_not_called()


def test_channel_is_closed_after_rpc_error():
    error = FailedCall(grpc.StatusCode.DEADLINE_EXCEEDED, "Deadline Exceeded")
    with mock.patch.object(cluster_lcm.grpc, "insecure_channel") as insecure_channel, \
            mock.patch.object(cluster_lcm.grpc, "channel_ready_future"):
        channel = insecure_channel.return_value
        channel.unary_unary.return_value.side_effect = error
        client = cluster_lcm.ClusterLcmClient("lcm.example.com:9112")

        with pytest.raises(LcmRpcError, match="DEADLINE_EXCEEDED"):
            with client:
                client.create_cluster(build_create_request(["demo"]), timeout=1800)

    channel.unary_unary.return_value.assert_called_once()
    assert channel.unary_unary.return_value.call_args.kwargs["timeout"] == 1800
    channel.close.assert_called_once()
    assert client._channel is None


def test_tls_transport_uses_secure_channel():
    future = mock.Mock()
    with mock.patch.object(cluster_lcm.grpc, "secure_channel") as secure_channel, \
            mock.patch.object(cluster_lcm.grpc, "ssl_channel_credentials") as credentials, \
            mock.patch.object(cluster_lcm.grpc, "channel_ready_future", return_value=future):
        with cluster_lcm.ClusterLcmClient("lcm.example.com:443", transport_security="tls"):
            pass

    secure_channel.assert_called_once_with("lcm.example.com:443", credentials.return_value)
    future.result.assert_called_once_with(timeout=10)
    secure_channel.return_value.close.assert_called_once()


def test_each_call_is_a_new_creation_attempt(lcm_server):
    request = build_create_request(["demo"])
    first = cluster_lcm.create_cluster(lcm_server.address, request, deadline=5)
    second = cluster_lcm.create_cluster(lcm_server.address, request, deadline=5)

    assert len(lcm_server.requests) == 2
    assert first.id != second.id


def test_deadline_includes_connection_wait():
    future = mock.Mock()
    with mock.patch.object(cluster_lcm.grpc, "insecure_channel") as insecure_channel, \
            mock.patch.object(cluster_lcm.grpc, "channel_ready_future", return_value=future), \
            mock.patch.object(cluster_lcm, "time") as clock:
        clock.monotonic.side_effect = [100.0, 104.0]
        stub = insecure_channel.return_value.unary_unary.return_value
        cluster_lcm.create_cluster("lcm.example.com:9112", build_create_request(["demo"]), deadline=1800)

    future.result.assert_called_once_with(timeout=10)
    assert stub.call_args.kwargs["timeout"] == 1796


def test_connection_wait_is_capped_by_deadline():
    future = mock.Mock()
    with mock.patch.object(cluster_lcm.grpc, "insecure_channel"), \
            mock.patch.object(cluster_lcm.grpc, "channel_ready_future", return_value=future):
        cluster_lcm.create_cluster("lcm.example.com:9112", build_create_request(["demo"]), deadline=3)

    future.result.assert_called_once_with(timeout=3)
