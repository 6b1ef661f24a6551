import logging
import socket
from concurrent import futures

import grpc
import pytest
from typer.testing import CliRunner

from tksctl import config as tks_config
from tksctl.modules import lcm_pb

ENV_VARS = (
    "TKS_CLUSTER_LCM_URL",
    "TKS_TRANSPORT_SECURITY",
    "TKS_CALL_TIMEOUT",
    "TKS_CONNECT_TIMEOUT",
    "TKS_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the user's environment and ~/.tks.yaml out of the tests."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(tks_config, "DEFAULT_CONFIG_PATHS", [tmp_path / ".tks.yaml"])
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers bound to streams of finished CliRunner invocations."""
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)


@pytest.fixture
def runner():
    return CliRunner()


class FakeLcmServer:
    """In-process ClusterLcmService that records what it receives."""

    def __init__(self):
        self.requests = []
        self.error = None
        self.server = grpc.server(futures.ThreadPoolExecutor(max_workers=2))
        handler = grpc.unary_unary_rpc_method_handler(
            self.create_cluster,
            request_deserializer=lcm_pb.CreateClusterRequest.FromString,
            response_serializer=lcm_pb.IDResponse.SerializeToString,
        )
        self.server.add_generic_rpc_handlers((
            grpc.method_handlers_generic_handler(lcm_pb.SERVICE, {"CreateCluster": handler}),
        ))
        port = self.server.add_insecure_port("127.0.0.1:0")
        self.address = f"127.0.0.1:{port}"

    def create_cluster(self, request, context):
        self.requests.append(request)
        if self.error:
            context.abort(*self.error)
        return lcm_pb.IDResponse(code=200, id=f"C{len(self.requests):08d}")


@pytest.fixture
def lcm_server():
    server = FakeLcmServer()
    server.server.start()
    yield server
    server.server.stop(None)


@pytest.fixture
def unreachable_address():
    # Reserve a free port, then release it so nothing is listening
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"127.0.0.1:{port}"
