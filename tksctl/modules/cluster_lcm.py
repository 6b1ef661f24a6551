"""
gRPC client for the TKS cluster LCM service.
"""
import logging
import time
from typing import Optional

import grpc

from tksctl.config import (
    DEFAULT_CALL_TIMEOUT,
    DEFAULT_CONNECT_TIMEOUT,
    TRANSPORT_INSECURE,
    TRANSPORT_TLS,
)
from tksctl.errors import ConfigurationError, LcmConnectionError, LcmRpcError
from tksctl.modules import lcm_pb
from tksctl.modules.request import ClusterCreationRequest

logger = logging.getLogger(__name__)


class ClusterLcmClient:
    """
    Connection to the cluster LCM server.

    Use as a context manager; the channel is closed when the block exits,
    whether the call succeeded, failed or timed out.

        with ClusterLcmClient("lcm.example.com:9112") as client:
            response = client.create_cluster(request)
    """

    def __init__(
        self,
        address: str,
        transport_security: str = TRANSPORT_INSECURE,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
    ):
        if not address:
            raise ConfigurationError("You must specify tksClusterLcmUrl at config file")
        self.address = address
        self.transport_security = transport_security
        self.connect_timeout = connect_timeout
        self._channel: Optional[grpc.Channel] = None

    def _open_channel(self) -> grpc.Channel:
        if self.transport_security == TRANSPORT_TLS:
            return grpc.secure_channel(self.address, grpc.ssl_channel_credentials())
        if self.transport_security == TRANSPORT_INSECURE:
            logger.warning(f"Connecting to {self.address} without transport security")
            return grpc.insecure_channel(self.address)
        raise ConfigurationError(f"Unknown transport security: {self.transport_security}")

    def connect(self) -> None:
        """Open the channel and wait until the server is reachable."""
        channel = self._open_channel()
        try:
            grpc.channel_ready_future(channel).result(timeout=self.connect_timeout)
        except grpc.FutureTimeoutError:
            channel.close()
            raise LcmConnectionError(
                f"Could not connect to LCM server: {self.address} "
                f"not ready after {self.connect_timeout:g}s"
            )
        self._channel = channel
        logger.debug(f"Connected to LCM server at {self.address}")

    def close(self) -> None:
        if self._channel is not None:
            self._channel.close()
            self._channel = None
            logger.debug(f"Closed channel to {self.address}")

    def __enter__(self) -> "ClusterLcmClient":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def create_cluster(
        self,
        request: ClusterCreationRequest,
        timeout: float = DEFAULT_CALL_TIMEOUT,
    ):
        """
        Send a CreateCluster call and wait for the answer.

        A single attempt is made; ``timeout`` is the deadline in seconds.

        Returns:
            The IDResponse message from the server

        Raises:
            LcmRpcError: If the server returned an error or the deadline expired
        """
        if self._channel is None:
            raise LcmConnectionError("Could not connect to LCM server: channel is not open")

        stub = self._channel.unary_unary(
            lcm_pb.CREATE_CLUSTER_METHOD,
            request_serializer=lcm_pb.CreateClusterRequest.SerializeToString,
            response_deserializer=lcm_pb.IDResponse.FromString,
        )
        logger.info(f"Requesting creation of cluster '{request.name}' (deadline {timeout:g}s)")
        try:
            return stub(request.to_message(), timeout=timeout)
        except grpc.RpcError as e:
            code = e.code().name if e.code() is not None else "UNKNOWN"
            logger.debug(f"CreateCluster failed: {code} {e.details()}")
            raise LcmRpcError(code, e.details() or str(e)) from e


def create_cluster(
    address: str,
    request: ClusterCreationRequest,
    deadline: float = DEFAULT_CALL_TIMEOUT,
    transport_security: str = TRANSPORT_INSECURE,
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
):
    """
    Connect, send one CreateCluster call and close the channel.

    ``deadline`` counts from this call, so time spent waiting for the
    connection is taken out of the time left for the call itself.
    """
    expires_at = time.monotonic() + deadline
    with ClusterLcmClient(address, transport_security, min(connect_timeout, deadline)) as client:
        remaining = max(expires_at - time.monotonic(), 0)
        return client.create_cluster(request, timeout=remaining)
