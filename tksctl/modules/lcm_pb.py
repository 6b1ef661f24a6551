"""
Protobuf messages for the TKS cluster LCM service.

The schema belongs to the LCM service (package ``tks_pb``). Only the messages
used by ``cluster create`` are described here; they are registered in a private
descriptor pool at import time so that no generated code has to be shipped.
"""
from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

PACKAGE = "tks_pb"
SERVICE = f"{PACKAGE}.ClusterLcmService"
CREATE_CLUSTER_METHOD = f"/{SERVICE}/CreateCluster"

_F = descriptor_pb2.FieldDescriptorProto

# message name -> [(field name, number, type, message type name)]
_MESSAGES = {
    "Error": [
        ("msg", 1, _F.TYPE_STRING, None),
    ],
    "IDResponse": [
        ("code", 1, _F.TYPE_INT32, None),
        ("error", 2, _F.TYPE_MESSAGE, "Error"),
        ("id", 3, _F.TYPE_STRING, None),
    ],
    "ClusterRawConf": [
        ("ssh_key_name", 1, _F.TYPE_STRING, None),
        ("region", 2, _F.TYPE_STRING, None),
        ("num_of_az", 3, _F.TYPE_INT32, None),
        ("machine_type", 4, _F.TYPE_STRING, None),
        ("min_size_per_az", 5, _F.TYPE_INT32, None),
        ("max_size_per_az", 6, _F.TYPE_INT32, None),
        ("machine_replicas", 7, _F.TYPE_INT32, None),
    ],
    "CreateClusterRequest": [
        ("name", 1, _F.TYPE_STRING, None),
        ("contract_id", 2, _F.TYPE_STRING, None),
        ("csp_id", 3, _F.TYPE_STRING, None),
        ("conf", 4, _F.TYPE_MESSAGE, "ClusterRawConf"),
        ("template_name", 5, _F.TYPE_STRING, None),
    ],
}


def _build_file() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="tks_pb/cluster_lcm.proto",
        package=PACKAGE,
        syntax="proto3",
    )
    for message_name, fields in _MESSAGES.items():
        message = file_proto.message_type.add(name=message_name)
        for field_name, number, field_type, type_name in fields:
            field = message.field.add(
                name=field_name,
                number=number,
                type=field_type,
                label=_F.LABEL_OPTIONAL,
            )
            if type_name:
                field.type_name = f".{PACKAGE}.{type_name}"

    service = file_proto.service.add(name="ClusterLcmService")
    service.method.add(
        name="CreateCluster",
        input_type=f".{PACKAGE}.CreateClusterRequest",
        output_type=f".{PACKAGE}.IDResponse",
    )
    return file_proto


_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(_build_file().SerializeToString())


def _message_class(name: str):
    return message_factory.GetMessageClass(_pool.FindMessageTypeByName(f"{PACKAGE}.{name}"))


Error = _message_class("Error")
IDResponse = _message_class("IDResponse")
ClusterRawConf = _message_class("ClusterRawConf")
CreateClusterRequest = _message_class("CreateClusterRequest")
