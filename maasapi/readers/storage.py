"""Readers for storage entities: filesystems, partitions, block devices
and volume groups."""

from typing import Annotated, List, Optional

from pydantic import Field

from maasapi.models import BlockDevice, FileSystem, Partition, VolumeGroup
from maasapi.schema import (
    ForceInt,
    ForceUint,
    JSONObject,
    JSONObjectList,
    NullAsEmpty,
    WireModel,
    null_as,
)
from maasapi.readers.base import EntityReader

filesystem_reader = EntityReader("filesystem")
partition_reader = EntityReader("partition")
block_device_reader = EntityReader("blockdevice")
volume_group_reader = EntityReader("volumegroup")


class FileSystemSchemaV2(WireModel):
    fstype: str
    mount_point: NullAsEmpty
    label: NullAsEmpty
    uuid: str


@filesystem_reader.register("2.0")
def filesystem_2_0(source, version):
    valid = filesystem_reader.check(FileSystemSchemaV2, source, "2.0")

    return FileSystem(
        type=valid.fstype,
        mount_point=valid.mount_point,
        label=valid.label,
        uuid=valid.uuid,
    )


class PartitionSchemaV2(WireModel):
    resource_uri: str
    id: ForceInt
    path: str
    uuid: NullAsEmpty
    used_for: str
    size: ForceUint
    tags: List[str] = Field(default_factory=list)
    filesystem: Optional[JSONObject] = None


@partition_reader.register("2.0")
def partition_2_0(source, version):
    valid = partition_reader.check(PartitionSchemaV2, source, "2.0")

    return Partition(
        resource_uri=valid.resource_uri,
        id=valid.id,
        path=valid.path,
        uuid=valid.uuid,
        used_for=valid.used_for,
        size=valid.size,
        tags=tuple(valid.tags),
        filesystem=filesystem_reader.read_optional(version, valid.filesystem),
    )


class BlockDeviceSchemaV2(WireModel):
    resource_uri: str
    id: ForceInt
    uuid: NullAsEmpty
    name: NullAsEmpty
    model: NullAsEmpty
    id_path: NullAsEmpty
    path: str
    used_for: str
    tags: Annotated[List[str], null_as([])]
    block_size: Annotated[ForceUint, null_as(0)]
    used_size: Annotated[ForceUint, null_as(0)]
    size: ForceUint
    filesystem: Optional[JSONObject] = None
    partitions: Annotated[JSONObjectList, null_as([])]


@block_device_reader.register("2.0")
def block_device_2_0(source, version):
    valid = block_device_reader.check(BlockDeviceSchemaV2, source, "2.0")

    return BlockDevice(
        resource_uri=valid.resource_uri,
        id=valid.id,
        uuid=valid.uuid,
        name=valid.name,
        model=valid.model,
        id_path=valid.id_path,
        path=valid.path,
        used_for=valid.used_for,
        tags=tuple(valid.tags),
        block_size=valid.block_size,
        used_size=valid.used_size,
        size=valid.size,
        filesystem=filesystem_reader.read_optional(version, valid.filesystem),
        partitions=tuple(partition_reader.read_list(version, valid.partitions)),
    )


class VolumeGroupSchemaV2(WireModel):
    resource_uri: str
    id: ForceInt
    name: str
    uuid: NullAsEmpty
    size: ForceUint
    devices: JSONObjectList


@volume_group_reader.register("2.0")
def volume_group_2_0(source, version):
    valid = volume_group_reader.check(VolumeGroupSchemaV2, source, "2.0")

    return VolumeGroup(
        resource_uri=valid.resource_uri,
        id=valid.id,
        name=valid.name,
        uuid=valid.uuid,
        size=valid.size,
        devices=tuple(block_device_reader.read_list(version, valid.devices)),
    )


def read_filesystems(version, source):
    return filesystem_reader.read_list(version, source)


def read_partition(version, source):
    return partition_reader.read(version, source)


def read_partitions(version, source):
    return partition_reader.read_list(version, source)


def read_block_device(version, source):
    return block_device_reader.read(version, source)


def read_block_devices(version, source):
    return block_device_reader.read_list(version, source)


def read_volume_groups(version, source):
    return volume_group_reader.read_list(version, source)
