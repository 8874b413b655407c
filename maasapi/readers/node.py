"""Readers for controller-level records and nodes: zones, pools, domains,
tags, boot resources, files, devices and machines."""

from types import MappingProxyType
from typing import Dict, List, Optional

from pydantic import Field, field_validator

from maasapi.models import BootResource, Device, Domain, File, Machine, Pool, Tag, Zone
from maasapi.schema import ForceInt, JSONObject, JSONObjectList, WireModel
from maasapi.readers.base import EntityReader
from maasapi.readers.network import interface_reader
from maasapi.readers.storage import block_device_reader

zone_reader = EntityReader("zone")
pool_reader = EntityReader("pool")
domain_reader = EntityReader("domain")
tag_reader = EntityReader("tag")
boot_resource_reader = EntityReader("boot resource")
file_reader = EntityReader("file")
device_reader = EntityReader("device")
machine_reader = EntityReader("machine")


class ZoneSchemaV2(WireModel):
    resource_uri: str
    name: str
    description: str


@zone_reader.register("2.0")
def zone_2_0(source, version):
    valid = zone_reader.check(ZoneSchemaV2, source, "2.0")

    return Zone(
        resource_uri=valid.resource_uri,
        name=valid.name,
        description=valid.description,
    )


class PoolSchemaV2(WireModel):
    resource_uri: str
    name: str
    description: str


@pool_reader.register("2.0")
def pool_2_0(source, version):
    valid = pool_reader.check(PoolSchemaV2, source, "2.0")

    return Pool(
        resource_uri=valid.resource_uri,
        name=valid.name,
        description=valid.description,
    )


class DomainSchemaV2(WireModel):
    resource_uri: str
    id: ForceInt
    name: str
    ttl: Optional[ForceInt] = None
    authoritative: bool = False
    resource_record_count: ForceInt = 0

    @field_validator("authoritative", mode="before")
    @classmethod
    def _flag_from_string(cls, value):
        # some servers send the flag as a string
        if isinstance(value, str) and value.lower() in ("true", "false"):
            return value.lower() == "true"
        return value


@domain_reader.register("2.0")
def domain_2_0(source, version):
    valid = domain_reader.check(DomainSchemaV2, source, "2.0")

    return Domain(
        resource_uri=valid.resource_uri,
        id=valid.id,
        name=valid.name,
        ttl=valid.ttl,
        authoritative=valid.authoritative,
        resource_record_count=valid.resource_record_count,
    )


class TagSchemaV2(WireModel):
    # older servers omit the descriptive fields
    resource_uri: str
    name: str
    comment: str = ""
    definition: str = ""
    kernel_opts: str = ""


@tag_reader.register("2.0")
def tag_2_0(source, version):
    valid = tag_reader.check(TagSchemaV2, source, "2.0")

    return Tag(
        resource_uri=valid.resource_uri,
        name=valid.name,
        comment=valid.comment,
        definition=valid.definition,
        kernel_opts=valid.kernel_opts,
    )


class BootResourceSchemaV2(WireModel):
    resource_uri: str
    id: ForceInt
    name: str
    type: str
    architecture: str
    subarches: str = ""
    kflavor: str = ""


@boot_resource_reader.register("2.0")
def boot_resource_2_0(source, version):
    valid = boot_resource_reader.check(BootResourceSchemaV2, source, "2.0")

    subarches = frozenset(
        arch.strip() for arch in valid.subarches.split(",") if arch.strip()
    )
    return BootResource(
        resource_uri=valid.resource_uri,
        id=valid.id,
        name=valid.name,
        type=valid.type,
        architecture=valid.architecture,
        subarches=subarches,
        kernel_flavor=valid.kflavor,
    )


class FileSchemaV2(WireModel):
    resource_uri: str
    filename: str
    anon_resource_uri: str
    # listings leave out the content
    content: str = ""


@file_reader.register("2.0")
def file_2_0(source, version):
    valid = file_reader.check(FileSchemaV2, source, "2.0")

    return File(
        resource_uri=valid.resource_uri,
        filename=valid.filename,
        anon_resource_uri=valid.anon_resource_uri,
        content=valid.content,
    )


class DeviceSchemaV2(WireModel):
    resource_uri: str
    system_id: str
    hostname: str
    fqdn: str
    parent: Optional[str] = None
    owner: Optional[str] = None
    ip_addresses: List[str]
    tag_names: List[str] = Field(default_factory=list)
    interface_set: JSONObjectList = Field(default_factory=list)
    zone: JSONObject


@device_reader.register("2.0")
def device_2_0(source, version):
    valid = device_reader.check(DeviceSchemaV2, source, "2.0")

    return Device(
        resource_uri=valid.resource_uri,
        system_id=valid.system_id,
        hostname=valid.hostname,
        fqdn=valid.fqdn,
        parent=valid.parent or "",
        owner=valid.owner or "",
        ip_addresses=tuple(valid.ip_addresses),
        tags=tuple(valid.tag_names),
        interfaces=tuple(interface_reader.read_list(version, valid.interface_set)),
        zone=zone_reader.read(version, valid.zone),
    )


class MachineSchemaV2(WireModel):
    resource_uri: str
    system_id: str
    hostname: str
    fqdn: str
    tag_names: List[str]
    owner_data: Dict[str, str] = Field(default_factory=dict)
    osystem: str
    distro_series: str
    architecture: Optional[str] = None
    memory: ForceInt
    cpu_count: ForceInt
    ip_addresses: List[str]
    power_state: str
    status_name: str
    status_message: Optional[str] = None
    boot_interface: Optional[JSONObject] = None
    interface_set: JSONObjectList
    zone: JSONObject
    pool: Optional[JSONObject] = None
    physicalblockdevice_set: JSONObjectList
    blockdevice_set: JSONObjectList


@machine_reader.register("2.0")
def machine_2_0(source, version):
    valid = machine_reader.check(MachineSchemaV2, source, "2.0")

    return Machine(
        resource_uri=valid.resource_uri,
        system_id=valid.system_id,
        hostname=valid.hostname,
        fqdn=valid.fqdn,
        tags=tuple(valid.tag_names),
        owner_data=MappingProxyType(dict(valid.owner_data)),
        operating_system=valid.osystem,
        distro_series=valid.distro_series,
        architecture=valid.architecture or "",
        memory=valid.memory,
        cpu_count=valid.cpu_count,
        ip_addresses=tuple(valid.ip_addresses),
        power_state=valid.power_state,
        status_name=valid.status_name,
        status_message=valid.status_message or "",
        boot_interface=interface_reader.read_optional(version, valid.boot_interface),
        interfaces=tuple(interface_reader.read_list(version, valid.interface_set)),
        zone=zone_reader.read(version, valid.zone),
        pool=pool_reader.read_optional(version, valid.pool),
        physical_block_devices=tuple(
            block_device_reader.read_list(version, valid.physicalblockdevice_set)
        ),
        block_devices=tuple(block_device_reader.read_list(version, valid.blockdevice_set)),
    )


def read_zones(version, source):
    return zone_reader.read_list(version, source)


def read_pools(version, source):
    return pool_reader.read_list(version, source)


def read_domains(version, source):
    return domain_reader.read_list(version, source)


def read_tag(version, source):
    return tag_reader.read(version, source)


def read_tags(version, source):
    return tag_reader.read_list(version, source)


def read_boot_resources(version, source):
    return boot_resource_reader.read_list(version, source)


def read_file(version, source):
    return file_reader.read(version, source)


def read_files(version, source):
    return file_reader.read_list(version, source)


def read_device(version, source):
    return device_reader.read(version, source)


def read_devices(version, source):
    return device_reader.read_list(version, source)


def read_machine(version, source):
    return machine_reader.read(version, source)


def read_machines(version, source):
    return machine_reader.read_list(version, source)
