"""Readers for networking entities: VLANs, subnets, links, interfaces,
fabrics, spaces and static routes."""

from typing import List, Optional

from pydantic import Field, field_validator

from maasapi.models import VLAN, Fabric, Interface, Link, Space, StaticRoute, Subnet
from maasapi.schema import ForceInt, JSONObject, JSONObjectList, WireModel
from maasapi.readers.base import EntityReader

vlan_reader = EntityReader("vlan")
subnet_reader = EntityReader("subnet")
link_reader = EntityReader("link")
interface_reader = EntityReader("interface")
fabric_reader = EntityReader("fabric")
space_reader = EntityReader("space")
static_route_reader = EntityReader("static-route")


class VLANSchemaV2(WireModel):
    resource_uri: str
    id: ForceInt
    name: Optional[str] = None
    fabric: str
    vid: ForceInt
    mtu: ForceInt
    dhcp_on: bool
    # racks are system IDs
    primary_rack: Optional[str] = None
    secondary_rack: Optional[str] = None


@vlan_reader.register("2.0")
def vlan_2_0(source, version):
    valid = vlan_reader.check(VLANSchemaV2, source, "2.0")

    return VLAN(
        resource_uri=valid.resource_uri,
        id=valid.id,
        name=valid.name or "",
        fabric=valid.fabric,
        vid=valid.vid,
        mtu=valid.mtu,
        dhcp=valid.dhcp_on,
        primary_rack=valid.primary_rack or "",
        secondary_rack=valid.secondary_rack or "",
    )


class SubnetSchemaV2(WireModel):
    resource_uri: str
    id: ForceInt
    name: str
    space: str
    gateway_ip: Optional[str] = None
    cidr: str
    vlan: JSONObject
    dns_servers: Optional[List[str]] = None


@subnet_reader.register("2.0")
def subnet_2_0(source, version):
    valid = subnet_reader.check(SubnetSchemaV2, source, "2.0")

    return Subnet(
        resource_uri=valid.resource_uri,
        id=valid.id,
        name=valid.name,
        space=valid.space,
        cidr=valid.cidr,
        gateway=valid.gateway_ip or "",
        vlan=vlan_reader.read(version, valid.vlan),
        dns_servers=tuple(valid.dns_servers or ()),
    )


class LinkSchemaV2(WireModel):
    # Unconfigured links come back without an address or a subnet.
    id: ForceInt
    mode: str
    subnet: Optional[JSONObject] = None
    ip_address: str = ""


@link_reader.register("2.0")
def link_2_0(source, version):
    valid = link_reader.check(LinkSchemaV2, source, "2.0")

    return Link(
        id=valid.id,
        mode=valid.mode,
        ip_address=valid.ip_address,
        subnet=subnet_reader.read_optional(version, valid.subnet),
    )


class InterfaceSchemaV2(WireModel):
    resource_uri: str
    id: ForceInt
    name: str
    type: str
    enabled: bool
    tags: List[str] = Field(default_factory=list)
    vlan: Optional[JSONObject] = None
    links: JSONObjectList
    mac_address: Optional[str] = None
    effective_mtu: ForceInt
    params: str = ""
    parents: List[str]
    children: List[str]

    @field_validator("params", mode="before")
    @classmethod
    def _settings_object_as_empty(cls, value):
        # bonds and bridges report their settings as an object
        if value is None or isinstance(value, dict):
            return ""
        return value


@interface_reader.register("2.0")
def interface_2_0(source, version):
    valid = interface_reader.check(InterfaceSchemaV2, source, "2.0")

    return Interface(
        resource_uri=valid.resource_uri,
        id=valid.id,
        name=valid.name,
        type=valid.type,
        enabled=valid.enabled,
        tags=tuple(valid.tags),
        vlan=vlan_reader.read_optional(version, valid.vlan),
        links=tuple(link_reader.read_list(version, valid.links)),
        mac_address=valid.mac_address or "",
        effective_mtu=valid.effective_mtu,
        params=valid.params,
        parents=tuple(valid.parents),
        children=tuple(valid.children),
    )


class FabricSchemaV2(WireModel):
    resource_uri: str
    id: ForceInt
    name: str
    class_type: Optional[str] = None
    vlans: JSONObjectList


@fabric_reader.register("2.0")
def fabric_2_0(source, version):
    valid = fabric_reader.check(FabricSchemaV2, source, "2.0")

    return Fabric(
        resource_uri=valid.resource_uri,
        id=valid.id,
        name=valid.name,
        class_type=valid.class_type or "",
        vlans=tuple(vlan_reader.read_list(version, valid.vlans)),
    )


class SpaceSchemaV2(WireModel):
    resource_uri: str
    id: ForceInt
    name: str
    class_type: Optional[str] = None
    vlans: JSONObjectList = Field(default_factory=list)
    subnets: JSONObjectList = Field(default_factory=list)


@space_reader.register("2.0")
def space_2_0(source, version):
    valid = space_reader.check(SpaceSchemaV2, source, "2.0")

    return Space(
        resource_uri=valid.resource_uri,
        id=valid.id,
        name=valid.name,
        class_type=valid.class_type or "",
        vlans=tuple(vlan_reader.read_list(version, valid.vlans)),
        subnets=tuple(subnet_reader.read_list(version, valid.subnets)),
    )


class StaticRouteSchemaV2(WireModel):
    resource_uri: str
    id: ForceInt
    source: JSONObject
    destination: JSONObject
    gateway_ip: str
    metric: ForceInt


@static_route_reader.register("2.0")
def static_route_2_0(source, version):
    valid = static_route_reader.check(StaticRouteSchemaV2, source, "2.0")

    return StaticRoute(
        resource_uri=valid.resource_uri,
        id=valid.id,
        source=subnet_reader.read(version, valid.source),
        destination=subnet_reader.read(version, valid.destination),
        gateway_ip=valid.gateway_ip,
        metric=valid.metric,
    )


def read_vlans(version, source):
    return vlan_reader.read_list(version, source)


def read_subnets(version, source):
    return subnet_reader.read_list(version, source)


def read_links(version, source):
    return link_reader.read_list(version, source)


def read_interface(version, source):
    return interface_reader.read(version, source)


def read_interfaces(version, source):
    return interface_reader.read_list(version, source)


def read_fabrics(version, source):
    return fabric_reader.read_list(version, source)


def read_spaces(version, source):
    return space_reader.read_list(version, source)


def read_static_routes(version, source):
    return static_route_reader.read_list(version, source)
