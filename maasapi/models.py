"""Data models for MAAS resources.

Every record is frozen once decoded. Owned collections are tuples so that
two decodes of the same payload compare equal field for field.
"""

import base64
import dataclasses
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional, Tuple


@dataclass(frozen=True)
class Zone:
    """Represents a MAAS availability zone."""
    resource_uri: str
    name: str
    description: str


@dataclass(frozen=True)
class Pool:
    """Represents a MAAS resource pool."""
    resource_uri: str
    name: str
    description: str


@dataclass(frozen=True)
class Domain:
    """Represents a MAAS DNS domain."""
    resource_uri: str
    id: int
    name: str
    ttl: Optional[int] = None
    authoritative: bool = False
    resource_record_count: int = 0


@dataclass(frozen=True)
class Tag:
    """Represents a MAAS tag."""
    resource_uri: str
    name: str
    comment: str = ""
    definition: str = ""
    kernel_opts: str = ""


@dataclass(frozen=True)
class BootResource:
    """Represents a boot image available to the controller."""
    resource_uri: str
    id: int
    name: str
    type: str
    architecture: str
    subarches: FrozenSet[str] = frozenset()
    kernel_flavor: str = ""


@dataclass(frozen=True)
class File:
    """Represents a file stored in the MAAS file storage."""
    resource_uri: str
    filename: str
    anon_resource_uri: str
    content: str = ""  # base64

    def read_all(self) -> bytes:
        """Return the decoded file content.

        Raises:
            binascii.Error: If the inline content is not valid base64
        """
        return base64.b64decode(self.content, validate=True)


@dataclass(frozen=True)
class VLAN:
    """Represents a VLAN on a fabric."""
    resource_uri: str
    id: int
    fabric: str
    vid: int
    mtu: int
    dhcp: bool
    name: str = ""
    primary_rack: str = ""
    secondary_rack: str = ""


@dataclass(frozen=True)
class Subnet:
    """Represents an IP subnet."""
    resource_uri: str
    id: int
    name: str
    space: str
    cidr: str
    vlan: VLAN
    gateway: str = ""
    dns_servers: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Link:
    """Connection between an interface and a subnet."""
    id: int
    mode: str
    ip_address: str = ""
    subnet: Optional[Subnet] = None


@dataclass(frozen=True)
class Interface:
    """Represents a network interface on a machine or device.

    ``parents`` and ``children`` hold interface names. Resolving them to
    Interface values is left to the caller.
    """
    resource_uri: str
    id: int
    name: str
    type: str
    enabled: bool
    effective_mtu: int
    mac_address: str = ""
    params: str = ""
    vlan: Optional[VLAN] = None
    tags: Tuple[str, ...] = ()
    links: Tuple[Link, ...] = ()
    parents: Tuple[str, ...] = ()
    children: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Fabric:
    """Represents a MAAS fabric and its VLANs."""
    resource_uri: str
    id: int
    name: str
    class_type: str = ""
    vlans: Tuple[VLAN, ...] = ()


@dataclass(frozen=True)
class Space:
    """Represents a network space."""
    resource_uri: str
    id: int
    name: str
    class_type: str = ""
    vlans: Tuple[VLAN, ...] = ()
    subnets: Tuple[Subnet, ...] = ()


@dataclass(frozen=True)
class StaticRoute:
    """Represents a static route between two subnets."""
    resource_uri: str
    id: int
    source: Subnet
    destination: Subnet
    gateway_ip: str
    metric: int


@dataclass(frozen=True)
class FileSystem:
    """Filesystem on a block device or partition."""
    type: str
    uuid: str
    mount_point: str = ""
    label: str = ""


@dataclass(frozen=True)
class Partition:
    """Represents a partition on a block device."""
    resource_uri: str
    id: int
    path: str
    used_for: str
    size: int  # in bytes
    uuid: str = ""
    tags: Tuple[str, ...] = ()
    filesystem: Optional[FileSystem] = None

    @property
    def type(self) -> str:
        return "partition"


@dataclass(frozen=True)
class BlockDevice:
    """Represents a physical or virtual block device."""
    resource_uri: str
    id: int
    path: str
    used_for: str
    size: int  # in bytes
    name: str = ""
    uuid: str = ""
    model: str = ""
    id_path: str = ""
    tags: Tuple[str, ...] = ()
    block_size: int = 0
    used_size: int = 0
    filesystem: Optional[FileSystem] = None
    partitions: Tuple[Partition, ...] = ()

    @property
    def type(self) -> str:
        return "blockdevice"

    def partition(self, partition_id: int) -> Optional[Partition]:
        """Find an owned partition by ID."""
        return _find_by_id(self.partitions, partition_id)

    def with_partition(self, updated: Partition) -> "BlockDevice":
        """Return a copy with the partition of the same ID replaced.

        Args:
            updated: Freshly decoded partition state

        Returns:
            New BlockDevice

        Raises:
            KeyError: If this device does not own a partition with that ID
        """
        return dataclasses.replace(
            self, partitions=_replace_by_id(self.partitions, updated, "partition")
        )


@dataclass(frozen=True)
class VolumeGroup:
    """Represents an LVM volume group."""
    resource_uri: str
    id: int
    name: str
    size: int  # in bytes
    uuid: str = ""
    devices: Tuple[BlockDevice, ...] = ()


@dataclass(frozen=True)
class Device:
    """Represents a non-deployable device registered with MAAS.

    ``parent`` is the system ID of the owning machine, if any.
    """
    resource_uri: str
    system_id: str
    hostname: str
    fqdn: str
    zone: Zone
    parent: str = ""
    owner: str = ""
    ip_addresses: Tuple[str, ...] = ()
    tags: Tuple[str, ...] = ()
    interfaces: Tuple[Interface, ...] = ()


@dataclass(frozen=True)
class Machine:
    """Represents a MAAS machine."""
    resource_uri: str
    system_id: str
    hostname: str
    fqdn: str
    operating_system: str
    distro_series: str
    memory: int  # in MB
    cpu_count: int
    power_state: str
    status_name: str
    zone: Zone
    architecture: str = ""
    status_message: str = ""
    pool: Optional[Pool] = None
    tags: Tuple[str, ...] = ()
    # read-only view of the server mapping
    owner_data: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}), hash=False)
    ip_addresses: Tuple[str, ...] = ()
    boot_interface: Optional[Interface] = None
    interfaces: Tuple[Interface, ...] = ()
    physical_block_devices: Tuple[BlockDevice, ...] = ()
    block_devices: Tuple[BlockDevice, ...] = ()

    def interface(self, interface_id: int) -> Optional[Interface]:
        """Find an interface in the interface set by ID."""
        return _find_by_id(self.interfaces, interface_id)

    def block_device(self, device_id: int) -> Optional[BlockDevice]:
        """Find a block device by ID."""
        return _find_by_id(self.block_devices, device_id)

    def physical_block_device(self, device_id: int) -> Optional[BlockDevice]:
        """Find a physical block device by ID."""
        return _find_by_id(self.physical_block_devices, device_id)

    def with_block_device(self, updated: BlockDevice) -> "Machine":
        """Return a copy with the block device of the same ID replaced.

        The device is swapped in both the full and the physical block device
        sets, wherever it appears.

        Args:
            updated: Freshly decoded block device state

        Returns:
            New Machine

        Raises:
            KeyError: If the machine does not own a block device with that ID
        """
        if self.block_device(updated.id) is None and self.physical_block_device(updated.id) is None:
            raise KeyError(f"block device {updated.id} not found on machine {self.system_id}")
        return dataclasses.replace(
            self,
            block_devices=tuple(updated if d.id == updated.id else d for d in self.block_devices),
            physical_block_devices=tuple(
                updated if d.id == updated.id else d for d in self.physical_block_devices
            ),
        )


def _find_by_id(values, value_id):
    for value in values:
        if value.id == value_id:
            return value
    return None


def _replace_by_id(values, updated, kind):
    if _find_by_id(values, updated.id) is None:
        raise KeyError(f"{kind} {updated.id} not found")
    return tuple(updated if value.id == updated.id else value for value in values)
