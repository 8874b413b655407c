"""Entity readers for MAAS API payloads."""

from .base import EntityReader
from .network import (
    vlan_reader, subnet_reader, link_reader, interface_reader,
    fabric_reader, space_reader, static_route_reader,
    read_vlans, read_subnets, read_links, read_interface, read_interfaces,
    read_fabrics, read_spaces, read_static_routes,
)
from .storage import (
    filesystem_reader, partition_reader, block_device_reader, volume_group_reader,
    read_filesystems, read_partition, read_partitions, read_block_device,
    read_block_devices, read_volume_groups,
)
from .node import (
    zone_reader, pool_reader, domain_reader, tag_reader, boot_resource_reader,
    file_reader, device_reader, machine_reader,
    read_zones, read_pools, read_domains, read_tag, read_tags, read_boot_resources,
    read_file, read_files, read_device, read_devices, read_machine, read_machines,
)

__all__ = [
    'EntityReader',
    'vlan_reader',
    'subnet_reader',
    'link_reader',
    'interface_reader',
    'fabric_reader',
    'space_reader',
    'static_route_reader',
    'filesystem_reader',
    'partition_reader',
    'block_device_reader',
    'volume_group_reader',
    'zone_reader',
    'pool_reader',
    'domain_reader',
    'tag_reader',
    'boot_resource_reader',
    'file_reader',
    'device_reader',
    'machine_reader',
    'read_vlans',
    'read_subnets',
    'read_links',
    'read_interface',
    'read_interfaces',
    'read_fabrics',
    'read_spaces',
    'read_static_routes',
    'read_filesystems',
    'read_partition',
    'read_partitions',
    'read_block_device',
    'read_block_devices',
    'read_volume_groups',
    'read_zones',
    'read_pools',
    'read_domains',
    'read_tag',
    'read_tags',
    'read_boot_resources',
    'read_file',
    'read_files',
    'read_device',
    'read_devices',
    'read_machine',
    'read_machines',
]
