"""Version-negotiated access to a MAAS controller's resources."""

import base64
import logging
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Sequence, Type

import requests
from requests.auth import AuthBase

from maasapi.api_client import MAASAPIClient
from maasapi.errors import (
    BadRequestError,
    CannotCompleteError,
    MAASError,
    NoMatchError,
    PermissionDeniedError,
    ServerError,
    UnexpectedError,
    wrap_with_deserialization_error,
)
from maasapi.models import (
    BlockDevice,
    BootResource,
    Device,
    Domain,
    Fabric,
    File,
    Machine,
    Partition,
    Pool,
    Space,
    StaticRoute,
    Subnet,
    Tag,
    VolumeGroup,
    Zone,
)
from maasapi.readers import (
    read_block_device,
    read_block_devices,
    read_boot_resources,
    read_device,
    read_devices,
    read_domains,
    read_fabrics,
    read_file,
    read_files,
    read_machine,
    read_machines,
    read_partition,
    read_pools,
    read_spaces,
    read_static_routes,
    read_subnets,
    read_tags,
    read_volume_groups,
    read_zones,
)
from maasapi.schema import SchemaError, WireModel, validate
from maasapi.versions import parse_version

logger = logging.getLogger(__name__)

# Most preferred first; tried in order by Controller.connect.
SUPPORTED_API_VERSIONS = ["2.0"]

StatusErrors = Mapping[int, Type[MAASError]]

_STATUS_ERRORS: StatusErrors = {
    400: BadRequestError,
    403: PermissionDeniedError,
    404: NoMatchError,
    409: BadRequestError,
    503: CannotCompleteError,
}

# Per-operation overrides of _STATUS_ERRORS.
# Format and logical volume creation report a missing target as a bad request.
_MISSING_TARGET_IS_BAD_REQUEST: StatusErrors = {404: BadRequestError}
_DEPLOY_ERRORS: StatusErrors = {404: BadRequestError, 409: BadRequestError}
# 409 from allocate means nothing satisfied the constraints.
_ALLOCATE_ERRORS: StatusErrors = {409: NoMatchError}
_RELEASE_ERRORS: StatusErrors = {409: CannotCompleteError}


class VersionInfo(WireModel):
    capabilities: List[str]


def translate_server_error(err: ServerError, overrides: Optional[StatusErrors] = None) -> MAASError:
    """Map a ServerError onto the error kind callers branch on.

    Args:
        err: Error raised by the transport
        overrides: Status codes whose mapping differs for one operation

    Returns:
        NoMatchError, PermissionDeniedError, BadRequestError,
        CannotCompleteError or UnexpectedError, chained to err
    """
    error_class = (overrides or {}).get(err.status_code) or _STATUS_ERRORS.get(err.status_code)
    if error_class is None:
        return UnexpectedError(err)
    return error_class(err.body_message, cause=err)


def read_capabilities(client: MAASAPIClient) -> FrozenSet[str]:
    """Read the capability names advertised by the server's version endpoint."""
    source = client.get('version/')
    try:
        valid = validate(VersionInfo, source)
    except SchemaError as e:
        raise wrap_with_deserialization_error(e, "version response")
    return frozenset(valid.capabilities)


class Controller:
    """Typed accessors over a MAAS controller at a negotiated API version."""

    def __init__(self, client: MAASAPIClient, api_version: str, capabilities: FrozenSet[str]):
        """Initialize controller.

        Args:
            client: MAASAPIClient bound to api_version
            api_version: Negotiated API version (e.g. '2.0')
            capabilities: Capability names reported by the server
        """
        self.client = client
        self.api_version = parse_version(api_version)
        self.capabilities = capabilities

    @classmethod
    def connect(
        cls,
        base_url: str,
        auth: Optional[AuthBase] = None,
        verify_ssl: bool = True,
        timeout: float = 30,
        api_versions: Optional[Sequence[str]] = None
    ) -> "Controller":
        """Connect to a MAAS server using the first API version it answers.

        Args:
            base_url: MAAS server URL (e.g., 'http://maas.example.com:5240/MAAS')
            auth: Optional requests auth object used to sign requests
            verify_ssl: Whether to verify SSL certificates
            timeout: Request timeout in seconds
            api_versions: Versions to try, defaults to SUPPORTED_API_VERSIONS

        Returns:
            Connected Controller

        Raises:
            MAASError: If no version could be negotiated; the last failure is
                chained as the cause
        """
        last_error: Optional[BaseException] = None
        for api_version in api_versions or SUPPORTED_API_VERSIONS:
            client = MAASAPIClient(
                base_url,
                api_version,
                auth=auth,
                verify_ssl=verify_ssl,
                timeout=timeout
            )
            try:
                capabilities = read_capabilities(client)
            except (MAASError, requests.exceptions.RequestException) as e:
                logger.debug(f"read version failed for {api_version}: {e}")
                client.close()
                last_error = e
                continue
            logger.info(f"✓ Connected to {base_url} using API {api_version}")
            return cls(client, api_version, capabilities)

        raise MAASError("unable to create authenticated client", cause=last_error)

    def _get(self, path: str, op: Optional[str] = None, params: Optional[Dict[str, Any]] = None) -> Any:
        try:
            return self.client.get(path, op=op, params=params)
        except ServerError as e:
            raise translate_server_error(e) from e

    def _post(
        self,
        path: str,
        op: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
        status_errors: Optional[StatusErrors] = None
    ) -> Any:
        try:
            return self.client.post(path, op=op, params=params)
        except ServerError as e:
            raise translate_server_error(e, status_errors) from e

    def _delete(self, path: str) -> None:
        try:
            self.client.delete(path)
        except ServerError as e:
            raise translate_server_error(e) from e

    def zones(self) -> List[Zone]:
        """List availability zones."""
        return read_zones(self.api_version, self._get('zones/'))

    def pools(self) -> List[Pool]:
        """List resource pools."""
        return read_pools(self.api_version, self._get('resourcepools/'))

    def domains(self) -> List[Domain]:
        """List DNS domains."""
        return read_domains(self.api_version, self._get('domains/'))

    def tags(self) -> List[Tag]:
        """List tags."""
        return read_tags(self.api_version, self._get('tags/'))

    def fabrics(self) -> List[Fabric]:
        """List fabrics with their VLANs."""
        return read_fabrics(self.api_version, self._get('fabrics/'))

    def spaces(self) -> List[Space]:
        """List network spaces."""
        return read_spaces(self.api_version, self._get('spaces/'))

    def subnets(self) -> List[Subnet]:
        """List subnets."""
        return read_subnets(self.api_version, self._get('subnets/'))

    def static_routes(self) -> List[StaticRoute]:
        """List static routes."""
        return read_static_routes(self.api_version, self._get('static-routes/'))

    def boot_resources(self) -> List[BootResource]:
        """List boot images."""
        return read_boot_resources(self.api_version, self._get('boot-resources/'))

    def files(self, prefix: Optional[str] = None) -> List[File]:
        """List stored files.

        Args:
            prefix: Only list files whose name starts with prefix

        Returns:
            Files without their content
        """
        params = {'prefix': prefix} if prefix else None
        return read_files(self.api_version, self._get('files/', params=params))

    def get_file(self, filename: str) -> File:
        """Fetch a single stored file including its content.

        Raises:
            ValueError: If filename is empty
            NoMatchError: If no file has that name
        """
        if not filename:
            raise ValueError("missing filename")
        return read_file(self.api_version, self._get(f'files/{filename}/'))

    def read_file(self, filename: str) -> bytes:
        """Return the decoded content of a stored file."""
        return self.get_file(filename).read_all()

    def machines(
        self,
        system_ids: Optional[Sequence[str]] = None,
        hostnames: Optional[Sequence[str]] = None,
        zone: Optional[str] = None,
        pool: Optional[str] = None
    ) -> List[Machine]:
        """List machines, optionally filtered.

        Args:
            system_ids: Only machines with these system IDs
            hostnames: Only machines with these hostnames
            zone: Only machines in this zone
            pool: Only machines in this resource pool

        Returns:
            List of Machine
        """
        params: Dict[str, Any] = {}
        if system_ids:
            params['id'] = list(system_ids)
        if hostnames:
            params['hostname'] = list(hostnames)
        if zone:
            params['zone'] = zone
        if pool:
            params['pool'] = pool
        return read_machines(self.api_version, self._get('machines/', params=params or None))

    def devices(
        self,
        system_ids: Optional[Sequence[str]] = None,
        hostnames: Optional[Sequence[str]] = None,
        mac_addresses: Optional[Sequence[str]] = None
    ) -> List[Device]:
        """List devices, optionally filtered."""
        params: Dict[str, Any] = {}
        if system_ids:
            params['id'] = list(system_ids)
        if hostnames:
            params['hostname'] = list(hostnames)
        if mac_addresses:
            params['mac_address'] = list(mac_addresses)
        return read_devices(self.api_version, self._get('devices/', params=params or None))

    def allocate_machine(
        self,
        hostname: Optional[str] = None,
        system_id: Optional[str] = None,
        architecture: Optional[str] = None,
        min_cpu_count: Optional[int] = None,
        min_memory: Optional[int] = None,
        tags: Optional[Sequence[str]] = None,
        not_tags: Optional[Sequence[str]] = None,
        zone: Optional[str] = None,
        not_in_zone: Optional[Sequence[str]] = None,
        agent_name: Optional[str] = None,
        comment: Optional[str] = None,
        dry_run: bool = False
    ) -> Machine:
        """Allocate a ready machine matching the given constraints.

        Args:
            hostname: Exact hostname to allocate
            system_id: Exact system ID to allocate
            architecture: Required architecture (e.g. 'amd64/generic')
            min_cpu_count: Minimum number of CPUs
            min_memory: Minimum memory in MB
            tags: Tags the machine must carry
            not_tags: Tags the machine must not carry
            zone: Zone to allocate from
            not_in_zone: Zones to avoid
            agent_name: Agent name recorded against the allocation
            comment: Comment for the event log
            dry_run: Check the constraints without allocating

        Returns:
            The allocated Machine

        Raises:
            ValueError: If a minimum is negative
            NoMatchError: If no machine satisfies the constraints
        """
        params: Dict[str, Any] = {}
        if hostname:
            params['name'] = hostname
        if system_id:
            params['system_id'] = system_id
        if architecture:
            params['arch'] = architecture
        if min_cpu_count is not None:
            if min_cpu_count < 0:
                raise ValueError(f"invalid min_cpu_count {min_cpu_count}")
            params['cpu_count'] = str(min_cpu_count)
        if min_memory is not None:
            if min_memory < 0:
                raise ValueError(f"invalid min_memory {min_memory}")
            params['mem'] = str(min_memory)
        if tags:
            params['tags'] = ','.join(tags)
        if not_tags:
            params['not_tags'] = ','.join(not_tags)
        if zone:
            params['zone'] = zone
        if not_in_zone:
            params['not_in_zone'] = ','.join(not_in_zone)
        if agent_name:
            params['agent_name'] = agent_name
        if comment:
            params['comment'] = comment
        if dry_run:
            params['dry_run'] = 'true'

        source = self._post('machines/', op='allocate', params=params, status_errors=_ALLOCATE_ERRORS)
        machine = read_machine(self.api_version, source)
        logger.info(f"✓ Allocated {machine.hostname} ({machine.system_id})")
        return machine

    def release_machines(self, system_ids: Sequence[str], comment: Optional[str] = None) -> None:
        """Release allocated machines back to the pool.

        Raises:
            ValueError: If no system IDs are given
            CannotCompleteError: If a machine is in a state that cannot be released
        """
        if not system_ids:
            raise ValueError("at least one system ID must be specified")
        params: Dict[str, Any] = {'machines': list(system_ids)}
        if comment:
            params['comment'] = comment
        self._post('machines/', op='release', params=params, status_errors=_RELEASE_ERRORS)
        logger.info(f"✓ Released {len(system_ids)} machine(s)")

    def start_machine(
        self,
        machine: Machine,
        user_data: Optional[bytes] = None,
        distro_series: Optional[str] = None,
        kernel: Optional[str] = None,
        comment: Optional[str] = None
    ) -> Machine:
        """Deploy an allocated machine and return its new state.

        Args:
            machine: Machine to deploy
            user_data: Cloud-init user data, sent base64 encoded
            distro_series: Series to deploy (e.g. 'trusty')
            kernel: HWE kernel to boot
            comment: Comment for the event log

        Returns:
            Freshly decoded Machine

        Raises:
            BadRequestError: If the machine is missing or not allocated
        """
        params: Dict[str, str] = {}
        if user_data is not None:
            params['user_data'] = base64.b64encode(user_data).decode('ascii')
        if distro_series:
            params['distro_series'] = distro_series
        if kernel:
            params['hwe_kernel'] = kernel
        if comment:
            params['comment'] = comment
        source = self._post(machine.resource_uri, op='deploy', params=params, status_errors=_DEPLOY_ERRORS)
        return read_machine(self.api_version, source)

    def create_device(
        self,
        mac_addresses: Sequence[str],
        hostname: Optional[str] = None,
        domain: Optional[str] = None,
        parent: Optional[str] = None
    ) -> Device:
        """Register a device.

        Args:
            mac_addresses: MAC addresses of the device, at least one
            hostname: Hostname, generated by the server if omitted
            domain: DNS domain name
            parent: System ID of the parent node

        Returns:
            The new Device

        Raises:
            ValueError: If no MAC address is given
        """
        if not mac_addresses:
            raise ValueError("at least one MAC address must be specified")
        params: Dict[str, Any] = {'mac_addresses': list(mac_addresses)}
        if hostname:
            params['hostname'] = hostname
        if domain:
            params['domain'] = domain
        if parent:
            params['parent'] = parent
        return read_device(self.api_version, self._post('devices/', params=params))

    def delete_device(self, device: Device) -> None:
        """Delete a device.

        Raises:
            NoMatchError: If the device no longer exists
            PermissionDeniedError: If the user may not delete it
        """
        self._delete(device.resource_uri)
        logger.info(f"✓ Deleted device {device.system_id}")

    def tag_machines(self, tag_name: str) -> List[Machine]:
        """List the machines carrying a tag.

        Raises:
            NoMatchError: If the tag does not exist
        """
        if not tag_name:
            raise ValueError("missing tag name")
        return read_machines(self.api_version, self._get(f'tags/{tag_name}/', op='machines'))

    def add_tag_to_machine(self, tag: Tag, system_id: str) -> None:
        """Apply a tag to a machine."""
        self._post(tag.resource_uri, op='update_nodes', params={'add': [system_id]})

    def remove_tag_from_machine(self, tag: Tag, system_id: str) -> None:
        """Remove a tag from a machine."""
        self._post(tag.resource_uri, op='update_nodes', params={'remove': [system_id]})

    def block_devices(self, system_id: str) -> List[BlockDevice]:
        """List the block devices of a machine."""
        return read_block_devices(self.api_version, self._get(f'nodes/{system_id}/blockdevices/'))

    def volume_groups(self, system_id: str) -> List[VolumeGroup]:
        """List the LVM volume groups of a machine."""
        return read_volume_groups(self.api_version, self._get(f'nodes/{system_id}/volume-groups/'))

    def format_partition(
        self,
        partition: Partition,
        fs_type: str,
        uuid: Optional[str] = None,
        label: Optional[str] = None
    ) -> Partition:
        """Format a partition and return its new state.

        The caller swaps the returned value into the owning block device with
        BlockDevice.with_partition.

        Args:
            partition: Partition to format
            fs_type: Filesystem type (e.g. 'ext4')
            uuid: Optional filesystem UUID
            label: Optional filesystem label

        Returns:
            Freshly decoded Partition
        """
        params = _format_params(fs_type, uuid, label)
        source = self._post(
            partition.resource_uri,
            op='format',
            params=params,
            status_errors=_MISSING_TARGET_IS_BAD_REQUEST
        )
        return read_partition(self.api_version, source)

    def mount_partition(
        self,
        partition: Partition,
        mount_point: str,
        mount_options: Optional[str] = None
    ) -> Partition:
        """Mount a formatted partition and return its new state."""
        params = _mount_params(mount_point, mount_options)
        source = self._post(partition.resource_uri, op='mount', params=params)
        return read_partition(self.api_version, source)

    def format_block_device(
        self,
        device: BlockDevice,
        fs_type: str,
        uuid: Optional[str] = None
    ) -> BlockDevice:
        """Format a whole block device and return its new state.

        The caller swaps the returned value into the owning machine with
        Machine.with_block_device.
        """
        params = _format_params(fs_type, uuid, None)
        source = self._post(
            device.resource_uri,
            op='format',
            params=params,
            status_errors=_MISSING_TARGET_IS_BAD_REQUEST
        )
        return read_block_device(self.api_version, source)

    def mount_block_device(
        self,
        device: BlockDevice,
        mount_point: str,
        mount_options: Optional[str] = None
    ) -> BlockDevice:
        """Mount a formatted block device and return its new state."""
        params = _mount_params(mount_point, mount_options)
        source = self._post(device.resource_uri, op='mount', params=params)
        return read_block_device(self.api_version, source)

    def create_partition(
        self,
        device: BlockDevice,
        size: Optional[int] = None,
        uuid: Optional[str] = None,
        bootable: Optional[bool] = None
    ) -> Partition:
        """Create a partition on a block device.

        Args:
            device: Block device to partition
            size: Partition size in bytes, or the remaining space if omitted
            uuid: Optional partition UUID
            bootable: Optional bootable flag

        Returns:
            The new Partition
        """
        params: Dict[str, Any] = {}
        if size is not None:
            if size <= 0:
                raise ValueError(f"invalid partition size {size}")
            params['size'] = str(size)
        if uuid:
            params['uuid'] = uuid
        if bootable is not None:
            params['bootable'] = 'true' if bootable else 'false'
        path = device.resource_uri.rstrip('/') + '/partitions/'
        source = self._post(path, params=params)
        return read_partition(self.api_version, source)

    def create_logical_volume(
        self,
        volume_group: VolumeGroup,
        name: str,
        size: int,
        uuid: Optional[str] = None
    ) -> BlockDevice:
        """Create a logical volume in a volume group.

        Args:
            volume_group: Volume group to carve the volume from
            name: Logical volume name
            size: Size in bytes
            uuid: Optional logical volume UUID

        Returns:
            The new logical volume as a BlockDevice
        """
        if not name:
            raise ValueError("missing name")
        if size <= 0:
            raise ValueError(f"invalid logical volume size {size}")
        params = {'name': name, 'size': str(size)}
        if uuid:
            params['uuid'] = uuid
        source = self._post(
            volume_group.resource_uri,
            op='create_logical_volume',
            params=params,
            status_errors=_MISSING_TARGET_IS_BAD_REQUEST
        )
        return read_block_device(self.api_version, source)


def _format_params(fs_type: str, uuid: Optional[str], label: Optional[str]) -> Dict[str, str]:
    if not fs_type:
        raise ValueError("missing fs_type")
    params = {'fs_type': fs_type}
    if uuid:
        params['uuid'] = uuid
    if label:
        params['label'] = label
    return params


def _mount_params(mount_point: str, mount_options: Optional[str]) -> Dict[str, str]:
    if not mount_point:
        raise ValueError("missing mount_point")
    params = {'mount_point': mount_point}
    if mount_options:
        params['mount_options'] = mount_options
    return params
