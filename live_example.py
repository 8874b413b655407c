#!/usr/bin/env python3
"""
MAAS Inventory Example

Connects to a MAAS controller and prints a summary of its inventory.
"""

import logging
import sys

import requests

from maasapi.config import MAASConfig
from maasapi.controller import Controller
from maasapi.errors import MAASError, is_permission_error
from maasapi.utils import format_bytes

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
    ]
)

logger = logging.getLogger(__name__)


def main():
    """Main function to list the controller inventory."""
    print("=" * 70)
    print("MAAS Inventory Example")
    print("=" * 70)
    print()

    try:
        # Load configuration
        logger.info("Loading configuration...")
        config = MAASConfig()
        logger.info(f"✓ Configuration loaded")
        logger.info(f"  URL: {config.maas_url}")
        logger.info(f"  API versions: {', '.join(config.api_versions)}")
        print()

        # Negotiate API version
        logger.info("Connecting to MAAS controller...")
        controller = Controller.connect(
            config.maas_url,
            verify_ssl=config.verify_ssl,
            timeout=config.timeout,
            api_versions=config.api_versions
        )
        logger.info(f"  Capabilities: {', '.join(sorted(controller.capabilities))}")
        print()

        zones = controller.zones()
        logger.info(f"Found {len(zones)} zone(s): {', '.join(zone.name for zone in zones)}")

        fabrics = controller.fabrics()
        for fabric in fabrics:
            vids = ', '.join(str(vlan.vid) for vlan in fabric.vlans)
            logger.info(f"  - Fabric {fabric.name}: VLANs {vids}")
        print()

        logger.info("Fetching machine list...")
        machines = controller.machines()
        logger.info(f"Found {len(machines)} machine(s)")
        print()

        # Summary
        print("=" * 70)
        print("Machine Summary")
        print("=" * 70)
        for machine in machines:
            print(f"{machine.hostname} ({machine.system_id})")
            print(f"  Status: {machine.status_name}, power {machine.power_state}")
            print(f"  Zone: {machine.zone.name}")
            print(f"  OS: {machine.operating_system} {machine.distro_series}")
            print(f"  CPUs: {machine.cpu_count}, memory {machine.memory} MB")
            if machine.boot_interface:
                print(f"  Boot interface: {machine.boot_interface.name} ({machine.boot_interface.mac_address})")
            for device in machine.block_devices:
                print(f"  Disk {device.name}: {format_bytes(device.size)}, {device.used_for}")
                for partition in device.partitions:
                    mount = partition.filesystem.mount_point if partition.filesystem else ""
                    print(f"    - {partition.path}: {format_bytes(partition.size)} {mount}")
            print()

        sys.exit(0)

    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)
    except MAASError as e:
        if is_permission_error(e):
            logger.error(f"Permission denied, check credentials: {e}")
        else:
            logger.error(f"MAAS error: {e}")
        sys.exit(1)
    except requests.exceptions.RequestException as e:
        logger.error(f"Connection error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
