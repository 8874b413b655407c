"""API version parsing and per-kind decoder dispatch."""

import bisect
import logging
from typing import Callable, Dict, List, Union

from packaging.version import InvalidVersion, Version

from maasapi.errors import UnsupportedVersionError

logger = logging.getLogger(__name__)

VersionLike = Union[str, Version]


def parse_version(value: VersionLike) -> Version:
    """Parse an API version such as '2.0' or '2.1.9'.

    Args:
        value: Version string or an already parsed Version

    Returns:
        Parsed Version

    Raises:
        UnsupportedVersionError: If value is not a version number
    """
    if isinstance(value, Version):
        return value
    try:
        return Version(value)
    except InvalidVersion as e:
        raise UnsupportedVersionError(f"invalid API version {value!r}", cause=e)


def format_version(version: Version) -> str:
    """Render a version with major, minor and patch components (e.g. '1.9.0')."""
    release = list(version.release) + [0] * (3 - len(version.release))
    return ".".join(str(part) for part in release)


class VersionRegistry:
    """Ordered table of decoders for a single entity kind.

    A lookup selects the decoder declared at the greatest version that is
    not newer than the requested one. Requests newer than every declared
    version get the newest decoder.
    """

    def __init__(self, kind: str):
        """Initialize an empty registry.

        Args:
            kind: Entity kind name used in error messages (e.g. 'machine')
        """
        self.kind = kind
        self._versions: List[Version] = []
        self._decoders: Dict[Version, Callable] = {}

    def register(self, version: VersionLike) -> Callable[[Callable], Callable]:
        """Decorator declaring a decoder for a version.

        Registering the same version twice keeps the later decoder.
        """
        parsed = parse_version(version)

        def decorator(func: Callable) -> Callable:
            if parsed not in self._decoders:
                bisect.insort(self._versions, parsed)
            self._decoders[parsed] = func
            return func

        return decorator

    @property
    def versions(self) -> List[Version]:
        return list(self._versions)

    def resolve(self, target: VersionLike) -> Callable:
        """Select the decoder to use for a target version.

        Args:
            target: Requested API version

        Returns:
            The decoder callable

        Raises:
            UnsupportedVersionError: If no decoder is declared at or below target
        """
        parsed = parse_version(target)
        index = bisect.bisect_right(self._versions, parsed)
        if index == 0:
            raise UnsupportedVersionError(
                f"no {self.kind} read func for version {format_version(parsed)}"
            )
        selected = self._versions[index - 1]
        logger.debug(f"Using {self.kind} decoder {selected} for version {parsed}")
        return self._decoders[selected]

    def __len__(self) -> int:
        return len(self._versions)

    def __contains__(self, version: VersionLike) -> bool:
        return parse_version(version) in self._decoders
