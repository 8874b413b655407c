"""Base class for all entity readers."""

import logging
from typing import Any, Callable, List, Optional, Type

from maasapi.errors import MAASError, wrap_with_deserialization_error
from maasapi.schema import OBJECT, OBJECT_LIST, SchemaError, WireModel, validate
from maasapi.versions import VersionLike, VersionRegistry, parse_version

logger = logging.getLogger(__name__)


class EntityReader:
    """Decodes one entity kind from parsed JSON at a negotiated API version.

    Decoders are registered per declared API version and take the source
    mapping plus the target version, so nested entities can be read through
    their own readers at that same version.

    Example:
        >>> zone_reader = EntityReader("zone")
        >>> @zone_reader.register("2.0")
        ... def zone_2_0(source, version):
        ...     ...
    """

    def __init__(self, kind: str):
        """Initialize reader.

        Args:
            kind: Entity kind name used in error messages (e.g. 'machine')
        """
        self.kind = kind
        self.registry = VersionRegistry(kind)

    def register(self, version: VersionLike) -> Callable[[Callable], Callable]:
        """Decorator declaring the decoder for an API version."""
        return self.registry.register(version)

    def check(self, schema: Type[WireModel], source: Any, label: str) -> WireModel:
        """Validate source against a decoder's wire schema.

        Args:
            schema: The decoder's WireModel class
            source: Parsed JSON value
            label: Declared decoder version used in the message (e.g. '2.0')

        Returns:
            Validated schema instance

        Raises:
            DeserializationError: If the source does not match the schema
        """
        try:
            return validate(schema, source)
        except SchemaError as e:
            raise wrap_with_deserialization_error(e, "%s %s schema check failed", self.kind, label)

    def read(self, version: VersionLike, source: Any):
        """Decode a single entity.

        Args:
            version: Target API version
            source: Parsed JSON object

        Returns:
            The decoded entity

        Raises:
            DeserializationError: If the payload has the wrong shape
            UnsupportedVersionError: If no decoder is declared at or below version
        """
        try:
            validate(OBJECT, source)
        except SchemaError as e:
            raise wrap_with_deserialization_error(e, "%s base schema check failed", self.kind)
        parsed = parse_version(version)
        decoder = self.registry.resolve(parsed)
        return decoder(source, parsed)

    def read_optional(self, version: VersionLike, source: Any):
        """Decode a nullable nested entity, returning None for null."""
        if source is None:
            return None
        return self.read(version, source)

    def read_list(self, version: VersionLike, source: Any) -> List[Any]:
        """Decode a JSON array of entities, preserving order.

        The first element that fails aborts the whole list with its index
        prefixed to the message, e.g. 'machine 1: machine 2.0 schema check
        failed: ...'.

        Args:
            version: Target API version
            source: Parsed JSON array

        Returns:
            List of decoded entities
        """
        try:
            items = validate(OBJECT_LIST, source)
        except SchemaError as e:
            raise wrap_with_deserialization_error(e, "%s base schema check failed", self.kind)
        parsed = parse_version(version)
        decoder = self.registry.resolve(parsed)

        result = []
        for index, item in enumerate(items):
            try:
                result.append(decoder(item, parsed))
            except MAASError as e:
                raise e.annotate(f"{self.kind} {index}") from e
        logger.debug(f"Read {len(result)} {self.kind} value(s) at version {parsed}")
        return result

    def read_optional_list(self, version: VersionLike, source: Optional[Any]) -> List[Any]:
        """Decode a nullable JSON array, returning [] for null."""
        if source is None:
            return []
        return self.read_list(version, source)
