"""
SCIM Attribute Projection Utility

Implements RFC 7644 Section 3.4.2.5 for SCIM responses.
Handles both 'attributes' and 'excludedAttributes' query parameters.
"""
from typing import Any, Dict, List, Optional, Sequence, Set, Union

from scimfilter.utils.attribute_path import find_key
from scimfilter.utils.logging import get_logger


logger = get_logger(__name__)

AttributeList = Optional[Union[str, Sequence[str]]]


class AttributeProjection:
    """Projects SCIM resource attributes according to RFC 7644."""

    # Attributes that MUST always be returned per RFC 7643 Section 7
    ALWAYS_RETURNED = ("schemas", "id", "meta")

    @classmethod
    def project(
        cls,
        resource: Dict[str, Any],
        attributes: AttributeList = None,
        excluded_attributes: AttributeList = None
    ) -> Dict[str, Any]:
        """
        Project a single resource.

        Args:
            resource: The resource dictionary to project
            attributes: Attributes to return in addition to the always-returned set
            excluded_attributes: Attributes to remove from the default set

        Returns:
            A new dictionary; the input is never modified. When neither
            parameter is given the input itself is returned.
        """
        requested = cls.parse_attribute_list(attributes)
        excluded = cls.parse_attribute_list(excluded_attributes)

        # 'attributes' takes precedence over 'excludedAttributes'
        if requested:
            return cls._include_only(resource, requested)
        if excluded:
            return cls._exclude(resource, excluded)
        return resource

    @classmethod
    def project_list(
        cls,
        resources: List[Dict[str, Any]],
        attributes: AttributeList = None,
        excluded_attributes: AttributeList = None
    ) -> List[Dict[str, Any]]:
        if not cls.parse_attribute_list(attributes) and not cls.parse_attribute_list(excluded_attributes):
            return resources

        return [
            cls.project(resource, attributes, excluded_attributes)
            for resource in resources
        ]

    @staticmethod
    def parse_attribute_list(raw: AttributeList) -> List[str]:
        """Split a comma-separated parameter (or list of names) into lowercased names."""
        if not raw:
            return []
        items = raw.split(",") if isinstance(raw, str) else raw
        names = []
        for item in items:
            name = item.strip().lower()
            if name and name not in names:
                names.append(name)
        return names

    @classmethod
    def _group_by_top_level(
        cls,
        resource: Dict[str, Any],
        names: List[str]
    ) -> Dict[str, Optional[Set[str]]]:
        """
        Group attribute names by the resource key they address.

        Maps the actual resource key to None (whole attribute) or to the set
        of sub-attribute names requested within it. Names that address no
        key of the resource are dropped.
        """
        grouped: Dict[str, Optional[Set[str]]] = {}

        for name in names:
            key, sub = cls._split_name(resource, name)
            if key is None:
                continue
            if sub is None:
                grouped[key] = None
            elif key not in grouped:
                grouped[key] = {sub}
            elif grouped[key] is not None:
                grouped[key].add(sub)

        return grouped

    @staticmethod
    def _split_name(resource: Dict[str, Any], name: str):
        # Exact key match first: covers plain names and bare extension URNs
        key = find_key(resource, name)
        if key is not None:
            return key, None

        if name.startswith("urn:"):
            # urn:...:User:employeeNumber addresses an attribute of the extension object
            for candidate in resource:
                prefix = candidate.lower() + ":"
                if candidate.lower().startswith("urn:") and name.startswith(prefix):
                    return candidate, name[len(prefix):]
            return None, None

        top, dot, sub = name.partition(".")
        if not dot:
            return None, None
        return find_key(resource, top), sub

    @staticmethod
    def _select(value: Any, subs: Set[str]) -> Any:
        if isinstance(value, dict):
            selected = {}
            for sub in subs:
                sub_key = find_key(value, sub)
                if sub_key is not None:
                    selected[sub_key] = value[sub_key]
            return selected
        if isinstance(value, list):
            return [
                AttributeProjection._select(item, subs) if isinstance(item, dict) else item
                for item in value
            ]
        return value

    @staticmethod
    def _drop(value: Any, subs: Set[str]) -> Any:
        if isinstance(value, dict):
            remaining = dict(value)
            for sub in subs:
                sub_key = find_key(remaining, sub)
                if sub_key is not None:
                    del remaining[sub_key]
            return remaining
        if isinstance(value, list):
            return [
                AttributeProjection._drop(item, subs) if isinstance(item, dict) else item
                for item in value
            ]
        return value

    @classmethod
    def _include_only(cls, resource: Dict[str, Any], names: List[str]) -> Dict[str, Any]:
        result: Dict[str, Any] = {}

        for always in cls.ALWAYS_RETURNED:
            key = find_key(resource, always)
            if key is not None:
                result[key] = resource[key]

        for key, subs in cls._group_by_top_level(resource, names).items():
            if key in result:
                continue
            if subs is None:
                result[key] = resource[key]
            else:
                result[key] = cls._select(resource[key], subs)

        logger.debug(f"Projected resource to attributes {names}")
        return result

    @classmethod
    def _exclude(cls, resource: Dict[str, Any], names: List[str]) -> Dict[str, Any]:
        result = dict(resource)

        for key, subs in cls._group_by_top_level(resource, names).items():
            # Always-returned attributes can never be excluded
            if key.lower() in cls.ALWAYS_RETURNED:
                continue
            if subs is None:
                del result[key]
            else:
                result[key] = cls._drop(result[key], subs)

        logger.debug(f"Excluded attributes {names} from resource")
        return result


def apply_attribute_projection(
    resource: Dict[str, Any],
    attributes: AttributeList = None,
    excluded_attributes: AttributeList = None,
) -> Dict[str, Any]:
    return AttributeProjection.project(resource, attributes, excluded_attributes)


def apply_attribute_projection_to_list(
    resources: List[Dict[str, Any]],
    attributes: AttributeList = None,
    excluded_attributes: AttributeList = None,
) -> List[Dict[str, Any]]:
    return AttributeProjection.project_list(resources, attributes, excluded_attributes)
