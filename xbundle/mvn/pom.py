"""Project object model documents and their dependencies."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass

from xbundle.mvn.package import Package
from xbundle.mvn.range import VersionRange, parse_range


def _local(tag: str) -> str:
    return tag.rpartition("}")[2]


def _child(element: ET.Element, name: str) -> ET.Element | None:
    return next((c for c in element if _local(c.tag) == name), None)


def _text(element: ET.Element) -> str:
    return (element.text or "").strip()


def _required_text(element: ET.Element, name: str) -> str:
    child = _child(element, name)
    if child is None:
        raise ValueError(f"missing <{name}> in <{_local(element.tag)}>")
    return _text(child)


@dataclass(frozen=True)
class Dependency:
    """A dependency declaration: coordinates, a version range and a scope."""

    group: str
    name: str
    version: str
    scope: str | None = None

    @classmethod
    def parse(cls, text: str) -> Dependency:
        """Parse a 'group:name:version' string."""
        group, sep, rest = text.partition(":")
        if not sep:
            raise ValueError(f"invalid dep: {text!r}")
        name, sep, version = rest.partition(":")
        if not sep:
            raise ValueError(f"invalid dep: {text!r}")
        return cls(group, name, version)

    @classmethod
    def _from_element(cls, element: ET.Element) -> Dependency:
        scope = _child(element, "scope")
        return cls(
            group=_required_text(element, "groupId"),
            name=_required_text(element, "artifactId"),
            version=_required_text(element, "version"),
            scope=_text(scope) if scope is not None else None,
        )

    def package(self) -> Package:
        return Package(self.group, self.name)

    def range(self) -> VersionRange:
        """The set of versions the declared version range allows."""
        return parse_range(self.version)


@dataclass(frozen=True)
class Pom:
    """The parts of a POM used for resolution."""

    packaging: str = "jar"
    dependencies: tuple[Dependency, ...] = ()

    @classmethod
    def from_xml(cls, text: str) -> Pom:
        """Parse a POM document; raises ValueError if it is malformed."""
        try:
            root = ET.fromstring(text.strip())
        except ET.ParseError as err:
            raise ValueError(f"invalid POM XML: {err}") from err
        packaging = _child(root, "packaging")
        dependencies = _child(root, "dependencies")
        deps: tuple[Dependency, ...] = ()
        if dependencies is not None:
            deps = tuple(Dependency._from_element(child) for child in dependencies)
        return cls(
            packaging=_text(packaging) if packaging is not None else "jar",
            dependencies=deps,
        )