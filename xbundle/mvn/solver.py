"""A backtracking dependency resolver driven by a dependency provider."""

from __future__ import annotations

import abc
from collections.abc import Iterator, Mapping

from xbundle.mvn.package import Package, Version
from xbundle.mvn.range import VersionRange

Dependencies = Mapping[Package, VersionRange]


class NoSolutionError(Exception):
    """No set of versions satisfies all the dependency constraints."""

    def __init__(self, message: str, reasons: list[str] | None = None) -> None:
        super().__init__(message)
        self.reasons = reasons or []


class DependencyProvider(abc.ABC):
    """Source of available versions and their dependencies."""

    @abc.abstractmethod
    def choose_package_version(
        self, potential_packages: Iterator[tuple[Package, VersionRange]]
    ) -> tuple[Package, Version | None]:
        """Pick one of the packages and a version of it in its range, or None."""

    @abc.abstractmethod
    def get_dependencies(
        self, package: Package, version: Version
    ) -> Dependencies | None:
        """The dependencies of a version, or None if they are unavailable."""


def _merge(
    constraints: dict[Package, VersionRange],
    assignments: dict[Package, Version],
    owner: Package,
    owner_version: Version,
    deps: Dependencies,
) -> tuple[dict[Package, VersionRange] | None, str | None]:
    merged = dict(constraints)
    for dep, allowed in deps.items():
        if dep == owner:
            raise ValueError(f"{owner} {owner_version} depends on itself")
        combined = merged.get(dep, VersionRange.any()).intersection(allowed)
        chosen = assignments.get(dep)
        if chosen is not None and not combined.contains(chosen):
            return None, (
                f"{owner} {owner_version} depends on {dep} {allowed}, "
                f"but {dep} {chosen} is selected"
            )
        if not combined.segments:
            return None, (
                f"{owner} {owner_version} depends on {dep} {allowed}, "
                f"which conflicts with other requirements on {dep}"
            )
        merged[dep] = combined
    return merged, None


def _search(
    provider: DependencyProvider,
    assignments: dict[Package, Version],
    constraints: dict[Package, VersionRange],
    failures: list[str],
) -> dict[Package, Version] | None:
    pending = [(p, r) for p, r in constraints.items() if p not in assignments]
    if not pending:
        return assignments
    chosen, version = provider.choose_package_version(iter(pending))
    allowed = constraints[chosen]
    while version is not None and allowed.contains(version):
        deps = provider.get_dependencies(chosen, version)
        if deps is None:
            failures.append(f"dependencies of {chosen} {version} are unavailable")
        else:
            merged, reason = _merge(constraints, assignments, chosen, version, deps)
            if reason is not None:
                failures.append(reason)
            else:
                result = _search(
                    provider, {**assignments, chosen: version}, merged, failures
                )
                if result is not None:
                    return result
        allowed = allowed.intersection(VersionRange.exact(version).complement())
        _, version = provider.choose_package_version(iter([(chosen, allowed)]))
    failures.append(f"no remaining version of {chosen} matches {constraints[chosen]}")
    return None


def resolve(
    provider: DependencyProvider, package: Package, version: Version
) -> dict[Package, Version]:
    """Select one version of every package reachable from the root."""
    failures: list[str] = []
    root_deps = provider.get_dependencies(package, version)
    if root_deps is None:
        failures.append(f"dependencies of {package} {version} are unavailable")
        result = None
    else:
        assignments = {package: version}
        constraints = {package: VersionRange.exact(version)}
        merged, reason = _merge(constraints, assignments, package, version, root_deps)
        if reason is not None:
            failures.append(reason)
            result = None
        else:
            result = _search(provider, assignments, merged, failures)
    if result is None:
        reasons = list(dict.fromkeys(failures))
        message = "\n".join([f"no solution for {package} {version}:", *reasons])
        raise NoSolutionError(message, reasons)
    return result