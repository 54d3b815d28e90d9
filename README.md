# xbundle

Building blocks for packaging applications, in two parts:

- `xbundle.mvn` works with Maven coordinates. It parses versions and
  Maven version range syntax such as `[1.0,2.0)` or `(,1.0],[1.2,)`,
  reads the dependencies out of POM documents, and resolves a dependency
  graph to one version per package through a provider that you supply.
- `xbundle.pri` reads and writes two section types of PRI resource index
  files: the resource map and the hierarchical schema.

No third-party libraries are needed at run time.

## Installation

```
pip install xbundle
```

## Versions and coordinates

```python
from xbundle.mvn.package import Artifact, Package, Version

version = Version.parse("1.2")          # Version(major=1, minor=2, patch=0)
str(version)                            # "1.2.0"
Version.parse("1.0-rc1") < Version.parse("1.0")   # True: a suffix sorts first
version.bump()                          # 1.2.1

gson = Package("com.google.code.gson", "gson")
str(gson)                               # "com.google.code.gson:gson"
gson.url("https://repo.example.com")
# "https://repo.example.com/com/google/code/gson/gson/maven-metadata.xml"

artifact = Artifact(gson, Version.parse("2.8.9"))
artifact.url("https://repo.example.com", "jar")
# ".../com/google/code/gson/gson/2.8.9/gson-2.8.9.jar"
artifact.file_name("pom")               # "com.google.code.gson-gson-2.8.9.pom"
```

`Version.parse` raises `ValueError` for a component that is not a number.

## Version ranges

```python
from xbundle.mvn.package import Version
from xbundle.mvn.range import parse_range

allowed = parse_range("(,1.0],[1.2,)")
allowed.contains(Version.parse("1.0"))    # True
allowed.contains(Version.parse("1.1.5"))  # False
Version.parse("2.0") in allowed           # True
```

A bare version such as `1.0` means "1.0 or higher", and `[1.0]` means
exactly 1.0. `parse_range` returns a `VersionRange`, a set of versions
that supports `union`, `intersection`, `complement` and `lowest_version`.
The lower level `tokenize` and `parse_ranges` functions give the tokens
and the parsed `RangeSpec` values of a specification.

## POM documents

```python
from xbundle.mvn.pom import Dependency, Pom

pom = Pom.from_xml("""
<project>
  <packaging>aar</packaging>
  <dependencies>
    <dependency>
      <groupId>group</groupId>
      <artifactId>name</artifactId>
      <version>[1.0,2.0)</version>
      <scope>test</scope>
    </dependency>
  </dependencies>
</project>
""")
pom.packaging                     # "aar" ("jar" when absent)
dep = pom.dependencies[0]
dep.package()                     # Package(group="group", name="name")
dep.scope                         # "test"
dep.range()                       # VersionRange for [1.0,2.0)

Dependency.parse("group:name:1.0")
```

Malformed XML, or a dependency without `groupId`, `artifactId` or
`version`, raises `ValueError`.

## Resolving dependencies

`xbundle.mvn.solver.resolve` picks one version of every package
reachable from a root. It asks a `DependencyProvider` which versions
exist and what they depend on:

```python
from xbundle.mvn.package import Package, Version
from xbundle.mvn.range import parse_range
from xbundle.mvn.solver import DependencyProvider, NoSolutionError, resolve


class InMemoryProvider(DependencyProvider):
    def __init__(self, index):
        self.index = index  # {(package, version): {dependency: range}}

    def choose_package_version(self, potential_packages):
        package, allowed = next(potential_packages)
        candidates = sorted(
            (v for (p, v) in self.index if p == package and allowed.contains(v)),
            reverse=True,
        )
        return package, candidates[0] if candidates else None

    def get_dependencies(self, package, version):
        return self.index.get((package, version))


app, lib = Package("local", "app"), Package("local", "lib")
provider = InMemoryProvider({
    (app, Version.parse("1.0")): {lib: parse_range("[1.0,2.0)")},
    (lib, Version.parse("1.5")): {},
    (lib, Version.parse("2.0")): {},
})
resolve(provider, app, Version.parse("1.0"))
# {app: Version(1, 0, 0), lib: Version(1, 5, 0)}
```

`choose_package_version` receives `(package, range)` pairs and returns
a package with the version to try, or `None` when none is left;
`get_dependencies` returns a mapping of packages to ranges, or `None`
when they are unknown. When the constraints cannot all be met, `resolve`
raises `NoSolutionError`; its message and its `reasons` list explain the
conflicts it met.

## PRI sections

`ResourceMap` and `HierarchicalSchema` read a section body from a binary
stream and write it back:

```python
import io

from xbundle.pri.hierarchical_schema import HierarchicalSchema, ResourceMapEntry

schema = HierarchicalSchema(
    unique_name="ms-appx://app/",
    name="app",
    scopes=[ResourceMapEntry(None, "Files")],
    items=[ResourceMapEntry(0, "logo.png")],
)
buffer = io.BytesIO()
schema.write(buffer)
buffer.seek(0)
HierarchicalSchema.read(buffer) == schema   # True
```

`ResourceMap` holds the item-to-group table, item info groups, item
infos and `CandidateInfo` records; on writing, its table of resource
value types is rebuilt from the candidates. Each class has an
`IDENTIFIER` with the 16-byte section identifier. Data that does not
follow the format raises `xbundle.pri.binio.PriFormatError`, a
`ValueError`.

## What the package does not do

- It does not download anything, keep a cache of artifacts, or read
  `maven-metadata.xml` files; `Package.url` and `Artifact.url` only build
  the addresses. Fetching versions and POMs is up to your provider.
- It does not read or write whole PRI files. It has no file header or
  table of contents handling, and no support for the data item, PRI
  descriptor or decision info sections.