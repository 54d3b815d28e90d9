"""Maven versions and coordinates, version ranges, POM parsing and dependency resolution."""