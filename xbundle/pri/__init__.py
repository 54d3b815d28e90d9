"""Binary helpers and the resource map and hierarchical schema sections of PRI files."""