"""Version information served to the transform runtime."""

ENGINE_VERSION = "{{version:assetgraph}}"


def engine_version_tuple():
    return tuple(int(part) for part in ENGINE_VERSION.split("+")[0].split("-")[0].split("."))
