from importlib.metadata import PackageNotFoundError, version


def get_versions() -> dict[str, str]:
    try:
        return {"version": version("svpaths")}
    except PackageNotFoundError:
        return {"version": "unknown"}
