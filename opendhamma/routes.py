"""Route shapes understood by the presentation layer."""

VAULTS_ROUTE = "/vaults"
CANON_ROUTE = "/tipitaka"


def vault_route(vault_id: str, path: str = "") -> str:
    """/vaults/{vault_id} or /vaults/{vault_id}/{path}"""
    path = path.strip("/")
    if not path:
        return f"{VAULTS_ROUTE}/{vault_id}"
    return f"{VAULTS_ROUTE}/{vault_id}/{path}"


def canon_route(category: str, document: str | None = None) -> str:
    """/tipitaka/{category} or /tipitaka/{category}/{document}"""
    if document is None:
        return f"{CANON_ROUTE}/{category}"
    return f"{CANON_ROUTE}/{category}/{document}"
