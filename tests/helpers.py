"""XML builders for settings files used across tests."""

MASTER_PASSWORD = "master-secret"

SETTINGS_NS = (
    'xmlns="http://maven.apache.org/SETTINGS/1.0.0" '
    'xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"'
)


def settings_xml(body: str) -> str:
    """Wrap a body in a namespaced <settings> root."""
    return f'<?xml version="1.0" encoding="UTF-8"?>\n<settings {SETTINGS_NS}>\n{body}\n</settings>\n'


def servers_xml(*servers: dict[str, str]) -> str:
    """Build a settings.xml document containing the given servers."""
    entries = []
    for server in servers:
        fields = "".join(f"<{key}>{value}</{key}>" for key, value in server.items())
        entries.append(f"<server>{fields}</server>")
    return settings_xml(f"<servers>{''.join(entries)}</servers>")


def security_xml(master: str) -> str:
    return f"<settingsSecurity><master>{master}</master></settingsSecurity>"
