"""
Local Maven settings loader.

Builds the effective settings from the global and user settings.xml files and
decrypts server credentials with the master password from settings-security.xml.
"""

from pathlib import Path

from . import cipher
from .builder import build_settings
from .models import MavenSettings, Server, SettingsBuildingRequest
from .security import decrypt_master_password
from ..config import Settings, get_settings
from ..utils.logging import get_logger

logger = get_logger(__name__)

ENV_PREFIX = "${env."


class SettingsLoader:
    """
    Loads and merges Maven settings and decrypts their credentials.

    Every call to :meth:`load_settings` reads the files again; nothing is cached.
    The loader holds no mutable state, but it does not synchronise anything
    either: callers sharing one instance across threads must not rely on the
    files staying unchanged during a load.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    @property
    def global_settings_file(self) -> Path | None:
        return self.settings.global_settings_file

    @property
    def user_settings_file(self) -> Path:
        return self.settings.user_settings_file.expanduser()

    @property
    def security_settings_file(self) -> Path:
        return self.settings.security_settings_file.expanduser()

    def load_settings(self) -> MavenSettings:
        """
        Load and merge the global and user settings files.

        Returns:
            Effective settings with decrypted credentials

        Raises:
            SettingsBuildingError: if the effective settings cannot be built
        """
        global_file = self.global_settings_file
        user_file = self.user_settings_file

        if global_file is not None and global_file.exists():
            logger.info("Using maven global settings.xml", path=str(global_file.absolute()))
        if user_file.exists():
            logger.info("Using maven user settings.xml", path=str(user_file.absolute()))
        else:
            logger.info("No maven user settings.xml found", path=str(user_file.absolute()))

        request = SettingsBuildingRequest(
            global_settings_file=global_file,
            user_settings_file=user_file,
            system_properties=self.settings.effective_system_properties(),
        )
        result = build_settings(request)

        for problem in result.problems:
            logger.warning(f"Maven: {problem}")

        return self.decrypt_credentials(result.effective_settings)

    def read_master_password(self) -> str | None:
        """Decrypt the master password, or None when there is no security file."""
        security_file = self.security_settings_file
        if not security_file.is_file():
            return None
        return decrypt_master_password(security_file)

    def decrypt_credentials(self, settings: MavenSettings) -> MavenSettings:
        """
        Decrypt server passwords and passphrases.

        The input is never modified. It is returned as is when there are no
        servers or when the master password cannot be decrypted; otherwise a
        copy with updated servers is returned.
        """
        if not settings.servers:
            return settings

        try:
            master_password = self.read_master_password()
        except Exception as e:
            logger.warning(
                "Unable to decrypt master password provided in settings-security.xml file, "
                "use '--verbose' to have the details",
                error=str(e),
            )
            logger.debug("Error while decrypting master password", exc_info=e)
            return settings

        servers = [
            self._decrypt_server(server, master_password) for server in settings.servers
        ]
        return settings.model_copy(update={"servers": servers})

    def _decrypt_server(self, server: Server, master_password: str | None) -> Server:
        logger.debug(f"Processing credentials for server {server.id}")

        updates = {}
        for field in ("password", "passphrase"):
            value = getattr(server, field)
            if value is None:
                continue
            try:
                updates[field] = self.resolve_password(server.id, value, master_password)
            except Exception as e:
                logger.warning(
                    f"It looks like the {field} provided for the server {server.id} is encrypted "
                    "but we are unable to decrypt it, use '--verbose' to have the details",
                    server_id=server.id,
                    error=str(e),
                )
                logger.debug(f"Error while decrypting {field}", server_id=server.id, exc_info=e)

        return server.model_copy(update=updates) if updates else server

    def resolve_password(
        self, server_id: str | None, value: str, master_password: str | None
    ) -> str:
        """Resolve one password or passphrase value."""
        if value.startswith(ENV_PREFIX):
            variable = value[len(ENV_PREFIX) : -1]
            logger.warning(
                f"It looks like the password provided for the server {server_id} "
                f"uses an unknown env variable {variable}",
                server_id=server_id,
                variable=variable,
            )
            return value

        if cipher.is_encrypted_string(value):
            if master_password is None:
                logger.warning(
                    f"It looks like the password provided for the server {server_id} is encrypted "
                    "but there is no settings-security.xml file with a master password.",
                    server_id=server_id,
                )
                return value
            decrypted = cipher.decrypt_decorated(value, master_password)
            logger.debug(f"Successfully decrypted password/passphrase for server {server_id}")
            return decrypted

        return value


def load_settings(settings: Settings | None = None) -> MavenSettings:
    """Load the effective, decrypted Maven settings."""
    return SettingsLoader(settings).load_settings()
