"""
Command-line interface for mvnsettings using Typer.

Inspect the effective Maven settings, decrypt server credentials and encrypt
new passwords, with Rich formatting and proper exit codes.
"""

import sys
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from ..config import Settings, get_settings
from ..core import cipher
from ..core.loader import SettingsLoader
from ..core.models import MavenSettings
from ..utils.exceptions import (
    ConfigurationError,
    ErrorCategory,
    MavenSettingsError,
    SettingsBuildingError,
    create_user_friendly_error,
)
from ..utils.logging import (
    generate_correlation_id,
    get_logger,
    operation_logger,
    setup_logging,
)

app = typer.Typer(
    name="mvnsettings",
    help="[bold blue]mvnsettings[/bold blue] - Maven settings.xml with decrypted credentials",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)

console = Console()

_logger = get_logger(__name__)

MASK = "********"


class ExitCodes:
    SUCCESS = 0
    GENERAL_ERROR = 1
    CONFIGURATION_ERROR = 2
    SETTINGS_ERROR = 5
    SECURITY_ERROR = 6
    USER_INTERRUPTED = 130  # Standard SIGINT exit code


def get_exit_code_for_error(error: BaseException) -> int:
    """Determine appropriate exit code based on error type."""
    if isinstance(error, KeyboardInterrupt):
        return ExitCodes.USER_INTERRUPTED

    if isinstance(error, MavenSettingsError):
        category_to_exit_code = {
            ErrorCategory.CONFIGURATION_ERROR: ExitCodes.CONFIGURATION_ERROR,
            ErrorCategory.DATA_ERROR: ExitCodes.SETTINGS_ERROR,
            ErrorCategory.SECURITY_ERROR: ExitCodes.SECURITY_ERROR,
        }
        return category_to_exit_code.get(error.category, ExitCodes.GENERAL_ERROR)

    return ExitCodes.GENERAL_ERROR


def get_configured_settings(
    user_settings: Path | None = None,
    m2_home: Path | None = None,
    security_settings: Path | None = None,
) -> Settings:
    """Build application settings, applying command line overrides."""
    overrides: dict[str, Any] = {}
    if user_settings is not None:
        overrides["user_settings_file"] = user_settings
    if m2_home is not None:
        overrides["m2_home"] = m2_home
    if security_settings is not None:
        overrides["security_settings_file"] = security_settings

    try:
        return Settings(**overrides) if overrides else get_settings()
    except Exception as e:
        raise ConfigurationError(
            f"Failed to load configuration: {e!s}",
            config_key=", ".join(overrides) or "default_settings",
        ) from e


def display_error(message: str, exception: Exception | None = None) -> None:
    """Display an error message with troubleshooting hints."""
    console.print(f"[red]✗ Error:[/red] {message}")

    if isinstance(exception, SettingsBuildingError):
        for problem in exception.problems:
            console.print(f"  {problem}", style="dim red", markup=False)

    if exception is not None:
        console.print(
            f"Details: {create_user_friendly_error(exception)}",
            style="dim red",
            markup=False,
        )

    if isinstance(exception, MavenSettingsError) and exception.troubleshooting_hints:
        console.print("\n[bold yellow]💡 Troubleshooting Tips:[/bold yellow]")
        for i, hint in enumerate(exception.troubleshooting_hints, 1):
            console.print(f"  {i}. {hint}")

    if isinstance(exception, MavenSettingsError):
        _logger.debug(f"CLI Error: {message}", error_details=exception.to_dict())
    else:
        _logger.debug(f"CLI Error: {message}", error=str(exception) if exception else None)


def handle_cli_exception(operation: str, exception: BaseException) -> int:
    """Centralized CLI exception handling with proper exit codes."""
    exit_code = get_exit_code_for_error(exception)

    if isinstance(exception, KeyboardInterrupt):
        console.print("[yellow]⚠[/yellow] Operation cancelled by user")
    else:
        display_error(f"{operation} failed", exception)

    return exit_code


def _loader(ctx: typer.Context) -> SettingsLoader:
    return SettingsLoader(ctx.obj["settings"])


def _load(ctx: typer.Context, operation: str) -> MavenSettings:
    try:
        with operation_logger(operation, ctx.obj["correlation_id"]):
            return _loader(ctx).load_settings()
    except (Exception, KeyboardInterrupt) as e:
        raise typer.Exit(handle_cli_exception(operation, e))


def _secret(value: str | None, show_secrets: bool) -> str:
    if not value:
        return ""
    return value if show_secrets else MASK


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging with error details"
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Only show warnings and errors"
    ),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit logs as JSON"),
    user_settings: Path | None = typer.Option(
        None, "--user-settings", "-s", help="User settings.xml (default ~/.m2/settings.xml)"
    ),
    m2_home: Path | None = typer.Option(
        None, "--m2-home", help="Maven installation directory holding conf/settings.xml"
    ),
    security_settings: Path | None = typer.Option(
        None,
        "--security-settings",
        help="settings-security.xml (default ~/.m2/settings-security.xml)",
    ),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Also write logs to this file (rotated at 10MB)"
    ),
):
    """
    [bold blue]mvnsettings[/bold blue] - read Maven settings with decrypted credentials

    Merges the global (M2_HOME/conf/settings.xml) and user settings files and
    decrypts server passwords using the master password in settings-security.xml.

    [bold]Examples:[/bold]
        mvnsettings show
        mvnsettings decrypt --server nexus
        mvnsettings encrypt-master
    """
    try:
        settings = get_configured_settings(user_settings, m2_home, security_settings)
    except ConfigurationError as e:
        setup_logging(verbose=verbose, quiet=quiet, json_logs=json_logs)
        display_error("Configuration error", e)
        raise typer.Exit(get_exit_code_for_error(e))

    setup_logging(
        verbose=verbose,
        quiet=quiet,
        json_logs=json_logs or settings.log_format == "json",
        log_file=log_file or settings.log_file,
        log_level=settings.log_level,
    )

    correlation_id = generate_correlation_id()
    _logger.with_correlation_id(correlation_id)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["verbose"] = verbose
    ctx.obj["correlation_id"] = correlation_id


@app.command("show")
def show_command(
    ctx: typer.Context,
    show_secrets: bool = typer.Option(
        False, "--show-secrets", help="Print decrypted passwords instead of masking them"
    ),
):
    """Show servers, mirrors and proxies of the effective settings."""
    maven_settings = _load(ctx, "show")

    servers = Table(title="[bold magenta]Servers[/bold magenta]", border_style="blue")
    servers.add_column("Id", style="cyan")
    servers.add_column("Username")
    servers.add_column("Password")
    servers.add_column("Private key")
    servers.add_column("Passphrase")
    for server in maven_settings.servers:
        servers.add_row(
            server.id or "",
            server.username or "",
            _secret(server.password, show_secrets),
            server.private_key or "",
            _secret(server.passphrase, show_secrets),
        )
    console.print(servers)

    mirrors = Table(title="[bold magenta]Mirrors[/bold magenta]", border_style="blue")
    mirrors.add_column("Id", style="cyan")
    mirrors.add_column("Mirror of")
    mirrors.add_column("URL")
    for mirror in maven_settings.mirrors:
        mirrors.add_row(mirror.id or "", mirror.mirror_of or "", mirror.url or "")
    console.print(mirrors)

    proxies = Table(title="[bold magenta]Proxies[/bold magenta]", border_style="blue")
    proxies.add_column("Id", style="cyan")
    proxies.add_column("Active")
    proxies.add_column("Address")
    proxies.add_column("Username")
    proxies.add_column("Password")
    for proxy in maven_settings.proxies:
        proxies.add_row(
            proxy.id,
            "✅" if proxy.active else "❌",
            f"{proxy.protocol}://{proxy.host or ''}:{proxy.port}",
            proxy.username or "",
            _secret(proxy.password, show_secrets),
        )
    console.print(proxies)

    if maven_settings.local_repository:
        console.print(f"[blue]i[/blue] Local repository: {maven_settings.local_repository}")
    if maven_settings.active_profiles:
        console.print(
            f"[blue]i[/blue] Active profiles: {', '.join(maven_settings.active_profiles)}"
        )


@app.command("decrypt")
def decrypt_command(
    ctx: typer.Context,
    server_id: str | None = typer.Option(
        None, "--server", help="Only print credentials of this server"
    ),
):
    """Print server credentials with passwords decrypted."""
    maven_settings = _load(ctx, "decrypt")

    servers = maven_settings.servers
    if server_id is not None:
        server = maven_settings.get_server(server_id)
        if server is None:
            console.print(f"[yellow]⚠[/yellow] No server with id '{server_id}'")
            raise typer.Exit(ExitCodes.GENERAL_ERROR)
        servers = [server]

    if not servers:
        console.print("[yellow]⚠[/yellow] No server credentials found")
        return

    for server in servers:
        console.print(f"Server ID: {server.id}", markup=False)
        console.print(f"Username: {server.username or ''}", markup=False)
        console.print(f"Password: {server.password or ''}", markup=False)
        if server.passphrase:
            console.print(f"Passphrase: {server.passphrase}", markup=False)
        console.print("-" * 50)


@app.command("paths")
def paths_command(ctx: typer.Context):
    """Show which settings files are used and whether they exist."""
    loader = _loader(ctx)

    table = Table(
        title="[bold magenta]Maven settings files[/bold magenta]",
        show_header=True,
        border_style="blue",
    )
    table.add_column("File", style="cyan", min_width=12)
    table.add_column("Path", style="white")
    table.add_column("Status", min_width=8)

    files = [
        ("Global", loader.global_settings_file),
        ("User", loader.user_settings_file),
        ("Security", loader.security_settings_file),
    ]
    for name, path in files:
        if path is None:
            table.add_row(name, "M2_HOME not set", "❌")
        else:
            table.add_row(name, str(path), "✅" if path.is_file() else "❌")

    console.print(table)


def _prompt_password(password: str | None, label: str) -> str:
    if password is None:
        password = typer.prompt(label, hide_input=True)
    return password


@app.command("encrypt")
def encrypt_command(
    ctx: typer.Context,
    password: str | None = typer.Argument(None, help="Server password to encrypt"),
):
    """Encrypt a server password with the master password."""
    loader = _loader(ctx)
    try:
        master_password = loader.read_master_password()
    except (Exception, KeyboardInterrupt) as e:
        raise typer.Exit(handle_cli_exception("Reading master password", e))

    if master_password is None:
        display_error(
            f"No master password found, create {loader.security_settings_file} "
            "with 'mvnsettings encrypt-master' first"
        )
        raise typer.Exit(ExitCodes.SECURITY_ERROR)

    password = _prompt_password(password, "Password")
    console.print(
        cipher.encrypt_and_decorate(password, master_password), markup=False, soft_wrap=True
    )


@app.command("encrypt-master")
def encrypt_master_command(
    password: str | None = typer.Argument(None, help="Master password to encrypt"),
):
    """Encrypt a master password for settings-security.xml."""
    password = _prompt_password(password, "Master password")
    console.print(
        cipher.encrypt_and_decorate(password, cipher.SETTINGS_SECURITY_PASSPHRASE),
        markup=False,
        soft_wrap=True,
    )


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        console.print("[yellow]⚠[/yellow] Operation cancelled by user")
        sys.exit(ExitCodes.USER_INTERRUPTED)
