"""starterkit CLI.

Main command-line interface for scaffolding projects from the catalog.
"""

import logging
from dataclasses import asdict
from pathlib import Path
from typing import Optional

import typer

from acquisition import ArchiveDownload, BackendRegistry, BlankDirectory, RepositoryClone
from cli.starterkit.output import (
    console,
    print_catalog,
    print_config,
    print_error,
    print_info,
    print_results,
    print_warning,
)
from integrations import AuthHandler, BackendClient, CatalogClient, NotificationClient, sort_catalog
from local_storage import MetadataStore
from orchestrator import ConsolePrompter, InitOrchestrator, SetDomainNameWorkflow, SetNameWorkflow
from orchestrator.prompts import Prompter
from package_managers import detect_package_manager, get_package_manager
from pipeline.config import Config, find_config_file, get_config
from schemas import (
    DeserializationError,
    ProductKind,
    StarterkitError,
    UnknownPackageManagerError,
    WorkflowArgs,
)

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="starterkit",
    help="starterkit - scaffold new projects from starter packages",
    no_args_is_help=True,
)


@app.callback()
def setup(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging",
    ),
) -> None:
    """Configure logging before any command runs."""
    level = "DEBUG" if verbose else get_config().workflow.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def build_backend_client(config: Config) -> BackendClient:
    auth = AuthHandler(
        token=config.auth.token or None,
        credentials_file=config.credentials_path,
    )
    return BackendClient(
        api_url=config.backend.api_url,
        auth=auth,
        timeout=config.backend.timeout,
    )


def build_backends(config: Config, backend: BackendClient) -> BackendRegistry:
    """Acquisition backend for every product kind."""
    starters = config.starters
    if starters.blank_repository_url:
        blank = RepositoryClone(starters.blank_repository_url)
    else:
        blank = BlankDirectory()

    return BackendRegistry(
        {
            ProductKind.BLANK: blank,
            ProductKind.FREE: RepositoryClone(starters.repository_url_template),
            ProductKind.PAID: ArchiveDownload(backend, timeout=config.backend.download_timeout),
        }
    )


def build_orchestrator(
    config: Config,
    args: WorkflowArgs,
    cwd: Path | None = None,
    prompter: Prompter | None = None,
) -> InitOrchestrator:
    """Wire the init workflow with its default collaborators."""
    backend = build_backend_client(config)
    return InitOrchestrator(
        args,
        cwd=cwd or Path.cwd(),
        catalog=CatalogClient(backend),
        backends=build_backends(config, backend),
        metadata_store=MetadataStore(),
        notifier=NotificationClient(backend),
        prompter=prompter or ConsolePrompter(console),
        console=console,
        report=print_results,
        max_prompts=config.workflow.max_prompts,
        default_package_manager=config.workflow.default_package_manager,
        products_url=config.starters.products_url,
        jenkinsfile=config.workflow.jenkinsfile,
    )


@app.command()
def init(
    name: Optional[str] = typer.Option(
        None,
        "--name",
        "-n",
        help="Project name (default: product slug, prompted for blank projects)",
    ),
    blank: bool = typer.Option(
        False,
        "--blank",
        "-b",
        help="Create a blank project without choosing from the catalog",
    ),
    package_manager: Optional[str] = typer.Option(
        None,
        "--package-manager",
        "-p",
        help="Package manager: npm|yarn|pnpm",
    ),
) -> None:
    """Create a new project from a starter package.

    Examples:
        starterkit init
        starterkit init --blank --name my-app
        starterkit init -n dashboard -p yarn
    """
    config = get_config()
    args = WorkflowArgs(project_name=name, blank=blank, package_manager=package_manager)

    state = build_orchestrator(config, args).run()
    print_results(state.results)

    if state.failed:
        raise typer.Exit(1)


@app.command("list")
def list_packages() -> None:
    """List the packages available to initialize."""
    config = get_config()
    catalog = CatalogClient(build_backend_client(config))

    try:
        products = sort_catalog(catalog.fetch_catalog())
    except StarterkitError as e:
        print_error(e.message)
        raise typer.Exit(1)

    print_catalog(products)


def _manifest_path(config: Config) -> Path:
    return Path.cwd() / config.workflow.manifest_file


@app.command("set-name")
def set_name(
    new_name: Optional[str] = typer.Argument(None, help="New project name"),
) -> None:
    """Change the project name in the manifest of the current directory."""
    config = get_config()
    workflow = SetNameWorkflow(_manifest_path(config), MetadataStore(), ConsolePrompter(console))
    results = workflow.run(new_name)
    print_results(results)

    if not all(entry.ok for entry in results):
        raise typer.Exit(1)


@app.command("set-domain-name")
def set_domain_name(
    domain: Optional[str] = typer.Argument(None, help="Domain name"),
) -> None:
    """Set the domain name in the manifest of the current directory."""
    config = get_config()
    workflow = SetDomainNameWorkflow(
        _manifest_path(config), MetadataStore(), ConsolePrompter(console)
    )
    results = workflow.run(domain)
    print_results(results)

    if not all(entry.ok for entry in results):
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show starterkit version and the package manager in use."""
    from cli.starterkit import __version__

    console.print(f"starterkit v{__version__}")

    config = get_config()
    cwd = Path.cwd()
    hints = None
    manifest = cwd / config.workflow.manifest_file
    if manifest.exists():
        try:
            hints = MetadataStore().read_raw(manifest)
        except DeserializationError as e:
            logger.debug("Ignoring unreadable manifest: %s", e.message)

    name = detect_package_manager(hints, cwd) or config.workflow.default_package_manager
    try:
        manager = get_package_manager(name)
    except UnknownPackageManagerError as e:
        print_warning(e.message)
        return

    manager_version = manager.version()
    if manager_version:
        print_info(f"{manager.name} v{manager_version}")
    else:
        print_warning(f"{manager.name} is not installed")


@app.command("config")
def show_config() -> None:
    """Show current configuration."""
    config_path = find_config_file()
    if config_path:
        print_info(f"Config file: {config_path}")
    else:
        print_warning("No starterkit.toml found (using defaults)")

    print_config(asdict(get_config()))


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
